"""Dict-backed key-value adapter."""

from typing import Dict, Optional

from . import KeyValueStore


class InMemoryAdapter(KeyValueStore):
    """Keeps values in a process-local dict. Nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)
