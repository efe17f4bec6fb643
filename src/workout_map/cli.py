#!/usr/bin/env python3
"""
Workout Map CLI.

Log running and cycling workouts at map coordinates without a browser.

Usage:
    workout-map add --kind running --lat 10 --lng 20 --distance 5 --duration 25 --cadence 180
    workout-map list
    workout-map edit <id> --duration 30
    workout-map delete <id>
    workout-map focus <id>
    workout-map reset --yes
    workout-map serve --port 8000
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import get_settings
from .exceptions import WorkoutMapError
from .forms import FormInput
from .models import WorkoutKind
from .session import WorkoutMapSession, create_session
from .utils.logging_setup import configure_logging
from .views.view_models import WorkoutListItem


# ANSI color codes
class Colors:
    RED = "\033[91m"
    YELLOW = "\033[93m"
    GREEN = "\033[92m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


KIND_COLORS = {
    WorkoutKind.RUNNING: Colors.GREEN,
    WorkoutKind.CYCLING: Colors.YELLOW,
}


def format_list_item(item: WorkoutListItem) -> str:
    """One workout as a colored block of text."""
    color = KIND_COLORS.get(item.kind, Colors.RESET)
    details = "  ".join(f"{row.icon} {row.value} {row.unit}" for row in item.details)
    return (
        f"{color}{Colors.BOLD}{item.title}{Colors.RESET} "
        f"{Colors.CYAN}[{item.workout_id}]{Colors.RESET}\n"
        f"    {details}"
    )


def print_messages(messages: List[str]) -> None:
    for message in messages:
        print(f"{Colors.RED}! {message}{Colors.RESET}", file=sys.stderr)


def _form_from_args(args, base: Optional[FormInput] = None) -> FormInput:
    form = base or FormInput()
    if args.kind is not None:
        form.kind = args.kind
    if args.distance is not None:
        form.distance = args.distance
    if args.duration is not None:
        form.duration = args.duration
    if args.cadence is not None:
        form.cadence = args.cadence
    if args.elevation is not None:
        form.elevation = args.elevation
    return form


def cmd_add(args, session: WorkoutMapSession) -> int:
    """Click the map at --lat/--lng and submit the form."""
    session.messages.drain()
    controller = session.controller
    controller.handle_map_click(args.lat, args.lng)
    record = controller.handle_submit(_form_from_args(args))
    if record is None:
        print_messages(session.messages.drain())
        return 1
    print(f"{Colors.GREEN}Logged{Colors.RESET} {record.label} [{record.id}]")
    return 0


def cmd_list(args, session: WorkoutMapSession) -> int:
    """Print the workout list, newest first."""
    print_messages(session.messages.drain())
    items = session.list_surface.items
    if not items:
        print("No workouts logged yet.")
        return 0
    print()
    print(f"{Colors.BOLD}Workouts ({len(items)}){Colors.RESET}")
    print("=" * 40)
    for item in items:
        print(format_list_item(item))
    return 0


def cmd_edit(args, session: WorkoutMapSession) -> int:
    """Open a workout for editing, apply the given fields, and submit."""
    session.messages.drain()
    controller = session.controller
    record = controller.handle_edit_click(args.workout_id)
    if record is None:
        print(f"{Colors.RED}No workout with id {args.workout_id}{Colors.RESET}", file=sys.stderr)
        return 1
    updated = controller.handle_submit(_form_from_args(args, session.form.values))
    if updated is None:
        print_messages(session.messages.drain())
        return 1
    print(f"{Colors.GREEN}Updated{Colors.RESET} {updated.label} [{updated.id}]")
    return 0


def cmd_delete(args, session: WorkoutMapSession) -> int:
    session.messages.drain()
    record = session.controller.handle_delete_click(args.workout_id)
    if record is None:
        messages = session.messages.drain()
        if messages:
            print_messages(messages)
        else:
            print(f"{Colors.RED}No workout with id {args.workout_id}{Colors.RESET}", file=sys.stderr)
        return 1
    print(f"{Colors.YELLOW}Deleted{Colors.RESET} {record.label} [{record.id}]")
    return 0


def cmd_focus(args, session: WorkoutMapSession) -> int:
    """Center the map on a workout and show where it is."""
    print_messages(session.messages.drain())
    record = session.controller.handle_list_click(args.workout_id)
    if record is None:
        print(f"{Colors.RED}No workout with id {args.workout_id}{Colors.RESET}", file=sys.stderr)
        return 1
    lat, lng = record.coordinates
    print(
        f"{record.label} at {lat:.5f}, {lng:.5f} "
        f"(viewed {record.interaction_count} times)"
    )
    return 0


def cmd_reset(args, session: WorkoutMapSession) -> int:
    """Delete every workout."""
    session.messages.drain()
    if not args.yes:
        print("Refusing to delete all workouts without --yes", file=sys.stderr)
        return 1
    count = len(session.controller.store)
    if not session.controller.reset():
        print_messages(session.messages.drain())
        return 1
    print(f"{Colors.YELLOW}Removed {count} workouts{Colors.RESET}")
    return 0


def cmd_serve(args, settings) -> int:
    """Run the HTTP API."""
    import uvicorn

    from .api.app import create_app

    app = create_app(settings)
    uvicorn.run(
        app,
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
    )
    return 0


def _add_form_arguments(parser: argparse.ArgumentParser, required: bool) -> None:
    parser.add_argument("--kind", choices=[k.value for k in WorkoutKind],
                        default="running" if required else None, help="Workout type")
    parser.add_argument("--distance", type=str, required=required, help="Distance in km")
    parser.add_argument("--duration", type=str, required=required, help="Duration in minutes")
    parser.add_argument("--cadence", type=str, help="Cadence in spm (running)")
    parser.add_argument("--elevation", type=str, help="Elevation gain in m (cycling)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workout-map",
        description="Log running and cycling workouts on a map",
    )
    parser.add_argument("--db", help="Path to the workouts database")
    parser.add_argument("--log-level", help="Logging level (default from settings)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add = subparsers.add_parser("add", help="Log a workout at a map location")
    add.add_argument("--lat", type=float, required=True, help="Latitude")
    add.add_argument("--lng", type=float, required=True, help="Longitude")
    _add_form_arguments(add, required=True)

    subparsers.add_parser("list", help="List workouts, newest first")

    edit = subparsers.add_parser("edit", help="Edit a workout")
    edit.add_argument("workout_id")
    _add_form_arguments(edit, required=False)

    delete = subparsers.add_parser("delete", help="Delete a workout")
    delete.add_argument("workout_id")

    focus = subparsers.add_parser("focus", help="Center the map on a workout")
    focus.add_argument("workout_id")

    reset = subparsers.add_parser("reset", help="Delete every workout")
    reset.add_argument("--yes", action="store_true", help="Confirm deletion")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")

    return parser


COMMANDS = {
    "add": cmd_add,
    "list": cmd_list,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "focus": cmd_focus,
    "reset": cmd_reset,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.db:
        settings = settings.model_copy(update={"db_path": Path(args.db)})
    configure_logging(args.log_level or settings.log_level)

    try:
        if args.command == "serve":
            return cmd_serve(args, settings)

        session = create_session(settings)
        return COMMANDS[args.command](args, session)
    except WorkoutMapError as e:
        print(f"{Colors.RED}Error: {e.message}{Colors.RESET}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
