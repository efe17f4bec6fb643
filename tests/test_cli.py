"""Tests for the workout-map command line."""

import os
import tempfile

import pytest

from workout_map.cli import build_parser, main
from workout_map.db.adapters import SQLiteAdapter
from workout_map.db.persistence import WorkoutPersistence


def stored_workouts(db_path):
    return WorkoutPersistence(SQLiteAdapter(db_path=db_path)).load()


def run(db_path, *args):
    return main(["--db", db_path, "--log-level", "WARNING", *args])


ADD_RUNNING = ["add", "--lat", "10", "--lng", "20", "--distance", "5", "--duration", "25", "--cadence", "180"]


class TestAdd:
    """Tests for the add command."""

    def test_add_running(self, temp_db_path, capsys):
        assert run(temp_db_path, *ADD_RUNNING) == 0

        out = capsys.readouterr().out
        workouts = stored_workouts(temp_db_path)
        assert len(workouts) == 1
        assert workouts[0]["kind"] == "running"
        assert workouts[0]["coordinates"] == [10.0, 20.0]
        assert "Running on" in out
        assert workouts[0]["id"] in out

    def test_add_cycling(self, temp_db_path):
        code = run(
            temp_db_path, "add", "--kind", "cycling", "--lat", "1", "--lng", "2",
            "--distance", "20", "--duration", "60", "--elevation", "300",
        )
        assert code == 0
        assert stored_workouts(temp_db_path)[0]["elevationGainM"] == 300

    def test_add_invalid(self, temp_db_path, capsys):
        code = run(
            temp_db_path, "add", "--lat", "10", "--lng", "20",
            "--distance", "5", "--duration", "-5", "--cadence", "180",
        )
        assert code == 1
        assert "Inputs have to be positive numbers!" in capsys.readouterr().err
        assert stored_workouts(temp_db_path) == []

    def test_add_requires_distance(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["add", "--lat", "1", "--lng", "2", "--duration", "5"])


class TestList:
    """Tests for the list command."""

    def test_empty(self, temp_db_path, capsys):
        assert run(temp_db_path, "list") == 0
        assert "No workouts logged yet." in capsys.readouterr().out

    def test_newest_first(self, temp_db_path, capsys):
        run(temp_db_path, *ADD_RUNNING)
        run(
            temp_db_path, "add", "--kind", "cycling", "--lat", "1", "--lng", "2",
            "--distance", "20", "--duration", "60", "--elevation", "300",
        )
        capsys.readouterr()

        assert run(temp_db_path, "list") == 0
        out = capsys.readouterr().out
        assert "Workouts (2)" in out
        assert out.index("Cycling on") < out.index("Running on")
        assert "5.0 min/km" in out
        assert "20.0 km/h" in out


class TestEditDeleteFocus:
    """Tests for commands that address a workout by id."""

    def test_edit(self, temp_db_path):
        run(temp_db_path, *ADD_RUNNING)
        workout_id = stored_workouts(temp_db_path)[0]["id"]

        assert run(temp_db_path, "edit", workout_id, "--duration", "30") == 0

        workout = stored_workouts(temp_db_path)[0]
        assert workout["id"] == workout_id
        assert workout["durationMin"] == 30
        assert workout["distanceKm"] == 5
        assert workout["derivedMetric"] == 6.0

    def test_edit_unknown(self, temp_db_path, capsys):
        assert run(temp_db_path, "edit", "missing", "--duration", "30") == 1
        assert "No workout with id missing" in capsys.readouterr().err

    def test_delete(self, temp_db_path):
        run(temp_db_path, *ADD_RUNNING)
        workout_id = stored_workouts(temp_db_path)[0]["id"]
        assert run(temp_db_path, "delete", workout_id) == 0
        assert stored_workouts(temp_db_path) == []

    def test_delete_unknown(self, temp_db_path):
        assert run(temp_db_path, "delete", "missing") == 1

    def test_focus_counts_views(self, temp_db_path, capsys):
        run(temp_db_path, *ADD_RUNNING)
        workout_id = stored_workouts(temp_db_path)[0]["id"]
        capsys.readouterr()

        assert run(temp_db_path, "focus", workout_id) == 0
        assert "viewed 1 times" in capsys.readouterr().out
        assert stored_workouts(temp_db_path)[0]["interactionCount"] == 1


class TestReset:
    """Tests for the reset command."""

    def test_requires_confirmation(self, temp_db_path):
        run(temp_db_path, *ADD_RUNNING)
        assert run(temp_db_path, "reset") == 1
        assert len(stored_workouts(temp_db_path)) == 1

    def test_reset(self, temp_db_path, capsys):
        run(temp_db_path, *ADD_RUNNING)
        capsys.readouterr()
        assert run(temp_db_path, "reset", "--yes") == 0
        assert "Removed 1 workouts" in capsys.readouterr().out
        assert stored_workouts(temp_db_path) == []


class TestStorageErrors:
    """Storage that cannot be opened is reported, not raised."""

    def test_unopenable_database(self, capsys):
        with tempfile.TemporaryDirectory() as directory:
            db_path = os.path.join(directory, "missing", "workouts.db")
            assert run(db_path, "list") == 1
        err = capsys.readouterr().err
        assert "Error:" in err
        assert "unable to open database file" in err
