import sqlite3
from datetime import datetime, timedelta

import pytest

from fit_recorder.database import (
    Database,
    DatabaseError,
    WorkoutConflictError,
    WorkoutNotFoundError,
)
from fit_recorder.models import Exercise, Workout, WorkoutWithExercises


@pytest.fixture
def db():
    database = Database(":memory:")
    yield database
    database.close()


def _days_ago(n):
    return datetime.now() - timedelta(days=n)


# -- delete ---------------------------------------------------------------

def test_delete_last_workout(db):
    wid1 = db.create_workout("strength", "completed", _days_ago(1))
    db.save_exercises_for_workout(wid1, [Exercise(name="Squats", weight=100, repetitions=5, sets=5)])
    wid2 = db.create_workout("cardio", "completed", datetime.now())
    db.save_exercises_for_workout(
        wid2, [Exercise(name="Running", repetitions=1, sets=1, duration=30.0)]
    )
    assert len(db.get_all_workouts()) == 2

    db.delete_last_workout()

    workouts = db.get_all_workouts()
    assert len(workouts) == 1
    assert workouts[0].workout.workout_type == "strength"
    last = db.get_last_workout()
    assert last is not None
    assert last.workout.workout_type == "strength"


def test_delete_last_workout_no_workouts(db):
    db.delete_last_workout()
    assert db.get_all_workouts() == []


def test_delete_last_workout_single(db):
    wid = db.create_workout("strength", "completed", datetime.now())
    db.save_exercises_for_workout(wid, [Exercise(name="Bench Press", weight=80, repetitions=10, sets=3)])
    db.delete_last_workout()
    assert db.get_all_workouts() == []
    assert db.get_distinct_exercise_names() == []


def test_delete_workout_by_date(db):
    yesterday = _days_ago(1)
    wid1 = db.create_workout("strength", "completed", _days_ago(2))
    db.save_exercises_for_workout(wid1, [Exercise(name="Deadlifts", weight=120, repetitions=5, sets=3)])
    wid2 = db.create_workout("cardio", "completed", yesterday)
    db.save_exercises_for_workout(
        wid2, [Exercise(name="Running", repetitions=1, sets=1, duration=45.0)]
    )
    wid3 = db.create_workout("yoga", "completed", datetime.now())
    db.save_exercises_for_workout(wid3, [Exercise(name="Sun Salutation", repetitions=10, sets=1)])
    assert len(db.get_all_workouts()) == 3

    db.delete_workout_by_date(yesterday)

    workouts = db.get_all_workouts()
    assert len(workouts) == 2
    assert workouts[0].workout.workout_type == "yoga"
    assert workouts[1].workout.workout_type == "strength"


def test_delete_workout_by_date_no_workout_on_date(db):
    wid = db.create_workout("strength", "completed", datetime.now())
    db.save_exercises_for_workout(wid, [Exercise(name="Bench Press", weight=80, repetitions=10, sets=3)])
    db.delete_workout_by_date(_days_ago(1))
    workouts = db.get_all_workouts()
    assert len(workouts) == 1
    assert workouts[0].workout.workout_type == "strength"


def test_delete_workout_by_date_deletes_exercises(db):
    today = datetime.now()
    wid = db.create_workout("strength", "completed", today)
    db.save_exercises_for_workout(
        wid,
        [
            Exercise(name="Bench Press", weight=80, repetitions=10, sets=3),
            Exercise(name="Squats", weight=100, repetitions=5, sets=5),
            Exercise(name="Deadlifts", weight=120, repetitions=5, sets=3),
        ],
    )
    workout = db.get_workout_by_date(today)
    assert workout is not None
    assert len(workout.exercises) == 3

    db.delete_workout_by_date(today)

    assert db.get_workout_by_date(today) is None
    assert db.get_all_workouts() == []
    assert db.get_all_exercises() == []


# -- edit -----------------------------------------------------------------

def test_update_last_workout_status(db):
    yesterday = _days_ago(1)
    wid1 = db.create_workout("strength", "planned", yesterday)
    db.save_exercises_for_workout(wid1, [Exercise(name="Squats", weight=100, repetitions=5, sets=5)])
    wid2 = db.create_workout("cardio", "planned", datetime.now())
    db.save_exercises_for_workout(
        wid2, [Exercise(name="Running", repetitions=1, sets=1, duration=30.0)]
    )
    assert db.get_last_workout().workout.status == "planned"

    db.update_last_workout_status("completed")

    assert db.get_last_workout().workout.status == "completed"
    earlier = db.get_workout_by_date(yesterday)
    assert earlier is not None
    assert earlier.workout.status == "planned"


def test_update_last_workout_status_no_workouts(db):
    with pytest.raises(WorkoutNotFoundError, match="no workouts found"):
        db.update_last_workout_status("completed")


def test_update_workout_date(db):
    old_date = datetime(2025, 1, 15, 10, 0, 0)
    new_date = datetime(2025, 1, 20, 10, 0, 0)
    wid = db.create_workout("strength", "completed", old_date)
    db.save_exercises_for_workout(wid, [Exercise(name="Bench Press", weight=80, repetitions=10, sets=3)])
    assert db.get_workout_by_date(old_date).workout.workout_type == "strength"

    db.update_workout_date(old_date, new_date)

    assert db.get_workout_by_date(old_date) is None
    moved = db.get_workout_by_date(new_date)
    assert moved is not None
    assert moved.workout.workout_type == "strength"
    assert len(moved.exercises) == 1
    assert moved.exercises[0].name == "Bench Press"
    assert moved.workout.workout_date == new_date


def test_update_workout_date_no_workout_on_old_date(db):
    with pytest.raises(WorkoutNotFoundError, match="no workout found"):
        db.update_workout_date(_days_ago(10), _days_ago(5))


def test_update_workout_date_conflict(db):
    date1 = datetime(2025, 1, 15, 10, 0, 0)
    date2 = datetime(2025, 1, 20, 10, 0, 0)
    wid1 = db.create_workout("strength", "completed", date1)
    db.save_exercises_for_workout(wid1, [Exercise(name="Squats", weight=100, repetitions=5, sets=5)])
    wid2 = db.create_workout("cardio", "completed", date2)
    db.save_exercises_for_workout(
        wid2, [Exercise(name="Running", repetitions=1, sets=1, duration=30.0)]
    )
    with pytest.raises(WorkoutConflictError, match="workout already exists"):
        db.update_workout_date(date1, date2)


def test_update_workout_replaces_exercises(db):
    wid = db.create_workout("strength", "completed")
    db.save_exercises_for_workout(wid, [Exercise(name="Squats", weight=100, repetitions=5, sets=5)])
    db.update_workout(wid, "cardio", [Exercise(name="Running", distance=1000)])
    workout = db.get_last_workout()
    assert workout.workout.workout_type == "cardio"
    assert [e.name for e in workout.exercises] == ["Running"]
    assert workout.exercises[0].distance == 1000


# -- save -----------------------------------------------------------------

def test_get_distinct_exercise_names(db):
    wid = db.create_workout("strength", "completed")
    db.save_exercises_for_workout(
        wid,
        [
            Exercise(name="Bench Press", weight=100, repetitions=10, sets=3),
            Exercise(name="Squats", weight=120, repetitions=8, sets=4),
            Exercise(name="Bench Press", weight=105, repetitions=8, sets=3),
        ],
    )
    names = db.get_distinct_exercise_names()
    assert len(names) == 2
    assert "Bench Press" in names
    assert "Squats" in names


@pytest.mark.parametrize("workout_type", ["strength", "cardio"])
def test_create_workout_returns_positive_id(db, workout_type):
    workout_id = db.create_workout(workout_type, "completed")
    assert workout_id > 0
    assert db.get_last_workout().workout.workout_type == workout_type


def test_save_exercises_with_duration(db):
    wid = db.create_workout("strength", "completed")
    db.save_exercises_for_workout(
        wid,
        [
            Exercise(name="Plank", repetitions=1, sets=3, duration=2.5),
            Exercise(name="Push-ups", repetitions=20, sets=3),
        ],
    )
    workout = db.get_last_workout()
    assert len(workout.exercises) == 2
    plank = next(e for e in workout.exercises if e.name == "Plank")
    assert plank.duration == 2.5
    assert plank.workout_id == wid


def test_one_workout_per_day(db):
    db.create_workout("strength", "completed")
    with pytest.raises(WorkoutConflictError, match="already exists for today"):
        db.create_workout("cardio", "completed")


def test_save_generated_workout_is_planned(db):
    generated = WorkoutWithExercises(
        workout=Workout(workout_type="push", workout_date=datetime(2026, 1, 5)),
        exercises=[Exercise(name="Bench Press", weight=85, repetitions=8, sets=4)],
    )
    db.save_generated_workout(generated)
    stored = db.get_last_workout()
    assert stored.workout.status == "planned"
    assert stored.workout.workout_type == "push"
    assert stored.exercises[0].weight == 85


# -- show -----------------------------------------------------------------

def test_get_last_workout(db):
    wid1 = db.create_workout("strength", "completed")
    db.save_exercises_for_workout(wid1, [Exercise(name="Bench Press", weight=100, repetitions=10, sets=3)])

    with Database(":memory:") as fresh:
        wid2 = fresh.create_workout("cardio", "completed")
        fresh.save_exercises_for_workout(
            wid2, [Exercise(name="Running", repetitions=1, sets=1, duration=30.0)]
        )
        last = fresh.get_last_workout()
        assert last is not None
        assert last.workout.workout_type == "cardio"
        assert len(last.exercises) == 1
        assert last.exercises[0].name == "Running"


def test_get_last_workout_no_workouts(db):
    assert db.get_last_workout() is None


def test_get_all_workouts_ordered_newest_first(db):
    wid1 = db.create_workout("strength", "completed", _days_ago(1))
    db.save_exercises_for_workout(wid1, [Exercise(name="Bench Press", weight=100, repetitions=10, sets=3)])
    wid2 = db.create_workout("cardio", "planned", datetime.now())
    db.save_exercises_for_workout(
        wid2, [Exercise(name="Running", repetitions=1, sets=1, duration=30.0)]
    )
    workouts = db.get_all_workouts()
    assert len(workouts) == 2
    assert workouts[0].workout.workout_type == "cardio"
    assert workouts[1].workout.workout_type == "strength"


def test_get_all_workouts_no_workouts(db):
    assert db.get_all_workouts() == []


# -- lifecycle ------------------------------------------------------------

def test_data_persists_in_file(tmp_path):
    path = tmp_path / "exercises.db"
    with Database(path) as first:
        wid = first.create_workout("strength", "completed")
        first.save_exercises_for_workout(wid, [Exercise(name="Squats", weight=100)])
    with Database(path) as second:
        assert second.get_distinct_exercise_names() == ["Squats"]


def test_closed_database_rejects_queries():
    with Database(":memory:") as database:
        pass
    with pytest.raises(sqlite3.ProgrammingError):
        database.get_all_workouts()


def test_unopenable_path_raises_database_error(tmp_path):
    with pytest.raises(DatabaseError):
        Database(tmp_path / "missing" / "dir" / "exercises.db")