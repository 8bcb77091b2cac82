"""SQLite storage for workouts and exercises."""

from __future__ import annotations

import os
import sqlite3
from datetime import date as _date
from datetime import datetime
from typing import List, Optional, Sequence, Union

from .models import Exercise, Workout, WorkoutWithExercises

DateLike = Union[datetime, _date]

_SCHEMA = """
CREATE TABLE IF NOT EXISTS workouts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    workout_type TEXT NOT NULL,
    workout_date DATETIME NOT NULL,
    status TEXT NOT NULL DEFAULT 'completed',
    created_at DATETIME,
    updated_at DATETIME
);
CREATE TABLE IF NOT EXISTS exercises (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    weight INTEGER NOT NULL DEFAULT 0,
    repetitions INTEGER NOT NULL DEFAULT 0,
    sets INTEGER NOT NULL DEFAULT 0,
    duration REAL NOT NULL DEFAULT 0,
    distance INTEGER NOT NULL DEFAULT 0,
    workout_id INTEGER REFERENCES workouts(id),
    created_at DATETIME,
    updated_at DATETIME
);
CREATE INDEX IF NOT EXISTS idx_exercises_workout_id ON exercises(workout_id);
CREATE INDEX IF NOT EXISTS idx_workouts_workout_date ON workouts(workout_date);
"""

_WORKOUT_COLUMNS = "id, workout_type, workout_date, status, created_at, updated_at"
_EXERCISE_COLUMNS = (
    "id, name, weight, repetitions, sets, duration, distance, workout_id, created_at, updated_at"
)
_INSERT_EXERCISE = (
    "INSERT INTO exercises (name, weight, repetitions, sets, duration, distance, "
    "workout_id, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)"
)
_INSERT_WORKOUT = (
    "INSERT INTO workouts (workout_type, workout_date, status, created_at, updated_at) "
    "VALUES (?, ?, ?, ?, ?)"
)


class DatabaseError(Exception):
    """Raised when the workout database cannot do what was asked."""


class WorkoutConflictError(DatabaseError):
    """Raised when a workout already exists on the requested day."""


class WorkoutNotFoundError(DatabaseError):
    """Raised when no workout matches the request."""


def _to_db(value: DateLike) -> str:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="microseconds")
    return value.isoformat()


def _from_db(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _day(value: DateLike) -> str:
    return value.strftime("%Y-%m-%d")


def _workout_from_row(row: sqlite3.Row) -> Workout:
    workout_date = _from_db(row["workout_date"])
    return Workout(
        id=row["id"],
        workout_type=row["workout_type"],
        workout_date=workout_date,
        status=row["status"],
        created_at=_from_db(row["created_at"]) or workout_date,
        updated_at=_from_db(row["updated_at"]) or workout_date,
    )


def _exercise_from_row(row: sqlite3.Row) -> Exercise:
    keys = row.keys()
    return Exercise(
        id=row["id"],
        name=row["name"],
        weight=row["weight"],
        repetitions=row["repetitions"],
        sets=row["sets"],
        duration=float(row["duration"]),
        distance=row["distance"],
        workout_id=row["workout_id"] if "workout_id" in keys else 0,
        created_at=_from_db(row["created_at"]),
        updated_at=_from_db(row["updated_at"]) if "updated_at" in keys else None,
    )


class Database:
    """A workout store backed by an SQLite file (or ``":memory:"``)."""

    def __init__(self, path: Union[str, os.PathLike]) -> None:
        try:
            self._conn = sqlite3.connect(os.fspath(path))
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            raise DatabaseError(f"could not open database: {exc}") from exc

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- exercises -------------------------------------------------------

    def get_all_exercises(self) -> List[Exercise]:
        rows = self._conn.execute(
            "SELECT id, name, weight, repetitions, sets, duration, distance, created_at "
            "FROM exercises ORDER BY created_at DESC"
        )
        return [_exercise_from_row(row) for row in rows]

    def get_distinct_exercise_names(self) -> List[str]:
        rows = self._conn.execute("SELECT DISTINCT name FROM exercises ORDER BY name")
        return [row["name"] for row in rows]

    def _exercises_for(self, workout_id: int) -> List[Exercise]:
        rows = self._conn.execute(
            f"SELECT {_EXERCISE_COLUMNS} FROM exercises WHERE workout_id = ? "
            "ORDER BY created_at, id",
            (workout_id,),
        )
        return [_exercise_from_row(row) for row in rows]

    def _with_exercises(self, row: Optional[sqlite3.Row]) -> Optional[WorkoutWithExercises]:
        if row is None:
            return None
        workout = _workout_from_row(row)
        return WorkoutWithExercises(workout=workout, exercises=self._exercises_for(workout.id))

    # -- workouts --------------------------------------------------------

    def get_all_workouts(self) -> List[WorkoutWithExercises]:
        rows = self._conn.execute(
            f"SELECT {_WORKOUT_COLUMNS} FROM workouts ORDER BY workout_date DESC"
        ).fetchall()
        return [self._with_exercises(row) for row in rows]

    def get_last_workout(self) -> Optional[WorkoutWithExercises]:
        row = self._conn.execute(
            f"SELECT {_WORKOUT_COLUMNS} FROM workouts ORDER BY workout_date DESC LIMIT 1"
        ).fetchone()
        return self._with_exercises(row)

    def get_workout_by_date(self, date: DateLike) -> Optional[WorkoutWithExercises]:
        row = self._conn.execute(
            f"SELECT {_WORKOUT_COLUMNS} FROM workouts "
            "WHERE DATE(workout_date) = DATE(?) LIMIT 1",
            (_to_db(date),),
        ).fetchone()
        return self._with_exercises(row)

    def save_exercises_for_workout(self, workout_id: int, exercises: Sequence[Exercise]) -> None:
        now = _to_db(datetime.now())
        with self._conn:
            self._conn.executemany(
                _INSERT_EXERCISE,
                [
                    (
                        ex.name,
                        ex.weight,
                        ex.repetitions,
                        ex.sets,
                        ex.duration,
                        ex.distance,
                        workout_id,
                        _to_db(ex.created_at) if ex.created_at else now,
                        _to_db(ex.updated_at) if ex.updated_at else now,
                    )
                    for ex in exercises
                ],
            )

    def create_workout(
        self, workout_type: str, status: str, workout_date: Optional[DateLike] = None
    ) -> int:
        """Insert a workout and return its id; one workout per day is allowed."""
        now = datetime.now()
        date = workout_date if workout_date is not None else now
        (count,) = self._conn.execute(
            "SELECT COUNT(*) FROM workouts WHERE DATE(workout_date) = DATE(?)",
            (_to_db(date),),
        ).fetchone()
        if count > 0:
            raise WorkoutConflictError(
                "a workout already exists for today. Only one workout per day is allowed"
            )
        with self._conn:
            cursor = self._conn.execute(
                _INSERT_WORKOUT,
                (workout_type, _to_db(date), status, _to_db(now), _to_db(now)),
            )
        return cursor.lastrowid

    def save_generated_workout(self, workout: WorkoutWithExercises) -> None:
        """Store a workout and its exercises with the status ``planned``."""
        now = _to_db(datetime.now())
        date = workout.workout.workout_date or datetime.now()
        with self._conn:
            cursor = self._conn.execute(
                _INSERT_WORKOUT,
                (workout.workout.workout_type, _to_db(date), "planned", now, now),
            )
            workout_id = cursor.lastrowid
            self._conn.executemany(
                _INSERT_EXERCISE,
                [
                    (ex.name, ex.weight, ex.repetitions, ex.sets, ex.duration,
                     ex.distance, workout_id, now, now)
                    for ex in workout.exercises
                ],
            )

    def _delete_workout(self, workout_id: int) -> None:
        self._conn.execute("DELETE FROM exercises WHERE workout_id = ?", (workout_id,))
        self._conn.execute("DELETE FROM workouts WHERE id = ?", (workout_id,))

    def delete_last_workout(self) -> None:
        """Delete the most recent workout; do nothing if there is none."""
        with self._conn:
            row = self._conn.execute(
                "SELECT id FROM workouts ORDER BY workout_date DESC LIMIT 1"
            ).fetchone()
            if row is not None:
                self._delete_workout(row["id"])

    def delete_workout_by_date(self, date: DateLike) -> None:
        """Delete the workout on the given day; do nothing if there is none."""
        with self._conn:
            row = self._conn.execute(
                "SELECT id FROM workouts WHERE DATE(workout_date) = DATE(?) LIMIT 1",
                (_to_db(date),),
            ).fetchone()
            if row is not None:
                self._delete_workout(row["id"])

    def update_workout(
        self, workout_id: int, workout_type: str, exercises: Sequence[Exercise]
    ) -> None:
        """Change a workout's type and replace all of its exercises."""
        now = _to_db(datetime.now())
        with self._conn:
            self._conn.execute(
                "UPDATE workouts SET workout_type = ?, updated_at = ? WHERE id = ?",
                (workout_type, now, workout_id),
            )
            self._conn.execute("DELETE FROM exercises WHERE workout_id = ?", (workout_id,))
            self._conn.executemany(
                _INSERT_EXERCISE,
                [
                    (ex.name, ex.weight, ex.repetitions, ex.sets, ex.duration,
                     ex.distance, workout_id, now, now)
                    for ex in exercises
                ],
            )

    def update_workout_date(self, old_date: DateLike, new_date: DateLike) -> None:
        (count,) = self._conn.execute(
            "SELECT COUNT(*) FROM workouts WHERE DATE(workout_date) = DATE(?)",
            (_to_db(new_date),),
        ).fetchone()
        if count > 0:
            raise WorkoutConflictError(f"a workout already exists for {_day(new_date)}")
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE workouts SET workout_date = ?, updated_at = ? "
                "WHERE DATE(workout_date) = DATE(?)",
                (_to_db(new_date), _to_db(datetime.now()), _to_db(old_date)),
            )
        if cursor.rowcount == 0:
            raise WorkoutNotFoundError(f"no workout found for {_day(old_date)}")

    def update_last_workout_status(self, status: str) -> None:
        with self._conn:
            cursor = self._conn.execute(
                "UPDATE workouts SET status = ?, updated_at = ? "
                "WHERE id = (SELECT id FROM workouts ORDER BY workout_date DESC LIMIT 1)",
                (status, _to_db(datetime.now())),
            )
        if cursor.rowcount == 0:
            raise WorkoutNotFoundError("no workouts found to update")