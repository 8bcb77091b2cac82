"""Data records for workouts and the exercises they contain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

# Exercise names containing one of these words are recorded with a duration.
DURATION_REQUIRED_KEYWORDS: tuple[str, ...] = ("plank", "wall sit", "hold", "stretch")

# Exercise names matching one of these words are recorded with a distance.
DISTANCE_REQUIRED_KEYWORDS: tuple[str, ...] = (
    "run",
    "walk",
    "cycling",
    "cycle",
    "swim",
    "rowing",
    "row",
)


@dataclass
class Exercise:
    """One exercise performed (or planned) as part of a workout."""

    name: str = ""
    weight: int = 0  # kg, 0 for bodyweight exercises
    repetitions: int = 0  # 0 for duration-based exercises
    sets: int = 0
    duration: float = 0.0  # minutes
    distance: int = 0  # meters
    id: int = 0
    workout_id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class Workout:
    """A single workout session; at most one exists per calendar day."""

    workout_type: str = ""
    workout_date: Optional[datetime] = None
    status: str = ""  # "planned" or "completed"
    id: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass
class WorkoutWithExercises:
    """A workout together with its exercises in recorded order."""

    workout: Workout = field(default_factory=Workout)
    exercises: List[Exercise] = field(default_factory=list)