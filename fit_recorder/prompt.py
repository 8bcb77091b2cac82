"""Prompt text sent to Ollama when generating a workout."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from .models import WorkoutWithExercises

_INTRO = (
    "You are a fitness coach analyzing workout data. "
    "Generate only next(1) workout based on provided data."
)

_OUTPUT_FORMAT = (
    "\n"
    "\t\tThe output of the next workout provide in json format. {\n"
    '\t\t\t"type": "strength",\n'
    '\t\t\t"date": "2006-01-02",\n'
    '\t\t\t"exercises": [\n'
    "\t\t\t\t{\n"
    '\t\t\t\t\t"name": "Exercise Name:str",\n'
    '\t\t\t\t\t"weight": "Weight:int",\n'
    '\t\t\t\t\t"reps": "Reps:int",\n'
    '\t\t\t\t\t"sets": "Sets:int",\n'
    '\t\t\t\t\t"duration": "Duration:int"\n'
    "\t\t\t\t}\n"
    "\t\t\t]\n"
    "\t\t}\n"
    "\t\t"
)

_HISTORY_HEADER = (
    "Workout History\n"
    "Format: Exercise Name|Weight|Reps\u00d7Sets|Duration\n"
    "All durations in minutes. Empty fields indicated by '-'.\n\n"
)


def _day(value: Optional[datetime]) -> str:
    return value.strftime("%Y-%m-%d") if value is not None else "0001-01-01"


def build_prompt(
    workouts: Iterable[WorkoutWithExercises], exercise_count: int = 0, custom_prompt: str = ""
) -> str:
    """Assemble the full prompt: instructions, output format and workout history."""
    parts = [_INTRO + custom_prompt]
    if exercise_count > 0:
        parts.append(f"\t\tGenerate exactly {exercise_count} exercises for this workout.\n")
    parts.append(_OUTPUT_FORMAT)
    parts.append(format_workout_data(workouts))
    return "".join(parts)


def format_workout_data(workouts: Iterable[WorkoutWithExercises]) -> str:
    """Render workouts compactly as ``Name|Weight|Reps×Sets|Duration`` lines."""
    parts = [_HISTORY_HEADER]
    for entry in workouts:
        workout = entry.workout
        parts.append(f"## {_day(workout.workout_date)} ({workout.workout_type})\n")
        for ex in entry.exercises:
            weight = f"{ex.weight} kg" if ex.weight > 0 else "-"
            if ex.repetitions > 0 or ex.sets > 0:
                reps = str(ex.repetitions) if ex.repetitions > 0 else "-"
                sets = str(ex.sets) if ex.sets > 0 else "-"
                volume = f"{reps}\u00d7{sets}"
            else:
                volume = "-"
            duration = f"{ex.duration:.1f}min" if ex.duration > 0 else "-"
            parts.append(f"{ex.name}|{weight}|{volume}|{duration}\n")
        parts.append("\n")
    return "".join(parts)