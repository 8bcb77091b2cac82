"""Plain-text tables of exercises and terminal helpers."""

from __future__ import annotations

import sys
from typing import Iterable, List, Optional, Sequence, TextIO

from .models import Exercise

_CLEAR_SCREEN = "\033[2J\033[H"


def _tabulate(rows: Sequence[Sequence[str]], padding: int = 2) -> str:
    """Align every cell but the last of each row into padded columns."""
    widths: dict[int, int] = {}
    for row in rows:
        for index, cell in enumerate(row[:-1]):
            widths[index] = max(widths.get(index, 0), len(cell))
    lines = []
    for row in rows:
        cells = [cell.ljust(widths[index] + padding) for index, cell in enumerate(row[:-1])]
        lines.append("".join(cells) + (row[-1] if row else "") + "\n")
    return "".join(lines)


def _exercise_row(exercise: Exercise) -> List[str]:
    weight = f"{exercise.weight} kg" if exercise.weight > 0 else "-"
    duration = f"{exercise.duration:.2f} min" if exercise.duration > 0 else "-"
    distance = f"{exercise.distance} m" if exercise.distance > 0 else "-"
    return [
        exercise.name,
        weight,
        str(exercise.repetitions),
        str(exercise.sets),
        duration,
        distance,
    ]


def format_exercises(exercises: Iterable[Exercise]) -> str:
    """Render exercises as an aligned table, or a notice when there are none."""
    exercises = list(exercises)
    if not exercises:
        return "No exercises to display\n"
    rows = [
        ["Exercise", "Weight", "Reps", "Sets", "Duration", "Distance"],
        ["--------", "------", "----", "----", "--------", "--------"],
    ]
    rows.extend(_exercise_row(exercise) for exercise in exercises)
    return _tabulate(rows)


def print_exercises(exercises: Iterable[Exercise], stream: Optional[TextIO] = None) -> None:
    """Write the exercise table to ``stream`` (standard output by default)."""
    out = stream if stream is not None else sys.stdout
    out.write(format_exercises(exercises))


def clear_screen(stream: Optional[TextIO] = None) -> None:
    """Clear the terminal and move the cursor home."""
    out = stream if stream is not None else sys.stdout
    out.write(_CLEAR_SCREEN)
    out.flush()