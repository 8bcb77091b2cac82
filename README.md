# fit_recorder

A library for keeping a log of workouts. Workouts and their exercises are
stored in SQLite, a model served by Ollama can be asked to suggest the next
workout from that history, and a few small terminal prompts (checkbox,
text entry with autocomplete, filterable list) collect answers from a user.

## Installation

```
pip install .
```

The only third-party dependency is `prompt-toolkit`, used by `fit_recorder.ui`.

## What is in the package

### `fit_recorder.models`

Dataclasses `Exercise`, `Workout` and `WorkoutWithExercises`.
An `Exercise` has `name`, `weight` (kg), `repetitions`, `sets`, `duration`
(minutes) and `distance` (metres). A `Workout` has `workout_type`,
`workout_date` and `status` (`"planned"` or `"completed"`).

`DURATION_REQUIRED_KEYWORDS` and `DISTANCE_REQUIRED_KEYWORDS` list the words
in exercise names that call for a duration or a distance.

### `fit_recorder.database`

`Database(path)` opens (and if needed creates the tables of) an SQLite file,
or `":memory:"`. It is a context manager and closes itself on exit.

- `create_workout(workout_type, status, workout_date=None)` inserts a workout
  and returns its id. Only one workout per calendar day is allowed; a second
  one raises `WorkoutConflictError`.
- `save_exercises_for_workout(workout_id, exercises)` adds exercises to a workout.
- `save_generated_workout(workout)` stores a `WorkoutWithExercises` with the
  status `planned`.
- `get_last_workout()`, `get_workout_by_date(date)` return a
  `WorkoutWithExercises` or `None`; `get_all_workouts()` returns all of them,
  newest first.
- `get_all_exercises()` and `get_distinct_exercise_names()` (sorted).
- `update_workout(workout_id, workout_type, exercises)` changes the type and
  replaces the exercises.
- `update_workout_date(old_date, new_date)` moves a workout to another day;
  raises `WorkoutConflictError` if the new day is taken and
  `WorkoutNotFoundError` if nothing is on the old day.
- `update_last_workout_status(status)` raises `WorkoutNotFoundError` when there
  are no workouts.
- `delete_last_workout()` and `delete_workout_by_date(date)` do nothing when
  there is nothing to delete.

All errors derive from `DatabaseError`.

### `fit_recorder.parsing`

- `parse_eu_date("31-12-25")` reads a DD-MM-YY date, raising `ValueError` otherwise.
- `parse_exercise_count(text)` accepts whole numbers from 1 to 20.
- `parse_weight(text)` turns `"100"`, `"100kg"`, `"82.5"`, `"bodyweight"` or
  `"-"` into whole kilograms (0 when it cannot be read).
- `parse_int(text)` gives 0 for empty, `"-"` or invalid input.

### `fit_recorder.formatting`

`format_exercises(exercises)` returns an aligned table with the columns
Exercise, Weight, Reps, Sets, Duration and Distance (or
`No exercises to display`). `print_exercises(exercises, stream=None)` writes
it, and `clear_screen(stream=None)` writes the ANSI clear-screen sequence.

### `fit_recorder.config`

`load_config(environ=None)` returns a frozen `Config` with `ollama_host`,
`ollama_model` and `ollama_prompt`, read from these variables:

| Variable | Meaning |
| --- | --- |
| `TERMINAL_FIT_RECORDER_OLLAMA_HOST` | Base URL of the Ollama server |
| `TERMINAL_FIT_RECORDER_OLLAMA_MODEL` | Model used for generation |
| `TERMINAL_FIT_RECORDER_OLLAMA_PROMPT` | Extra coaching instructions added to the prompt |

Empty or unset variables fall back to built-in defaults.

### `fit_recorder.prompt`

`build_prompt(workouts, exercise_count=0, custom_prompt="")` assembles the text
sent to the model: instructions, the expected JSON shape and the history from
`format_workout_data(workouts)`, one `Name|Weight|Reps×Sets|Duration` line per
exercise. A positive `exercise_count` asks for exactly that many exercises.

### `fit_recorder.ollama`

- `OllamaClient(host, model, custom_prompt="")` posts to `/api/generate`.
  `send_prompt(prompt, timeout=None)` returns the whole answer;
  `send_prompt_stream(prompt, timeout=None)` reads the streamed answer.
  Failures raise `OllamaError`.
- `collect_stream(lines)` joins streamed JSON lines, leaving out
  `<think>…</think>` sections; `strip_thinking_tags(text)` removes them from text.
- `parse_workout_response(text)` finds the JSON object in a model's answer and
  returns a `WorkoutWithExercises`; it raises `WorkoutParseError` when there is
  no JSON or the date is not `YYYY-MM-DD`. Fields may be numbers, numeric
  strings or `"-"`, converted by `to_int` and `to_float`.
- `PromptClient` is the protocol a client must satisfy.

### `fit_recorder.ui`

`CheckboxModel`, `TextInputModel` and `ListModel` are prompt state machines:
feed them `Key` values or typed characters with `handle_key`, which returns
`True` once finished, and render them with `view()`. `TextInputModel` filters
its suggestions by the typed text; `ListModel` adds a `(Type custom value)`
entry.

`get_input_with_type(prompt, suggestions, input_type)` runs one of them in the
terminal according to an `InputType` (`TEXT`, `LIST`, `CHECKBOX`,
`AUTOCOMPLETE`) and returns the answer, or `None` when the user presses Ctrl+C
or Ctrl+D. `get_input`, `get_checkbox_selection` and `get_list_selection` are
shortcuts. `TerminalInputProvider` satisfies the `InputProvider` protocol,
so code can take any object with `get_input_with_type` and tests can script
answers.

## Example

```python
from fit_recorder.database import Database
from fit_recorder.formatting import format_exercises
from fit_recorder.ollama import parse_workout_response

with Database(":memory:") as db:
    plan = parse_workout_response(
        'Here you go: {"date": "2025-01-15", "type": "strength", '
        '"exercises": [{"name": "Squats", "weight": 100, "reps": 5, "sets": 5, "duration": "-"}]}'
    )
    db.save_generated_workout(plan)
    last = db.get_last_workout()
    print(last.workout.status)          # planned
    print(format_exercises(last.exercises))
```

```python
from fit_recorder.ui import Key, TextInputModel

model = TextInputModel("Exercise name: ", ["Bench Press", "Squats"])
model.handle_key("b")
model.handle_key(Key.ENTER)
print(model.value)                      # Bench Press
```

## What the package does not do

There is no command-line program: the package installs no command, and the
interactive workflows for saving, showing, editing, deleting or generating
workouts, as well as creating the database under the home directory, are not
included. The pieces above are what such a program would be built from.

## Running the tests

```
pip install ".[test]"
pytest
```