"""Client for an Ollama server and parsing of the workouts it generates."""

from __future__ import annotations

import json
import math
import re
import urllib.error
import urllib.parse
import urllib.request
from datetime import datetime
from typing import Any, Iterable, Optional, Protocol, Union, runtime_checkable

from .models import Exercise, Workout, WorkoutWithExercises
from .parsing import _atoi, _parse_float

_THINK_TAG_RE = re.compile(r"<think>.*?</think>[\t\n\f\r ]*", re.DOTALL)
_ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_LOOPBACK = {"localhost", "::1"}
_THINK_OPEN = "<think>"
_THINK_CLOSE = "</think>"


class OllamaError(Exception):
    """Raised when the Ollama server cannot be reached or answers badly."""


class WorkoutParseError(ValueError):
    """Raised when a generated workout cannot be read."""


@runtime_checkable
class PromptClient(Protocol):
    """What the commands need from a language-model client."""

    custom_prompt: str

    def send_prompt(self, prompt: str, timeout: Optional[float] = None) -> str: ...

    def send_prompt_stream(self, prompt: str, timeout: Optional[float] = None) -> str: ...


def strip_thinking_tags(text: str) -> str:
    """Remove ``<think>...</think>`` blocks and the whitespace after them."""
    return _THINK_TAG_RE.sub("", text)


def _stream_chunk(line: Union[str, bytes]) -> Optional[tuple[str, bool]]:
    try:
        data = json.loads(line)
    except ValueError:
        return None
    if data is None:
        return "", False
    if not isinstance(data, dict):
        return None
    text = data.get("response")
    done = data.get("done")
    if text is None:
        text = ""
    if done is None:
        done = False
    if not isinstance(text, str) or not isinstance(done, bool):
        return None
    return text, done


def collect_stream(lines: Iterable[Union[str, bytes]]) -> str:
    """Join the text of streamed JSON lines, leaving out ``<think>`` sections."""
    full: list[str] = []
    buffer = ""
    in_think = False
    for line in lines:
        chunk = _stream_chunk(line)
        if chunk is None:
            continue
        text, done = chunk
        buffer += text
        if not in_think and buffer.endswith(_THINK_OPEN):
            in_think = True
            buffer = ""
            continue
        if in_think:
            if buffer.endswith(_THINK_CLOSE):
                in_think = False
                buffer = ""
            continue
        full.append(text)
        if done:
            break
    return "".join(full)


class OllamaClient:
    """Talks to the ``/api/generate`` endpoint of an Ollama server."""

    def __init__(self, host: str, model: str, custom_prompt: str = "") -> None:
        self.host = host
        self.model = model
        self.custom_prompt = custom_prompt

    def _opener(self) -> urllib.request.OpenerDirector:
        hostname = urllib.parse.urlsplit(self.host).hostname or ""
        if hostname in _LOOPBACK or hostname.startswith("127."):
            return urllib.request.build_opener(urllib.request.ProxyHandler({}))
        return urllib.request.build_opener()

    def _post(self, prompt: str, stream: bool, timeout: Optional[float]):
        payload = json.dumps({"model": self.model, "prompt": prompt, "stream": stream})
        try:
            request = urllib.request.Request(
                f"{self.host}/api/generate",
                data=payload.encode("utf-8"),
                method="POST",
                headers={"Content-Type": "application/json"},
            )
        except ValueError as exc:
            raise OllamaError(f"failed to create request: {exc}") from exc
        kwargs = {} if timeout is None else {"timeout": timeout}
        try:
            response = self._opener().open(request, **kwargs)
        except urllib.error.HTTPError as exc:
            body = exc.read().decode("utf-8", "replace")
            raise OllamaError(f"ollama returned status {exc.code}: {body}") from exc
        except (urllib.error.URLError, OSError, ValueError) as exc:
            raise OllamaError(f"failed to send request: {exc}") from exc
        if response.status != 200:
            with response:
                body = response.read().decode("utf-8", "replace")
            raise OllamaError(f"ollama returned status {response.status}: {body}")
        return response

    def send_prompt(self, prompt: str, timeout: Optional[float] = None) -> str:
        """Send a prompt and return the whole response text."""
        with self._post(prompt, False, timeout) as response:
            try:
                body = response.read()
            except OSError as exc:
                raise OllamaError(f"failed to read response: {exc}") from exc
        try:
            data = json.loads(body)
        except ValueError as exc:
            raise OllamaError(f"failed to unmarshal response: {exc}") from exc
        if data is None:
            return ""
        if not isinstance(data, dict):
            raise OllamaError("failed to unmarshal response: not a JSON object")
        text = data.get("response")
        if text is None:
            return ""
        if not isinstance(text, str):
            raise OllamaError("failed to unmarshal response: response is not a string")
        return text

    def send_prompt_stream(self, prompt: str, timeout: Optional[float] = None) -> str:
        """Send a prompt with streaming enabled and return the collected text."""
        with self._post(prompt, True, timeout) as response:
            try:
                return collect_stream(response)
            except OSError as exc:
                raise OllamaError(f"error reading stream: {exc}") from exc


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _lookup(obj: dict, key: str) -> Any:
    if key in obj:
        return obj[key]
    for name, value in obj.items():
        if name.lower() == key:
            return value
    return None


def _string_field(obj: dict, key: str) -> str:
    value = _lookup(obj, key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise WorkoutParseError(f"failed to parse JSON: field {key!r} is not a string")
    return value


def to_int(value: Any) -> int:
    """Convert a loosely typed JSON value ("-", number or numeric string) to int."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, str):
        if value in ("-", ""):
            return 0
        whole = _atoi(value)
        if whole is not None:
            return whole
        number = _parse_float(value)
        if number is None or not math.isfinite(number):
            return 0
        return int(number)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    return 0


def to_float(value: Any) -> float:
    """Convert a loosely typed JSON value ("-", number or numeric string) to float."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        if value in ("-", ""):
            return 0.0
        number = _parse_float(value)
        return 0.0 if number is None else number
    if isinstance(value, (int, float)):
        return float(value)
    return 0.0


def _exercise_from(item: Any) -> Exercise:
    if item is None:
        return Exercise()
    if not isinstance(item, dict):
        raise WorkoutParseError("failed to parse JSON: exercise is not an object")
    return Exercise(
        name=_string_field(item, "name"),
        weight=to_int(_lookup(item, "weight")),
        repetitions=to_int(_lookup(item, "reps")),
        sets=to_int(_lookup(item, "sets")),
        duration=to_float(_lookup(item, "duration")),
    )


def parse_workout_response(json_response: str) -> WorkoutWithExercises:
    """Read the workout JSON object embedded in a model's answer."""
    start = json_response.find("{")
    end = json_response.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise WorkoutParseError("no valid JSON found in response")
    try:
        data = json.loads(json_response[start : end + 1], parse_constant=_reject_constant)
    except ValueError as exc:
        raise WorkoutParseError(f"failed to parse JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise WorkoutParseError("failed to parse JSON: not a JSON object")

    date_text = _string_field(data, "date")
    workout_type = _string_field(data, "type")
    items = _lookup(data, "exercises")
    if items is None:
        items = []
    if not isinstance(items, list):
        raise WorkoutParseError("failed to parse JSON: exercises is not a list")
    exercises = [_exercise_from(item) for item in items]

    if not _ISO_DATE_RE.fullmatch(date_text):
        raise WorkoutParseError(f'invalid date format: cannot parse "{date_text}" as YYYY-MM-DD')
    try:
        workout_date = datetime.strptime(date_text, "%Y-%m-%d")
    except ValueError as exc:
        raise WorkoutParseError(f"invalid date format: {exc}") from exc

    return WorkoutWithExercises(
        workout=Workout(workout_type=workout_type, workout_date=workout_date),
        exercises=exercises,
    )