"""Settings read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_OLLAMA_HOST = "http://192.168.1.39:11434"
DEFAULT_OLLAMA_MODEL = "qwen3-coder:480b-cloud"
DEFAULT_OLLAMA_PROMPT = (
    "If there's no previously provided workout data, suggest a beginner workout.\n"
    "\t\tIf previously there were a lot of strength workouts provide a cardio workout "
    "and vice versa.\n"
    "\t\tBut the first thing to lookout what type of workout to suggest is provided "
    "looking into workout data and check for a routine.\n"
    "\t\tAlso keep the exercises in workouts to same body parts as in previous workouts, "
    "it could be different exercises but same body parts.\n"
    "\t\tF.e. leg/shoulders, chest/back, arms, upper body, lower body, workouts. "
    "Keep this in mind when looking through exercises of the workout.\n"
    "\t\tWhen generating exercises for cardio workouts, suggest exercises that affect "
    "all major muscle groups."
)

HOST_VARIABLE = "TERMINAL_FIT_RECORDER_OLLAMA_HOST"
MODEL_VARIABLE = "TERMINAL_FIT_RECORDER_OLLAMA_MODEL"
PROMPT_VARIABLE = "TERMINAL_FIT_RECORDER_OLLAMA_PROMPT"


@dataclass(frozen=True)
class Config:
    """Ollama server address, model name and extra prompt text."""

    ollama_host: str = DEFAULT_OLLAMA_HOST
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    ollama_prompt: str = DEFAULT_OLLAMA_PROMPT


def load_config(environ: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from the environment; empty variables fall back to defaults."""
    env = os.environ if environ is None else environ
    return Config(
        ollama_host=env.get(HOST_VARIABLE) or DEFAULT_OLLAMA_HOST,
        ollama_model=env.get(MODEL_VARIABLE) or DEFAULT_OLLAMA_MODEL,
        ollama_prompt=env.get(PROMPT_VARIABLE) or DEFAULT_OLLAMA_PROMPT,
    )