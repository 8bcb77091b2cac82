"""Workout log storage, terminal prompts and Ollama-based workout planning."""

__version__ = "0.1.0"