import dataclasses

import pytest

from fit_recorder.config import Config, load_config


def test_defaults():
    cfg = load_config({})
    assert cfg.ollama_host == "http://192.168.1.39:11434"
    assert cfg.ollama_model == "qwen3-coder:480b-cloud"
    assert cfg.ollama_prompt.startswith(
        "If there's no previously provided workout data, suggest a beginner workout."
    )
    assert cfg.ollama_prompt.endswith(
        "suggest exercises that affect all major muscle groups."
    )


def test_defaults_match_dataclass_defaults():
    assert load_config({}) == Config()


def test_overrides():
    env = {
        "TERMINAL_FIT_RECORDER_OLLAMA_HOST": "http://localhost:1234",
        "TERMINAL_FIT_RECORDER_OLLAMA_MODEL": "tiny-model",
        "TERMINAL_FIT_RECORDER_OLLAMA_PROMPT": "Be brief",
    }
    cfg = load_config(env)
    assert cfg.ollama_host == "http://localhost:1234"
    assert cfg.ollama_model == "tiny-model"
    assert cfg.ollama_prompt == "Be brief"


def test_empty_value_falls_back():
    cfg = load_config({"TERMINAL_FIT_RECORDER_OLLAMA_MODEL": ""})
    assert cfg.ollama_model == Config().ollama_model


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("TERMINAL_FIT_RECORDER_OLLAMA_HOST", "http://localhost:4321")
    assert load_config().ollama_host == "http://localhost:4321"


def test_config_is_frozen():
    cfg = load_config({})
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.ollama_host = "http://localhost:1"
    assert cfg.ollama_host == "http://192.168.1.39:11434"