[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fit_recorder"
version = "0.1.0"
description = "Workout log storage, terminal prompts and Ollama-based workout planning"
requires-python = ">=3.10"
dependencies = [
    "prompt-toolkit",
]
keywords = ["fitness", "workout", "exercise", "tracker", "terminal", "ollama", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["fit_recorder"]

[tool.pytest.ini_options]
addopts = "-ra"
