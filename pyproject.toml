[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reedline"
version = "0.1.0"
description = "Line-editor building blocks: command history with file and SQLite backends, history hints, highlighters, edit commands and events"
requires-python = ">=3.10"
dependencies = [
    "portalocker",
]
keywords = ["line editor", "readline", "history", "shell", "hinter", "highlighter"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["reedline"]

[tool.pytest.ini_options]
addopts = "-ra"
