[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "taskwarrior_tui"
version = "0.26.4"
description = "Building blocks of a terminal interface for Taskwarrior: settings, colours, key bindings, report tables, completion, history and a command-line task backend"
requires-python = ">=3.10"
keywords = ["taskwarrior", "tui", "tasks", "todo", "terminal"]
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
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "platformdirs",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["taskwarrior_tui"]

[tool.hatch.build.targets.sdist]
include = [
    "taskwarrior_tui",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
