"""Settings, colours, key bindings, reports, completion, history and a command-line backend for Taskwarrior."""

__version__ = "0.26.4"