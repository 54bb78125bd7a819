"""Key bindings, read from ``task show`` output."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Optional

from .keys import KeyCode, char

log = logging.getLogger(__name__)

_PREFIX = "uda.taskwarrior-tui.keyconfig."


class DuplicateKeyError(ValueError):
    """Raised when two actions are bound to the same key."""


# Fields whose binding is not read from configuration on their own.
_NOT_CONFIGURED = frozenset({"help", "duplicate"})

# Order in which bindings are compared for duplicates.
_CHECKED = (
    "quit", "refresh", "go_to_bottom", "go_to_top", "down", "up", "page_down", "page_up",
    "delete", "done", "select", "select_all", "start_stop", "quick_tag", "undo", "edit",
    "duplicate", "modify", "shell", "log", "add", "annotate", "help", "filter", "zoom",
    "context_menu", "next_tab", "previous_tab",
)


@dataclass
class KeyConfig:
    """The key bound to each action."""

    quit: KeyCode = char("q")
    refresh: KeyCode = char("r")
    go_to_bottom: KeyCode = char("G")
    go_to_top: KeyCode = char("g")
    down: KeyCode = char("j")
    up: KeyCode = char("k")
    page_down: KeyCode = char("J")
    page_up: KeyCode = char("K")
    delete: KeyCode = char("x")
    done: KeyCode = char("d")
    start_stop: KeyCode = char("s")
    quick_tag: KeyCode = char("t")
    select: KeyCode = char("v")
    select_all: KeyCode = char("V")
    undo: KeyCode = char("u")
    edit: KeyCode = char("e")
    duplicate: KeyCode = char("y")
    modify: KeyCode = char("m")
    shell: KeyCode = char("!")
    log: KeyCode = char("l")
    add: KeyCode = char("a")
    annotate: KeyCode = char("A")
    help: KeyCode = char("?")
    filter: KeyCode = char("/")
    zoom: KeyCode = char("z")
    context_menu: KeyCode = char("c")
    next_tab: KeyCode = char("]")
    previous_tab: KeyCode = char("[")
    priority_h: KeyCode = char("H")
    priority_m: KeyCode = char("M")
    priority_l: KeyCode = char("L")
    priority_n: KeyCode = char("N")
    shortcut0: KeyCode = char("0")
    shortcut1: KeyCode = char("1")
    shortcut2: KeyCode = char("2")
    shortcut3: KeyCode = char("3")
    shortcut4: KeyCode = char("4")
    shortcut5: KeyCode = char("5")
    shortcut6: KeyCode = char("6")
    shortcut7: KeyCode = char("7")
    shortcut8: KeyCode = char("8")
    shortcut9: KeyCode = char("9")

    def update(self, data: str) -> None:
        """Apply bindings found in ``data`` and check them for duplicates."""
        found = {}
        for f in fields(self):
            if f.name in _NOT_CONFIGURED or f.name.startswith("priority_"):
                continue
            found[f.name] = get_key_config(_PREFIX + f.name.replace("_", "-"), data)
        for name, key in found.items():
            if key is not None:
                setattr(self, name, key)
        # The duplicate action follows the edit binding.
        if found.get("edit") is not None:
            self.duplicate = found["edit"]
        self.check()

    def check(self) -> None:
        """Raise DuplicateKeyError if neighbouring actions share a key."""
        keys = [getattr(self, name) for name in _CHECKED]
        if any(a == b for a, b in zip(keys, keys[1:])):
            raise DuplicateKeyError("Duplicate keys found in key config")


def load_key_config(data: str) -> KeyConfig:
    """Build a KeyConfig from the defaults updated with ``data``."""
    config = KeyConfig()
    config.update(data)
    return config


def _strip_repeated_prefix(line: str, prefix: str) -> str:
    while prefix and line.startswith(prefix):
        line = line[len(prefix):]
    return line


def get_key_config(config: str, data: str) -> Optional[KeyCode]:
    """Return the single-character key configured for ``config``, if any."""
    alternate = config.replace("-", "_")
    for line in data.split("\n"):
        if line.startswith(config):
            prefix = config
        elif line.startswith(alternate):
            prefix = alternate
        else:
            continue
        value = _strip_repeated_prefix(line, prefix).strip()
        if len(value) == 1:
            return char(value)
        log.error("Found multiple characters in %s for %s", value, config)
    return None