"""Key codes and events delivered by the terminal event loop."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Union


class KeyKind(enum.Enum):
    """The kind of key that was pressed."""

    CTRL_BACKSPACE = "ctrl_backspace"
    CTRL_DELETE = "ctrl_delete"
    ALT_BACKSPACE = "alt_backspace"
    ALT_DELETE = "alt_delete"
    BACKSPACE = "backspace"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    HOME = "home"
    END = "end"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    BACK_TAB = "back_tab"
    DELETE = "delete"
    INSERT = "insert"
    F = "f"
    CHAR = "char"
    ALT = "alt"
    CTRL = "ctrl"
    NULL = "null"
    ESC = "esc"
    TAB = "tab"


_CHAR_KINDS = frozenset({KeyKind.CHAR, KeyKind.ALT, KeyKind.CTRL})


@dataclass(frozen=True)
class KeyCode:
    """A key press: its kind plus a character or function-key number."""

    kind: KeyKind
    value: Optional[Union[str, int]] = None

    def __post_init__(self) -> None:
        if self.kind in _CHAR_KINDS:
            if not isinstance(self.value, str) or len(self.value) != 1:
                raise ValueError(f"{self.kind.name} key needs exactly one character, got {self.value!r}")
        elif self.kind is KeyKind.F:
            if not isinstance(self.value, int) or not 0 <= self.value <= 255:
                raise ValueError(f"function key number must be in 0..255, got {self.value!r}")
        elif self.value is not None:
            raise ValueError(f"{self.kind.name} key takes no value")


def char(c: str) -> KeyCode:
    """A plain character key."""
    return KeyCode(KeyKind.CHAR, c)


def ctrl(c: str) -> KeyCode:
    """A character pressed with Control."""
    return KeyCode(KeyKind.CTRL, c)


def alt(c: str) -> KeyCode:
    """A character pressed with Alt."""
    return KeyCode(KeyKind.ALT, c)


def function_key(n: int) -> KeyCode:
    """The function key F<n>."""
    return KeyCode(KeyKind.F, n)


class EventKind(enum.Enum):
    """What an event loop message carries."""

    INPUT = "input"
    TICK = "tick"
    CLOSED = "closed"


@dataclass(frozen=True)
class Event:
    """A message from the event loop; input events carry a key."""

    kind: EventKind
    key: Optional[KeyCode] = None

    @classmethod
    def input(cls, key: KeyCode) -> "Event":
        return cls(EventKind.INPUT, key)

    @classmethod
    def tick(cls) -> "Event":
        return cls(EventKind.TICK)

    @classmethod
    def closed(cls) -> "Event":
        return cls(EventKind.CLOSED)


_MODIFIERS = frozenset({"control", "alt", "shift"})

_SIMPLE_KEYS = {
    "left": KeyKind.LEFT,
    "right": KeyKind.RIGHT,
    "up": KeyKind.UP,
    "down": KeyKind.DOWN,
    "home": KeyKind.HOME,
    "end": KeyKind.END,
    "pageup": KeyKind.PAGE_UP,
    "pagedown": KeyKind.PAGE_DOWN,
    "tab": KeyKind.TAB,
    "backtab": KeyKind.BACK_TAB,
    "insert": KeyKind.INSERT,
    "null": KeyKind.NULL,
    "esc": KeyKind.ESC,
}


def translate_key(name: str, modifiers: Iterable[str] = ()) -> KeyCode:
    """Map a terminal key name and its modifiers to a KeyCode.

    ``name`` is a single character for character keys, otherwise one of the
    named keys (``backspace``, ``enter``, ``pageup``, ``f1`` ...). ``modifiers``
    holds any of ``control``, ``alt`` and ``shift``.
    """
    mods = frozenset(m.lower() for m in modifiers)
    unknown = mods - _MODIFIERS
    if unknown:
        raise ValueError(f"unknown modifiers: {', '.join(sorted(unknown))}")

    if len(name) == 1:
        if mods <= {"shift"}:
            return char(name)
        if mods == {"control"}:
            return ctrl(name)
        if mods == {"alt"}:
            return alt(name)
        return KeyCode(KeyKind.NULL)

    lowered = name.lower()
    if lowered == "backspace":
        if mods == {"control"}:
            return KeyCode(KeyKind.CTRL_BACKSPACE)
        if mods == {"alt"}:
            return KeyCode(KeyKind.ALT_BACKSPACE)
        return KeyCode(KeyKind.BACKSPACE)
    if lowered == "delete":
        if mods == {"control"}:
            return KeyCode(KeyKind.CTRL_DELETE)
        if mods == {"alt"}:
            return KeyCode(KeyKind.ALT_DELETE)
        return KeyCode(KeyKind.DELETE)
    if lowered == "enter":
        return char("\n")
    if lowered in _SIMPLE_KEYS:
        return KeyCode(_SIMPLE_KEYS[lowered])
    if lowered.startswith("f") and lowered[1:].isdigit():
        number = int(lowered[1:])
        if number <= 255:
            return function_key(number)
    return KeyCode(KeyKind.NULL)