"""Terminal styles and parsing of taskwarrior colour specifications."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, replace
from typing import Optional, Union

# A colour is an index into the 256-colour palette (int), a named terminal
# colour such as "black" or "reset" (str), or an RGB triple.
Color = Union[int, str, tuple[int, int, int]]


class Modifier(enum.Flag):
    """Text attributes a style can switch on."""

    BOLD = enum.auto()
    DIM = enum.auto()
    ITALIC = enum.auto()
    UNDERLINED = enum.auto()
    SLOW_BLINK = enum.auto()
    RAPID_BLINK = enum.auto()
    REVERSED = enum.auto()
    HIDDEN = enum.auto()
    CROSSED_OUT = enum.auto()


@dataclass(frozen=True)
class Style:
    """Foreground, background and modifiers for a piece of text."""

    fg: Optional[Color] = None
    bg: Optional[Color] = None
    modifier: Modifier = Modifier(0)

    def with_fg(self, color: Color) -> "Style":
        return replace(self, fg=color)

    def with_bg(self, color: Color) -> "Style":
        return replace(self, bg=color)

    def with_modifier(self, modifier: Modifier) -> "Style":
        return replace(self, modifier=self.modifier | modifier)


_TRUE = frozenset({"true", "1", "y", "yes", "on"})
_FALSE = frozenset({"false", "0", "n", "no", "off"})


def parse_bool(value: str) -> Optional[bool]:
    """Interpret a taskwarrior boolean, or None if it is not one."""
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return None


_BASIC = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
}

_BOLD = {f"bold {name}": index + 8 for name, index in _BASIC.items()}
_BRIGHT = {f"bright {name}": index + 8 for name, index in _BASIC.items()}

_U8 = re.compile(r"\+?[0-9]+")


def _strip_prefix(text: str, prefix: str) -> str:
    while text.startswith(prefix):
        text = text[len(prefix):]
    return text


def _parse_u8(text: str) -> int:
    if _U8.fullmatch(text):
        value = int(text)
        if value <= 255:
            return value
    return 0


def _gray(text: str) -> int:
    return (232 + _parse_u8(_strip_prefix(text, "gray"))) % 256


def _rgb(text: str) -> int:
    raw = text.encode("utf-8")
    if len(raw) < 6:
        raise ValueError(f"rgb colour needs three digits: {text!r}")

    def digit(byte: int) -> int:
        ch = chr(byte)
        return int(ch) if ch in "0123456789" else 0

    red, green, blue = (digit(b) for b in raw[3:6])
    return (16 + red * 36 + green * 6 + blue) % 256


def parse_foreground(s: str) -> Optional[Color]:
    """Parse the foreground half of a colour specification."""
    s = s.strip()
    if "color" in s:
        return _parse_u8(_strip_prefix(s, "color"))
    if "gray" in s:
        return _gray(s)
    if "rgb" in s:
        return _rgb(s)
    if s in _BOLD:
        return _BOLD[s]
    return _BASIC.get(s)


def parse_background(s: str) -> Optional[Color]:
    """Parse the background half of a colour specification."""
    s = s.strip()
    if "bright color" in s:
        s = _strip_prefix(s, "bright ")
        return _parse_u8(_strip_prefix(s, "color"))
    if "color" in s:
        return _parse_u8(_strip_prefix(s, "color"))
    if "gray" in s:
        return _gray(_strip_prefix(s, "bright "))
    if "rgb" in s:
        return _rgb(_strip_prefix(s, "bright "))
    if s in _BRIGHT:
        return _BRIGHT[s]
    return _BASIC.get(s)


def parse_tcolor(line: str) -> Style:
    """Turn a taskwarrior colour such as ``bold white on red`` into a Style."""
    split_at = line.lower().find("on ")
    if split_at < 0:
        split_at = len(line)
    foreground, background = line[:split_at], line[split_at:]
    background = background.replace("on ", "")
    modifiers = Modifier(0)
    if "bright" in foreground:
        foreground = foreground.replace("bright ", "")
        background = "bright " + background.replace("bright ", "")
    foreground = foreground.replace("grey", "gray")
    background = background.replace("grey", "gray")
    if "underline" in foreground:
        modifiers |= Modifier.UNDERLINED
    foreground = foreground.replace("underline ", "")
    if "bold" in foreground:
        modifiers |= Modifier.BOLD
    if "inverse" in foreground:
        modifiers |= Modifier.REVERSED
    foreground = foreground.replace("inverse ", "")

    style = Style()
    fg = parse_foreground(foreground)
    if fg is not None:
        style = style.with_fg(fg)
    bg = parse_background(background)
    if bg is not None:
        style = style.with_bg(bg)
    return style.with_modifier(modifiers)