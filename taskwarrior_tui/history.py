"""Command-line history kept in a file under the data directory."""

from __future__ import annotations

import enum
import logging
import os
from pathlib import Path
from typing import Optional, Union

import platformdirs

log = logging.getLogger(__name__)

_MAX_LEN = 100
_HEADER = "#V2"


class SearchDirection(enum.Enum):
    """Direction in which to walk the history."""

    FORWARD = "forward"
    REVERSE = "reverse"


def default_data_dir() -> Path:
    """Directory for data files: TASKWARRIOR_TUI_DATA or the user data dir."""
    env = os.environ.get("TASKWARRIOR_TUI_DATA")
    if env is not None:
        return Path(env)
    return Path(platformdirs.user_data_dir("taskwarrior-tui", appauthor=False))


def _escape(entry: str) -> str:
    return entry.replace("\\", "\\\\").replace("\n", "\\n")


def _unescape(line: str) -> str:
    out = []
    chars = iter(line)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        nxt = next(chars, None)
        if nxt == "n":
            out.append("\n")
        elif nxt == "\\":
            out.append("\\")
        elif nxt is None:
            out.append("\\")
        else:
            out.append("\\" + nxt)
    return "".join(out)


class HistoryContext:
    """History entries with a cursor used for prefix searches."""

    def __init__(self, filename: str, data_dir: Optional[Union[str, Path]] = None) -> None:
        directory = Path(data_dir) if data_dir is not None else default_data_dir()
        directory.mkdir(parents=True, exist_ok=True)
        self.data_path = directory / filename
        self._entries: list[str] = []
        self.history_index: Optional[int] = None

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def _push(self, line: str) -> bool:
        if not line:
            return False
        if self._entries and self._entries[-1] == line:
            return False
        if len(self._entries) >= _MAX_LEN:
            del self._entries[0]
        self._entries.append(line)
        return True

    def load(self) -> None:
        """Read the history file, creating it if it does not exist."""
        if self.data_path.exists():
            lines = self.data_path.read_text(encoding="utf-8").split("\n")
            lines = [line[:-1] if line.endswith("\r") else line for line in lines]
            if lines and lines[-1] == "":
                lines.pop()
            versioned = bool(lines) and lines[0] == _HEADER
            if versioned:
                lines = lines[1:]
            self._entries = []
            for line in lines:
                self._push(_unescape(line) if versioned else line)
        else:
            self.write()
        self.history_index = None
        log.debug("Loading history of length %d", len(self._entries))

    def write(self) -> None:
        """Save the history to its file."""
        body = "".join(_escape(entry) + "\n" for entry in self._entries)
        self.data_path.write_text(_HEADER + "\n" + body, encoding="utf-8")

    def _starts_with(self, term: str, start: int, direction: SearchDirection) -> Optional[int]:
        if start >= len(self._entries):
            return None
        if direction is SearchDirection.REVERSE:
            indices = range(start, -1, -1)
        else:
            indices = range(start, len(self._entries))
        return next((i for i in indices if self._entries[i].startswith(term)), None)

    def history_search(self, buf: str, direction: SearchDirection) -> Optional[str]:
        """Move the cursor to the next entry starting with ``buf`` and return it."""
        if not self._entries:
            return None
        last = len(self._entries) - 1
        if self.history_index is None:
            if direction is SearchDirection.FORWARD:
                return None
            self.history_index = last
            index = last
        else:
            current = self.history_index
            if (current == last and direction is SearchDirection.FORWARD) or (
                current == 0 and direction is SearchDirection.REVERSE
            ):
                return None
            if direction is SearchDirection.REVERSE:
                index = current - 1
            else:
                index = min(current + 1, last)

        found = self._starts_with(buf, index, direction)
        if found is not None:
            self.history_index = found
            return self._entries[found]
        if not buf:
            self.history_index = index
            return self._entries[index]
        log.debug("History index = %d. Found no match.", index)
        return None

    def add(self, buf: str) -> None:
        """Append an entry; the search cursor resets when it is stored."""
        if self._push(buf):
            self.reset()

    def reset(self) -> None:
        self.history_index = None

    def __len__(self) -> int:
        return len(self._entries)