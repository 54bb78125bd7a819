"""Completion candidates for the command line."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple, Optional

from wcwidth import wcswidth

_WORD_BREAKS = " ()"


def get_start_word_under_cursor(line: str, cursor_pos: int) -> int:
    """Index where the word ending at ``cursor_pos`` starts."""
    prefix = line[:cursor_pos]
    return max(prefix.rfind(c) for c in _WORD_BREAKS) + 1


class Completion(NamedTuple):
    """One completion candidate."""

    display: str
    replacement: str
    original: str
    before: str
    after: str


def _width(text: str) -> int:
    width = wcswidth(text)
    return width if width >= 0 else len(text)


class CompletionList:
    """Selectable list of completions for the word being typed."""

    def __init__(self, items: Iterable[tuple[str, str]] = ()) -> None:
        self.items: list[tuple[str, str]] = []
        for item in items:
            self.insert(item)
        self.selected_index: Optional[int] = None
        self.current = ""
        self.pos = 0
        self.context = ""
        self.input_text = ""

    def insert(self, item: tuple[str, str]) -> None:
        """Add a (context, candidate) pair unless already present."""
        item = tuple(item)
        if item not in self.items:
            self.items.append(item)

    def next(self) -> None:
        if self.selected_index is None or self.selected_index >= len(self) - 1:
            self.selected_index = 0
        else:
            self.selected_index += 1

    def previous(self) -> None:
        if self.selected_index is None:
            self.selected_index = 0
        elif self.selected_index == 0:
            self.selected_index = max(len(self) - 1, 0)
        else:
            self.selected_index -= 1

    def unselect(self) -> None:
        self.selected_index = None

    def clear(self) -> None:
        self.items.clear()
        self.selected_index = None

    def __len__(self) -> int:
        return len(self.candidates())

    def max_width(self) -> Optional[int]:
        """Widest replacement plus padding, or None with no candidates."""
        return max((_width(c.replacement) + 4 for c in self.candidates()), default=None)

    def get(self, i: int) -> Optional[Completion]:
        candidates = self.candidates()
        return candidates[i] if 0 <= i < len(candidates) else None

    def selected(self) -> Optional[tuple[int, Completion]]:
        if self.selected_index is None:
            return None
        completion = self.get(self.selected_index)
        return None if completion is None else (self.pos, completion)

    def is_empty(self) -> bool:
        return not self.candidates()

    def candidates(self) -> list[Completion]:
        """Candidates in the current context that match the typed word."""
        pos = self.pos
        word = self.current[:pos]
        word_lower = word.lower()
        input_lower = self.input_text.lower()
        result = []
        for context, candidate in self.items:
            if context != self.context:
                continue
            if not (candidate.startswith(word) or candidate.lower().startswith(word_lower)):
                continue
            if candidate in self.input_text and candidate.lower() in input_lower:
                continue
            result.append(Completion(candidate, candidate, word, candidate[:pos], candidate[pos:]))
        return result

    def input(self, current: str, text: str) -> None:
        """Set the word being completed and the full input it sits in."""
        self.input_text = text
        if "." in current and ":" in current:
            self.current = current.partition(":")[2]
            self.context = current.partition(".")[0]
        elif "." in current:
            self.current = "." + current.partition(".")[2]
            self.context = "modifier"
        elif ":" in current:
            head, _, tail = current.partition(":")
            self.current = tail
            self.context = head
        elif "+" in current:
            self.current = "+" + current.partition("+")[2]
            self.context = "+"
        else:
            self.current = current
            self.context = "attribute"
        self.pos = len(self.current)