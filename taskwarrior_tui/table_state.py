"""Selection, marks and scroll offset of a table of rows."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


class TableMode(enum.Enum):
    """Whether one row or several marked rows are acted upon."""

    SINGLE_SELECTION = "single_selection"
    MULTIPLE_SELECTION = "multiple_selection"


def _check_index(index: Optional[int]) -> None:
    if index is not None and index < 0:
        raise ValueError(f"row index must not be negative, got {index}")


@dataclass
class TableState:
    """Which row is selected, which rows are marked and where the view starts."""

    offset: int = 0
    current_selection: Optional[int] = 0
    mode: TableMode = TableMode.SINGLE_SELECTION
    _marked: set[int] = field(default_factory=set, repr=False)

    def multiple_selection(self) -> None:
        self.mode = TableMode.MULTIPLE_SELECTION

    def single_selection(self) -> None:
        self.mode = TableMode.SINGLE_SELECTION

    def select(self, index: Optional[int]) -> None:
        """Select a row; selecting nothing also scrolls back to the top."""
        _check_index(index)
        self.current_selection = index
        if index is None:
            self.offset = 0

    def mark(self, index: Optional[int]) -> None:
        _check_index(index)
        if index is not None:
            self._marked.add(index)

    def unmark(self, index: Optional[int]) -> None:
        _check_index(index)
        if index is not None:
            self._marked.discard(index)

    def toggle_mark(self, index: Optional[int]) -> None:
        _check_index(index)
        if index is None:
            return
        if index in self._marked:
            self._marked.remove(index)
        else:
            self._marked.add(index)

    def marked(self) -> frozenset[int]:
        """The indices of the marked rows."""
        return frozenset(self._marked)

    def is_marked(self, index: int) -> bool:
        return index in self._marked

    def clear(self) -> None:
        """Remove every mark."""
        self._marked.clear()

    def scroll_to_selection(self, remaining: int) -> int:
        """Adjust the offset so the selection shows among ``remaining`` visible rows.

        Returns the new offset.
        """
        if remaining < 0:
            raise ValueError(f"visible row count must not be negative, got {remaining}")
        selected = self.current_selection
        if selected is None:
            self.offset = 0
            return self.offset
        if remaining + self.offset == 0:
            raise ValueError("no rows are visible to scroll to")
        if selected >= remaining + self.offset - 1:
            self.offset = selected + 1 - remaining
        elif selected < self.offset:
            self.offset = selected
        return self.offset