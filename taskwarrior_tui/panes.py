"""State of the context and project panes."""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from typing import Optional

from .table_state import TableState

_CONTEXT_COLUMNS = ("Name", "Remaining", "Avg age", "Complete")
_PROJECT_COLUMNS = ("Name", "Remaining", "Avg age", "Complete")
_UNSET_HINT = "Use 'task context none' to unset the current context."


def _run_task(*args: str) -> str:
    result = subprocess.run(["task", *args], capture_output=True, check=False)
    return result.stdout.decode("utf-8", errors="replace")


@dataclass
class ContextDetails:
    """One context as listed by ``task context``."""

    name: str = ""
    definition: str = ""
    active: str = ""
    type_: str = ""


def _parse_context_line(line: str) -> ContextDetails:
    tokens = line.split()
    name = tokens[0] if tokens else ""
    typ = tokens[1] if len(tokens) > 1 else ""
    active = tokens[-1] if len(tokens) > 2 else ""
    definition = line.replace(name, "", 1).replace(typ, "", 1)
    if definition.endswith(active):
        definition = definition[: len(definition) - len(active)]
    else:
        definition = ""
    return ContextDetails(name, definition.strip(), active, typ)


def parse_contexts(data: str) -> list[ContextDetails]:
    """Contexts in ``task context`` output, led by the ``none`` context."""
    rows: list[ContextDetails] = []
    for index, line in enumerate(data.strip().split("\n")):
        indented = line.startswith("  ")
        stripped = line.strip()
        if indented and stripped.startswith("write"):
            continue
        if indented and not (stripped.endswith("yes") or stripped.endswith("no")):
            if rows:
                rows[-1].definition = f"{rows[-1].definition} {stripped}"
            continue
        if not stripped or stripped == _UNSET_HINT:
            continue
        if index in (0, 1):
            continue
        rows.append(_parse_context_line(stripped))
    any_active = any(row.active != "no" for row in rows)
    rows.insert(0, ContextDetails("none", "", "no" if any_active else "yes", "read"))
    return rows


@dataclass
class ContextsState:
    """Rows of the context pane and its table state."""

    table_state: TableState = field(default_factory=TableState)
    report_height: int = 0
    columns: list[str] = field(default_factory=lambda: list(_CONTEXT_COLUMNS))
    rows: list[ContextDetails] = field(default_factory=list)

    def simplified_view(self) -> tuple[list[list[str]], list[str]]:
        rows = [[c.name, c.type_, c.definition, c.active] for c in self.rows]
        return rows, list(self.columns)

    def __len__(self) -> int:
        return len(self.rows)

    def update_data(self) -> None:
        """Reload the contexts from ``task context``."""
        self.rows = parse_contexts(_run_task("context"))


@dataclass
class ProjectDetails:
    """Summary figures of one project."""

    name: str = ""
    remaining: int = 0
    avg_age: str = ""
    complete: str = ""


@dataclass
class ProjectsState:
    """Projects in the project pane, the cursor and the marked projects."""

    list: list[str] = field(default_factory=list)
    table_state: TableState = field(default_factory=TableState)
    current_selection: int = 0
    marked: set[str] = field(default_factory=set)
    columns: list[str] = field(default_factory=lambda: [*_PROJECT_COLUMNS])
    rows: list[ProjectDetails] = field(default_factory=list)
    data: str = ""

    def pattern_by_marked(self) -> str:
        """Filter expression selecting every marked project, or an empty string."""
        if not self.marked:
            return ""
        terms = [" " if project == "(none)" else project for project in sorted(self.marked)]
        return "'(" + " or ".join(f"project:{term}" for term in terms) + ")'"

    def toggle_mark(self) -> None:
        if not self.list:
            return
        project = self.list[self.current_selection]
        if project in self.marked:
            self.marked.remove(project)
        else:
            self.marked.add(project)

    def simplified_view(self) -> tuple[list[list[str]], list[str]]:
        rows = [[r.name, str(r.remaining), r.avg_age, r.complete] for r in self.rows]
        return rows, list(self.columns)

    def last_line(self, line: str) -> bool:
        """Whether ``line`` is the closing ``N projects`` line of a summary."""
        words = [w.strip() for w in line.strip().split(" ")]
        return (
            len(words) == 2
            and all(c.isnumeric() for c in words[0])
            and words[1] in ("project", "projects")
        )

    def update_data(self) -> None:
        """Reload the raw ``task summary`` output."""
        self.list.clear()
        self.rows.clear()
        self.data = _run_task("summary")

    def update_table_state(self) -> None:
        """Carry the cursor and marks over to the table state."""
        self.table_state.select(self.current_selection)
        if not self.marked:
            self.table_state.single_selection()
            return
        self.table_state.multiple_selection()
        self.table_state.clear()
        for project in self.marked:
            index: Optional[int] = self.list.index(project) if project in self.list else None
            self.table_state.mark(index)

    def focus_next(self) -> None:
        if self.current_selection < max(len(self.list) - 1, 0):
            self.current_selection += 1
            self.table_state.select(self.current_selection)

    def focus_previous(self) -> None:
        if self.current_selection >= 1:
            self.current_selection -= 1
            self.table_state.select(self.current_selection)