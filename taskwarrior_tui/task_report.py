"""Tasks exported by taskwarrior and the report table built from them."""

from __future__ import annotations

import json
import math
import re
import subprocess
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union
from uuid import UUID

from wcwidth import wcwidth

from .timefmt import format_date, format_duration, vague_format_date_time

UdaValue = Union[str, int, float]

_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
_STATUS_NAMES = {
    "pending": "Pending",
    "deleted": "Deleted",
    "completed": "Completed",
    "waiting": "Waiting",
    "recurring": "Recurring",
}
_DATE_FIELDS = ("modified", "scheduled", "due", "until", "start", "end", "wait")
_STRING_FIELDS = ("priority", "project", "recur", "parent", "mask", "imask")
_KNOWN_FIELDS = frozenset(
    {"id", "uuid", "status", "description", "entry", "urgency", "depends", "tags", "annotations"}
    | set(_DATE_FIELDS)
    | set(_STRING_FIELDS)
)
_U64_MAX = 2**64 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1
_I64_TEXT = re.compile(r"[+-]?[0-9]+")

VIRTUAL_TAGS = (
    "PROJECT", "BLOCKED", "UNBLOCKED", "BLOCKING", "DUE", "DUETODAY", "TODAY", "OVERDUE",
    "WEEK", "MONTH", "QUARTER", "YEAR", "ACTIVE", "SCHEDULED", "PARENT", "CHILD", "UNTIL",
    "WAITING", "ANNOTATED", "READY", "YESTERDAY", "TOMORROW", "TAGGED", "PENDING",
    "COMPLETED", "DELETED", "UDA", "ORPHAN", "PRIORITY", "PROJECT", "LATEST", "RECURRING",
    "INSTANCE", "TEMPLATE",
)


def _parse_date(value: object, key: str) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a date string, got {value!r}")
    try:
        return datetime.strptime(value, _DATE_FORMAT)
    except ValueError as exc:
        raise ValueError(f"{key} is not a taskwarrior date: {value!r}") from exc


def _parse_uuid(value: object, key: str) -> UUID:
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a UUID string, got {value!r}")
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"{key} is not a UUID: {value!r}") from exc


def _require(data: Mapping, key: str) -> object:
    if key not in data:
        raise ValueError(f"task is missing {key!r}")
    return data[key]


def _parse_uda(key: str, value: object) -> UdaValue:
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"unsupported value for {key!r}: {value!r}")
    if isinstance(value, int) and not 0 <= value <= _U64_MAX:
        return float(value)
    return value


@dataclass
class Task:
    """One task as exported by ``task export``."""

    uuid: UUID
    status: str
    description: str
    entry: datetime
    id: Optional[int] = None
    modified: Optional[datetime] = None
    scheduled: Optional[datetime] = None
    due: Optional[datetime] = None
    until: Optional[datetime] = None
    start: Optional[datetime] = None
    end: Optional[datetime] = None
    wait: Optional[datetime] = None
    priority: Optional[str] = None
    project: Optional[str] = None
    recur: Optional[str] = None
    parent: Optional[str] = None
    mask: Optional[str] = None
    imask: Optional[str] = None
    urgency: Optional[float] = None
    depends: Optional[list[UUID]] = None
    tags: Optional[list[str]] = None
    annotations: Optional[list[tuple[datetime, str]]] = None
    uda: dict[str, UdaValue] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping) -> "Task":
        """Build a Task from one decoded JSON object of ``task export``."""
        if not isinstance(data, Mapping):
            raise ValueError(f"task must be a JSON object, got {data!r}")

        status = _require(data, "status")
        if status not in _STATUS_NAMES:
            raise ValueError(f"unknown task status: {status!r}")
        description = _require(data, "description")
        if not isinstance(description, str):
            raise ValueError(f"description must be a string, got {description!r}")

        task = cls(
            uuid=_parse_uuid(_require(data, "uuid"), "uuid"),
            status=status,
            description=description,
            entry=_parse_date(_require(data, "entry"), "entry"),
        )

        if "id" in data:
            task_id = data["id"]
            if isinstance(task_id, bool) or not isinstance(task_id, int) or task_id < 0:
                raise ValueError(f"id must be a non-negative integer, got {task_id!r}")
            task.id = task_id

        for key in _DATE_FIELDS:
            if key in data:
                setattr(task, key, _parse_date(data[key], key))

        for key in _STRING_FIELDS:
            if key in data:
                if not isinstance(data[key], str):
                    raise ValueError(f"{key} must be a string, got {data[key]!r}")
                setattr(task, key, data[key])

        if "urgency" in data:
            urgency = data["urgency"]
            if isinstance(urgency, bool) or not isinstance(urgency, (int, float)):
                raise ValueError(f"urgency must be a number, got {urgency!r}")
            task.urgency = float(urgency)

        if "depends" in data:
            depends = data["depends"]
            if isinstance(depends, str):
                depends = [d for d in depends.split(",") if d]
            if not isinstance(depends, list):
                raise ValueError(f"depends must be a list, got {depends!r}")
            task.depends = [_parse_uuid(d, "depends") for d in depends]

        if "tags" in data:
            tags = data["tags"]
            if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
                raise ValueError(f"tags must be a list of strings, got {tags!r}")
            task.tags = list(tags)

        if "annotations" in data:
            annotations = data["annotations"]
            if not isinstance(annotations, list):
                raise ValueError(f"annotations must be a list, got {annotations!r}")
            parsed = []
            for annotation in annotations:
                if not isinstance(annotation, Mapping):
                    raise ValueError(f"annotation must be an object, got {annotation!r}")
                text = _require(annotation, "description")
                if not isinstance(text, str):
                    raise ValueError(f"annotation description must be a string, got {text!r}")
                parsed.append((_parse_date(_require(annotation, "entry"), "annotation entry"), text))
            task.annotations = parsed

        task.uda = {key: _parse_uda(key, value) for key, value in data.items() if key not in _KNOWN_FIELDS}
        return task


def import_tasks(data: Union[str, bytes]) -> list[Task]:
    """Decode the JSON array written by ``task export``."""
    decoded = json.loads(data)
    if not isinstance(decoded, list):
        raise ValueError("task export must be a JSON array")
    return [Task.from_dict(item) for item in decoded]


def is_duration_field(attribute: str) -> bool:
    """Whether a UDA name looks like it holds a duration in seconds."""
    return (
        "time" in attribute
        or "duration" in attribute
        or attribute.endswith(("activetime", "totaltime", "worktime", "elapsed"))
        or attribute in ("totalactivetime", "totaltime")
    )


def _utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _task_show(key: str) -> str:
    result = subprocess.run(
        ["task", "show", "rc.defaultwidth=0", key],
        capture_output=True,
        check=False,
    )
    return result.stdout.decode("utf-8", errors="replace")


def _setting_values(text: str, key: str) -> list[str]:
    values: list[str] = []
    for line in text.split("\n"):
        if line.startswith(key):
            _, sep, rest = line.partition(" ")
            if not sep:
                raise ValueError(f"no value for {key} on line {line!r}")
            values.extend(rest.split(","))
    return values


def _default_label(column: str) -> str:
    label = column.split(".")[0]
    if label == "id":
        label = "ID"
    return label[:1].upper() + label[1:]


def _truncate_to_width(text: str, max_width: int) -> str:
    width = 0
    for index, ch in enumerate(text):
        w = max(wcwidth(ch), 0)
        if width + w > max_width:
            return text[:index]
        width += w
    return text


def _float_to_string(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        if value == 0 and math.copysign(1.0, value) < 0:
            return "-0"
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _saturating_i64(value: float) -> int:
    if math.isnan(value):
        return 0
    if math.isinf(value):
        return _I64_MAX if value > 0 else _I64_MIN
    return min(max(int(value), _I64_MIN), _I64_MAX)


def _wrap_i64(value: int) -> int:
    value &= _U64_MAX
    return value - 2**64 if value > _I64_MAX else value


class TaskReportTable:
    """Columns and labels of a report, and the rows rendered for its tasks."""

    def __init__(
        self,
        data: Optional[str],
        report: str,
        labels_data: Optional[str] = None,
        now: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.labels: list[str] = []
        self.columns: list[str] = []
        self.tasks: list[list[str]] = [[]]
        self.virtual_tags: list[str] = list(VIRTUAL_TAGS)
        self.description_width = 100
        self.date_time_vague_precise = False
        self.duration_human_readable = True
        self._now = now if now is not None else _utc_now
        self.export_headers(data, report, labels_data)

    def export_headers(self, data: Optional[str], report: str, labels_data: Optional[str] = None) -> None:
        """Read the report's columns and labels; ask ``task show`` for what is not given."""
        columns_key = f"report.{report}.columns"
        labels_key = f"report.{report}.labels"
        if data is None:
            data = _task_show(columns_key)
        if labels_data is None:
            labels_data = _task_show(labels_key)

        self.columns = _setting_values(data, columns_key)
        self.labels = _setting_values(labels_data, labels_key)

        if not self.labels:
            self.labels = [label for label in map(_default_label, self.columns) if label]

        if len(self.labels) != len(self.columns):
            raise ValueError(
                f"Must have the same number of labels (currently {len(self.labels)}) and columns "
                f"(currently {len(self.columns)}). Compare their values as shown by "
                f'"task show report.{report}." and fix your taskwarrior config.'
            )

    def generate_table(self, tasks: Sequence[Task]) -> None:
        """Render every task as one row of strings, one per column."""
        if not self.columns:
            self.tasks = []
            return
        self.tasks = [[self.get_string_attribute(name, task, tasks) for name in self.columns] for task in tasks]

    def simplify_table(self) -> tuple[list[list[str]], list[str]]:
        """Rows and headers without the columns that are empty for every task."""
        if not self.tasks:
            return [], []
        filled = [False] * len(self.tasks[0])
        for row in self.tasks:
            for index, cell in enumerate(row):
                if cell and index < len(filled):
                    filled[index] = True

        def keep(index: int) -> bool:
            return index < len(filled) and filled[index]

        rows = [[cell for index, cell in enumerate(row) if keep(index)] for row in self.tasks]
        headers = [label for index, label in enumerate(self.labels) if keep(index)]
        return rows, headers

    def _until(self, value: Optional[datetime]) -> str:
        if value is None:
            return ""
        return vague_format_date_time(self._now(), value, self.date_time_vague_precise)

    def _since(self, value: Optional[datetime]) -> str:
        if value is None:
            return ""
        return vague_format_date_time(value, self._now(), self.date_time_vague_precise)

    @staticmethod
    def _date(value: Optional[datetime]) -> str:
        return "" if value is None else format_date(value)

    def _visible_tags(self, task: Task) -> list[str]:
        return [tag for tag in task.tags or () if tag not in self.virtual_tags]

    @staticmethod
    def _annotation_count(task: Task) -> str:
        return "" if task.annotations is None else f"[{len(task.annotations)}]"

    def _truncated(self, description: str, width: int) -> str:
        truncated = _truncate_to_width(description, width)
        return truncated if truncated == description else truncated + "\u2026"

    def _uda_string(self, attribute: str, task: Task) -> str:
        value = task.uda.get(attribute)
        if value is None:
            return ""
        as_duration = self.duration_human_readable and is_duration_field(attribute)
        precise = self.date_time_vague_precise
        if isinstance(value, str):
            if as_duration and _I64_TEXT.fullmatch(value):
                seconds = int(value)
                if _I64_MIN <= seconds <= _I64_MAX:
                    return format_duration(seconds, precise)
            return value
        if isinstance(value, int):
            return format_duration(_wrap_i64(value), precise) if as_duration else str(value)
        return format_duration(_saturating_i64(value), precise) if as_duration else _float_to_string(value)

    def _depends_ids(self, task: Task, tasks: Sequence[Task]) -> str:
        ids = []
        for dependency in task.depends or ():
            match = next((t for t in tasks if t.uuid == dependency), None)
            if match is None:
                continue
            if match.id is None:
                raise ValueError(f"dependency {dependency} has no id")
            ids.append(str(match.id))
        return " ".join(ids)

    def get_string_attribute(self, attribute: str, task: Task, tasks: Sequence[Task]) -> str:
        """The text shown for ``attribute`` of ``task`` in a report column."""
        match attribute:
            case "id":
                return str(task.id or 0)
            case "scheduled.relative" | "scheduled.countdown":
                return self._until(task.scheduled)
            case "scheduled":
                return self._date(task.scheduled)
            case "due.relative":
                return self._until(task.due)
            case "due":
                return self._date(task.due)
            case "until.remaining":
                return self._until(task.until)
            case "until":
                return self._date(task.until)
            case "entry.age":
                return self._since(task.entry)
            case "entry":
                return self._date(task.entry)
            case "start.age":
                return self._since(task.start)
            case "start":
                return self._date(task.start)
            case "end.age":
                return self._since(task.end)
            case "end":
                return self._date(task.end)
            case "status.short":
                return _STATUS_NAMES[task.status][0]
            case "status":
                return _STATUS_NAMES[task.status]
            case "priority":
                return task.priority or ""
            case "project":
                return task.project or ""
            case "depends.count":
                return str(len(task.depends)) if task.depends else ""
            case "depends":
                return self._depends_ids(task, tasks) if task.depends else ""
            case "tags.count":
                count = len(self._visible_tags(task))
                return str(count) if count else ""
            case "tags":
                return ",".join(self._visible_tags(task))
            case "recur":
                return task.recur or ""
            case "wait":
                return self._since(task.wait)
            case "wait.remaining":
                return self._until(task.wait)
            case "description.count":
                return f"{task.description} {self._annotation_count(task)}"
            case "description.truncated_count":
                count = self._annotation_count(task)
                width = self.description_width
                if width >= len(count):
                    width -= len(count)
                return self._truncated(task.description, width) + count
            case "description.truncated":
                return self._truncated(task.description, self.description_width)
            case "description.desc" | "description":
                return task.description
            case "urgency":
                return "0.00" if task.urgency is None else f"{task.urgency:.2f}"
            case _:
                return self._uda_string(attribute, task)