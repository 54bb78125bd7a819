"""Application settings read from ``task show`` output."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

from .scrollbar import DOUBLE_VERTICAL, FULL_BLOCK
from .style import Modifier, Style, parse_bool, parse_tcolor

_UDA = "uda.taskwarrior-tui."
_UINT = re.compile(r"\+?[0-9]+")
_UINT_MAX = 2**64 - 1


class ConfigError(ValueError):
    """Raised when a required setting is missing from the configuration."""


def _strip_repeated_prefix(line: str, prefix: str) -> str:
    while prefix and line.startswith(prefix):
        line = line[len(prefix):]
    return line


def get_config(config: str, data: str) -> Optional[str]:
    """Value of ``config`` in ``data``, joining indented continuation lines."""
    alternate = config.replace("-", "_")
    parts: list[str] = []
    for line in data.split("\n"):
        if not parts:
            if line.startswith(config):
                parts.append(_strip_repeated_prefix(line, config).strip())
            elif line.startswith(alternate):
                parts.append(_strip_repeated_prefix(line, alternate).strip())
        else:
            if not line.startswith("   "):
                return " ".join(parts)
            parts.append(line.strip())
    return " ".join(parts) if parts else None


def get_color_collection(data: str) -> dict[str, Style]:
    """Styles of every ``color.*`` setting in ``data``."""
    colors: dict[str, Style] = {}
    for line in data.split("\n"):
        if line.startswith("color."):
            attribute, *rest = line.split(" ")
            spec = " ".join(rest).lstrip(" ")
            colors[attribute] = parse_tcolor(spec)
    return colors


def _parse_uint(text: Optional[str], default: int) -> int:
    if text is not None and _UINT.fullmatch(text):
        value = int(text)
        if value <= _UINT_MAX:
            return value
    return default


def _indicator(value: Optional[str], default: str) -> str:
    return default if value is None else f"{value} "


def _first_char(value: Optional[str], default: str) -> str:
    if value is None:
        return default
    return value[:1] or default


@dataclass
class Config:
    """Every setting the interface reads, with its default."""

    enabled: bool = True
    color: dict[str, Style] = field(default_factory=dict)
    filter: str = ""
    data_location: str = ""
    obfuscate: bool = False
    print_empty_columns: bool = False
    due: int = 7
    weekstart: bool = False
    rule_precedence_color: list[str] = field(default_factory=list)
    uda_priority_values: list[str] = field(default_factory=list)
    uda_tick_rate: int = 250
    uda_auto_insert_double_quotes_on_add: bool = True
    uda_auto_insert_double_quotes_on_annotate: bool = True
    uda_auto_insert_double_quotes_on_log: bool = True
    uda_prefill_task_metadata: bool = False
    uda_reset_filter_on_esc: bool = True
    uda_task_detail_prefetch: int = 10
    uda_task_report_use_all_tasks_for_completion: bool = False
    uda_task_report_show_info: bool = True
    uda_task_report_looping: bool = True
    uda_task_report_jump_to_task_on_add: bool = True
    uda_selection_indicator: str = "\u2022 "
    uda_mark_highlight_indicator: str = "\u29bf "
    uda_unmark_highlight_indicator: str = "\u29be "
    uda_mark_indicator: str = "\u2714 "
    uda_unmark_indicator: str = "  "
    uda_scrollbar_indicator: str = FULL_BLOCK
    uda_scrollbar_area: str = DOUBLE_VERTICAL
    uda_style_report_scrollbar: Style = field(default_factory=lambda: Style(fg="black"))
    uda_style_report_scrollbar_area: Style = field(default_factory=Style)
    uda_backend: str = "taskchampion"
    uda_taskchampion_data_dir: Optional[str] = None
    uda_taskchampion_server_config: Optional[str] = None
    uda_selection_bold: bool = True
    uda_selection_italic: bool = False
    uda_selection_dim: bool = False
    uda_selection_blink: bool = False
    uda_selection_reverse: bool = False
    uda_calendar_months_per_row: int = 4
    uda_style_context_active: Style = field(default_factory=Style)
    uda_style_report_selection: Style = field(default_factory=Style)
    uda_style_calendar_title: Style = field(default_factory=Style)
    uda_style_calendar_today: Style = field(default_factory=lambda: Style(modifier=Modifier.BOLD))
    color_calendar_due_today: Optional[Style] = field(default_factory=lambda: Style(fg="black", bg="yellow"))
    color_calendar_overdue: Optional[Style] = field(default_factory=lambda: Style(fg="white", bg="red"))
    color_calendar_holiday: Optional[Style] = None
    color_calendar_weekend: Optional[Style] = field(default_factory=lambda: Style(fg="dark_gray"))
    uda_style_navbar: Style = field(default_factory=lambda: Style(modifier=Modifier.REVERSED))
    uda_style_command: Style = field(default_factory=lambda: Style(modifier=Modifier.REVERSED))
    uda_style_report_completion_pane: Style = field(
        default_factory=lambda: Style(fg="black", bg=(223, 223, 223))
    )
    uda_style_report_completion_pane_highlight: Style = field(
        default_factory=lambda: Style(fg="black", bg=(223, 223, 223))
    )
    uda_shortcuts: list[str] = field(default_factory=lambda: [""] * 10)
    uda_change_focus_rotate: bool = False
    uda_background_process: str = ""
    uda_background_process_period: int = 60
    uda_quick_tag_name: str = "next"
    uda_task_report_prompt_on_undo: bool = False
    uda_task_report_prompt_on_delete: bool = False
    uda_task_report_prompt_on_done: bool = False
    uda_task_report_date_time_vague_more_precise: bool = False
    uda_task_report_duration_human_readable: bool = True
    uda_context_menu_select_on_move: bool = False
    uda: list = field(default_factory=list)


def _get_filter(data: str, report: str) -> str:
    if report == "all":
        return ""
    custom = get_config(f"{_UDA}task-report.{report}.filter", data)
    if custom is not None:
        return custom
    return get_config(f"report.{report}.filter", data) or ""


def _required(key: str, data: str) -> str:
    value = get_config(key, data)
    if value is None:
        raise ConfigError(f"Unable to parse `task show {key}`.")
    return value


def load_config(data: str, report: str) -> Config:
    """Build a Config from ``task show`` output for the given report."""

    def uda(key: str) -> Optional[str]:
        return get_config(_UDA + key, data)

    def flag(key: str, default: bool) -> bool:
        parsed = parse_bool(uda(key) or "")
        return default if parsed is None else parsed

    def number(key: str, default: int) -> int:
        return _parse_uint(uda(key), default)

    def style(key: str, default: Style) -> Style:
        value = uda(f"style.{key}")
        return default if value is None else parse_tcolor(value)

    defaults = Config()
    color = get_color_collection(data)

    raw_filter = _get_filter(data, report)
    report_filter = raw_filter if not raw_filter.strip() else f"{raw_filter} "

    completion_pane = style("report.completion-pane", defaults.uda_style_report_completion_pane)

    return Config(
        enabled=True,
        color=color,
        filter=report_filter,
        data_location=_required("data.location", data),
        obfuscate=False,
        print_empty_columns=False,
        due=_parse_uint(get_config("due", data), 7),
        weekstart=(get_config("weekstart", data) or "").lower() == "monday",
        rule_precedence_color=_required("rule.precedence.color", data).split(","),
        uda_priority_values=_required("uda.priority.values", data).split(","),
        uda_tick_rate=number("tick-rate", 250),
        uda_auto_insert_double_quotes_on_add=flag("task-report.auto-insert-double-quotes-on-add", True),
        uda_auto_insert_double_quotes_on_annotate=flag("task-report.auto-insert-double-quotes-on-annotate", True),
        uda_auto_insert_double_quotes_on_log=flag("task-report.auto-insert-double-quotes-on-log", True),
        uda_prefill_task_metadata=flag("task-report.pre-fill-task-meta-data", False),
        uda_reset_filter_on_esc=flag("task-report.reset-filter-on-esc", True),
        uda_task_detail_prefetch=number("task-report.task-detail-prefetch", 10),
        uda_task_report_use_all_tasks_for_completion=flag("task-report.use-all-tasks-for-completion", False),
        uda_task_report_show_info=flag("task-report.show-info", True),
        uda_task_report_looping=flag("task-report.looping", True),
        uda_task_report_jump_to_task_on_add=flag("task-report.jump-to-task-on-add", True),
        uda_selection_indicator=_indicator(uda("selection.indicator"), defaults.uda_selection_indicator),
        uda_mark_highlight_indicator=_indicator(
            uda("mark-selection.indicator"), defaults.uda_mark_highlight_indicator
        ),
        uda_unmark_highlight_indicator=_indicator(
            uda("unmark-selection.indicator"), defaults.uda_unmark_highlight_indicator
        ),
        uda_mark_indicator=_indicator(uda("mark.indicator"), defaults.uda_mark_indicator),
        uda_unmark_indicator=_indicator(uda("unmark.indicator"), defaults.uda_unmark_indicator),
        uda_scrollbar_indicator=_first_char(uda("scrollbar.indicator"), FULL_BLOCK),
        uda_scrollbar_area=_first_char(uda("scrollbar.area"), DOUBLE_VERTICAL),
        uda_style_report_scrollbar=style("report.scrollbar", defaults.uda_style_report_scrollbar),
        uda_style_report_scrollbar_area=style("report.scrollbar.area", Style()),
        uda_backend=uda("backend") if uda("backend") is not None else defaults.uda_backend,
        uda_taskchampion_data_dir=uda("taskchampion.data-dir"),
        uda_taskchampion_server_config=uda("taskchampion.server-config"),
        uda_selection_bold=flag("selection.bold", True),
        uda_selection_italic=flag("selection.italic", False),
        uda_selection_dim=flag("selection.dim", False),
        uda_selection_blink=flag("selection.blink", False),
        uda_selection_reverse=flag("selection.reverse", False),
        uda_calendar_months_per_row=number("calendar.months-per-row", 4),
        uda_style_context_active=style("context.active", Style()),
        uda_style_report_selection=style("report.selection", Style()),
        uda_style_calendar_title=style("calendar.title", Style()),
        uda_style_calendar_today=style("calendar.today", defaults.uda_style_calendar_today),
        color_calendar_due_today=color.get("color.calendar.due.today", defaults.color_calendar_due_today),
        color_calendar_overdue=color.get("color.calendar.overdue", defaults.color_calendar_overdue),
        color_calendar_holiday=color.get("color.calendar.holiday"),
        color_calendar_weekend=color.get("color.calendar.weekend", defaults.color_calendar_weekend),
        uda_style_navbar=style("navbar", defaults.uda_style_navbar),
        uda_style_command=style("command", defaults.uda_style_command),
        uda_style_report_completion_pane=completion_pane,
        uda_style_report_completion_pane_highlight=style("report.completion-pane-highlight", completion_pane),
        uda_shortcuts=[uda(f"shortcuts.{i}") or "" for i in range(10)],
        uda_change_focus_rotate=flag("tabs.change-focus-rotate", False),
        uda_background_process=uda("background_process") or "",
        uda_background_process_period=number("background_process_period", 60),
        uda_quick_tag_name=uda("quick-tag.name") if uda("quick-tag.name") is not None else "next",
        uda_task_report_prompt_on_undo=flag("task-report.prompt-on-undo", False),
        uda_task_report_prompt_on_delete=flag("task-report.prompt-on-delete", False),
        uda_task_report_prompt_on_done=flag("task-report.prompt-on-done", False),
        uda_task_report_date_time_vague_more_precise=flag("task-report.date-time-vague-more-precise", False),
        uda_task_report_duration_human_readable=flag("task-report.duration-human-readable", True),
        uda_context_menu_select_on_move=flag("context-menu.select-on-move", False),
        uda=[],
    )