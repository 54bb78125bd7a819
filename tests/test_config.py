import pytest

from taskwarrior_tui.config import Config, ConfigError, get_color_collection, get_config, load_config
from taskwarrior_tui.style import Modifier, Style, parse_tcolor

BASE = "\n".join(
    [
        "data.location ~/.task",
        "rule.precedence.color deleted,completed,active",
        "uda.priority.values H,M,L,",
    ]
)


def make(*lines, report="next"):
    return load_config("\n".join([BASE, *lines]), report)


def test_get_config_long_value():
    config = get_config(
        "report.test.filter",
        "report.test.description test\nreport.test.filter filter and\n                   test\nreport.test.columns=id",
    )
    assert config == "filter and test"


def test_get_config_long_value_followed_by_default_value():
    config = get_config(
        "report.test.filter",
        "report.test.description test\nreport.test.filter filter and\n                   test\n  Default value test",
    )
    assert config == "filter and test"


def test_get_config_last_long_value():
    config = get_config(
        "report.test.filter",
        "report.test.description test\nreport.test.filter filter and\n                   test",
    )
    assert config == "filter and test"


def test_get_config_missing():
    assert get_config("report.other.filter", "report.test.filter x") is None


def test_get_config_underscore_alternative():
    assert get_config("uda.taskwarrior-tui.tick-rate", "uda.taskwarrior_tui.tick_rate 100") == "100"


def test_color_collection():
    colors = get_color_collection("color.due red on blue\nother x\ncolor.active   bold white")
    assert colors == {
        "color.due": parse_tcolor("red on blue"),
        "color.active": parse_tcolor("bold white"),
    }
    assert colors["color.due"].fg == 1
    assert colors["color.due"].bg == 4


def test_required_settings():
    with pytest.raises(ConfigError, match="data.location"):
        load_config("rule.precedence.color a\nuda.priority.values H", "next")
    with pytest.raises(ConfigError, match="rule.precedence.color"):
        load_config("data.location x\nuda.priority.values H", "next")
    with pytest.raises(ConfigError, match="uda.priority.values"):
        load_config("data.location x\nrule.precedence.color a", "next")


def test_defaults():
    config = make()
    assert config.data_location == "~/.task"
    assert config.rule_precedence_color == ["deleted", "completed", "active"]
    assert config.uda_priority_values == ["H", "M", "L", ""]
    assert config.due == 7
    assert config.weekstart is False
    assert config.uda_tick_rate == 250
    assert config.uda_task_detail_prefetch == 10
    assert config.uda_calendar_months_per_row == 4
    assert config.uda_background_process_period == 60
    assert config.uda_quick_tag_name == "next"
    assert config.uda_selection_indicator == "\u2022 "
    assert config.uda_mark_indicator == "\u2714 "
    assert config.uda_unmark_indicator == "  "
    assert config.uda_scrollbar_indicator == "\u2588"
    assert config.uda_scrollbar_area == "\u2551"
    assert config.uda_shortcuts == [""] * 10
    assert config.uda_backend == "taskchampion"
    assert config.uda_style_navbar == Style(modifier=Modifier.REVERSED)
    assert config.uda_style_calendar_today == Style(modifier=Modifier.BOLD)
    assert config.uda_style_report_completion_pane_highlight == config.uda_style_report_completion_pane
    assert config.color_calendar_holiday is None
    assert config.uda_reset_filter_on_esc is True
    assert config.uda_selection_bold is True


def test_filter_from_report_gets_trailing_space():
    config = make("report.next.filter status:pending limit:page")
    assert config.filter == "status:pending limit:page "


def test_filter_prefers_uda_override():
    config = make(
        "report.next.filter status:pending",
        "uda.taskwarrior-tui.task-report.next.filter +work",
    )
    assert config.filter == "+work "


def test_filter_all_report_is_empty():
    assert make("report.all.filter status:pending", report="all").filter == ""


def test_filter_missing_is_empty():
    assert make(report="nothing").filter == ""


def test_numbers_and_bools():
    config = make(
        "due 3",
        "weekstart monday",
        "uda.taskwarrior-tui.tick-rate 100",
        "uda.taskwarrior-tui.task-report.looping no",
        "uda.taskwarrior-tui.selection.italic yes",
        "uda.taskwarrior-tui.calendar.months-per-row bad",
    )
    assert config.due == 3
    assert config.weekstart is True
    assert config.uda_tick_rate == 100
    assert config.uda_task_report_looping is False
    assert config.uda_selection_italic is True
    assert config.uda_calendar_months_per_row == 4


def test_indicators_and_shortcuts():
    config = make(
        "uda.taskwarrior-tui.selection.indicator >",
        "uda.taskwarrior-tui.scrollbar.indicator ##",
        "uda.taskwarrior-tui.shortcuts.1 ~/bin/script.sh",
        "uda.taskwarrior-tui.quick-tag.name urgent",
    )
    assert config.uda_selection_indicator == "> "
    assert config.uda_scrollbar_indicator == "#"
    assert config.uda_shortcuts[1] == "~/bin/script.sh"
    assert config.uda_shortcuts[0] == ""
    assert config.uda_quick_tag_name == "urgent"


def test_styles_and_calendar_colors():
    config = make(
        "uda.taskwarrior-tui.style.navbar red on blue",
        "uda.taskwarrior-tui.style.report.completion-pane white on black",
        "color.calendar.holiday black on bright green",
    )
    assert config.uda_style_navbar == Style(fg=1, bg=4)
    assert config.uda_style_report_completion_pane == Style(fg=7, bg=0)
    assert config.uda_style_report_completion_pane_highlight == Style(fg=7, bg=0)
    assert config.color_calendar_holiday == Style(fg=0, bg=10)
    assert config.color["color.calendar.holiday"] == config.color_calendar_holiday


def test_backend_setting():
    config = make(
        "uda.taskwarrior-tui.backend cli",
        "uda.taskwarrior-tui.taskchampion.data-dir /tmp/tc",
    )
    assert config.uda_backend == "cli"
    assert config.uda_taskchampion_data_dir == "/tmp/tc"
    assert config.uda_taskchampion_server_config is None


def test_config_defaults_object():
    assert Config().uda_style_report_scrollbar == Style(fg="black")