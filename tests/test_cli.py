import pytest

from taskwarrior_tui.cli import build_parser


def test_defaults_are_unset():
    args = build_parser().parse_args([])
    assert args.data is None
    assert args.config is None
    assert args.taskdata is None
    assert args.taskrc is None
    assert args.report is None


def test_short_options():
    args = build_parser().parse_args(["-d", "datadir", "-c", "confdir", "-r", "list"])
    assert args.data == "datadir"
    assert args.config == "confdir"
    assert args.report == "list"


def test_long_options():
    args = build_parser().parse_args(
        ["--data", "d1", "--config", "c1", "--taskdata", "t1", "--taskrc", "rcfile", "--report", "next"]
    )
    assert (args.data, args.config, args.taskdata, args.taskrc, args.report) == (
        "d1",
        "c1",
        "t1",
        "rcfile",
        "next",
    )


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--version"])
    assert excinfo.value.code == 0
    assert "0.26.4" in capsys.readouterr().out


def test_unknown_option_is_rejected():
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["--nope"])
    assert excinfo.value.code == 2


def test_prog_name():
    assert build_parser().prog == "taskwarrior-tui"