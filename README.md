# taskwarrior_tui

Building blocks for a terminal interface to Taskwarrior: reading the
settings that `task show` prints, colour rules, key bindings, report
tables, date and duration formatting, command-line completion, input
history, pane state and a backend that drives the `task` program.

Python 3.10 or later is needed. `CliBackend`, the pane `update_data`
methods and `TaskReportTable` (when it is not given the `task show` text)
run the `task` program, so Taskwarrior must be installed for those. All
other parts work on text and values you pass in.

## Reading settings

`taskwarrior_tui.config.load_config(data, report)` takes the text of
`task show` and a report name and returns a `Config` dataclass. Every
setting not present in the text keeps its default:

```python
from taskwarrior_tui.config import get_config, load_config

data = open("task-show.txt", encoding="utf-8").read()
config = load_config(data, "next")

config.filter                        # report filter, with a trailing space if not empty
config.uda_tick_rate                 # 250 unless uda.taskwarrior-tui.tick-rate is set
config.uda_calendar_months_per_row   # 4 by default

# Values wrapped onto indented lines are joined
get_config("report.test.filter",
           "report.test.filter filter and\n                   test")
# -> "filter and test"
```

`data.location`, `rule.precedence.color` and `uda.priority.values` are
required; if one is missing, `ConfigError` is raised.
`get_color_collection(data)` returns the `Style` of every `color.*`
setting.

## Colours

`taskwarrior_tui.style` has `Style` (foreground, background, `Modifier`
flags) and the parsers for Taskwarrior colour rules:

```python
from taskwarrior_tui.style import Modifier, parse_bool, parse_tcolor

style = parse_tcolor("bold white on bright blue")
style.fg, style.bg                    # (15, 12) - palette indices
Modifier.BOLD in style.modifier       # True

parse_bool("yes")    # True
parse_bool("off")    # False
parse_bool("maybe")  # None
```

`parse_foreground` and `parse_background` parse each half on its own.

## Keys and key bindings

`taskwarrior_tui.keys` defines `KeyCode` (a `KeyKind` and a character or
function-key number), the helpers `char`, `ctrl`, `alt`, `function_key`,
and `Event` with `EventKind` (input, tick, closed). `translate_key(name,
modifiers)` maps a key name such as `"x"`, `"backspace"`, `"enter"` or
`"f5"` plus modifiers (`control`, `alt`, `shift`) to a `KeyCode`.

`taskwarrior_tui.keyconfig.load_key_config(data)` starts from the default
bindings (`q` quit, `j`/`k` down/up, `a` add, `d` done, …) and applies any
single-character `uda.taskwarrior-tui.keyconfig.*` settings. The duplicate
action follows the `edit` binding. `KeyConfig.check()` compares each
binding with the next one in a fixed order and raises `DuplicateKeyError`
when two neighbours are equal.

```python
from taskwarrior_tui.keyconfig import load_key_config
from taskwarrior_tui.keys import char

keys = load_key_config("uda.taskwarrior-tui.keyconfig.quit Q")
assert keys.quit == char("Q")
```

## Reports and time formats

`taskwarrior_tui.task_report` reads `task export` output and renders
report rows:

- `import_tasks(data)` decodes the exported JSON array into `Task` objects
  (`Task.from_dict` for one object); unknown fields become `uda` entries.
- `TaskReportTable(data, report, labels_data=None, now=None)` reads the
  report's columns and labels. Pass both `data` and `labels_data` to avoid
  running `task show`. Labels and columns must match in number, or
  `ValueError` is raised.
- `generate_table(tasks)` fills `tasks` with one row of strings per task,
  `simplify_table()` drops columns that are empty for every task, and
  `get_string_attribute(attribute, task, tasks)` renders a single column.
- `is_duration_field(name)` tells which user-defined attributes are shown
  as durations.

`taskwarrior_tui.timefmt` holds the formatters:

```python
from taskwarrior_tui.timefmt import format_duration

format_duration(1255, False)  # "20min"
format_duration(1255, True)   # "20min55s"
format_duration(-300, False)  # "-5min"
```

along with `format_date`, `format_date_time` and `vague_format_date_time`.

## Completion and history

`CompletionList` holds `(context, candidate)` pairs and offers those that
match the word being typed:

```python
from taskwarrior_tui.completion import CompletionList

completions = CompletionList([("project", "Home"), ("project", "Work")])
completions.input("project:H", "add project:H")
[c.replacement for c in completions.candidates()]   # ["Home"]
```

`next`, `previous`, `unselect` and `selected` move through the list;
`get_start_word_under_cursor(line, pos)` finds where the current word
starts.

`HistoryContext(filename, data_dir=None)` keeps a command history in a
file under `TASKWARRIOR_TUI_DATA` or the user data directory
(`default_data_dir()`). `load`, `write`, `add` and
`history_search(prefix, SearchDirection.REVERSE)` manage and search it.

## Tables, scrollbar and panes

- `table_state.TableState` tracks the selected row, marked rows,
  single or multiple selection (`TableMode`) and the scroll offset
  (`scroll_to_selection`).
- `scrollbar.Scrollbar(pos, length).render(width, height)` returns the
  `Cell`s of a vertical scrollbar in the right-hand column.
- `panes.parse_contexts(data)` parses `task context` output;
  `ContextsState` and `ProjectsState` hold the state of the context and
  project panes, including the project filter built from marked projects
  (`ProjectsState.pattern_by_marked`).

## Command-line options

`cli.build_parser()` returns an `argparse` parser with `--data`,
`--config`, `--taskdata`, `--taskrc`, `--report` and `--version`.

## Talking to Taskwarrior

`backend.create_backend(BackendConfig())` returns a `CliBackend`, which
runs `task` for each operation: `export_tasks`, `add_task`, `mark_done`,
`delete_tasks`, `modify_tasks`, `get_task_details` and `sync`. It reads
the Taskwarrior version on creation (`get_taskwarrior_version`,
`parse_taskwarrior_version`) and builds export commands suited to it
(`build_export_command`). A failing `task` command raises `BackendError`
with Taskwarrior's error output. `CliBackend(version=..., runner=...)`
accepts a fixed version and a command runner in place of the real program.

## What this package does not do

There is no interactive screen, event loop or calendar and help view, and
no installed command: `build_parser` only parses options. Only the
command-line backend exists; asking `create_backend` for
`BackendKind.TASKCHAMPION` raises `BackendError`, even though
`Config.uda_backend` defaults to `"taskchampion"`.

## Running the tests

Install the package with its `test` extra and run `pytest` in the project
directory.