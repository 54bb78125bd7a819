from taskwarrior_tui.completion import (
    Completion,
    CompletionList,
    get_start_word_under_cursor,
)


def test_start_word_after_space():
    line = "task add foo"
    start = get_start_word_under_cursor(line, len(line))
    assert line[start:] == "foo"


def test_start_word_after_parenthesis():
    line = "(project:ab"
    start = get_start_word_under_cursor(line, len(line))
    assert line[start:] == "project:ab"


def test_start_word_without_break_is_zero():
    assert get_start_word_under_cursor("abc", 3) == 0


def _projects():
    return CompletionList([("project", "home"), ("project", "work"), ("project", "home"), ("+", "+work")])


def test_duplicates_are_dropped():
    completions = _projects()
    assert completions.items.count(("project", "home")) == 1
    completions.insert(("project", "work"))
    assert completions.items.count(("project", "work")) == 1


def test_attribute_context_completion():
    completions = _projects()
    completions.input("project:h", "")
    assert completions.context == "project"
    result = completions.candidates()
    assert [c.replacement for c in result] == ["home"]
    completion = result[0]
    assert completion.original == "h"
    assert completion.before + completion.after == "home"
    assert completions.pos == len("h")


def test_case_insensitive_match():
    completions = _projects()
    completions.input("project:HO", "")
    assert [c.display for c in completions.candidates()] == ["home"]


def test_tag_context():
    completions = _projects()
    completions.input("+wo", "")
    assert completions.context == "+"
    assert completions.current == "+wo"
    assert [c.replacement for c in completions.candidates()] == ["+work"]


def test_candidate_already_in_input_is_skipped():
    completions = _projects()
    completions.input("+wo", "add +work")
    assert completions.is_empty()


def test_modifier_and_attribute_contexts():
    completions = CompletionList([("modifier", ".before"), ("attribute", "project:")])
    completions.input("due.be", "")
    assert completions.context == "modifier"
    assert completions.current == ".be"
    assert [c.replacement for c in completions.candidates()] == [".before"]
    completions.input("pro", "")
    assert completions.context == "attribute"
    assert [c.replacement for c in completions.candidates()] == ["project:"]


def test_next_previous_wrap():
    completions = _projects()
    completions.input("project:", "")
    assert len(completions) == 2
    completions.next()
    assert completions.selected_index == 0
    completions.next()
    completions.next()
    assert completions.selected_index == 0
    completions.previous()
    assert completions.selected_index == len(completions) - 1


def test_selected_get_and_width():
    completions = _projects()
    completions.input("project:", "")
    assert completions.selected() is None
    completions.next()
    pos, completion = completions.selected()
    assert pos == completions.pos
    assert completion == completions.get(0)
    assert isinstance(completion, Completion)
    assert completions.get(len(completions)) is None
    assert completions.max_width() == len("home") + 4


def test_clear_and_unselect():
    completions = _projects()
    completions.input("project:", "")
    completions.next()
    completions.unselect()
    assert completions.selected() is None
    completions.clear()
    assert completions.is_empty()
    assert completions.max_width() is None