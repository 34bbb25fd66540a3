import pytest

from glint.domain import MAX_COUNT, StatusSnapshot
from glint.errors import ArithmeticOverflow
from glint.evaluator import Evaluator
from glint.nodes import Group, GroupKind, Literal, Sequence
from glint.parser import parse
from glint.prompt import render_format
from glint.style import StyleEngine

GREEN = "\x1b[0;32m"
RED = "\x1b[0;31m"
DEFAULT = "\x1b[0m"


def _snapshot(**overrides):
    values = {"branch": "main"}
    values.update(overrides)
    return StatusSnapshot(**values)


def _plain(format_string, **overrides):
    return render_format(format_string, _snapshot(**overrides), color=False)


def _styled(format_string, **overrides):
    return Evaluator(_snapshot(**overrides), StyleEngine()).render(parse(format_string)).text


def test_literals_render_verbatim():
    assert _plain("'abc'") == "abc"
    assert _plain("'x'' ''y'") == "x y"
    assert _plain("") == ""


def test_empty_literal_is_empty():
    result = Evaluator(_snapshot()).render(Literal(""))
    assert result.text == ""
    assert result.is_empty


def test_fully_empty_groups_render_nothing():
    assert _plain("\\(\\[\\M\\A]\\{\\h}\\<''>)") == ""
    assert _plain("\\b\\<\\M>") == "main"


def test_group_with_no_elements_is_empty():
    result = Evaluator(_snapshot()).render(Group(GroupKind.SQUARE, Sequence()))
    assert result.is_empty


def test_stash_prefix_override():
    assert _plain("\\h", stashed=3) == "H3"
    assert _plain("\\h('@')", stashed=3) == "@3"
    assert _plain("\\h", stashed=0) == ""
    assert _plain("\\h('@')", stashed=0) == ""


def test_arguments_are_concatenated_into_the_prefix():
    snapshot = dict(upstream="origin/main", ahead=1)
    assert _plain("\\+('a','b')", **snapshot) == "ab1"
    assert _plain("\\+('','b')", **snapshot) == "b1"
    assert _plain("\\b('on ')") == "on main"


def test_empty_arguments_fall_back_to_default_prefix():
    assert _plain("\\h()", stashed=3) == "H3"
    assert _plain("\\h('')", stashed=3) == "H3"
    assert _plain("\\+(\\M)", upstream="origin/main", ahead=2) == "+2"
    assert _plain("\\+(\\M)", upstream="origin/main", ahead=2, staged_modified=1) == "M12"
    assert _plain("\\a('','')", untracked=4) == "?4"


def test_empty_styled_argument_falls_back_without_escapes():
    assert _styled("\\h(#r(''))", stashed=3) == "H3"


def test_status_line_scenario():
    line = _plain(
        "\\<\\b\\(\\+\\-)>\\[\\M\\A\\R\\D]",
        upstream="origin/main",
        ahead=2,
        behind=0,
        staged_modified=1,
    )
    assert line == "<main(+2)>[M1]"


def test_default_prefixes():
    line = _plain(
        "\\u\\A\\a\\M\\m\\D\\d\\R\\h",
        unmerged=1,
        staged_added=2,
        untracked=3,
        staged_modified=4,
        unstaged_modified=5,
        staged_deleted=6,
        unstaged_deleted=7,
        staged_renamed=8,
        stashed=9,
    )
    assert line == "U1A2?3M4M5D6D7R8H9"


def test_ahead_and_behind_need_an_upstream():
    assert _plain("\\+\\-", ahead=3, behind=1) == ""
    assert _plain("\\+\\-", upstream="origin/main", ahead=3, behind=1) == "+3-1"


def test_text_fields():
    assert _plain("\\b \\B") == "main"
    assert _plain("\\b \\B", upstream="origin/main") == "main origin/main"
    assert render_format("\\b", StatusSnapshot.outside_repository(), color=False) == ""


def test_separator_before_a_suppressed_element_is_dropped():
    assert _plain("\\b | \\h | \\M", staged_modified=1) == "main | M1"
    assert _plain("\\b | \\h | \\M", stashed=2) == "main | H2"
    assert _plain("\\h | \\M", staged_modified=1) == "M1"


def test_separator_run_preceding_the_emitted_element_is_used():
    assert _plain("\\b:\\h@\\M", staged_modified=1) == "main@M1"


def test_leading_and_trailing_separators_never_render():
    assert _plain("\\[ \\M]", staged_modified=1) == "[M1]"
    assert _plain("\\b | ") == "main"


def test_nested_groups_cascade_suppression():
    assert _plain("\\b \\(\\[\\h] \\{\\a}) \\M", staged_modified=1) == "main M1"
    assert _plain("\\b \\(\\[\\h] \\{\\a}) \\M", untracked=2) == "main ({?2})"


def test_bare_group_and_escapes():
    assert _plain("\\g(\\b\\h)", stashed=1) == "mainH1"
    assert _plain("\\'\\b\\'\\\\") == "'main'\\"


def test_unicode_text():
    assert _plain("'日本語'\\['試験'#*('テスト')]") == "日本語[試験テスト]"


def test_empty_style_emits_no_escape_codes():
    assert _styled("#r('')") == ""
    assert _styled("\\[#r(\\M)]") == ""


def test_style_wraps_and_restores_default():
    assert _styled("#g(\\b)") == f"{GREEN}main{DEFAULT}"


def test_nested_style_resumes_outer_style():
    expected = f"{GREEN}a\x1b[0;32;1mb{GREEN}c{DEFAULT}"
    assert _styled("#g('a'#*('b')'c')") == expected


def test_reset_drops_inherited_style_on_the_same_node():
    expected = f"{RED}\x1b[0;1mx{RED}{DEFAULT}"
    assert _styled("#r(#~*('x'))") == expected


def test_styled_argument_restores_enclosing_style():
    expected = f"{GREEN}{RED}@{GREEN}2{DEFAULT}"
    assert _styled("#g(\\h(#r('@')))", stashed=2) == expected


def test_no_color_renders_plain_text():
    assert _plain("#g;*(\\b)") == "main"


def test_colored_prompt_is_framed_by_resets():
    assert render_format("'a'#g('b')", _snapshot()) == f"{DEFAULT}a{GREEN}b{DEFAULT}{DEFAULT}"
    assert render_format("\\b", _snapshot()) == f"{DEFAULT}main{DEFAULT}"
    assert render_format("#g(\\M)", _snapshot()) == ""
    assert render_format("\\b", _snapshot(), color=False) == "main"


def test_bash_prompt_escapes():
    text = render_format("#g(\\b)", _snapshot(), bash_prompt=True)
    reset = f"\x01{DEFAULT}\x02"
    assert text == f"{reset}\x01{GREEN}\x02main{reset}{reset}"


def test_black_and_bright_black():
    assert _styled("#k('a')#K('b')") == f"\x1b[0;30ma{DEFAULT}\x1b[0;40mb{DEFAULT}"
    assert _styled("#d('a')#D('b')") == f"\x1b[0;90ma{DEFAULT}\x1b[0;100mb{DEFAULT}"


@pytest.mark.parametrize("count", [MAX_COUNT + 1, -1])
def test_unrepresentable_counts_raise(count):
    try:
        render_format("'x'\\a", _snapshot(untracked=count))
    except ArithmeticOverflow as exc:
        assert exc.offset == 3
        assert exc.source == "'x'\\a"
        assert "untracked" in str(exc)
    else:
        raise AssertionError("expected ArithmeticOverflow to be raised")


def test_largest_count_renders():
    assert _plain("\\a", untracked=MAX_COUNT) == f"?{MAX_COUNT}"


def test_evaluator_uses_given_style_engine():
    evaluator = Evaluator(_snapshot(), StyleEngine(enabled=False))
    assert evaluator.render(parse("#r(\\b)")).text == "main"
