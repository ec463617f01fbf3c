import pytest

from rtfm.highlight import (
    BLUE,
    GREEN,
    MAGENTA,
    YELLOW,
    Span,
    Style,
    search_highlight,
    syntax_highlight,
)


def _text(spans):
    return "".join(span.text for span in spans)


@pytest.mark.parametrize("line", ["", "    ", "\t"])
def test_blank_line_is_kept(line):
    assert syntax_highlight(line) == [Span(line)]


def test_heading_is_bold_yellow():
    spans = syntax_highlight("NAME: ls")
    assert spans[0] == Span("NAME:", Style(fg=YELLOW, bold=True))
    assert spans[2] == Span("ls")


def test_leading_option_is_bold_green():
    spans = syntax_highlight("-a, --all do not ignore")
    assert spans[0].style == Style(fg=GREEN, bold=True)
    assert spans[2] == Span("--all", Style(fg=GREEN))


def test_brackets_and_angles():
    spans = syntax_highlight("ls [OPTION] <file>")
    assert spans[2] == Span("[OPTION]", Style(fg=MAGENTA))
    assert spans[4] == Span("<file>", Style(fg=BLUE))


def test_plain_first_word_has_default_style():
    spans = syntax_highlight("list directory contents")
    assert all(span.style == Style() for span in spans)


@pytest.mark.parametrize(
    "line", ["  ls   -l  [dir]", "NAME:\tgrep", "-v   --verbose <x> y"]
)
def test_text_is_words_joined_by_single_space(line):
    assert _text(syntax_highlight(line)) == " ".join(line.split())


def test_separators_alternate_with_words():
    spans = syntax_highlight("a b c d")
    assert [span.text for span in spans[1::2]] == [" "] * 3


def test_search_text_round_trips():
    line = "ls lists; ls again ls"
    assert _text(search_highlight(line, "ls", True)) == line


def test_search_marks_each_occurrence():
    line = "grep grep egrep"
    spans = search_highlight(line, "grep", False)
    marked = [span for span in spans if span.style != Style()]
    assert len(marked) == line.count("grep")
    assert all(span.text == "grep" for span in marked)


def test_search_is_case_sensitive():
    spans = search_highlight("LS ls", "ls", True)
    marked = [span for span in spans if span.style != Style()]
    assert len(marked) == 1


def test_current_and_other_match_styles_differ():
    current = search_highlight("x", "x", True)[1].style
    other = search_highlight("x", "x", False)[1].style
    assert current != other
    assert current != Style() and other != Style()


def test_search_without_occurrence_is_plain():
    assert search_highlight("nothing here", "zzz", True) == [Span("nothing here")]


def test_empty_query_is_plain():
    assert search_highlight("abc", "", True) == [Span("abc")]