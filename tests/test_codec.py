"""
Tests for escaping, quoting and trimming helpers.
"""

from nestprops.document.codec import (
    Trimmed,
    drop_continuation,
    ends_with,
    escape,
    is_continued,
    split_lines,
    trim,
    unescape,
    unquote,
)


def test_trim_keeps_removed_whitespace() -> None:
    assert trim("  ab \t") == Trimmed("ab", "  ", " \t")
    assert trim("ab") == Trimmed("ab", "", "")


def test_trim_whitespace_only() -> None:
    result = trim("   ")

    assert result.core == ""
    assert result.leading + result.core + result.trailing == "   "


def test_escape_leading_whitespace() -> None:
    assert escape("  x") == "\\ \\ x"
    assert escape("\t127.0.0.1") == "\\\t127.0.0.1"
    assert escape("x  ") == "x  "


def test_escape_newlines_become_continuations() -> None:
    assert escape("a\nb") == "a\\\n    b"


def test_escape_blank_values_unchanged() -> None:
    assert escape("") == ""
    assert escape("   ") == "   "


def test_unescape() -> None:
    assert unescape("\\ \\ x") == "  x"
    assert unescape("\\\t127.0.0.1") == "\t127.0.0.1"
    assert unescape("plain") == "plain"
    assert unescape("\\") == "\\"


def test_unescape_stops_at_first_plain_pair() -> None:
    assert unescape("\\ a\\ b") == " a\\ b"


def test_unquote() -> None:
    assert unquote('"abc"') == "abc"
    assert unquote("'abc'") == "abc"
    assert unquote('"  spaced  "') == "  spaced  "


def test_unquote_strips_one_layer_only() -> None:
    assert unquote('""x""') == '"x"'


def test_unquote_leaves_mismatched_or_short_tokens() -> None:
    assert unquote("\"abc'") == "\"abc'"
    assert unquote('""') == '""'
    assert unquote('"') == '"'
    assert unquote("abc") == "abc"


def test_continuation_helpers() -> None:
    assert ends_with("abc  ", "c")
    assert not ends_with("   ", "c")
    assert is_continued("a \\  ")
    assert not is_continued("a")
    assert drop_continuation("a   \\ ") == "a"


def test_split_lines() -> None:
    assert split_lines("a\nb") == (["a", "b"], False)
    assert split_lines("a\nb\n") == (["a", "b"], True)
    assert split_lines("a\r\n") == (["a\r"], True)
    assert split_lines("") == ([], True)
