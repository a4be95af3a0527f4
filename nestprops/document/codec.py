"""
Escaping, quoting and trimming helpers for property values.

Escaping and unescaping are not inverses: escape() is only used when
rendering, unescape() and unquote() only when parsing. Byte-exact round
trips go through the whitespace captured on each LineRecord instead.
"""

from dataclasses import dataclass

from ..const import CONTINUATION_INDENT, LINE_CONTINUATION, QUOTES, WHITESPACE


@dataclass(frozen=True)
class Trimmed:
    """
    Result of trim(): the core text plus the whitespace cut from each side.

    Joining ``leading + core + trailing`` always gives back the input.
    """

    core: str
    leading: str = ""
    trailing: str = ""


def trim(text: str) -> Trimmed:
    """Trim whitespace on both sides, keeping what was removed."""
    core = text.strip(WHITESPACE)
    if not core:
        # Whitespace-only input is kept as leading so nothing is lost
        return Trimmed("", text, "")

    start = len(text) - len(text.lstrip(WHITESPACE))
    end = start + len(core)
    return Trimmed(core, text[:start], text[end:])


def trim_right(text: str) -> str:
    return text.rstrip(WHITESPACE)


def ends_with(text: str, char: str) -> bool:
    """Check if ``char`` is the last non-whitespace character of ``text``."""
    stripped = text.rstrip(WHITESPACE)
    return bool(stripped) and stripped[-1] == char


def is_continued(text: str) -> bool:
    """A value whose last non-whitespace character is a backslash continues on the next line."""
    return ends_with(text, LINE_CONTINUATION)


def drop_continuation(text: str) -> str:
    """Remove the trailing continuation backslash and the whitespace before it."""
    return trim_right(trim_right(text)[:-1])


def escape(value: str) -> str:
    """
    Escape a value for output.

    Leading whitespace is backslash-escaped so it survives parsing, and
    embedded newlines become continuation lines indented by four spaces.

    Example:
        escape("  x") -> "\\ \\ x"
    """
    stripped = value.lstrip(WHITESPACE)
    if not stripped:
        return value

    leading = value[: len(value) - len(stripped)]
    escaped = "".join(LINE_CONTINUATION + char for char in leading)
    return escaped + stripped.replace("\n", LINE_CONTINUATION + "\n" + CONTINUATION_INDENT)


def unescape(token: str) -> str:
    """
    Undo leading-whitespace escaping.

    Consumes ``\\<char>`` pairs from the start of the token; the first pair
    not led by a backslash ends the escaped run and the rest is kept as is.
    """
    if len(token) < 2 or token[0] != LINE_CONTINUATION:
        return token

    result = []
    pos = 0
    while pos < len(token) - 1 and token[pos] == LINE_CONTINUATION:
        result.append(token[pos + 1])
        pos += 2

    result.append(token[pos:])
    return "".join(result)


def unquote(token: str) -> str:
    """
    Strip one layer of matching single or double quotes.

    Only one layer is removed, so ``""x""`` yields ``"x"``.
    """
    if len(token) > 2 and token[0] in QUOTES and token[-1] == token[0]:
        return token[1:-1]
    return token


def split_lines(text: str) -> tuple[list[str], bool]:
    """
    Split text on newlines.

    Returns the lines without their terminators and whether the text ended
    with a newline. Carriage returns stay part of the line.
    """
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
        return lines, True
    return lines, False
