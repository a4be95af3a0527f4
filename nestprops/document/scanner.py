"""
Line classifier and scanner.

Turns the expanded source into LineRecords, one per physical line. Each
record keeps the whitespace around its key and value so the document can
be written back exactly as it was read.

Line kinds:
- EMPTY: blank or whitespace-only
- COMMENT: first non-blank character is # or !
- BLOCK_START / BLOCK_END: a line holding only { or }
- PROPERTY: ``key = value`` or a bare ``key``
- CONTINUATION: follow-up line of a value ending in a backslash
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from ..const import ASSIGNMENT, BLOCK_CLOSE, BLOCK_OPEN, COMMENT_MARKERS, WHITESPACE
from ..logging import get_logger
from .codec import drop_continuation, is_continued, split_lines, trim, unescape, unquote
from .prefix import PrefixResolver


logger = get_logger("scanner")


class LineKind(Enum):
    """Classification of a single line."""

    PROPERTY = auto()
    COMMENT = auto()
    EMPTY = auto()
    CONTINUATION = auto()
    BLOCK_START = auto()
    BLOCK_END = auto()


@dataclass
class LineRecord:
    """
    One line of the document with enough information to render it again.

    ``qualified_key`` is a back-reference into the property table; values
    are owned by the table, ``parsed_value`` only records what this line
    produced when it was scanned.
    """

    raw: str
    kind: LineKind
    number: int = 0
    qualified_key: str = ""
    bare_key: str = ""

    # Format preservation
    before_key: str = ""
    after_key: str = " "
    before_value: str = " "
    after_value: str = ""
    raw_value: str = ""

    parsed_value: str = ""
    has_no_assignment: bool = False

    # Index of the PROPERTY record a CONTINUATION belongs to
    owner: int | None = None

    # Set once the referenced property is removed
    orphaned: bool = False

    def __repr__(self) -> str:
        return f"LineRecord({self.kind.name}, {self.raw!r}, line={self.number})"


@dataclass
class ParserState:
    """
    Mutable scanning state, passed explicitly through the scanner.

    ``current_prefix`` holds the last bare key seen. Every ``{`` while it is
    set pushes it as a prefix segment; only an assignment line clears it.
    """

    current_prefix: str = ""
    prefixes: PrefixResolver = field(default_factory=PrefixResolver)

    # Line numbers of every open {
    open_blocks: list[int] = field(default_factory=list)

    # Line numbers of } without a matching {
    unmatched_closes: list[int] = field(default_factory=list)


class Scanner:
    """
    Scanner over an already template-expanded source.

    ``line_numbers`` maps each expanded line to its line in the original
    source, so records point at the line a reader sees in the file.

    Usage:
        scanner = Scanner(text)
        records = scanner.scan()
    """

    def __init__(self, source: str, line_numbers: list[int] | None = None):
        self.lines, self.ends_with_newline = split_lines(source)
        self.line_numbers = line_numbers
        self.pos = 0
        self.state = ParserState()

    def _source_line(self, pos: int) -> int:
        """Map a 1-based position in the expanded text to a source line number."""
        if self.line_numbers is None:
            return pos
        return self.line_numbers[pos - 1]

    def _open_block(self, state: ParserState, number: int) -> None:
        if state.current_prefix:
            state.prefixes.push(state.current_prefix)
        state.open_blocks.append(number)

    def _close_block(self, state: ParserState, number: int) -> None:
        state.prefixes.pop()

        if state.open_blocks:
            state.open_blocks.pop()
        else:
            state.unmatched_closes.append(number)
            logger.debug(f"Unmatched '}}' at line {number}")

    def _scan_property(self, line: str, number: int, state: ParserState) -> LineRecord:
        """Split a property line into key and value, capturing whitespace."""
        record = LineRecord(line, LineKind.PROPERTY, number=number)
        assign_pos = line.find(ASSIGNMENT)

        if assign_pos < 0:
            # A bare key has an empty value and may open a prefix block
            key = trim(line)
            record.before_key, record.after_key = key.leading, key.trailing
            record.has_no_assignment = True
            state.current_prefix = key.core
        else:
            key = trim(line[:assign_pos])
            value = trim(line[assign_pos + 1 :])
            record.before_key, record.after_key = key.leading, key.trailing
            record.before_value, record.after_value = value.leading, value.trailing
            record.raw_value = value.core
            record.parsed_value = unescape(value.core)
            state.current_prefix = ""

        record.bare_key = key.core
        record.qualified_key = state.prefixes.qualify(key.core)
        return record

    def classify(self, line: str, number: int, state: ParserState) -> LineRecord:
        """Classify a single line, updating ``state``."""
        text = line.strip(WHITESPACE)

        if not text:
            return LineRecord(line, LineKind.EMPTY, number=number)

        if text.startswith(COMMENT_MARKERS):
            return LineRecord(line, LineKind.COMMENT, number=number)

        if text == BLOCK_OPEN:
            self._open_block(state, number)
            return LineRecord(line, LineKind.BLOCK_START, number=number)

        if text == BLOCK_CLOSE:
            self._close_block(state, number)
            return LineRecord(line, LineKind.BLOCK_END, number=number)

        return self._scan_property(line, number, state)

    def _scan_continuation(self, record: LineRecord, owner: int) -> list[LineRecord]:
        """Consume the follow-up lines of a multi-line value."""
        continuation: list[LineRecord] = []
        parts = [record.parsed_value]

        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            self.pos += 1
            continuation.append(
                LineRecord(
                    line,
                    LineKind.CONTINUATION,
                    number=self._source_line(self.pos),
                    qualified_key=record.qualified_key,
                    bare_key=record.bare_key,
                    owner=owner,
                )
            )

            text = line.strip(WHITESPACE)
            if is_continued(text):
                parts.append(unquote(drop_continuation(text)))
            else:
                parts.append(unquote(text))
                break

        record.parsed_value = "".join(parts)
        return continuation

    def scan(self, state: ParserState | None = None) -> list[LineRecord]:
        """Scan all remaining lines."""
        if state is not None:
            self.state = state
        state = self.state
        records: list[LineRecord] = []

        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            self.pos += 1
            record = self.classify(line, self._source_line(self.pos), state)
            records.append(record)

            if record.kind is not LineKind.PROPERTY:
                continue

            if is_continued(record.parsed_value):
                record.parsed_value = unquote(drop_continuation(record.parsed_value))
                records.extend(self._scan_continuation(record, len(records) - 1))
            else:
                record.parsed_value = unquote(record.parsed_value)

        logger.debug(f"Scanned {len(records)} line(s)")
        return records


def scan(source: str) -> list[LineRecord]:
    """Convenience function to scan a source string."""
    return Scanner(source).scan()
