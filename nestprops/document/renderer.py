"""
Renders LineRecords back to text.

Two modes:
- original: untouched lines come out byte for byte, changed values reuse
  the whitespace of the line they live on, new entries use ``key = value``
- pretty: blocks are re-indented by four spaces per level, comments are
  trimmed and runs of blank lines collapse into one
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..const import ASSIGNMENT, BLOCK_CLOSE, BLOCK_OPEN, INDENT_WIDTH, WHITESPACE
from .codec import escape
from .scanner import LineKind, LineRecord

if TYPE_CHECKING:
    from .model import Property


class Renderer:
    """
    State machine over the record sequence.

    ``parsed_count`` is the number of records that came from the source;
    when the source lacked a final newline, original mode leaves it off
    again if the last parsed record is also the last one written.
    """

    def __init__(
        self,
        records: list[LineRecord],
        properties: dict[str, Property],
        parsed_count: int = 0,
        ends_with_newline: bool = True,
    ):
        self.records = records
        self.properties = properties
        self.parsed_count = parsed_count
        self.ends_with_newline = ends_with_newline

    def _indent(self, depth: int) -> str:
        return " " * (depth * INDENT_WIDTH)

    def _lookup(self, record: LineRecord) -> Property | None:
        if record.orphaned:
            return None
        return self.properties.get(record.qualified_key)

    def _render_property(self, index: int, record: LineRecord, prop: Property, depth: int, pretty: bool) -> str | None:
        shadowed = prop.line_index != index

        if pretty:
            if shadowed:
                return None
            line = self._indent(depth) + record.bare_key
            if prop.value:
                line += f" {ASSIGNMENT} " + escape(prop.value)
            return line

        # Earlier occurrences of a redefined key keep their original text
        if shadowed:
            return record.raw

        line = record.before_key + record.bare_key + record.after_key
        if not record.has_no_assignment or prop.dirty:
            value = escape(prop.value) if prop.dirty else record.raw_value
            line += ASSIGNMENT + record.before_value + value + record.after_value
        return line

    def _render_continuation(self, record: LineRecord, prop: Property, pretty: bool) -> str | None:
        # Pretty mode and updated values write the whole value on the property line
        if pretty or (prop.dirty and prop.line_index == record.owner):
            return None
        return record.raw

    def render(self, pretty_print: bool = False) -> str:
        """Render all records."""
        output: list[str] = []
        depth = 0
        previous: LineKind | None = None
        last_index = -1

        for index, record in enumerate(self.records):
            line: str | None = None
            kind = record.kind

            if kind is LineKind.EMPTY:
                if not pretty_print:
                    line = record.raw
                elif previous is not LineKind.EMPTY:
                    line = ""

            elif kind is LineKind.COMMENT:
                line = record.raw.strip(WHITESPACE) if pretty_print else record.raw

            elif kind is LineKind.PROPERTY:
                prop = self._lookup(record)
                if prop is not None:
                    line = self._render_property(index, record, prop, depth, pretty_print)

            elif kind is LineKind.CONTINUATION:
                prop = self._lookup(record)
                if prop is not None:
                    line = self._render_continuation(record, prop, pretty_print)

            elif kind is LineKind.BLOCK_START:
                line = self._indent(depth) + BLOCK_OPEN if pretty_print else record.raw
                depth += 1

            elif kind is LineKind.BLOCK_END:
                depth = max(depth - 1, 0)
                line = self._indent(depth) + BLOCK_CLOSE if pretty_print else record.raw

            if line is not None:
                output.append(line)
                previous = kind
                last_index = index

        text = "".join(line + "\n" for line in output)

        if (
            text
            and not pretty_print
            and not self.ends_with_newline
            and last_index == self.parsed_count - 1
        ):
            text = text[:-1]

        return text
