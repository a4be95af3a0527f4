"""
In-memory document: ordered line records plus a keyed property table.

The records decide what gets rendered and where; the property table owns
the current values. Mutations append to the records or update the table,
they never reorder or delete records.
"""

import dataclasses
from dataclasses import dataclass
from typing import Iterator, TextIO

from ..const import COMMENT_MARKERS, DEFAULT_COMMENT_PREFIX, TRUE_VALUES, WHITESPACE
from ..logging import get_logger
from .renderer import Renderer
from .scanner import LineKind, LineRecord, ParserState, Scanner
from .templates import TemplateExpander


logger = get_logger("document")


@dataclass
class Property:
    """
    Current value of one qualified key.

    ``dirty`` is set once put() creates or changes the property. Dirty
    values are written on a single line; untouched multi-line values keep
    their original lines.
    """

    key: str
    value: str = ""
    dirty: bool = False

    # Index of the record holding this value, None if it has no line
    line_index: int | None = None


class PropertiesDocument:
    """
    A parsed properties document that can be queried, edited and rendered.

    Usage:
        doc = PropertiesDocument()
        doc.parse(open("server.properties", encoding="utf-8"))
        doc.put("server.port", "8080")
        text = doc.text()
    """

    def __init__(self, filename: str = "<string>"):
        self.filename = filename
        self._records: list[LineRecord] = []
        self._properties: dict[str, Property] = {}
        self._parsed_count = 0
        self._ends_with_newline = True
        self.state = ParserState()

    def __repr__(self) -> str:
        return f"PropertiesDocument({self.filename!r}, properties={len(self._properties)}, lines={len(self._records)})"

    def __contains__(self, key: object) -> bool:
        return key in self._properties

    def __len__(self) -> int:
        return len(self._properties)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # Parsing

    def parse(self, source: str | TextIO) -> "PropertiesDocument":
        """
        Parse a string or text stream, replacing any previous content.

        Raises:
            MalformedTemplate: A template tag is broken or never closed
            UndefinedTemplate: A template reference has no definition
        """
        text = source if isinstance(source, str) else source.read()

        # Expansion runs first so a template error leaves the document untouched
        expander = TemplateExpander(text)
        expanded = expander.expand()

        scanner = Scanner(expanded, expander.line_numbers)
        records = scanner.scan()

        properties: dict[str, Property] = {}
        for index, record in enumerate(records):
            if record.kind is LineKind.PROPERTY:
                if record.qualified_key in properties:
                    logger.debug(f"Line {record.number}: '{record.qualified_key}' redefined")
                properties[record.qualified_key] = Property(
                    key=record.qualified_key,
                    value=record.parsed_value,
                    line_index=index,
                )

        self._records = records
        self._properties = properties
        self._parsed_count = len(records)
        self._ends_with_newline = scanner.ends_with_newline
        self.state = scanner.state

        logger.debug(f"Parsed {self.filename}: {len(properties)} properties, {len(records)} lines")
        return self

    # Queries

    def has_key(self, key: str) -> bool:
        return key in self._properties

    def get(self, key: str, default: str = "") -> str:
        """Get the trimmed value of a property, or ``default`` if missing."""
        prop = self._properties.get(key)
        if prop is None:
            return default
        return prop.value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """
        Interpret a property as a boolean.

        Returns True only for the exact values "true", "1" and "yes".
        """
        prop = self._properties.get(key)
        if prop is None:
            return default
        return prop.value in TRUE_VALUES

    def keys(self) -> list[str]:
        return list(self._properties)

    def values(self) -> list[str]:
        return [prop.value for prop in self._properties.values()]

    def items(self) -> list[tuple[str, str]]:
        return [(key, prop.value) for key, prop in self._properties.items()]

    def records(self) -> tuple[LineRecord, ...]:
        """Snapshot of the line records; changing it does not affect the document."""
        return tuple(dataclasses.replace(record) for record in self._records)

    # Mutation

    def put(self, key: str, value: str) -> str:
        """
        Set a property value.

        Existing properties keep their line and whitespace; new ones are
        appended as ``key = value``.

        Returns:
            The previous value, or an empty string for a new key
        """
        prop = self._properties.get(key)
        if prop is not None:
            previous = prop.value
            prop.value = value
            prop.dirty = True
            logger.debug(f"Updated '{key}'")
            return previous

        self._records.append(
            LineRecord(
                f"{key} = {value}",
                LineKind.PROPERTY,
                qualified_key=key,
                bare_key=key,
                raw_value=value,
                parsed_value=value,
            )
        )
        self._properties[key] = Property(
            key=key,
            value=value,
            dirty=True,
            line_index=len(self._records) - 1,
        )
        logger.debug(f"Added '{key}'")
        return ""

    def remove(self, key: str) -> None:
        """Remove a property; its lines stay in place but are no longer rendered."""
        if self._properties.pop(key, None) is None:
            return

        for record in self._records:
            if record.qualified_key == key:
                record.orphaned = True
        logger.debug(f"Removed '{key}'")

    def put_empty_line(self) -> None:
        self._records.append(LineRecord("", LineKind.EMPTY))

    def put_comment(self, comment: str) -> None:
        """
        Append a comment line.

        A ``# `` marker is added unless the text already starts with # or !.
        Blank comments are ignored.
        """
        line = comment.strip(WHITESPACE)
        if not line:
            return

        if not line.startswith(COMMENT_MARKERS):
            line = DEFAULT_COMMENT_PREFIX + line

        self._records.append(LineRecord(line, LineKind.COMMENT))

    # Rendering

    def text(self, pretty_print: bool = False) -> str:
        """
        Render the document including any changes.

        The original formatting is kept unless ``pretty_print`` is set, which
        re-indents blocks, trims comments and collapses blank lines.
        """
        renderer = Renderer(
            self._records,
            self._properties,
            parsed_count=self._parsed_count,
            ends_with_newline=self._ends_with_newline,
        )
        return renderer.render(pretty_print)

    def __str__(self) -> str:
        return self.text()


def parse(source: str | TextIO, filename: str = "<string>") -> PropertiesDocument:
    """Convenience function to parse a string or text stream."""
    return PropertiesDocument(filename).parse(source)
