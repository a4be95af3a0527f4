"""
Template expansion pass.

Runs before any other parsing. Supports:
- Definitions: a ``<name>`` line, any number of raw lines, then ``</name>``
- References: a ``%name%`` line, replaced by the lines of the definition

Example:
    <logging>
    log.level = debug
    log.file = server.log
    </logging>

    server
    {
        %logging%
    }

Expansion is not recursive: the lines of a definition are emitted exactly as
captured and only classified later by the scanner.
"""

from ..const import WHITESPACE
from ..logging import get_logger
from .codec import split_lines


logger = get_logger("templates")

TEMPLATE_OPEN = "<"
TEMPLATE_CLOSE = "</"
TEMPLATE_END = ">"
TEMPLATE_REFERENCE = "%"


class TemplateError(Exception):
    """Base exception for template expansion errors."""

    def __init__(self, message: str, line: int | None = None):
        self.line = line
        if line is not None:
            super().__init__(f"Line {line}: {message}")
        else:
            super().__init__(message)


class MalformedTemplate(TemplateError):
    """A template tag or reference is badly formed or never closed."""


class UndefinedTemplate(TemplateError):
    """A reference names a template that was never defined."""

    def __init__(self, name: str, line: int | None = None):
        self.name = name
        super().__init__(f"Template is not defined: {name}", line)


class TemplateExpander:
    """
    Expands template definitions and references in a source text.

    Definitions seen so far are kept in ``definitions``; a later definition
    with the same name replaces the earlier one.
    """

    def __init__(self, source: str):
        self.source = source
        self.definitions: dict[str, list[str]] = {}

        # Source line number of every expanded line; substituted lines map to their reference
        self.line_numbers: list[int] = []

    def _tag_name(self, text: str, line: int) -> str:
        """Extract the name from a ``<name>`` tag."""
        if len(text) < 3 or not text.endswith(TEMPLATE_END):
            raise MalformedTemplate(f"Invalid template definition: {text!r}", line)
        return text[1:-1]

    def _reference_name(self, text: str, line: int) -> str:
        """Extract the name from a ``%name%`` reference."""
        if len(text) < 3 or not text.endswith(TEMPLATE_REFERENCE):
            raise MalformedTemplate(f"Invalid template reference: {text!r}", line)
        return text[1:-1]

    def expand(self) -> str:
        """Return the source with all templates resolved."""
        lines, ends_with_newline = split_lines(self.source)
        output: list[str] = []
        self.line_numbers = []
        last_passthrough = False
        pos = 0

        while pos < len(lines):
            line = lines[pos]
            number = pos + 1
            text = line.strip(WHITESPACE)
            pos += 1

            if text.startswith(TEMPLATE_CLOSE):
                raise MalformedTemplate(f"Closing tag without definition: {text!r}", number)

            if text.startswith(TEMPLATE_OPEN):
                name = self._tag_name(text, number)
                closing = f"{TEMPLATE_CLOSE}{name}{TEMPLATE_END}"
                body: list[str] = []

                while pos < len(lines) and lines[pos].strip(WHITESPACE) != closing:
                    body.append(lines[pos])
                    pos += 1

                if pos >= len(lines):
                    raise MalformedTemplate(f"Missing closing tag {closing} for template '{name}'", number)

                pos += 1  # skip closing tag
                if name in self.definitions:
                    logger.debug(f"Template '{name}' redefined at line {number}")
                self.definitions[name] = body
                logger.debug(f"Defined template '{name}' with {len(body)} line(s)")

            elif text.startswith(TEMPLATE_REFERENCE):
                name = self._reference_name(text, number)
                if name not in self.definitions:
                    raise UndefinedTemplate(name, number)
                output.extend(self.definitions[name])
                self.line_numbers.extend([number] * len(self.definitions[name]))
                last_passthrough = False
                logger.debug(f"Expanded template '{name}' at line {number}")

            else:
                output.append(line)
                self.line_numbers.append(number)
                last_passthrough = True

        if not output:
            return ""

        result = "\n".join(output)
        # Substituted lines are always newline terminated
        if ends_with_newline or not last_passthrough:
            result += "\n"
        return result


def expand_templates(source: str) -> str:
    """Convenience function to expand templates in a source string."""
    return TemplateExpander(source).expand()
