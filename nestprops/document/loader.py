"""
Document loader with file reading, writing and structural checks.
"""

from pathlib import Path

from ..logging import get_logger
from .model import PropertiesDocument
from .scanner import LineKind
from .templates import TemplateError


logger = get_logger("loader")


class DocumentError(Exception):
    """Exception raised when a document cannot be loaded or saved."""

    pass


class DocumentLoader:
    """
    Loads, saves and checks properties documents.

    Files are read and written as UTF-8 without newline translation, so
    ``\\r\\n`` line endings survive a round trip.

    Usage:
        loader = DocumentLoader()
        doc = loader.load_file("server.properties")
        doc.put("server.port", "8080")
        loader.save(doc, "server.properties")
    """

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding
        self.last_document: PropertiesDocument | None = None

    def load_file(self, path: str | Path) -> PropertiesDocument:
        """
        Load a document from a file.

        Raises:
            DocumentError: If the file cannot be read or parsed
        """
        path = Path(path)

        if not path.exists():
            raise DocumentError(f"File not found: {path}")

        if not path.is_file():
            raise DocumentError(f"Not a file: {path}")

        try:
            with open(path, encoding=self.encoding, newline="") as stream:
                document = PropertiesDocument(str(path)).parse(stream)
        except TemplateError as e:
            raise DocumentError(f"Failed to parse {path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(f"Failed to read {path}: {e}") from e

        self.last_document = document
        logger.info(f"Loaded {path} ({len(document)} properties)")
        return document

    def load_string(self, source: str, filename: str = "<string>") -> PropertiesDocument:
        """
        Load a document from a string.

        Raises:
            DocumentError: If the source cannot be parsed
        """
        try:
            document = PropertiesDocument(filename).parse(source)
        except TemplateError as e:
            raise DocumentError(f"Failed to parse {filename}: {e}") from e

        self.last_document = document
        return document

    def save(self, document: PropertiesDocument, path: str | Path, pretty_print: bool = False) -> None:
        """
        Write a rendered document to a file.

        Raises:
            DocumentError: If the file cannot be written
        """
        path = Path(path)
        try:
            with open(path, "w", encoding=self.encoding, newline="") as stream:
                stream.write(document.text(pretty_print))
        except OSError as e:
            raise DocumentError(f"Failed to write {path}: {e}") from e

        logger.info(f"Saved {path}")

    def validate(self, document: PropertiesDocument) -> list[str]:
        """
        Check a parsed document for structural problems.

        None of these stop parsing; they are reported as warnings.

        Returns:
            List of warning messages
        """
        warnings = []

        for line in document.state.unmatched_closes:
            warnings.append(f"Line {line}: '}}' without matching '{{'")

        for line in document.state.open_blocks:
            warnings.append(f"Line {line}: '{{' is never closed")

        seen: dict[str, int] = {}
        for record in document.records():
            if record.kind is not LineKind.PROPERTY or not record.number:
                continue
            key = record.qualified_key
            if key not in seen:
                seen[key] = record.number
                continue
            warnings.append(f"Line {record.number}: '{key}' overrides the value from line {seen[key]}")

        return warnings


def load_document(path: str | Path) -> PropertiesDocument:
    """Convenience function to load a document from a file."""
    return DocumentLoader().load_file(path)


def parse_document(source: str, filename: str = "<string>") -> PropertiesDocument:
    """Convenience function to load a document from a string."""
    return DocumentLoader().load_string(source, filename)
