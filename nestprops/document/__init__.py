"""
Format-preserving properties documents with prefix blocks and templates.
"""

from .loader import DocumentError, DocumentLoader, load_document, parse_document
from .model import PropertiesDocument, Property, parse
from .scanner import LineKind, LineRecord, ParserState, Scanner
from .templates import MalformedTemplate, TemplateError, TemplateExpander, UndefinedTemplate

__all__ = [
    "DocumentError",
    "DocumentLoader",
    "LineKind",
    "LineRecord",
    "MalformedTemplate",
    "ParserState",
    "PropertiesDocument",
    "Property",
    "Scanner",
    "TemplateError",
    "TemplateExpander",
    "UndefinedTemplate",
    "load_document",
    "parse",
    "parse_document",
]
