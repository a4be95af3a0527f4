"""
nestprops - format-preserving properties files with nested prefix blocks
and templates.
"""

from .const import APP_VERSION
from .document import (
    DocumentError,
    DocumentLoader,
    MalformedTemplate,
    PropertiesDocument,
    TemplateError,
    UndefinedTemplate,
    load_document,
    parse,
)

__version__ = APP_VERSION

__all__ = [
    "DocumentError",
    "DocumentLoader",
    "MalformedTemplate",
    "PropertiesDocument",
    "TemplateError",
    "UndefinedTemplate",
    "__version__",
    "load_document",
    "parse",
]
