"""
Application constants and format metadata.
"""

# Application info
APP_NAME = "nestprops"
APP_VERSION = "0.1.0"

# Characters treated as whitespace when trimming tokens
WHITESPACE = " \n\r\t\v\f"

# Format markers
COMMENT_MARKERS = ("#", "!")
ASSIGNMENT = "="
BLOCK_OPEN = "{"
BLOCK_CLOSE = "}"
KEY_SEPARATOR = "."
LINE_CONTINUATION = "\\"
QUOTES = ("'", '"')

# Rendering defaults
INDENT_WIDTH = 4
CONTINUATION_INDENT = " " * INDENT_WIDTH
DEFAULT_COMMENT_PREFIX = "# "

# Values accepted as true by get_bool()
TRUE_VALUES = frozenset({"true", "1", "yes"})
