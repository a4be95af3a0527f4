"""
Entry point for nestprops.

Usage:
    python -m nestprops server.properties
    python -m nestprops server.properties --get server.port --default 80
    python -m nestprops server.properties --set server.port=8080 --write
    python -m nestprops --help
"""

import argparse
import sys
from pathlib import Path

from . import __version__
from .const import APP_NAME
from .document import DocumentError, DocumentLoader, PropertiesDocument
from .logging import get_logger, setup_logging_from_args


logger = get_logger("main")


def _parse_assignment(text: str) -> tuple[str, str]:
    """Split a KEY=VALUE command-line argument."""
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError(f"expected KEY=VALUE, got {text!r}")
    return key.strip(), value


def validate_document(loader: DocumentLoader, document: PropertiesDocument) -> int:
    """Print structural warnings and a short summary."""
    warnings = loader.validate(document)

    if warnings:
        print(f"Document warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    print(f"\nDocument summary:")
    print(f"  File: {document.filename}")
    print(f"  Properties: {len(document)}")
    print(f"  Lines: {len(document.records())}")

    print("\nDocument is valid!")
    return 0


def apply_changes(document: PropertiesDocument, args: argparse.Namespace) -> bool:
    """Apply --remove, --set and --comment. Returns True if anything changed."""
    changed = False

    for key in args.remove:
        if document.has_key(key):
            document.remove(key)
            logger.info(f"Removed {key}")
            changed = True

    if args.comment:
        document.put_empty_line()
        document.put_comment(args.comment)
        changed = True

    for key, value in args.set:
        previous = document.put(key, value)
        logger.info(f"Set {key} = {value!r} (was {previous!r})")
        changed = True

    return changed


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Read, edit and reformat properties files with prefix blocks and templates",
    )

    parser.add_argument(
        "file",
        help="Path to the properties file",
    )

    parser.add_argument(
        "--get",
        metavar="KEY",
        action="append",
        default=[],
        help="Print the value of KEY (repeatable)",
    )

    parser.add_argument(
        "--default",
        metavar="VALUE",
        default="",
        help="Value printed by --get for missing keys",
    )

    parser.add_argument(
        "--set",
        metavar="KEY=VALUE",
        action="append",
        type=_parse_assignment,
        default=[],
        help="Set KEY to VALUE (repeatable)",
    )

    parser.add_argument(
        "--remove",
        metavar="KEY",
        action="append",
        default=[],
        help="Remove KEY (repeatable)",
    )

    parser.add_argument(
        "--comment",
        metavar="TEXT",
        help="Append a blank line and a comment",
    )

    parser.add_argument(
        "--keys",
        action="store_true",
        help="List all keys with their values",
    )

    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Pretty print the output",
    )

    parser.add_argument(
        "--write",
        action="store_true",
        help="Save changes back to the input file",
    )

    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Save the result to PATH",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Check the document structure and exit",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    setup_logging_from_args(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        log_file=args.log_file,
        colors=not args.no_color,
    )

    path = Path(args.file)
    loader = DocumentLoader()

    try:
        document = loader.load_file(path)

        if args.validate:
            return validate_document(loader, document)

        changed = apply_changes(document, args)

        for key in args.get:
            print(document.get(key, args.default))

        if args.keys:
            for key, value in sorted(document.items()):
                print(f"{key} = {value}")

        if args.write or args.output:
            target = Path(args.output) if args.output else path
            loader.save(document, target, pretty_print=args.pretty)
        elif changed or args.pretty or not (args.get or args.keys):
            sys.stdout.write(document.text(args.pretty))

        return 0

    except DocumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
