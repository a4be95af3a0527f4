"""
Logging configuration for nestprops.

Features:
- Log levels (debug, info, warning, error)
- Console output with optional colors
- File output with rotation
- Per-component log level configuration
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path


ROOT_LOGGER = "nestprops"


# ANSI color codes for console output
class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BRIGHT_RED = "\033[91m"


# Log level colors
LEVEL_COLORS = {
    logging.DEBUG: Colors.DIM + Colors.CYAN,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.BOLD + Colors.BRIGHT_RED,
}

# Component colors for logger names
COMPONENT_COLORS = {
    "templates": Colors.MAGENTA,
    "scanner": Colors.CYAN,
    "document": Colors.BLUE,
    "loader": Colors.GREEN,
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter that adds ANSI colors to log output.

    The record is restored after formatting so other handlers see it unchanged.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        use_colors: bool = True,
    ):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        original_name = record.name

        if self.use_colors:
            level_color = LEVEL_COLORS.get(record.levelno, "")
            record.levelname = f"{level_color}{record.levelname:8}{Colors.RESET}"

            component = record.name.rsplit(".", 1)[-1]
            component_color = COMPONENT_COLORS.get(component, "")
            if component_color:
                record.name = f"{component_color}{record.name}{Colors.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname
            record.name = original_name


class PlainFormatter(logging.Formatter):
    """Plain formatter without colors for file output."""

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        record.levelname = f"{record.levelname:8}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


@dataclass
class LogConfig:
    """Logging configuration."""

    # Console settings
    console_level: str = "WARNING"
    console_colors: bool = True

    # File settings
    file_enabled: bool = False
    file_path: str = "nestprops.log"
    file_level: str = "DEBUG"
    file_max_bytes: int = 1024 * 1024  # 1 MB
    file_backup_count: int = 3

    # Format
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    # Per-component levels (component name -> level)
    module_levels: dict[str, str] | None = None


def get_log_level(level_str: str) -> int:
    """Convert string log level to logging constant."""
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return levels.get(level_str.lower(), logging.INFO)


def setup_logging(config: LogConfig | None = None) -> None:
    """
    Configure the nestprops logger hierarchy.

    Log output goes to stderr so rendered documents on stdout stay clean.

    Args:
        config: Logging configuration (uses defaults if None)
    """
    if config is None:
        config = LogConfig()

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)  # Capture all, filter at handlers
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(get_log_level(config.console_level))

    use_colors = config.console_colors and hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    console_handler.setFormatter(
        ColoredFormatter(
            fmt=config.format,
            datefmt=config.date_format,
            use_colors=use_colors,
        )
    )
    root_logger.addHandler(console_handler)

    if config.file_enabled:
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            config.file_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(get_log_level(config.file_level))
        file_handler.setFormatter(
            PlainFormatter(
                fmt=config.format,
                datefmt=config.date_format,
            )
        )
        root_logger.addHandler(file_handler)

    if config.module_levels:
        for module_name, level_str in config.module_levels.items():
            get_logger(module_name).setLevel(get_log_level(level_str))


def setup_logging_from_args(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
    colors: bool = True,
) -> LogConfig:
    """
    Setup logging from command-line arguments.

    Returns:
        The LogConfig that was applied
    """
    config = LogConfig(console_colors=colors)

    if debug:
        config.console_level = "DEBUG"
    elif verbose:
        config.console_level = "INFO"
    elif quiet:
        config.console_level = "ERROR"

    if log_file:
        config.file_enabled = True
        config.file_path = log_file

    setup_logging(config)
    return config


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a component.

    Args:
        name: Component name (will be prefixed with nestprops)
    """
    if name == ROOT_LOGGER or name.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
