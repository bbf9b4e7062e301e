"""
Colored console logging for Schema Scaffold.

Messages are tinted by level, and INFO/DEBUG lines are further tinted by what
they report: a finished unit, a step in progress, a kept file or a section
banner. The helpers below prefix messages so that the formatter can recognise
them.
"""

import logging
import os
import sys
from typing import Optional


class ColoredFormatter(logging.Formatter):
    """Logging formatter that wraps messages in ANSI color codes."""

    RESET = '\033[0m'
    BOLD = '\033[1m'

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    KIND_COLORS = {
        'section': BOLD + '\033[96m',
        'success': BOLD + '\033[92m',
        'progress': '\033[94m',
        'kept': '\033[96m',
    }

    # Message fragments that identify each kind, checked in this order
    KIND_MARKERS = (
        ('success', ('✓', 'generated file', 'complete')),
        ('progress', ('→', 'processing', 'loading', 'introspecting', 'starting')),
        ('kept', ('skipping', 'skipped', 'already exists')),
    )

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True):
        super().__init__(fmt or "%(levelname)s: %(message)s")
        # NO_COLOR (https://no-color.org) and non-TTY streams disable colors
        self.use_colors = (
            use_colors
            and 'NO_COLOR' not in os.environ
            and hasattr(sys.stderr, 'isatty')
            and sys.stderr.isatty()
        )

    @classmethod
    def message_kind(cls, message: str) -> Optional[str]:
        """Classify an INFO/DEBUG message, or None for a plain one."""
        stripped = message.strip()
        if stripped.startswith('=' * 20):
            return 'section'
        lowered = stripped.lower()
        for kind, markers in cls.KIND_MARKERS:
            if any(marker in lowered for marker in markers):
                return kind
        return None

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        if not self.use_colors:
            return formatted

        if record.levelno >= logging.WARNING:
            color = self.LEVEL_COLORS.get(record.levelname, self.LEVEL_COLORS['ERROR'])
        else:
            kind = self.message_kind(record.getMessage())
            color = self.KIND_COLORS.get(kind) if kind else self.LEVEL_COLORS.get(record.levelname)

        if not color:
            return formatted
        return f"{color}{formatted}{self.RESET}"


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Route all logging to stderr through a ColoredFormatter.

    At DEBUG level the logger name is included in each line. Django's SQL
    logging stays at INFO so that verbose runs are not flooded with queries.

    Args:
        level: Logging level (default: INFO)
        use_colors: Whether to use colors (default: True)
    """
    fmt = "%(levelname)s [%(name)s]: %(message)s" if level <= logging.DEBUG else None

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ColoredFormatter(fmt, use_colors=use_colors))
    handler.setLevel(level)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    logging.getLogger('django.db.backends').setLevel(max(level, logging.INFO))


def get_colored_logger(name: str) -> logging.Logger:
    """Get a logger with the specified name."""
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    logger.info(f"✓ {message}")


def log_progress(logger: logging.Logger, message: str) -> None:
    logger.info(f"→ {message}")


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a banner line, the upper-cased section name and another banner."""
    separator = "=" * 60
    logger.info(separator)
    logger.info(f"  {section_name.upper()}")
    logger.info(separator)
