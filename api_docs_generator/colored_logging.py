"""
Colored console logging for the api-docs-generator command.

Records are colored by level. Progress, success and section records logged
through the helpers below carry a ``style`` attribute and get their own color,
so service registration and output steps stand out from library debug output.
"""

import logging
import sys
from typing import Optional


STYLE_SUCCESS = "success"
STYLE_PROGRESS = "progress"
STYLE_SECTION = "section"


class ColoredFormatter(logging.Formatter):
    """Formatter wrapping each line in an ANSI color picked from its level or style."""

    LEVEL_COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }

    STYLE_COLORS = {
        STYLE_SUCCESS: '\033[92m\033[1m',   # Bold bright green
        STYLE_PROGRESS: '\033[94m',         # Bright blue
        STYLE_SECTION: '\033[1m\033[96m',   # Bold bright cyan
    }

    RESET = '\033[0m'

    def __init__(self, fmt: Optional[str] = None, use_colors: bool = True, stream=None):
        super().__init__(fmt or "%(levelname)s: %(message)s")
        stream = stream if stream is not None else sys.stderr
        # Plain output when piped or redirected
        self.use_colors = use_colors and hasattr(stream, 'isatty') and stream.isatty()

    def color_for(self, record: logging.LogRecord) -> Optional[str]:
        if record.levelno >= logging.WARNING:
            return self.LEVEL_COLORS.get(record.levelname)
        style = getattr(record, 'style', None)
        if style in self.STYLE_COLORS:
            return self.STYLE_COLORS[style]
        return self.LEVEL_COLORS.get(record.levelname)

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.color_for(record) if self.use_colors else None
        if not color:
            return formatted
        return f"{color}{formatted}{self.RESET}"


def setup_colored_logging(level: int = logging.INFO, use_colors: bool = True) -> None:
    """
    Route all logging to stderr through a ColoredFormatter.

    Args:
        level: Logging level (default: INFO)
        use_colors: Set to False to force plain output (default: True)
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_colors=use_colors, stream=sys.stderr))
    console_handler.setLevel(level)

    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)


def get_colored_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_success(logger: logging.Logger, message: str) -> None:
    logger.info(f"✓ {message}", extra={'style': STYLE_SUCCESS})


def log_progress(logger: logging.Logger, message: str) -> None:
    logger.info(f"→ {message}", extra={'style': STYLE_PROGRESS})


def log_section(logger: logging.Logger, section_name: str) -> None:
    """Log a banner separating the command's steps."""
    separator = "=" * 60
    for line in (separator, f"  {section_name.upper()}", separator):
        logger.info(line, extra={'style': STYLE_SECTION})
