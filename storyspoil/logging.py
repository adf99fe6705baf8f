"""Console logging for suite runs.

Log records go through the standard library; the console handler is a
RichHandler so scenario progress stays readable next to the report table.
Third-party records (httpx, httpcore) get a short bracketed prefix.
"""
from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

PROJECT_PREFIX = "storyspoil"

# Loggers that are noisy at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


class ThirdPartyPrefixFilter(logging.Filter):
    """Set ``record.prefix`` to "[httpx]" style tokens for foreign loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith(PROJECT_PREFIX):
            record.prefix = ""
        else:
            record.prefix = f"[{record.name.split('.')[0]}]"
        return True


def config_console_handler(
    level: int = logging.INFO, color: bool = True
) -> RichHandler:
    """Create a RichHandler writing to stderr.

    Args:
        level: Minimum level shown on the console.
        color: Disable to get plain output (CI logs, pipes).

    Returns:
        RichHandler: handler ready to attach to the root logger.
    """
    console = Console(color_system="auto" if color else None, stderr=True)
    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=level <= logging.DEBUG,
    )
    handler.setFormatter(logging.Formatter(fmt="%(prefix)s %(message)s"))
    handler.addFilter(ThirdPartyPrefixFilter())
    return handler


def configure_logging(level: int | str = logging.INFO, color: bool = True) -> RichHandler:
    """Replace root handlers with a single Rich console handler.

    Returns the installed handler so callers (and tests) can inspect it.
    """
    if isinstance(level, str):
        numeric = logging.getLevelName(level.upper())
        if not isinstance(numeric, int):
            raise ValueError(f"Unknown log level: {level!r}")
        level = numeric

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = config_console_handler(level=level, color=color)
    root.addHandler(handler)
    root.setLevel(level)

    # Request lines from httpx only when debugging
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(
            logging.DEBUG if level <= logging.DEBUG else logging.WARNING
        )
    return handler
