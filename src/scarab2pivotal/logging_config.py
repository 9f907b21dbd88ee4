"""Logging setup for the CLI.

Library modules log through the standard ``logging`` module, so importing
them never writes anywhere on its own. The CLI installs a single stderr
handler whose records are rendered by structlog.
"""

import logging
import sys

import structlog


def configure_logging(level: str = "INFO", fmt: str = "console") -> None:
    """Route all log records to stderr, rendered by structlog.

    stdout is left untouched so that CSV written there stays clean.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        fmt: Renderer to use: "console" or "json"
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)
