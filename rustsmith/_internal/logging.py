# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Logging configuration using Python's standard logging with Rich.

Usage:
    from rustsmith._internal.logging import setup_logging

    # In CLI setup
    setup_logging(level="normal")

    # In library code
    import logging
    logger = logging.getLogger(__name__)
    logger.debug("Resolved install dir ...")
"""

import logging

# CLI verbosity names map onto standard levels; plain level names are accepted too.
LEVEL_MAP = {
    'quiet': logging.ERROR,
    'normal': logging.WARNING,
    'verbose': logging.INFO,
    'debug': logging.DEBUG,
    'error': logging.ERROR,
    'warning': logging.WARNING,
    'info': logging.INFO,
}


def resolve_level(level: str) -> int:
    """Map a level name to a logging constant, defaulting to WARNING."""
    return LEVEL_MAP.get(level.lower(), logging.WARNING)


def setup_logging(level: str = "normal") -> None:
    """Configure root logging with a Rich handler."""
    from rich.logging import RichHandler

    log_level = resolve_level(level)

    root = logging.getLogger()
    root.setLevel(log_level)

    if not root.handlers:
        handler = RichHandler(
            rich_tracebacks=(log_level == logging.DEBUG),
            show_path=False,
            markup=True,
            show_time=False
        )
        handler.setLevel(log_level)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    else:
        for handler in root.handlers:
            handler.setLevel(log_level)

    # Template rendering is chatty at DEBUG
    if log_level > logging.DEBUG:
        logging.getLogger('jinja2').setLevel(logging.WARNING)
