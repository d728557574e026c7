"""
Logging setup for dirconf.

Modules log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once to attach a console handler to the package logger.
"""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", stream: Optional[object] = None) -> logging.Logger:
    """
    Configure the ``dirconf`` logger.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Stream for the console handler, stderr when omitted

    Returns:
        The configured package logger
    """
    root = logging.getLogger("dirconf")
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Calling setup twice must not duplicate output
    for handler in list(root.handlers):
        if getattr(handler, "_dirconf_console", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._dirconf_console = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    return root
