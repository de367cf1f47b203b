"""Logger access for brickstmt.

The library never installs handlers; applications configure logging as
they see fit and may silence the ``brickstmt`` namespace as a whole.
"""
from __future__ import annotations

import logging

__all__ = ("get_logger",)

_ROOT = "brickstmt"


def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger under the ``brickstmt`` namespace.

    Args:
        name: Logger name. If not provided, returns the root brickstmt logger.

    Returns:
        The logger instance.
    """
    if name is None:
        return logging.getLogger(_ROOT)
    if not name.startswith(_ROOT):
        name = f"{_ROOT}.{name}"
    return logging.getLogger(name)
