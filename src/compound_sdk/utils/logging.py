"""
Structured logging for the Compound SDK.

All SDK loggers live under the ``compound_sdk`` namespace and are silent
until the application configures logging, either with the standard library
directly or with :func:`configure_logging`.

Example:
    >>> from compound_sdk.utils.logging import configure_logging
    >>> configure_logging("DEBUG")
"""

from __future__ import annotations

import logging
from typing import Optional, Union

ROOT_LOGGER_NAME = "compound_sdk"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s%(context)s"

_root = logging.getLogger(ROOT_LOGGER_NAME)
_root.addHandler(logging.NullHandler())

# Attributes present on every LogRecord; anything else came in through `extra`.
_RESERVED = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {
    "message",
    "asctime",
    "context",
}


class ContextFormatter(logging.Formatter):
    """Formatter that renders ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        context = {k: v for k, v in record.__dict__.items() if k not in _RESERVED}
        record.context = (
            " " + " ".join(f"{k}={v!r}" for k, v in sorted(context.items())) if context else ""
        )
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the SDK namespace.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: Optional[str] = None,
    handler: Optional[logging.Handler] = None,
) -> logging.Logger:
    """Attach a handler to the SDK root logger.

    Calling it again replaces the handler installed by a previous call.

    Args:
        level: Log level name or number.
        fmt: Format string; ``%(context)s`` expands to the ``extra`` fields.
        handler: Handler to install (defaults to a stderr StreamHandler).

    Returns:
        The SDK root logger.
    """
    handler = handler or logging.StreamHandler()
    handler.setFormatter(ContextFormatter(fmt or DEFAULT_FORMAT))
    handler._compound_sdk = True  # type: ignore[attr-defined]

    for existing in list(_root.handlers):
        if getattr(existing, "_compound_sdk", False):
            _root.removeHandler(existing)

    _root.addHandler(handler)
    set_level(level)
    return _root


def set_level(level: Union[int, str]) -> None:
    """Set the level of the SDK root logger."""
    if isinstance(level, str):
        level = level.upper()
    _root.setLevel(level)
