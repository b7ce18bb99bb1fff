"""Logging utilities.

Logs go to stderr through rich; stdout is reserved for rendered documents and outlines.
Records emitted while an editor event is handled carry a ``[record=<id> <event>]`` prefix.
"""

from __future__ import annotations

import contextlib
import contextvars
import logging
from collections.abc import Iterator
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "knowdoc"

_record_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("knowdoc_record_id", default=None)
_event_var: contextvars.ContextVar[str | None] = contextvars.ContextVar("knowdoc_event", default=None)

_handler: RichHandler | None = None


class _EditorContextFilter(logging.Filter):
    """Attach the bound editor context to each record as ``record.editor``."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        record_id = _record_id_var.get()
        event = _event_var.get()
        if record_id is None and event is None:
            record.editor = ""  # type: ignore[attr-defined]
        else:
            parts = [f"record={record_id or '-'}"]
            if event:
                parts.append(event)
            record.editor = f"[{' '.join(parts)}] "  # type: ignore[attr-defined]
        return True


@contextlib.contextmanager
def editor_context(*, record_id: int | str | None, event: str | None = None) -> Iterator[None]:
    """Bind the record and UI event being handled for the duration of the block.

    A nested context without ``event`` keeps the enclosing one.
    """

    token_record = _record_id_var.set(None if record_id is None else str(record_id))
    token_event = _event_var.set(event or _event_var.get())
    try:
        yield
    finally:
        _record_id_var.reset(token_record)
        _event_var.reset(token_event)


def configure_logging(level: str = "INFO", *, console: Console | None = None) -> None:
    """Install the rich handler on the ``knowdoc`` logger.

    Calling it again replaces the handler, so the level and console can be changed at
    any time without duplicating output.

    Args:
        level: Logging level name.
        console: Console to write to. Defaults to a stderr console.
    """

    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        logger.removeHandler(_handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    handler.addFilter(_EditorContextFilter())
    handler.setFormatter(logging.Formatter(fmt="%(editor)s%(name)s: %(message)s"))

    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    _handler = handler


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""

    return logging.getLogger(name)


def log_exception(logger: logging.Logger, msg: str, **context: Any) -> None:
    """Log an exception with optional structured context."""

    if context:
        logger.exception("%s | context=%s", msg, context)
    else:
        logger.exception("%s", msg)
