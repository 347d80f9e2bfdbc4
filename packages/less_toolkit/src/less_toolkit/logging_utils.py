"""Logging helpers that tag records with the stylesheet being compiled."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

_compile_location_ctx: ContextVar[str | None] = ContextVar("less_compile_location", default=None)


def get_compile_location() -> str | None:
    """Return the location of the compile running in this context, if any."""
    return _compile_location_ctx.get()


@contextmanager
def compile_context(location: str) -> Iterator[None]:
    """Mark ``location`` as the stylesheet being compiled for the block."""
    token = _compile_location_ctx.set(location or "<input>")
    try:
        yield
    finally:
        _compile_location_ctx.reset(token)


class CompileContextFilter(logging.Filter):
    """Attach the current compile location to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject less_location into the log record."""
        record.less_location = get_compile_location() or "-"
        return True


def install_compile_log_filter(targets: Iterable[logging.Filterer] | None = None) -> None:
    """Install compile context filters for structured logging.

    Logger-level filters only see records logged on that exact logger, so the
    default is to attach to the root logger's handlers, which see every record
    that propagates.

    Args:
        targets: Optional loggers or handlers to attach the filter to.
    """
    filterers = list(targets) if targets is not None else list(logging.getLogger().handlers)
    for filterer in filterers:
        if any(isinstance(flt, CompileContextFilter) for flt in filterer.filters):
            continue
        filterer.addFilter(CompileContextFilter())
