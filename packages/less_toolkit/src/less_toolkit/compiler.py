"""Compiler interface and the default lesscpy-backed implementation."""

from __future__ import annotations

import logging
from io import StringIO
from typing import Protocol

import lesscpy

from less_toolkit.errors import LessCompilationError

logger = logging.getLogger(__name__)


class LessCompiler(Protocol):
    """Turn materialized LESS source into CSS."""

    def compile(
        self,
        source: str,
        location: str,
        include_stack: list[str],
        compress: bool,
    ) -> str:
        """Compile ``source`` and return CSS.

        Raises:
            LessCompilationError: If the source does not compile.
        """
        ...


class LesscpyCompiler:
    """Compile with the pure-Python lesscpy compiler."""

    def compile(
        self,
        source: str,
        location: str,
        include_stack: list[str],
        compress: bool,
    ) -> str:
        logger.debug(
            "Compiling %s (includes: %s, compress=%s)",
            location or "<input>",
            include_stack,
            compress,
        )
        try:
            return lesscpy.compile(StringIO(source), minify=compress)
        except Exception as exc:  # lesscpy raises a mix of its own and builtin errors
            raise LessCompilationError(location, str(exc)) from exc
