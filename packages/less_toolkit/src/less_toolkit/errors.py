"""Error types raised while resolving, loading, and compiling stylesheets."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class LessError(Exception):
    """Base class for all stylesheet loading and compilation failures."""


class ResourceNotFoundError(LessError):
    """No backend could locate the resource under any search path."""

    def __init__(
        self,
        resource: str,
        paths: Sequence[str] = (),
        include_stack: Sequence[str] = (),
    ) -> None:
        self.resource = resource
        self.paths = list(paths)
        self.include_stack = list(include_stack)
        msg = f"Resource '{resource}' not found in paths {self.paths}"
        if self.include_stack:
            msg += f" (include chain: {' -> '.join(self.include_stack)})"
        super().__init__(msg)


class ResourceAccessError(LessError):
    """A backend reached the resource location but reading it failed."""

    def __init__(self, resource: str, reason: str) -> None:
        self.resource = resource
        self.reason = reason
        super().__init__(f"Unable to access '{resource}': {reason}")


class UnsupportedCharsetError(LessError, LookupError):
    """The configured character set cannot be used for decoding."""

    def __init__(self, charset: str) -> None:
        self.charset = charset
        super().__init__(f"Unsupported charset: '{charset}'")


class CircularIncludeError(LessError):
    """A resource already in the include stack was requested again."""

    def __init__(self, resource: str, include_stack: Sequence[str]) -> None:
        self.resource = resource
        self.include_stack = list(include_stack)
        chain = " -> ".join([*self.include_stack, resource])
        super().__init__(f"Circular include of '{resource}': {chain}")


class LessCompilationError(LessError):
    """The stylesheet compiler rejected the materialized source."""

    def __init__(self, location: str, message: str) -> None:
        self.location = location
        self.message = message
        where = location or "<input>"
        super().__init__(f"Failed to compile {where}: {message}")
