"""Directory-service backend for stylesheets published under a name."""

from __future__ import annotations

import logging
from threading import Lock
from typing import TYPE_CHECKING, Protocol

from less_toolkit.errors import ResourceAccessError, ResourceNotFoundError
from less_toolkit.loaders.base import (
    candidates,
    decode_content,
    ensure_charset,
    is_absolute,
    strip_scheme,
    url_scheme,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)

DIRECTORY_SCHEME = "directory"


class NamingContext(Protocol):
    """Name lookup service; raises KeyError for unbound names."""

    def lookup(self, name: str) -> bytes | str:
        """Return the object bound to ``name``."""
        ...


class ResourceDirectory:
    """In-memory naming context that stylesheets can be published into."""

    def __init__(self, bindings: dict[str, bytes | str] | None = None) -> None:
        self._bindings: dict[str, bytes | str] = dict(bindings or {})
        self._lock = Lock()

    def publish(self, name: str, content: bytes | str) -> None:
        """Bind content to a name, replacing any previous binding."""
        with self._lock:
            self._bindings[name.lstrip("/")] = content

    def unpublish(self, name: str) -> None:
        """Remove a binding if present."""
        with self._lock:
            self._bindings.pop(name.lstrip("/"), None)

    def lookup(self, name: str) -> bytes | str:
        """Return the content bound to ``name``."""
        with self._lock:
            return self._bindings[name.lstrip("/")]


class DirectoryResourceLoader:
    """Load stylesheets bound in a naming context."""

    def __init__(self, context: NamingContext) -> None:
        self.context = context

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        """Check whether any composed name is bound."""
        return self._locate(resource, paths) is not None

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        """Decode the content bound to the first matching name."""
        ensure_charset(charset)
        found = self._locate(resource, paths)
        if found is None:
            raise ResourceNotFoundError(resource, paths, include_stack)
        name, content = found
        logger.debug("Loaded '%s' from directory entry %s", resource, name)
        if isinstance(content, str):
            return content
        return decode_content(name, content, charset)

    def _locate(self, resource: str, paths: Sequence[str]) -> tuple[str, bytes | str] | None:
        for candidate in candidates(resource, paths):
            scheme = url_scheme(candidate)
            if scheme == DIRECTORY_SCHEME:
                name = strip_scheme(candidate, DIRECTORY_SCHEME)
            elif scheme is None and not is_absolute(candidate):
                name = candidate
            else:
                continue
            try:
                content = self.context.lookup(name)
            except KeyError:
                continue
            if not isinstance(content, (bytes, str)):
                msg = f"bound object is {type(content).__name__}, not stylesheet text"
                raise ResourceAccessError(name, msg)
            return name, content
        return None
