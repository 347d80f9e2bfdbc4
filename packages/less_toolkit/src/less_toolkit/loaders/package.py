"""Packaged-resource backend.

Stylesheets bundled inside installed Python packages are addressed as
``package:<dotted.package>/<path/inside/package>``. When the loader is created
with an ``anchor`` package, plain relative names are looked up under that
package as well.
"""

from __future__ import annotations

import logging
from importlib import resources
from typing import TYPE_CHECKING

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
    from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)

PACKAGE_SCHEME = "package"


class PackageResourceLoader:
    """Load stylesheets shipped as package data."""

    def __init__(self, anchor: str | None = None) -> None:
        self.anchor = anchor

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        """Check whether package data exists for the resource."""
        return self._locate(resource, paths) is not None

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        """Read and decode the first matching package resource."""
        ensure_charset(charset)
        target = self._locate(resource, paths)
        if target is None:
            raise ResourceNotFoundError(resource, paths, include_stack)
        try:
            data = target.read_bytes()
        except OSError as exc:
            raise ResourceAccessError(str(target), exc.strerror or str(exc)) from exc
        logger.debug("Loaded '%s' from package resource %s", resource, target)
        return decode_content(str(target), data, charset)

    def _locate(self, resource: str, paths: Sequence[str]) -> Traversable | None:
        for candidate in candidates(resource, paths):
            target = self._resolve(candidate)
            if target is None:
                continue
            try:
                if target.is_file():
                    return target
            except OSError as exc:
                raise ResourceAccessError(candidate, exc.strerror or str(exc)) from exc
        return None

    def _resolve(self, candidate: str) -> Traversable | None:
        if url_scheme(candidate) == PACKAGE_SCHEME:
            name = strip_scheme(candidate, PACKAGE_SCHEME).lstrip("/")
            package, _, subpath = name.partition("/")
        elif self.anchor and not is_absolute(candidate):
            package, subpath = self.anchor, candidate
        else:
            return None

        parts = [part for part in subpath.split("/") if part and part != "."]
        if not package or not parts or ".." in parts:
            return None
        try:
            target = resources.files(package)
        except ModuleNotFoundError:
            return None
        except ImportError as exc:
            raise ResourceAccessError(candidate, str(exc)) from exc
        for part in parts:
            target = target / part
        return target
