"""Filesystem backend."""

from __future__ import annotations

import logging
import stat
from pathlib import Path
from typing import TYPE_CHECKING

from less_toolkit.errors import ResourceAccessError, ResourceNotFoundError
from less_toolkit.loaders.base import (
    candidates,
    decode_content,
    ensure_charset,
    strip_scheme,
    url_scheme,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

logger = logging.getLogger(__name__)


def _is_regular_file(path: Path) -> bool:
    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise ResourceAccessError(str(path), exc.strerror or str(exc)) from exc
    return stat.S_ISREG(mode)


class FilesystemResourceLoader:
    """Load stylesheets from plain paths and ``file:`` URLs."""

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        """Check whether a regular file exists for the resource."""
        return self._locate(resource, paths) is not None

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        """Read and decode the first matching file."""
        ensure_charset(charset)
        path = self._locate(resource, paths)
        if path is None:
            raise ResourceNotFoundError(resource, paths, include_stack)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ResourceAccessError(str(path), exc.strerror or str(exc)) from exc
        logger.debug("Loaded '%s' from %s", resource, path)
        return decode_content(str(path), data, charset)

    def _locate(self, resource: str, paths: Sequence[str]) -> Path | None:
        for candidate in candidates(resource, paths):
            scheme = url_scheme(candidate)
            if scheme == "file":
                candidate = strip_scheme(candidate, "file")
            elif scheme is not None:
                continue
            path = Path(candidate)
            if _is_regular_file(path):
                return path
        return None
