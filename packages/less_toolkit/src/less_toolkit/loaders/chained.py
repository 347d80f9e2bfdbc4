"""Composite loader trying several loaders in priority order."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from less_toolkit.errors import ResourceAccessError, ResourceNotFoundError
from less_toolkit.loaders.base import ensure_charset

if TYPE_CHECKING:
    from collections.abc import Sequence

    from less_toolkit.loaders.base import ResourceLoader

logger = logging.getLogger(__name__)


class ChainedResourceLoader:
    """Delegate to the first loader that reports the resource exists.

    Order is precedence: with a filesystem loader ahead of an HTTP loader, a
    local file shadows a remote one of the same relative name. Access errors
    raised while probing one loader do not stop the others from being tried;
    they only surface when every loader failed that way.
    """

    def __init__(self, *loaders: ResourceLoader) -> None:
        self.loaders: tuple[ResourceLoader, ...] = loaders

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        """Return True as soon as one member loader finds the resource."""
        return self._select(resource, paths) is not None

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        """Load through the first member loader that has the resource."""
        ensure_charset(charset)
        loader = self._select(resource, paths)
        if loader is None:
            raise ResourceNotFoundError(resource, paths, include_stack)
        logger.debug("Loading '%s' with %s", resource, type(loader).__name__)
        return loader.load(resource, paths, include_stack, charset)

    def _select(self, resource: str, paths: Sequence[str]) -> ResourceLoader | None:
        last_error: ResourceAccessError | None = None
        failures = 0
        for loader in self.loaders:
            try:
                if loader.exists(resource, paths):
                    return loader
            except ResourceAccessError as exc:
                logger.debug(
                    "%s could not check '%s': %s", type(loader).__name__, resource, exc
                )
                last_error = exc
                failures += 1
        if last_error is not None and failures == len(self.loaders):
            raise last_error
        return None
