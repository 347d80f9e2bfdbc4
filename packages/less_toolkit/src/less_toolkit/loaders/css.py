"""Decorator that lets plain ``.css`` files take part in LESS imports.

Nesting works through two cooperating rewrites:

1. When a ``.less`` resource is requested and does not exist, the lookup is
   retried with the ``.css`` extension.
2. Every ``.css`` string in loaded content is replaced with ``.less``, so
   nested imports come back through this loader and hit rule 1 again.

The second rewrite is a whole-text substring replacement. Occurrences of
``.css`` outside import directives (comments, URLs, selectors) are rewritten
too; existing stylesheets depend on that behaviour, so it is kept.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from less_toolkit.errors import ResourceNotFoundError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from less_toolkit.loaders.base import ResourceLoader

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = ".less"
COMPILED_EXTENSION = ".css"


class CssProcessingResourceLoader:
    """Resolve ``.less`` includes to sibling ``.css`` files when needed."""

    def __init__(
        self,
        delegate: ResourceLoader,
        source_extension: str = SOURCE_EXTENSION,
        compiled_extension: str = COMPILED_EXTENSION,
    ) -> None:
        self.delegate = delegate
        self.source_extension = source_extension
        self.compiled_extension = compiled_extension

    def to_compiled(self, resource: str) -> str:
        """Swap a trailing source extension for the compiled one."""
        if resource.endswith(self.source_extension):
            return resource[: -len(self.source_extension)] + self.compiled_extension
        return resource

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        return self.delegate.exists(resource, paths) or self.delegate.exists(
            self.to_compiled(resource), paths
        )

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        try:
            content = self.delegate.load(resource, paths, include_stack, charset)
        except ResourceNotFoundError:
            fallback = self.to_compiled(resource)
            if fallback == resource:
                raise
            logger.debug("'%s' not found, falling back to '%s'", resource, fallback)
            content = self.delegate.load(fallback, paths, include_stack, charset)
        return content.replace(self.compiled_extension, self.source_extension)
