"""Decorator forcing Unix line endings on loaded content."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from less_toolkit.loaders.base import ResourceLoader

_LINE_ENDINGS = re.compile(r"\r\n?")


def to_unix_newlines(text: str) -> str:
    """Rewrite ``\\r\\n`` and bare ``\\r`` line endings to ``\\n``."""
    return _LINE_ENDINGS.sub("\n", text)


class UnixNewlinesResourceLoader:
    """Wrap a loader so that every loaded text uses ``\\n`` line endings."""

    def __init__(self, delegate: ResourceLoader) -> None:
        self.delegate = delegate

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        return self.delegate.exists(resource, paths)

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        return to_unix_newlines(self.delegate.load(resource, paths, include_stack, charset))
