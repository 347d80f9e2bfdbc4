"""Include-stack tracking and recursive expansion of import directives.

The include stack is a plain list owned by one compile invocation and passed
by reference through every nested load. Each nested load pushes its resource
before descending and truncates the stack back on the way out, so a resource
that shows up twice in the stack is a cycle.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import TYPE_CHECKING

from less_toolkit.errors import CircularIncludeError
from less_toolkit.loaders.css import COMPILED_EXTENSION, SOURCE_EXTENSION
from less_toolkit.paths import normalize_separators, resolve_filename

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from less_toolkit.loaders.base import ResourceLoader

logger = logging.getLogger(__name__)

_DIRECTIVE_PATTERN = re.compile(
    r"""
    (?P<skip>
        //[^\n]*
      | /\*.*?\*/
      | "(?:\\.|[^"\\\n])*"
      | '(?:\\.|[^'\\\n])*'
    )
  | @(?:import|include)\s*
    (?:\((?P<options>[^)]*)\)\s*)?
    (?:
        url\(\s*(?P<url_quote>["']?)(?P<url>[^"'\n)]+?)(?P=url_quote)\s*\)
      | (?P<quote>["'])(?P<target>[^"'\n]+)(?P=quote)
    )
    (?P<media>[^;\n]*)
    ;
    """,
    re.VERBOSE | re.DOTALL,
)


def push_include(include_stack: list[str], resource: str) -> int:
    """Append a resource to the stack, refusing resources already on it.

    Returns:
        Stack length before the push, for truncating back afterwards.

    Raises:
        CircularIncludeError: If the resource is already being loaded.
    """
    resource = normalize_separators(resource)
    if resource in include_stack:
        raise CircularIncludeError(resource, include_stack)
    depth = len(include_stack)
    include_stack.append(resource)
    return depth


@contextmanager
def include_scope(include_stack: list[str], resource: str) -> Iterator[None]:
    """Hold ``resource`` on the include stack for the duration of the block."""
    depth = push_include(include_stack, resource)
    try:
        yield
    finally:
        del include_stack[depth:]


def import_options(match: re.Match[str]) -> frozenset[str]:
    """Return the lower-cased keywords of an ``@import (...)`` option list."""
    raw = match.group("options") or ""
    return frozenset(option.strip().lower() for option in raw.split(",") if option.strip())


def include_target(match: re.Match[str]) -> str | None:
    """Return the resource an import directive should inline, or None to keep it.

    Plain CSS imports (``.css`` targets without the ``(less)`` option, the
    ``(css)`` option) and imports scoped to a media query are left for the
    browser. ``(reference)`` imports are left for the compiler, which alone
    can use a file without emitting its rules. A target without an extension
    refers to a ``.less`` file.
    """
    options = import_options(match)
    target = (match.group("url") or match.group("target")).strip()
    if "css" in options or "reference" in options or match.group("media").strip():
        return None
    if target.lower().endswith(COMPILED_EXTENSION) and "less" not in options:
        return None
    if "." not in resolve_filename(target):
        target += SOURCE_EXTENSION
    return target


def expand_includes(
    text: str,
    loader: ResourceLoader,
    paths: Sequence[str],
    include_stack: list[str],
    charset: str,
    imported: set[str] | None = None,
) -> str:
    """Replace import directives in ``text`` with the content they reference.

    Comments and string literals are copied through untouched. A resource is
    inlined once per compile: ``imported`` collects what has already been
    inlined, and later imports of the same resource are dropped unless they
    carry the ``(multiple)`` option.

    Args:
        text: Stylesheet text to expand.
        loader: Loader used for every nested resource.
        paths: Search paths of the current compile.
        include_stack: The compile's include stack.
        charset: Charset used to decode nested resources.
        imported: Resources inlined so far in this compile. A new set is
            started when omitted.
    """
    if imported is None:
        imported = set()

    def _inline(match: re.Match[str]) -> str:
        if match.group("skip") is not None:
            return match.group(0)
        target = include_target(match)
        if target is None:
            return match.group(0)
        options = import_options(match)
        key = normalize_separators(target)
        if "multiple" not in options and key in imported and key not in include_stack:
            logger.debug("Skipping repeated import of '%s'", target)
            return ""
        if "optional" in options and not loader.exists(target, paths):
            logger.debug("Optional import '%s' not found, skipping", target)
            return ""
        return load_with_includes(
            loader, target, paths, include_stack, charset, imported, raw="inline" in options
        )

    return _DIRECTIVE_PATTERN.sub(_inline, text)


def load_with_includes(
    loader: ResourceLoader,
    resource: str,
    paths: Sequence[str],
    include_stack: list[str],
    charset: str,
    imported: set[str] | None = None,
    raw: bool = False,
) -> str:
    """Load a nested resource and, recursively, everything it imports.

    With ``raw`` the content is returned as loaded and its own imports are not
    expanded, as for ``@import (inline)``.
    """
    if imported is None:
        imported = set()
    with include_scope(include_stack, resource):
        imported.add(normalize_separators(resource))
        logger.debug("Including '%s' (depth %d)", resource, len(include_stack))
        text = loader.load(resource, paths, include_stack, charset)
        if raw:
            return text
        return expand_includes(text, loader, paths, include_stack, charset, imported)
