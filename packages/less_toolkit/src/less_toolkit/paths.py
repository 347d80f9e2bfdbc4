"""Search path and filename resolution for stylesheet locations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


def normalize_separators(value: str) -> str:
    """Replace backslash separators with forward slashes."""
    return value.replace("\\", "/")


def _split_location(location: str) -> tuple[str, str]:
    """Split a location into (directory including separator, filename)."""
    index = max(location.rfind("/"), location.rfind("\\"))
    return location[: index + 1], location[index + 1 :]


def resolve_search_paths(
    configured_paths: Iterable[str] | None, current_location: str
) -> list[str]:
    """Build the ordered search path list for a compile invocation.

    Configured paths keep their order and take priority so that included files
    can be overridden; the directory of ``current_location`` is appended last
    as the fallback. A location without any separator contributes an empty
    path, meaning "relative to the working directory".

    Args:
        configured_paths: Search paths from configuration, may be None.
        current_location: Location of the stylesheet being compiled.

    Returns:
        New list of search paths, all using ``/`` separators.
    """
    directory, _ = _split_location(current_location)
    paths = [*(configured_paths or []), directory]
    return [normalize_separators(path) for path in paths]


def resolve_filename(location: str) -> str:
    """Return the bare filename of a location (text after the last separator)."""
    _, filename = _split_location(location)
    return filename
