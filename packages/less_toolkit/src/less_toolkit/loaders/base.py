"""Shared loader contract and helpers used by every backend."""

from __future__ import annotations

import codecs
import re
from typing import TYPE_CHECKING, Protocol

from less_toolkit.errors import ResourceAccessError, UnsupportedCharsetError
from less_toolkit.paths import normalize_separators

if TYPE_CHECKING:
    from collections.abc import Sequence

# Two or more characters so that Windows drive letters ("C:/") are not schemes.
_SCHEME_PATTERN = re.compile(r"^(?P<scheme>[A-Za-z][A-Za-z0-9+.\-]+):")
_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:/")


class ResourceLoader(Protocol):
    """Locate and load stylesheets referenced by import directives."""

    def exists(self, resource: str, paths: Sequence[str]) -> bool:
        """Return True if the resource can be located under any of the paths."""
        ...

    def load(
        self,
        resource: str,
        paths: Sequence[str],
        include_stack: list[str],
        charset: str,
    ) -> str:
        """Return the decoded contents of the resource."""
        ...


def ensure_charset(charset: str) -> None:
    """Raise UnsupportedCharsetError unless the codec registry knows the charset."""
    try:
        codecs.lookup(charset)
    except LookupError as exc:
        raise UnsupportedCharsetError(charset) from exc


def decode_content(resource: str, data: bytes, charset: str) -> str:
    """Decode raw resource bytes, reporting undecodable content as an access error."""
    ensure_charset(charset)
    try:
        return data.decode(charset)
    except UnicodeDecodeError as exc:
        raise ResourceAccessError(resource, f"content is not valid {charset}") from exc


def url_scheme(value: str) -> str | None:
    """Return the lower-cased URL scheme of a location, if it has one."""
    match = _SCHEME_PATTERN.match(value)
    return match.group("scheme").lower() if match else None


def strip_scheme(value: str, scheme: str) -> str:
    """Remove a ``scheme:`` prefix (and any ``//`` authority marker) from a location."""
    prefix = f"{scheme}:"
    if not value.lower().startswith(prefix):
        return value
    value = value[len(prefix) :]
    if value.startswith("//"):
        value = value[2:]
        # file://host/path keeps the leading slash of the path
        if scheme == "file" and not value.startswith("/"):
            value = value[value.find("/") :] if "/" in value else ""
    return value


def is_absolute(location: str) -> bool:
    """Return True for URLs and rooted filesystem paths."""
    location = normalize_separators(location)
    return bool(
        url_scheme(location) or location.startswith("/") or _DRIVE_PATTERN.match(location)
    )


def compose(path: str, resource: str) -> str:
    """Join a search path and a resource name.

    Resources that are already absolute (a URL with a scheme or a rooted path)
    are returned unchanged.
    """
    resource = normalize_separators(resource)
    if is_absolute(resource):
        return resource
    path = normalize_separators(path)
    if path and not path.endswith("/"):
        path += "/"
    return path + resource


def candidates(resource: str, paths: Sequence[str]) -> list[str]:
    """Return the distinct locations to try for a resource, in search order."""
    seen: list[str] = []
    for path in paths or [""]:
        candidate = compose(path, resource)
        if candidate not in seen:
            seen.append(candidate)
    return seen
