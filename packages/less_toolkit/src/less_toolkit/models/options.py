"""Pydantic model for engine options."""

from __future__ import annotations

import os
from typing import Literal

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

DEFAULT_CHARSET = "UTF-8"
DEFAULT_HTTP_TIMEOUT = 10.0

LineNumbers = Literal["comments", "mediaquery", "all"]


class LessOptions(BaseModel, frozen=True):
    """Options for loading and compiling stylesheets.

    Only ``charset``, ``css``, ``paths``, ``http_timeout`` and
    ``resource_package`` steer resource loading. The remaining fields are
    handed to the compiler untouched.
    """

    charset: str = DEFAULT_CHARSET
    css: bool = False
    paths: list[str] = Field(default_factory=list)
    http_timeout: float = Field(default=DEFAULT_HTTP_TIMEOUT, gt=0)
    resource_package: str | None = None
    # Compiler pass-through settings
    compress: bool = False
    optimization: int = Field(default=3, ge=0)
    line_numbers: LineNumbers | None = None
    source_map: bool = False
    source_map_rootpath: str | None = None
    source_map_basepath: str | None = None
    source_map_url: str | None = None

    @field_validator("charset")
    @classmethod
    def _charset_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            msg = "charset must not be empty"
            raise ValueError(msg)
        return value


def _parse_list(value: str) -> list[str]:
    """Parse comma-separated string into list."""
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


def load_options() -> LessOptions:
    """Load options from ``LESS_*`` environment variables with defaults."""
    load_dotenv(find_dotenv(usecwd=True))

    return LessOptions(
        charset=os.getenv("LESS_CHARSET", DEFAULT_CHARSET),
        css=_parse_bool(os.getenv("LESS_CSS", "false")),
        paths=_parse_list(os.getenv("LESS_PATHS", "")),
        http_timeout=float(os.getenv("LESS_HTTP_TIMEOUT", str(DEFAULT_HTTP_TIMEOUT))),
        resource_package=os.getenv("LESS_RESOURCE_PACKAGE") or None,
        compress=_parse_bool(os.getenv("LESS_COMPRESS", "false")),
        optimization=int(os.getenv("LESS_OPTIMIZATION", "3")),
        line_numbers=os.getenv("LESS_LINE_NUMBERS") or None,  # type: ignore[arg-type]
        source_map=_parse_bool(os.getenv("LESS_SOURCE_MAP", "false")),
        source_map_rootpath=os.getenv("LESS_SOURCE_MAP_ROOTPATH") or None,
        source_map_basepath=os.getenv("LESS_SOURCE_MAP_BASEPATH") or None,
        source_map_url=os.getenv("LESS_SOURCE_MAP_URL") or None,
    )
