"""Engine entry points: resolve, load, and compile stylesheets."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from less_toolkit.compiler import LesscpyCompiler
from less_toolkit.includes import expand_includes, push_include
from less_toolkit.loaders import (
    ChainedResourceLoader,
    CssProcessingResourceLoader,
    DirectoryResourceLoader,
    FilesystemResourceLoader,
    HTTPResourceLoader,
    PackageResourceLoader,
    ResourceDirectory,
    UnixNewlinesResourceLoader,
)
from less_toolkit.loaders.base import is_absolute
from less_toolkit.logging_utils import compile_context
from less_toolkit.models import LessOptions
from less_toolkit.paths import resolve_filename, resolve_search_paths

if TYPE_CHECKING:
    from less_toolkit.compiler import LessCompiler
    from less_toolkit.loaders import NamingContext, ResourceLoader

logger = logging.getLogger(__name__)


class ResourceLocation(Protocol):
    """Anything that can name where a stylesheet lives."""

    @property
    def location(self) -> str:
        """Fully qualified location of the stylesheet."""
        ...


def default_resource_loader(
    options: LessOptions, directory: NamingContext | None = None
) -> ResourceLoader:
    """Build the standard loader chain for the given options.

    Backends are tried in order: filesystem, package data, directory entries,
    then HTTP. In ``css`` mode the chain is wrapped so ``.less`` imports fall
    back to ``.css`` siblings. Output always has Unix newlines.
    """
    loader: ResourceLoader = ChainedResourceLoader(
        FilesystemResourceLoader(),
        PackageResourceLoader(anchor=options.resource_package),
        DirectoryResourceLoader(directory if directory is not None else ResourceDirectory()),
        HTTPResourceLoader(timeout=options.http_timeout),
    )
    if options.css:
        loader = CssProcessingResourceLoader(loader)
    return UnixNewlinesResourceLoader(loader)


class LessEngine:
    """Compile LESS stylesheets loaded from files, URLs, or raw text.

    One engine may serve many compiles, including concurrent ones: every call
    builds its own search path list and include stack.
    """

    def __init__(
        self,
        options: LessOptions | None = None,
        loader: ResourceLoader | None = None,
        compiler: LessCompiler | None = None,
    ) -> None:
        self.options = options or LessOptions()
        self.loader = loader if loader is not None else default_resource_loader(self.options)
        self.compiler = compiler if compiler is not None else LesscpyCompiler()
        logger.debug(
            "Initialized LESS engine (loader=%s, compiler=%s)",
            type(self.loader).__name__,
            type(self.compiler).__name__,
        )

    def compile(
        self, source: str, location: str | None = None, compress: bool | None = None
    ) -> str:
        """Compile raw LESS text.

        Args:
            source: Stylesheet text.
            location: Where the text came from; imports are resolved against its
                directory after the configured search paths.
            compress: Minify the output. Defaults to ``options.compress``.
        """
        location = location or ""
        start = time.perf_counter()
        with compile_context(location):
            paths = resolve_search_paths(self.options.paths, location)
            include_stack: list[str] = []
            root = resolve_filename(location)
            if root:
                push_include(include_stack, root)
            materialized = expand_includes(
                source, self.loader, paths, include_stack, self.options.charset
            )
            result = self._run_compiler(materialized, location, include_stack, compress)
        logger.debug(
            "The compilation of %s took %d ms.",
            location or "<input>",
            (time.perf_counter() - start) * 1000,
        )
        return result

    def compile_url(self, url: str, compress: bool | None = None) -> str:
        """Compile the stylesheet at a URL (``http:``, ``https:``, ``file:``...)."""
        location = str(url)
        logger.debug("Compiling URL: %s", location)
        return self._load_and_compile(resolve_filename(location), location, compress)

    def compile_location(
        self, location: ResourceLocation | str, compress: bool | None = None
    ) -> str:
        """Compile a stylesheet addressed by its full location.

        Absolute locations (URLs, rooted paths) are loaded as given. A relative
        location is looked up by its filename in the configured paths and then
        in its own directory.
        """
        value = location if isinstance(location, str) else location.location
        logger.debug("Compiling location: %s", value)
        resource = value if is_absolute(value) else resolve_filename(value)
        return self._load_and_compile(resource, value, compress)

    def compile_file(self, path: str | Path, compress: bool | None = None) -> str:
        """Compile a local stylesheet file."""
        location = str(Path(path).absolute())
        logger.debug("Compiling File: file:%s", location)
        return self._load_and_compile(resolve_filename(location), location, compress)

    def compile_to_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        compress: bool | None = None,
    ) -> None:
        """Compile a local stylesheet file and write the CSS to ``output_path``."""
        content = self.compile_file(input_path, compress)
        output = Path(output_path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(content, encoding=self.options.charset)
        logger.debug("Wrote %d characters to %s", len(content), output)

    def _load_and_compile(self, resource: str, location: str, compress: bool | None) -> str:
        start = time.perf_counter()
        with compile_context(location):
            paths = resolve_search_paths(self.options.paths, location)
            include_stack: list[str] = []
            push_include(include_stack, resource)
            charset = self.options.charset
            source = self.loader.load(resource, paths, include_stack, charset)
            source = expand_includes(source, self.loader, paths, include_stack, charset)
            result = self._run_compiler(source, location, include_stack, compress)
        logger.debug(
            "The compilation of %s took %d ms.", location, (time.perf_counter() - start) * 1000
        )
        return result

    def _run_compiler(
        self, source: str, location: str, include_stack: list[str], compress: bool | None
    ) -> str:
        if compress is None:
            compress = self.options.compress
        return self.compiler.compile(source, location, include_stack, compress)
