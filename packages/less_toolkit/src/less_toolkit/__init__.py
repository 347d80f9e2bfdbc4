from less_toolkit.compiler import LessCompiler, LesscpyCompiler
from less_toolkit.engine import LessEngine, ResourceLocation, default_resource_loader
from less_toolkit.errors import (
    CircularIncludeError,
    LessCompilationError,
    LessError,
    ResourceAccessError,
    ResourceNotFoundError,
    UnsupportedCharsetError,
)
from less_toolkit.includes import expand_includes, include_scope, load_with_includes
from less_toolkit.loaders import (
    ChainedResourceLoader,
    CssProcessingResourceLoader,
    DirectoryResourceLoader,
    FilesystemResourceLoader,
    HTTPResourceLoader,
    PackageResourceLoader,
    ResourceDirectory,
    ResourceLoader,
    UnixNewlinesResourceLoader,
)
from less_toolkit.logging_utils import install_compile_log_filter
from less_toolkit.models import LessOptions, load_options
from less_toolkit.paths import resolve_filename, resolve_search_paths

__all__ = [
    "ChainedResourceLoader",
    "CircularIncludeError",
    "CssProcessingResourceLoader",
    "DirectoryResourceLoader",
    "FilesystemResourceLoader",
    "HTTPResourceLoader",
    "LessCompilationError",
    "LessCompiler",
    "LessEngine",
    "LessError",
    "LessOptions",
    "LesscpyCompiler",
    "PackageResourceLoader",
    "ResourceAccessError",
    "ResourceDirectory",
    "ResourceLoader",
    "ResourceLocation",
    "ResourceNotFoundError",
    "UnixNewlinesResourceLoader",
    "UnsupportedCharsetError",
    "default_resource_loader",
    "expand_includes",
    "include_scope",
    "install_compile_log_filter",
    "load_options",
    "load_with_includes",
    "resolve_filename",
    "resolve_search_paths",
]
