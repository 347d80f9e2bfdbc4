"""Resource loaders for stylesheets and the files they import."""

from less_toolkit.loaders.base import ResourceLoader
from less_toolkit.loaders.chained import ChainedResourceLoader
from less_toolkit.loaders.css import CssProcessingResourceLoader
from less_toolkit.loaders.directory import (
    DirectoryResourceLoader,
    NamingContext,
    ResourceDirectory,
)
from less_toolkit.loaders.filesystem import FilesystemResourceLoader
from less_toolkit.loaders.http import HTTPResourceLoader
from less_toolkit.loaders.newlines import UnixNewlinesResourceLoader
from less_toolkit.loaders.package import PackageResourceLoader

__all__ = [
    "ChainedResourceLoader",
    "CssProcessingResourceLoader",
    "DirectoryResourceLoader",
    "FilesystemResourceLoader",
    "HTTPResourceLoader",
    "NamingContext",
    "PackageResourceLoader",
    "ResourceDirectory",
    "ResourceLoader",
    "UnixNewlinesResourceLoader",
]
