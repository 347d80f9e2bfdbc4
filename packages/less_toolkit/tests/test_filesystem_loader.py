from __future__ import annotations

from pathlib import Path

import pytest
from conftest import write
from less_toolkit.errors import ResourceNotFoundError, UnsupportedCharsetError
from less_toolkit.loaders import FilesystemResourceLoader


def test_filesystem_loader_searches_paths_in_order(tmp_path: Path) -> None:
    write(tmp_path / "first" / "vars.less", "@color: red;")
    write(tmp_path / "second" / "vars.less", "@color: blue;")
    paths = [f"{tmp_path}/first/", f"{tmp_path}/second/"]

    loader = FilesystemResourceLoader()

    assert loader.exists("vars.less", paths)
    assert loader.load("vars.less", paths, [], "UTF-8") == "@color: red;"


def test_filesystem_loader_skips_missing_roots(tmp_path: Path) -> None:
    write(tmp_path / "second" / "vars.less", "@color: blue;")
    paths = [f"{tmp_path}/missing/", f"{tmp_path}/second/"]

    assert FilesystemResourceLoader().load("vars.less", paths, [], "UTF-8") == "@color: blue;"


def test_filesystem_loader_reports_missing_resource(tmp_path: Path) -> None:
    loader = FilesystemResourceLoader()
    paths = [f"{tmp_path}/"]

    assert not loader.exists("nope.less", paths)
    with pytest.raises(ResourceNotFoundError, match="nope.less") as excinfo:
        loader.load("nope.less", paths, ["main.less"], "UTF-8")
    assert excinfo.value.include_stack == ["main.less"]


def test_filesystem_loader_ignores_directories(tmp_path: Path) -> None:
    (tmp_path / "dir.less").mkdir()
    assert not FilesystemResourceLoader().exists("dir.less", [f"{tmp_path}/"])


def test_filesystem_loader_understands_file_urls(tmp_path: Path) -> None:
    write(tmp_path / "theme.less", "body {}")
    loader = FilesystemResourceLoader()

    assert loader.load("theme.less", [f"file:{tmp_path}/"], [], "UTF-8") == "body {}"
    assert loader.exists("theme.less", [f"file://{tmp_path}/"])


def test_filesystem_loader_ignores_remote_paths(tmp_path: Path) -> None:
    assert not FilesystemResourceLoader().exists("theme.less", ["http://example.com/"])


def test_filesystem_loader_accepts_absolute_resource(tmp_path: Path) -> None:
    target = write(tmp_path / "abs.less", "a {}")
    assert FilesystemResourceLoader().load(str(target), ["/elsewhere/"], [], "UTF-8") == "a {}"


def test_filesystem_loader_decodes_with_charset(tmp_path: Path) -> None:
    write(tmp_path / "latin.less", "/* café */".encode("latin-1"))
    text = FilesystemResourceLoader().load("latin.less", [f"{tmp_path}/"], [], "ISO-8859-1")
    assert text == "/* café */"


def test_filesystem_loader_rejects_unknown_charset_before_reading(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    write(tmp_path / "vars.less", "@a: 1;")

    def _fail(self: Path) -> bytes:
        raise AssertionError("read attempted")

    monkeypatch.setattr(Path, "read_bytes", _fail)
    with pytest.raises(UnsupportedCharsetError):
        FilesystemResourceLoader().load("vars.less", [f"{tmp_path}/"], [], "not-a-real-charset")
