from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def _clear_less_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in list(os.environ):
        if name.startswith("LESS_"):
            monkeypatch.delenv(name, raising=False)
    # Keep load_dotenv() from picking up a developer's .env
    monkeypatch.chdir(tmp_path)


def write(path: Path, content: str | bytes) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, bytes):
        path.write_bytes(content)
    else:
        path.write_text(content, encoding="utf-8")
    return path


class RecordingLoader:
    """In-memory loader that records every call made to it."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = dict(files or {})
        self.exists_calls: list[str] = []
        self.load_calls: list[str] = []
        self.stack_depths: list[int] = []

    def exists(self, resource: str, paths) -> bool:
        self.exists_calls.append(resource)
        return resource in self.files

    def load(self, resource: str, paths, include_stack: list[str], charset: str) -> str:
        from less_toolkit.errors import ResourceNotFoundError

        self.load_calls.append(resource)
        self.stack_depths.append(len(include_stack))
        if resource not in self.files:
            raise ResourceNotFoundError(resource, paths, include_stack)
        return self.files[resource]


class EchoCompiler:
    """Compiler stand-in that returns the materialized source unchanged."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, list[str], bool]] = []

    def compile(self, source: str, location: str, include_stack: list[str], compress: bool) -> str:
        self.calls.append((source, location, list(include_stack), compress))
        return source
