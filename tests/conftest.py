"""Pytest configuration for loading-utils tests."""

import zipfile
from pathlib import Path

import pytest


def write_archive(path: Path, entries: dict[str, str]) -> Path:
    """Write a zip archive with the given entry names and text contents."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in entries.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def make_archive(tmp_path):
    """Factory fixture: make_archive("libs.zip", {"pkg/a.txt": "a"}) -> Path."""

    def _make(name: str, entries: dict[str, str]) -> Path:
        return write_archive(tmp_path / name, entries)

    return _make


@pytest.fixture
def dir_root(tmp_path):
    """A directory root holding config/app.conf and config/extra/notes.txt."""
    root = tmp_path / "dir-root"
    (root / "config" / "extra").mkdir(parents=True)
    (root / "config" / "app.conf").write_text("name = dir-root\n")
    (root / "config" / "extra" / "notes.txt").write_text("notes\n")
    return root
