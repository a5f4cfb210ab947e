"""Search path roots: plain directories and zip-compatible archives.

The search path is an injected, read-only input. By default it mirrors
``sys.path``; an explicit override (from settings or the environment) can
replace it. Entries are classified on every call, so a root removed after
construction simply stops contributing matches.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote

if TYPE_CHECKING:
    from .settings import LocatorSettings

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_SUFFIXES: tuple[str, ...] = (".zip", ".whl", ".egg", ".pyz", ".jar")


class RootKind(str, Enum):
    """Kind of search path root."""

    DIRECTORY = "directory"
    ARCHIVE = "archive"


@dataclass(frozen=True)
class SearchPathRoot:
    """One directory or archive searched for resources."""

    kind: RootKind
    path: Path

    @property
    def is_directory(self) -> bool:
        return self.kind is RootKind.DIRECTORY

    @property
    def is_archive(self) -> bool:
        return self.kind is RootKind.ARCHIVE


def path_separator() -> str:
    """Return the separator between search path entries on this system."""
    return os.pathsep


def is_directory(path: Path) -> bool:
    """Check whether ``path`` is a readable directory.

    Permission failures (sandboxed hosts, restricted mounts) count as
    "not a directory" rather than an error.
    """
    try:
        return path.is_dir()
    except OSError as e:
        logger.debug(f"[search-path:probe] {path} not accessible: {e}")
        return False


def is_archive_file(path: Path, suffixes: Iterable[str] = DEFAULT_ARCHIVE_SUFFIXES) -> bool:
    """Check whether ``path`` is a file with one of the archive suffixes.

    Suffixes match as given or upper-cased (``.jar`` and ``.JAR``).
    Permission failures count as "not an archive".
    """
    name = path.name
    if not any(name.endswith(suffix) or name.endswith(suffix.upper()) for suffix in suffixes):
        return False
    try:
        return path.is_file()
    except OSError as e:
        logger.debug(f"[search-path:probe] {path} not accessible: {e}")
        return False


class SearchPath:
    """Ordered list of search path entries.

    Entries are kept raw; ``iter_roots()`` classifies them into directory and
    archive roots on each call and skips anything else.
    """

    def __init__(
        self,
        entries: Iterable[str | Path],
        archive_suffixes: Iterable[str] = DEFAULT_ARCHIVE_SUFFIXES,
    ):
        """Initialize with raw entries.

        Args:
            entries: Directory or archive paths in search order.
                An empty string means the current directory, as on sys.path.
            archive_suffixes: File name endings recognized as archives
        """
        self.entries: tuple[Path, ...] = tuple(Path(entry) for entry in entries)
        self.archive_suffixes: tuple[str, ...] = tuple(archive_suffixes)

    @classmethod
    def from_sys_path(
        cls,
        override: Iterable[str] | None = None,
        archive_suffixes: Iterable[str] = DEFAULT_ARCHIVE_SUFFIXES,
    ) -> SearchPath:
        """Build from ``sys.path`` unless an override is supplied.

        Override entries are URL-decoded (``%20`` becomes a space).
        """
        if override is not None:
            entries = [unquote(entry) for entry in override]
            logger.debug(f"[search-path:build] using override with {len(entries)} entries")
        else:
            entries = list(sys.path)
        return cls(entries, archive_suffixes)

    @classmethod
    def from_string(
        cls,
        value: str,
        archive_suffixes: Iterable[str] = DEFAULT_ARCHIVE_SUFFIXES,
    ) -> SearchPath:
        """Build from a ``os.pathsep`` separated string such as an environment variable."""
        entries = [entry for entry in value.split(path_separator()) if entry]
        return cls.from_sys_path(entries, archive_suffixes)

    @classmethod
    def from_settings(cls, settings: LocatorSettings) -> SearchPath:
        """Build from locator settings."""
        return cls.from_sys_path(settings.search_path, settings.archive_suffixes)

    def iter_roots(self) -> Iterator[SearchPathRoot]:
        """Classify entries one at a time, skipping those that are neither a directory nor an archive.

        Entries after the point where the caller stops iterating are never touched.
        """
        for entry in self.entries:
            if is_directory(entry):
                yield SearchPathRoot(RootKind.DIRECTORY, entry)
            elif is_archive_file(entry, self.archive_suffixes):
                yield SearchPathRoot(RootKind.ARCHIVE, entry)
            else:
                logger.debug(f"[search-path:skip] {entry}")

    def roots(self) -> list[SearchPathRoot]:
        """Classify every entry, skipping those that are neither a directory nor an archive."""
        return list(self.iter_roots())

    def directories(self) -> list[Path]:
        """Directory roots in search order."""
        return [entry for entry in self.entries if is_directory(entry)]

    def archives(self) -> list[Path]:
        """Archive roots in search order."""
        return [
            entry
            for entry in self.entries
            if not is_directory(entry) and is_archive_file(entry, self.archive_suffixes)
        ]

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"SearchPath({len(self.entries)} entries)"
