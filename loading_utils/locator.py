"""Resource lookup across every root of a search path.

Directory roots are queried through the filesystem; archive roots are read
as zip files and only their entry names are inspected. A root that is
missing, unreadable or corrupt contributes nothing; it never aborts a scan.
"""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Callable
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO
from typing import TextIO
from typing import TypeVar

from .errors import ResourceLoadError
from .errors import ResourceNotFoundError
from .search_path import SearchPath
from .streams import DEFAULT_ENCODING

logger = logging.getLogger(__name__)

T = TypeVar("T")


def strip_leading_slash(name: str) -> str:
    """Remove a single leading ``/`` or ``\\`` from ``name``."""
    if name and name[0] in "/\\":
        return name[1:]
    return name


def entry_in_directory(entry_name: str | None, dir_name: str | None) -> bool:
    """Check whether an archive entry lives below ``dir_name``.

    The directory entry itself does not count.
    """
    if not entry_name or not dir_name:
        return False
    return entry_name != dir_name and entry_name.startswith(dir_name)


def archive_entry_child(entry_name: str, parent_dir: str) -> str:
    """Return the immediate child of ``parent_dir`` that contains ``entry_name``.

    Example:
        >>> archive_entry_child("pkg/foo/a.txt", "pkg")
        'foo'
        >>> archive_entry_child("pkg/bar.txt", "pkg/")
        'bar.txt'
    """
    offset = len(parent_dir) if parent_dir.endswith("/") else len(parent_dir) + 1
    remainder = entry_name[offset:]
    separator_index = remainder.find("/")
    if separator_index > 0:
        return remainder[:separator_index]
    return remainder


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        logger.debug(f"[locator:probe] {path} not accessible: {e}")
        return False


def _is_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError as e:
        logger.debug(f"[locator:probe] {path} not accessible: {e}")
        return False


def _archive_names(archive: Path) -> list[str]:
    """Read entry names from an archive, or nothing if it cannot be read."""
    try:
        with zipfile.ZipFile(archive) as zf:
            return zf.namelist()
    except (OSError, zipfile.BadZipFile) as e:
        logger.warning(f"[locator:archive] skipping unreadable archive {archive}: {e}")
        return []


class ResourceLocator:
    """Find resources by relative path across a search path.

    Lookups return None or empty collections for missing resources; only the
    ``open_reader``/``load_*`` wrappers raise.
    """

    def __init__(self, search_path: SearchPath | None = None):
        """Initialize with a search path.

        Args:
            search_path: Roots to search. Defaults to ``sys.path``.
        """
        self.search_path = search_path if search_path is not None else SearchPath.from_sys_path()

    # ===== EXISTENCE AND LOOKUP =====

    def resource_exists(self, relative_path: str) -> bool:
        """Check whether any root holds ``relative_path``.

        Directory roots match when ``root/relative_path`` exists; archive
        roots match when an entry equals the path or is nested under it.
        Stops at the first match.
        """
        relative = strip_leading_slash(relative_path)
        for root in self.search_path.iter_roots():
            if root.is_directory:
                if _exists(root.path / relative):
                    logger.debug(f"[locator:exists] {relative} -> {root.path}")
                    return True
            elif self._archive_contains(root.path, relative):
                logger.debug(f"[locator:exists] {relative} -> {root.path} (archive)")
                return True
        return False

    def _archive_contains(self, archive: Path, relative: str) -> bool:
        target = relative.rstrip("/")
        nested_prefix = target + "/"
        return any(name.rstrip("/") == target or name.startswith(nested_prefix) for name in _archive_names(archive))

    def _iter_files(self, relative_path: str) -> Iterator[Path]:
        relative = strip_leading_slash(relative_path)
        for directory in self.search_path.directories():
            candidate = directory / relative
            if _is_file(candidate):
                yield candidate

    def find_file(self, relative_path: str) -> Path | None:
        """Return the first directory-root file for ``relative_path``, or None."""
        return next(self._iter_files(relative_path), None)

    def find_all_files(self, relative_path: str) -> list[Path]:
        """Return every directory-root file for ``relative_path``, in search order."""
        return list(self._iter_files(relative_path))

    def find_first(self, relative_path: str) -> BinaryIO | None:
        """Open the first directory-root file for ``relative_path``.

        Returns:
            Binary stream the caller must close, or None if no root has the file
        """
        stream = next(self._iter_streams(relative_path), None)
        if stream is None:
            logger.debug(f"[locator:find] {relative_path} not found")
        return stream

    def find_all(self, relative_path: str) -> list[BinaryIO]:
        """Open every directory-root file for ``relative_path``, in search order.

        Archive contents are not included. The caller must close every stream.
        """
        return list(self._iter_streams(relative_path))

    def _iter_streams(self, relative_path: str) -> Iterator[BinaryIO]:
        for path in self._iter_files(relative_path):
            try:
                stream = path.open("rb")
            except OSError as e:
                logger.debug(f"[locator:open] cannot open {path}: {e}")
                continue
            yield stream

    def find_root_ending_with(self, ending: str) -> Path | None:
        """Return the first directory root whose path ends with ``ending``."""
        for directory in self.search_path.directories():
            if str(directory).endswith(ending) or directory.as_posix().endswith(ending):
                return directory
        return None

    # ===== ENUMERATION =====

    def directory_child_names(self, relative_dir: str) -> list[str]:
        """List direct children of ``relative_dir`` in every directory root.

        Names are sorted per root; roots contribute in search order, so a name
        present in several roots appears several times.
        """
        relative = strip_leading_slash(relative_dir)
        names: list[str] = []
        for directory in self.search_path.directories():
            full_dir = directory / relative
            if not _exists(full_dir):
                continue
            try:
                names.extend(sorted(child.name for child in full_dir.iterdir()))
            except OSError as e:
                logger.debug(f"[locator:list] cannot list {full_dir}: {e}")
        return names

    def archive_entries(self, relative_dir: str) -> list[str]:
        """Return every archive entry nested under ``relative_dir``, across archive roots."""
        dir_name = strip_leading_slash(relative_dir).rstrip("/")
        if not dir_name:
            return []
        prefix = dir_name + "/"
        entries: list[str] = []
        for archive in self.search_path.archives():
            entries.extend(name for name in _archive_names(archive) if entry_in_directory(name, prefix))
        return entries

    def archive_child_names(self, relative_dir: str) -> set[str]:
        """Return the distinct immediate children of ``relative_dir`` inside archive roots."""
        dir_name = strip_leading_slash(relative_dir).rstrip("/")
        return {archive_entry_child(entry, dir_name) for entry in self.archive_entries(dir_name)}

    def child_names_under_directory(self, relative_dir: str) -> set[str]:
        """Return the names directly under ``relative_dir`` in directory and archive roots."""
        names = set(self.directory_child_names(relative_dir))
        names.update(self.archive_child_names(relative_dir))
        return names

    # ===== READING =====

    def open_reader(self, directory: str, filename: str, encoding: str = DEFAULT_ENCODING) -> TextIO:
        """Open ``directory/filename`` as text.

        Raises:
            ResourceNotFoundError: No directory root holds the file
        """
        full_file_path = f"{directory}/{filename}"
        stream = self.find_first(full_file_path)
        if stream is None:
            raise ResourceNotFoundError(full_file_path)
        return io.TextIOWrapper(stream, encoding=encoding)

    def load_resource_as_string(self, directory: str, filename: str, encoding: str = DEFAULT_ENCODING) -> str:
        """Read ``directory/filename`` into a string.

        Raises:
            ResourceNotFoundError: No directory root holds the file
        """
        with self.open_reader(directory, filename, encoding) as reader:
            return reader.read()

    def load_resource(
        self,
        directory: str,
        filename: str,
        handler: Callable[[str], T],
        encoding: str = DEFAULT_ENCODING,
    ) -> T:
        """Read ``directory/filename`` and pass its text to ``handler``.

        Raises:
            ResourceNotFoundError: No directory root holds the file
            ResourceLoadError: Reading the file or running the handler failed
        """
        full_file_path = f"{directory}/{filename}"
        reader = self.open_reader(directory, filename, encoding)
        try:
            return handler(reader.read())
        except Exception as e:
            raise ResourceLoadError(full_file_path, e) from e
        finally:
            reader.close()

    def __repr__(self) -> str:
        return f"ResourceLocator({self.search_path!r})"
