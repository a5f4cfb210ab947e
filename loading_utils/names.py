"""Conversions between dotted namespace names and relative file paths.

Logical names use dots and dashes (``com.acme.my-util``); file paths use
separators and underscores (``com/acme/my_util.py``). Every function here
is pure and passes ``None``/empty input straight through, so callers can
chain optional lookups without explicit checks.
"""

import os
import re
from pathlib import Path

from .errors import FormatError

DEFAULT_SUFFIX = ".py"

_SEPARATORS = re.compile(r"/|\\")


def file_separator() -> str:
    """Return the file separator used on this system."""
    return os.sep


def strip_ending(value: str | None, ending: str) -> str | None:
    """Remove ``ending`` from the end of ``value``.

    Raises:
        FormatError: ``value`` does not end with ``ending``
    """
    if value is None:
        return value
    if not value.endswith(ending):
        raise FormatError(value, ending)
    return value[: len(value) - len(ending)] if ending else value


def tokenize(value: str | None, delimiters: str) -> list[str]:
    """Split ``value`` on any of the characters in ``delimiters``, dropping empty tokens."""
    if not value:
        return []
    pattern = "[" + re.escape(delimiters) + "]"
    return [token for token in re.split(pattern, value) if token]


def dashes_to_underscores(value: str | None) -> str | None:
    """Convert all dashes to underscores."""
    if value:
        return value.replace("-", "_")
    return value


def underscores_to_dashes(value: str | None) -> str | None:
    """Convert all underscores to dashes."""
    if value:
        return value.replace("_", "-")
    return value


def slashes_to_dots(value: str | None) -> str | None:
    """Convert every forward or back slash to a period.

    Both separators map to ``.``, so ``dots_to_slashes`` cannot restore
    mixed-separator input exactly.
    """
    if value:
        return _SEPARATORS.sub(".", value)
    return value


def dots_to_slashes(value: str | None, separator: str | None = None) -> str | None:
    """Convert every period to ``separator`` (the platform separator by default)."""
    if value:
        return value.replace(".", separator or file_separator())
    return value


def name_to_path(name: str | None, suffix: str = DEFAULT_SUFFIX, separator: str | None = None) -> str | None:
    """Convert a logical name to a relative file path.

    Example:
        >>> name_to_path("loading-utils", separator="/")
        'loading_utils.py'
        >>> name_to_path("com.acme.my-util", ".ext", separator="/")
        'com/acme/my_util.ext'

    An empty name is returned unchanged, without a suffix.
    """
    dashed_name = dashes_to_underscores(name)
    if not dashed_name:
        return dashed_name
    return dots_to_slashes(dashed_name, separator) + suffix


def path_to_name(path: str | None, suffix: str = DEFAULT_SUFFIX) -> str | None:
    """Convert a relative file path to a logical name.

    Example:
        >>> path_to_name("com/acme_util/widget.ext", ".ext")
        'com.acme-util.widget'

    Raises:
        FormatError: ``path`` does not end with ``suffix``
    """
    if not path:
        return path
    return underscores_to_dashes(slashes_to_dots(strip_ending(path, suffix)))


def namespace_for_path(
    search_root: str | Path | None,
    full_path: str | Path | None,
    suffix: str = DEFAULT_SUFFIX,
) -> str | None:
    """Return the logical name of ``full_path`` as seen from ``search_root``.

    The root is removed as a plain string prefix, so it should be spelled the
    same way as the start of ``full_path``. Without a root the whole path is
    converted.

    Example:
        >>> namespace_for_path("/src", "/src/com/acme_util/widget.py")
        'com.acme-util.widget'
    """
    if not full_path:
        return full_path
    full = str(full_path)
    relative = full[len(str(search_root)) :] if search_root is not None else full
    if not relative:
        return relative
    tokens = [underscores_to_dashes(token) for token in tokenize(relative, "\\/")]
    return strip_ending(".".join(tokens), suffix)


def namespace_string_for_file(
    directory: str | None,
    file_name: str | None,
    suffix: str = DEFAULT_SUFFIX,
) -> str | None:
    """Return the logical name of ``file_name`` inside ``directory``.

    Example:
        >>> namespace_string_for_file("/com/acme_util", "my_widget.py")
        'com.acme-util.my-widget'
    """
    if not file_name:
        return file_name
    file_symbol = path_to_name(file_name, suffix)
    trimmed = directory.strip() if directory else ""
    if not trimmed:
        return file_symbol
    if trimmed[0] in "/\\":
        trimmed = trimmed[1:]
    return f"{slashes_to_dots(underscores_to_dashes(trimmed))}.{file_symbol}"


def is_source_file(path: Path, suffix: str = DEFAULT_SUFFIX) -> bool:
    """Check whether ``path`` is an existing file with the given suffix."""
    return path.is_file() and path.name.endswith(suffix)
