"""Exception types and safe error message formatting.

Lookups never raise for missing resources; they return None or an empty
collection. The exceptions here are reserved for contract violations
(FormatError) and the load-or-die wrappers.
"""

from __future__ import annotations

from rich.markup import escape as _escape_markup


class LoadingUtilsError(Exception):
    """Base class for all loading_utils errors."""


class FormatError(LoadingUtilsError, ValueError):
    """Raised when a path does not carry the expected suffix."""

    def __init__(self, value: str, ending: str):
        self.value = value
        self.ending = ending
        super().__init__(f"'{value}' does not end with '{ending}'")


class ResourceNotFoundError(LoadingUtilsError, FileNotFoundError):
    """Raised when a resource required by a load-or-die wrapper is absent."""

    def __init__(self, full_file_path: str):
        self.full_file_path = full_file_path
        super().__init__(f"Cannot find file named: {full_file_path}")


class ResourceLoadError(LoadingUtilsError):
    """Raised when a located resource cannot be processed."""

    def __init__(self, full_file_path: str, cause: BaseException | None = None):
        self.full_file_path = full_file_path
        self.cause = cause
        super().__init__(f"An error occurred while reading file: {full_file_path}")


class NamespaceNotFoundError(LoadingUtilsError, KeyError):
    """Raised when a namespace name has no registered loader."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"No loader registered for namespace '{self.name}'"


# Friendly messages for exception types known to have empty str()
FRIENDLY_MESSAGES: dict[type, str] = {
    PermissionError: "Permission denied.",
    IsADirectoryError: "Expected a file but found a directory.",
    KeyboardInterrupt: "Operation interrupted by user.",
}


def format_error_message(e: BaseException, *, include_type: bool = True) -> str:
    """Format an exception into a useful display message.

    Args:
        e: The exception to format
        include_type: Whether to include the exception type name

    Returns:
        A non-empty, user-friendly error message

    Examples:
        >>> format_error_message(FormatError("a/b.txt", ".py"))
        "FormatError: 'a/b.txt' does not end with '.py'"

        >>> format_error_message(ValueError("invalid input"), include_type=False)
        'invalid input'
    """
    error_str = str(e)
    error_type = type(e).__name__

    if error_str:
        if include_type and error_type not in error_str:
            return f"{error_type}: {error_str}"
        return error_str

    for exc_type, friendly_msg in FRIENDLY_MESSAGES.items():
        if isinstance(e, exc_type):
            return f"{error_type}: {friendly_msg}" if include_type else friendly_msg

    return f"{error_type}: (no message)" if include_type else "(no message)"


def escape_markup(value: object) -> str:
    """Escape a value for safe interpolation into Rich markup strings.

    Paths and archive entry names may contain brackets that Rich would
    otherwise read as markup tags.
    """
    return _escape_markup(str(value))
