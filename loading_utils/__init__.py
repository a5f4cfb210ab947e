"""Locate resources across a search path and convert between namespace names and file paths.

Public API:
- SearchPath, SearchPathRoot, RootKind: ordered directory and archive roots
- ResourceLocator: existence checks, lookups and child-name enumeration
- read_bytes, read_text: drain located streams
- name codec functions: name_to_path, path_to_name, namespace_for_path, ...
- NamespaceRegistry: explicit name-to-loader mapping
- LocatorSettings, SettingsManager: configuration
"""

from .errors import FormatError
from .errors import LoadingUtilsError
from .errors import NamespaceNotFoundError
from .errors import ResourceLoadError
from .errors import ResourceNotFoundError
from .locator import ResourceLocator
from .locator import archive_entry_child
from .locator import entry_in_directory
from .locator import strip_leading_slash
from .names import DEFAULT_SUFFIX
from .names import dashes_to_underscores
from .names import dots_to_slashes
from .names import name_to_path
from .names import namespace_for_path
from .names import namespace_string_for_file
from .names import path_to_name
from .names import slashes_to_dots
from .names import underscores_to_dashes
from .registry import NamespaceRegistry
from .registry import register_resource_namespaces
from .search_path import RootKind
from .search_path import SearchPath
from .search_path import SearchPathRoot
from .settings import LocatorSettings
from .settings import SettingsManager
from .streams import read_bytes
from .streams import read_text

__all__ = [
    "DEFAULT_SUFFIX",
    "FormatError",
    "LoadingUtilsError",
    "LocatorSettings",
    "NamespaceNotFoundError",
    "NamespaceRegistry",
    "ResourceLoadError",
    "ResourceLocator",
    "ResourceNotFoundError",
    "RootKind",
    "SearchPath",
    "SearchPathRoot",
    "SettingsManager",
    "archive_entry_child",
    "dashes_to_underscores",
    "dots_to_slashes",
    "entry_in_directory",
    "name_to_path",
    "namespace_for_path",
    "namespace_string_for_file",
    "path_to_name",
    "read_bytes",
    "read_text",
    "register_resource_namespaces",
    "slashes_to_dots",
    "strip_leading_slash",
    "underscores_to_dashes",
]
