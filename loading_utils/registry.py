"""Explicit namespace registry.

Namespaces are looked up through loader functions registered up front
instead of by runtime reflection. A loader returns the namespace object:
anything with attributes, or a mapping.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
from typing import TYPE_CHECKING
from typing import Any

from .errors import NamespaceNotFoundError
from .names import DEFAULT_SUFFIX
from .names import path_to_name

if TYPE_CHECKING:
    from .locator import ResourceLocator

logger = logging.getLogger(__name__)

Loader = Callable[[], Any]


class NamespaceRegistry:
    """Mapping of namespace name to loader, with loaded namespaces kept per registry."""

    def __init__(self):
        self._loaders: dict[str, Loader] = {}
        self._loaded: dict[str, Any] = {}

    def register(self, name: str, loader: Loader) -> None:
        """Register ``loader`` for ``name``, replacing any previous loader."""
        self._loaders[name] = loader
        self._loaded.pop(name, None)

    def unregister(self, name: str) -> bool:
        """Remove ``name``. Returns False if it was not registered."""
        self._loaded.pop(name, None)
        return self._loaders.pop(name, None) is not None

    def names(self) -> list[str]:
        return sorted(self._loaders)

    def __contains__(self, name: object) -> bool:
        return str(name) in self._loaders

    def load(self, name: str) -> Any:
        """Return the namespace for ``name``, invoking its loader on first use.

        Raises:
            NamespaceNotFoundError: No loader registered for ``name``
        """
        if name in self._loaded:
            return self._loaded[name]
        return self._invoke(name)

    def _invoke(self, name: str) -> Any:
        loader = self._loaders.get(name)
        if loader is None:
            raise NamespaceNotFoundError(name)
        logger.debug(f"[registry:load] {name}")
        namespace = loader()
        self._loaded[name] = namespace
        return namespace

    def reload_namespaces(self, names: Iterable[str]) -> None:
        """Invoke the loader of every name again, in order.

        Raises:
            NamespaceNotFoundError: A name has no registered loader
        """
        for name in names:
            self._invoke(str(name))

    def namespace_exists(self, name: object) -> bool:
        """Check whether ``name`` is registered and its loader succeeds.

        A loader raising FileNotFoundError means the namespace does not exist.
        """
        key = str(name)
        if key not in self._loaders:
            return False
        try:
            self.load(key)
        except FileNotFoundError:
            logger.debug(f"[registry:exists] {key} loader found no resource")
            return False
        return True

    def resolve_ns_var(self, ns_name: str, var_name: str, default: Any = None) -> Any:
        """Return ``var_name`` from namespace ``ns_name``, or ``default``.

        Mapping namespaces are looked up by key, others by attribute.
        """
        if ns_name not in self._loaders:
            return default
        namespace = self.load(ns_name)
        if isinstance(namespace, Mapping):
            return namespace.get(var_name, default)
        return getattr(namespace, var_name, default)


def register_resource_namespaces(
    registry: NamespaceRegistry,
    locator: ResourceLocator,
    directory: str,
    suffix: str = DEFAULT_SUFFIX,
) -> list[str]:
    """Register one loader per ``suffix`` file found under ``directory``.

    Names are derived from the resource paths (``app/my_util.py`` becomes
    ``app.my-util``). Each loader returns the resource text as a mapping
    with ``name``, ``path`` and ``source`` keys.

    Returns:
        Registered names, sorted
    """
    relative_dir = directory.strip("/")
    registered = []
    for child in sorted(locator.child_names_under_directory(relative_dir)):
        if not child.endswith(suffix):
            continue
        resource_path = f"{relative_dir}/{child}" if relative_dir else child
        name = path_to_name(resource_path, suffix)
        registry.register(name, _resource_loader(locator, name, resource_path))
        registered.append(name)
    logger.debug(f"[registry:scan] {directory}: {len(registered)} namespaces")
    return registered


def _resource_loader(locator: ResourceLocator, name: str, resource_path: str) -> Loader:
    def load() -> dict[str, str]:
        directory, _, filename = resource_path.rpartition("/")
        return {
            "name": name,
            "path": resource_path,
            "source": locator.load_resource_as_string(directory, filename, encoding="utf-8"),
        }

    return load
