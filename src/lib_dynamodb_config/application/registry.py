"""Per-phase component registry.

The hosting server builds components twice: once in an early bootstrap
context and once in the main context. Each context owns one
:class:`ComponentRegistry`; nothing is shared through module globals, so a
bootstrap client and a main client can live side by side.
"""

from __future__ import annotations

from typing import Any, Iterator

from ..domain.errors import MisconfigurationError


class ComponentRegistry:
    """Named component container for one lifecycle phase.

    Examples
    --------
    >>> registry = ComponentRegistry("main")
    >>> registry.register("client", object()) is registry.get("client")
    True
    >>> registry.register_if_missing("client", "other") == "other"
    False
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._components: dict[str, Any] = {}

    def register(self, key: str, component: Any) -> Any:
        """Store *component* under *key*, replacing any previous entry."""

        self._components[key] = component
        return component

    def register_if_missing(self, key: str, component: Any) -> Any:
        """Store *component* unless *key* is taken; return the registered component."""

        return self._components.setdefault(key, component)

    def get(self, key: str) -> Any:
        try:
            return self._components[key]
        except KeyError as exc:
            raise MisconfigurationError(f"No component '{key}' registered in the {self.name} registry") from exc

    def contains(self, key: str) -> bool:
        return key in self._components

    def names(self) -> list[str]:
        return sorted(self._components)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self) -> str:
        return f"ComponentRegistry(name={self.name!r}, components={self.names()!r})"
