# codechunk/core/registry.py
"""
Named plugin registry.

Design principle: NO SILENT FALLBACK
- If the config says "ollama", the caller gets ollama or an error
- The error lists what is available so the fix is obvious
"""

from __future__ import annotations

from typing import Callable, Dict, Generic, List, TypeVar

from codechunk.exceptions import PluginNotFoundError

T = TypeVar("T")


class PluginRegistry(Generic[T]):
    """Maps plugin names to plugin classes for one plugin type."""

    def __init__(self, plugin_type: str) -> None:
        self.plugin_type = plugin_type
        self._plugins: Dict[str, type[T]] = {}

    def register(self, name: str) -> Callable[[type[T]], type[T]]:
        """Class decorator registering a plugin under `name`."""

        def decorator(cls: type[T]) -> type[T]:
            existing = self._plugins.get(name)
            if existing is not None and existing is not cls:
                raise ValueError(
                    f"{self.plugin_type} plugin '{name}' already registered by {existing.__name__}"
                )
            self._plugins[name] = cls
            return cls

        return decorator

    def get(self, name: str) -> type[T]:
        try:
            return self._plugins[name]
        except KeyError:
            raise PluginNotFoundError(self.plugin_type, name, self.available()) from None

    def available(self) -> List[str]:
        return sorted(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins


__all__ = ["PluginRegistry"]
