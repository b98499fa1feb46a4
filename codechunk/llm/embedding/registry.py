# codechunk/llm/embedding/registry.py
"""
Embedding plugin registry.

Plugins register themselves on import:

    @EMBEDDING_REGISTRY.register("ollama")
    class OllamaEmbedder: ...
"""

from __future__ import annotations

import importlib
from typing import Any, List

from codechunk.config.schema import EmbeddingConfig
from codechunk.core.registry import PluginRegistry
from codechunk.llm.embedding.base import Embedder
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import EMBEDDING

logger = get_logger(__name__)

EMBEDDING_REGISTRY: PluginRegistry[Embedder] = PluginRegistry("embedding")

_BUILTIN_PLUGINS = (
    "codechunk.llm.embedding.plugins.local",
    "codechunk.llm.embedding.plugins.ollama",
)


def _load_builtin_plugins() -> None:
    for module in _BUILTIN_PLUGINS:
        importlib.import_module(module)


def get_embedding_plugin(name: str) -> type:
    _load_builtin_plugins()
    return EMBEDDING_REGISTRY.get(name)


def available_embedding_plugins() -> List[str]:
    _load_builtin_plugins()
    return EMBEDDING_REGISTRY.available()


def create_embedder(cfg: EmbeddingConfig, **overrides: Any) -> Embedder:
    """Instantiate the configured plugin with its kwargs and the vector size."""
    plugin_cls = get_embedding_plugin(cfg.plugin_name)
    kwargs = {**cfg.kwargs, "dimensions": cfg.dimensions, **overrides}
    logger.info(f"{EMBEDDING} Using embedding plugin '{cfg.plugin_name}'")
    return plugin_cls(**kwargs)


__all__ = [
    "EMBEDDING_REGISTRY",
    "get_embedding_plugin",
    "available_embedding_plugins",
    "create_embedder",
]
