# codechunk/llm/embedding/__init__.py
from codechunk.llm.embedding.base import Embedder
from codechunk.llm.embedding.registry import (
    EMBEDDING_REGISTRY,
    available_embedding_plugins,
    create_embedder,
    get_embedding_plugin,
)

__all__ = [
    "Embedder",
    "EMBEDDING_REGISTRY",
    "available_embedding_plugins",
    "create_embedder",
    "get_embedding_plugin",
]
