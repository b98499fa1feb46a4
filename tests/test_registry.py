# tests/test_registry.py
"""
Tests for the plugin registry.

Architecture:
- Every plugin type has its own codechunk.core.registry.PluginRegistry
- PluginNotFoundError (a ConfigurationError) is raised for unknown names
- Built-in embedding plugins register themselves on import
"""
import pytest

from codechunk.config.schema import EmbeddingConfig
from codechunk.core.registry import PluginRegistry
from codechunk.exceptions import ConfigurationError, PluginNotFoundError
from codechunk.llm.embedding import (
    available_embedding_plugins,
    create_embedder,
    get_embedding_plugin,
)
from codechunk.llm.embedding.plugins.local import LocalHashEmbedder
from codechunk.llm.embedding.plugins.ollama import OllamaEmbedder


def test_registry_returns_registered_class():
    registry = PluginRegistry("widget")

    @registry.register("round")
    class RoundWidget:
        pass

    assert registry.get("round") is RoundWidget
    assert "round" in registry
    assert registry.available() == ["round"]


def test_registry_rejects_unknown_plugin():
    registry = PluginRegistry("widget")

    with pytest.raises(PluginNotFoundError):
        registry.get("square")


def test_registry_error_message_is_helpful():
    """Error message should name the plugin and list what is available."""
    registry = PluginRegistry("widget")
    registry.register("round")(type("RoundWidget", (), {}))

    with pytest.raises(ConfigurationError) as exc_info:
        registry.get("square")

    error_msg = str(exc_info.value)
    assert "square" in error_msg
    assert "Available" in error_msg
    assert "round" in error_msg


def test_registry_rejects_conflicting_registration():
    registry = PluginRegistry("widget")
    registry.register("round")(type("A", (), {}))

    with pytest.raises(ValueError):
        registry.register("round")(type("B", (), {}))


def test_builtin_embedding_plugins_are_registered():
    assert {"local", "ollama"} <= set(available_embedding_plugins())
    assert get_embedding_plugin("local") is LocalHashEmbedder
    assert get_embedding_plugin("ollama") is OllamaEmbedder


def test_create_embedder_passes_kwargs_and_dimensions():
    embedder = create_embedder(EmbeddingConfig(plugin_name="local", kwargs={"seed": 3}, dimensions=16))

    assert isinstance(embedder, LocalHashEmbedder)
    assert embedder.dimensions == 16
    assert embedder.seed == 3


def test_create_embedder_unknown_plugin():
    with pytest.raises(PluginNotFoundError) as exc_info:
        create_embedder(EmbeddingConfig(plugin_name="does_not_exist"))

    assert "local" in str(exc_info.value)
