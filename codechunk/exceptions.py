# codechunk/exceptions.py
"""
Exception taxonomy.

- ConfigurationError: fatal at startup, never retried
- IngestionError (and subclasses): scoped to one document; the ingestion
  coordinator rolls the document back and moves on
- VectorStoreError: a single store call failed; surfaced to the caller
"""

from __future__ import annotations


class CodeChunkError(Exception):
    """Base class for all codechunk errors."""


class ConfigurationError(CodeChunkError):
    """Invalid or incomplete configuration (missing tokenizer vocab, bad YAML, ...)."""


class PluginNotFoundError(ConfigurationError):
    """A plugin name that is not present in its registry."""

    def __init__(self, plugin_type: str, plugin_name: str, available: list[str]):
        self.plugin_type = plugin_type
        self.plugin_name = plugin_name
        self.available = available
        super().__init__(
            f"Unknown {plugin_type} plugin '{plugin_name}'. "
            f"Available: {', '.join(sorted(available)) or '(none)'}"
        )


class IngestionError(CodeChunkError):
    """Failure while building the chunks of a single document."""


class DeclarationParseError(IngestionError):
    """The source file could not be turned into a declaration tree."""


class EmbeddingError(IngestionError):
    """The embedding generator failed or returned an unusable vector."""


class VectorStoreError(CodeChunkError):
    """A persisted store operation failed."""


__all__ = [
    "CodeChunkError",
    "ConfigurationError",
    "PluginNotFoundError",
    "IngestionError",
    "DeclarationParseError",
    "EmbeddingError",
    "VectorStoreError",
]
