# codechunk/config/__init__.py
from codechunk.config.loader import find_user_config, load_config
from codechunk.config.schema import (
    ChunkingConfig,
    CodeChunkConfig,
    EmbeddingConfig,
    LoggingConfig,
    SourceConfig,
    TokenizerConfig,
    VectorDBConfig,
)

__all__ = [
    "load_config",
    "find_user_config",
    "CodeChunkConfig",
    "SourceConfig",
    "ChunkingConfig",
    "TokenizerConfig",
    "EmbeddingConfig",
    "VectorDBConfig",
    "LoggingConfig",
]
