# codechunk/config/schema.py
"""
Pydantic schema for codechunk configuration.

Rules:
- Strict validation
- No unknown keys
- Defaults live in default.yaml, not scattered through the code

Schema hierarchy:
- CodeChunkConfig: the root, consumed by codechunk.runtime
- SourceConfig: which files are ingested
- ChunkingConfig: token budget and overlap
- TokenizerConfig: vocabulary used to measure the budget
- EmbeddingConfig: embedding plugin selection
- VectorDBConfig: Qdrant connection and collection names
- LoggingConfig: log level
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SourceConfig(BaseModel):
    """
    File source filter.

    Example YAML:
        source:
          root: ./src
          pattern: "*.cs"
          exclude: [".g.cs", "/obj/", "/AssemblyInfo.cs", "/packages/"]
    """

    root: str = Field(default=".", description="Directory to ingest")
    pattern: str = Field(default="*.cs", description="Glob matched against file names")
    exclude: List[str] = Field(
        default_factory=list,
        description="Path fragments; any file whose path contains one is skipped",
    )

    model_config = ConfigDict(extra="forbid")


class ChunkingConfig(BaseModel):
    max_tokens: int = Field(default=256, ge=1, description="Token budget per chunk")
    overlap_lines: int = Field(
        default=5, ge=0, description="Lines repeated at the start of each split window"
    )

    model_config = ConfigDict(extra="forbid")


class TokenizerConfig(BaseModel):
    """
    Tokenizer used to measure chunks against the budget.

    Exactly one source is needed: a local file (tokenizer.json or a WordPiece
    vocab.txt) or a pretrained tokenizer name.
    """

    path: Optional[str] = Field(default=None, description="tokenizer.json or vocab.txt")
    pretrained: Optional[str] = Field(default=None, description="Pretrained tokenizer name")
    prefix: str = Field(
        default="",
        description="Text the embedding model prepends to documents, counted against the budget",
    )

    model_config = ConfigDict(extra="forbid")

    @field_validator("path", "pretrained", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class EmbeddingConfig(BaseModel):
    plugin_name: str = Field(default="ollama", description="Embedding plugin name")
    kwargs: dict[str, Any] = Field(default_factory=dict, description="Plugin init kwargs")
    dimensions: int = Field(default=768, ge=1, description="Embedding vector size")

    model_config = ConfigDict(extra="forbid")


class VectorDBConfig(BaseModel):
    """
    Qdrant connection.

    Resolution order: path (local on-disk mode), then location (":memory:"),
    then url, then host/port. A user config that sets path or location
    therefore overrides the packaged default url.
    """

    url: Optional[str] = None
    host: Optional[str] = None
    port: int = 6333
    api_key: Optional[str] = None
    path: Optional[str] = None
    location: Optional[str] = None
    timeout: int = Field(default=30, ge=1)
    documents_collection: str = "CodeExplainer-CodeDocument"
    chunks_collection: str = "CodeExplainer-CodeChunk"

    model_config = ConfigDict(extra="forbid")

    @field_validator("url", "host", "api_key", "path", "location", mode="before")
    @classmethod
    def blank_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def require_connection(self) -> "VectorDBConfig":
        if not any((self.url, self.host, self.path, self.location)):
            raise ValueError("vector_db needs one of: url, host, path, location")
        return self


class LoggingConfig(BaseModel):
    level: str = "INFO"

    model_config = ConfigDict(extra="forbid")

    @field_validator("level", mode="before")
    @classmethod
    def known_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in LOG_LEVELS:
                raise ValueError(
                    f"logging.level must be one of {', '.join(LOG_LEVELS)}, got '{v}'"
                )
        return v


class CodeChunkConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    chunking: ChunkingConfig = Field(default_factory=ChunkingConfig)
    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)
    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    vector_db: VectorDBConfig = Field(default_factory=lambda: VectorDBConfig(location=":memory:"))
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


__all__ = [
    "SourceConfig",
    "ChunkingConfig",
    "TokenizerConfig",
    "EmbeddingConfig",
    "VectorDBConfig",
    "LoggingConfig",
    "CodeChunkConfig",
]
