# codechunk/runtime.py
"""
Wiring of configuration into concrete collaborators.

Single place where config turns into objects. CLI commands build a Runtime,
use it, and close it:

    runtime = Runtime.from_config(load_config())
    try:
        summary = await runtime.coordinator().ingest_all(runtime.source())
    finally:
        await runtime.aclose()

The tokenizer is loaded lazily, only when a coordinator is requested, so
search works without a tokenizer vocabulary configured.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from qdrant_client import AsyncQdrantClient

from codechunk.chunking.splitter import TokenBoundedSplitter
from codechunk.chunking.tokenizer import HuggingFaceTokenCounter, TokenCounter
from codechunk.config.schema import CodeChunkConfig
from codechunk.ingest.executor import IngestionCoordinator
from codechunk.ingest.source import CodeFileDirectorySource
from codechunk.llm.embedding.base import Embedder
from codechunk.llm.embedding.registry import create_embedder
from codechunk.models.chunk import CodeChunk
from codechunk.models.document import PLACEHOLDER_VECTOR, CodeDocument
from codechunk.parsing.csharp import CSharpDeclarationParser
from codechunk.retrieval.search import SemanticSearch
from codechunk.vector_db.qdrant import QdrantCollection, create_qdrant_client


@dataclass
class Runtime:
    config: CodeChunkConfig
    client: AsyncQdrantClient = field(repr=False)
    documents: QdrantCollection[CodeDocument] = field(repr=False)
    chunks: QdrantCollection[CodeChunk] = field(repr=False)
    embedder: Embedder = field(repr=False)
    token_counter: Optional[TokenCounter] = field(default=None, repr=False)

    @classmethod
    def from_config(
        cls,
        config: CodeChunkConfig,
        *,
        client: Optional[AsyncQdrantClient] = None,
        embedder: Optional[Embedder] = None,
        token_counter: Optional[TokenCounter] = None,
    ) -> "Runtime":
        client = client or create_qdrant_client(config.vector_db)
        documents = QdrantCollection(
            client,
            config.vector_db.documents_collection,
            record_factory=CodeDocument.from_payload,
            vector_size=len(PLACEHOLDER_VECTOR),
            indexed_fields=("relative_path",),
        )
        chunks = QdrantCollection(
            client,
            config.vector_db.chunks_collection,
            record_factory=CodeChunk.from_payload,
            vector_size=config.embedding.dimensions,
            indexed_fields=("document_id",),
        )
        return cls(
            config=config,
            client=client,
            documents=documents,
            chunks=chunks,
            embedder=embedder or create_embedder(config.embedding),
            token_counter=token_counter,
        )

    def source(self, root: str | Path | None = None) -> CodeFileDirectorySource:
        return CodeFileDirectorySource.from_config(self.config.source, root=root)

    def coordinator(self, for_ingest: bool = True) -> IngestionCoordinator:
        """
        Build the ingestion coordinator.

        for_ingest=False skips the tokenizer; the result can only delete.
        """
        splitter = None
        if for_ingest:
            if self.token_counter is None:
                self.token_counter = HuggingFaceTokenCounter.from_config(self.config.tokenizer)
            splitter = TokenBoundedSplitter(
                self.token_counter,
                self.embedder,
                max_tokens=self.config.chunking.max_tokens,
                overlap_lines=self.config.chunking.overlap_lines,
            )

        return IngestionCoordinator(
            documents=self.documents,
            chunks=self.chunks,
            parser=CSharpDeclarationParser(),
            splitter=splitter,
        )

    def search(self) -> SemanticSearch:
        return SemanticSearch(self.documents, self.chunks, self.embedder)

    async def aclose(self) -> None:
        aclose = getattr(self.embedder, "aclose", None)
        if aclose is not None:
            await aclose()
        await self.client.close()


__all__ = ["Runtime"]
