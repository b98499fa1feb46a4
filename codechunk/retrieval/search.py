# codechunk/retrieval/search.py
"""
Semantic search over ingested chunks.

Thin on purpose: embed the query, ask the chunk collection for neighbours,
optionally scoped to documents whose path contains a filter string.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from codechunk.llm.embedding.base import Embedder
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import RETRIEVER
from codechunk.models.chunk import CodeChunk
from codechunk.models.document import CodeDocument
from codechunk.vector_db.base import SearchResult, VectorStoreCollection

logger = get_logger(__name__)


class SemanticSearch:
    """
    Usage:
        search = SemanticSearch(documents, chunks, embedder)
        snippets = await search.search("how are invoices totalled", "Billing/", max_results=5)
    """

    def __init__(
        self,
        documents: VectorStoreCollection[CodeDocument],
        chunks: VectorStoreCollection[CodeChunk],
        embedder: Embedder,
    ) -> None:
        self._documents = documents
        self._chunks = chunks
        self._embedder = embedder

    async def search(
        self,
        text: str,
        document_name_filter: Optional[str] = None,
        max_results: int = 10,
    ) -> List[str]:
        """Snippet texts most similar to `text`, best first."""
        results = await self._query(text, max_results, document_name_filter)
        return [r.record.snippet for r in results]

    async def search_with_scores(
        self,
        text: str,
        max_results: int = 10,
        document_name_filter: Optional[str] = None,
    ) -> List[Tuple[CodeChunk, float]]:
        """Chunks with similarity scores, best first. Hits without a score are dropped."""
        results = await self._query(text, max_results, document_name_filter)
        return [(r.record, r.score) for r in results if r.score is not None]

    async def _query(
        self,
        text: str,
        max_results: int,
        document_name_filter: Optional[str] = None,
    ) -> List[SearchResult[CodeChunk]]:
        filter = None
        if document_name_filter:
            document_ids = await self._matching_document_ids(document_name_filter)
            logger.debug(
                f"{RETRIEVER} {len(document_ids)} documents match filter '{document_name_filter}'"
            )
            if not document_ids:
                return []
            filter = {"document_id": document_ids}

        vector = await self._embedder.embed(text)
        results = await self._chunks.search_by_vector(vector, max_results, filter)
        logger.info(f"{RETRIEVER} {len(results)} results for query ({len(text)} chars)")
        return results

    async def _matching_document_ids(self, name_filter: str) -> List[str]:
        # Substring match on the path; Qdrant keyword indexes only match whole values.
        documents = await self._documents.get_all()
        return [d.id for d in documents if name_filter in d.relative_path]


__all__ = ["SemanticSearch"]
