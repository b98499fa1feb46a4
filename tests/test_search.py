# tests/test_search.py
"""
Tests for codechunk.retrieval.search.SemanticSearch.
"""

import pytest

from codechunk.models.chunk import CodeChunk
from codechunk.models.document import CodeDocument
from codechunk.retrieval import SemanticSearch
from codechunk.vector_db.base import SearchResult


async def _seed(documents, chunks):
    invoice = CodeDocument(relative_path="Billing/Invoice.cs", content_hash="a" * 64)
    user = CodeDocument(relative_path="Accounts/User.cs", content_hash="b" * 64)
    await documents.upsert([invoice, user])
    await chunks.upsert(
        [
            CodeChunk(document_id=invoice.id, type_name="Invoice", method_name="Total",
                      snippet="public decimal Total()", embedding=[1.0, 0.0, 0.0, 0.0]),
            CodeChunk(document_id=user.id, type_name="User", method_name="Login",
                      snippet="public bool Login()", embedding=[0.0, 1.0, 0.0, 0.0]),
        ]
    )
    return invoice, user


class FixedEmbedder:
    def __init__(self, vector):
        self.vector = vector
        self.calls = []

    async def embed(self, text):
        self.calls.append(text)
        return self.vector


class TestSearch:
    @pytest.mark.asyncio
    async def test_best_match_first(self, documents, chunks):
        await _seed(documents, chunks)
        search = SemanticSearch(documents, chunks, FixedEmbedder([1.0, 0.1, 0.0, 0.0]))

        assert await search.search("invoice total") == ["public decimal Total()", "public bool Login()"]

    @pytest.mark.asyncio
    async def test_max_results(self, documents, chunks):
        await _seed(documents, chunks)
        search = SemanticSearch(documents, chunks, FixedEmbedder([0.0, 1.0, 0.0, 0.0]))

        assert await search.search("login", max_results=1) == ["public bool Login()"]

    @pytest.mark.asyncio
    async def test_document_name_filter_is_substring(self, documents, chunks):
        await _seed(documents, chunks)
        search = SemanticSearch(documents, chunks, FixedEmbedder([1.0, 0.0, 0.0, 0.0]))

        assert await search.search("anything", document_name_filter="Accounts/") == ["public bool Login()"]

    @pytest.mark.asyncio
    async def test_filter_without_match_skips_embedding(self, documents, chunks):
        await _seed(documents, chunks)
        embedder = FixedEmbedder([1.0, 0.0, 0.0, 0.0])
        search = SemanticSearch(documents, chunks, embedder)

        assert await search.search("anything", document_name_filter="Nowhere") == []
        assert embedder.calls == []


class TestSearchWithScores:
    @pytest.mark.asyncio
    async def test_scores_descending(self, documents, chunks):
        await _seed(documents, chunks)
        search = SemanticSearch(documents, chunks, FixedEmbedder([1.0, 0.1, 0.0, 0.0]))

        results = await search.search_with_scores("invoice")

        assert [chunk.method_name for chunk, _ in results] == ["Total", "Login"]
        assert results[0][1] > results[1][1]

    @pytest.mark.asyncio
    async def test_hits_without_score_are_dropped(self, documents):
        chunk = CodeChunk(document_id="d", type_name="T", snippet="x")

        class UnscoredChunks:
            async def search_by_vector(self, vector, top_k, filter=None):
                return [
                    SearchResult(id=chunk.id, score=None, payload={}, record=chunk),
                    SearchResult(id=chunk.id, score=0.5, payload={}, record=chunk),
                ]

        search = SemanticSearch(documents, UnscoredChunks(), FixedEmbedder([1.0]))

        assert await search.search_with_scores("x") == [(chunk, 0.5)]
