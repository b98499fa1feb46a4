# tests/conftest.py
"""
Shared test doubles.

MockCollection is an in-memory VectorStoreCollection that records every
mutation, so tests can assert "nothing was written" as well as "this was
written".
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Set

import pytest

from codechunk.logging import logger as codechunk_logger
from codechunk.exceptions import EmbeddingError
from codechunk.models.chunk import CodeChunk
from codechunk.models.document import CodeDocument
from codechunk.vector_db.base import SearchResult, matches_nothing


class MockTokenCounter:
    """One token per whitespace-separated word."""

    def __init__(self) -> None:
        self.calls = 0

    def count_tokens(self, text: str) -> int:
        self.calls += 1
        return len(text.split())


class MockEmbedder:
    """Async embedder returning a fixed-size vector; can be told to fail on some text."""

    def __init__(self, dim: int = 4):
        self.dim = dim
        self.calls: List[str] = []
        self._fail_markers: Set[str] = set()

    def fail_on(self, marker: str) -> None:
        self._fail_markers.add(marker)

    async def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if any(marker in text for marker in self._fail_markers):
            raise EmbeddingError(f"embedding failed for text containing {sorted(self._fail_markers)}")
        # Deterministic and non-zero: first component grows with text length
        return [float(len(text) % 97) + 1.0] + [1.0] * (self.dim - 1)


def _matches(payload: Dict[str, Any], filter: Optional[Dict[str, Any]]) -> bool:
    if not filter:
        return True
    for key, value in filter.items():
        if isinstance(value, (list, tuple, set, frozenset)):
            if payload.get(key) not in value:
                return False
        elif payload.get(key) != value:
            return False
    return True


def _cosine(a: List[float], b: List[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    na = math.sqrt(sum(x * x for x in a))
    nb = math.sqrt(sum(y * y for y in b))
    return dot / (na * nb) if na and nb else 0.0


class MockCollection:
    """In-memory VectorStoreCollection keyed by record id."""

    def __init__(self, name: str = "mock") -> None:
        self.name = name
        self.records: Dict[str, Any] = {}
        self.upserts: List[List[str]] = []
        self.deletes: List[List[str]] = []
        self.ensure_calls = 0
        self.fail_upsert_when: Optional[Any] = None

    @property
    def mutations(self) -> int:
        return len(self.upserts) + len(self.deletes)

    async def ensure_exists(self) -> None:
        self.ensure_calls += 1

    async def get_all(self, filter=None, limit=None) -> List[Any]:
        if matches_nothing(filter):
            return []
        found = [r for r in self.records.values() if _matches(r.to_payload(), filter)]
        return found if limit is None else found[:limit]

    async def upsert(self, records: Sequence[Any]) -> None:
        if not records:
            return
        if self.fail_upsert_when is not None and any(self.fail_upsert_when(r) for r in records):
            raise RuntimeError("upsert failed")
        self.upserts.append([r.id for r in records])
        for record in records:
            self.records[record.id] = record

    async def delete(self, ids: Sequence[str]) -> None:
        if not ids:
            return
        self.deletes.append(list(ids))
        for record_id in ids:
            self.records.pop(record_id, None)

    async def search_by_vector(self, vector, top_k, filter=None) -> List[SearchResult]:
        if matches_nothing(filter):
            return []
        scored = [
            (r, _cosine(vector, r.index_vector()))
            for r in self.records.values()
            if _matches(r.to_payload(), filter)
        ]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return [
            SearchResult(id=r.id, score=score, payload=r.to_payload(), record=r)
            for r, score in scored[:top_k]
        ]

    def by_document(self, document_id: str) -> List[CodeChunk]:
        return [r for r in self.records.values() if getattr(r, "document_id", None) == document_id]

    def by_path(self, relative_path: str) -> List[CodeDocument]:
        return [r for r in self.records.values() if getattr(r, "relative_path", None) == relative_path]


SAMPLE_CS = """\
using System;
using System.Collections.Generic;

namespace Acme.Billing
{
    /// <summary>An invoice.</summary>
    public class Invoice : EntityBase, IAuditable
    {
        private readonly List<decimal> _lines = new List<decimal>();

        public string Number { get; set; }

        // Sum of all lines
        public decimal Total()
        {
            decimal total = 0;
            foreach (var line in _lines)
            {
                total += line;
            }
            return total;
        }
    }

    public interface IAuditable
    {
    }
}
"""


@pytest.fixture
def token_counter() -> MockTokenCounter:
    return MockTokenCounter()


@pytest.fixture
def embedder() -> MockEmbedder:
    return MockEmbedder()


@pytest.fixture
def documents() -> MockCollection:
    return MockCollection("documents")


@pytest.fixture
def chunks() -> MockCollection:
    return MockCollection("chunks")


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    (root / "Billing").mkdir(parents=True)
    (root / "Billing" / "Invoice.cs").write_text(SAMPLE_CS, encoding="utf-8")
    (root / "Billing" / "Money.cs").write_text(
        "namespace Acme.Billing\n{\n    public struct Money\n    {\n"
        "        public decimal Amount;\n    }\n}\n",
        encoding="utf-8",
    )
    return root


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop the CLI's stream handler so it never outlives a test's captured stderr."""
    yield
    root = logging.getLogger(codechunk_logger.ROOT_LOGGER_NAME)
    if codechunk_logger._handler is not None:
        root.removeHandler(codechunk_logger._handler)
        codechunk_logger._handler = None
    root.setLevel(logging.NOTSET)
