# codechunk/vector_db/base.py
"""
Base types for the persisted vector store.

The ingestion core and the retrieval layer only see VectorStoreCollection:
one keyed collection per record kind (documents, chunks), each record
carrying a vector and a flat payload.

Filters are plain field-equality maps:

    {"relative_path": "Billing/Invoice.cs"}          # equals
    {"document_id": ["0192...", "0193..."]}          # any of
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Dict,
    Generic,
    List,
    Optional,
    Protocol,
    Sequence,
    TypeVar,
    runtime_checkable,
)

R = TypeVar("R")

FieldFilter = Dict[str, Any]


@runtime_checkable
class StoreRecord(Protocol):
    """What a record type must provide to be stored in a collection."""

    id: str

    def index_vector(self) -> List[float]:
        ...

    def to_payload(self) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class SearchResult(Generic[R]):
    """
    Canonical vector search hit shape.

    score is None when the backend did not report one.
    """

    id: str
    score: Optional[float]
    payload: Dict[str, Any]
    record: R


@runtime_checkable
class VectorStoreCollection(Protocol[R]):
    name: str

    async def ensure_exists(self) -> None:
        """Create the collection (and its payload indexes) if missing."""
        ...

    async def get_all(self, filter: Optional[FieldFilter] = None, limit: Optional[int] = None) -> List[R]:
        """All records matching filter; limit=None means no limit."""
        ...

    async def upsert(self, records: Sequence[R]) -> None:
        ...

    async def delete(self, ids: Sequence[str]) -> None:
        ...

    async def search_by_vector(
        self,
        vector: List[float],
        top_k: int,
        filter: Optional[FieldFilter] = None,
    ) -> List[SearchResult[R]]:
        """Nearest records, most similar first."""
        ...


def matches_nothing(filter: Optional[FieldFilter]) -> bool:
    """An "any of" condition over an empty list can never match."""
    if not filter:
        return False
    return any(isinstance(v, (list, tuple, set, frozenset)) and not v for v in filter.values())


__all__ = [
    "FieldFilter",
    "StoreRecord",
    "SearchResult",
    "VectorStoreCollection",
    "matches_nothing",
]
