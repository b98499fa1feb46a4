# codechunk/vector_db/qdrant.py
"""
Qdrant-backed VectorStoreCollection.

Features:
- Creates the collection and its keyword payload indexes on ensure_exists()
- Refuses to work against an existing collection with a different vector size
- Validates vector sizes before any write, so a bad batch writes nothing
- Pages through scroll() so get_all() is not capped by Qdrant's page size
- Wraps every client failure in VectorStoreError

Connection (create_qdrant_client), first match wins:
1. path      local on-disk mode
2. location  e.g. ":memory:"
3. url       e.g. http://localhost:6333
4. host/port
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Callable, Dict, Generic, Iterator, List, Optional, Sequence, Tuple

from qdrant_client import AsyncQdrantClient
from qdrant_client.models import (
    Distance,
    FieldCondition,
    Filter,
    MatchAny,
    MatchValue,
    PayloadSchemaType,
    PointIdsList,
    PointStruct,
    VectorParams,
)

from codechunk.config.schema import VectorDBConfig
from codechunk.exceptions import VectorStoreError
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import VECTOR_DB
from codechunk.vector_db.base import FieldFilter, R, SearchResult, matches_nothing

logger = get_logger(__name__)

SCROLL_PAGE_SIZE = 256

# (point id, payload, vector) -> record
RecordFactory = Callable[[str, Dict[str, Any], Optional[List[float]]], R]


def create_qdrant_client(cfg: VectorDBConfig) -> AsyncQdrantClient:
    if cfg.path:
        logger.info(f"{VECTOR_DB} Using local Qdrant storage at {cfg.path}")
        return AsyncQdrantClient(path=cfg.path)
    if cfg.location:
        logger.info(f"{VECTOR_DB} Using Qdrant location {cfg.location}")
        return AsyncQdrantClient(location=cfg.location)
    if cfg.url:
        logger.info(f"{VECTOR_DB} Connecting to Qdrant at {cfg.url}")
        return AsyncQdrantClient(url=cfg.url, api_key=cfg.api_key, timeout=cfg.timeout)
    logger.info(f"{VECTOR_DB} Connecting to Qdrant at {cfg.host}:{cfg.port}")
    return AsyncQdrantClient(host=cfg.host, port=cfg.port, api_key=cfg.api_key, timeout=cfg.timeout)


def build_filter(filter: Optional[FieldFilter]) -> Optional[Filter]:
    if not filter:
        return None

    conditions = []
    for key, value in filter.items():
        if isinstance(value, (list, tuple, set, frozenset)):
            conditions.append(FieldCondition(key=key, match=MatchAny(any=list(value))))
        else:
            conditions.append(FieldCondition(key=key, match=MatchValue(value=value)))
    return Filter(must=conditions)


class QdrantCollection(Generic[R]):
    """
    One Qdrant collection holding one record type.

    Usage:
        chunks = QdrantCollection(
            client,
            "CodeExplainer-CodeChunk",
            record_factory=CodeChunk.from_payload,
            vector_size=768,
            indexed_fields=("document_id",),
        )
        await chunks.ensure_exists()
        await chunks.upsert(leaves)
        hits = await chunks.search_by_vector(query_vector, top_k=10)
    """

    def __init__(
        self,
        client: AsyncQdrantClient,
        name: str,
        *,
        record_factory: RecordFactory,
        vector_size: int,
        indexed_fields: Tuple[str, ...] = (),
        with_vectors: bool = False,
    ) -> None:
        self._client = client
        self.name = name
        self._record_factory = record_factory
        self.vector_size = vector_size
        self._indexed_fields = indexed_fields
        self._with_vectors = with_vectors

    @contextmanager
    def _errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except VectorStoreError:
            raise
        except Exception as e:
            raise VectorStoreError(f"Qdrant {operation} on '{self.name}' failed: {e}") from e

    async def ensure_exists(self) -> None:
        with self._errors("ensure_exists"):
            if await self._client.collection_exists(self.name):
                info = await self._client.get_collection(self.name)
                vectors = info.config.params.vectors
                if isinstance(vectors, VectorParams) and vectors.size != self.vector_size:
                    raise VectorStoreError(
                        f"Collection '{self.name}' has vector size {vectors.size}, "
                        f"configured size is {self.vector_size}"
                    )
                return

            logger.info(f"{VECTOR_DB} Creating collection '{self.name}' (dim={self.vector_size})")
            await self._client.create_collection(
                collection_name=self.name,
                vectors_config=VectorParams(size=self.vector_size, distance=Distance.COSINE),
            )
            for field_name in self._indexed_fields:
                await self._client.create_payload_index(
                    collection_name=self.name,
                    field_name=field_name,
                    field_schema=PayloadSchemaType.KEYWORD,
                )

    async def get_all(self, filter: Optional[FieldFilter] = None, limit: Optional[int] = None) -> List[R]:
        if matches_nothing(filter) or limit == 0:
            return []

        records: List[R] = []
        offset = None
        with self._errors("scroll"):
            while True:
                page_size = SCROLL_PAGE_SIZE if limit is None else min(SCROLL_PAGE_SIZE, limit - len(records))
                points, offset = await self._client.scroll(
                    collection_name=self.name,
                    scroll_filter=build_filter(filter),
                    limit=page_size,
                    offset=offset,
                    with_payload=True,
                    with_vectors=self._with_vectors,
                )
                for point in points:
                    records.append(self._to_record(point.id, point.payload, point.vector))

                if offset is None or (limit is not None and len(records) >= limit):
                    break
        return records

    async def upsert(self, records: Sequence[R]) -> None:
        if not records:
            return

        points = []
        for record in records:
            vector = record.index_vector()
            if len(vector) != self.vector_size:
                raise VectorStoreError(
                    f"Record {record.id} has a {len(vector)}-dim vector, "
                    f"collection '{self.name}' expects {self.vector_size}"
                )
            points.append(PointStruct(id=record.id, vector=list(vector), payload=record.to_payload()))

        with self._errors("upsert"):
            await self._client.upsert(collection_name=self.name, points=points, wait=True)
        logger.debug(f"{VECTOR_DB} Upserted {len(points)} points into '{self.name}'")

    async def delete(self, ids: Sequence[str]) -> None:
        if not ids:
            return

        with self._errors("delete"):
            await self._client.delete(
                collection_name=self.name,
                points_selector=PointIdsList(points=list(ids)),
                wait=True,
            )
        logger.debug(f"{VECTOR_DB} Deleted {len(ids)} points from '{self.name}'")

    async def search_by_vector(
        self,
        vector: List[float],
        top_k: int,
        filter: Optional[FieldFilter] = None,
    ) -> List[SearchResult[R]]:
        if matches_nothing(filter) or top_k <= 0:
            return []

        with self._errors("query"):
            response = await self._client.query_points(
                collection_name=self.name,
                query=list(vector),
                query_filter=build_filter(filter),
                limit=top_k,
                with_payload=True,
            )

        return [
            SearchResult(
                id=str(point.id),
                score=point.score,
                payload=dict(point.payload or {}),
                record=self._to_record(point.id, point.payload, None),
            )
            for point in response.points
        ]

    def _to_record(self, point_id: Any, payload: Optional[Dict[str, Any]], vector: Any) -> R:
        if not isinstance(vector, list):
            vector = None
        return self._record_factory(str(point_id), dict(payload or {}), vector)


__all__ = ["QdrantCollection", "create_qdrant_client", "build_filter", "SCROLL_PAGE_SIZE"]
