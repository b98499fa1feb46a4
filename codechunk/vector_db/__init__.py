# codechunk/vector_db/__init__.py
from codechunk.vector_db.base import SearchResult, StoreRecord, VectorStoreCollection
from codechunk.vector_db.qdrant import QdrantCollection, create_qdrant_client

__all__ = [
    "SearchResult",
    "StoreRecord",
    "VectorStoreCollection",
    "QdrantCollection",
    "create_qdrant_client",
]
