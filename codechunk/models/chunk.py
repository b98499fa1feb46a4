# codechunk/models/chunk.py
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from codechunk.core.hashing import new_id


class CodeChunk(BaseModel):
    """
    One retrievable snippet of a document.

    Chunks are only ever created and deleted together with their owning
    document; they are never patched in place.
    """

    id: str = Field(default_factory=new_id, description="Chunk ID")
    document_id: str = Field(..., description="Owning CodeDocument ID")
    namespace: Optional[str] = Field(default=None, description="Enclosing namespace")
    type_name: str = Field(..., description="Enclosing class/interface/struct/enum")
    method_name: Optional[str] = Field(default=None, description="Member name, when it has one")
    snippet: str = Field(..., description="Chunk source text")
    token_count: int = Field(default=0, description="Tokens in snippet")
    oversized: bool = Field(
        default=False,
        description="A single source line alone exceeded the token budget",
    )
    embedding: List[float] = Field(default_factory=list, repr=False)

    def derive(self, snippet: str, token_count: int, oversized: bool = False) -> "CodeChunk":
        """New chunk with the same document and context labels but different text."""
        return CodeChunk(
            document_id=self.document_id,
            namespace=self.namespace,
            type_name=self.type_name,
            method_name=self.method_name,
            snippet=snippet,
            token_count=token_count,
            oversized=oversized,
        )

    def index_vector(self) -> List[float]:
        return self.embedding

    def to_payload(self) -> Dict[str, Any]:
        return {
            "document_id": self.document_id,
            "namespace": self.namespace,
            "type_name": self.type_name,
            "method_name": self.method_name,
            "snippet": self.snippet,
            "token_count": self.token_count,
            "oversized": self.oversized,
        }

    @classmethod
    def from_payload(cls, id: str, payload: Dict[str, Any], vector: List[float] | None = None) -> "CodeChunk":
        return cls(
            id=id,
            document_id=payload["document_id"],
            namespace=payload.get("namespace"),
            type_name=payload.get("type_name", ""),
            method_name=payload.get("method_name"),
            snippet=payload.get("snippet", ""),
            token_count=int(payload.get("token_count", 0)),
            oversized=bool(payload.get("oversized", False)),
            embedding=list(vector or []),
        )
