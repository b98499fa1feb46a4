# codechunk/models/document.py
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from codechunk.core.hashing import new_id

# Document records carry no semantic vector; the store still wants one.
PLACEHOLDER_VECTOR: List[float] = [1.0]


class CodeDocument(BaseModel):
    """
    One tracked source file.

    relative_path is the natural key: at most one live document per path.
    A changed file gets a brand new record (new id) rather than an update.
    """

    id: str = Field(default_factory=new_id, description="Time-ordered document ID")
    relative_path: str = Field(..., description="POSIX path relative to the source root")
    content_hash: str = Field(..., description="SHA-256 of the file bytes")

    def index_vector(self) -> List[float]:
        return PLACEHOLDER_VECTOR

    def to_payload(self) -> Dict[str, Any]:
        return {
            "relative_path": self.relative_path,
            "content_hash": self.content_hash,
        }

    @classmethod
    def from_payload(cls, id: str, payload: Dict[str, Any], vector: List[float] | None = None) -> "CodeDocument":
        return cls(
            id=id,
            relative_path=payload["relative_path"],
            content_hash=payload["content_hash"],
        )
