# codechunk/llm/embedding/base.py
from __future__ import annotations

from typing import List, Protocol, runtime_checkable


@runtime_checkable
class Embedder(Protocol):
    """
    Canonical embedding plugin contract.

    One text in, one fixed-length vector out. Any failure raises; callers
    treat it as fatal for the document being ingested.
    """

    async def embed(self, text: str) -> List[float]:
        ...


__all__ = ["Embedder"]
