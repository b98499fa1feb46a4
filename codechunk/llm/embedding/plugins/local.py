# codechunk/llm/embedding/plugins/local.py
"""
Deterministic hash embeddings.

Not semantic. Identical text always maps to the identical unit vector, which
is enough to exercise ingestion, the vector store and retrieval wiring
without a model server.
"""

from __future__ import annotations

from hashlib import blake2b
from typing import Any, List, Optional

from codechunk.llm.embedding.registry import EMBEDDING_REGISTRY
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import EMBEDDING

logger = get_logger(__name__)


@EMBEDDING_REGISTRY.register("local")
class LocalHashEmbedder:
    plugin_name = "local"

    def __init__(self, dimensions: Optional[int] = None, seed: int = 0, **_: Any) -> None:
        self.dimensions = dimensions or 384
        self.seed = seed
        logger.info(f"{EMBEDDING} Using local hash embeddings (not semantic), dim={self.dimensions}")

    async def embed(self, text: str) -> List[float]:
        return hash_embed(text or "", dim=self.dimensions, seed=self.seed)


def hash_embed(text: str, *, dim: int, seed: int = 0) -> List[float]:
    # blake2b over (seed, text, counter) until there are 2 bytes per dimension,
    # each pair mapped to [-1, 1], then L2-normalized.
    msg = f"{seed}\n{text}".encode("utf-8", errors="ignore")

    out = bytearray()
    ctr = 0
    while len(out) < dim * 2:
        out.extend(blake2b(msg + ctr.to_bytes(4, "little"), digest_size=32).digest())
        ctr += 1

    vec = [(((out[2 * i] << 8) | out[2 * i + 1]) / 32767.5) - 1.0 for i in range(dim)]

    norm = sum(x * x for x in vec) ** 0.5
    if norm > 0:
        vec = [x / norm for x in vec]
    return vec


__all__ = ["LocalHashEmbedder", "hash_embed"]
