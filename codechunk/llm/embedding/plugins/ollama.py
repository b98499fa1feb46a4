# codechunk/llm/embedding/plugins/ollama.py
"""
Ollama embedding plugin.

Calls the Ollama server's embed endpoint:

    POST {base_url}/api/embed
    {"model": "embeddinggemma:latest", "input": "<text>"}
    -> {"embeddings": [[0.01, -0.2, ...]]}

Every failure (transport, HTTP status, response shape, vector size) raises
EmbeddingError. There is no retry here; the ingestion coordinator treats the
failure as fatal for the current document only.
"""

from __future__ import annotations

from typing import Any, List, Optional

import httpx

from codechunk.exceptions import EmbeddingError
from codechunk.llm.embedding.registry import EMBEDDING_REGISTRY
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import EMBEDDING

logger = get_logger(__name__)

DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_MODEL = "embeddinggemma:latest"


@EMBEDDING_REGISTRY.register("ollama")
class OllamaEmbedder:
    plugin_name = "ollama"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        dimensions: Optional[int] = None,
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
        **_: Any,
    ) -> None:
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.dimensions = dimensions
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)
        logger.info(f"{EMBEDDING} Ollama embeddings: model={model} at {self.base_url}")

    async def embed(self, text: str) -> List[float]:
        try:
            response = await self._client.post(
                "/api/embed",
                json={"model": self.model, "input": text},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise EmbeddingError(
                f"Ollama returned {e.response.status_code} for model '{self.model}': "
                f"{e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise EmbeddingError(f"Ollama request failed: {e}") from e
        except ValueError as e:
            raise EmbeddingError(f"Ollama returned invalid JSON: {e}") from e

        try:
            vector = [float(x) for x in data["embeddings"][0]]
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise EmbeddingError(f"Unexpected Ollama embed response: {str(data)[:200]}") from e

        if self.dimensions is not None and len(vector) != self.dimensions:
            raise EmbeddingError(
                f"Model '{self.model}' returned {len(vector)} dimensions, expected {self.dimensions}"
            )
        return vector

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["OllamaEmbedder"]
