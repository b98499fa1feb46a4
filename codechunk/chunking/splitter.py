# codechunk/chunking/splitter.py
"""
Token-bounded recursive splitter.

Given a candidate chunk and a token budget T:

1. If the whole candidate fits in T tokens, it is emitted unchanged.
2. Otherwise its lines are packed greedily into windows. Every window after
   the first starts with the last K lines of new content from the previous
   window (the overlap prefix), then takes new lines until the next one
   would push it over T.
3. A line that does not fit even into an otherwise empty window is taken
   anyway and the window is flagged `oversized`. Forward progress is
   guaranteed; the budget is not.
4. The cursor advances past the new lines only, so concatenating the new
   content of every window reproduces the candidate's lines exactly.

If the overlap prefix plus the first new line is already over T, prefix
lines are dropped from the front until it fits; new content always wins
over context.

Window generation is pure and synchronous. Embedding happens in split(),
one call per emitted leaf, in order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from codechunk.chunking.tokenizer import TokenCounter
from codechunk.exceptions import EmbeddingError
from codechunk.llm.embedding.base import Embedder
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import CHUNKING
from codechunk.models.chunk import CodeChunk

logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 256
DEFAULT_OVERLAP_LINES = 5


@dataclass(frozen=True)
class Window:
    """One emitted piece of a candidate's text."""

    text: str
    lines: Tuple[str, ...]
    overlap: int  # leading lines repeated from the previous window
    token_count: int
    oversized: bool = False

    @property
    def new_lines(self) -> Tuple[str, ...]:
        return self.lines[self.overlap:]


class TokenBoundedSplitter:
    """
    Usage:
        splitter = TokenBoundedSplitter(counter, embedder, max_tokens=256)
        leaves = await splitter.split(candidate)
    """

    def __init__(
        self,
        counter: TokenCounter,
        embedder: Embedder,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        overlap_lines: int = DEFAULT_OVERLAP_LINES,
    ) -> None:
        if max_tokens < 1:
            raise ValueError(f"max_tokens must be >= 1, got {max_tokens}")
        if overlap_lines < 0:
            raise ValueError(f"overlap_lines must be >= 0, got {overlap_lines}")

        self._counter = counter
        self._embedder = embedder
        self.max_tokens = max_tokens
        self.overlap_lines = overlap_lines

    def windows(self, text: str) -> Iterator[Window]:
        total = self._counter.count_tokens(text)
        if total <= self.max_tokens:
            yield Window(text=text, lines=tuple(text.splitlines()), overlap=0, token_count=total)
            return

        lines = text.splitlines()
        cursor = 0
        previous_new: List[str] = []

        while cursor < len(lines):
            keep = min(self.overlap_lines, len(previous_new))
            window = previous_new[len(previous_new) - keep:] if keep else []
            overlap = len(window)
            taken = 0
            token_count = 0
            oversized = False

            while cursor + taken < len(lines):
                line = lines[cursor + taken]
                tentative = window + [line]
                count = self._counter.count_tokens("\n".join(tentative))

                if count <= self.max_tokens:
                    window = tentative
                    token_count = count
                    taken += 1
                    continue

                if taken == 0 and overlap > 0:
                    window = window[1:]
                    overlap -= 1
                    continue

                if taken == 0:
                    window = tentative
                    token_count = count
                    taken = 1
                    oversized = True
                    logger.warning(
                        f"{CHUNKING} Line {cursor + 1} alone is {count} tokens "
                        f"(budget {self.max_tokens}); emitting oversized chunk"
                    )
                break

            yield Window(
                text="\n".join(window),
                lines=tuple(window),
                overlap=overlap,
                token_count=token_count,
                oversized=oversized,
            )

            previous_new = window[overlap:]
            cursor += taken

    async def split(self, chunk: CodeChunk) -> List[CodeChunk]:
        """Split a candidate into leaves, each embedded before it is returned."""
        windows = list(self.windows(chunk.snippet))

        if len(windows) == 1 and windows[0].text == chunk.snippet:
            leaves = [
                chunk.model_copy(
                    update={
                        "token_count": windows[0].token_count,
                        "oversized": windows[0].oversized,
                    }
                )
            ]
        else:
            leaves = [chunk.derive(w.text, w.token_count, w.oversized) for w in windows]
            logger.debug(
                f"{CHUNKING} Split {chunk.type_name}.{chunk.method_name or '<shell>'} "
                f"into {len(leaves)} chunks"
            )

        for leaf in leaves:
            leaf.embedding = await self._embed(leaf.snippet)
        return leaves

    async def _embed(self, text: str) -> List[float]:
        vector = await self._embedder.embed(text)
        if not vector:
            raise EmbeddingError("Embedder returned an empty vector")
        return list(vector)


__all__ = [
    "Window",
    "TokenBoundedSplitter",
    "DEFAULT_MAX_TOKENS",
    "DEFAULT_OVERLAP_LINES",
]
