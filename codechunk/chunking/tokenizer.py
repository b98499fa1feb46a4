# codechunk/chunking/tokenizer.py
"""
Token counting for the chunk budget.

The splitter only needs "how many tokens would the embedding model see for
this text"; it attaches no other meaning to the count. Counting must be
deterministic for identical input.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

from tokenizers import BertWordPieceTokenizer, Tokenizer

from codechunk.config.schema import TokenizerConfig
from codechunk.exceptions import ConfigurationError
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import CHUNKING

logger = get_logger(__name__)


@runtime_checkable
class TokenCounter(Protocol):
    def count_tokens(self, text: str) -> int:
        ...


class HuggingFaceTokenCounter:
    """
    TokenCounter backed by a HuggingFace `tokenizers` vocabulary.

    Sources, first match wins:
    - path ending in .txt: WordPiece vocab (BERT style)
    - any other path: serialized tokenizer.json
    - pretrained: tokenizer name fetched from the HuggingFace hub

    `prefix` (the task prompt the embedding model puts in front of every
    document, e.g. for embeddinggemma) is prepended before counting. Special
    tokens the tokenizer adds (e.g. [CLS], <bos>) are counted as well.
    """

    def __init__(
        self,
        path: Optional[str] = None,
        pretrained: Optional[str] = None,
        prefix: str = "",
    ) -> None:
        self._prefix = prefix or ""
        self._tokenizer = self._load(path, pretrained)

    @classmethod
    def from_config(cls, cfg: TokenizerConfig) -> "HuggingFaceTokenCounter":
        return cls(path=cfg.path, pretrained=cfg.pretrained, prefix=cfg.prefix)

    @staticmethod
    def _load(path: Optional[str], pretrained: Optional[str]):
        if path:
            vocab = Path(path).expanduser()
            if not vocab.is_file():
                raise ConfigurationError(f"Tokenizer vocabulary not found: {vocab}")
            logger.info(f"{CHUNKING} Loading tokenizer from {vocab}")
            try:
                if vocab.suffix == ".txt":
                    return BertWordPieceTokenizer(str(vocab))
                return Tokenizer.from_file(str(vocab))
            except Exception as e:
                raise ConfigurationError(f"Could not load tokenizer from {vocab}: {e}") from e

        if pretrained:
            logger.info(f"{CHUNKING} Loading pretrained tokenizer '{pretrained}'")
            try:
                return Tokenizer.from_pretrained(pretrained)
            except Exception as e:
                raise ConfigurationError(
                    f"Could not load pretrained tokenizer '{pretrained}': {e}"
                ) from e

        raise ConfigurationError(
            "No tokenizer configured: set tokenizer.path (or CODECHUNK_TOKENIZER_PATH) "
            "or tokenizer.pretrained"
        )

    def count_tokens(self, text: str) -> int:
        encoding = self._tokenizer.encode(self._prefix + text)
        return len(encoding.ids)


__all__ = ["TokenCounter", "HuggingFaceTokenCounter"]
