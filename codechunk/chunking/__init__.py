# codechunk/chunking/__init__.py
from codechunk.chunking.builder import ChunkBuilder
from codechunk.chunking.splitter import TokenBoundedSplitter, Window
from codechunk.chunking.tokenizer import HuggingFaceTokenCounter, TokenCounter

__all__ = [
    "ChunkBuilder",
    "TokenBoundedSplitter",
    "Window",
    "TokenCounter",
    "HuggingFaceTokenCounter",
]
