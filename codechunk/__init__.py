# codechunk/__init__.py
"""
codechunk - incremental, token-bounded code chunking for retrieval.

Walks a tree of C# source files, cuts every type member into a
self-contained snippet, bounds each snippet to the embedding model's token
budget, and keeps a Qdrant-backed chunk index in sync with the filesystem.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
