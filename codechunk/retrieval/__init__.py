# codechunk/retrieval/__init__.py
from codechunk.retrieval.search import SemanticSearch

__all__ = ["SemanticSearch"]
