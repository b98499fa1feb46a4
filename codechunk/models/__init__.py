# codechunk/models/__init__.py
from codechunk.models.chunk import CodeChunk
from codechunk.models.document import CodeDocument

__all__ = ["CodeChunk", "CodeDocument"]
