# codechunk/logging/tags.py
"""
Log tags.

Prefixed to log messages so a single run's output can be grepped by stage:

    logger.info(f"{INGEST} Processing {path}")
"""

CLI = "[CLI]"
CONFIG = "[CONFIG]"
SCAN = "[SCAN]"
PARSING = "[PARSING]"
CHUNKING = "[CHUNKING]"
EMBEDDING = "[EMBEDDING]"
VECTOR_DB = "[VECTOR_DB]"
INGEST = "[INGEST]"
RETRIEVER = "[RETRIEVER]"

__all__ = [
    "CLI",
    "CONFIG",
    "SCAN",
    "PARSING",
    "CHUNKING",
    "EMBEDDING",
    "VECTOR_DB",
    "INGEST",
    "RETRIEVER",
]
