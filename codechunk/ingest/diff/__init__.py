# codechunk/ingest/diff/__init__.py
"""
Change detection for incremental ingestion.

- scanner: find matching files and fingerprint them
- differ: classify them against stored documents (new / modified / unchanged / deleted)
"""

from codechunk.ingest.diff.differ import DiffResult, Differ, DocumentCandidate
from codechunk.ingest.diff.scanner import FileScanner, ScannedFile, ScanResult

__all__ = [
    "FileScanner",
    "ScannedFile",
    "ScanResult",
    "Differ",
    "DiffResult",
    "DocumentCandidate",
]
