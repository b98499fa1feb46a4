# codechunk/ingest/source.py
"""
Ingestion sources.

A source knows which files exist (scan) and how to read one of them
(read_text). Everything else, diffing and chunking included, belongs to the
ingestion coordinator.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Protocol, runtime_checkable

from codechunk.config.schema import SourceConfig
from codechunk.exceptions import DeclarationParseError
from codechunk.ingest.diff.scanner import FileScanner, ScanResult


@runtime_checkable
class IngestionSource(Protocol):
    root: Path

    def scan(self) -> ScanResult:
        ...

    def read_text(self, relative_path: str) -> str:
        ...


class CodeFileDirectorySource:
    """
    Source code files under one directory.

    Usage:
        source = CodeFileDirectorySource("/src/MySolution", exclude=["/obj/"])
        summary = await coordinator.ingest_all(source)
    """

    def __init__(self, root: str | Path, pattern: str = "*.cs", exclude: Iterable[str] = ()) -> None:
        self.root = Path(root).expanduser().resolve()
        self._scanner = FileScanner(pattern=pattern, exclude=exclude)

    @classmethod
    def from_config(cls, cfg: SourceConfig, root: str | Path | None = None) -> "CodeFileDirectorySource":
        return cls(root if root is not None else cfg.root, pattern=cfg.pattern, exclude=cfg.exclude)

    def scan(self) -> ScanResult:
        return self._scanner.scan(self.root)

    def read_text(self, relative_path: str) -> str:
        """Read a file as UTF-8 (BOM tolerated)."""
        data = (self.root / relative_path).read_bytes()
        try:
            return data.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise DeclarationParseError(f"{relative_path} is not valid UTF-8: {e}") from e


__all__ = ["IngestionSource", "CodeFileDirectorySource"]
