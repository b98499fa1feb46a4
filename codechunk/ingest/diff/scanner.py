# codechunk/ingest/diff/scanner.py
"""
File scanner for incremental ingestion.

Walks a root directory, keeps files whose name matches the include pattern
and whose path contains none of the exclusion fragments, and
fingerprints each one.

Exclusion fragments are matched against the POSIX form of the path relative
to the root, with a leading slash ("/Api/obj/Debug/X.cs"), so "/obj/" excludes
build-intermediate directories on every platform and the location of the
root itself never matters. Backslashes in fragments are normalized too.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Tuple

from codechunk.core.hashing import compute_content_hash
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import SCAN

logger = get_logger(__name__)


@dataclass(frozen=True)
class ScannedFile:
    path: str  # Absolute path
    relative_path: str  # POSIX path relative to the scan root
    size_bytes: int
    content_hash: str  # SHA-256 of the file bytes


@dataclass
class ScanResult:
    root: str
    files: List[ScannedFile] = field(default_factory=list)
    # (relative_path, error message) for files that matched but could not be read
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def total_scanned(self) -> int:
        return len(self.files)


class FileScanner:
    """
    Usage:
        scanner = FileScanner(pattern="*.cs", exclude=[".g.cs", "/obj/"])
        result = scanner.scan("/path/to/solution")
    """

    def __init__(self, pattern: str = "*.cs", exclude: Iterable[str] = ()) -> None:
        self.pattern = pattern
        self.exclude = [fragment.replace("\\", "/") for fragment in exclude]

    def is_excluded(self, relative_path: str) -> bool:
        posix = "/" + relative_path.replace("\\", "/").lstrip("/")
        return any(fragment in posix for fragment in self.exclude)

    def scan(self, root: str | Path) -> ScanResult:
        root_path = Path(root).resolve()
        if not root_path.is_dir():
            raise FileNotFoundError(f"Source directory not found: {root_path}")

        result = ScanResult(root=str(root_path))
        excluded = 0

        for path in sorted(root_path.rglob(self.pattern)):
            if not path.is_file():
                continue
            relative = path.relative_to(root_path).as_posix()
            if self.is_excluded(relative):
                excluded += 1
                continue

            try:
                result.files.append(
                    ScannedFile(
                        path=str(path),
                        relative_path=relative,
                        size_bytes=path.stat().st_size,
                        content_hash=compute_content_hash(path),
                    )
                )
            except OSError as e:
                result.errors.append((relative, str(e)))
                logger.warning(f"{SCAN} Could not read {relative}: {e}")

        logger.info(
            f"{SCAN} {result.total_scanned} files matched '{self.pattern}' under {root_path} "
            f"({excluded} excluded, {len(result.errors)} unreadable)"
        )
        return result


__all__ = ["ScannedFile", "ScanResult", "FileScanner"]
