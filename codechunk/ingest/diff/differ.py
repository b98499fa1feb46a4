# codechunk/ingest/diff/differ.py
"""
Diff computation for incremental ingestion.

Compares:
1. Scanned files from disk
2. Document records already in the store (authoritative source)

Per relative path:
- no stored document                          -> new
- one stored document with the same hash      -> unchanged (skipped entirely)
- stored document(s) with a different hash    -> modified
- several stored documents for one path       -> modified (heals duplicates)
- stored document whose file is gone          -> deleted

Paths that matched but could not be read are neither ingested nor deleted.

This module ONLY computes actions - it does NOT execute them.
Execution is handled by the ingestion coordinator.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from codechunk.ingest.diff.scanner import ScannedFile
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import INGEST
from codechunk.models.document import CodeDocument

logger = get_logger(__name__)


@dataclass(frozen=True)
class DocumentCandidate:
    """
    A document that needs (re-)ingestion.

    `document` is the fresh record (new id, current hash); `previous` holds
    the stored records it supersedes, empty for a new file.
    """

    document: CodeDocument
    scanned: ScannedFile
    previous: tuple = ()

    @property
    def is_new(self) -> bool:
        return not self.previous

    @property
    def relative_path(self) -> str:
        return self.document.relative_path


@dataclass
class DiffResult:
    to_ingest: List[DocumentCandidate] = field(default_factory=list)
    to_skip: List[ScannedFile] = field(default_factory=list)
    to_delete: List[CodeDocument] = field(default_factory=list)

    @property
    def new(self) -> List[DocumentCandidate]:
        return [c for c in self.to_ingest if c.is_new]

    @property
    def modified(self) -> List[DocumentCandidate]:
        return [c for c in self.to_ingest if not c.is_new]

    @property
    def summary(self) -> str:
        return (
            f"new={len(self.new)}, "
            f"modified={len(self.modified)}, "
            f"unchanged={len(self.to_skip)}, "
            f"deleted={len(self.to_delete)}"
        )


class Differ:
    """
    Usage:
        differ = Differ()
        result = differ.compute_diff(scan_result.files, existing_documents)

        # Result contains the action plan, NOT executed actions
        for candidate in result.to_ingest:
            ...
    """

    def compute_diff(
        self,
        scanned_files: Iterable[ScannedFile],
        existing: Iterable[CodeDocument],
        unreadable: Iterable[str] = (),
        force: bool = False,
    ) -> DiffResult:
        """
        Compute the diff action plan.

        Args:
            scanned_files: Files from the scanner
            existing: Every document record currently stored
            unreadable: Relative paths that matched but failed to hash
            force: Re-ingest every scanned file regardless of its hash
        """
        result = DiffResult()

        by_path: Dict[str, List[CodeDocument]] = defaultdict(list)
        for doc in existing:
            by_path[doc.relative_path].append(doc)

        seen: Set[str] = set(unreadable)

        for scanned in scanned_files:
            seen.add(scanned.relative_path)
            stored = by_path.get(scanned.relative_path, [])

            if not force and len(stored) == 1 and stored[0].content_hash == scanned.content_hash:
                result.to_skip.append(scanned)
                continue

            result.to_ingest.append(
                DocumentCandidate(
                    document=CodeDocument(
                        relative_path=scanned.relative_path,
                        content_hash=scanned.content_hash,
                    ),
                    scanned=scanned,
                    previous=tuple(stored),
                )
            )

        for path in sorted(set(by_path) - seen):
            result.to_delete.extend(by_path[path])

        logger.info(f"{INGEST} Diff computed: {result.summary}")
        return result


__all__ = [
    "DocumentCandidate",
    "DiffResult",
    "Differ",
]
