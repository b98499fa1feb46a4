# codechunk/ingest/executor.py
"""
Ingestion coordinator.

Orchestrates one sync of a source tree into the document and chunk stores:
1. Ensure both collections exist
2. Scan files and diff them against stored documents
3. Delete documents (and their chunks) whose files are gone
4. For each new or modified document, in order:
   - delete the chunks and records of the documents it supersedes
   - upsert the fresh document record
   - parse, build candidate chunks, split and embed them
   - upsert the chunks
5. Report a summary

A failure anywhere in step 4 rolls that one document back (its chunks and
its record are deleted), is counted, and the run moves on. Unchanged files
cause no store I/O at all, so a second run over an unchanged tree performs
no mutations.

Documents are processed strictly one at a time; every embedding call and
store call is awaited before the next one starts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence

from codechunk.chunking.builder import ChunkBuilder
from codechunk.chunking.splitter import TokenBoundedSplitter
from codechunk.exceptions import ConfigurationError
from codechunk.ingest.diff.differ import Differ, DocumentCandidate
from codechunk.ingest.source import IngestionSource
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import INGEST
from codechunk.models.chunk import CodeChunk
from codechunk.models.document import CodeDocument
from codechunk.parsing.declarations import DeclarationParser
from codechunk.vector_db.base import VectorStoreCollection

logger = get_logger(__name__)

# (processed, total, errors)
ProgressCallback = Callable[[int, int, int], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class IngestSummary:
    """Summary of an ingestion run."""

    scanned: int = 0
    new: int = 0
    modified: int = 0
    unchanged: int = 0
    deleted: int = 0
    succeeded: int = 0
    failed: int = 0
    chunks_written: int = 0
    error_details: List[str] = field(default_factory=list)
    started_at: datetime = field(default_factory=_utcnow)
    finished_at: Optional[datetime] = None

    @property
    def processed(self) -> int:
        return self.succeeded + self.failed

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def __str__(self) -> str:
        return (
            f"scanned {self.scanned}, new {self.new}, modified {self.modified}, "
            f"unchanged {self.unchanged}, deleted {self.deleted}, "
            f"succeeded {self.succeeded}, failed {self.failed}, "
            f"chunks {self.chunks_written}"
        )


class IngestionCoordinator:
    """
    Usage:
        coordinator = IngestionCoordinator(
            documents=documents_collection,
            chunks=chunks_collection,
            parser=CSharpDeclarationParser(),
            splitter=TokenBoundedSplitter(counter, embedder),
        )
        summary = await coordinator.ingest_all(CodeFileDirectorySource("/src"))
    """

    def __init__(
        self,
        *,
        documents: VectorStoreCollection[CodeDocument],
        chunks: VectorStoreCollection[CodeChunk],
        parser: DeclarationParser,
        splitter: Optional[TokenBoundedSplitter] = None,
        builder: Optional[ChunkBuilder] = None,
        differ: Optional[Differ] = None,
    ) -> None:
        self._documents = documents
        self._chunks = chunks
        self._parser = parser
        self._splitter = splitter
        self._builder = builder or ChunkBuilder()
        self._differ = differ or Differ()

    async def ensure_collections(self) -> None:
        await self._chunks.ensure_exists()
        await self._documents.ensure_exists()

    async def ingest_all(
        self,
        source: IngestionSource,
        on_progress: Optional[ProgressCallback] = None,
        force: bool = False,
    ) -> IngestSummary:
        """
        Sync `source` into the stores.

        Args:
            source: Where the files come from.
            on_progress: Called as (processed, total, errors) after every
                new or modified document.
            force: Re-ingest every file even when its hash is unchanged.
        """
        if self._splitter is None:
            raise ConfigurationError("Ingestion needs a splitter (token counter and embedder)")

        summary = IngestSummary()

        await self.ensure_collections()
        existing = await self._documents.get_all()

        logger.info(f"{INGEST} Scanning {source.root}...")
        scan = source.scan()
        summary.scanned = scan.total_scanned
        for path, error in scan.errors:
            summary.error_details.append(f"Scan error: {path}: {error}")

        diff = self._differ.compute_diff(
            scan.files,
            existing,
            unreadable=[path for path, _ in scan.errors],
            force=force,
        )
        summary.new = len(diff.new)
        summary.modified = len(diff.modified)
        summary.unchanged = len(diff.to_skip)

        for document in diff.to_delete:
            logger.info(f"{INGEST} Removing {document.relative_path}")
            await self._delete_documents([document])
            summary.deleted += 1

        total = len(diff.to_ingest)
        for candidate in diff.to_ingest:
            logger.info(
                f"{INGEST} Processing {candidate.relative_path} ({candidate.scanned.size_bytes} bytes)"
            )
            try:
                summary.chunks_written += await self._ingest_document(source, candidate)
                summary.succeeded += 1
            except Exception as e:
                summary.failed += 1
                summary.error_details.append(f"Ingest error: {candidate.relative_path}: {e}")
                logger.warning(f"{INGEST} Failed to ingest {candidate.relative_path}: {e}")
                await self._rollback(candidate.document, summary)

            if on_progress is not None:
                on_progress(summary.processed, total, summary.failed)

        summary.finished_at = _utcnow()
        logger.info(f"{INGEST} Ingestion complete: {summary}")
        return summary

    async def delete_document_and_chunks(self, relative_path: str) -> int:
        """
        Remove every document stored under `relative_path`, with its chunks.

        Works regardless of what is on disk; the next ingest_all() then sees
        the file as new. Returns the number of document records removed.
        """
        relative_path = relative_path.replace("\\", "/")
        await self.ensure_collections()

        documents = await self._documents.get_all({"relative_path": relative_path})
        if not documents:
            logger.info(f"{INGEST} No stored document for {relative_path}")
            return 0

        await self._delete_documents(documents)
        logger.info(f"{INGEST} Deleted {len(documents)} document(s) for {relative_path}")
        return len(documents)

    async def _ingest_document(self, source: IngestionSource, candidate: DocumentCandidate) -> int:
        document = candidate.document

        if candidate.previous:
            await self._delete_documents(candidate.previous)
        await self._documents.upsert([document])

        text = source.read_text(document.relative_path)
        tree = self._parser.parse(text)

        leaves: List[CodeChunk] = []
        for chunk in self._builder.build(tree, document.id):
            leaves.extend(await self._splitter.split(chunk))

        await self._chunks.upsert(leaves)
        logger.debug(f"{INGEST} Wrote {len(leaves)} chunks for {document.relative_path}")
        return len(leaves)

    async def _rollback(self, document: CodeDocument, summary: IngestSummary) -> None:
        try:
            await self._delete_documents([document])
        except Exception as e:
            summary.error_details.append(f"Rollback error: {document.relative_path}: {e}")
            logger.error(
                f"{INGEST} Rollback of {document.relative_path} failed, "
                f"records for document {document.id} may remain: {e}"
            )

    async def _delete_documents(self, documents: Sequence[CodeDocument]) -> None:
        """Chunks first, then the document records."""
        ids = [d.id for d in documents]
        chunks = await self._chunks.get_all({"document_id": ids})
        await self._chunks.delete([c.id for c in chunks])
        await self._documents.delete(ids)


__all__ = ["IngestSummary", "IngestionCoordinator", "ProgressCallback"]
