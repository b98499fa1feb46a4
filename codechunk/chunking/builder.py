# codechunk/chunking/builder.py
"""
Chunk builder.

Turns a declaration tree into candidate chunks, one per retrievable unit:
- each member of each class / interface / struct / enum
- one "empty shell" chunk for a type with no members

Each candidate is a small, self-contained looking source file:

    using System;
    using System.Linq;

    namespace Acme.Billing
    {
        public class Invoice : IEntity
        {
            public decimal Total() => Lines.Sum(l => l.Amount);
        }
    }

Candidates are not yet measured against the token budget; that is the
splitter's job.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from codechunk.logging.logger import get_logger
from codechunk.logging.tags import CHUNKING
from codechunk.models.chunk import CodeChunk
from codechunk.parsing.declarations import DeclarationTree, Member, TypeDeclaration

logger = get_logger(__name__)

INDENT = "\t"


def _indent(text: str, depth: int) -> List[str]:
    """Indent every non-blank line of text by `depth` levels."""
    prefix = INDENT * depth
    return [f"{prefix}{line}" if line.strip() else "" for line in text.splitlines()]


class ChunkBuilder:
    """
    Usage:
        builder = ChunkBuilder()
        candidates = builder.build(tree, document_id=doc.id)
    """

    def build(self, tree: DeclarationTree, document_id: str) -> List[CodeChunk]:
        chunks: List[CodeChunk] = []

        for decl in tree.declarations:
            if decl.members:
                for member in decl.members:
                    chunks.append(self._chunk(tree, decl, member, document_id))
            else:
                chunks.append(self._chunk(tree, decl, None, document_id))

        logger.debug(
            f"{CHUNKING} Built {len(chunks)} candidate chunks from "
            f"{len(tree.declarations)} declarations"
        )
        return chunks

    def _chunk(
        self,
        tree: DeclarationTree,
        decl: TypeDeclaration,
        member: Optional[Member],
        document_id: str,
    ) -> CodeChunk:
        return CodeChunk(
            document_id=document_id,
            namespace=tree.namespace,
            type_name=decl.name,
            method_name=member.name if member is not None else None,
            snippet=self.render(tree.usings, tree.namespace, decl, member),
        )

    @staticmethod
    def render(
        usings: Iterable[str],
        namespace: Optional[str],
        decl: TypeDeclaration,
        member: Optional[Member] = None,
    ) -> str:
        """
        Render one candidate snippet.

        With member=None the declaration renders as an empty shell.
        """
        lines: List[str] = list(usings)
        if lines:
            lines.append("")

        depth = 0
        if namespace:
            lines.append(f"namespace {namespace}")
            lines.append("{")
            depth = 1

        lines.extend(_indent(decl.signature, depth))
        lines.append(INDENT * depth + "{")
        if member is not None:
            lines.extend(_indent(member.text, depth + 1))
        lines.append(INDENT * depth + "}")

        if namespace:
            lines.append("}")

        return "\n".join(lines)


__all__ = ["ChunkBuilder", "INDENT"]
