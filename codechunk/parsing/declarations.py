# codechunk/parsing/declarations.py
"""
Declaration tree consumed by the chunk builder.

This is the only view of a source file the chunking core ever sees: using
directives, one namespace, and a flat list of type declarations, each with
an ordered list of members carrying their verbatim text.

Every type declaration has the same shape; the kind is a tag, not a
subclass, because the builder only enumerates members and reads their text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol, Tuple, runtime_checkable


class DeclarationKind(str, Enum):
    CLASS = "class"
    INTERFACE = "interface"
    STRUCT = "struct"
    ENUM = "enum"


@dataclass(frozen=True)
class Member:
    """A single member of a type: method, property, field, nested type or enum value."""

    text: str  # verbatim source, dedented to column zero
    name: Optional[str] = None


@dataclass(frozen=True)
class TypeDeclaration:
    kind: DeclarationKind
    name: str
    modifiers: Tuple[str, ...] = ()
    bases: Tuple[str, ...] = ()
    members: Tuple[Member, ...] = ()
    type_parameters: str = ""
    constraints: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        """
        Declaration header, e.g. "public sealed class Repo<T> : Base<T> where T : class".

        An empty base list produces no colon suffix at all.
        """
        head = " ".join([*self.modifiers, self.kind.value, self.name + self.type_parameters])
        if self.bases:
            head = f"{head} : {', '.join(self.bases)}"
        if self.constraints:
            head = f"{head} {' '.join(self.constraints)}"
        return head


@dataclass(frozen=True)
class DeclarationTree:
    usings: Tuple[str, ...] = ()
    namespace: Optional[str] = None
    declarations: Tuple[TypeDeclaration, ...] = field(default_factory=tuple)


@runtime_checkable
class DeclarationParser(Protocol):
    """Turns raw file text into a declaration tree."""

    def parse(self, text: str) -> DeclarationTree:
        ...


__all__ = [
    "DeclarationKind",
    "Member",
    "TypeDeclaration",
    "DeclarationTree",
    "DeclarationParser",
]
