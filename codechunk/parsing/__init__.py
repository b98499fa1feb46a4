# codechunk/parsing/__init__.py
from codechunk.parsing.declarations import (
    DeclarationKind,
    DeclarationParser,
    DeclarationTree,
    Member,
    TypeDeclaration,
)

__all__ = [
    "DeclarationKind",
    "DeclarationParser",
    "DeclarationTree",
    "Member",
    "TypeDeclaration",
]
