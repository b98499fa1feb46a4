# codechunk/parsing/csharp.py
"""
Tree-sitter based C# declaration extractor.

Produces the DeclarationTree the chunk builder consumes:
- using directives, verbatim, in file order
- the first namespace (block-scoped or file-scoped)
- every class / interface / struct / enum at any depth, in source order

Member text is the verbatim source of the member node, with directly
preceding comments attached, dedented so the builder can re-indent it.

Tree-sitter recovers from syntax errors, so a broken file still yields
whatever declarations could be recognised; the error is only logged.
"""

from __future__ import annotations

import textwrap
from typing import Iterator, List, Optional

import tree_sitter_c_sharp as tscsharp
from tree_sitter import Language, Node, Parser

from codechunk.logging.logger import get_logger
from codechunk.logging.tags import PARSING
from codechunk.parsing.declarations import (
    DeclarationKind,
    DeclarationTree,
    Member,
    TypeDeclaration,
)

logger = get_logger(__name__)

_TYPE_KINDS = {
    "class_declaration": DeclarationKind.CLASS,
    "interface_declaration": DeclarationKind.INTERFACE,
    "struct_declaration": DeclarationKind.STRUCT,
    "enum_declaration": DeclarationKind.ENUM,
}

_NAMESPACE_TYPES = {"namespace_declaration", "file_scoped_namespace_declaration"}

_BODY_TYPES = {"declaration_list", "enum_member_declaration_list"}


def _is_trivia(node: Node) -> bool:
    return node.type == "comment" or node.type.startswith("preproc")


def _squash(text: str) -> str:
    return " ".join(text.split())


def _walk(root: Node) -> Iterator[Node]:
    """Pre-order, source-ordered traversal without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


class CSharpDeclarationParser:
    """
    Usage:
        parser = CSharpDeclarationParser()
        tree = parser.parse(Path("Foo.cs").read_text())
        for decl in tree.declarations:
            print(decl.signature, len(decl.members))
    """

    def __init__(self) -> None:
        self._language = Language(tscsharp.language())
        self._parser = Parser(self._language)

    def parse(self, text: str) -> DeclarationTree:
        source = text.encode("utf-8")
        tree = self._parser.parse(source)
        root = tree.root_node

        if root.has_error:
            logger.warning(f"{PARSING} Syntax errors found; extracting recoverable declarations")

        usings: List[str] = []
        namespace: Optional[str] = None
        declarations: List[TypeDeclaration] = []

        for node in _walk(root):
            if node.type == "using_directive":
                usings.append(self._text(node, source))
            elif node.type in _NAMESPACE_TYPES and namespace is None:
                name = node.child_by_field_name("name")
                if name is not None:
                    namespace = self._text(name, source)
            elif node.type in _TYPE_KINDS:
                declarations.append(self._declaration(node, source))

        logger.debug(
            f"{PARSING} namespace={namespace!r} usings={len(usings)} declarations={len(declarations)}"
        )
        return DeclarationTree(
            usings=tuple(usings),
            namespace=namespace,
            declarations=tuple(declarations),
        )

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _declaration(self, node: Node, source: bytes) -> TypeDeclaration:
        name_node = node.child_by_field_name("name")
        modifiers = tuple(
            self._text(child, source) for child in node.children if child.type == "modifier"
        )

        type_parameters = ""
        constraints: List[str] = []
        bases: List[str] = []
        for child in node.children:
            if child.type == "base_list":
                bases.extend(
                    self._text(base, source)
                    for base in child.named_children
                    if not _is_trivia(base)
                )
            elif child.type == "type_parameter_list":
                type_parameters = _squash(self._text(child, source))
            elif child.type == "type_parameter_constraints_clause":
                constraints.append(_squash(self._text(child, source)))

        return TypeDeclaration(
            kind=_TYPE_KINDS[node.type],
            name=self._text(name_node, source) if name_node is not None else "",
            modifiers=modifiers,
            bases=tuple(bases),
            members=tuple(self._members(node, source)),
            type_parameters=type_parameters,
            constraints=tuple(constraints),
        )

    def _members(self, node: Node, source: bytes) -> List[Member]:
        body = node.child_by_field_name("body")
        if body is None:
            body = next((c for c in node.children if c.type in _BODY_TYPES), None)
        if body is None:
            return []

        members: List[Member] = []
        leading: List[Node] = []
        for child in body.named_children:
            if _is_trivia(child):
                leading.append(child)
                continue
            members.append(
                Member(
                    text=self._member_text([*leading, child], source),
                    name=self._member_name(child, source),
                )
            )
            leading = []
        return members

    def _member_text(self, nodes: List[Node], source: bytes) -> str:
        start = nodes[0].start_byte
        end = nodes[-1].end_byte

        # Keep the first line's indentation so dedent sees consistent columns.
        line_start = source.rfind(b"\n", 0, start) + 1
        prefix = source[line_start:start]
        indent = bytes(c if c in b" \t" else 0x20 for c in prefix)

        raw = (indent + source[start:end]).decode("utf-8")
        return textwrap.dedent(raw).strip()

    def _member_name(self, node: Node, source: bytes) -> Optional[str]:
        name = node.child_by_field_name("name")
        if name is not None:
            return self._text(name, source)

        # Fields and events: names live on the variable declarators.
        for child in node.named_children:
            if child.type != "variable_declaration":
                continue
            names = [
                self._declarator_name(declarator, source)
                for declarator in child.named_children
                if declarator.type == "variable_declarator"
            ]
            joined = ", ".join(n for n in names if n)
            return joined or None

        return None

    def _declarator_name(self, node: Node, source: bytes) -> Optional[str]:
        name = node.child_by_field_name("name")
        if name is None:
            name = next((c for c in node.named_children if c.type == "identifier"), None)
        return self._text(name, source) if name is not None else None

    @staticmethod
    def _text(node: Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8")


__all__ = ["CSharpDeclarationParser"]
