# tests/test_chunk_builder.py
"""
Tests for codechunk.chunking.builder.

Key tests verify that:
1. One candidate per member, one shell per empty type
2. Snippets carry usings, namespace and the type signature
3. Context labels (namespace, type, member) are attached
"""

from codechunk.chunking.builder import ChunkBuilder
from codechunk.parsing.csharp import CSharpDeclarationParser
from codechunk.parsing.declarations import (
    DeclarationKind,
    DeclarationTree,
    Member,
    TypeDeclaration,
)

from conftest import SAMPLE_CS


def _tree(*declarations, usings=("using System;",), namespace="Acme"):
    return DeclarationTree(usings=tuple(usings), namespace=namespace, declarations=tuple(declarations))


FOO = TypeDeclaration(
    kind=DeclarationKind.CLASS,
    name="Foo",
    modifiers=("public",),
    bases=("Bar", "IBaz"),
    members=(
        Member(text="public int X;", name="X"),
        Member(text="public void Run()\n{\n    Go();\n\n    Stop();\n}", name="Run"),
    ),
)


class TestRender:
    def test_full_shape(self):
        chunks = ChunkBuilder().build(_tree(FOO), document_id="doc-1")

        assert chunks[0].snippet == (
            "using System;\n"
            "\n"
            "namespace Acme\n"
            "{\n"
            "\tpublic class Foo : Bar, IBaz\n"
            "\t{\n"
            "\t\tpublic int X;\n"
            "\t}\n"
            "}"
        )

    def test_multiline_member_is_reindented(self):
        chunks = ChunkBuilder().build(_tree(FOO), document_id="doc-1")
        lines = chunks[1].snippet.splitlines()

        assert "\t\tpublic void Run()" in lines
        assert "\t\t    Go();" in lines
        # blank lines inside a member stay blank, no trailing tabs
        assert lines[lines.index("\t\t    Go();") + 1] == ""

    def test_no_bases_no_colon(self):
        decl = TypeDeclaration(kind=DeclarationKind.INTERFACE, name="IThing", modifiers=("internal",))
        snippet = ChunkBuilder().build(_tree(decl), document_id="d")[0].snippet

        assert "\tinternal interface IThing\n" in snippet
        assert ":" not in snippet

    def test_generic_signature(self):
        decl = TypeDeclaration(
            kind=DeclarationKind.CLASS,
            name="Repo",
            modifiers=("public", "sealed"),
            bases=("Base<T>",),
            members=(Member(text="public T Get() { return default; }", name="Get"),),
            type_parameters="<T>",
            constraints=("where T : class",),
        )
        chunks = ChunkBuilder().build(_tree(decl), document_id="d")

        assert "\tpublic sealed class Repo<T> : Base<T> where T : class\n" in chunks[0].snippet
        assert chunks[0].type_name == "Repo"

    def test_global_namespace_has_no_wrapper(self):
        chunks = ChunkBuilder().build(_tree(FOO, usings=(), namespace=None), document_id="d")

        assert chunks[0].snippet == "public class Foo : Bar, IBaz\n{\n\tpublic int X;\n}"

    def test_empty_shell(self):
        decl = TypeDeclaration(kind=DeclarationKind.STRUCT, name="Empty", modifiers=("public",))
        chunks = ChunkBuilder().build(_tree(decl), document_id="d")

        assert len(chunks) == 1
        assert chunks[0].snippet.endswith("\tpublic struct Empty\n\t{\n\t}\n}")
        assert chunks[0].method_name is None


class TestLabels:
    def test_labels_and_document_id(self):
        chunks = ChunkBuilder().build(_tree(FOO), document_id="doc-42")

        assert [c.method_name for c in chunks] == ["X", "Run"]
        assert all(c.type_name == "Foo" for c in chunks)
        assert all(c.namespace == "Acme" for c in chunks)
        assert all(c.document_id == "doc-42" for c in chunks)
        assert len({c.id for c in chunks}) == 2

    def test_enum_members_each_get_a_chunk(self):
        decl = TypeDeclaration(
            kind=DeclarationKind.ENUM,
            name="Color",
            modifiers=("public",),
            members=(Member("Red", "Red"), Member("Green", "Green")),
        )
        chunks = ChunkBuilder().build(_tree(decl), document_id="d")

        assert [c.method_name for c in chunks] == ["Red", "Green"]
        assert "\t\tRed\n" in chunks[0].snippet


class TestFromSource:
    def test_three_members_and_empty_interface_give_four_candidates(self):
        tree = CSharpDeclarationParser().parse(SAMPLE_CS)
        chunks = ChunkBuilder().build(tree, document_id="doc")

        assert len(chunks) == 4
        assert [(c.type_name, c.method_name) for c in chunks] == [
            ("Invoice", "_lines"),
            ("Invoice", "Number"),
            ("Invoice", "Total"),
            ("IAuditable", None),
        ]
        assert chunks[3].snippet.startswith("using System;\nusing System.Collections.Generic;\n\n")
        assert "\tpublic interface IAuditable\n\t{\n\t}" in chunks[3].snippet

    def test_ten_line_empty_interface(self):
        source = (
            "namespace Acme\n{\n"
            "    public class Svc\n    {\n"
            "        public void A() { }\n        public void B() { }\n        public void C() { }\n"
            "    }\n"
            "    public interface IEmpty\n"
            "    {\n"
            "        // nothing yet\n"
            "\n"
            "        // to be defined\n"
            "\n"
            "\n"
            "\n"
            "\n"
            "    }\n"
            "}\n"
        )
        tree = CSharpDeclarationParser().parse(source)
        chunks = ChunkBuilder().build(tree, document_id="doc")

        assert [(c.type_name, c.method_name) for c in chunks] == [
            ("Svc", "A"),
            ("Svc", "B"),
            ("Svc", "C"),
            ("IEmpty", None),
        ]
