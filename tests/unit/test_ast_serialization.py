#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_ast_serialization.py
"""Unit tests for AST to dict/JSON serialization."""

import json

import pytest

from mdtree.ast import (
    CodeBlock,
    Document,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    ast_to_dict,
    ast_to_json,
    dict_to_ast,
    json_to_ast,
)


@pytest.fixture
def sample_document():
    return Document(
        children=[
            Heading(level=2, content=[Text("Title")]),
            Paragraph(content=[Link(url="https://example.com", content=[Text("site")], title="T")], metadata={"synthesized": True}),
            CodeBlock(content="x = 1\n", language=""),
            List(
                ordered=True,
                start=3,
                items=[ListItem(children=[Paragraph(content=[Text("item")])], task_status="checked")],
            ),
            Table(rows=[TableRow(cells=[TableCell(content=[Text("h")], alignment="center", is_header=True)])]),
            Paragraph(content=[Image(url="i.png", alt_text="alt")]),
            ThematicBreak(),
        ]
    )


@pytest.mark.unit
class TestAstToDict:
    """Tests for dictionary serialization."""

    def test_heading(self):
        """Test the shape of a serialized heading."""
        assert ast_to_dict(Heading(level=1, content=[Text("x")])) == {
            "node_type": "Heading",
            "level": 1,
            "content": [{"node_type": "Text", "content": "x"}],
        }

    def test_metadata_included_only_when_present(self):
        """Test that empty metadata is omitted."""
        assert "metadata" not in ast_to_dict(Paragraph())
        assert ast_to_dict(Paragraph(metadata={"synthesized": True}))["metadata"] == {"synthesized": True}

    def test_code_language_distinguishes_empty(self):
        """Test that an empty language is kept and a missing one omitted."""
        assert ast_to_dict(CodeBlock(content="x", language=""))["language"] == ""
        assert "language" not in ast_to_dict(CodeBlock(content="x"))

    def test_unknown_node_type(self):
        """Test that unsupported objects raise ValueError."""
        with pytest.raises(ValueError):
            ast_to_dict(object())

    def test_dict_round_trip(self, sample_document):
        """Test that a document survives a dict round trip."""
        assert dict_to_ast(ast_to_dict(sample_document)) == sample_document


@pytest.mark.unit
class TestJson:
    """Tests for JSON serialization."""

    def test_schema_version(self, sample_document):
        """Test that JSON output carries the schema version."""
        data = json.loads(ast_to_json(sample_document))
        assert data["schema_version"] == 1
        assert data["node_type"] == "Document"

    def test_json_round_trip(self, sample_document):
        """Test that a document survives a JSON round trip."""
        assert json_to_ast(ast_to_json(sample_document, indent=2)) == sample_document

    def test_non_ascii_preserved(self):
        """Test that non-ASCII text is not escaped in JSON."""
        assert "✅" in ast_to_json(Paragraph(content=[Text("✅")]))

    def test_unsupported_schema_version(self):
        """Test that other schema versions are rejected."""
        with pytest.raises(ValueError):
            json_to_ast('{"schema_version": 99, "node_type": "Document", "children": []}')

    def test_missing_node_type(self):
        """Test that a dict without node_type is rejected."""
        with pytest.raises(ValueError):
            dict_to_ast({"children": []})

    def test_unknown_node_type(self):
        """Test that an unknown node_type is rejected."""
        with pytest.raises(ValueError):
            dict_to_ast({"node_type": "Marquee"})
