#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_api.py
"""Unit tests for the public rendering functions."""

import logging
from io import StringIO

import pytest

from mdtree import (
    Container,
    InvalidOptionsError,
    MarkdownRendererOptions,
    TreeStore,
    UnknownRoleError,
    from_ast,
    render,
    render_container,
    render_element,
    to_ast,
)
from mdtree.ast import Document, Heading, Paragraph, Text
from mdtree.tree.builder import heading, list_, list_item, mount, paragraph, strong, thematic_break


@pytest.mark.unit
class TestRender:
    """Tests for render() over raw store operations."""

    def test_store_operations(self):
        """Test rendering a tree built directly through the store."""
        store = TreeStore()
        node = store.create_element("heading", {"depth": 2})
        store.append_child(node, store.create_text("Hello"))
        assert render(store, node) == "## Hello\n"

    def test_none_root(self):
        """Test that a missing root renders an empty document."""
        assert render(TreeStore(), None) == "\n"

    def test_reflects_mutations(self):
        """Test that every render sees the current tree."""
        store = TreeStore()
        para = store.create_element("paragraph")
        text = store.create_text("before")
        store.append_child(para, text)
        assert render(store, para) == "before\n"
        store.update_text(text, "after")
        assert render(store, para) == "after\n"

    def test_unknown_role_propagates(self):
        """Test that lowering errors reach the caller."""
        container = mount(paragraph("x"))
        container.store.get(container.root).role = "marquee"
        with pytest.raises(UnknownRoleError):
            render_container(container)


@pytest.mark.unit
class TestOptionsResolution:
    """Tests for the accepted forms of renderer options."""

    def test_options_object(self):
        """Test passing a MarkdownRendererOptions instance."""
        options = MarkdownRendererOptions(bullet_marker="+")
        assert render_element(list_(list_item("a")), options) == "+ a\n"

    def test_mapping(self):
        """Test passing a camelCase mapping."""
        assert render_element(list_(list_item("a")), {"bulletMarker": "*"}) == "* a\n"

    def test_kwargs_override(self):
        """Test that keyword options override the options argument."""
        assert render_element(thematic_break(), {"ruleStyle": "*"}, rule_style="_") == "___\n"

    def test_bad_options_type(self):
        """Test that unsupported option types raise InvalidOptionsError."""
        with pytest.raises(InvalidOptionsError):
            render_element("x", options=42)

    def test_bad_option_value(self):
        """Test that disallowed option values raise ValueError."""
        with pytest.raises(ValueError):
            render_element("x", bullet_marker="#")


@pytest.mark.unit
class TestContainerAndElement:
    """Tests for render_container() and render_element()."""

    def test_empty_container(self):
        """Test that an empty container renders a single newline."""
        assert render_container(Container()) == "\n"

    def test_render_element_sequence(self):
        """Test rendering several top-level descriptions."""
        result = render_element([heading(1, "Title"), paragraph("Some ", strong("bold"), " text")])
        assert result == "# Title\n\nSome **bold** text\n"

    def test_render_element_text(self):
        """Test rendering a lone string."""
        assert render_element("just text") == "just text\n"


@pytest.mark.unit
class TestAstFunctions:
    """Tests for to_ast() and from_ast()."""

    def test_to_ast(self):
        """Test that loose text is lowered into a synthesized paragraph."""
        container = mount("loose")
        document = to_ast(container.store, container.root)
        assert document == Document(children=[Paragraph(content=[Text("loose")], metadata={"synthesized": True})])

    def test_from_ast_returns_string(self):
        """Test rendering an AST document to a string."""
        doc = Document(children=[Heading(level=1, content=[Text("T")])])
        assert from_ast(doc) == "# T\n"

    def test_from_ast_writes_output(self):
        """Test writing an AST document to a stream."""
        buffer = StringIO()
        result = from_ast(Document(children=[Paragraph(content=[Text("x")])]), buffer, rule_style="*")
        assert result is None
        assert buffer.getvalue() == "x\n"

    def test_to_ast_then_from_ast(self):
        """Test that to_ast followed by from_ast matches render()."""
        container = mount([heading(2, "A"), list_(list_item("b"), ordered=True)])
        document = to_ast(container.store, container.root)
        assert from_ast(document) == render_container(container)


@pytest.mark.unit
class TestDebugLogging:
    """Tests for the debug dumps emitted during render()."""

    def test_dumps_logged_at_debug(self, caplog):
        """Test that tree, AST and output dumps are logged."""
        with caplog.at_level(logging.DEBUG, logger="mdtree.api"):
            render_element(heading(1, "Title"))
        messages = "\n".join(record.getMessage() for record in caplog.records)
        assert "Generic tree:" in messages
        assert 'heading depth: 1 [' in messages
        assert "Markdown AST:" in messages
        assert "Rendered Markdown:\n# Title" in messages
        assert "Lowering completed in" in messages

    def test_no_dumps_by_default(self, caplog):
        """Test that nothing is logged at the default level."""
        with caplog.at_level(logging.WARNING, logger="mdtree.api"):
            render_element(heading(1, "Title"))
        assert caplog.records == []

