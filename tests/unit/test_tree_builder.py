#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_tree_builder.py
"""Unit tests for declarative element descriptions and mounting."""

import pytest

from mdtree.exceptions import UnsupportedRoleError
from mdtree.tree.builder import (
    Element,
    build,
    code_block,
    h,
    heading,
    image,
    link,
    list_,
    list_item,
    mount,
    table_cell,
)
from mdtree.tree.store import Container, TreeStore


@pytest.mark.unit
class TestDescriptions:
    """Tests for building element descriptions."""

    def test_h_copies_properties(self):
        """Test that h() stores a copy of the property map."""
        props = {"depth": 2}
        element = h("heading", props, "Title")
        props["depth"] = 4
        assert element == Element(role="heading", properties={"depth": 2}, children=["Title"])

    def test_children_flattened(self):
        """Test that nested sequences are flattened and falsy placeholders skipped."""
        element = h("paragraph", None, "a", ["b", ("c", None)], False, None, True)
        assert element.children == ["a", "b", "c"]

    def test_helpers_set_properties(self):
        """Test that helper functions produce the expected roles and properties."""
        assert heading(3, "x").properties == {"depth": 3}
        assert code_block("print()", "python").properties == {"value": "print()", "language": "python"}
        assert code_block("x").properties == {"value": "x"}
        assert link("https://a.example", "a", title="T").properties == {"url": "https://a.example", "title": "T"}
        assert image("i.png", "alt").properties == {"url": "i.png", "alt": "alt"}
        assert list_(ordered=True, start=3).properties == {"ordered": True, "start": 3}
        assert list_item("x", checked=False).properties == {"checked": False}
        assert list_item("x").properties == {}

    def test_table_cell_header_role(self):
        """Test that header cells use the tableHeader role."""
        assert table_cell("h", header=True).role == "tableHeader"
        assert table_cell("c", align="right").properties == {"align": "right"}


@pytest.mark.unit
class TestMounting:
    """Tests for replaying descriptions through the store."""

    def test_build_text(self):
        """Test that a string builds a text record."""
        store = TreeStore()
        node = build(store, "hello")
        assert store.get(node).value == "hello"

    def test_build_attaches_children_in_order(self):
        """Test that children are attached in description order."""
        store = TreeStore()
        node = build(store, h("paragraph", None, "a", h("strong", None, "b")))
        children = store.children_of(node)
        assert [store.role_of(child) for child in children] == [None, "strong"]
        assert all(store.parent_of(child) == node for child in children)

    def test_build_rejects_unknown_role(self):
        """Test that unknown roles fail at creation time."""
        with pytest.raises(UnsupportedRoleError):
            build(TreeStore(), h("blink", None, "x"))

    def test_mount_single_root(self):
        """Test that a single description becomes the container root."""
        container = mount(heading(1, "Title"))
        assert container.store.role_of(container.root) == "heading"
        assert len(container.nodes) == 1

    def test_mount_sequence_merges_roots(self):
        """Test that several top-level descriptions share a synthetic root."""
        container = mount([heading(1, "Title"), "loose text"])
        store = container.store
        assert store.role_of(container.root) == "root"
        assert len(store.children_of(container.root)) == 2

    def test_mount_into_existing_container(self):
        """Test that mounting appends to a given container."""
        container = Container()
        mount("first", container)
        mount("second", container)
        assert len(container.nodes) == 2
        assert container.store.role_of(container.root) == "root"
