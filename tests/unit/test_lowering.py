#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_lowering.py
"""Unit tests for lowering the generic tree into the Markdown AST.

Tests cover:
- Grouping of inline runs into synthesized paragraphs
- Flattening of nested root fragments
- Per-role property validation and defaults
- Normalization of stray list items, rows, cells and images
- The single hard structural error (unknown role)

"""

import pytest

from mdtree.ast import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Paragraph,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
    ValidationVisitor,
    get_node_children,
    lower_tree,
)
from mdtree.exceptions import PropertyTypeError, UnknownRoleError
from mdtree.tree.builder import (
    blockquote,
    code_block,
    emphasis,
    h,
    heading,
    image,
    inline_code,
    link,
    list_,
    list_item,
    mount,
    paragraph,
    strong,
    table,
    table_cell,
    table_row,
    thematic_break,
)

SYNTH = {"synthesized": True}


def lower(description):
    """Mount a description and lower the resulting container."""
    container = mount(description)
    return lower_tree(container.store, container.root)


def iter_nodes(node):
    yield node
    for child in get_node_children(node):
        yield from iter_nodes(child)


@pytest.mark.unit
class TestInlineGrouping:
    """Tests for grouping inline runs into paragraphs."""

    def test_adjacent_inline_nodes_form_one_paragraph(self):
        """Test that top-level text and inline elements share one paragraph."""
        doc = lower(["Hello ", strong("world"), "!"])
        assert doc == Document(
            children=[
                Paragraph(
                    content=[Text("Hello "), Strong(content=[Text("world")]), Text("!")],
                    metadata=SYNTH,
                )
            ]
        )

    def test_block_splits_inline_runs(self):
        """Test that a block between inline runs yields three paragraphs."""
        doc = lower(["first.", paragraph("second."), "third"])
        assert doc.children == [
            Paragraph(content=[Text("first.")], metadata=SYNTH),
            Paragraph(content=[Text("second.")]),
            Paragraph(content=[Text("third")], metadata=SYNTH),
        ]

    def test_single_text_root(self):
        """Test that a lone text root becomes a paragraph."""
        doc = lower("just text")
        assert doc.children == [Paragraph(content=[Text("just text")], metadata=SYNTH)]

    def test_bare_inline_element_root(self):
        """Test that a lone inline element root becomes a paragraph."""
        doc = lower(emphasis("it"))
        assert len(doc.children) == 1
        assert doc.children[0].metadata == SYNTH

    def test_normalized_tree_adds_no_paragraphs(self):
        """Test that an already well-formed tree gets no synthesized paragraphs."""
        doc = lower(
            [
                heading(1, "Title"),
                paragraph("Body with ", strong("bold")),
                list_(list_item(paragraph("one")), list_item(paragraph("two"))),
                blockquote(paragraph("quoted")),
            ]
        )
        assert not any(node.metadata.get("synthesized") for node in iter_nodes(doc))

    def test_nested_roots_flatten(self):
        """Test that root fragments are transparent at every depth."""
        doc = lower(h("root", None, h("root", None, "a", h("root", None, "b")), "c"))
        assert doc.children == [Paragraph(content=[Text("a"), Text("b"), Text("c")], metadata=SYNTH)]

    def test_empty_root(self):
        """Test that an empty root lowers to an empty document."""
        assert lower(h("root")) == Document()

    def test_missing_root(self, store):
        """Test that no root at all lowers to an empty document."""
        assert lower_tree(store, None) == Document()


@pytest.mark.unit
class TestBlockRoles:
    """Tests for lowering individual block roles."""

    def test_heading_depth_default(self):
        """Test that a missing depth means level 1."""
        assert lower(h("heading", None, "x")).children[0].level == 1

    def test_heading_depth_clamped(self):
        """Test that out-of-range depths are clamped."""
        assert lower(heading(9, "x")).children[0].level == 6
        assert lower(heading(0, "x")).children[0].level == 1

    def test_heading_depth_type_checked(self):
        """Test that a non-numeric depth raises."""
        with pytest.raises(PropertyTypeError):
            lower(h("heading", {"depth": "2"}, "x"))

    def test_heading_drops_block_children(self):
        """Test that block content inside a heading is dropped."""
        doc = lower(heading(2, "Title", paragraph("nope")))
        assert doc.children == [Heading(level=2, content=[Text("Title")])]

    def test_code_language_absent_vs_empty(self):
        """Test that a missing language differs from an empty one."""
        assert lower(code_block("x")).children[0] == CodeBlock(content="x", language=None)
        assert lower(code_block("x", "")).children[0] == CodeBlock(content="x", language="")

    def test_code_lang_alias(self):
        """Test that 'lang' is accepted when 'language' is absent."""
        doc = lower(h("code", {"lang": "js", "value": "x()"}))
        assert doc.children[0] == CodeBlock(content="x()", language="js")

    def test_code_value_from_children(self):
        """Test that code without a value property uses its text children."""
        doc = lower(h("code", None, "line 1\n", "line 2"))
        assert doc.children[0].content == "line 1\nline 2"

    def test_code_value_type_checked(self):
        """Test that a non-string value raises."""
        with pytest.raises(PropertyTypeError):
            lower(h("code", {"value": 12}))

    def test_thematic_break(self):
        """Test that thematic breaks are leaves."""
        assert lower(thematic_break()).children == [ThematicBreak()]

    def test_blockquote_groups_inline_runs(self):
        """Test that block quotes group inline runs like list items."""
        doc = lower(blockquote("a", strong("b"), paragraph("c")))
        assert doc.children == [
            BlockQuote(
                children=[
                    Paragraph(content=[Text("a"), Strong(content=[Text("b")])], metadata=SYNTH),
                    Paragraph(content=[Text("c")]),
                ]
            )
        ]

    def test_image_at_block_level(self):
        """Test that a block-level image gets a paragraph of its own."""
        doc = lower(["before", image("i.png", "Alt"), "after"])
        assert doc.children == [
            Paragraph(content=[Text("before")], metadata=SYNTH),
            Paragraph(content=[Image(url="i.png", alt_text="Alt")], metadata=SYNTH),
            Paragraph(content=[Text("after")], metadata=SYNTH),
        ]

    def test_sole_image_in_paragraph_kept(self):
        """Test that an image alone in a paragraph survives."""
        doc = lower(paragraph(image("i.png", "Alt", title="T")))
        assert doc.children == [Paragraph(content=[Image(url="i.png", alt_text="Alt", title="T")])]

    def test_image_among_inline_content_dropped(self):
        """Test that images mixed with other inline content are dropped."""
        doc = lower(paragraph("text ", image("i.png")))
        assert doc.children == [Paragraph(content=[Text("text ")])]


@pytest.mark.unit
class TestLists:
    """Tests for list and list item lowering."""

    def test_defaults(self):
        """Test that lists are unordered and start at 1 by default."""
        lst = lower(h("list", None, list_item("x"))).children[0]
        assert lst.ordered is False
        assert lst.start == 1

    def test_ordered_with_start(self):
        """Test the ordered and start properties."""
        lst = lower(list_(list_item("x"), ordered=True, start=4)).children[0]
        assert lst.ordered is True
        assert lst.start == 4

    def test_negative_start_clamped(self):
        """Test that a negative start becomes 0."""
        assert lower(list_(list_item("x"), ordered=True, start=-3)).children[0].start == 0

    def test_ordered_type_checked(self):
        """Test that a non-boolean ordered flag raises."""
        with pytest.raises(PropertyTypeError):
            lower(h("list", {"ordered": "yes"}, list_item("x")))

    def test_non_item_children_dropped(self):
        """Test that list children other than list items are discarded."""
        lst = lower(list_("stray", list_item("kept"), paragraph("also stray"))).children[0]
        assert len(lst.items) == 1
        assert lst.items[0].children == [Paragraph(content=[Text("kept")], metadata=SYNTH)]

    def test_item_groups_inline_and_blocks(self):
        """Test that inline runs around a nested list become paragraphs."""
        item = lower(list_(list_item("before ", strong("b"), list_(list_item("nested")), "after"))).children[0].items[0]
        assert [type(child) for child in item.children] == [Paragraph, List, Paragraph]
        assert item.children[0].content == [Text("before "), Strong(content=[Text("b")])]
        assert item.children[2].content == [Text("after")]

    def test_empty_item_gets_empty_paragraph(self):
        """Test that an empty item holds one empty paragraph."""
        item = lower(list_(list_item())).children[0].items[0]
        assert item.children == [Paragraph(content=[], metadata=SYNTH)]

    @pytest.mark.parametrize("checked,status", [(True, "checked"), (False, "unchecked"), (None, None)])
    def test_task_status(self, checked, status):
        """Test mapping of the checked property."""
        item = lower(list_(list_item("task", checked=checked))).children[0].items[0]
        assert item.task_status == status

    def test_item_outside_list_wrapped(self):
        """Test that a stray list item is wrapped in a bullet list."""
        doc = lower(list_item("alone"))
        assert doc.children == [
            List(
                ordered=False,
                items=[ListItem(children=[Paragraph(content=[Text("alone")], metadata=SYNTH)])],
                metadata=SYNTH,
            )
        ]

    def test_root_fragments_inside_items(self):
        """Test that root fragments inside list items are transparent."""
        item = lower(list_(list_item(h("root", None, "a", "b")))).children[0].items[0]
        assert item.children == [Paragraph(content=[Text("a"), Text("b")], metadata=SYNTH)]


@pytest.mark.unit
class TestTables:
    """Tests for table lowering."""

    def test_structure_and_alignment(self):
        """Test rows, header flags and alignments."""
        doc = lower(
            table(
                table_row(table_cell("Name", header=True), table_cell("Age", align="center", header=True)),
                table_row(table_cell("Ann", align="none"), table_cell("7", align="right")),
            )
        )
        assert doc.children == [
            Table(
                rows=[
                    TableRow(
                        cells=[
                            TableCell(content=[Text("Name")], is_header=True),
                            TableCell(content=[Text("Age")], alignment="center", is_header=True),
                        ]
                    ),
                    TableRow(
                        cells=[
                            TableCell(content=[Text("Ann")]),
                            TableCell(content=[Text("7")], alignment="right"),
                        ]
                    ),
                ]
            )
        ]

    def test_invalid_alignment(self):
        """Test that an unknown alignment raises."""
        with pytest.raises(PropertyTypeError):
            lower(table(table_row(table_cell("x", align="justify"))))

    def test_non_row_and_non_cell_children_dropped(self):
        """Test that stray children of tables and rows are discarded."""
        doc = lower(table("stray", table_row("also stray", table_cell("ok"))))
        assert doc.children == [Table(rows=[TableRow(cells=[TableCell(content=[Text("ok")])])])]

    def test_stray_row_and_cell_wrapped(self):
        """Test that rows and cells outside a table are wrapped in one."""
        row_doc = lower(table_row(table_cell("r")))
        cell_doc = lower(table_cell("c"))
        assert isinstance(row_doc.children[0], Table)
        assert row_doc.children[0].metadata == SYNTH
        assert cell_doc.children[0].rows[0].cells[0].content == [Text("c")]


@pytest.mark.unit
class TestInlineRoles:
    """Tests for inline role lowering."""

    def test_inline_code(self):
        """Test that inline code takes its value property."""
        doc = lower(paragraph(inline_code("x = 1")))
        assert doc.children[0].content == [Code(content="x = 1")]

    def test_link(self):
        """Test link URL, title and content."""
        doc = lower(paragraph(link("https://example.com", "site", title="Example")))
        assert doc.children[0].content == [Link(url="https://example.com", content=[Text("site")], title="Example")]

    def test_link_missing_url(self):
        """Test that a missing URL becomes an empty string."""
        doc = lower(paragraph(h("link", None, "x")))
        assert doc.children[0].content[0].url == ""

    def test_link_url_type_checked(self):
        """Test that a non-string URL raises."""
        with pytest.raises(PropertyTypeError):
            lower(paragraph(h("link", {"url": 5}, "x")))


@pytest.mark.unit
class TestLoweringErrors:
    """Tests for hard failures and purity."""

    def test_unknown_role_raises(self):
        """Test that a record with a role outside the vocabulary raises."""
        container = mount(paragraph("x"))
        container.store.get(container.root).role = "marquee"
        with pytest.raises(UnknownRoleError, match="marquee"):
            lower_tree(container.store, container.root)

    def test_unknown_role_at_inline_position(self):
        """Test that unknown roles also raise inside inline content."""
        container = mount(paragraph(strong("x")))
        store = container.store
        strong_node = store.children_of(container.root)[0]
        store.get(strong_node).role = "marquee"
        with pytest.raises(UnknownRoleError):
            lower_tree(store, container.root)

    def test_lowering_is_pure(self):
        """Test that lowering twice yields equal but distinct documents."""
        container = mount([heading(1, "T"), "a", list_(list_item("b"))])
        first = lower_tree(container.store, container.root)
        second = lower_tree(container.store, container.root)
        assert first == second
        assert first is not second
        assert first.children[0] is not second.children[0]

    def test_lowered_document_is_valid(self):
        """Test that lowered output satisfies the AST grammar."""
        doc = lower(
            [
                "loose",
                image("i.png"),
                list_(list_item("a", list_(list_item())), ordered=True),
                table_cell("c"),
                blockquote("q"),
            ]
        )
        doc.accept(ValidationVisitor(strict=True))
