#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/lowering.py
"""Lowering of the generic element tree into the Markdown AST.

The generic tree is permissive: any element may hold any child, inline
runs may sit directly under the root, and a list may contain stray
siblings. The lowering pass walks it once and produces a strict
block/inline AST:

- nested ``root`` elements are flattened into one ordered sequence
- adjacent inline nodes at block level are grouped into one paragraph
- list items and block quotes group their inline runs the same way
- an image at block level gets a paragraph of its own
- non-item children of a list and non-row/non-cell children of tables are
  dropped

Structural irregularities are normalized and logged, never raised. Property
values are validated strictly through :mod:`mdtree.utils.validate`. The only
structural error is :class:`~mdtree.exceptions.UnknownRoleError`, for a
record whose role is outside the vocabulary.

The pass is pure: lowering the same unmodified tree twice yields equal ASTs.

"""

from __future__ import annotations

import logging
import math
from typing import Optional, cast

from mdtree.ast.nodes import (
    BlockQuote,
    Code,
    CodeBlock,
    Document,
    Emphasis,
    Heading,
    Image,
    Link,
    List,
    ListItem,
    Node,
    Paragraph,
    Strikethrough,
    Strong,
    Table,
    TableCell,
    TableRow,
    Text,
    ThematicBreak,
)
from mdtree.constants import (
    INLINE_ROLES,
    ROLE_BLOCKQUOTE,
    ROLE_CODE,
    ROLE_EMPHASIS,
    ROLE_HEADING,
    ROLE_IMAGE,
    ROLE_INLINE_CODE,
    ROLE_LINK,
    ROLE_LIST,
    ROLE_LIST_ITEM,
    ROLE_PARAGRAPH,
    ROLE_ROOT,
    ROLE_STRIKETHROUGH,
    ROLE_STRONG,
    ROLE_TABLE,
    ROLE_TABLE_CELL,
    ROLE_TABLE_HEADER,
    ROLE_TABLE_ROW,
    ROLE_THEMATIC_BREAK,
    TABLE_CELL_ROLES,
    TaskStatus,
)
from mdtree.exceptions import UnknownRoleError
from mdtree.tree.store import ElementRecord, NodeId, TextRecord, TreeStore
from mdtree.utils import validate

logger = logging.getLogger(__name__)


def _synthesized_paragraph(content: list[Node]) -> Paragraph:
    return Paragraph(content=content, metadata={"synthesized": True})


class TreeLowering:
    """Lower a generic tree held by a :class:`TreeStore` into a :class:`Document`.

    Parameters
    ----------
    store : TreeStore
        Arena holding the tree

    Examples
    --------
        >>> lowering = TreeLowering(store)
        >>> doc = lowering.lower(container.root)

    """

    def __init__(self, store: TreeStore):
        """Initialize the lowering pass over ``store``."""
        self.store = store

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _element(self, node: NodeId) -> ElementRecord:
        return cast(ElementRecord, self.store.get(node))

    def _is_inline(self, node: NodeId) -> bool:
        """Return True for nodes grouped into paragraphs at block level."""
        record = self.store.get(node)
        if isinstance(record, TextRecord):
            return True
        return record.role in INLINE_ROLES

    def _flatten_roots(self, children: list[NodeId]) -> list[NodeId]:
        """Replace every ``root`` element in ``children`` by its own flattened children."""
        flat: list[NodeId] = []
        for child in children:
            record = self.store.get(child)
            if isinstance(record, ElementRecord) and record.role == ROLE_ROOT:
                flat.extend(self._flatten_roots(record.children))
            else:
                flat.append(child)
        return flat

    def _plain_text(self, node: NodeId) -> str:
        """Concatenate the text values below ``node``."""
        record = self.store.get(node)
        if isinstance(record, TextRecord):
            return record.value
        return "".join(self._plain_text(child) for child in record.children)

    def _literal_value(self, record: ElementRecord) -> str:
        """Return the ``value`` property, falling back to the text of the children."""
        value = validate.maybe_string(record.properties.get("value"), "value")
        if value is None:
            value = "".join(self._plain_text(child) for child in record.children)
        return value

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def lower(self, root: Optional[NodeId]) -> Document:
        """Lower the tree rooted at ``root``.

        Parameters
        ----------
        root : int or None
            Handle of the tree root; None lowers to an empty document

        Returns
        -------
        Document
            Fresh AST

        Raises
        ------
        UnknownRoleError
            If a record carries a role outside the vocabulary
        PropertyTypeError
            If a property value has the wrong type

        """
        if root is None:
            return Document()
        return Document(children=self._lower_block_sequence(self._flatten_roots([root])))

    # ------------------------------------------------------------------
    # Block level
    # ------------------------------------------------------------------

    def _lower_block_sequence(self, children: list[NodeId]) -> list[Node]:
        """Lower a sequence of block-level siblings, grouping inline runs into paragraphs."""
        blocks: list[Node] = []
        pending: list[Node] = []

        for child in self._flatten_roots(children):
            if self._is_inline(child):
                inline = self._lower_inline(child)
                if inline is not None:
                    pending.append(inline)
                continue

            if pending:
                blocks.append(_synthesized_paragraph(pending))
                pending = []

            block = self._lower_block(child)
            if block is not None:
                blocks.append(block)

        if pending:
            blocks.append(_synthesized_paragraph(pending))

        return blocks

    def _lower_block(self, node: NodeId) -> Optional[Node]:
        """Lower one node at a block position."""
        record = self.store.get(node)
        if isinstance(record, TextRecord) or record.role in INLINE_ROLES:
            inline = self._lower_inline(node)
            return _synthesized_paragraph([inline]) if inline is not None else None

        role = record.role
        if role == ROLE_HEADING:
            return self._lower_heading(record)
        if role == ROLE_PARAGRAPH:
            return self._lower_paragraph(record)
        if role == ROLE_BLOCKQUOTE:
            return BlockQuote(children=self._lower_block_sequence(record.children))
        if role == ROLE_CODE:
            return self._lower_code(record)
        if role == ROLE_LIST:
            return self._lower_list(record)
        if role == ROLE_LIST_ITEM:
            logger.debug(f"List item {node} outside a list; wrapping it in a bullet list")
            return List(ordered=False, items=[self._lower_list_item(record)], metadata={"synthesized": True})
        if role == ROLE_TABLE:
            return self._lower_table(record)
        if role == ROLE_TABLE_ROW:
            logger.debug(f"Table row {node} outside a table; wrapping it in a table")
            return Table(rows=[self._lower_table_row(record)], metadata={"synthesized": True})
        if role in TABLE_CELL_ROLES:
            logger.debug(f"Table cell {node} outside a row; wrapping it in a table")
            row = TableRow(cells=[self._lower_table_cell(record)])
            return Table(rows=[row], metadata={"synthesized": True})
        if role == ROLE_THEMATIC_BREAK:
            return ThematicBreak()
        if role == ROLE_IMAGE:
            return _synthesized_paragraph([self._lower_image(record)])

        raise UnknownRoleError(role)

    def _lower_heading(self, record: ElementRecord) -> Heading:
        depth = validate.heading_depth(record.properties.get("depth"))
        return Heading(level=depth, content=self._lower_inline_content(record.children, "heading"))

    def _lower_paragraph(self, record: ElementRecord) -> Paragraph:
        children = self._flatten_roots(record.children)
        # An image may stand alone as the whole content of a paragraph
        if len(children) == 1 and self.store.role_of(children[0]) == ROLE_IMAGE:
            return Paragraph(content=[self._lower_image(self._element(children[0]))])
        return Paragraph(content=self._lower_inline_content(children, "paragraph"))

    def _lower_code(self, record: ElementRecord) -> CodeBlock:
        language = validate.maybe_string(record.properties.get("language"), "language")
        if language is None:
            language = validate.maybe_string(record.properties.get("lang"), "lang")
        return CodeBlock(content=self._literal_value(record), language=language)

    def _lower_list(self, record: ElementRecord) -> List:
        ordered = validate.boolean(record.properties.get("ordered"), False, "ordered")
        start_value = validate.number(record.properties.get("start"), 1, "start")
        start = max(0, int(start_value)) if math.isfinite(start_value) else 1

        items: list[ListItem] = []
        for child in self._flatten_roots(record.children):
            if self.store.role_of(child) != ROLE_LIST_ITEM:
                logger.debug(f"Dropping non-item child {child} of list")
                continue
            items.append(self._lower_list_item(self._element(child)))

        return List(ordered=ordered, items=items, start=start)

    def _lower_list_item(self, record: ElementRecord) -> ListItem:
        checked = validate.maybe_boolean(record.properties.get("checked"), "checked")
        task_status: Optional[TaskStatus] = None
        if checked is not None:
            task_status = "checked" if checked else "unchecked"

        children = self._lower_block_sequence(record.children)
        if not children:
            children = [_synthesized_paragraph([])]

        return ListItem(children=children, task_status=task_status)

    def _lower_table(self, record: ElementRecord) -> Table:
        rows: list[TableRow] = []
        for child in self._flatten_roots(record.children):
            if self.store.role_of(child) != ROLE_TABLE_ROW:
                logger.debug(f"Dropping non-row child {child} of table")
                continue
            rows.append(self._lower_table_row(self._element(child)))
        return Table(rows=rows)

    def _lower_table_row(self, record: ElementRecord) -> TableRow:
        cells: list[TableCell] = []
        for child in self._flatten_roots(record.children):
            if self.store.role_of(child) not in TABLE_CELL_ROLES:
                logger.debug(f"Dropping non-cell child {child} of table row")
                continue
            cells.append(self._lower_table_cell(self._element(child)))
        return TableRow(cells=cells)

    def _lower_table_cell(self, record: ElementRecord) -> TableCell:
        return TableCell(
            content=self._lower_inline_content(record.children, "table cell"),
            alignment=validate.alignment(record.properties.get("align")),  # type: ignore[arg-type]
            is_header=record.role == ROLE_TABLE_HEADER,
        )

    def _lower_image(self, record: ElementRecord) -> Image:
        return Image(
            url=validate.string(record.properties.get("url"), "", "url"),
            alt_text=validate.string(record.properties.get("alt"), "", "alt"),
            title=validate.maybe_string(record.properties.get("title"), "title"),
        )

    # ------------------------------------------------------------------
    # Inline level
    # ------------------------------------------------------------------

    def _lower_inline_content(self, children: list[NodeId], context: str) -> list[Node]:
        """Lower the children of an inline container, dropping non-inline ones."""
        content: list[Node] = []
        for child in self._flatten_roots(children):
            inline = self._lower_inline(child)
            if inline is None:
                logger.debug(f"Dropping non-inline child {child} ({self.store.role_of(child)}) of {context}")
                continue
            content.append(inline)
        return content

    def _lower_inline(self, node: NodeId) -> Optional[Node]:
        """Lower one node at an inline position, returning None for non-inline roles."""
        record = self.store.get(node)
        if isinstance(record, TextRecord):
            return Text(content=record.value)

        role = record.role
        if role == ROLE_STRONG:
            return Strong(content=self._lower_inline_content(record.children, "strong"))
        if role == ROLE_EMPHASIS:
            return Emphasis(content=self._lower_inline_content(record.children, "emphasis"))
        if role == ROLE_STRIKETHROUGH:
            return Strikethrough(content=self._lower_inline_content(record.children, "strikethrough"))
        if role == ROLE_INLINE_CODE:
            return Code(content=self._literal_value(record))
        if role == ROLE_LINK:
            return Link(
                url=validate.string(record.properties.get("url"), "", "url"),
                content=self._lower_inline_content(record.children, "link"),
                title=validate.maybe_string(record.properties.get("title"), "title"),
            )
        if role == ROLE_IMAGE:
            return None
        if role not in _BLOCK_ROLES:
            raise UnknownRoleError(role)
        return None


_BLOCK_ROLES = frozenset(
    {
        ROLE_ROOT,
        ROLE_HEADING,
        ROLE_PARAGRAPH,
        ROLE_CODE,
        ROLE_BLOCKQUOTE,
        ROLE_LIST,
        ROLE_LIST_ITEM,
        ROLE_TABLE,
        ROLE_TABLE_ROW,
        ROLE_TABLE_CELL,
        ROLE_TABLE_HEADER,
        ROLE_THEMATIC_BREAK,
    }
)


def lower_tree(store: TreeStore, root: Optional[NodeId]) -> Document:
    """Lower the generic tree rooted at ``root`` into a :class:`Document`.

    Parameters
    ----------
    store : TreeStore
        Arena holding the tree
    root : int or None
        Handle of the tree root

    Returns
    -------
    Document
        Fresh AST; never shares nodes with earlier results

    """
    return TreeLowering(store).lower(root)
