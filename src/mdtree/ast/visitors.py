#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/visitors.py
"""Visitor pattern implementation for AST traversal.

This module provides the visitor base class used by the Markdown renderer
and the serializer, plus a validator that checks the block/inline grammar
the lowering pass guarantees.

"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

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


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement a ``visit_*`` method for every node type. Each
    method accepts a node and returns Any (typically None for side-effect
    visitors, or accumulated results for transforming visitors).

    Examples
    --------
    Simple visitor that counts text nodes:

        >>> class TextCounter(NodeVisitor):
        ...     def __init__(self):
        ...         self.count = 0
        ...
        ...     def visit_text(self, node):
        ...         self.count += 1

    """

    @abstractmethod
    def visit_document(self, node: Document) -> Any:
        """Visit a Document node.

        Parameters
        ----------
        node : Document
            The document node to visit

        Returns
        -------
        Any
            Result of processing this node

        """
        pass

    @abstractmethod
    def visit_heading(self, node: Heading) -> Any:
        """Visit a Heading node."""
        pass

    @abstractmethod
    def visit_paragraph(self, node: Paragraph) -> Any:
        """Visit a Paragraph node."""
        pass

    @abstractmethod
    def visit_code_block(self, node: CodeBlock) -> Any:
        """Visit a CodeBlock node."""
        pass

    @abstractmethod
    def visit_block_quote(self, node: BlockQuote) -> Any:
        """Visit a BlockQuote node."""
        pass

    @abstractmethod
    def visit_list(self, node: List) -> Any:
        """Visit a List node."""
        pass

    @abstractmethod
    def visit_list_item(self, node: ListItem) -> Any:
        """Visit a ListItem node."""
        pass

    @abstractmethod
    def visit_table(self, node: Table) -> Any:
        """Visit a Table node."""
        pass

    @abstractmethod
    def visit_table_row(self, node: TableRow) -> Any:
        """Visit a TableRow node."""
        pass

    @abstractmethod
    def visit_table_cell(self, node: TableCell) -> Any:
        """Visit a TableCell node."""
        pass

    @abstractmethod
    def visit_thematic_break(self, node: ThematicBreak) -> Any:
        """Visit a ThematicBreak node."""
        pass

    @abstractmethod
    def visit_text(self, node: Text) -> Any:
        """Visit a Text node."""
        pass

    @abstractmethod
    def visit_emphasis(self, node: Emphasis) -> Any:
        """Visit an Emphasis node."""
        pass

    @abstractmethod
    def visit_strong(self, node: Strong) -> Any:
        """Visit a Strong node."""
        pass

    @abstractmethod
    def visit_strikethrough(self, node: Strikethrough) -> Any:
        """Visit a Strikethrough node."""
        pass

    @abstractmethod
    def visit_code(self, node: Code) -> Any:
        """Visit a Code node."""
        pass

    @abstractmethod
    def visit_link(self, node: Link) -> Any:
        """Visit a Link node."""
        pass

    @abstractmethod
    def visit_image(self, node: Image) -> Any:
        """Visit an Image node."""
        pass

    def generic_visit(self, node: Node) -> Any:
        """Fallback visitor for unhandled node types.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        return None


class ValidationVisitor(NodeVisitor):
    """Visitor that validates the lowered AST grammar.

    Checks that:
    - headings, paragraphs, table cells and inline containers hold only inline nodes
    - documents, block quotes and list items hold only block nodes
    - lists hold only list items, tables only rows, rows only cells
    - images appear only as the sole content of a paragraph

    Parameters
    ----------
    strict : bool, default = True
        Whether to raise ValueError on the first failure; otherwise failures
        are collected in ``errors``

    Examples
    --------
        >>> validator = ValidationVisitor(strict=False)
        >>> doc.accept(validator)
        >>> validator.errors
        []

    """

    INLINE_NODES = frozenset({Text, Emphasis, Strong, Strikethrough, Code, Link, Image})

    BLOCK_NODES = frozenset({Heading, Paragraph, CodeBlock, BlockQuote, List, Table, ThematicBreak})

    def __init__(self, strict: bool = True):
        """Initialize the validator."""
        self.strict = strict
        self.errors: list[str] = []

    def _add_error(self, message: str) -> None:
        """Record a validation error, raising in strict mode."""
        self.errors.append(message)
        if self.strict:
            raise ValueError(message)

    def _validate_children_are_inline(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if type(child) not in self.INLINE_NODES:
                self._add_error(f"{context} can only contain inline nodes, but child {i} is {type(child).__name__}")
            elif isinstance(child, Image) and context != "Paragraph":
                self._add_error(f"{context} cannot contain an Image (child {i})")

    def _validate_children_are_blocks(self, children: list[Node], context: str) -> None:
        for i, child in enumerate(children):
            if type(child) not in self.BLOCK_NODES:
                self._add_error(f"{context} can only contain block nodes, but child {i} is {type(child).__name__}")

    def _visit_all(self, children: list[Node]) -> None:
        for child in children:
            child.accept(self)

    def visit_document(self, node: Document) -> None:
        """Validate a Document node."""
        self._validate_children_are_blocks(node.children, "Document")
        self._visit_all(node.children)

    def visit_heading(self, node: Heading) -> None:
        """Validate a Heading node."""
        if not 1 <= node.level <= 6:
            self._add_error(f"Invalid heading level: {node.level}")
        self._validate_children_are_inline(node.content, "Heading")
        self._visit_all(node.content)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Validate a Paragraph node."""
        self._validate_children_are_inline(node.content, "Paragraph")
        if len(node.content) > 1 and any(isinstance(child, Image) for child in node.content):
            self._add_error("Image must be the sole content of its Paragraph")
        self._visit_all(node.content)

    def visit_code_block(self, node: CodeBlock) -> None:
        pass

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Validate a BlockQuote node."""
        self._validate_children_are_blocks(node.children, "BlockQuote")
        self._visit_all(node.children)

    def visit_list(self, node: List) -> None:
        """Validate a List node."""
        if node.ordered and node.start < 0:
            self._add_error(f"Ordered list start must be >= 0, got {node.start}")
        for i, item in enumerate(node.items):
            if not isinstance(item, ListItem):
                self._add_error(f"List can only contain ListItem nodes, but item {i} is {type(item).__name__}")
        self._visit_all(list(node.items))

    def visit_list_item(self, node: ListItem) -> None:
        """Validate a ListItem node."""
        if node.task_status not in (None, "checked", "unchecked"):
            self._add_error(f"Invalid task status: {node.task_status!r}")
        self._validate_children_are_blocks(node.children, "ListItem")
        self._visit_all(node.children)

    def visit_table(self, node: Table) -> None:
        """Validate a Table node."""
        for i, row in enumerate(node.rows):
            if not isinstance(row, TableRow):
                self._add_error(f"Table can only contain TableRow nodes, but row {i} is {type(row).__name__}")
        self._visit_all(list(node.rows))

    def visit_table_row(self, node: TableRow) -> None:
        """Validate a TableRow node."""
        for i, cell in enumerate(node.cells):
            if not isinstance(cell, TableCell):
                self._add_error(f"TableRow can only contain TableCell nodes, but cell {i} is {type(cell).__name__}")
        self._visit_all(list(node.cells))

    def visit_table_cell(self, node: TableCell) -> None:
        """Validate a TableCell node."""
        if node.alignment not in (None, "left", "center", "right"):
            self._add_error(f"Invalid cell alignment: {node.alignment!r}")
        self._validate_children_are_inline(node.content, "TableCell")
        self._visit_all(node.content)

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        pass

    def visit_text(self, node: Text) -> None:
        pass

    def visit_emphasis(self, node: Emphasis) -> None:
        """Validate an Emphasis node."""
        self._validate_children_are_inline(node.content, "Emphasis")
        self._visit_all(node.content)

    def visit_strong(self, node: Strong) -> None:
        """Validate a Strong node."""
        self._validate_children_are_inline(node.content, "Strong")
        self._visit_all(node.content)

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Validate a Strikethrough node."""
        self._validate_children_are_inline(node.content, "Strikethrough")
        self._visit_all(node.content)

    def visit_code(self, node: Code) -> None:
        pass

    def visit_link(self, node: Link) -> None:
        """Validate a Link node."""
        self._validate_children_are_inline(node.content, "Link")
        self._visit_all(node.content)

    def visit_image(self, node: Image) -> None:
        pass
