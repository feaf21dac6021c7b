#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Lowered Markdown AST: node classes, visitors, lowering and serialization."""

from mdtree.ast.lowering import TreeLowering, lower_tree
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
    get_node_children,
)
from mdtree.ast.serialization import ast_to_dict, ast_to_json, dict_to_ast, json_to_ast
from mdtree.ast.visitors import NodeVisitor, ValidationVisitor

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Document",
    "Emphasis",
    "Heading",
    "Image",
    "Link",
    "List",
    "ListItem",
    "Node",
    "NodeVisitor",
    "Paragraph",
    "Strikethrough",
    "Strong",
    "Table",
    "TableCell",
    "TableRow",
    "Text",
    "ThematicBreak",
    "TreeLowering",
    "ValidationVisitor",
    "ast_to_dict",
    "ast_to_json",
    "dict_to_ast",
    "get_node_children",
    "json_to_ast",
    "lower_tree",
]
