#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/ast/serialization.py
"""JSON serialization for lowered AST nodes.

The dictionary form is used for debug dumps and for comparing lowering
results in tests. It preserves every node type, its attributes and its
metadata, and converts back to an equal AST.

Examples
--------
    >>> from mdtree.ast.nodes import Document, Heading, Text
    >>> doc = Document(children=[Heading(level=1, content=[Text(content="Title")])])
    >>> json_str = ast_to_json(doc, indent=2)

"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

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

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def _with_metadata(result: dict[str, Any], node: Node) -> dict[str, Any]:
    if node.metadata:
        result["metadata"] = dict(node.metadata)
    return result


def _serialize_children_node(node: Any, node_type: str) -> dict[str, Any]:
    """Serialize nodes whose block children live in ``children``."""
    return _with_metadata(
        {"node_type": node_type, "children": [ast_to_dict(child) for child in node.children]},
        node,
    )


def _serialize_inline_content_node(node: Any, node_type: str) -> dict[str, Any]:
    """Serialize nodes whose inline children live in ``content``."""
    return _with_metadata(
        {"node_type": node_type, "content": [ast_to_dict(child) for child in node.content]},
        node,
    )


def _serialize_text_content_node(node: Any, node_type: str) -> dict[str, Any]:
    return _with_metadata({"node_type": node_type, "content": node.content}, node)


def _serialize_heading(node: Heading) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "Heading",
        "level": node.level,
        "content": [ast_to_dict(child) for child in node.content],
    }
    return _with_metadata(result, node)


def _serialize_code_block(node: CodeBlock) -> dict[str, Any]:
    result: dict[str, Any] = {"node_type": "CodeBlock", "content": node.content}
    # An empty language is meaningful and differs from an absent one
    if node.language is not None:
        result["language"] = node.language
    return _with_metadata(result, node)


def _serialize_list(node: List) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "List",
        "ordered": node.ordered,
        "start": node.start,
        "items": [ast_to_dict(item) for item in node.items],
    }
    return _with_metadata(result, node)


def _serialize_list_item(node: ListItem) -> dict[str, Any]:
    result = _serialize_children_node(node, "ListItem")
    if node.task_status:
        result["task_status"] = node.task_status
    return result


def _serialize_table(node: Table) -> dict[str, Any]:
    return _with_metadata({"node_type": "Table", "rows": [ast_to_dict(row) for row in node.rows]}, node)


def _serialize_table_row(node: TableRow) -> dict[str, Any]:
    return _with_metadata({"node_type": "TableRow", "cells": [ast_to_dict(cell) for cell in node.cells]}, node)


def _serialize_table_cell(node: TableCell) -> dict[str, Any]:
    result = _serialize_inline_content_node(node, "TableCell")
    if node.alignment:
        result["alignment"] = node.alignment
    if node.is_header:
        result["is_header"] = True
    return result


def _serialize_link(node: Link) -> dict[str, Any]:
    result: dict[str, Any] = {
        "node_type": "Link",
        "url": node.url,
        "content": [ast_to_dict(child) for child in node.content],
    }
    if node.title is not None:
        result["title"] = node.title
    return _with_metadata(result, node)


def _serialize_image(node: Image) -> dict[str, Any]:
    result: dict[str, Any] = {"node_type": "Image", "url": node.url, "alt_text": node.alt_text}
    if node.title is not None:
        result["title"] = node.title
    return _with_metadata(result, node)


# Dispatch table mapping node types to their serialization functions
_SERIALIZATION_DISPATCH: dict[type, Callable[[Any], dict[str, Any]]] = {
    Document: lambda n: _serialize_children_node(n, "Document"),
    BlockQuote: lambda n: _serialize_children_node(n, "BlockQuote"),
    Heading: _serialize_heading,
    Paragraph: lambda n: _serialize_inline_content_node(n, "Paragraph"),
    CodeBlock: _serialize_code_block,
    List: _serialize_list,
    ListItem: _serialize_list_item,
    Table: _serialize_table,
    TableRow: _serialize_table_row,
    TableCell: _serialize_table_cell,
    ThematicBreak: lambda n: _with_metadata({"node_type": "ThematicBreak"}, n),
    Text: lambda n: _serialize_text_content_node(n, "Text"),
    Emphasis: lambda n: _serialize_inline_content_node(n, "Emphasis"),
    Strong: lambda n: _serialize_inline_content_node(n, "Strong"),
    Strikethrough: lambda n: _serialize_inline_content_node(n, "Strikethrough"),
    Code: lambda n: _serialize_text_content_node(n, "Code"),
    Link: _serialize_link,
    Image: _serialize_image,
}


def ast_to_dict(node: Node) -> dict[str, Any]:
    """Convert an AST node to a dictionary representation.

    Parameters
    ----------
    node : Node
        The AST node to convert

    Returns
    -------
    dict
        Dictionary representation of the node. Empty metadata is omitted.

    Raises
    ------
    ValueError
        If the node type is not part of the lowered AST

    Examples
    --------
    >>> ast_to_dict(Text(content="Hello"))
    {'node_type': 'Text', 'content': 'Hello'}

    """
    serializer = _SERIALIZATION_DISPATCH.get(type(node))
    if serializer:
        return serializer(node)

    raise ValueError(f"Unknown node type for serialization: {type(node).__name__}")


def _children(data: dict[str, Any], key: str) -> list[Any]:
    return [dict_to_ast(child) for child in data.get(key, [])]


def _meta(data: dict[str, Any]) -> dict[str, Any]:
    return dict(data.get("metadata", {}))


_DESERIALIZATION_DISPATCH: dict[str, Callable[[dict[str, Any]], Node]] = {
    "Document": lambda d: Document(children=_children(d, "children"), metadata=_meta(d)),
    "BlockQuote": lambda d: BlockQuote(children=_children(d, "children"), metadata=_meta(d)),
    "Heading": lambda d: Heading(level=d["level"], content=_children(d, "content"), metadata=_meta(d)),
    "Paragraph": lambda d: Paragraph(content=_children(d, "content"), metadata=_meta(d)),
    "CodeBlock": lambda d: CodeBlock(content=d["content"], language=d.get("language"), metadata=_meta(d)),
    "List": lambda d: List(
        ordered=d["ordered"], items=_children(d, "items"), start=d.get("start", 1), metadata=_meta(d)
    ),
    "ListItem": lambda d: ListItem(
        children=_children(d, "children"), task_status=d.get("task_status"), metadata=_meta(d)
    ),
    "Table": lambda d: Table(rows=_children(d, "rows"), metadata=_meta(d)),
    "TableRow": lambda d: TableRow(cells=_children(d, "cells"), metadata=_meta(d)),
    "TableCell": lambda d: TableCell(
        content=_children(d, "content"),
        alignment=d.get("alignment"),
        is_header=d.get("is_header", False),
        metadata=_meta(d),
    ),
    "ThematicBreak": lambda d: ThematicBreak(metadata=_meta(d)),
    "Text": lambda d: Text(content=d["content"], metadata=_meta(d)),
    "Emphasis": lambda d: Emphasis(content=_children(d, "content"), metadata=_meta(d)),
    "Strong": lambda d: Strong(content=_children(d, "content"), metadata=_meta(d)),
    "Strikethrough": lambda d: Strikethrough(content=_children(d, "content"), metadata=_meta(d)),
    "Code": lambda d: Code(content=d["content"], metadata=_meta(d)),
    "Link": lambda d: Link(url=d["url"], content=_children(d, "content"), title=d.get("title"), metadata=_meta(d)),
    "Image": lambda d: Image(
        url=d["url"], alt_text=d.get("alt_text", ""), title=d.get("title"), metadata=_meta(d)
    ),
}


def dict_to_ast(data: dict[str, Any]) -> Node:
    """Convert a dictionary representation back to an AST node.

    Raises
    ------
    ValueError
        If the dictionary has no ``node_type`` or an unknown one

    """
    node_type = data.get("node_type")
    if not node_type:
        raise ValueError("Dictionary must contain 'node_type' field")

    deserializer = _DESERIALIZATION_DISPATCH.get(node_type)
    if not deserializer:
        raise ValueError(f"Unknown node type: {node_type}")

    return deserializer(data)


def ast_to_json(node: Node, indent: int | None = None) -> str:
    """Serialize an AST node to a JSON string with a schema version.

    Parameters
    ----------
    node : Node
        The AST node to serialize
    indent : int or None, default = None
        Number of spaces for indentation (None for compact format)

    Returns
    -------
    str
        JSON string, ``{"schema_version": 1, "node_type": ..., ...}``

    """
    versioned_dict = {"schema_version": SCHEMA_VERSION, **ast_to_dict(node)}
    return json.dumps(versioned_dict, indent=indent, ensure_ascii=False)


def json_to_ast(json_str: str) -> Node:
    """Deserialize a JSON string produced by :func:`ast_to_json`.

    Raises
    ------
    ValueError
        If the schema version is unsupported or the content is not a valid AST
    json.JSONDecodeError
        If the JSON string is malformed

    """
    data = json.loads(json_str)
    schema_version = data.pop("schema_version", SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ValueError(f"Unsupported schema version: {schema_version}")
    logger.debug(f"Deserializing AST with schema version {schema_version}")
    return dict_to_ast(data)


__all__ = [
    "ast_to_dict",
    "dict_to_ast",
    "ast_to_json",
    "json_to_ast",
]
