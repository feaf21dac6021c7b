#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/tree/debug.py
"""Debug dumps of the generic tree and the lowered AST.

Both formatters produce an indented, bracketed outline, one node per line::

    root [
      heading depth: 1 [
        text value: "Title"
      ]
    ]

Dumps are emitted by :mod:`mdtree.api` when debugging is enabled, either
through ``MDTREE_DEBUG=true`` or by enabling DEBUG on the ``mdtree`` loggers.

"""

from __future__ import annotations

import json
import logging
import os
import time
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import fields
from typing import Any, Optional

from mdtree.ast.nodes import Node, Text, get_node_children
from mdtree.constants import DEBUG_ENV_VAR
from mdtree.tree.store import NodeId, TextRecord, TreeStore


def debug_env_enabled() -> bool:
    """Return True when ``MDTREE_DEBUG`` is set to ``true`` (any case)."""
    return os.environ.get(DEBUG_ENV_VAR, "").strip().lower() == "true"


def is_debug_enabled(logger: Optional[logging.Logger] = None) -> bool:
    """Return True when debug dumps should be produced.

    Parameters
    ----------
    logger : logging.Logger, optional
        Logger whose DEBUG level is also consulted

    """
    if debug_env_enabled():
        return True
    return logger is not None and logger.isEnabledFor(logging.DEBUG)


def _format_value(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=repr)


def format_tree(store: TreeStore, node: Optional[NodeId], indent: int = 0) -> str:
    """Format a generic tree node and its descendants as an outline.

    Parameters
    ----------
    store : TreeStore
        Store holding the node
    node : int or None
        Handle of the node to format; None formats as ``(empty)``
    indent : int, default = 0
        Number of leading spaces for this node

    Returns
    -------
    str
        Multi-line outline without a trailing newline

    Examples
    --------
        >>> store = TreeStore()
        >>> print(format_tree(store, store.create_text("hi")))
        text value: "hi"

    """
    prefix = " " * indent
    if node is None:
        return f"{prefix}(empty)"

    record = store.get(node)
    if isinstance(record, TextRecord):
        return f"{prefix}text value: {_format_value(record.value)}"

    result = f"{prefix}{record.role}"
    props = ", ".join(f"{key}: {_format_value(value)}" for key, value in record.properties.items())
    if props:
        result += f" {props}"

    if record.children:
        lines = [result + " ["]
        lines.extend(format_tree(store, child, indent + 2) for child in record.children)
        lines.append(f"{prefix}]")
        result = "\n".join(lines)

    return result


def format_ast(node: Node, indent: int = 0) -> str:
    """Format a lowered AST node and its descendants as an outline.

    Scalar fields other than None are printed after the node type; text
    nodes print their content only.

    Parameters
    ----------
    node : Node
        AST node to format
    indent : int, default = 0
        Number of leading spaces for this node

    Returns
    -------
    str
        Multi-line outline without a trailing newline

    """
    prefix = " " * indent
    if isinstance(node, Text):
        return f"{prefix}text {_format_value(node.content)}"

    result = f"{prefix}{type(node).__name__}"
    props = []
    for f in fields(node):
        value = getattr(node, f.name)
        if value is None or isinstance(value, (list, dict)):
            continue
        props.append(f"{f.name}: {_format_value(value)}")
    if props:
        result += " " + ", ".join(props)

    children = get_node_children(node)
    if children:
        lines = [result + " ["]
        lines.extend(format_ast(child, indent + 2) for child in children)
        lines.append(f"{prefix}]")
        result = "\n".join(lines)

    return result


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Time a block and log the elapsed time at DEBUG level.

    Nothing is measured when the logger is not enabled for DEBUG.

    Examples
    --------
        >>> logger = logging.getLogger(__name__)
        >>> with debug_timer(logger, "Rendering"):
        ...     pass

    """
    if logger.isEnabledFor(logging.DEBUG):
        start_time = time.perf_counter()
        yield
        elapsed = time.perf_counter() - start_time
        logger.debug(f"{operation} completed in {elapsed:.4f}s")
    else:
        yield
