#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Mutable generic element tree and its declarative driver."""

from mdtree.tree.builder import Element, h, mount
from mdtree.tree.store import Container, ElementRecord, NodeId, TextRecord, TreeStore

__all__ = [
    "Container",
    "Element",
    "ElementRecord",
    "NodeId",
    "TextRecord",
    "TreeStore",
    "h",
    "mount",
]
