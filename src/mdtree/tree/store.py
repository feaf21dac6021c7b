#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/tree/store.py
"""Mutable generic element tree.

The tree is built incrementally by an external declarative driver through a
small set of mutation operations (create, append, insert, remove, update).
Nodes live in an arena owned by :class:`TreeStore` and are addressed by
integer handles, so parent back-references never form Python reference
cycles.

Two record kinds exist:

- :class:`TextRecord` holds a string value and nothing else
- :class:`ElementRecord` holds a role, a property mapping and an ordered
  list of child handles

Every node except the logical root has at most one parent. The parent's
child list and the child's back-reference are kept consistent by every
mutation, and re-parenting detaches the node from its previous parent first.

:class:`Container` is the top-level holder the driver attaches root nodes to.
When more than one node is attached at the top level, a synthetic ``root``
element collects them.

"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mdtree.constants import ELEMENT_ROLES, ROLE_ROOT
from mdtree.exceptions import PropertyTypeError, UnsupportedRoleError
from mdtree.utils.validate import invariant

logger = logging.getLogger(__name__)

NodeId = int


@dataclass
class TextRecord:
    """A text leaf.

    Parameters
    ----------
    value : str
        Text content, replaced wholesale on update
    parent : int or None, default = None
        Handle of the owning element

    """

    value: str
    parent: Optional[NodeId] = None


@dataclass
class ElementRecord:
    """A role-tagged element with properties and ordered children.

    Parameters
    ----------
    role : str
        One of the roles in :data:`mdtree.constants.ELEMENT_ROLES`
    properties : dict
        Free-form property map, validated only when lowered
    children : list of int
        Child handles in display order
    parent : int or None, default = None
        Handle of the owning element

    """

    role: str
    properties: dict[str, Any] = field(default_factory=dict)
    children: list[NodeId] = field(default_factory=list)
    parent: Optional[NodeId] = None


Record = Union[TextRecord, ElementRecord]


class TreeStore:
    """Arena of generic tree records.

    Examples
    --------
        >>> store = TreeStore()
        >>> heading = store.create_element("heading", {"depth": 2})
        >>> store.append_child(heading, store.create_text("Title"))
        >>> store.children_of(heading)
        [1]

    """

    def __init__(self) -> None:
        self._records: dict[NodeId, Record] = {}
        self._next_id: NodeId = 0

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, node: object) -> bool:
        return node in self._records

    def _allocate(self, record: Record) -> NodeId:
        node = self._next_id
        self._next_id += 1
        self._records[node] = record
        return node

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def create_text(self, value: str) -> NodeId:
        """Create an unattached text record.

        Raises
        ------
        PropertyTypeError
            If ``value`` is not a string

        """
        if not isinstance(value, str):
            raise PropertyTypeError("string", value, "value")
        return self._allocate(TextRecord(value=value))

    def create_element(self, role: str, properties: Mapping[str, Any] | None = None) -> NodeId:
        """Create an unattached element with no children.

        Parameters
        ----------
        role : str
            Element role
        properties : Mapping or None, default = None
            Property map; a shallow copy is stored

        Returns
        -------
        int
            Handle of the new element

        Raises
        ------
        UnsupportedRoleError
            If ``role`` is not in the role vocabulary
        PropertyTypeError
            If ``properties`` is not a mapping

        """
        if role not in ELEMENT_ROLES:
            raise UnsupportedRoleError(role)
        if properties is None:
            properties = {}
        elif not isinstance(properties, Mapping):
            raise PropertyTypeError("mapping", properties, "properties")
        return self._allocate(ElementRecord(role=role, properties=dict(properties)))

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def get(self, node: NodeId) -> Record:
        """Return the record for ``node``."""
        invariant(node in self._records, f"unknown node handle {node!r}")
        return self._records[node]

    def is_text(self, node: NodeId) -> bool:
        return isinstance(self.get(node), TextRecord)

    def role_of(self, node: NodeId) -> Optional[str]:
        """Return the element role, or None for a text record."""
        record = self.get(node)
        return record.role if isinstance(record, ElementRecord) else None

    def parent_of(self, node: NodeId) -> Optional[NodeId]:
        return self.get(node).parent

    def children_of(self, node: NodeId) -> list[NodeId]:
        """Return a copy of the child list (empty for text records)."""
        record = self.get(node)
        if isinstance(record, ElementRecord):
            return list(record.children)
        return []

    def iter_ancestors(self, node: NodeId) -> Iterator[NodeId]:
        """Yield the ancestors of ``node`` from its parent upward."""
        parent = self.get(node).parent
        while parent is not None:
            yield parent
            parent = self._records[parent].parent

    def _element(self, node: NodeId) -> ElementRecord:
        record = self.get(node)
        invariant(isinstance(record, ElementRecord), f"node {node} is a text record and cannot have children")
        assert isinstance(record, ElementRecord)
        return record

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _check_attachable(self, parent: NodeId, child: NodeId) -> None:
        self.get(child)
        invariant(parent != child, f"node {child} cannot be its own child")
        invariant(
            child not in self.iter_ancestors(parent),
            f"node {child} is an ancestor of {parent} and cannot become its child",
        )

    def _detach(self, child: NodeId) -> None:
        record = self._records[child]
        if record.parent is None:
            return
        siblings = self._element(record.parent).children
        if child in siblings:
            siblings.remove(child)
        record.parent = None

    def append_child(self, parent: NodeId, child: NodeId) -> None:
        """Append ``child`` as the last child of ``parent``.

        A child attached elsewhere is detached from its previous parent first.

        Raises
        ------
        InvariantError
            If ``parent`` is a text record or ``child`` is an ancestor of it

        """
        parent_record = self._element(parent)
        self._check_attachable(parent, child)
        self._detach(child)
        parent_record.children.append(child)
        self._records[child].parent = parent

    def insert_before(self, parent: NodeId, child: NodeId, reference: NodeId) -> None:
        """Insert ``child`` into ``parent`` immediately before ``reference``.

        The call is ignored when ``reference`` is not currently a child of
        ``parent``.
        """
        parent_record = self._element(parent)
        if reference not in parent_record.children:
            logger.debug(f"insert_before ignored: node {reference} is not a child of {parent}")
            return
        if child == reference:
            return
        self._check_attachable(parent, child)
        self._detach(child)
        index = parent_record.children.index(reference)
        parent_record.children.insert(index, child)
        self._records[child].parent = parent

    def remove_child(self, parent: NodeId, child: NodeId) -> None:
        """Remove ``child`` from ``parent`` if present.

        The removed subtree keeps its internal links and may be reattached.
        """
        parent_record = self._element(parent)
        if child not in parent_record.children:
            logger.debug(f"remove_child ignored: node {child} is not a child of {parent}")
            return
        parent_record.children.remove(child)
        self._records[child].parent = None

    def update_text(self, node: NodeId, value: str) -> None:
        """Replace the value of a text record."""
        record = self.get(node)
        invariant(isinstance(record, TextRecord), f"node {node} is not a text record")
        if not isinstance(value, str):
            raise PropertyTypeError("string", value, "value")
        assert isinstance(record, TextRecord)
        record.value = value

    def update_properties(self, node: NodeId, properties: Mapping[str, Any]) -> None:
        """Replace the property map of an element wholesale."""
        record = self._element(node)
        if not isinstance(properties, Mapping):
            raise PropertyTypeError("mapping", properties, "properties")
        record.properties = dict(properties)


class Container:
    """Top-level holder for the driver's root nodes.

    Parameters
    ----------
    store : TreeStore, optional
        Arena to use; a fresh one is created when omitted

    Attributes
    ----------
    store : TreeStore
        The arena holding every node of this container
    root : int or None
        Handle of the current root, None while nothing is attached
    nodes : dict[int, int]
        Identity index of every node attached at the top level, keyed by
        attachment order

    """

    def __init__(self, store: TreeStore | None = None) -> None:
        self.store = store if store is not None else TreeStore()
        self.root: Optional[NodeId] = None
        self.nodes: dict[int, NodeId] = {}

    def _root_is_fragment(self) -> bool:
        return self.root is not None and self.store.role_of(self.root) == ROLE_ROOT

    def append_to_root(self, node: NodeId) -> None:
        """Attach ``node`` at the top level.

        With no root yet, ``node`` becomes the root. With a ``root``-role root,
        ``node`` is appended to it. Otherwise a synthetic ``root`` element
        wraps the previous root and ``node``.
        """
        if self.root is None:
            self.store.get(node)
            self.root = node
        elif self._root_is_fragment():
            self.store.append_child(self.root, node)
        else:
            wrapper = self.store.create_element(ROLE_ROOT)
            self.store.append_child(wrapper, self.root)
            self.store.append_child(wrapper, node)
            self.root = wrapper
            logger.debug(f"Wrapped root nodes in synthetic root element {wrapper}")

        self.nodes[len(self.nodes)] = node

    def insert_before_in_root(self, node: NodeId, reference: NodeId) -> None:
        """Insert ``node`` before ``reference`` at the top level.

        Only meaningful when the root is a ``root``-role element containing
        ``reference``; the call is ignored otherwise.
        """
        if not self._root_is_fragment():
            logger.debug("insert_before_in_root ignored: container root is not a root element")
            return
        assert self.root is not None
        self.store.insert_before(self.root, node, reference)

    def remove_from_root(self, node: NodeId) -> None:
        """Remove a top-level node.

        Removing any top-level node resets the container to an empty root.
        """
        logger.debug(f"Removing node {node} from container resets its root")
        self.clear()

    def clear(self) -> None:
        """Replace the root with an empty ``root`` element and forget the identity index."""
        self.root = self.store.create_element(ROLE_ROOT)
        self.nodes.clear()
