#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/tree/builder.py
"""Declarative element descriptions and a driver that mounts them.

An :class:`Element` describes a subtree without touching any store. The
:func:`mount` function walks a description and replays it as the ordered
sequence of store operations an external driver would issue: children are
created and attached before their parent is attached to the container.

Children may be strings (text records), further descriptions, or nested
sequences of either, which are flattened in place. ``None`` and booleans
are skipped, so conditional content can be written inline.

Examples
--------
    >>> doc = h("root", None,
    ...     h("heading", {"depth": 1}, "Title"),
    ...     "Some ", h("strong", None, "bold"), " text",
    ... )
    >>> container = mount(doc)

"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from mdtree.tree.store import Container, NodeId, TreeStore

Child = Union["Element", str, None, bool, Iterable["Child"]]


@dataclass
class Element:
    """Description of an element subtree.

    Parameters
    ----------
    role : str
        Element role
    properties : dict, default = empty dict
        Property map handed to :meth:`TreeStore.create_element`
    children : list, default = empty list
        Child descriptions and strings in display order

    """

    role: str
    properties: dict[str, Any] = field(default_factory=dict)
    children: list[Union["Element", str]] = field(default_factory=list)


def _flatten(children: Iterable[Child]) -> list[Union[Element, str]]:
    flat: list[Union[Element, str]] = []
    for child in children:
        if child is None or isinstance(child, bool):
            continue
        if isinstance(child, (Element, str)):
            flat.append(child)
        else:
            flat.extend(_flatten(child))
    return flat


def h(role: str, properties: Optional[Mapping[str, Any]] = None, *children: Child) -> Element:
    """Create an element description.

    Parameters
    ----------
    role : str
        Element role
    properties : Mapping or None, default = None
        Property map
    *children
        Strings, descriptions or nested sequences of them

    Returns
    -------
    Element
        The description

    """
    return Element(role=role, properties=dict(properties or {}), children=_flatten(children))


def heading(depth: int, *children: Child) -> Element:
    return h("heading", {"depth": depth}, *children)


def paragraph(*children: Child) -> Element:
    return h("paragraph", None, *children)


def strong(*children: Child) -> Element:
    return h("strong", None, *children)


def emphasis(*children: Child) -> Element:
    return h("emphasis", None, *children)


def strikethrough(*children: Child) -> Element:
    return h("strikethrough", None, *children)


def inline_code(value: str) -> Element:
    return h("inlineCode", {"value": value})


def code_block(value: str, language: Optional[str] = None) -> Element:
    properties: dict[str, Any] = {"value": value}
    if language is not None:
        properties["language"] = language
    return h("code", properties)


def blockquote(*children: Child) -> Element:
    return h("blockquote", None, *children)


def link(url: str, *children: Child, title: Optional[str] = None) -> Element:
    properties: dict[str, Any] = {"url": url}
    if title is not None:
        properties["title"] = title
    return h("link", properties, *children)


def image(url: str, alt: str = "", title: Optional[str] = None) -> Element:
    properties: dict[str, Any] = {"url": url, "alt": alt}
    if title is not None:
        properties["title"] = title
    return h("image", properties)


def list_(*items: Child, ordered: bool = False, start: Optional[int] = None) -> Element:
    properties: dict[str, Any] = {"ordered": ordered}
    if start is not None:
        properties["start"] = start
    return h("list", properties, *items)


def list_item(*children: Child, checked: Optional[bool] = None) -> Element:
    properties = {"checked": checked} if checked is not None else None
    return h("listItem", properties, *children)


def table(*rows: Child) -> Element:
    return h("table", None, *rows)


def table_row(*cells: Child) -> Element:
    return h("tableRow", None, *cells)


def table_cell(*children: Child, align: Optional[str] = None, header: bool = False) -> Element:
    properties = {"align": align} if align is not None else None
    return h("tableHeader" if header else "tableCell", properties, *children)


def thematic_break() -> Element:
    return h("thematicBreak")


def build(store: TreeStore, description: Union[Element, str]) -> NodeId:
    """Create the records for ``description`` and return the subtree root handle.

    Children are attached to their parent before the parent itself is
    attached anywhere.
    """
    if isinstance(description, str):
        return store.create_text(description)

    node = store.create_element(description.role, description.properties)
    for child in description.children:
        store.append_child(node, build(store, child))
    return node


def mount(description: Child, container: Container | None = None) -> Container:
    """Mount one or more descriptions at the top level of a container.

    Parameters
    ----------
    description : Element, str or sequence
        What to mount; each top-level item is attached in order
    container : Container or None, default = None
        Target container; a fresh one is created when omitted

    Returns
    -------
    Container
        The container holding the mounted tree

    """
    if container is None:
        container = Container()
    for item in _flatten([description]):
        container.append_to_root(build(container.store, item))
    return container
