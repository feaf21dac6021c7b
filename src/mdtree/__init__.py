"""mdtree - Markdown rendering from a mutable generic element tree.

mdtree lets a declarative driver assemble a Markdown document by issuing
create/append/insert/remove/update calls against a generic element tree,
and turns that tree into canonical Markdown text.

Rendering happens in two steps:

1. The generic tree is lowered to a strict block/inline Markdown AST
   (inline runs grouped into paragraphs, nested fragments flattened,
   property values validated).
2. The AST is serialized with configurable style rules (bullet marker,
   list indentation, rule style, fences, emphasis and strong markers).

Requirements
------------
- Python 3.10+

Examples
--------
Building a tree through the store operations:

    >>> from mdtree import Container, render_container
    >>> container = Container()
    >>> store = container.store
    >>> heading = store.create_element("heading", {"depth": 1})
    >>> store.append_child(heading, store.create_text("Title"))
    >>> container.append_to_root(heading)
    >>> render_container(container)
    '# Title\\n'

Using declarative descriptions:

    >>> from mdtree import h, render_element
    >>> render_element(h("list", None, h("listItem", None, "one"), h("listItem", None, "two")))
    '- one\\n- two\\n'

See Also
--------
mdtree.tree : generic tree store and declarative driver
mdtree.ast : lowered AST node definitions and the lowering pass

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "mdtree requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from mdtree.api import from_ast, render, render_container, render_element, to_ast
from mdtree.exceptions import (
    ConfigError,
    InvalidOptionsError,
    InvariantError,
    MdTreeError,
    PropertyTypeError,
    TreeError,
    UnknownRoleError,
    UnsupportedRoleError,
    ValidationError,
)
from mdtree.options import MarkdownRendererOptions, load_renderer_options
from mdtree.renderers import MarkdownRenderer
from mdtree.tree import Container, Element, TreeStore, h, mount

__all__ = [
    "__version__",
    "render",
    "render_container",
    "render_element",
    "to_ast",
    "from_ast",
    # Tree
    "Container",
    "Element",
    "TreeStore",
    "h",
    "mount",
    # Rendering
    "MarkdownRenderer",
    "MarkdownRendererOptions",
    "load_renderer_options",
    # Exceptions
    "MdTreeError",
    "ValidationError",
    "PropertyTypeError",
    "InvalidOptionsError",
    "TreeError",
    "UnsupportedRoleError",
    "UnknownRoleError",
    "InvariantError",
    "ConfigError",
]
