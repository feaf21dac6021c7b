#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/mdtree/renderers/__init__.py
"""AST renderers for converting lowered documents to text.

Examples
--------
Convert AST to Markdown:

    >>> from mdtree.ast import Document, Heading, Text
    >>> from mdtree.renderers import MarkdownRenderer
    >>> from mdtree.options import MarkdownRendererOptions
    >>> doc = Document(children=[
    ...     Heading(level=1, content=[Text(content="Title")])
    ... ])
    >>> renderer = MarkdownRenderer(MarkdownRendererOptions())
    >>> markdown = renderer.render_to_string(doc)

"""

from mdtree.renderers.base import BaseRenderer, InlineContentMixin
from mdtree.renderers.markdown import MarkdownRenderer

__all__ = [
    "BaseRenderer",
    "InlineContentMixin",
    "MarkdownRenderer",
]
