#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/renderers/base.py
"""Base classes for AST renderers.

This module defines the abstract base class renderers inherit from, and the
mixin that captures rendered inline content as a string.

"""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from pathlib import Path
from typing import IO, Union, cast

from mdtree.ast.nodes import Document, Node
from mdtree.exceptions import InvalidOptionsError
from mdtree.options.base import BaseRendererOptions


class BaseRenderer(ABC):
    """Abstract base class for all AST renderers.

    Parameters
    ----------
    options : BaseRendererOptions or None, default = None
        Format-specific rendering options

    """

    def __init__(self, options: BaseRendererOptions | None = None):
        """Initialize the renderer with optional configuration."""
        self.options = options

    @abstractmethod
    def render_to_string(self, doc: Document) -> str:
        """Render the AST to a string.

        Parameters
        ----------
        doc : Document
            AST Document node to render

        Returns
        -------
        str
            Rendered document

        """
        pass

    def render(self, doc: Document, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Render the AST and write it to ``output``.

        Parameters
        ----------
        doc : Document
            AST Document node to render
        output : str, Path, IO[bytes] or IO[str]
            File path or file-like object; binary streams receive UTF-8

        """
        self.write_text_output(self.render_to_string(doc), output)

    @staticmethod
    def _validate_options_type(options: object, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : object
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    @staticmethod
    def write_text_output(text: str, output: Union[str, Path, IO[bytes], IO[str]]) -> None:
        """Write text output to a file path or IO stream.

        Raises
        ------
        TypeError
            If output is neither a path nor a writable stream

        Examples
        --------
            >>> from io import StringIO
            >>> buffer = StringIO()
            >>> BaseRenderer.write_text_output("# Hello\\n", buffer)
            >>> buffer.getvalue()
            '# Hello\\n'

        """
        if isinstance(output, (str, Path)):
            Path(output).write_text(text, encoding="utf-8")
            return
        if not hasattr(output, "write"):
            raise TypeError(f"Unsupported output type: {type(output).__name__}")

        # Detect binary streams: io base classes first, then the mode attribute
        if isinstance(output, io.TextIOBase):
            is_binary_mode = False
        elif isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
            is_binary_mode = True
        else:
            mode = getattr(output, "mode", "")
            is_binary_mode = isinstance(mode, str) and "b" in mode

        if is_binary_mode:
            cast(IO[bytes], output).write(text.encode("utf-8"))
        else:
            cast(IO[str], output).write(text)


class InlineContentMixin:
    """Mixin providing inline content rendering for text-based renderers.

    The implementing class must have:
    - A `_output` attribute (list[str]) for accumulating output
    - Visitor methods that append to `_output`

    Subclasses may override `_adjust_inline_parts` to rewrite a rendered
    node based on its rendered siblings.

    """

    _output: list[str]

    def _render_inline_content(self, content: list[Node]) -> str:
        """Render a list of inline nodes to text.

        Each node is rendered into its own temporary buffer. Nodes that render
        to nothing are dropped before the remaining parts are adjusted and
        joined.

        Parameters
        ----------
        content : list of Node
            Inline nodes to render

        Returns
        -------
        str
            Rendered inline content as a string

        """
        saved_output = self._output
        parts: list[tuple[Node, str]] = []

        for node in content:
            self._output = []
            node.accept(self)
            rendered = "".join(self._output)
            if rendered:
                parts.append((node, rendered))

        self._output = saved_output
        return "".join(rendered for _, rendered in self._adjust_inline_parts(parts))

    def _adjust_inline_parts(self, parts: list[tuple[Node, str]]) -> list[tuple[Node, str]]:
        return parts
