#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/renderers/markdown.py
"""Markdown rendering from AST.

This module provides the MarkdownRenderer class which converts lowered AST
nodes to Markdown text. The output is deterministic: the same document and
options always produce the same text.

Block nodes are rendered to strings bottom-up and then joined by their
container. List items and block quotes prefix the lines of their rendered
children, so nested content picks up the indentation of every enclosing
marker without any indent bookkeeping during traversal.

"""

from __future__ import annotations

import logging

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
from mdtree.ast.visitors import NodeVisitor
from mdtree.constants import INDENTED_CODE_PREFIX, TAB_STOP_WIDTH, THEMATIC_BREAK_REPETITION
from mdtree.options.markdown import MarkdownRendererOptions
from mdtree.renderers.base import BaseRenderer, InlineContentMixin
from mdtree.utils.escape import (
    code_fence_for,
    collapse_whitespace,
    escape_block_start,
    escape_heading_content,
    escape_inline_code,
    escape_link_text,
    escape_markdown_text,
    escape_table_cell,
    format_link_destination,
    format_link_title,
)

logger = logging.getLogger(__name__)


class MarkdownRenderer(NodeVisitor, InlineContentMixin, BaseRenderer):
    """Render AST nodes to Markdown text.

    This class implements the visitor pattern to traverse an AST and
    generate Markdown output.

    Parameters
    ----------
    options : MarkdownRendererOptions or None, default = None
        Markdown formatting options

    Examples
    --------
    Basic usage:

        >>> from mdtree.ast import Document, Heading, Text
        >>> from mdtree.renderers.markdown import MarkdownRenderer
        >>> doc = Document(children=[
        ...     Heading(level=1, content=[Text(content="Title")])
        ... ])
        >>> MarkdownRenderer().render_to_string(doc)
        '# Title\\n'

    """

    def __init__(self, options: MarkdownRendererOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownRendererOptions, "markdown")
        options = options or MarkdownRendererOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownRendererOptions = options
        self._output: list[str] = []
        self._list_marker_stack: list[str] = []

    def render_to_string(self, document: Document) -> str:
        """Render a document AST to a Markdown string.

        Parameters
        ----------
        document : Document
            The document node to render

        Returns
        -------
        str
            Markdown text ending with exactly one newline

        """
        self._output = []
        self._list_marker_stack = []

        document.accept(self)

        result = "".join(self._output)
        self._output.clear()
        self._list_marker_stack.clear()

        return self._cleanup_output(result)

    @staticmethod
    def _cleanup_output(text: str) -> str:
        """Normalize line endings and terminate the document with one newline."""
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        return text.rstrip() + "\n"

    def _render_block(self, node: Node) -> str:
        """Render a single block node to a string without touching the current output."""
        saved_output = self._output
        self._output = []
        node.accept(self)
        result = "".join(self._output)
        self._output = saved_output
        return result

    def _is_indented_code(self, node: Node) -> bool:
        """Return True when a code block renders indented instead of fenced."""
        return isinstance(node, CodeBlock) and not (
            self.options.use_fences or node.language or not node.content.strip()
        )

    def _item_separator(self, previous: Node | None, child: Node) -> str:
        """Return the separator between two blocks inside a list item.

        A paragraph keeps a blank line before another paragraph, before a
        thematic break (which would otherwise underline it as a setext
        heading) and before indented code (which would otherwise continue it).

        """
        if isinstance(previous, Paragraph) and (
            isinstance(child, (Paragraph, ThematicBreak)) or self._is_indented_code(child)
        ):
            return "\n\n"
        return "\n"

    def _render_blocks(self, children: list[Node], in_list_item: bool = False) -> str:
        """Render a sequence of sibling blocks and join them.

        Siblings are separated by a blank line. Inside a list item they are
        separated by a single newline unless ``_item_separator`` asks for a
        blank one. Blocks that render to nothing are skipped. A list directly
        following a list of the same kind switches to the alternate marker,
        and indented code directly following a list is fenced so it does not
        join the last item.

        """
        parts: list[str] = []
        previous: Node | None = None
        previous_alternate = False

        for child in children:
            alternate = False
            if isinstance(child, List):
                if isinstance(previous, List) and previous.ordered == child.ordered:
                    alternate = not previous_alternate
                rendered = self._render_list(child, alternate)
            elif isinstance(previous, List) and self._is_indented_code(child):
                rendered = self._render_code_block(child, force_fence=True)
            else:
                rendered = self._render_block(child)

            if not rendered:
                continue

            if parts:
                parts.append(self._item_separator(previous, child) if in_list_item else "\n\n")
            parts.append(rendered)
            previous = child
            previous_alternate = alternate

        return "".join(parts)

    def _marker_text(self, marker: str) -> str:
        """Return the list marker followed by its spacing."""
        if self.options.list_indent == "tab-width":
            width = -(-(len(marker) + 1) // TAB_STOP_WIDTH) * TAB_STOP_WIDTH
            return marker.ljust(width)
        return marker + " "

    def _alternate_bullet(self) -> str:
        return "*" if self.options.bullet_marker == "-" else "-"

    def visit_document(self, node: Document) -> None:
        """Render a Document node."""
        self._output.append(self._render_blocks(node.children))

    def visit_heading(self, node: Heading) -> None:
        """Render a Heading node.

        Parameters
        ----------
        node : Heading
            Heading to render

        """
        content = self._render_inline_content(node.content).strip()
        prefix = "#" * node.level
        if content:
            self._output.append(f"{prefix} {escape_heading_content(content)}")
        else:
            self._output.append(prefix)

    def visit_paragraph(self, node: Paragraph) -> None:
        """Render a Paragraph node.

        Parameters
        ----------
        node : Paragraph
            Paragraph to render

        """
        content = self._render_inline_content(node.content).strip()
        if self.options.escape_special:
            content = escape_block_start(content)
        self._output.append(content)

    def _render_code_block(self, node: CodeBlock, force_fence: bool = False) -> str:
        content = node.content
        info = node.language or ""

        if not force_fence and self._is_indented_code(node):
            lines = content.rstrip("\n").split("\n")
            return "\n".join(INDENTED_CODE_PREFIX + line if line else "" for line in lines)

        fence_char = self.options.code_fence_char
        # A backtick in the info string cannot follow a backtick fence
        if fence_char == "`" and "`" in info:
            fence_char = "~"
        fence = code_fence_for(content, fence_char)

        parts = [f"{fence}{info}\n"]
        if content:
            parts.append(content)
            if not content.endswith("\n"):
                parts.append("\n")
        parts.append(fence)
        return "".join(parts)

    def visit_code_block(self, node: CodeBlock) -> None:
        """Render a CodeBlock node.

        Blocks are fenced when fences are enabled, when a language is set, or
        when the body is blank; otherwise every line is indented by four spaces.

        Parameters
        ----------
        node : CodeBlock
            Code block to render

        """
        self._output.append(self._render_code_block(node))

    def visit_block_quote(self, node: BlockQuote) -> None:
        """Render a BlockQuote node.

        Parameters
        ----------
        node : BlockQuote
            Block quote to render

        """
        quoted = self._render_blocks(node.children)
        if not quoted:
            self._output.append(">")
            return

        quoted_lines = ["> " + line if line else ">" for line in quoted.split("\n")]
        self._output.append("\n".join(quoted_lines))

    def _render_list(self, node: List, alternate: bool) -> str:
        """Render a List node, optionally with the alternate marker."""
        delimiter = ")" if alternate else "."
        bullet = self._alternate_bullet() if alternate else self.options.bullet_marker

        rendered_items = []
        for i, item in enumerate(node.items):
            marker = f"{node.start + i}{delimiter}" if node.ordered else bullet
            self._list_marker_stack.append(marker)
            rendered_items.append(self._render_block(item))
            self._list_marker_stack.pop()

        return "\n".join(rendered_items)

    def visit_list(self, node: List) -> None:
        """Render a List node.

        Parameters
        ----------
        node : List
            List to render

        """
        self._output.append(self._render_list(node, alternate=False))

    def visit_list_item(self, node: ListItem) -> None:
        """Render a ListItem node.

        The first line follows the marker; every later line is indented by the
        width of the marker and its spacing.

        Parameters
        ----------
        node : ListItem
            List item to render

        """
        marker = self._list_marker_stack[-1] if self._list_marker_stack else self.options.bullet_marker
        marker_text = self._marker_text(marker)
        head = marker_text
        if node.task_status is not None:
            checkbox = "[x]" if node.task_status == "checked" else "[ ]"
            head = f"{marker_text}{checkbox} "

        body = self._render_blocks(node.children, in_list_item=True)
        if not body:
            self._output.append(head.rstrip())
            return

        indent = " " * len(marker_text)
        lines = body.split("\n")
        rendered = [head + lines[0]]
        rendered.extend(indent + line if line else "" for line in lines[1:])
        self._output.append("\n".join(rendered))

    def _render_cell(self, cell: TableCell) -> str:
        content = self._render_inline_content(cell.content).strip()
        if self.options.table_pipe_escape:
            content = escape_table_cell(content)
        return content

    def _render_cells_to_strings(self, rows: list[TableRow]) -> list[list[str]]:
        """Render all cells of all rows to strings."""
        return [[self._render_cell(cell) for cell in row.cells] for row in rows]

    @staticmethod
    def _column_alignments(rows: list[TableRow], num_cols: int) -> list[str | None]:
        """Return the first explicit alignment found in each column."""
        alignments: list[str | None] = [None] * num_cols
        for row in rows:
            for col, cell in enumerate(row.cells):
                if alignments[col] is None and cell.alignment is not None:
                    alignments[col] = cell.alignment
        return alignments

    @staticmethod
    def _delimiter_cell(alignment: str | None, width: int) -> str:
        before = ":" if alignment in ("left", "center") else ""
        after = ":" if alignment in ("right", "center") else ""
        return before + "-" * max(1, width - len(before) - len(after)) + after

    @staticmethod
    def _pad_cell(text: str, alignment: str | None, width: int) -> str:
        if alignment == "right":
            return text.rjust(width)
        if alignment == "center":
            diff = width - len(text)
            before = diff - diff // 2
            return " " * before + text + " " * (diff - before)
        return text.ljust(width)

    def visit_table(self, node: Table) -> None:
        """Render a Table node as a padded pipe table.

        The first row is the header. Columns are padded to their widest cell
        and aligned according to the first explicit alignment in the column.

        Parameters
        ----------
        node : Table
            Table to render

        """
        if not node.rows:
            logger.debug("Skipping table without rows")
            return

        rendered_rows = self._render_cells_to_strings(node.rows)
        num_cols = max(len(row) for row in rendered_rows)
        if num_cols == 0:
            logger.debug("Skipping table without cells")
            return
        for row in rendered_rows:
            row.extend([""] * (num_cols - len(row)))

        alignments = self._column_alignments(node.rows, num_cols)
        widths = [max(len(row[col]) for row in rendered_rows) for col in range(num_cols)]
        delimiters = [self._delimiter_cell(alignments[col], widths[col]) for col in range(num_cols)]
        widths = [max(width, len(delimiter)) for width, delimiter in zip(widths, delimiters)]

        def format_row(cells: list[str]) -> str:
            return "| " + " | ".join(cells) + " |"

        lines = [format_row([self._pad_cell(rendered_rows[0][c], alignments[c], widths[c]) for c in range(num_cols)])]
        lines.append(format_row(delimiters))
        for row in rendered_rows[1:]:
            lines.append(format_row([self._pad_cell(row[c], alignments[c], widths[c]) for c in range(num_cols)]))

        self._output.append("\n".join(lines))

    def visit_table_row(self, node: TableRow) -> None:
        """Render a TableRow node without column padding."""
        cells = [self._render_cell(cell) for cell in node.cells]
        self._output.append("| " + " | ".join(cells) + " |")

    def visit_table_cell(self, node: TableCell) -> None:
        """Render a TableCell node."""
        self._output.append(self._render_cell(node))

    def visit_thematic_break(self, node: ThematicBreak) -> None:
        """Render a ThematicBreak node."""
        self._output.append(self.options.rule_style * THEMATIC_BREAK_REPETITION)

    def visit_text(self, node: Text) -> None:
        """Render a Text node.

        Whitespace runs collapse to one space; special characters are
        escaped when ``escape_special`` is enabled.

        """
        text = collapse_whitespace(node.content)
        if self.options.escape_special:
            text = escape_markdown_text(text)
        self._output.append(text)

    def _adjust_inline_parts(self, parts: list[tuple[Node, str]]) -> list[tuple[Node, str]]:
        """Fix rendered inline siblings whose meaning depends on their neighbours.

        Underscore emphasis that touches a letter or digit outside its markers
        cannot open or close, so it is re-rendered with asterisks. When
        escaping is enabled, a ``!`` ending a text node directly before a link
        is escaped so the link does not become an image.

        """
        parts = list(parts)
        for i, (node, rendered) in enumerate(parts):
            before = parts[i - 1][1] if i > 0 else ""
            following = parts[i + 1][0] if i + 1 < len(parts) else None
            after = parts[i + 1][1] if following is not None else ""
            if isinstance(node, (Emphasis, Strong)) and (
                (rendered.startswith("_") and before[-1:].isalnum())
                or (rendered.endswith("_") and after[:1].isalnum())
            ):
                width = 1 if isinstance(node, Emphasis) else 2
                parts[i] = (node, self._wrap_inline(node.content, "*" * width))
            elif (
                self.options.escape_special
                and isinstance(node, Text)
                and isinstance(following, Link)
                and rendered.endswith("!")
            ):
                parts[i] = (node, rendered[:-1] + "\\!")

        return parts

    def _wrap_inline(self, content: list[Node], marker: str) -> str:
        """Wrap rendered content in a delimiter pair.

        Whitespace at either end of the content is moved outside the markers.

        """
        inner = self._render_inline_content(content)
        core = inner.strip()
        if not core:
            return inner
        lead = inner[: len(inner) - len(inner.lstrip())]
        trail = inner[len(inner.rstrip()) :]
        return f"{lead}{marker}{core}{marker}{trail}"

    def visit_emphasis(self, node: Emphasis) -> None:
        """Render an Emphasis node."""
        self._output.append(self._wrap_inline(node.content, self.options.emphasis_marker))

    def visit_strong(self, node: Strong) -> None:
        """Render a Strong node."""
        self._output.append(self._wrap_inline(node.content, self.options.strong_marker * 2))

    def visit_strikethrough(self, node: Strikethrough) -> None:
        """Render a Strikethrough node."""
        self._output.append(self._wrap_inline(node.content, "~~"))

    def visit_code(self, node: Code) -> None:
        """Render an inline Code node.

        The backtick run is longer than any run inside the value. Line endings
        become spaces.

        """
        content = node.content.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")
        if not content:
            return

        code, delimiter = escape_inline_code(content, "`")
        # One leading and one trailing space are stripped by parsers
        if code == content and content.startswith(" ") and content.endswith(" ") and content.strip(" "):
            code = f" {code} "
        self._output.append(f"{delimiter}{code}{delimiter}")

    def _title_suffix(self, title: str | None) -> str:
        return f" {format_link_title(title)}" if title else ""

    def visit_link(self, node: Link) -> None:
        """Render a Link node as an inline link."""
        text = self._render_inline_content(node.content)
        destination = format_link_destination(node.url)
        self._output.append(f"[{text}]({destination}{self._title_suffix(node.title)})")

    def visit_image(self, node: Image) -> None:
        """Render an Image node."""
        alt_text = escape_link_text(node.alt_text)
        destination = format_link_destination(node.url)
        self._output.append(f"![{alt_text}]({destination}{self._title_suffix(node.title)})")
