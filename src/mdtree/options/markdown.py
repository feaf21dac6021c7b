#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for Markdown rendering."""
# src/mdtree/options/markdown.py


from __future__ import annotations

from dataclasses import dataclass, field

from mdtree.constants import (
    DEFAULT_BULLET_MARKER,
    DEFAULT_CODE_FENCE_CHAR,
    DEFAULT_EMPHASIS_SYMBOL,
    DEFAULT_ESCAPE_SPECIAL,
    DEFAULT_LIST_INDENT,
    DEFAULT_RULE_STYLE,
    DEFAULT_STRONG_SYMBOL,
    DEFAULT_TABLE_PIPE_ESCAPE,
    DEFAULT_USE_FENCES,
    BulletMarker,
    CodeFenceChar,
    EmphasisSymbol,
    ListIndentStyle,
    RuleStyle,
    StrongSymbol,
)
from mdtree.options.base import BaseRendererOptions


@dataclass(frozen=True)
class MarkdownRendererOptions(BaseRendererOptions):
    r"""Markdown rendering options for converting the AST to Markdown text.

    Parameters
    ----------
    bullet_marker : {"-", "\*", "+"}, default "-"
        Marker used for every unordered list item, at every depth. A list
        directly following another unordered list switches to an alternate
        marker so the two do not merge.
    list_indent : {"one-space", "tab-width"}, default "one-space"
        Spacing after a list marker:
        - "one-space": one space, so children indent by the marker width
        - "tab-width": marker width rounded up to the next multiple of 4
    rule_style : {"-", "\*", "\_"}, default "-"
        Character repeated three times for thematic breaks.
    use_fences : bool, default True
        Render code blocks with fences. When False, blocks without a
        language and with a non-blank body are indented by four spaces.
    emphasis_marker : {"\*", "\_"}, default "\*"
        Symbol to use for emphasis/italic formatting.
    strong_marker : {"\*", "\_"}, default "\*"
        Symbol doubled for strong/bold formatting.
    code_fence_char : {"`", "~"}, default "`"
        Character to use for code fences.
    escape_special : bool, default True
        Whether to escape special Markdown characters in text content.
    table_pipe_escape : bool, default True
        Whether to escape pipe characters (|) in table cell content.

    Examples
    --------
        >>> opts = MarkdownRendererOptions(bullet_marker="*")
        >>> opts.create_updated(rule_style="_").rule_style
        '_'

    """

    bullet_marker: BulletMarker = field(
        default=DEFAULT_BULLET_MARKER,
        metadata={"help": "Marker for unordered list items", "choices": ["-", "*", "+"], "importance": "core"},
    )
    list_indent: ListIndentStyle = field(
        default=DEFAULT_LIST_INDENT,
        metadata={
            "help": "Spacing after list markers: one-space or tab-width",
            "choices": ["one-space", "tab-width"],
            "importance": "core",
        },
    )
    rule_style: RuleStyle = field(
        default=DEFAULT_RULE_STYLE,
        metadata={"help": "Character used for thematic breaks", "choices": ["-", "*", "_"], "importance": "core"},
    )
    use_fences: bool = field(
        default=DEFAULT_USE_FENCES,
        metadata={"help": "Use fenced code blocks", "importance": "core"},
    )
    emphasis_marker: EmphasisSymbol = field(
        default=DEFAULT_EMPHASIS_SYMBOL,
        metadata={"help": "Symbol to use for emphasis/italic formatting", "choices": ["*", "_"], "importance": "core"},
    )
    strong_marker: StrongSymbol = field(
        default=DEFAULT_STRONG_SYMBOL,
        metadata={"help": "Symbol to use for strong/bold formatting", "choices": ["*", "_"], "importance": "core"},
    )
    code_fence_char: CodeFenceChar = field(
        default=DEFAULT_CODE_FENCE_CHAR,
        metadata={"help": "Character for code fences", "choices": ["`", "~"], "importance": "advanced"},
    )
    escape_special: bool = field(
        default=DEFAULT_ESCAPE_SPECIAL,
        metadata={"help": "Escape special Markdown characters (e.g. asterisks) in text content", "importance": "core"},
    )
    table_pipe_escape: bool = field(
        default=DEFAULT_TABLE_PIPE_ESCAPE,
        metadata={"help": "Escape pipe characters in table cells", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate option values.

        Raises
        ------
        ValueError
            If an enumerated option has an unsupported value or a flag is not a bool.

        """
        super().__post_init__()
        for name in ("use_fences", "escape_special", "table_pipe_escape"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be a bool, got {type(value).__name__}")
