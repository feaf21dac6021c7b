#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the mdtree library.

This module centralizes the role vocabulary of the generic element tree,
the Literal types shared by options and AST nodes, and the default
rendering configuration.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Role Vocabulary - Element roles accepted by the tree store
3. Markdown Formatting Defaults - Serializer defaults
4. Configuration - Config file discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

BulletMarker = Literal["-", "*", "+"]
ListIndentStyle = Literal["one-space", "tab-width"]
RuleStyle = Literal["-", "*", "_"]
EmphasisSymbol = Literal["*", "_"]
StrongSymbol = Literal["*", "_"]
CodeFenceChar = Literal["`", "~"]
Alignment = Literal["left", "center", "right"]
TaskStatus = Literal["checked", "unchecked"]

# =============================================================================
# Role Vocabulary
# =============================================================================

ROLE_ROOT = "root"
ROLE_HEADING = "heading"
ROLE_PARAGRAPH = "paragraph"
ROLE_STRONG = "strong"
ROLE_EMPHASIS = "emphasis"
ROLE_STRIKETHROUGH = "strikethrough"
ROLE_INLINE_CODE = "inlineCode"
ROLE_CODE = "code"
ROLE_BLOCKQUOTE = "blockquote"
ROLE_LINK = "link"
ROLE_IMAGE = "image"
ROLE_LIST = "list"
ROLE_LIST_ITEM = "listItem"
ROLE_TABLE = "table"
ROLE_TABLE_ROW = "tableRow"
ROLE_TABLE_CELL = "tableCell"
ROLE_TABLE_HEADER = "tableHeader"
ROLE_THEMATIC_BREAK = "thematicBreak"

ELEMENT_ROLES = frozenset(
    {
        ROLE_ROOT,
        ROLE_HEADING,
        ROLE_PARAGRAPH,
        ROLE_STRONG,
        ROLE_EMPHASIS,
        ROLE_STRIKETHROUGH,
        ROLE_INLINE_CODE,
        ROLE_CODE,
        ROLE_BLOCKQUOTE,
        ROLE_LINK,
        ROLE_IMAGE,
        ROLE_LIST,
        ROLE_LIST_ITEM,
        ROLE_TABLE,
        ROLE_TABLE_ROW,
        ROLE_TABLE_CELL,
        ROLE_TABLE_HEADER,
        ROLE_THEMATIC_BREAK,
    }
)

# Roles grouped into paragraphs when they appear at block level.
# Images are deliberately absent: they always get a paragraph of their own.
INLINE_ROLES = frozenset(
    {
        ROLE_STRONG,
        ROLE_EMPHASIS,
        ROLE_STRIKETHROUGH,
        ROLE_INLINE_CODE,
        ROLE_LINK,
    }
)

TABLE_CELL_ROLES = frozenset({ROLE_TABLE_CELL, ROLE_TABLE_HEADER})

ALIGNMENT_VALUES = ("left", "center", "right", "none")

MIN_HEADING_DEPTH = 1
MAX_HEADING_DEPTH = 6

# =============================================================================
# Markdown Formatting Defaults
# =============================================================================

DEFAULT_BULLET_MARKER: BulletMarker = "-"
DEFAULT_LIST_INDENT: ListIndentStyle = "one-space"
DEFAULT_RULE_STYLE: RuleStyle = "-"
DEFAULT_USE_FENCES = True
DEFAULT_EMPHASIS_SYMBOL: EmphasisSymbol = "*"
DEFAULT_STRONG_SYMBOL: StrongSymbol = "*"
DEFAULT_CODE_FENCE_CHAR: CodeFenceChar = "`"
DEFAULT_CODE_FENCE_MIN = 3
DEFAULT_ESCAPE_SPECIAL = True
DEFAULT_TABLE_PIPE_ESCAPE = True

THEMATIC_BREAK_REPETITION = 3
TAB_STOP_WIDTH = 4
INDENTED_CODE_PREFIX = "    "

# Option names as they appear in camelCase configuration mappings
OPTION_ALIASES = {
    "bulletMarker": "bullet_marker",
    "listIndent": "list_indent",
    "ruleStyle": "rule_style",
    "useFences": "use_fences",
    "emphasisMarker": "emphasis_marker",
    "strongMarker": "strong_marker",
    "codeFenceChar": "code_fence_char",
    "escapeSpecial": "escape_special",
    "tablePipeEscape": "table_pipe_escape",
}

# =============================================================================
# Configuration
# =============================================================================

CONFIG_ENV_VAR = "MDTREE_CONFIG"
DEBUG_ENV_VAR = "MDTREE_DEBUG"
CONFIG_FILENAMES = [".mdtree.toml", ".mdtree.yaml", ".mdtree.yml", ".mdtree.json"]
PYPROJECT_TOOL_SECTION = "mdtree"
