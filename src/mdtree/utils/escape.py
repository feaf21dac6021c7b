#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdtree/utils/escape.py
"""Markdown escaping utilities.

Text values in the generic tree are stored raw. Escaping happens only when
the Markdown renderer serializes them, so that a literal ``*`` in a text
node never turns into emphasis and a literal ``|`` never splits a table
cell.

"""

from __future__ import annotations

import re

from mdtree.constants import DEFAULT_CODE_FENCE_MIN

_ALWAYS_ESCAPE = "\\`*[]~"

_BLOCK_START_HASH = re.compile(r"^#")
_BLOCK_START_QUOTE = re.compile(r"^>")
_BLOCK_START_BULLET = re.compile(r"^([-+])(?=\s|$)")
_BLOCK_START_ORDERED = re.compile(r"^(\d{1,9})([.)])(?=\s|$)")
_THEMATIC_BREAK_LIKE = re.compile(r"^(?:([-_*])[ \t]*)(?:\1[ \t]*){2,}$")
_SETEXT_LIKE = re.compile(r"^=+[ \t]*$")
_HEADING_CLOSING_RUN = re.compile(r"(^|\s)(#+)$")

_WHITESPACE_RUN = re.compile(r"[ \t\n\f\r]+")


def collapse_whitespace(text: str) -> str:
    """Collapse every whitespace run to a single space.

    Examples
    --------
        >>> collapse_whitespace("a \\n\\t b")
        'a b'

    """
    return _WHITESPACE_RUN.sub(" ", text)


def escape_markdown_text(text: str) -> str:
    r"""Escape characters that would trigger inline Markdown syntax.

    Backslash, backtick, asterisk, square brackets and tilde are always
    escaped. Underscores are escaped only at word boundaries, so
    ``snake_case`` survives untouched. ``<`` is escaped when it could open
    an autolink or raw HTML, and ``&`` when it could open a character
    reference.

    Parameters
    ----------
    text : str
        Raw text value

    Returns
    -------
    str
        Escaped text

    Examples
    --------
        >>> escape_markdown_text("*not emphasis*")
        '\\*not emphasis\\*'
        >>> escape_markdown_text("snake_case")
        'snake_case'

    """
    if not text:
        return text

    escaped_chars = []
    last = len(text) - 1
    for i, char in enumerate(text):
        nxt = text[i + 1] if i < last else ""
        if char in _ALWAYS_ESCAPE:
            escaped_chars.append("\\")
        elif char == "_":
            prev_alnum = i > 0 and text[i - 1].isalnum()
            next_alnum = nxt.isalnum()
            if not (prev_alnum and next_alnum):
                escaped_chars.append("\\")
        elif char == "<":
            if nxt and (nxt.isalpha() or nxt in "/!?"):
                escaped_chars.append("\\")
        elif char == "&":
            if nxt and (nxt == "#" or nxt.isalpha()):
                escaped_chars.append("\\")
        escaped_chars.append(char)

    return "".join(escaped_chars)


def escape_block_start(line: str) -> str:
    r"""Escape a line start that would otherwise open a block construct.

    Applied to rendered paragraph text so that a paragraph reading
    ``# not a heading`` or ``1. not a list`` stays a paragraph.

    Examples
    --------
        >>> escape_block_start("# title")
        '\\# title'
        >>> escape_block_start("1. one")
        '1\\. one'

    """
    if not line:
        return line
    if _THEMATIC_BREAK_LIKE.match(line) or _SETEXT_LIKE.match(line):
        return "\\" + line
    if _BLOCK_START_HASH.match(line) or _BLOCK_START_QUOTE.match(line):
        return "\\" + line
    if _BLOCK_START_BULLET.match(line):
        return "\\" + line
    match = _BLOCK_START_ORDERED.match(line)
    if match:
        return match.group(1) + "\\" + line[len(match.group(1)) :]
    return line


def escape_heading_content(content: str) -> str:
    r"""Escape a trailing ``#`` run that would read as a closing sequence.

    Examples
    --------
        >>> escape_heading_content("C #")
        'C \\#'

    """
    match = _HEADING_CLOSING_RUN.search(content)
    if not match:
        return content
    start = match.start(2)
    return content[:start] + "\\" + content[start:]


def escape_table_cell(text: str) -> str:
    r"""Escape pipe characters inside a rendered table cell.

    Pipes already preceded by a backslash are left alone.

    Examples
    --------
        >>> escape_table_cell("a | b")
        'a \\| b'

    """
    if not text or "|" not in text:
        return text
    return re.sub(r"(?<!\\)\|", r"\\|", text)


def escape_link_text(text: str) -> str:
    r"""Escape square brackets in image alt text."""
    if not text:
        return text
    return text.replace("\\", "\\\\").replace("[", r"\[").replace("]", r"\]")


def _parens_balanced(url: str) -> bool:
    depth = 0
    for char in url:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return False
    return depth == 0


def format_link_destination(url: str) -> str:
    """Format a URL for use as a link or image destination.

    Bare destinations are used when possible. Empty destinations and those
    containing whitespace, angle brackets, control characters or unbalanced
    parentheses are wrapped in ``<...>``.

    Parameters
    ----------
    url : str
        Raw destination

    Returns
    -------
    str
        Destination ready to place between parentheses

    Examples
    --------
        >>> format_link_destination("https://example.com")
        'https://example.com'
        >>> format_link_destination("my file.md")
        '<my file.md>'

    """
    url = url.replace("&", r"\&")
    needs_angle = (
        not url
        or any(char.isspace() or ord(char) < 0x20 or ord(char) == 0x7F for char in url)
        or "<" in url
        or ">" in url
        or not _parens_balanced(url)
    )
    if needs_angle:
        inner = url.replace("<", r"\<").replace(">", r"\>").replace("\n", " ")
        return f"<{inner}>"
    return url


def format_link_title(title: str) -> str:
    """Return a double-quoted link title with quotes and backslashes escaped.

    Examples
    --------
        >>> format_link_title('say "hi"')
        '"say \\\\"hi\\\\""'

    """
    escaped = title.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def escape_inline_code(code: str, delimiter: str = "`") -> tuple[str, str]:
    """Escape inline code and determine appropriate delimiter.

    Handles cases where code contains the delimiter character by
    using a longer delimiter sequence.

    Parameters
    ----------
    code : str
        Code content to escape
    delimiter : str, default = '`'
        Preferred delimiter character

    Returns
    -------
    tuple[str, str]
        (escaped_code, delimiter_to_use)

    Examples
    --------
        >>> escape_inline_code("simple code", "`")
        ('simple code', '`')
        >>> escape_inline_code("code with ` backtick", "`")
        ('code with ` backtick', '``')

    """
    if not code:
        return code, delimiter

    max_consecutive = longest_run(code, delimiter)
    if max_consecutive == 0:
        return code, delimiter

    final_delimiter = delimiter * (max_consecutive + 1)

    # A leading or trailing delimiter char would merge with the fence
    if code.startswith(delimiter) or code.endswith(delimiter):
        code = " " + code + " "

    return code, final_delimiter


def longest_run(text: str, char: str) -> int:
    """Return the length of the longest run of ``char`` in ``text``."""
    max_consecutive = 0
    current_consecutive = 0
    for c in text:
        if c == char:
            current_consecutive += 1
            max_consecutive = max(max_consecutive, current_consecutive)
        else:
            current_consecutive = 0
    return max_consecutive


def code_fence_for(content: str, fence_char: str = "`", minimum: int = DEFAULT_CODE_FENCE_MIN) -> str:
    """Return a fence long enough not to be closed by ``content``.

    Examples
    --------
        >>> code_fence_for("print(1)")
        '```'
        >>> code_fence_for("````")
        '`````'

    """
    return fence_char * max(minimum, longest_run(content, fence_char) + 1)
