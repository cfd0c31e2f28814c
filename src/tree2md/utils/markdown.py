#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/utils/markdown.py
"""Markdown text helpers used by the default translators.

"""

from __future__ import annotations

import re

from tree2md.constants import LINK_URL_ENCODINGS, TABLE_CELL_LINE_BREAK

_LINE_SPLIT = re.compile(r"(\r?\n)")
_NEWLINE_RUN = re.compile(r"(?:[^\S\r\n]*\r?\n)+[^\S\r\n]*")
_UNESCAPED_PIPE = re.compile(r"(?<!\\)\|")


def surround(content: str, delimiter: str) -> str:
    r"""Wrap every non-blank line of ``content`` in ``delimiter``.

    Whitespace at the edges of a line stays outside the delimiters, and
    unescaped occurrences of the delimiter already inside the content are
    dropped so that nested emphasis of the same kind does not close early.

    Parameters
    ----------
    content : str
        Rendered inline content
    delimiter : str
        Emphasis delimiter such as ``**`` or ``_``

    Returns
    -------
    str
        Delimited content

    Examples
    --------
        >>> surround(" bold ", "**")
        ' **bold** '
        >>> surround("a **b** c", "**")
        '**a b c**'

    """
    if delimiter in content:
        content = re.sub(r"(?<!\\)" + re.escape(delimiter), "", content)

    parts = _LINE_SPLIT.split(content)
    result: list[str] = []
    for index, part in enumerate(parts):
        if index % 2 or not part.strip():
            # Line break separator or blank line
            result.append(part)
            continue
        stripped = part.strip()
        start = part.index(stripped[0])
        end = start + len(stripped)
        result.append(f"{part[:start]}{delimiter}{stripped}{delimiter}{part[end:]}")
    return "".join(result)


def longest_run(text: str, char: str) -> int:
    """Length of the longest run of ``char`` in ``text``."""
    runs = re.findall(re.escape(char) + "+", text)
    return max((len(run) for run in runs), default=0)


def code_span(content: str) -> str:
    """Wrap ``content`` as inline code that its own backticks cannot close.

    Examples
    --------
        >>> code_span("a")
        '`a`'
        >>> code_span("a ` b")
        '``a ` b``'
        >>> code_span("`tick")
        '`` `tick ``'

    """
    delimiter = "`" * (longest_run(content, "`") + 1)
    edge_spaces = content.startswith(" ") and content.endswith(" ") and bool(content.strip())
    padding = " " if content.startswith("`") or content.endswith("`") or edge_spaces else ""
    return f"{delimiter}{padding}{content}{padding}{delimiter}"


def code_fence_for(content: str, fence: str) -> str:
    """Return ``fence``, lengthened past any run of its character in ``content``."""
    char = fence[0]
    return char * max(len(fence), longest_run(content, char) + 1)


def prefix_lines(text: str, prefix: str, blank_prefix: str | None = None) -> str:
    """Prefix every line of ``text``; blank lines get ``blank_prefix`` when given."""
    if blank_prefix is None:
        blank_prefix = prefix
    lines = text.split("\n")
    return "\n".join((prefix + line) if line.strip() else blank_prefix for line in lines)


def collapse_line_breaks(text: str, replacement: str = " ") -> str:
    """Replace each run of line breaks (with surrounding spaces) by ``replacement``."""
    return _NEWLINE_RUN.sub(replacement, text)


def encode_link_url(url: str) -> str:
    """Percent-encode characters that would break a Markdown link target.

    Examples
    --------
        >>> encode_link_url("https://en.wikipedia.org/wiki/Python_(language)")
        'https://en.wikipedia.org/wiki/Python%5F%28language%29'

    """
    encoded = "".join(LINK_URL_ENCODINGS.get(char, char) for char in url.strip())
    return encoded.replace(" ", "%20")


def escape_link_title(title: str) -> str:
    """Escape double quotes in a link title."""
    return title.replace('"', '\\"')


def escape_alt_text(text: str) -> str:
    """Escape brackets in image alt text and flatten line breaks."""
    return collapse_line_breaks(text).replace("[", "\\[").replace("]", "\\]")


def table_cell_text(content: str) -> str:
    """Single-line table cell text: trimmed, pipes escaped, line breaks as ``<br>``."""
    content = content.strip()
    content = _NEWLINE_RUN.sub(TABLE_CELL_LINE_BREAK, content)
    return _UNESCAPED_PIPE.sub(r"\\|", content)


def count_table_cells(row: str) -> int:
    """Number of cells in a rendered ``| a | b |`` row."""
    return max(len(_UNESCAPED_PIPE.findall(row)) - 1, 0)
