#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/engine/text.py
"""Text normalisation helpers used while rendering text nodes.

The normaliser collapses whitespace and applies the configured escape rules
in a fixed order: global escape, line-start escape, then every custom
replacement pair in its declared order.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tree2md.engine.metadata import NodeMetadata
    from tree2md.options import ConversionOptions

_WHITESPACE_RUN = re.compile(r"\s+")
_LEADING_BLANK_LINES = re.compile(r"\A(?:[^\S\r\n]*\r?\n)+")
_TRAILING_BLANK_LINES = re.compile(r"(?:\r?\n[^\S\r\n]*)+\Z")


@dataclass(frozen=True)
class TrailingWhitespaceStats:
    """Shape of the whitespace run at the end of a text.

    Attributes
    ----------
    whitespace : int
        Number of trailing whitespace characters
    newlines : int
        How many of those are line breaks (``\\r\\n`` counts once)

    """

    whitespace: int = 0
    newlines: int = 0


def trailing_whitespace_info(text: str) -> TrailingWhitespaceStats:
    """Scan backward from the end of ``text`` over its whitespace run."""
    whitespace = 0
    newlines = 0
    index = len(text) - 1
    while index >= 0 and text[index].isspace():
        char = text[index]
        if char == "\n" or (char == "\r" and text[index + 1 : index + 2] != "\n"):
            newlines += 1
        whitespace += 1
        index -= 1
    return TrailingWhitespaceStats(whitespace, newlines)


def collapse_whitespace(text: str) -> str:
    """Replace each maximal whitespace run, line breaks included, with one space."""
    return _WHITESPACE_RUN.sub(" ", text)


def normalize_text(text: str, metadata: NodeMetadata | None, options: ConversionOptions) -> str:
    """Collapse whitespace and apply escaping to a text run.

    Parameters
    ----------
    text : str
        Text node content (raw or trimmed, as chosen by the caller)
    metadata : NodeMetadata or None
        Context of the text; ``None`` means no special context
    options : ConversionOptions
        Supplies the escape rules and custom replacements

    Returns
    -------
    str
        Text ready to append to the output

    """
    result = text
    if metadata is None or not metadata.preserve_whitespace:
        result = collapse_whitespace(result)
    if metadata is not None and metadata.no_escape:
        return result

    pattern, replacement = options.global_escape
    result = pattern.sub(replacement, result)
    pattern, replacement = options.line_start_escape
    result = pattern.sub(replacement, result)
    for pattern, replacement in options.text_replace:
        result = pattern.sub(replacement, result)
    return result


def trim_newlines(text: str) -> str:
    """Strip leading and trailing line breaks and whitespace-only edge lines.

    Indentation on the first and last content lines is kept.

    Examples
    --------
        >>> trim_newlines("\\n  \\n    code\\n\\n")
        '    code'

    """
    text = _LEADING_BLANK_LINES.sub("", text)
    return _TRAILING_BLANK_LINES.sub("", text)


def is_whitespace_only(text: str) -> bool:
    """Whether ``text`` is empty or contains only whitespace."""
    return not text.strip()
