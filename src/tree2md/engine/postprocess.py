#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/engine/postprocess.py
"""Whole-document fixups applied after rendering."""

from __future__ import annotations

import re
from functools import lru_cache

from tree2md.engine.references import UrlDefinitions
from tree2md.engine.text import trim_newlines
from tree2md.options import ConversionOptions


@lru_cache(maxsize=16)
def _newline_run_pattern(maximum: int) -> re.Pattern[str]:
    # A line counts as blank when it holds only whitespace, not only when empty
    return re.compile(r"(?:\r?\n\s*)+((?:\r?\n\s*){%d})" % maximum)


def collapse_newlines(text: str, maximum: int) -> str:
    """Cut every run of more than ``maximum`` line breaks down to ``maximum``.

    Whitespace-only lines inside a run count as part of it. With
    ``maximum=0`` every line break run is removed.

    Examples
    --------
        >>> collapse_newlines("a\\n\\n\\n\\n\\nb", 2)
        'a\\n\\nb'

    """
    return _newline_run_pattern(maximum).sub(r"\1", text)


def append_link_definitions(text: str, url_definitions: UrlDefinitions) -> str:
    """Append ``[n]: url`` lines after a blank line."""
    if not url_definitions:
        return text
    if text and text[-1] not in "\r\n":
        text += "\n"
    return text + "\n" + url_definitions.format_block()


def finalize_markdown(text: str, url_definitions: UrlDefinitions, options: ConversionOptions) -> str:
    """Apply the global post-processing steps to rendered text.

    Parameters
    ----------
    text : str
        Raw rendered buffer
    url_definitions : UrlDefinitions
        URLs registered by reference-style links during rendering
    options : ConversionOptions
        Supplies ``use_link_reference_definitions`` and
        ``max_consecutive_newlines``

    Returns
    -------
    str
        Final Markdown

    """
    if options.use_link_reference_definitions:
        text = append_link_definitions(text, url_definitions)
    if options.max_consecutive_newlines is not None:
        text = collapse_newlines(text, options.max_consecutive_newlines)
    # A hard break at the very end has nothing to break
    return trim_newlines(text).rstrip()
