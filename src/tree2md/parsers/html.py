#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/parsers/html.py
"""HTML to node tree adapter.

Parses markup with BeautifulSoup and copies the result into
:class:`~tree2md.ast.nodes.ElementNode` / :class:`~tree2md.ast.nodes.TextNode`
trees. Comments, doctypes, CDATA and processing instructions are dropped.
Multi-valued attributes such as ``class`` are joined with spaces.

"""

from __future__ import annotations

import logging
from typing import Any

from bs4 import BeautifulSoup, FeatureNotFound, NavigableString, Tag
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

from tree2md.ast.nodes import ROOT_TAG, ElementNode, TextNode
from tree2md.constants import DEFAULT_HTML_PARSER
from tree2md.exceptions import ParsingError

logger = logging.getLogger(__name__)

_SKIPPED_STRINGS = (Comment, Doctype, Declaration, CData, ProcessingInstruction)


def _attribute_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return "" if value is None else str(value)


def _convert_children(source: Tag, target: ElementNode) -> None:
    # (bs4 tag, node) pairs still to copy; explicit stack keeps deep documents safe
    stack: list[tuple[Tag, ElementNode]] = [(source, target)]
    while stack:
        tag, node = stack.pop()
        for child in tag.children:
            if isinstance(child, _SKIPPED_STRINGS):
                continue
            if isinstance(child, NavigableString):
                node.children.append(TextNode(str(child)))
            elif isinstance(child, Tag):
                element = ElementNode(
                    child.name,
                    {name: _attribute_value(value) for name, value in child.attrs.items()},
                )
                node.children.append(element)
                stack.append((child, element))


def soup_to_tree(soup: Tag) -> ElementNode:
    """Copy a parsed BeautifulSoup document (or tag) into a node tree.

    Parameters
    ----------
    soup : bs4.Tag
        Parsed document or any tag within one

    Returns
    -------
    ElementNode
        Root element; a whole document becomes a ``#document`` root

    """
    if isinstance(soup, BeautifulSoup):
        root = ElementNode(ROOT_TAG)
    else:
        root = ElementNode(soup.name, {name: _attribute_value(value) for name, value in soup.attrs.items()})
    _convert_children(soup, root)
    return root


def parse_html(html: str | bytes, parser: str = DEFAULT_HTML_PARSER) -> ElementNode:
    """Parse HTML markup into a node tree.

    Parameters
    ----------
    html : str or bytes
        Markup to parse
    parser : str, default "html.parser"
        BeautifulSoup parser backend

    Returns
    -------
    ElementNode
        Root of the parsed tree

    Raises
    ------
    ParsingError
        If the parser backend is unavailable or parsing fails

    """
    try:
        soup = BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise ParsingError(
            f"HTML parser backend {parser!r} is not installed", parsing_stage="parser_selection", original_error=e
        ) from e
    except (TypeError, ValueError, AssertionError) as e:
        raise ParsingError(f"Failed to parse HTML: {e}", parsing_stage="html_parsing", original_error=e) from e

    root = soup_to_tree(soup)
    logger.debug("Parsed HTML with %s into %d top-level nodes", parser, len(root.children))
    return root

