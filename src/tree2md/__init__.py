"""tree2md - HTML and node tree to Markdown conversion.

tree2md walks a tree of element and text nodes and renders it as Markdown,
driven by a table of per-tag translator rules. Rules are either static
(:class:`~tree2md.translators.TranslatorConfig`) or computed per element
(:class:`~tree2md.translators.TranslatorFactory`), and a post-render hook may
rewrite or remove what an element produced.

HTML input is parsed with BeautifulSoup; hosts that already have a tree can
build :class:`~tree2md.ast.ElementNode` / :class:`~tree2md.ast.TextNode`
nodes directly.

Examples
--------
Convert HTML:

    >>> from tree2md import html_to_markdown
    >>> html_to_markdown("<ol><li>A</li><li>B</li></ol>")
    '1. A\\n2. B'

Reuse a converter with custom rules:

    >>> from tree2md import Tree2Markdown, ConversionOptions, TranslatorConfig
    >>> converter = Tree2Markdown(
    ...     ConversionOptions(bullet_marker="-"),
    ...     translators={"mark": TranslatorConfig(prefix="==", postfix="==")},
    ... )
    >>> converter.translate("<ul><li><mark>x</mark></li></ul>")
    '- ==x=='

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "tree2md requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from tree2md.api import Tree2Markdown, html_to_markdown, tree_to_markdown
from tree2md.ast import ElementNode, TextNode, document, element
from tree2md.exceptions import (
    FileError,
    ParsingError,
    RenderingError,
    Tree2MdError,
    TranslatorConfigError,
    ValidationError,
)
from tree2md.options import ConversionOptions
from tree2md.translators import (
    PostProcessResult,
    TranslatorCollection,
    TranslatorConfig,
    TranslatorContext,
    TranslatorFactory,
    translator_factory,
)

__all__ = [
    "__version__",
    "ConversionOptions",
    "ElementNode",
    "FileError",
    "ParsingError",
    "PostProcessResult",
    "RenderingError",
    "TextNode",
    "TranslatorCollection",
    "TranslatorConfig",
    "TranslatorConfigError",
    "TranslatorContext",
    "TranslatorFactory",
    "Tree2Markdown",
    "Tree2MdError",
    "ValidationError",
    "document",
    "element",
    "html_to_markdown",
    "translator_factory",
    "tree_to_markdown",
]
