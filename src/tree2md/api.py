#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/api.py
"""Public conversion API.

:class:`Tree2Markdown` holds options and rule tables and can be reused for
any number of conversions; every call gets its own
:class:`~tree2md.engine.visitor.Visitor`, so nothing leaks from one document
into the next. :func:`html_to_markdown` and :func:`tree_to_markdown` are
one-shot shortcuts.

Examples
--------
    >>> html_to_markdown("<p>Hello <strong>world</strong></p>")
    'Hello **world**'

"""

from __future__ import annotations

import logging
from typing import Mapping

from tree2md.ast.nodes import ElementNode, Node
from tree2md.engine.postprocess import finalize_markdown
from tree2md.engine.visitor import Visitor
from tree2md.exceptions import ValidationError
from tree2md.options import ConversionOptions
from tree2md.parsers.html import parse_html
from tree2md.translators.base import TranslatorCollection, TranslatorRule
from tree2md.translators.defaults import create_default_translators

logger = logging.getLogger(__name__)


class Tree2Markdown:
    """Reusable converter from HTML or node trees to Markdown.

    Parameters
    ----------
    options : ConversionOptions, optional
        Conversion options; defaults are used when omitted
    translators : Mapping[str, TranslatorRule], optional
        Rules added to, or replacing entries of, the default rule table
    table_translators : Mapping[str, TranslatorRule], optional
        Rules replacing defaults inside tables
    code_block_translators : Mapping[str, TranslatorRule], optional
        Rules replacing defaults inside ``<pre>`` blocks

    Examples
    --------
        >>> from tree2md.translators import TranslatorConfig
        >>> converter = Tree2Markdown(translators={"mark": TranslatorConfig(prefix="==", postfix="==")})
        >>> converter.translate("<p><mark>hi</mark></p>")
        '==hi=='

    """

    def __init__(
        self,
        options: ConversionOptions | None = None,
        translators: Mapping[str, TranslatorRule] | None = None,
        table_translators: Mapping[str, TranslatorRule] | None = None,
        code_block_translators: Mapping[str, TranslatorRule] | None = None,
    ):
        if options is None:
            options = ConversionOptions()
        elif not isinstance(options, ConversionOptions):
            raise ValidationError(
                f"options must be ConversionOptions, got {type(options).__name__}",
                parameter_name="options",
                parameter_value=options,
            )
        self.options = options
        self.translators: TranslatorCollection = create_default_translators(
            options,
            table_overrides=table_translators,
            code_block_overrides=code_block_translators,
        ).merged(translators)

    def translate(self, html: str | bytes) -> str:
        """Parse ``html`` and convert it to Markdown.

        Raises
        ------
        ParsingError
            If the markup cannot be parsed
        TranslatorConfigError
            If a rule is malformed
        RenderingError
            If a post-render hook returns an unsupported value

        """
        root = parse_html(html, self.options.html_parser)
        return self.translate_tree(root)

    def translate_tree(self, root: Node) -> str:
        """Convert an already built node tree to Markdown."""
        visitor = Visitor(root, self.translators, self.options)
        text = visitor.run()
        markdown = finalize_markdown(text, visitor.url_definitions, self.options)
        logger.debug(
            "Converted <%s> tree: %d chars, %d link definitions",
            root.tag if isinstance(root, ElementNode) else "#text",
            len(markdown),
            len(visitor.url_definitions),
        )
        return markdown


def html_to_markdown(
    html: str | bytes,
    options: ConversionOptions | None = None,
    translators: Mapping[str, TranslatorRule] | None = None,
) -> str:
    """Convert HTML markup to Markdown in one call."""
    return Tree2Markdown(options, translators).translate(html)


def tree_to_markdown(
    root: Node,
    options: ConversionOptions | None = None,
    translators: Mapping[str, TranslatorRule] | None = None,
) -> str:
    """Convert a node tree to Markdown in one call."""
    return Tree2Markdown(options, translators).translate_tree(root)
