#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/translators/defaults.py
"""Default HTML tag rules.

The default rule table covers block structure (paragraphs, headings, lists,
quotes, code blocks, tables, rules and breaks) and inline formatting
(emphasis, strong, strikethrough, inline code, links and images). Block and
ignored tag lists come from :class:`~tree2md.options.ConversionOptions`.

Examples
--------
    >>> from tree2md.options import ConversionOptions
    >>> translators = create_default_translators(ConversionOptions())
    >>> translators["h2"].prefix
    '## '

"""

from __future__ import annotations

import logging
import re
from typing import Mapping

from tree2md.constants import HARD_LINE_BREAK, INDENTED_CODE_PREFIX, MAX_HEADING_LEVEL, THEMATIC_BREAK
from tree2md.engine.text import is_whitespace_only, trim_newlines
from tree2md.options import ConversionOptions
from tree2md.translators.base import (
    PostProcessResult,
    TranslatorCollection,
    TranslatorConfig,
    TranslatorContext,
    TranslatorFactory,
    TranslatorRule,
    translator_factory,
)
from tree2md.translators.tables import TABLE_CELL, TABLE_ROW, create_table_rule, create_table_translators
from tree2md.utils.markdown import (
    code_fence_for,
    code_span,
    collapse_line_breaks,
    encode_link_url,
    escape_alt_text,
    escape_link_title,
    prefix_lines,
    surround,
)

logger = logging.getLogger(__name__)

_LANGUAGE_CLASS = re.compile(r"(?:^|\s)(?:language|lang)-(\S+)")
_BLANK_LINES = re.compile(r"\n(?:[^\S\n]*\n)+")


# =============================================================================
# Inline formatting
# =============================================================================


def _delimited(delimiter_option: str) -> TranslatorConfig:
    """Emphasis-like rule wrapping content in the delimiter named by an option."""

    def postprocess(ctx: TranslatorContext) -> str | PostProcessResult:
        content = ctx.content or ""
        if is_whitespace_only(content):
            return PostProcessResult.REMOVE_NODE
        return surround(content, getattr(ctx.options, delimiter_option))

    return TranslatorConfig(space_if_repeating_char=True, postprocess=postprocess)


def _inline_code(ctx: TranslatorContext) -> str | PostProcessResult:
    content = ctx.content or ""
    if is_whitespace_only(content):
        return PostProcessResult.REMOVE_NODE
    return code_span(content)


INLINE_CODE = TranslatorConfig(space_if_repeating_char=True, no_escape=True, postprocess=_inline_code)


@translator_factory()
def link_rule(ctx: TranslatorContext) -> TranslatorConfig | None:
    """Links: inline ``[text](url "title")``, ``<url>`` or reference ``[text][n]``."""
    href = (ctx.node.get_attribute("href") or "").strip()
    if not href:
        # Anchor without a target renders as its content
        return None

    url = encode_link_url(href)
    if ctx.options.use_inline_links and ctx.node.text_content.strip() == href:
        return TranslatorConfig(prefix="<", postfix=">", no_escape=True, postprocess=_single_line)

    title = ctx.node.get_attribute("title")
    options = ctx.options

    def postprocess(inner: TranslatorContext) -> str | PostProcessResult:
        text = collapse_line_breaks(inner.content or "").strip()
        if not text:
            return PostProcessResult.REMOVE_NODE
        if options.use_link_reference_definitions:
            return f"[{text}][{inner.url_definitions.add_or_get(url)}]"
        target = f'{url} "{escape_link_title(title)}"' if title else url
        return f"[{text}]({target})"

    return TranslatorConfig(postprocess=postprocess)


@translator_factory(base=TranslatorConfig(recurse=False))
def image_rule(ctx: TranslatorContext) -> TranslatorConfig:
    """Images: ``![alt](src "title")``; ``data:`` URIs only when kept by option."""
    src = (ctx.node.get_attribute("src") or "").strip()
    if not src or (not ctx.options.keep_data_images and src.lower().startswith("data:")):
        return TranslatorConfig(ignore=True)

    alt = escape_alt_text(ctx.node.get_attribute("alt") or "")
    title = ctx.node.get_attribute("title")
    target = f'{encode_link_url(src)} "{escape_link_title(title)}"' if title else encode_link_url(src)
    return TranslatorConfig(content=f"![{alt}]({target})")


def _single_line(ctx: TranslatorContext) -> str | PostProcessResult:
    content = collapse_line_breaks(ctx.content or "").strip()
    if not content:
        return PostProcessResult.REMOVE_NODE
    return content


# =============================================================================
# Block structure
# =============================================================================


def _heading(level: int) -> TranslatorConfig:
    return TranslatorConfig(prefix="#" * level + " ", surrounding_newlines=2, postprocess=_single_line)


def _blockquote(ctx: TranslatorContext) -> str | PostProcessResult:
    content = trim_newlines(ctx.content or "")
    if is_whitespace_only(content):
        return PostProcessResult.REMOVE_NODE
    return prefix_lines(content, "> ", ">")


def _drop_if_empty(ctx: TranslatorContext) -> PostProcessResult | None:
    return PostProcessResult.REMOVE_NODE if is_whitespace_only(ctx.content or "") else None


@translator_factory(base=TranslatorConfig(surrounding_newlines=2, postprocess=_drop_if_empty))
def list_rule(ctx: TranslatorContext) -> TranslatorConfig | None:
    """Lists are separated by blank lines at top level, by single line breaks when nested."""
    if ctx.metadata is not None and ctx.metadata.indent_level:
        return TranslatorConfig(surrounding_newlines=1)
    return None


@translator_factory(base=TranslatorConfig(surrounding_newlines=1))
def list_item_rule(ctx: TranslatorContext) -> TranslatorConfig:
    """List items: ``n. `` in ordered lists, the bullet marker otherwise.

    Continuation lines, nested lists included, are indented to the width of
    the marker.
    """
    metadata = ctx.metadata
    if metadata is not None and metadata.list_kind == "ol" and metadata.list_item_number is not None:
        marker = f"{metadata.list_item_number}. "
    else:
        marker = f"{ctx.options.bullet_marker} "
    indent = " " * len(marker)

    def postprocess(inner: TranslatorContext) -> str | PostProcessResult:
        content = inner.content or ""
        if is_whitespace_only(content):
            return PostProcessResult.REMOVE_NODE
        content = _BLANK_LINES.sub("\n", content.strip())
        return content.replace("\n", "\n" + indent)

    return TranslatorConfig(prefix=marker, postprocess=postprocess)


def create_code_block_rule(code_block_translators: Mapping[str, TranslatorRule]) -> TranslatorFactory:
    """Preformatted blocks as fenced or indented code."""

    def compute(ctx: TranslatorContext) -> TranslatorConfig:
        language = ""
        for code in ctx.node.find_children("code"):
            match = _LANGUAGE_CLASS.search(code.get_attribute("class") or "")
            if match:
                language = match.group(1)
                break
        options = ctx.options

        def postprocess(inner: TranslatorContext) -> str | PostProcessResult:
            content = inner.content or ""
            if is_whitespace_only(content):
                return PostProcessResult.REMOVE_NODE
            # A line break right after <pre> is not part of the content
            if content.startswith("\r\n"):
                content = content[2:]
            elif content.startswith("\n"):
                content = content[1:]
            content = content.rstrip()
            if options.code_block_style == "indented":
                return prefix_lines(content, INDENTED_CODE_PREFIX, "")
            fence = code_fence_for(content, options.code_fence)
            return f"{fence}{language}\n{content}\n{fence}"

        return TranslatorConfig(postprocess=postprocess)

    return TranslatorFactory(
        compute,
        base=TranslatorConfig(surrounding_newlines=2, no_escape=True, child_translators=code_block_translators),
    )


# =============================================================================
# Rule tables
# =============================================================================

BLOCK = TranslatorConfig(surrounding_newlines=2)
IGNORE = TranslatorConfig(ignore=True)
LINE_BREAK = TranslatorConfig(content=HARD_LINE_BREAK, recurse=False)
THEMATIC = TranslatorConfig(content=THEMATIC_BREAK, surrounding_newlines=2)


def create_inline_translators() -> TranslatorCollection:
    """Rules for inline formatting, shared by the main and table rule tables."""
    return TranslatorCollection(
        {
            "strong,b": _delimited("strong_delimiter"),
            "em,i": _delimited("em_delimiter"),
            "del,s,strike": _delimited("strike_delimiter"),
            "code,kbd,samp,tt": INLINE_CODE,
            "a": link_rule,
            "img": image_rule,
        }
    )


def create_code_block_translators() -> TranslatorCollection:
    """Rules active inside ``<pre>``: only line breaks are translated."""
    return TranslatorCollection({"br": TranslatorConfig(content="\n", recurse=False)})


def create_default_translators(
    options: ConversionOptions,
    table_overrides: Mapping[str, TranslatorRule] | None = None,
    code_block_overrides: Mapping[str, TranslatorRule] | None = None,
) -> TranslatorCollection:
    """Build the default rule table for ``options``.

    Parameters
    ----------
    options : ConversionOptions
        Supplies the block and ignored tag lists
    table_overrides : Mapping[str, TranslatorRule], optional
        Rules replacing defaults inside tables
    code_block_overrides : Mapping[str, TranslatorRule], optional
        Rules replacing defaults inside ``<pre>``

    Returns
    -------
    TranslatorCollection
        The global rule table

    """
    inline = create_inline_translators()
    table_translators = create_table_translators(inline).merged(table_overrides)
    code_block_translators = create_code_block_translators().merged(code_block_overrides)

    translators = TranslatorCollection()
    for tag in options.block_elements:
        translators[tag] = BLOCK
    for tag in options.ignore:
        translators[tag] = IGNORE

    rules: dict[str, TranslatorRule] = {
        "br": LINE_BREAK,
        "hr": THEMATIC,
        "blockquote": TranslatorConfig(surrounding_newlines=2, postprocess=_blockquote),
        "ul,ol": list_rule,
        "li": list_item_rule,
        "pre": create_code_block_rule(code_block_translators),
        "table": create_table_rule(table_translators),
        "tr": TABLE_ROW,
        "th,td": TABLE_CELL,
    }
    for level in range(1, MAX_HEADING_LEVEL + 1):
        rules[f"h{level}"] = _heading(level)

    translators.update(rules)
    translators.update(inline)
    # Ignored tags win over any rule with the same name
    for tag in options.ignore:
        translators[tag] = IGNORE

    logger.debug("Built default translators for %d tags", len(translators))
    return translators
