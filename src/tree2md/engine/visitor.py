#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/engine/visitor.py
"""Depth-first renderer driving translator rules over a node tree.

For each element the visitor resolves the active rule (override table from
the metadata first, then the global table), updates the inherited metadata,
writes newlines and prefix, renders literal content or the children, runs the
rule's post-render hook and writes postfix and newlines. A hook can replace
the rendered children or ask for the element to be removed, in which case the
buffer is truncated back to the position recorded before the element wrote
anything.

"""

from __future__ import annotations

import logging
from typing import Mapping

from tree2md.ast.nodes import ElementNode, Node, TextNode
from tree2md.engine.buffer import OutputBuffer
from tree2md.engine.metadata import MetadataStore, NodeMetadata, derive_metadata
from tree2md.engine.nodemap import NodeMap
from tree2md.engine.preservation import analyze_preservation
from tree2md.engine.references import UrlDefinitions
from tree2md.engine.text import normalize_text
from tree2md.exceptions import RenderingError
from tree2md.options import ConversionOptions
from tree2md.translators.base import (
    PostProcessResult,
    TranslatorContext,
    TranslatorRule,
)

logger = logging.getLogger(__name__)


class Visitor:
    """Renders one node tree into an :class:`OutputBuffer`.

    A visitor is single-use: construct it, call :meth:`run`, read
    :attr:`buffer` and :attr:`url_definitions`. Nothing is shared between
    visitors, so separate conversions may run on separate threads.

    Parameters
    ----------
    root : Node
        Root of the tree to render
    translators : Mapping[str, TranslatorRule]
        Global rule table
    options : ConversionOptions
        Conversion options

    """

    def __init__(self, root: Node, translators: Mapping[str, TranslatorRule], options: ConversionOptions):
        self.root = root
        self.translators = translators
        self.options = options
        self.buffer = OutputBuffer()
        self.url_definitions = UrlDefinitions()
        self.node_metadata = MetadataStore()
        self.preserved: NodeMap[bool] = NodeMap()
        self._done = False

    def run(self) -> str:
        """Analyse and render the tree; returns the raw buffer text."""
        if self._done:
            raise RenderingError("Visitor instances render a single tree", rendering_stage="visit")
        self._done = True
        self.preserved = analyze_preservation(self.root, self.translators)
        self.visit(self.root)
        return self.buffer.text

    def add_or_get_url_definition(self, url: str) -> int:
        return self.url_definitions.add_or_get(url)

    def _context(self, node: ElementNode, metadata: NodeMetadata | None) -> TranslatorContext:
        return TranslatorContext(node, metadata, self.options, self.url_definitions)

    def _visit_text(self, node: TextNode, metadata: NodeMetadata | None) -> None:
        preserve_whitespace = metadata is not None and metadata.preserve_whitespace
        if node.is_whitespace and not preserve_whitespace:
            if len(self.buffer) and self.buffer.trailing_stats.whitespace == 0:
                self.buffer.append(" ")
            return
        text = node.text if preserve_whitespace else node.trimmed_text
        self.buffer.append(normalize_text(text, metadata, self.options))

    def visit(self, node: Node, text_only: bool = False, metadata: NodeMetadata | None = None) -> None:
        """Render ``node`` and its subtree.

        Parameters
        ----------
        node : Node
            Node to render
        text_only : bool, default False
            Write text only, without applying element rules (set below
            elements whose rule has ``recurse=False``)
        metadata : NodeMetadata or None
            Inherited metadata

        """
        if not self.preserved.get(node, False):
            return

        if isinstance(node, TextNode):
            self._visit_text(node, metadata)
            return
        if text_only or not isinstance(node, ElementNode):
            return

        active = self.translators
        if metadata is not None and metadata.translators is not None:
            active = metadata.translators
        rule = active.get(node.tag)

        inherited = metadata
        metadata = derive_metadata(node, metadata)
        self.node_metadata.record(node, metadata, inherited)

        if rule is None:
            for child in node.children:
                self.visit(child, text_only, metadata)
            return

        context = self._context(node, metadata)
        config = rule.resolve(context)
        if config.ignore:
            return

        if config.no_escape and not (metadata is not None and metadata.no_escape):
            metadata = (metadata or NodeMetadata()).derive(no_escape=True)
        if config.child_translators is not None and (
            metadata is None or config.child_translators is not metadata.translators
        ):
            metadata = (metadata or NodeMetadata()).derive(translators=config.child_translators)
        self.node_metadata.record(node, metadata, inherited)

        start_outer = self.buffer.position
        if config.surrounding_newlines:
            self.buffer.append_newlines(config.surrounding_newlines)
        if config.prefix:
            self.buffer.append(config.prefix)

        if config.content is not None:
            self.buffer.append(config.content, space_if_repeating_char=config.space_if_repeating_char)
        else:
            start_inner = self.buffer.position
            for child in node.children:
                self.visit(child, not config.recurse, metadata)

            if config.postprocess is not None:
                result = config.postprocess(
                    self._context(node, metadata).with_content(self.buffer.slice_from(start_inner))
                )
                if result is PostProcessResult.REMOVE_NODE:
                    self._remove(node, inherited, start_outer)
                    return
                if isinstance(result, str):
                    self.buffer.append(
                        result, truncate_to=start_inner, space_if_repeating_char=config.space_if_repeating_char
                    )
                elif result is not None:
                    raise RenderingError(
                        f"postprocess hook for <{node.tag}> returned {type(result).__name__}; "
                        "expected str, PostProcessResult or None",
                        rendering_stage="postprocess",
                    )

        if config.postfix:
            self.buffer.append(config.postfix)
        if config.surrounding_newlines:
            self.buffer.append_newlines(config.surrounding_newlines)

    def _remove(self, node: ElementNode, inherited: NodeMetadata | None, start_outer: int) -> None:
        counter = inherited.list_counter if inherited is not None else None
        if counter is not None and node.tag == "li" and inherited.list_kind == "ol":
            # Later siblings are numbered as if this item never existed
            counter.retract()
        logger.debug("Removing <%s> output (%d chars)", node.tag, self.buffer.position - start_outer)
        self.buffer.truncate(start_outer)
