#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/engine/metadata.py
"""Inherited rendering context for elements.

Metadata flows top-down during rendering. A node inherits its parent's
metadata object unchanged unless it opens a new context (a list, a
preformatted block, a table) or its rule changes escaping or the active rule
table; only then is a derived copy created and recorded in the
:class:`MetadataStore`.

List numbering is shared state between sibling items, so each list context
owns a :class:`ListCounter` that its items advance.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Mapping, Optional

from tree2md.ast.nodes import ElementNode, Node
from tree2md.constants import ListKind
from tree2md.engine.nodemap import NodeMap

if TYPE_CHECKING:
    from tree2md.translators.base import TranslatorRule

logger = logging.getLogger(__name__)


class ListCounter:
    """Running item number of one list, shared by its items."""

    def __init__(self, start: int = 0) -> None:
        self.value = start

    def advance(self) -> int:
        self.value += 1
        return self.value

    def retract(self) -> None:
        """Give back the number of an item that was removed after rendering."""
        self.value -= 1

    def __repr__(self) -> str:
        return f"ListCounter({self.value})"


@dataclass(frozen=True)
class NodeMetadata:
    """Rendering context inherited by an element's subtree.

    Attributes
    ----------
    preserve_whitespace : bool
        Keep text exactly as written (inside ``<pre>``)
    no_escape : bool
        Skip Markdown escaping of text
    translators : Mapping[str, TranslatorRule] or None
        Rule table replacing the global one for this subtree
    list_kind : {"ul", "ol"} or None
        Kind of the innermost enclosing list
    list_item_number : int or None
        Number of the current ordered list item
    indent_level : int or None
        Nesting depth of the innermost list, 0 for a top-level list
    table_context : ElementNode or None
        Nearest enclosing table, for table rules to inspect
    list_counter : ListCounter or None
        Item counter of the innermost enclosing list

    """

    preserve_whitespace: bool = False
    no_escape: bool = False
    translators: Optional[Mapping[str, TranslatorRule]] = None
    list_kind: Optional[ListKind] = None
    list_item_number: Optional[int] = None
    indent_level: Optional[int] = None
    table_context: Optional[ElementNode] = None
    list_counter: Optional[ListCounter] = None

    def derive(self, **changes: object) -> NodeMetadata:
        return replace(self, **changes)


EMPTY_METADATA = NodeMetadata()


def _list_start(node: ElementNode) -> int:
    """Counter value before the first item (``<ol start="n">`` begins at n)."""
    if node.tag != "ol":
        return 0
    start = node.get_attribute("start")
    if start is None:
        return 0
    try:
        return int(start.strip()) - 1
    except ValueError:
        logger.debug("Ignoring non-numeric <ol start=%r>", start)
        return 0


def derive_metadata(node: ElementNode, metadata: NodeMetadata | None) -> NodeMetadata | None:
    """Return the metadata ``node`` renders with.

    Returns the inherited object itself when the element opens no new
    context, so callers can detect change by identity.

    Parameters
    ----------
    node : ElementNode
        Element about to be rendered
    metadata : NodeMetadata or None
        Inherited metadata

    Returns
    -------
    NodeMetadata or None
        The inherited metadata or a derived copy

    """
    tag = node.tag
    base = metadata or EMPTY_METADATA

    if tag in ("ul", "ol"):
        parent_indent = base.indent_level if base.indent_level is not None else -1
        return base.derive(
            list_kind=tag,
            list_item_number=0,
            indent_level=parent_indent + 1,
            list_counter=ListCounter(_list_start(node)),
        )
    if tag == "li":
        if base.list_kind == "ol" and base.list_counter is not None:
            return base.derive(list_item_number=base.list_counter.advance())
        return metadata
    if tag == "pre":
        return base.derive(preserve_whitespace=True)
    if tag == "table":
        return base.derive(table_context=node)
    return metadata


class MetadataStore:
    """Metadata recorded per node, keyed by node identity.

    Entries are only written when a node's metadata differs from what it
    inherited; :meth:`get` falls back to ``None`` ("no special context").
    """

    def __init__(self) -> None:
        self._entries: NodeMap[NodeMetadata] = NodeMap()

    def record(self, node: Node, metadata: NodeMetadata | None, inherited: NodeMetadata | None) -> None:
        if metadata is not None and metadata is not inherited:
            self._entries[node] = metadata

    def get(self, node: Node) -> NodeMetadata | None:
        return self._entries.get(node)

    def __contains__(self, node: object) -> bool:
        return node in self._entries

    def __len__(self) -> int:
        return len(self._entries)
