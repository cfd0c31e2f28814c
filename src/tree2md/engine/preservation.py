#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/engine/preservation.py
"""Bottom-up pass deciding which nodes can produce output.

A node is preserved when it is a text node, a contentless element such as
``<br>``, a childless element whose rule is a factory or asks to be
preserved when empty, or when any of its children is preserved. Every node
gets a flag; the pass does not stop at the first preserved child.

"""

from __future__ import annotations

import logging
from typing import Mapping

from tree2md.ast.nodes import ElementNode, Node, TextNode, get_children
from tree2md.constants import CONTENTLESS_ELEMENTS
from tree2md.engine.nodemap import NodeMap
from tree2md.translators.base import TranslatorRule

logger = logging.getLogger(__name__)


def _preserved_without_children(node: Node, translators: Mapping[str, TranslatorRule]) -> bool:
    if isinstance(node, TextNode):
        return True
    if not isinstance(node, ElementNode):
        return False
    if node.tag in CONTENTLESS_ELEMENTS:
        return True
    if node.children:
        return False
    rule = translators.get(node.tag)
    return rule is not None and (rule.is_factory or rule.preserve_if_empty)


def analyze_preservation(root: Node, translators: Mapping[str, TranslatorRule]) -> NodeMap[bool]:
    """Compute the preserve flag of every node under ``root``.

    The walk uses an explicit stack, so deeply nested documents do not hit
    the interpreter's recursion limit.

    Parameters
    ----------
    root : Node
        Root of the tree
    translators : Mapping[str, TranslatorRule]
        Global rule table used to look up childless elements

    Returns
    -------
    NodeMap[bool]
        Preserve flag for every node in the tree

    """
    flags: NodeMap[bool] = NodeMap()
    # (node, children_done)
    stack: list[tuple[Node, bool]] = [(root, False)]
    while stack:
        node, children_done = stack.pop()
        if children_done:
            flags[node] = any(flags[child] for child in get_children(node))
            continue
        if _preserved_without_children(node, translators):
            flags[node] = True
            # Descendants of contentless elements still get their own flag
            for child in get_children(node):
                stack.append((child, False))
            continue
        children = get_children(node)
        if not children:
            flags[node] = False
            continue
        stack.append((node, True))
        for child in reversed(children):
            stack.append((child, False))

    logger.debug("Preservation pass flagged %d of %d nodes", sum(1 for n in flags if flags[n]), len(flags))
    return flags
