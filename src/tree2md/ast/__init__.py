#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Node tree types read by the tree2md engine."""

from tree2md.ast.nodes import (
    ROOT_TAG,
    ElementNode,
    Node,
    TextNode,
    document,
    element,
    get_children,
    iter_descendants,
    trim_text,
)

__all__ = [
    "ROOT_TAG",
    "ElementNode",
    "Node",
    "TextNode",
    "document",
    "element",
    "get_children",
    "iter_descendants",
    "trim_text",
]
