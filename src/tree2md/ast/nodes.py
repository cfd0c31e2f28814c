#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/ast/nodes.py
"""Node tree consumed by the Markdown engine.

The engine only reads these nodes. Everything it derives about a node (the
preserve flag, rendering metadata) lives in identity-keyed side tables, so a
tree built by a parser adapter stays exactly as the adapter produced it.

Two node kinds exist:

- :class:`TextNode` holds a run of character data.
- :class:`ElementNode` holds a lower-case tag name, its attributes and an
  ordered list of children.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Union

_NON_WHITESPACE = re.compile(r"\S")
_INLINE_SPACE = re.compile(r"[^\S\r\n]")

ROOT_TAG = "#document"


def trim_text(text: str) -> str:
    """Trim surrounding whitespace, keeping one space where it was inline.

    A single space survives on either edge when the whitespace adjacent to the
    content on that side is a plain (non line break) space, so that inline
    text keeps its separation from neighbouring elements.

    Parameters
    ----------
    text : str
        Raw text of a text node

    Returns
    -------
    str
        Trimmed text

    Examples
    --------
        >>> trim_text("  Hello ")
        ' Hello '
        >>> trim_text("\\n  Hello\\n")
        ' Hello'

    """
    first = _NON_WHITESPACE.search(text)
    if first is None:
        return ""
    start = first.start()
    end = len(text.rstrip())

    leading = " " if start > 0 and _INLINE_SPACE.match(text[start - 1]) else ""
    trailing = " " if end < len(text) and _INLINE_SPACE.match(text[end]) else ""
    return leading + text[start:end] + trailing


@dataclass(eq=False)
class TextNode:
    """A run of character data.

    Parameters
    ----------
    text : str
        Raw text, entities already decoded

    """

    text: str

    @property
    def trimmed_text(self) -> str:
        """Text with edge whitespace trimmed (see :func:`trim_text`)."""
        return trim_text(self.text)

    @property
    def is_whitespace(self) -> bool:
        """Whether the node consists only of whitespace (non-breaking spaces included)."""
        return not self.text.strip()

    def __repr__(self) -> str:
        return f"TextNode({self.text!r})"


@dataclass(eq=False)
class ElementNode:
    """An element with a tag, attributes and ordered children.

    Parameters
    ----------
    tag : str
        Tag name; normalised to lower case
    attrs : dict[str, str]
        Element attributes
    children : list[Node]
        Child nodes in document order

    """

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()

    def get_attribute(self, name: str, default: str | None = None) -> str | None:
        """Return an attribute value, or ``default`` when it is absent."""
        return self.attrs.get(name, default)

    @property
    def text_content(self) -> str:
        """Concatenated raw text of every descendant text node."""
        return "".join(node.text for node in iter_descendants(self) if isinstance(node, TextNode))

    def find_children(self, tag: str) -> list[ElementNode]:
        """Return the direct element children with the given tag."""
        return [child for child in self.children if isinstance(child, ElementNode) and child.tag == tag]

    def __repr__(self) -> str:
        return f"ElementNode({self.tag!r}, children={len(self.children)})"


Node = Union[TextNode, ElementNode]


def get_children(node: Node) -> list[Node]:
    """Return a node's children; text nodes have none."""
    if isinstance(node, ElementNode):
        return node.children
    return []


def iter_descendants(node: Node) -> Iterator[Node]:
    """Yield every descendant of ``node`` in document order (pre-order)."""
    stack = list(reversed(get_children(node)))
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(get_children(current)))


def element(tag: str, *children: Node | str, **attrs: str) -> ElementNode:
    """Build an element, wrapping bare strings in :class:`TextNode`.

    Intended for hosts and tests that assemble trees by hand.

    Examples
    --------
        >>> tree = element("p", "Hello ", element("b", "world"))
        >>> tree.tag, len(tree.children)
        ('p', 2)

    """
    nodes: list[Node] = [TextNode(child) if isinstance(child, str) else child for child in children]
    return ElementNode(tag, dict(attrs), nodes)


def document(*children: Node | str) -> ElementNode:
    """Build a root node holding ``children``."""
    return element(ROOT_TAG, *children)
