#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Identity-keyed side table for per-node data."""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

from tree2md.ast.nodes import Node

T = TypeVar("T")


class NodeMap(Generic[T]):
    """Map from node identity to a value.

    Nodes may come from any parser and need not be hashable, so entries are
    keyed by ``id(node)``. The node itself is held alongside the value, which
    keeps it alive and its id unique for as long as the entry exists.
    """

    def __init__(self) -> None:
        self._entries: dict[int, tuple[Node, T]] = {}

    def __setitem__(self, node: Node, value: T) -> None:
        self._entries[id(node)] = (node, value)

    def __getitem__(self, node: Node) -> T:
        return self._entries[id(node)][1]

    def __contains__(self, node: object) -> bool:
        return id(node) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Node]:
        return (node for node, _ in self._entries.values())

    def get(self, node: Node, default: T | None = None) -> T | None:
        entry = self._entries.get(id(node))
        return default if entry is None else entry[1]
