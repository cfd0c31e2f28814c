#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Registry of URLs used by reference-style links."""

from __future__ import annotations

from typing import Iterator


class UrlDefinitions:
    """Ordered set of link targets with stable 1-based indices.

    Examples
    --------
        >>> urls = UrlDefinitions()
        >>> urls.add_or_get("http://x"), urls.add_or_get("http://y"), urls.add_or_get("http://x")
        (1, 2, 1)

    """

    def __init__(self) -> None:
        self._urls: list[str] = []
        self._index: dict[str, int] = {}

    def add_or_get(self, url: str) -> int:
        """Register ``url`` if it is new and return its index."""
        index = self._index.get(url)
        if index is None:
            self._urls.append(url)
            index = self._index[url] = len(self._urls)
        return index

    def __len__(self) -> int:
        return len(self._urls)

    def __iter__(self) -> Iterator[str]:
        return iter(self._urls)

    def __bool__(self) -> bool:
        return bool(self._urls)

    def format_block(self) -> str:
        """Definition lines ``[n]: url``, one per URL in registration order."""
        return "\n".join(f"[{index}]: {url}" for index, url in enumerate(self._urls, start=1))
