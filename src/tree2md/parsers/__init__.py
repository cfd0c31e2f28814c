#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Input adapters building node trees."""

from tree2md.parsers.html import parse_html, soup_to_tree

__all__ = ["parse_html", "soup_to_tree"]
