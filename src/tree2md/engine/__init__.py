#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Rendering engine: preservation analysis, metadata, visitor and post-processing."""

from tree2md.engine.buffer import OutputBuffer
from tree2md.engine.metadata import ListCounter, MetadataStore, NodeMetadata, derive_metadata
from tree2md.engine.nodemap import NodeMap
from tree2md.engine.postprocess import collapse_newlines, finalize_markdown
from tree2md.engine.preservation import analyze_preservation
from tree2md.engine.references import UrlDefinitions
from tree2md.engine.text import TrailingWhitespaceStats, normalize_text, trim_newlines
from tree2md.engine.visitor import Visitor

__all__ = [
    "ListCounter",
    "MetadataStore",
    "NodeMap",
    "NodeMetadata",
    "OutputBuffer",
    "TrailingWhitespaceStats",
    "UrlDefinitions",
    "Visitor",
    "analyze_preservation",
    "collapse_newlines",
    "derive_metadata",
    "finalize_markdown",
    "normalize_text",
    "trim_newlines",
]
