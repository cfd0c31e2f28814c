#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/translators/tables.py
"""GFM pipe table rules.

Rows render as ``| a | b |`` lines through the ``tr``/``th``/``td`` rules.
The table rule then reads the table node (from its ``table_context``
metadata) to learn the column count and alignment, pads short rows and
inserts the delimiter row after the header.

"""

from __future__ import annotations

import re
from typing import Iterator, Mapping

from tree2md.ast.nodes import ElementNode
from tree2md.engine.text import collapse_whitespace, is_whitespace_only
from tree2md.translators.base import (
    PostProcessResult,
    TranslatorCollection,
    TranslatorConfig,
    TranslatorContext,
    TranslatorRule,
)
from tree2md.utils.markdown import count_table_cells, table_cell_text

_ROW_GROUPS = ("thead", "tbody", "tfoot")
_TEXT_ALIGN = re.compile(r"text-align\s*:\s*(left|right|center)", re.IGNORECASE)
_CELL_SEPARATOR = re.compile(r"[^\S\r\n]*(?<!\\)\|[^\S\r\n]*")
_DELIMITERS = {
    None: "---",
    "left": ":---",
    "right": "---:",
    "center": ":---:",
}


def iter_table_rows(table: ElementNode) -> Iterator[ElementNode]:
    """Yield the rows of ``table``, looking inside row groups but not nested tables."""
    for child in table.children:
        if not isinstance(child, ElementNode):
            continue
        if child.tag == "tr":
            yield child
        elif child.tag in _ROW_GROUPS:
            yield from child.find_children("tr")


def row_cells(row: ElementNode) -> list[ElementNode]:
    return [cell for cell in row.children if isinstance(cell, ElementNode) and cell.tag in ("th", "td")]


def cell_alignment(cell: ElementNode) -> str | None:
    """Alignment from the ``align`` attribute or an inline ``text-align`` style."""
    align = (cell.get_attribute("align") or "").strip().lower()
    if align in ("left", "right", "center"):
        return align
    match = _TEXT_ALIGN.search(cell.get_attribute("style") or "")
    return match.group(1).lower() if match else None


def table_layout(table: ElementNode) -> tuple[int, list[str | None]]:
    """Column count and per-column alignment (taken from the first row)."""
    rows = list(iter_table_rows(table))
    if not rows:
        return 0, []
    columns = max(len(row_cells(row)) for row in rows)
    alignments: list[str | None] = [cell_alignment(cell) for cell in row_cells(rows[0])]
    alignments += [None] * (columns - len(alignments))
    return columns, alignments


def _caption(table: ElementNode) -> str:
    captions = table.find_children("caption")
    return collapse_whitespace(captions[0].text_content).strip() if captions else ""


def _finish_table(ctx: TranslatorContext) -> str | PostProcessResult:
    content = ctx.content or ""
    rows = [line for line in content.split("\n") if line.strip()]
    if not rows:
        return PostProcessResult.REMOVE_NODE

    table = ctx.metadata.table_context if ctx.metadata is not None and ctx.metadata.table_context else ctx.node
    columns, alignments = table_layout(table)
    columns = max(columns, *(count_table_cells(row) for row in rows))
    alignments += [None] * (columns - len(alignments))

    padded = [row + "  |" * (columns - count_table_cells(row)) for row in rows]
    delimiter = "|" + "|".join(f" {_DELIMITERS[alignment]} " for alignment in alignments) + "|"
    lines = [padded[0], delimiter, *padded[1:]]

    caption = _caption(table)
    if caption:
        lines.insert(0, f"{ctx.options.em_delimiter}{caption}{ctx.options.em_delimiter}\n")
    return "\n".join(lines)


def _finish_cell(ctx: TranslatorContext) -> str:
    return table_cell_text(ctx.content or "")


def _finish_row(ctx: TranslatorContext) -> str | PostProcessResult:
    content = ctx.content or ""
    if is_whitespace_only(content):
        return PostProcessResult.REMOVE_NODE
    # Whitespace text between cells must not widen the separators
    return " " + _CELL_SEPARATOR.sub(" | ", content.strip()).rstrip()


TABLE_ROW = TranslatorConfig(prefix="|", surrounding_newlines=1, postprocess=_finish_row)
TABLE_CELL = TranslatorConfig(prefix=" ", postfix=" |", preserve_if_empty=True, postprocess=_finish_cell)


def create_table_rule(table_translators: Mapping[str, TranslatorRule]) -> TranslatorConfig:
    """Table rule rendering descendants with ``table_translators``."""
    return TranslatorConfig(surrounding_newlines=2, child_translators=table_translators, postprocess=_finish_table)


def create_table_translators(inline_rules: Mapping[str, TranslatorRule]) -> TranslatorCollection:
    """Rule table active inside tables: inline rules plus row and cell rules."""
    translators = TranslatorCollection(inline_rules)
    translators["tr"] = TABLE_ROW
    translators["th,td"] = TABLE_CELL
    translators["br"] = TranslatorConfig(content="<br>", recurse=False)
    translators["caption"] = TranslatorConfig(ignore=True)
    return translators
