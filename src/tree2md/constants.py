#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the tree2md library.

Constants are organized by category:
1. Type Definitions - Literal types shared by options and translators
2. Markdown Formatting - delimiters, markers and fences
3. Escaping - default escape patterns applied to text nodes
4. Element Classification - contentless, block and ignored elements
"""

from __future__ import annotations

from typing import Literal, get_args

# =============================================================================
# Type Definitions
# =============================================================================

CodeBlockStyle = Literal["fenced", "indented"]
ListKind = Literal["ul", "ol"]
LinkStyleType = Literal["inline", "reference"]

CODE_BLOCK_STYLES: tuple[str, ...] = get_args(CodeBlockStyle)
LINK_STYLES: tuple[str, ...] = get_args(LinkStyleType)

# =============================================================================
# Markdown Formatting
# =============================================================================

DEFAULT_BULLET_MARKER = "*"
DEFAULT_CODE_FENCE = "```"
DEFAULT_CODE_BLOCK_STYLE: CodeBlockStyle = "fenced"
DEFAULT_EM_DELIMITER = "_"
DEFAULT_STRONG_DELIMITER = "**"
DEFAULT_STRIKE_DELIMITER = "~~"
DEFAULT_MAX_CONSECUTIVE_NEWLINES = 3
DEFAULT_USE_INLINE_LINKS = True
DEFAULT_USE_LINK_REFERENCE_DEFINITIONS = False
DEFAULT_KEEP_DATA_IMAGES = False
DEFAULT_HTML_PARSER = "html.parser"

INDENTED_CODE_PREFIX = "    "
HARD_LINE_BREAK = "  \n"
THEMATIC_BREAK = "---"
TABLE_CELL_LINE_BREAK = "<br>"

# Maximum heading level supported by Markdown
MAX_HEADING_LEVEL = 6

# Characters percent-encoded in link targets so they cannot close the link early
LINK_URL_ENCODINGS = {
    "(": "%28",
    ")": "%29",
    "_": "%5F",
    "*": "%2A",
}

# =============================================================================
# Escaping
# =============================================================================

# (pattern, replacement) applied to every text run
DEFAULT_GLOBAL_ESCAPE = (r"[\\`*_~\[\]]", r"\\\g<0>")

# (pattern, replacement) for constructs that only matter at the start of a line:
# "+ ", "-", "=", ">", "# " headings and "1. " ordered list markers
DEFAULT_LINE_START_ESCAPE = (
    r"^(\s*?)((?:\+\s)|(?:[=>-])|(?:#{1,6}\s))|(?:(\d+)(\.\s))",
    r"\1\3\\\2\4",
)

# =============================================================================
# Element Classification
# =============================================================================

# Elements that render output without needing any children
CONTENTLESS_ELEMENTS = frozenset({"br", "hr", "img"})

DEFAULT_BLOCK_ELEMENTS = (
    "address",
    "article",
    "aside",
    "body",
    "center",
    "dd",
    "dir",
    "div",
    "dl",
    "dt",
    "fieldset",
    "figcaption",
    "figure",
    "footer",
    "form",
    "header",
    "hgroup",
    "html",
    "main",
    "menu",
    "nav",
    "p",
    "section",
)

DEFAULT_IGNORE_ELEMENTS = (
    "area",
    "audio",
    "button",
    "canvas",
    "datalist",
    "embed",
    "head",
    "input",
    "map",
    "meter",
    "noframes",
    "noscript",
    "object",
    "optgroup",
    "option",
    "param",
    "progress",
    "rp",
    "rt",
    "ruby",
    "script",
    "select",
    "style",
    "svg",
    "template",
    "textarea",
    "title",
    "video",
)

# =============================================================================
# Configuration discovery
# =============================================================================

CONFIG_FILENAMES = (".tree2md.toml", ".tree2md.yaml", ".tree2md.yml", ".tree2md.json")
ENV_VAR_PREFIX = "TREE2MD_"
