#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for node tree to Markdown conversion.

Options are frozen dataclasses. Use :meth:`CloneFrozenMixin.create_updated`
to derive a modified copy, or :meth:`ConversionOptions.from_dict` to build
options from a loaded configuration mapping.
"""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Mapping, Pattern, Sequence, Tuple

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from tree2md.constants import (
    DEFAULT_BLOCK_ELEMENTS,
    DEFAULT_BULLET_MARKER,
    DEFAULT_CODE_BLOCK_STYLE,
    DEFAULT_CODE_FENCE,
    DEFAULT_EM_DELIMITER,
    DEFAULT_GLOBAL_ESCAPE,
    DEFAULT_HTML_PARSER,
    DEFAULT_IGNORE_ELEMENTS,
    DEFAULT_KEEP_DATA_IMAGES,
    DEFAULT_LINE_START_ESCAPE,
    DEFAULT_MAX_CONSECUTIVE_NEWLINES,
    DEFAULT_STRIKE_DELIMITER,
    DEFAULT_STRONG_DELIMITER,
    DEFAULT_USE_INLINE_LINKS,
    DEFAULT_USE_LINK_REFERENCE_DEFINITIONS,
    CODE_BLOCK_STYLES,
    LINK_STYLES,
    CodeBlockStyle,
    LinkStyleType,
)
from tree2md.exceptions import ValidationError

EscapeRule = Tuple[Pattern[str], str]


def compile_escape_rule(rule: Any, parameter_name: str) -> EscapeRule:
    """Compile a ``(pattern, replacement)`` pair.

    Patterns given as strings are compiled with ``re.MULTILINE`` so that
    ``^`` anchors match at every line start. Lists (as produced by JSON, YAML
    or TOML configuration) are accepted as well as tuples.

    Raises
    ------
    ValidationError
        If the rule is not a pair or the pattern does not compile.

    """
    if not isinstance(rule, (tuple, list)) or len(rule) != 2:
        raise ValidationError(
            f"{parameter_name} must be a (pattern, replacement) pair, got {rule!r}",
            parameter_name=parameter_name,
            parameter_value=rule,
        )
    pattern, replacement = rule
    if not isinstance(replacement, str):
        raise ValidationError(
            f"{parameter_name} replacement must be a string, got {type(replacement).__name__}",
            parameter_name=parameter_name,
            parameter_value=rule,
        )
    if isinstance(pattern, re.Pattern):
        return pattern, replacement
    try:
        return re.compile(pattern, re.MULTILINE), replacement
    except (re.error, TypeError) as e:
        raise ValidationError(
            f"{parameter_name} pattern {pattern!r} is invalid: {e}",
            parameter_name=parameter_name,
            parameter_value=rule,
            original_error=e,
        ) from e


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class ConversionOptions(CloneFrozenMixin):
    r"""Options controlling how a node tree is rendered as Markdown.

    Parameters
    ----------
    bullet_marker : str, default "*"
        Marker used for unordered list items.
    code_fence : str, default "```"
        Fence used for fenced code blocks. Lengthened automatically when the
        code itself contains a run of the fence character that long.
    code_block_style : {"fenced", "indented"}, default "fenced"
        How ``<pre>`` blocks are written.
    em_delimiter : str, default "_"
        Delimiter for emphasis.
    strong_delimiter : str, default "**"
        Delimiter for strong emphasis.
    strike_delimiter : str, default "~~"
        Delimiter for strikethrough.
    max_consecutive_newlines : int or None, default 3
        Longest allowed run of line breaks in the output. ``None`` disables
        collapsing.
    global_escape : tuple[Pattern, str]
        Escape applied to all text outside code.
    line_start_escape : tuple[Pattern, str]
        Escape applied to constructs that are only special at a line start.
    text_replace : tuple[tuple[Pattern, str], ...]
        Extra ``(pattern, replacement)`` pairs applied after escaping, in order.
    use_inline_links : bool, default True
        Write ``<url>`` when a link's text equals its target.
    use_link_reference_definitions : bool, default False
        Write ``[text][n]`` links with ``[n]: url`` definitions appended.
    keep_data_images : bool, default False
        Keep images whose source is a ``data:`` URI.
    ignore : tuple[str, ...]
        Tags that are dropped together with their content.
    block_elements : tuple[str, ...]
        Tags rendered as blocks separated by blank lines.
    html_parser : str, default "html.parser"
        BeautifulSoup parser backend used by the HTML adapter.

    Examples
    --------
        >>> options = ConversionOptions(bullet_marker="-")
        >>> options.create_updated(max_consecutive_newlines=2).bullet_marker
        '-'

    """

    bullet_marker: str = field(
        default=DEFAULT_BULLET_MARKER,
        metadata={"help": "Marker for unordered list items", "cli_name": "bullet-marker"},
    )
    code_fence: str = field(
        default=DEFAULT_CODE_FENCE,
        metadata={"help": "Fence for fenced code blocks"},
    )
    code_block_style: CodeBlockStyle = field(
        default=DEFAULT_CODE_BLOCK_STYLE,
        metadata={"help": "Code block style", "choices": ["fenced", "indented"]},
    )
    em_delimiter: str = field(
        default=DEFAULT_EM_DELIMITER,
        metadata={"help": "Delimiter for emphasis"},
    )
    strong_delimiter: str = field(
        default=DEFAULT_STRONG_DELIMITER,
        metadata={"help": "Delimiter for strong emphasis"},
    )
    strike_delimiter: str = field(
        default=DEFAULT_STRIKE_DELIMITER,
        metadata={"help": "Delimiter for strikethrough"},
    )
    max_consecutive_newlines: int | None = field(
        default=DEFAULT_MAX_CONSECUTIVE_NEWLINES,
        metadata={"help": "Maximum consecutive line breaks in output (None disables collapsing)", "type": int},
    )
    global_escape: EscapeRule = field(
        default=DEFAULT_GLOBAL_ESCAPE,  # type: ignore[assignment]
        metadata={"help": "(pattern, replacement) escape applied to all text"},
    )
    line_start_escape: EscapeRule = field(
        default=DEFAULT_LINE_START_ESCAPE,  # type: ignore[assignment]
        metadata={"help": "(pattern, replacement) escape applied at line starts"},
    )
    text_replace: tuple[EscapeRule, ...] = field(
        default=(),
        metadata={"help": "Custom (pattern, replacement) pairs applied after escaping"},
    )
    use_inline_links: bool = field(
        default=DEFAULT_USE_INLINE_LINKS,
        metadata={"help": "Use <url> autolinks when link text equals the target"},
    )
    use_link_reference_definitions: bool = field(
        default=DEFAULT_USE_LINK_REFERENCE_DEFINITIONS,
        metadata={"help": "Use reference-style links with definitions at the end"},
    )
    keep_data_images: bool = field(
        default=DEFAULT_KEEP_DATA_IMAGES,
        metadata={"help": "Keep images with data: URIs"},
    )
    ignore: tuple[str, ...] = field(
        default=DEFAULT_IGNORE_ELEMENTS,
        metadata={"help": "Tags dropped together with their content"},
    )
    block_elements: tuple[str, ...] = field(
        default=DEFAULT_BLOCK_ELEMENTS,
        metadata={"help": "Tags rendered as blank-line separated blocks"},
    )
    html_parser: str = field(
        default=DEFAULT_HTML_PARSER,
        metadata={"help": "BeautifulSoup parser backend", "choices": ["html.parser", "lxml", "html5lib"]},
    )

    def __post_init__(self) -> None:
        """Compile escape rules and validate value ranges.

        Raises
        ------
        ValidationError
            If any field value is outside its valid range.

        """
        # Frozen dataclass: normalised values are written through object.__setattr__
        object.__setattr__(self, "global_escape", compile_escape_rule(self.global_escape, "global_escape"))
        object.__setattr__(
            self, "line_start_escape", compile_escape_rule(self.line_start_escape, "line_start_escape")
        )
        object.__setattr__(
            self,
            "text_replace",
            tuple(compile_escape_rule(rule, "text_replace") for rule in self.text_replace),
        )
        object.__setattr__(self, "ignore", _normalize_tags(self.ignore, "ignore"))
        object.__setattr__(self, "block_elements", _normalize_tags(self.block_elements, "block_elements"))

        if self.max_consecutive_newlines is not None and (
            isinstance(self.max_consecutive_newlines, bool)
            or not isinstance(self.max_consecutive_newlines, int)
            or self.max_consecutive_newlines < 0
        ):
            raise ValidationError(
                f"max_consecutive_newlines must be a non-negative integer or None, "
                f"got {self.max_consecutive_newlines!r}",
                parameter_name="max_consecutive_newlines",
                parameter_value=self.max_consecutive_newlines,
            )
        if self.code_block_style not in CODE_BLOCK_STYLES:
            raise ValidationError(
                f"code_block_style must be 'fenced' or 'indented', got {self.code_block_style!r}",
                parameter_name="code_block_style",
                parameter_value=self.code_block_style,
            )
        for name in ("bullet_marker", "code_fence", "em_delimiter", "strong_delimiter", "strike_delimiter"):
            if not getattr(self, name):
                raise ValidationError(f"{name} must not be empty", parameter_name=name, parameter_value="")
        if len(set(self.code_fence)) != 1 or self.code_fence[0] not in "`~" or len(self.code_fence) < 3:
            raise ValidationError(
                f"code_fence must be three or more backticks or tildes, got {self.code_fence!r}",
                parameter_name="code_fence",
                parameter_value=self.code_fence,
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ConversionOptions:
        """Build options from a configuration mapping.

        Keys may use dashes or underscores. ``link_style`` ("inline" or
        "reference") is accepted as a shorthand for
        ``use_link_reference_definitions``.

        Raises
        ------
        ValidationError
            If the mapping contains unknown keys or invalid values.

        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for raw_key, value in data.items():
            key = str(raw_key).replace("-", "_")
            if key == "link_style":
                if value not in LINK_STYLES:
                    raise ValidationError(
                        f"link_style must be 'inline' or 'reference', got {value!r}",
                        parameter_name="link_style",
                        parameter_value=value,
                    )
                link_style: LinkStyleType = value
                kwargs["use_link_reference_definitions"] = link_style == "reference"
                continue
            if key not in known:
                raise ValidationError(f"Unknown option: {raw_key}", parameter_name=str(raw_key), parameter_value=value)
            if key in ("ignore", "block_elements") and isinstance(value, (list, tuple)):
                value = tuple(value)
            elif key == "text_replace" and isinstance(value, (list, tuple)):
                value = tuple(tuple(rule) if isinstance(rule, list) else rule for rule in value)
            kwargs[key] = value
        return cls(**kwargs)


def _normalize_tags(tags: Sequence[str], parameter_name: str) -> tuple[str, ...]:
    if isinstance(tags, str):
        raise ValidationError(
            f"{parameter_name} must be a sequence of tag names, not a string",
            parameter_name=parameter_name,
            parameter_value=tags,
        )
    return tuple(tag.lower() for tag in tags)
