#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/translators/base.py
"""Translator rules: how a single tag is rendered.

A rule is one of two variants:

- :class:`TranslatorConfig`, a static, declarative rule.
- :class:`TranslatorFactory`, a function of the rendering context that
  returns a :class:`TranslatorConfig`, merged over a declared base rule.

Both variants expose :meth:`resolve`, so the engine never inspects which one
it holds. Rules are trusted configuration; anything malformed raises
:class:`~tree2md.exceptions.TranslatorConfigError` as soon as it is built or
resolved.

"""

from __future__ import annotations

import enum
import functools
from collections.abc import MutableMapping
from dataclasses import dataclass, field, fields, replace
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Iterable, Iterator, Mapping, Optional, Union

from tree2md.exceptions import TranslatorConfigError

if TYPE_CHECKING:
    from tree2md.ast.nodes import ElementNode
    from tree2md.engine.metadata import NodeMetadata
    from tree2md.engine.references import UrlDefinitions
    from tree2md.options import ConversionOptions


class PostProcessResult(enum.Enum):
    """Sentinels a post-render hook may return instead of text."""

    REMOVE_NODE = "remove_node"
    """Discard everything the node wrote: newlines, prefix, content and postfix."""


@dataclass(frozen=True)
class TranslatorContext:
    """What a factory or post-render hook gets to see.

    Attributes
    ----------
    node : ElementNode
        The element being rendered
    metadata : NodeMetadata or None
        Inherited rendering context, already updated for this element
    options : ConversionOptions
        Conversion options of the run
    url_definitions : UrlDefinitions
        Reference link registry of the run
    content : str or None
        Rendered children; only set for post-render hooks

    """

    node: ElementNode
    metadata: Optional[NodeMetadata]
    options: ConversionOptions
    url_definitions: UrlDefinitions
    content: Optional[str] = None

    def with_content(self, content: str) -> TranslatorContext:
        """Copy of this context carrying the rendered children."""
        return replace(self, content=content)


PostProcessHook = Callable[[TranslatorContext], Union[str, PostProcessResult, None]]


def _record_explicit_fields(cls):
    """Remember which keyword arguments each instance was built with."""
    generated_init = cls.__init__

    @functools.wraps(generated_init)
    def __init__(self, **kwargs: Any) -> None:
        generated_init(self, **kwargs)
        object.__setattr__(self, "_explicit_fields", frozenset(kwargs))

    cls.__init__ = __init__
    return cls


@_record_explicit_fields
@dataclass(frozen=True, kw_only=True)
class TranslatorConfig:
    """Static rendering rule for a tag.

    Parameters
    ----------
    ignore : bool, default False
        Drop the element and its content
    prefix : str, default ""
        Written before the content
    postfix : str, default ""
        Written after the content
    content : str, optional
        Literal output replacing the children
    surrounding_newlines : int, default 0
        Line breaks required before and after the element (0, 1 or 2)
    recurse : bool, default True
        When false, descendants are visited for their structural effects
        but only their text is written, without applying element rules
    no_escape : bool, default False
        Disable escaping for text inside the element
    child_translators : mapping, optional
        Rule table replacing the active one for all descendants
    space_if_repeating_char : bool, default False
        Separate output from an identical preceding character with a space
    preserve_if_empty : bool, default False
        Render the element even when it has no children
    postprocess : callable, optional
        Hook receiving the rendered children; may return replacement text,
        :attr:`PostProcessResult.REMOVE_NODE` or ``None`` to keep the output

    Notes
    -----
    Fields are keyword-only. A rule remembers which fields were passed
    explicitly; when a factory result is merged over its base, exactly those
    fields win, default values such as ``ignore=False`` or
    ``surrounding_newlines=0`` included.

    """

    is_factory: ClassVar[bool] = False
    _explicit_fields: ClassVar[frozenset[str]] = frozenset()

    ignore: bool = False
    prefix: str = ""
    postfix: str = ""
    content: Optional[str] = None
    surrounding_newlines: int = 0
    recurse: bool = True
    no_escape: bool = False
    child_translators: Optional[Mapping[str, TranslatorRule]] = None
    space_if_repeating_char: bool = False
    preserve_if_empty: bool = False
    postprocess: Optional[PostProcessHook] = None

    def __post_init__(self) -> None:
        if self.content is not None and self.postprocess is not None:
            raise TranslatorConfigError(
                "a rule with literal content cannot declare a postprocess hook",
                parameter_name="postprocess",
                parameter_value=self.postprocess,
            )
        if self.content is not None and not isinstance(self.content, str):
            raise TranslatorConfigError(
                f"content must be a string, got {type(self.content).__name__}",
                parameter_name="content",
                parameter_value=self.content,
            )
        if (
            isinstance(self.surrounding_newlines, bool)
            or not isinstance(self.surrounding_newlines, int)
            or not 0 <= self.surrounding_newlines <= 2
        ):
            raise TranslatorConfigError(
                f"surrounding_newlines must be 0, 1 or 2, got {self.surrounding_newlines!r}",
                parameter_name="surrounding_newlines",
                parameter_value=self.surrounding_newlines,
            )
        if self.postprocess is not None and not callable(self.postprocess):
            raise TranslatorConfigError(
                "postprocess must be callable", parameter_name="postprocess", parameter_value=self.postprocess
            )

    def resolve(self, context: TranslatorContext) -> TranslatorConfig:
        """Return the effective rule; a static rule is its own result."""
        return self

    def merged_over(self, base: TranslatorConfig) -> TranslatorConfig:
        """Overlay every field this rule was given explicitly onto ``base``."""
        overrides = {name: getattr(self, name) for name in self._explicit_fields}
        return replace(base, **overrides) if overrides else base


@dataclass(frozen=True)
class TranslatorFactory:
    """Dynamic rendering rule computed per element.

    Parameters
    ----------
    compute : callable
        Function of a :class:`TranslatorContext` returning a
        :class:`TranslatorConfig`, or ``None`` to use ``base`` as is
    base : TranslatorConfig
        Rule the computed one is merged over

    Examples
    --------
        >>> heading = TranslatorFactory(
        ...     lambda ctx: TranslatorConfig(prefix="#" * int(ctx.node.tag[1]) + " "),
        ...     base=TranslatorConfig(surrounding_newlines=2),
        ... )

    """

    is_factory: ClassVar[bool] = True

    compute: Callable[[TranslatorContext], Optional[TranslatorConfig]]
    base: TranslatorConfig = field(default_factory=TranslatorConfig)

    def __post_init__(self) -> None:
        if not callable(self.compute):
            raise TranslatorConfigError("factory compute must be callable", parameter_value=self.compute)

    @property
    def preserve_if_empty(self) -> bool:
        return self.base.preserve_if_empty

    def resolve(self, context: TranslatorContext) -> TranslatorConfig:
        """Compute the rule for ``context.node`` and merge it over ``base``."""
        computed = self.compute(context)
        if computed is None:
            return self.base
        if not isinstance(computed, TranslatorConfig):
            raise TranslatorConfigError(
                f"factory returned {type(computed).__name__}, expected TranslatorConfig",
                tag=context.node.tag,
                parameter_value=computed,
            )
        return computed.merged_over(self.base)


TranslatorRule = Union[TranslatorConfig, TranslatorFactory]


def translator_factory(
    base: TranslatorConfig | None = None,
) -> Callable[[Callable[[TranslatorContext], Optional[TranslatorConfig]]], TranslatorFactory]:
    """Decorator turning a compute function into a :class:`TranslatorFactory`.

    Examples
    --------
        >>> @translator_factory(base=TranslatorConfig(surrounding_newlines=2))
        ... def aside(ctx):
        ...     return TranslatorConfig(prefix=ctx.node.get_attribute("title", "") + ": ")

    """

    def decorator(compute: Callable[[TranslatorContext], Optional[TranslatorConfig]]) -> TranslatorFactory:
        return TranslatorFactory(compute, base or TranslatorConfig())

    return decorator


def _split_keys(keys: str) -> list[str]:
    return [key.strip().lower() for key in keys.split(",") if key.strip()]


class TranslatorCollection(MutableMapping):
    """Mapping from tag name to rule.

    Keys may name several tags at once, separated by commas
    (``"strong,b"``); each tag gets its own entry. Tags are case-insensitive.

    Examples
    --------
        >>> translators = TranslatorCollection({"strong,b": TranslatorConfig(prefix="**", postfix="**")})
        >>> sorted(translators)
        ['b', 'strong']

    """

    def __init__(self, rules: Mapping[str, TranslatorRule] | Iterable[tuple[str, TranslatorRule]] | None = None):
        self._rules: dict[str, TranslatorRule] = {}
        if rules is not None:
            self.update(rules)

    def __setitem__(self, keys: str, rule: TranslatorRule) -> None:
        if not isinstance(rule, (TranslatorConfig, TranslatorFactory)):
            raise TranslatorConfigError(
                f"expected TranslatorConfig or TranslatorFactory, got {type(rule).__name__}",
                tag=keys,
                parameter_value=rule,
            )
        tags = _split_keys(keys)
        if not tags:
            raise TranslatorConfigError("translator key names no tags", parameter_value=keys)
        for tag in tags:
            self._rules[tag] = rule

    def __getitem__(self, tag: str) -> TranslatorRule:
        return self._rules[tag.lower()]

    def __delitem__(self, keys: str) -> None:
        for tag in _split_keys(keys):
            del self._rules[tag]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"TranslatorCollection({sorted(self._rules)!r})"

    def copy(self) -> TranslatorCollection:
        return TranslatorCollection(self._rules)

    def merged(self, overrides: Mapping[str, TranslatorRule] | None) -> TranslatorCollection:
        """Copy of this collection with ``overrides`` applied on top."""
        result = self.copy()
        if overrides:
            result.update(overrides)
        return result

    def without(self, *keys: str) -> TranslatorCollection:
        """Copy of this collection with the given tags removed."""
        result = self.copy()
        for key in keys:
            for tag in _split_keys(key):
                result._rules.pop(tag, None)
        return result


def rule_from_mapping(data: Mapping[str, Any]) -> TranslatorConfig:
    """Build a static rule from a plain mapping (for example a config file entry)."""
    known = {f.name for f in fields(TranslatorConfig)}
    unknown = set(data) - known
    if unknown:
        raise TranslatorConfigError(f"unknown rule fields: {', '.join(sorted(unknown))}")
    return TranslatorConfig(**data)
