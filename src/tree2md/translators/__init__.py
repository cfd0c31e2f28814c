#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Translator rules and the default rule table."""

from tree2md.translators.base import (
    PostProcessHook,
    PostProcessResult,
    TranslatorCollection,
    TranslatorConfig,
    TranslatorContext,
    TranslatorFactory,
    TranslatorRule,
    rule_from_mapping,
    translator_factory,
)
from tree2md.translators.defaults import (
    create_code_block_translators,
    create_default_translators,
    create_inline_translators,
)
from tree2md.translators.tables import create_table_translators

__all__ = [
    "PostProcessHook",
    "PostProcessResult",
    "TranslatorCollection",
    "TranslatorConfig",
    "TranslatorContext",
    "TranslatorFactory",
    "TranslatorRule",
    "create_code_block_translators",
    "create_default_translators",
    "create_inline_translators",
    "create_table_translators",
    "rule_from_mapping",
    "translator_factory",
]
