"""Unit tests for ConversionOptions."""

import re

import pytest

from tree2md.constants import CODE_BLOCK_STYLES, LINK_STYLES
from tree2md.exceptions import ValidationError
from tree2md.options import ConversionOptions, compile_escape_rule


@pytest.mark.unit
class TestConversionOptionsDefaults:
    """Tests for default values and cloning."""

    def test_defaults(self):
        options = ConversionOptions()
        assert options.bullet_marker == "*"
        assert options.code_fence == "```"
        assert options.max_consecutive_newlines == 3
        assert options.use_inline_links
        assert not options.use_link_reference_definitions
        assert "script" in options.ignore
        assert "p" in options.block_elements

    def test_escape_rules_are_compiled_multiline(self):
        pattern, _ = ConversionOptions().line_start_escape
        assert isinstance(pattern, re.Pattern)
        assert pattern.flags & re.MULTILINE

    def test_create_updated_returns_new_instance(self):
        options = ConversionOptions()
        updated = options.create_updated(bullet_marker="-")
        assert updated.bullet_marker == "-"
        assert options.bullet_marker == "*"
        assert updated.global_escape[0].pattern == options.global_escape[0].pattern

    def test_frozen(self):
        options = ConversionOptions()
        with pytest.raises(AttributeError):
            options.bullet_marker = "-"

    def test_tag_lists_are_lower_cased(self):
        options = ConversionOptions(ignore=["SCRIPT"], block_elements=["P", "Div"])
        assert options.ignore == ("script",)
        assert options.block_elements == ("p", "div")


@pytest.mark.unit
class TestConversionOptionsValidation:
    """Tests for rejected values."""

    @pytest.mark.parametrize("value", [-1, True, 2.5, "3"])
    def test_max_consecutive_newlines(self, value):
        with pytest.raises(ValidationError) as exc_info:
            ConversionOptions(max_consecutive_newlines=value)
        assert exc_info.value.parameter_name == "max_consecutive_newlines"

    def test_none_disables_collapsing(self):
        assert ConversionOptions(max_consecutive_newlines=None).max_consecutive_newlines is None

    def test_code_block_style(self):
        with pytest.raises(ValidationError):
            ConversionOptions(code_block_style="tabbed")

    @pytest.mark.parametrize("fence", ["``", "`~`", "'''", ""])
    def test_code_fence(self, fence):
        with pytest.raises(ValidationError):
            ConversionOptions(code_fence=fence)

    def test_tilde_fence_allowed(self):
        assert ConversionOptions(code_fence="~~~~").code_fence == "~~~~"

    def test_empty_delimiter(self):
        with pytest.raises(ValidationError):
            ConversionOptions(em_delimiter="")

    def test_tag_list_must_not_be_string(self):
        with pytest.raises(ValidationError):
            ConversionOptions(ignore="script")

    def test_invalid_pattern(self):
        with pytest.raises(ValidationError) as exc_info:
            ConversionOptions(text_replace=(("(unclosed", "x"),))
        assert exc_info.value.original_error is not None

    def test_escape_rule_must_be_pair(self):
        with pytest.raises(ValidationError):
            compile_escape_rule(("a", "b", "c"), "global_escape")

    def test_replacement_must_be_string(self):
        with pytest.raises(ValidationError):
            compile_escape_rule(("a", 1), "global_escape")


@pytest.mark.unit
class TestConversionOptionsFromDict:
    """Tests for building options from configuration mappings."""

    def test_dashed_keys(self):
        options = ConversionOptions.from_dict({"bullet-marker": "-", "max_consecutive_newlines": 2})
        assert options.bullet_marker == "-"
        assert options.max_consecutive_newlines == 2

    @pytest.mark.parametrize("style, expected", [("inline", False), ("reference", True)])
    def test_link_style(self, style, expected):
        assert ConversionOptions.from_dict({"link_style": style}).use_link_reference_definitions is expected

    def test_invalid_link_style(self):
        with pytest.raises(ValidationError):
            ConversionOptions.from_dict({"link_style": "footnote"})

    def test_unknown_key(self):
        with pytest.raises(ValidationError, match="Unknown option"):
            ConversionOptions.from_dict({"bullet": "-"})

    def test_lists_from_config_files(self):
        options = ConversionOptions.from_dict(
            {"ignore": ["nav"], "text_replace": [["foo", "bar"]], "global_escape": ["[*]", "\\\\\\g<0>"]}
        )
        assert options.ignore == ("nav",)
        assert options.text_replace[0][1] == "bar"
        assert options.global_escape[0].pattern == "[*]"

    @pytest.mark.parametrize("style", LINK_STYLES)
    def test_every_link_style_accepted(self, style):
        ConversionOptions.from_dict({"link_style": style})

    def test_style_choices(self):
        assert LINK_STYLES == ("inline", "reference")
        assert CODE_BLOCK_STYLES == ("fenced", "indented")
