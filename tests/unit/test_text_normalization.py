"""Unit tests for whitespace handling and text escaping."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tree2md.ast.nodes import TextNode, trim_text
from tree2md.engine.metadata import NodeMetadata
from tree2md.engine.text import collapse_whitespace, is_whitespace_only, normalize_text, trim_newlines
from tree2md.options import ConversionOptions


@pytest.mark.unit
class TestTrimText:
    """Tests for edge trimming of text node content."""

    def test_inline_spaces_keep_one_space(self):
        assert trim_text("  Hello  ") == " Hello "

    def test_line_breaks_are_dropped(self):
        assert trim_text("\n  Hello\n") == " Hello"
        assert trim_text("\nHello\n") == "Hello"
        assert trim_text("\nHello  \n") == "Hello "

    def test_no_edge_whitespace(self):
        assert trim_text("Hello") == "Hello"

    def test_whitespace_only(self):
        assert trim_text(" \n ") == ""

    def test_text_node_properties(self):
        node = TextNode("  a b ")
        assert node.trimmed_text == " a b "
        assert not node.is_whitespace
        assert TextNode(" \n\t").is_whitespace

    def test_non_breaking_space_counts_as_whitespace(self):
        assert TextNode("\u00a0").is_whitespace


@pytest.mark.unit
class TestCollapseWhitespace:
    """Tests for whitespace collapsing."""

    def test_collapses_runs(self):
        assert collapse_whitespace("a  \n\t b") == "a b"

    @given(st.text(alphabet="ab \t\n", max_size=30))
    def test_idempotent(self, text):
        once = collapse_whitespace(text)
        assert collapse_whitespace(once) == once
        assert "  " not in once
        assert "\n" not in once


@pytest.mark.unit
class TestNormalizeText:
    """Tests for the escape pipeline applied to text nodes."""

    def test_global_escape(self, options):
        assert normalize_text("a*b_c`d", None, options) == "a\\*b\\_c\\`d"

    def test_brackets_and_tilde(self, options):
        assert normalize_text("[x]~", None, options) == "\\[x\\]\\~"

    def test_heading_marker_at_line_start(self, options):
        assert normalize_text("# Heading", None, options) == "\\# Heading"

    def test_ordered_list_marker(self, options):
        assert normalize_text("1. not a list", None, options) == "1\\. not a list"

    def test_dash_and_quote_at_line_start(self, options):
        assert normalize_text("- item", None, options) == "\\- item"
        assert normalize_text("> quote", None, options) == "\\> quote"

    def test_plus_needs_following_space(self, options):
        assert normalize_text("+ item", None, options) == "\\+ item"
        assert normalize_text("+1", None, options) == "+1"

    def test_hash_inside_text_is_kept(self, options):
        assert normalize_text("issue #5", None, options) == "issue #5"

    def test_no_escape_metadata(self, options):
        metadata = NodeMetadata(no_escape=True)
        assert normalize_text("a*b  c", metadata, options) == "a*b c"

    def test_preserve_whitespace_metadata(self, options):
        metadata = NodeMetadata(preserve_whitespace=True, no_escape=True)
        assert normalize_text("a  \n  b", metadata, options) == "a  \n  b"

    def test_text_replace_runs_in_order_after_escaping(self):
        options = ConversionOptions(text_replace=((r"foo", "bar"), (r"bar", "baz")))
        assert normalize_text("foo", None, options) == "baz"

    def test_text_replace_sees_escaped_text(self):
        options = ConversionOptions(text_replace=((r"\\\*", "(star)"),))
        assert normalize_text("a*b", None, options) == "a(star)b"

    def test_custom_global_escape(self):
        options = ConversionOptions(global_escape=(r"[*]", r"\\\g<0>"))
        assert normalize_text("a*b_c", None, options) == "a\\*b_c"


@pytest.mark.unit
class TestTrimNewlines:
    """Tests for stripping edge blank lines."""

    def test_strips_edge_blank_lines_keeps_indentation(self):
        assert trim_newlines("\n  \n    code\n\n") == "    code"

    def test_crlf(self):
        assert trim_newlines("\r\n\r\ntext\r\n") == "text"

    def test_inner_newlines_untouched(self):
        assert trim_newlines("a\n\n\nb") == "a\n\n\nb"

    def test_whitespace_only_helper(self):
        assert is_whitespace_only("")
        assert is_whitespace_only(" \n")
        assert not is_whitespace_only(" x ")
