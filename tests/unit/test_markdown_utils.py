"""Unit tests for Markdown text helpers."""

import pytest

from tree2md.utils.markdown import (
    code_fence_for,
    code_span,
    collapse_line_breaks,
    count_table_cells,
    encode_link_url,
    escape_alt_text,
    escape_link_title,
    prefix_lines,
    surround,
    table_cell_text,
)


@pytest.mark.unit
class TestSurround:
    """Tests for delimiter wrapping."""

    def test_whitespace_stays_outside(self):
        assert surround(" bold ", "**") == " **bold** "

    def test_nested_same_delimiter_is_dropped(self):
        assert surround("a **b** c", "**") == "**a b c**"

    def test_escaped_delimiter_is_kept(self):
        assert surround("a \\_b", "_") == "_a \\_b_"

    def test_each_line_wrapped(self):
        assert surround("one\ntwo", "_") == "_one_\n_two_"

    def test_blank_lines_untouched(self):
        assert surround("one\n\ntwo", "~~") == "~~one~~\n\n~~two~~"


@pytest.mark.unit
class TestCodeHelpers:
    """Tests for inline code spans and fences."""

    @pytest.mark.parametrize(
        "content, expected",
        [
            ("a", "`a`"),
            ("a ` b", "``a ` b``"),
            ("`tick", "`` `tick ``"),
            ("a `` b", "```a `` b```"),
            (" a ", "`  a  `"),
        ],
    )
    def test_code_span(self, content, expected):
        assert code_span(content) == expected

    def test_fence_lengthened_past_content(self):
        assert code_fence_for("```\ncode\n```", "```") == "````"
        assert code_fence_for("plain", "```") == "```"
        assert code_fence_for("~~~~~", "~~~") == "~~~~~~"


@pytest.mark.unit
class TestLineHelpers:
    """Tests for prefixing and flattening lines."""

    def test_prefix_lines(self):
        assert prefix_lines("a\n\nb", "> ", ">") == "> a\n>\n> b"

    def test_prefix_lines_default_blank_prefix(self):
        assert prefix_lines("a\n", "- ") == "- a\n- "

    def test_collapse_line_breaks(self):
        assert collapse_line_breaks("a \n\n  b\nc") == "a b c"
        assert collapse_line_breaks("a\nb", "<br>") == "a<br>b"


@pytest.mark.unit
class TestLinkHelpers:
    """Tests for link targets, titles and alt text."""

    def test_encode_link_url(self):
        assert encode_link_url(" https://x.org/a_(b)*c d ") == "https://x.org/a%5F%28b%29%2Ac%20d"

    def test_escape_link_title(self):
        assert escape_link_title('say "hi"') == 'say \\"hi\\"'

    def test_escape_alt_text(self):
        assert escape_alt_text("a [b]\nc") == "a \\[b\\] c"


@pytest.mark.unit
class TestTableHelpers:
    """Tests for table cell text."""

    def test_cell_text(self):
        assert table_cell_text("  a|b \n\n c ") == "a\\|b<br>c"

    def test_already_escaped_pipe(self):
        assert table_cell_text("a\\|b") == "a\\|b"

    def test_count_cells(self):
        assert count_table_cells("| a | b |") == 2
        assert count_table_cells("| a\\|b |") == 1
        assert count_table_cells("") == 0
