"""Unit tests for the output buffer and trailing whitespace tracking."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from tree2md.engine.buffer import OutputBuffer
from tree2md.engine.text import TrailingWhitespaceStats, trailing_whitespace_info


@pytest.mark.unit
class TestTrailingWhitespaceInfo:
    """Tests for the backward whitespace scan."""

    def test_no_trailing_whitespace(self):
        assert trailing_whitespace_info("abc") == TrailingWhitespaceStats(0, 0)

    def test_counts_spaces_and_newlines(self):
        assert trailing_whitespace_info("a \n\t\n") == TrailingWhitespaceStats(4, 2)

    def test_crlf_counts_as_one_line_break(self):
        assert trailing_whitespace_info("a\r\n\r\n") == TrailingWhitespaceStats(4, 2)

    def test_all_whitespace(self):
        assert trailing_whitespace_info("\n \n") == TrailingWhitespaceStats(3, 2)

    def test_empty(self):
        assert trailing_whitespace_info("") == TrailingWhitespaceStats(0, 0)


@pytest.mark.unit
class TestOutputBuffer:
    """Tests for appending, newline requests and rollback."""

    def test_append_and_position(self):
        buffer = OutputBuffer()
        buffer.append("Hello")
        assert buffer.text == "Hello"
        assert buffer.position == 5
        assert len(buffer) == 5

    def test_newline_requests_do_not_stack(self):
        buffer = OutputBuffer()
        buffer.append("Hello")
        buffer.append_newlines(2)
        buffer.append_newlines(2)
        buffer.append_newlines(1)
        assert buffer.text == "Hello\n\n"

    def test_newline_request_writes_only_missing_breaks(self):
        buffer = OutputBuffer()
        buffer.append("a\n")
        buffer.append_newlines(2)
        assert buffer.text == "a\n\n"

    def test_trailing_spaces_do_not_count_as_newlines(self):
        buffer = OutputBuffer()
        buffer.append("a  ")
        buffer.append_newlines(1)
        assert buffer.text == "a  \n"
        assert buffer.trailing_stats == TrailingWhitespaceStats(3, 1)

    def test_truncate_restores_stats(self):
        buffer = OutputBuffer()
        buffer.append("a")
        checkpoint = buffer.position
        buffer.append("\n\n")
        buffer.append("nested")
        buffer.truncate(checkpoint)
        assert buffer.text == "a"
        assert buffer.trailing_stats == TrailingWhitespaceStats(0, 0)

    def test_append_with_truncate_replaces_tail(self):
        buffer = OutputBuffer()
        buffer.append("prefix ")
        start = buffer.position
        buffer.append("raw content")
        buffer.append("RESULT", truncate_to=start)
        assert buffer.text == "prefix RESULT"

    def test_truncate_with_empty_text(self):
        buffer = OutputBuffer()
        buffer.append("keep")
        buffer.append("drop")
        buffer.append("", truncate_to=4)
        assert buffer.text == "keep"

    def test_truncate_out_of_range(self):
        buffer = OutputBuffer()
        buffer.append("abc")
        with pytest.raises(ValueError):
            buffer.truncate(10)
        with pytest.raises(ValueError):
            buffer.truncate(-1)

    def test_space_if_repeating_char(self):
        buffer = OutputBuffer()
        buffer.append("**a**")
        buffer.append("**b**", space_if_repeating_char=True)
        assert buffer.text == "**a** **b**"

    def test_space_only_for_matching_char(self):
        buffer = OutputBuffer()
        buffer.append("a")
        buffer.append("**b**", space_if_repeating_char=True)
        assert buffer.text == "a**b**"

    def test_space_not_added_to_empty_buffer(self):
        buffer = OutputBuffer()
        buffer.append("*x*", space_if_repeating_char=True)
        assert buffer.text == "*x*"

    def test_cr_and_lf_split_across_writes(self):
        buffer = OutputBuffer()
        buffer.append("a\r")
        buffer.append("\n")
        assert buffer.trailing_stats == TrailingWhitespaceStats(2, 1)
        buffer.append_newlines(1)
        assert buffer.text == "a\r\n"

    def test_slice_from(self):
        buffer = OutputBuffer()
        buffer.append("abc")
        buffer.append("def")
        assert buffer.slice_from(3) == "def"


@pytest.mark.unit
class TestOutputBufferProperties:
    """Property tests: incremental stats always equal a full rescan."""

    @given(st.lists(st.text(alphabet="ab \t\r\n", max_size=6), max_size=12))
    def test_incremental_stats_match_rescan(self, chunks):
        buffer = OutputBuffer()
        for chunk in chunks:
            buffer.append(chunk)
            assert buffer.trailing_stats == trailing_whitespace_info(buffer.text)

    @given(
        st.lists(st.text(alphabet="ab \n", max_size=6), min_size=1, max_size=8),
        st.data(),
    )
    def test_truncate_then_append_matches_rescan(self, chunks, data):
        buffer = OutputBuffer()
        for chunk in chunks:
            buffer.append(chunk)
        position = data.draw(st.integers(min_value=0, max_value=buffer.position))
        buffer.append(data.draw(st.text(alphabet="ab \n", max_size=4)), truncate_to=position)
        assert buffer.trailing_stats == trailing_whitespace_info(buffer.text)

    @given(st.text(alphabet="ab \n", max_size=10), st.integers(min_value=0, max_value=2))
    def test_newline_request_guarantees_count(self, text, count):
        buffer = OutputBuffer()
        buffer.append(text)
        buffer.append_newlines(count)
        assert buffer.trailing_stats.newlines >= count
