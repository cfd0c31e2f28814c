#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/tree2md/engine/buffer.py
"""Append-only output buffer with rollback.

Writes only ever extend the text. A node's whole contribution is undone by
remembering :attr:`OutputBuffer.position` before the node writes anything and
truncating back to it later. The trailing whitespace run is tracked so that
requests for blank-line separation never stack.

"""

from __future__ import annotations

from tree2md.engine.text import TrailingWhitespaceStats, trailing_whitespace_info


class OutputBuffer:
    """Accumulates rendered Markdown for a single conversion run.

    Examples
    --------
        >>> buffer = OutputBuffer()
        >>> buffer.append("Hello")
        >>> buffer.append_newlines(2)
        >>> buffer.append_newlines(2)
        >>> buffer.text
        'Hello\\n\\n'

    """

    def __init__(self) -> None:
        self._text = ""
        self._stats = TrailingWhitespaceStats()

    @property
    def text(self) -> str:
        """Everything written so far."""
        return self._text

    @property
    def position(self) -> int:
        """Current length; a checkpoint for :meth:`truncate`."""
        return len(self._text)

    @property
    def trailing_stats(self) -> TrailingWhitespaceStats:
        """Whitespace and line break counts of the trailing whitespace run."""
        return self._stats

    def __len__(self) -> int:
        return len(self._text)

    def slice_from(self, position: int) -> str:
        """Return the text written since ``position``."""
        return self._text[position:]

    def append(self, text: str, truncate_to: int | None = None, space_if_repeating_char: bool = False) -> None:
        """Append ``text``, optionally rolling back to ``truncate_to`` first.

        Parameters
        ----------
        text : str
            Text to append; an empty string with no truncation is a no-op
        truncate_to : int, optional
            Position to cut the buffer back to before appending, discarding
            everything written since (nested writes included)
        space_if_repeating_char : bool, default False
            Insert one space first when the buffer's last character equals
            the first character of ``text``, so that delimiters such as two
            emphasis markers do not run together

        """
        if not text and truncate_to is None:
            return
        if truncate_to is not None:
            self._truncate(truncate_to)
        if space_if_repeating_char and text and self._text and self._text[-1] == text[0]:
            text = " " + text
        if not text:
            return

        self._text += text
        self._stats = self._extend_stats(text)

    def append_newlines(self, count: int) -> None:
        """Ensure the buffer ends with at least ``count`` line breaks.

        Only the missing line breaks are written.
        """
        missing = count - self._stats.newlines
        if missing > 0:
            self.append("\n" * missing)

    def truncate(self, position: int) -> None:
        """Discard everything written after ``position``."""
        self.append("", truncate_to=position)

    def _truncate(self, position: int) -> None:
        if position < 0 or position > len(self._text):
            raise ValueError(f"Cannot truncate buffer of length {len(self._text)} to {position}")
        if position == len(self._text):
            return
        self._text = self._text[:position]
        self._stats = trailing_whitespace_info(self._text)

    def _extend_stats(self, appended: str) -> TrailingWhitespaceStats:
        """Stats after appending, equal to a full rescan of the buffer."""
        tail = trailing_whitespace_info(appended)
        if tail.whitespace < len(appended):
            return tail
        # Entirely whitespace: the run continues the previous one
        newlines = self._stats.newlines + tail.newlines
        if appended[0] == "\n" and len(self._text) > len(appended) and self._text[-len(appended) - 1] == "\r":
            # "\r" + "\n" split across writes is a single line break
            newlines -= 1
        return TrailingWhitespaceStats(self._stats.whitespace + tail.whitespace, newlines)
