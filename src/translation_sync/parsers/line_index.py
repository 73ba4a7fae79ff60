"""Byte offset to line number mapping for source buffers."""

import bisect
import re
from typing import List

from .exceptions import InternalError


# CommonMark line endings: "\r\n" is one break, a lone "\r" is a break of its own
LINE_BREAK_PATTERN = r"\n|\r(?!\n)"

_LINE_BREAK_RE = re.compile(LINE_BREAK_PATTERN.encode("ascii"))


class LineIndex:
    """
    Sorted byte offsets of every line start in a buffer.

    Offset 0 is always a line start, and every line ending (``\\n``,
    ``\\r\\n`` or a lone ``\\r``) starts a new line, so a buffer ending in a
    line ending has a final empty line. Line numbers therefore agree with the
    ones the markdown parser reports. Lookups are O(log N) via binary search.
    """

    def __init__(self, source: bytes):
        self._size = len(source)
        starts: List[int] = [0]
        starts.extend(match.end() for match in _LINE_BREAK_RE.finditer(source))
        self._starts = starts

    @property
    def line_count(self) -> int:
        """Number of lines, counting a final empty line after a trailing line ending."""
        return len(self._starts)

    def offset_to_line(self, pos: int) -> int:
        """
        Return the 1-based line containing byte offset ``pos``.

        Args:
            pos: Byte offset into the buffer. ``len(buffer)`` is accepted and
                maps to the last line.

        Returns:
            The 1-based line number.

        Raises:
            InternalError: If ``pos`` lies outside the buffer.
        """
        if pos < 0 or pos > self._size:
            raise InternalError(
                message=f"offset {pos} is outside the buffer",
                location=f"byte {pos}",
                details={"size": self._size},
            )
        # number of line starts <= pos is the 1-based line number
        return bisect.bisect_right(self._starts, pos)

    def line_start(self, line: int) -> int:
        """
        Return the byte offset at which the 1-based ``line`` begins.

        Raises:
            InternalError: If the buffer has no such line.
        """
        if line < 1 or line > len(self._starts):
            raise InternalError(
                message=f"line {line} is outside the buffer",
                location=f"line {line}",
                details={"line_count": len(self._starts)},
            )
        return self._starts[line - 1]

    def line_end(self, line: int) -> int:
        """Return the offset just past ``line`` (before its ``\\n`` or lone ``\\r``)."""
        start = self.line_start(line)
        if line < len(self._starts):
            return self._starts[line] - 1
        return max(start, self._size)
