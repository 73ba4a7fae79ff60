"""Unit tests for the byte offset to line index."""

import pytest

from translation_sync.parsers.exceptions import InternalError
from translation_sync.parsers.line_index import LineIndex


class TestLineCount:
    """Test line start bookkeeping."""

    def test_empty_buffer_has_one_line(self):
        """Test that offset 0 is always a line start."""
        index = LineIndex(b"")

        assert index.line_count == 1
        assert index.offset_to_line(0) == 1

    def test_trailing_newline_yields_final_empty_line(self):
        """Test that a buffer ending in a newline has an extra empty line."""
        assert LineIndex(b"a\nb\n").line_count == 3
        assert LineIndex(b"a\nb").line_count == 2


class TestOffsetToLine:
    """Test binary search lookups."""

    def test_offsets_map_to_containing_line(self):
        """Test lookups at line starts, inside lines and on newlines."""
        index = LineIndex(b"ab\ncd\n\nef")

        assert index.offset_to_line(0) == 1
        assert index.offset_to_line(1) == 1
        assert index.offset_to_line(2) == 1  # the newline belongs to its line
        assert index.offset_to_line(3) == 2
        assert index.offset_to_line(6) == 3
        assert index.offset_to_line(7) == 4
        assert index.offset_to_line(9) == 4

    def test_end_of_buffer_maps_to_last_line(self):
        """Test that len(buffer) is accepted."""
        index = LineIndex(b"a\nb\n")

        assert index.offset_to_line(4) == 3

    def test_offsets_are_bytes_not_characters(self):
        """Test that multi-byte characters count by their encoded length."""
        index = LineIndex("é\nx".encode("utf-8"))

        assert index.offset_to_line(2) == 1
        assert index.offset_to_line(3) == 2

    @pytest.mark.parametrize("pos", [-1, 5, 100])
    def test_out_of_range_offset_raises(self, pos):
        """Test that offsets outside the buffer are invariant violations."""
        index = LineIndex(b"a\nb\n")

        with pytest.raises(InternalError):
            index.offset_to_line(pos)


class TestLineBounds:
    """Test line start and end offsets."""

    def test_line_start_and_end(self):
        """Test the byte span of each line."""
        index = LineIndex(b"ab\ncd\n")

        assert index.line_start(1) == 0
        assert index.line_end(1) == 2
        assert index.line_start(2) == 3
        assert index.line_end(2) == 5
        assert index.line_start(3) == 6
        assert index.line_end(3) == 6

    def test_unknown_line_raises(self):
        """Test that lines past the end are rejected."""
        index = LineIndex(b"ab\n")

        with pytest.raises(InternalError):
            index.line_start(3)
        with pytest.raises(InternalError):
            index.line_start(0)

    def test_carriage_returns_end_lines(self):
        """Test that a lone \\r ends a line and \\r\\n counts as one ending."""
        index = LineIndex(b"a\r\rb\r\nc\n")

        assert index.line_count == 5
        assert index.line_start(2) == 2
        assert index.line_start(3) == 3
        assert index.line_end(3) == 5
        assert index.line_start(4) == 6
        assert index.offset_to_line(4) == 3
