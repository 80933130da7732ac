"""Tests for the LineDecoder module."""

import pytest
from lineproto.core.line_decoder import LineDecoder

MULTI_LINE_INPUT = b"USER admin\r\nPASS password\r\n\r\nSYST\r\nQUIT\r\n"
EXPECTED_LINES = [b"USER admin", b"PASS password", b"", b"SYST", b"QUIT"]


def decode_chunks(chunks):
    """Feed chunks one at a time and collect every yielded line."""
    decoder = LineDecoder()
    lines = []
    for chunk in chunks:
        decoder.feed(chunk)
        lines.extend(decoder.lines())
    return lines, decoder


def split_every(data, size):
    return [data[i:i + size] for i in range(0, len(data), size)]


class TestLineDecoder:
    """Tests for LineDecoder."""

    def test_single_complete_line(self):
        """A complete line is yielded without its terminator."""
        lines, decoder = decode_chunks([b"NOOP\r\n"])
        assert lines == [b"NOOP"]
        assert decoder.buffered_size == 0

    def test_partial_line_is_retained(self):
        """Data without a terminator stays buffered."""
        lines, decoder = decode_chunks([b"USER ad"])
        assert lines == []
        assert decoder.buffered_size == len(b"USER ad")

    def test_partial_line_completed_by_next_read(self):
        """A fragment is combined with the next arrival."""
        lines, _ = decode_chunks([b"USER ad", b"min\r\n"])
        assert lines == [b"USER admin"]

    def test_terminator_split_across_reads(self):
        """CR in one read and LF in the next still ends one line."""
        lines, decoder = decode_chunks([b"QUIT\r", b"\n"])
        assert lines == [b"QUIT"]
        assert decoder.buffered_size == 0

    def test_lone_cr_is_not_a_terminator(self):
        """A trailing CR waits for its LF instead of ending the line."""
        lines, decoder = decode_chunks([b"QUIT\r"])
        assert lines == []
        assert decoder.buffered_size == 5

    def test_multiple_lines_in_one_read(self):
        """All lines of one read are yielded in order."""
        lines, _ = decode_chunks([b"USER a\r\nPASS b\r\nSYST\r\n"])
        assert lines == [b"USER a", b"PASS b", b"SYST"]

    def test_empty_line(self):
        """An empty line is yielded as empty bytes."""
        lines, _ = decode_chunks([b"\r\n"])
        assert lines == [b""]

    @pytest.mark.parametrize("size", [1, 2, 3, 5, 7, 11, len(MULTI_LINE_INPUT)])
    def test_chunk_boundary_invariance(self, size):
        """The same lines come out however the input is chunked."""
        lines, decoder = decode_chunks(split_every(MULTI_LINE_INPUT, size))
        assert lines == EXPECTED_LINES
        assert decoder.buffered_size == 0

    def test_byte_at_a_time_terminator(self):
        """Feeding one byte at a time yields one clean line."""
        lines, _ = decode_chunks(split_every(b"HELO x\r\n", 1))
        assert lines == [b"HELO x"]
        assert not any(line.endswith(b"\r") for line in lines)

    def test_lines_are_lazy(self):
        """Stopping iteration leaves later lines in the buffer."""
        decoder = LineDecoder()
        decoder.feed(b"DATA\r\nSubject: x\r\n")
        first = next(decoder.lines())
        assert first == b"DATA"
        assert decoder.drain() == b"Subject: x\r\n"

    def test_drain_empties_buffer(self):
        """drain returns undecoded bytes and clears them."""
        decoder = LineDecoder()
        decoder.feed(b"partial")
        assert decoder.drain() == b"partial"
        assert decoder.buffered_size == 0
        assert list(decoder.lines()) == []

    def test_bare_lf_does_not_end_line(self):
        """Only the full CRLF sequence terminates a line."""
        lines, decoder = decode_chunks([b"NOOP\nQUIT\r\n"])
        assert lines == [b"NOOP\nQUIT"]

    def test_empty_terminator_rejected(self):
        """An empty terminator is refused."""
        with pytest.raises(ValueError):
            LineDecoder(terminator=b"")
