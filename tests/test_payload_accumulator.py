"""Tests for the PayloadAccumulator module."""

import itertools

import pytest
from lineproto.core.payload_accumulator import PayloadAccumulator, END_OF_DATA

CONTENT = b"Subject: hi\r\n\r\nbody"


def splits_of(data, parts):
    """Every way of cutting data into the given number of non-empty chunks."""
    for cuts in itertools.combinations(range(1, len(data)), parts - 1):
        bounds = (0,) + cuts + (len(data),)
        yield [data[a:b] for a, b in zip(bounds, bounds[1:])]


class TestPayloadAccumulator:
    """Tests for PayloadAccumulator."""

    @pytest.fixture
    def accumulator(self):
        return PayloadAccumulator()

    def test_complete_payload_in_one_read(self, accumulator):
        """A body followed by the terminator is returned without it."""
        assert accumulator.feed(CONTENT + END_OF_DATA) == CONTENT

    def test_incomplete_payload_returns_none(self, accumulator):
        """Nothing is returned before the terminator arrives."""
        assert accumulator.feed(CONTENT) is None
        assert accumulator.buffered_size == len(CONTENT)

    @pytest.mark.parametrize("parts", [1, 2, 3, 4, 5])
    def test_terminator_split_across_reads(self, parts):
        """Any split of the terminator yields exactly one payload."""
        for chunks in splits_of(END_OF_DATA, parts):
            accumulator = PayloadAccumulator()
            results = [accumulator.feed(CONTENT)]
            results.extend(accumulator.feed(chunk) for chunk in chunks)
            payloads = [r for r in results if r is not None]
            assert payloads == [CONTENT]
            assert results[-1] == CONTENT

    def test_embedded_dot_line_does_not_terminate(self, accumulator):
        """A terminator that is not at the end of the buffer is ignored."""
        assert accumulator.feed(b"line\r\n.\r\nmore") is None
        assert accumulator.feed(END_OF_DATA) == b"line\r\n.\r\nmore"

    def test_dot_not_alone_does_not_terminate(self, accumulator):
        """A line starting with a dot is part of the body."""
        assert accumulator.feed(b"a\r\n.b\r\n") is None

    def test_empty_payload(self, accumulator):
        """A lone dot line right after DATA is an empty body."""
        assert accumulator.feed(b".\r\n") == b""

    def test_empty_payload_split(self, accumulator):
        """A lone dot line split across reads is an empty body."""
        assert accumulator.feed(b".") is None
        assert accumulator.feed(b"\r") is None
        assert accumulator.feed(b"\n") == b""

    def test_resets_after_payload(self, accumulator):
        """The accumulator starts over after returning a payload."""
        assert accumulator.feed(b"first" + END_OF_DATA) == b"first"
        assert accumulator.buffered_size == 0
        assert accumulator.feed(b"second" + END_OF_DATA) == b"second"

    def test_bytes_kept_verbatim(self, accumulator):
        """Payload bytes are not decoded or split."""
        body = b"\x00\xff\r\nline\r\n\r\n"
        assert accumulator.feed(body + END_OF_DATA) == body
