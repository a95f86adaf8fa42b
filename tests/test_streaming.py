# tests/test_streaming.py
from __future__ import annotations

import io

import pytest

from codeshift.enums import Encoding
from codeshift.errors import InvalidInputError, UnmappableSourceError, UnmappableTargetError
from codeshift.translator import StreamingTranslator, Translator, complete_prefix_length


def test_single_byte_chunks_are_independent():
    stream = StreamingTranslator(Encoding.EBCDIC_037, Encoding.ISO_8859_1)
    assert stream.process_chunk(b"\xc8\xc5") == b"HE"
    assert stream.pending == b""
    assert stream.process_chunk(b"\xd3\xd3\xd6") == b"LLO"
    assert stream.close() == b""


def test_split_utf8_sequence_is_reassembled():
    stream = StreamingTranslator(Encoding.UTF8, Encoding.ISO_8859_1)
    assert stream.process_chunk(b"h\xc3") == b"h"
    assert stream.pending == b"\xc3"
    assert stream.process_chunk(b"\xa9llo") == b"\xe9llo"
    assert stream.close() == b""


def test_split_utf16_unit_is_reassembled():
    stream = StreamingTranslator(Encoding.UTF16LE, Encoding.UTF8)
    assert stream.process_chunk(b"H") == b""
    assert stream.process_chunk(b"\x00i") == b"H"
    assert stream.process_chunk(b"\x00") == b"i"
    assert stream.close() == b""


def test_split_surrogate_pair_is_reassembled():
    data = "😀".encode("utf-16-le")
    stream = StreamingTranslator(Encoding.UTF16LE, Encoding.UTF8)
    assert stream.process_chunk(data[:2]) == b""
    assert stream.process_chunk(data[2:]) == "😀".encode()


def test_every_split_point_matches_one_shot():
    text = "Grüße aus Köln, 世界! 😀"
    data = text.encode("utf-8")
    for cut in range(len(data) + 1):
        stream = StreamingTranslator(Encoding.UTF8, Encoding.UTF16BE)
        out = stream.process_chunk(data[:cut]) + stream.process_chunk(data[cut:])
        out += stream.close()
        assert out == text.encode("utf-16-be"), cut


def test_truncated_stream_fails_on_close():
    stream = StreamingTranslator(Encoding.UTF8, Encoding.UTF16LE)
    assert stream.process_chunk(b"\xe2\x82") == b""
    with pytest.raises(InvalidInputError):
        stream.close()


def test_error_positions_are_stream_relative():
    stream = StreamingTranslator(Encoding.CP_437, Encoding.ISO_8859_1)
    assert stream.process_chunk(b"\x82\x82") == b"\xe9\xe9"
    with pytest.raises(UnmappableSourceError) as exc_info:
        stream.process_chunk(b"\x82\xb0")
    assert exc_info.value.position == 3


def test_target_error_positions_match_one_shot_conversion():
    data = "ab\u20ac".encode("utf-16-le")
    with pytest.raises(UnmappableTargetError) as one_shot:
        Translator(Encoding.UTF16LE, Encoding.ISO_8859_1).convert(data)
    stream = StreamingTranslator(Encoding.UTF16LE, Encoding.ISO_8859_1)
    assert stream.process_chunk(data[:4]) == b"ab"
    with pytest.raises(UnmappableTargetError) as streamed:
        stream.process_chunk(data[4:])
    assert one_shot.value.position == 2
    assert streamed.value.position == one_shot.value.position


def test_target_error_positions_count_utf8_bytes_of_earlier_chunks():
    stream = StreamingTranslator(Encoding.UTF16BE, Encoding.WINDOWS_1252)
    assert stream.process_chunk("\u00e9\u00e9".encode("utf-16-be")) == b"\xe9\xe9"
    with pytest.raises(UnmappableTargetError) as exc_info:
        stream.process_chunk("x\u0100".encode("utf-16-be"))
    # Two two-byte UTF-8 characters, then "x".
    assert exc_info.value.position == 5
    stream.reset()
    with pytest.raises(UnmappableTargetError) as exc_info:
        stream.process_chunk("\u0100".encode("utf-16-be"))
    assert exc_info.value.position == 0


def test_failed_chunk_consumes_nothing():
    stream = StreamingTranslator(Encoding.UTF8, Encoding.ISO_8859_1)
    stream.process_chunk(b"ab\xe2")
    with pytest.raises(UnmappableTargetError):
        stream.process_chunk(b"\x82\xac")
    assert stream.pending == b"\xe2"
    assert stream.process_chunk(b"\x82") == b""


def test_process_after_close_requires_reset():
    stream = StreamingTranslator(Encoding.ASCII, Encoding.UTF8)
    stream.process_chunk(b"abc")
    stream.close()
    with pytest.raises(ValueError, match="reset"):
        stream.process_chunk(b"def")
    stream.reset()
    assert stream.process_chunk(b"def") == b"def"


def test_close_is_idempotent():
    stream = StreamingTranslator(Encoding.ASCII, Encoding.UTF8)
    assert stream.close() == b""
    assert stream.close() == b""


def test_convert_stream():
    text = "naïve café " * 50
    source = io.BytesIO(text.encode("utf-8"))
    sink = io.BytesIO()
    stream = StreamingTranslator(Encoding.UTF8, Encoding.WINDOWS_1252, buffer_size=7)
    written = stream.convert_stream(source, sink)
    assert sink.getvalue() == text.encode("cp1252")
    assert written == len(sink.getvalue())


@pytest.mark.parametrize("size", [0, -5, 1.5, True])
def test_buffer_size_validation(size: object):
    with pytest.raises(ValueError, match="buffer_size"):
        StreamingTranslator(Encoding.ASCII, Encoding.UTF8, buffer_size=size)  # type: ignore[arg-type]


def test_default_buffer_size():
    assert StreamingTranslator(Encoding.ASCII, Encoding.UTF8).buffer_size == 64 * 1024


def test_complete_prefix_length():
    assert complete_prefix_length(Encoding.UTF8, bytearray(b"ab\xf0\x9f")) == 2
    assert complete_prefix_length(Encoding.UTF8, bytearray(b"ab\xc3\xa9")) == 4
    assert complete_prefix_length(Encoding.UTF16BE, bytearray(b"\x00a\x00")) == 2
    assert complete_prefix_length(Encoding.UTF16BE, bytearray(b"\xd8\x3d")) == 0
    assert complete_prefix_length(Encoding.CP_437, bytearray(b"\xb0\xb1")) == 2
