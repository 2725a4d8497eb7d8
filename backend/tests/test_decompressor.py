import struct

import lz4.frame
import pytest

from radarmesh.core.errors import CorruptFrame
from radarmesh.services.decompressor import compress_frame, decompress_frame


def test_decompress_returns_declared_size():
    raw = bytes(range(256)) * 40
    assert decompress_frame(compress_frame(raw)) == raw


def test_empty_payload():
    assert decompress_frame(compress_frame(b"")) == b""


def test_accepts_lz4_frames_from_other_producers():
    raw = b"radar" * 500
    buf = struct.pack("<I", len(raw)) + lz4.frame.compress(raw, compression_level=9)
    assert decompress_frame(buf) == raw


def test_truncated_block_raises_corrupt_frame():
    buf = compress_frame(bytes(range(256)) * 40)
    with pytest.raises(CorruptFrame):
        decompress_frame(buf[: len(buf) // 2])


def test_trailing_bytes_after_block():
    buf = compress_frame(b"abcdefgh" * 20)
    with pytest.raises(CorruptFrame):
        decompress_frame(buf + b"JUNKJUNK")


def test_missing_header():
    with pytest.raises(CorruptFrame):
        decompress_frame(b"\x01\x00")


def test_declared_size_larger_than_block():
    block = lz4.frame.compress(b"abc")
    with pytest.raises(CorruptFrame):
        decompress_frame(struct.pack("<I", 10) + block)


def test_declared_size_smaller_than_block():
    block = lz4.frame.compress(b"abcdefgh")
    with pytest.raises(CorruptFrame):
        decompress_frame(struct.pack("<I", 4) + block)


def test_invalid_block():
    with pytest.raises(CorruptFrame):
        decompress_frame(struct.pack("<I", 4) + b"not lz4 at all")


def test_declared_size_over_limit():
    buf = compress_frame(b"x" * 100)
    with pytest.raises(CorruptFrame):
        decompress_frame(buf, max_size=50)
