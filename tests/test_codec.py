from __future__ import annotations

import os
import zlib

import lz4.block
import pytest

from dvpl_lz4 import core
from dvpl_lz4.errors import (
    ChecksumMismatch,
    DecodeSizeMismatch,
    DecompressionFailure,
    InvalidFooter,
    SizeMismatch,
    TypeSizeMismatch,
    UnknownFormat,
)
from dvpl_lz4.footer import FOOTER_SIZE, TYPE_LZ4, TYPE_NONE, decode_footer, encode_footer


SAMPLES = [
    b"",
    b"a",
    b"hello world " * 200,
    os.urandom(4096),
    bytes(range(256)) * 17,
]


def _crc(b: bytes) -> int:
    return zlib.crc32(b) & 0xFFFFFFFF


@pytest.mark.parametrize("raw", SAMPLES)
def test_roundtrip(raw):
    blob = core.compress(raw)
    assert core.decompress(blob) == raw
    core.verify(blob)


def test_compress_footer_fields():
    raw = b"abcabcabcabc" * 50
    blob = core.compress(raw)
    f = decode_footer(blob)
    assert f.type == TYPE_LZ4
    assert f.original_size == len(raw)
    assert f.compressed_size == len(blob) - FOOTER_SIZE
    assert f.crc32 == _crc(blob[:-FOOTER_SIZE])


def test_compress_never_stores_even_when_expanding():
    raw = os.urandom(64)
    blob = core.compress(raw)
    assert decode_footer(blob).type == TYPE_LZ4
    assert len(blob) - FOOTER_SIZE > len(raw)


def test_high_compression_level_roundtrip():
    raw = b"tank.yaml: {armor: 120, speed: 50}\n" * 300
    blob = core.compress(raw, level=9)
    assert core.decompress(blob) == raw


def test_bad_level_rejected():
    with pytest.raises(ValueError):
        core.compress(b"x", level=13)


def test_decompress_does_not_modify_input():
    blob = bytearray(core.compress(b"immutable " * 30))
    before = bytes(blob)
    core.decompress(blob)
    assert bytes(blob) == before


def test_tamper_any_bit_detected():
    blob = core.compress(b"The quick brown fox jumps over the lazy dog" * 10)
    n = len(blob) - FOOTER_SIZE
    for i in range(0, n, max(1, n // 16)):
        for bit in (0, 7):
            bad = bytearray(blob)
            bad[i] ^= 1 << bit
            with pytest.raises(ChecksumMismatch):
                core.decompress(bytes(bad))


def test_truncated_container():
    with pytest.raises(InvalidFooter):
        core.decompress(b"DVPL" * 4)
    blob = core.compress(b"some data")
    with pytest.raises(InvalidFooter):
        core.decompress(blob[:-1])


def test_size_mismatch_checked_before_crc():
    payload = b"\x00" * 10
    # crc is deliberately wrong too; size must win
    blob = payload + encode_footer(10, 11, 0, TYPE_NONE)
    with pytest.raises(SizeMismatch):
        core.decompress(blob)


def test_stored_container_decodes():
    payload = b"plain stored content"
    blob = payload + encode_footer(len(payload), len(payload), _crc(payload), TYPE_NONE)
    out = core.decompress(blob)
    assert out == payload and isinstance(out, bytes)


def test_stored_type_size_mismatch():
    payload = b"plain stored content"
    blob = payload + encode_footer(len(payload) + 1, len(payload), _crc(payload), TYPE_NONE)
    with pytest.raises(TypeSizeMismatch):
        core.decompress(blob)


def test_unknown_type():
    payload = b"whatever"
    blob = payload + encode_footer(len(payload), len(payload), _crc(payload), 1)
    with pytest.raises(UnknownFormat):
        core.verify(blob)


def test_decode_size_mismatch():
    raw = b"hello world"
    block = lz4.block.compress(raw, store_size=False)
    blob = block + encode_footer(len(raw) + 5, len(block), _crc(block), TYPE_LZ4)
    with pytest.raises(DecodeSizeMismatch):
        core.decompress(blob)


def test_corrupt_lz4_block_with_valid_crc():
    # valid footer and checksum over garbage that is not an LZ4 block
    block = b"\xff" * 8
    blob = block + encode_footer(100, len(block), _crc(block), TYPE_LZ4)
    with pytest.raises(DecompressionFailure):
        core.decompress(blob)


def test_read_footer_and_type_check():
    blob = core.compress(b"xyz")
    assert core.read_footer(blob).original_size == 3
    with pytest.raises(TypeError):
        core.compress("not bytes")
