"""The fixed 20-byte trailer carried at the end of every DVPL container.

Layout (little-endian)::

    offset  0  uint32  original size
    offset  4  uint32  compressed (stored) size
    offset  8  uint32  CRC32 of the stored bytes
    offset 12  uint32  type (0 = stored, 2 = LZ4 block)
    offset 16  4 bytes b"DVPL"
"""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .errors import InvalidFooter

FOOTER_SIZE = 20
MAGIC = b"DVPL"
TYPE_NONE = 0
TYPE_LZ4 = 2

_FIELDS = struct.Struct("<IIII")


@dataclass(frozen=True)
class Footer:
    original_size: int
    compressed_size: int
    crc32: int
    type: int


def encode_footer(original_size: int, compressed_size: int, crc32: int, type: int) -> bytes:
    return _FIELDS.pack(original_size, compressed_size, crc32, type) + MAGIC


def decode_footer(buffer: bytes) -> Footer:
    """Read the footer from the last 20 bytes of ``buffer``.

    Only the magic and the length are checked here; the relationship between
    sizes and type is left to :func:`dvpl_lz4.core.decompress`.
    """
    view = memoryview(buffer)
    if len(view) < FOOTER_SIZE:
        raise InvalidFooter(f"need {FOOTER_SIZE} bytes for a footer, got {len(view)}")
    tail = view[len(view) - FOOTER_SIZE:]
    if bytes(tail[16:]) != MAGIC:
        raise InvalidFooter(f"bad magic {bytes(tail[16:])!r}")
    return Footer(*_FIELDS.unpack(tail[:16]))
