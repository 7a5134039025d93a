"""Container encode and decode routines.

This module turns a whole in-memory buffer into a DVPL container and back.
The responsibilities are:

* Compressing the input with LZ4 in block mode (no size prefix) through the
  :mod:`lz4.block` bindings, optionally at a high-compression level.
* Appending the 20-byte footer built by :mod:`dvpl_lz4.footer`, whose CRC32
  covers the *stored* bytes so integrity can be checked before anything is
  decompressed.
* Validating a container (footer, size, checksum, type) before handing the
  payload to the LZ4 decoder, so that corruption is reported as a precise
  :class:`~dvpl_lz4.errors.DvplError` subclass rather than an opaque
  decoder failure.

The public functions are:

``compress(data: bytes, level: int = 0) -> bytes``
    Build a container. The encoder always emits type 2 (LZ4), even when the
    compressed block is larger than the input.

``decompress(data: bytes) -> bytes``
    Validate a container and return the original bytes. Type 0 (stored)
    containers produced by other tools are accepted.

``verify(data: bytes) -> None``
    Run every check :func:`decompress` runs and discard the result.

None of these functions touch the filesystem; see :mod:`dvpl_lz4.walker`.
"""

from __future__ import annotations

import zlib

import lz4.block

from .errors import (
    ChecksumMismatch,
    CompressionFailure,
    DecodeSizeMismatch,
    DecompressionFailure,
    SizeMismatch,
    TypeSizeMismatch,
    UnknownFormat,
)
from .footer import FOOTER_SIZE, TYPE_LZ4, TYPE_NONE, Footer, decode_footer, encode_footer

__all__ = ["compress", "decompress", "verify", "read_footer", "crc32", "MAX_LEVEL"]

# lz4 high-compression levels run 1..12; 0 selects the fast default mode.
MAX_LEVEL = 12


def _check_bytes(data) -> None:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be bytes-like")


def crc32(data) -> int:
    """CRC32 with the IEEE polynomial, as an unsigned 32-bit value."""
    return zlib.crc32(data) & 0xFFFFFFFF


def read_footer(data: bytes) -> Footer:
    """Return the footer of a container without validating its payload."""
    _check_bytes(data)
    return decode_footer(data)


def compress(data: bytes, level: int = 0) -> bytes:
    """Compress ``data`` into a DVPL container.

    Parameters
    ----------
    data : bytes
        The raw file contents.
    level : int, optional
        ``0`` uses the default LZ4 block compressor. ``1`` to ``12`` switch
        to the high-compression mode at that level.

    Returns
    -------
    bytes
        The compressed block followed by the footer.
    """
    _check_bytes(data)
    if not 0 <= level <= MAX_LEVEL:
        raise ValueError(f"level must be between 0 and {MAX_LEVEL}, got {level}")
    try:
        if level:
            block = lz4.block.compress(
                data, mode="high_compression", compression=level, store_size=False
            )
        else:
            block = lz4.block.compress(data, store_size=False)
    except (lz4.block.LZ4BlockError, OverflowError) as exc:
        raise CompressionFailure(str(exc)) from exc

    footer = encode_footer(len(data), len(block), crc32(block), TYPE_LZ4)
    return block + footer


def _decode(data: bytes) -> bytes:
    _check_bytes(data)
    footer = decode_footer(data)

    # Footer and payload are read as separate views; the input is never copied
    # or modified until the payload is returned.
    view = memoryview(data)
    payload = view[: len(view) - FOOTER_SIZE]

    if len(payload) != footer.compressed_size:
        raise SizeMismatch(
            f"footer says {footer.compressed_size} stored bytes, container holds {len(payload)}"
        )

    actual_crc = crc32(payload)
    if actual_crc != footer.crc32:
        raise ChecksumMismatch(f"crc32 {actual_crc:#010x} != footer {footer.crc32:#010x}")

    if footer.type == TYPE_NONE:
        if footer.original_size != footer.compressed_size:
            raise TypeSizeMismatch(
                f"stored container with original size {footer.original_size} "
                f"and compressed size {footer.compressed_size}"
            )
        return bytes(payload)

    if footer.type == TYPE_LZ4:
        try:
            out = lz4.block.decompress(payload, uncompressed_size=footer.original_size)
        except lz4.block.LZ4BlockError as exc:
            raise DecompressionFailure(str(exc)) from exc
        if len(out) != footer.original_size:
            raise DecodeSizeMismatch(
                f"decoded {len(out)} bytes, footer says {footer.original_size}"
            )
        return out

    raise UnknownFormat(f"unknown container type {footer.type}")


def decompress(data: bytes) -> bytes:
    """Validate a DVPL container and return the original bytes.

    Raises
    ------
    InvalidFooter
        Fewer than 20 bytes, or the last four bytes are not ``DVPL``.
    SizeMismatch
        The payload length disagrees with the footer. Checked before the CRC.
    ChecksumMismatch
        The CRC32 of the stored bytes disagrees with the footer.
    TypeSizeMismatch
        A stored (type 0) container whose two sizes differ.
    DecompressionFailure
        The LZ4 decoder rejected the payload.
    DecodeSizeMismatch
        The decoder produced a different number of bytes than recorded.
    UnknownFormat
        Any type other than 0 or 2.
    """
    return _decode(data)


def verify(data: bytes) -> None:
    """Check a container end to end, decoding included, and drop the output."""
    _decode(data)
