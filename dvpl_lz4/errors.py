"""Codec error taxonomy.

Every error raised by the container codec derives from :class:`DvplError`.
The traversal engine treats these as per-file failures and keeps walking;
filesystem problems are left as plain :class:`OSError` and propagate.
"""

from __future__ import annotations


class DvplError(Exception):
    """Base class for container encode/decode failures."""


class InvalidFooter(DvplError):
    pass


class SizeMismatch(DvplError):
    pass


class ChecksumMismatch(DvplError):
    pass


class TypeSizeMismatch(DvplError):
    pass


class DecodeSizeMismatch(DvplError):
    pass


class UnknownFormat(DvplError):
    pass


class CompressionFailure(DvplError):
    pass


class DecompressionFailure(DvplError):
    """The LZ4 decoder rejected the payload (cause is chained)."""
