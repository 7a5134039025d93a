"""Read and write DVPL containers, one buffer or a whole directory tree.

A DVPL file is the game's packaged form of an ordinary asset file: the
contents compressed as a single LZ4 block (or stored as-is), followed by a
20-byte footer recording the original size, the stored size, a CRC32 of the
stored bytes and the compression type, terminated by the ASCII marker
``DVPL``. On disk the container keeps the original name with ``.dvpl``
appended, so ``maps/desert.yaml`` becomes ``maps/desert.yaml.dvpl``.

The package is split into two layers:

* :mod:`dvpl_lz4.core` converts a bytes object into a container and back
  (:func:`compress`, :func:`decompress`, :func:`verify`). Checksums and
  sizes are validated before the LZ4 decoder runs, so a damaged file is
  reported with a precise :class:`DvplError` subclass.
* :mod:`dvpl_lz4.walker` walks a file or directory, decides per file
  whether to convert, verify or ignore it, writes the result next to the
  source and optionally deletes the source. It returns a :class:`Tally` of
  successes, failures and ignored files. Codec failures are counted; only
  filesystem errors propagate.

Example
-------

::

    from dvpl_lz4 import compress, decompress, process, verify_tree

    blob = compress(b"hello")
    assert decompress(blob) == b"hello"

    # Pack a data folder, skipping executables, keeping the originals.
    tally = process("Data", "compress", keep_originals=True, ignore_extensions={".exe"})
    print(tally.success, tally.failure, tally.ignored)

    # Check every container without writing anything.
    verify_tree("Data")

The encoder always produces LZ4 (type 2) containers. Stored (type 0)
containers written by other tools are still decoded.
"""

from .core import compress, decompress, read_footer, verify
from .errors import (
    ChecksumMismatch,
    CompressionFailure,
    DecodeSizeMismatch,
    DecompressionFailure,
    DvplError,
    InvalidFooter,
    SizeMismatch,
    TypeSizeMismatch,
    UnknownFormat,
)
from .footer import FOOTER_SIZE, MAGIC, TYPE_LZ4, TYPE_NONE, Footer, decode_footer, encode_footer
from .meta import VERSION as __version__
from .rules import DVPL_EXTENSION, Mode
from .walker import ConvertConfig, Tally, TreeConverter, process, verify_tree

__all__ = [
    "compress",
    "decompress",
    "verify",
    "read_footer",
    "encode_footer",
    "decode_footer",
    "Footer",
    "FOOTER_SIZE",
    "MAGIC",
    "TYPE_NONE",
    "TYPE_LZ4",
    "DVPL_EXTENSION",
    "Mode",
    "ConvertConfig",
    "Tally",
    "TreeConverter",
    "process",
    "verify_tree",
    "DvplError",
    "InvalidFooter",
    "SizeMismatch",
    "ChecksumMismatch",
    "TypeSizeMismatch",
    "DecodeSizeMismatch",
    "UnknownFormat",
    "CompressionFailure",
    "DecompressionFailure",
]
