"""Per-file decisions.

Which files a walk touches depends only on the mode, the file name, the
ignore list and (optionally) the path of the running program. Nothing here
opens a file.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Iterable

DVPL_EXTENSION = ".dvpl"


class Mode(str, enum.Enum):
    COMPRESS = "compress"
    DECOMPRESS = "decompress"
    VERIFY = "verify"


class Decision(enum.Enum):
    CONVERT = "convert"
    VERIFY = "verify"
    IGNORE = "ignore"


def _normalize_ext(ext: str) -> str:
    ext = ext.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


def parse_ignore_list(text: str | None) -> frozenset[str]:
    """``"exe, .DLL,,"`` -> ``{".exe", ".dll"}``."""
    if not text:
        return frozenset()
    return normalize_extensions(text.split(","))


def normalize_extensions(exts: Iterable[str]) -> frozenset[str]:
    return frozenset(e for e in (_normalize_ext(x) for x in exts) if e)


def is_container(path: Path) -> bool:
    # A file named just ".dvpl" has nothing left to decompress into.
    name = path.name.lower()
    return len(name) > len(DVPL_EXTENSION) and name.endswith(DVPL_EXTENSION)


def is_ignored(path: Path, ignore_extensions: frozenset[str]) -> bool:
    return path.suffix.lower() in ignore_extensions


def is_self(path: Path, self_path: Path | None) -> bool:
    if self_path is None:
        return False
    try:
        return path.resolve() == self_path.resolve()
    except OSError:
        return False


def decide(
    path: Path,
    mode: Mode,
    ignore_extensions: frozenset[str] = frozenset(),
    self_path: Path | None = None,
) -> Decision:
    if is_self(path, self_path):
        return Decision.IGNORE

    if mode is Mode.VERIFY:
        # Ignore list does not apply when verifying.
        return Decision.VERIFY if is_container(path) else Decision.IGNORE

    if is_ignored(path, ignore_extensions):
        return Decision.IGNORE

    if mode is Mode.COMPRESS:
        return Decision.IGNORE if is_container(path) else Decision.CONVERT
    if mode is Mode.DECOMPRESS:
        return Decision.CONVERT if is_container(path) else Decision.IGNORE

    raise ValueError(f"Unknown mode: {mode}")


def output_path(path: Path, mode: Mode) -> Path:
    """Name of the file a conversion writes.

    ``name.yaml`` <-> ``name.yaml.dvpl``; decompression strips exactly the
    trailing extension.
    """
    if mode is Mode.COMPRESS:
        return path.with_name(path.name + DVPL_EXTENSION)
    if mode is Mode.DECOMPRESS:
        if not is_container(path):
            raise ValueError(f"not a {DVPL_EXTENSION} file: {path}")
        return path.with_name(path.name[: -len(DVPL_EXTENSION)])
    raise ValueError(f"no output file in {mode.value} mode")
