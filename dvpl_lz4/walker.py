"""Tree traversal.

Applies the container codec to a single file or to every file below a
directory, depth-first.

Counting rules:
- Every file ends up as exactly one of success, failure or ignored.
- A directory's tally is the sum of its children's tallies.

Failure rules:
- Codec errors (:class:`~dvpl_lz4.errors.DvplError`) count as a failure and
  the walk moves on.
- Filesystem errors (stat, listing, read, write) raise. A directory catches
  them per child, reports them, and carries on with the remaining children.
- Failing to remove an original after a successful conversion is only a
  warning.

The order children are visited in is whatever :meth:`Path.iterdir` yields.
"""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from . import core, rules
from .errors import DvplError
from .fsutils import apply_action, read_bytes, remove_file, write_file
from .rules import Decision, Mode


@dataclass(frozen=True)
class Tally:
    success: int = 0
    failure: int = 0
    ignored: int = 0

    def __add__(self, other: "Tally") -> "Tally":
        if not isinstance(other, Tally):
            return NotImplemented
        return Tally(
            self.success + other.success,
            self.failure + other.failure,
            self.ignored + other.ignored,
        )

    def __iter__(self) -> Iterator[int]:
        return iter((self.success, self.failure, self.ignored))

    @property
    def total(self) -> int:
        return self.success + self.failure + self.ignored


SUCCESS = Tally(success=1)
FAILURE = Tally(failure=1)
IGNORED = Tally(ignored=1)


@dataclass(frozen=True)
class ConvertConfig:
    """Settings shared by every file of one walk."""

    mode: Mode
    path: Path
    keep_originals: bool = False
    ignore_extensions: frozenset[str] = field(default_factory=frozenset)
    quiet: bool = False
    dry_run: bool = False
    level: int = 0
    # Path of the running program; never converted even if it sits in the tree.
    self_path: Path | None = None


@dataclass
class TreeConverter:
    config: ConvertConfig

    def run(self) -> Tally:
        if self.config.mode is Mode.VERIFY:
            return self.verify_tree(self.config.path)
        return self.process(self.config.path)

    # --------------------
    # Walking
    # --------------------
    def process(self, path: Path) -> Tally:
        """Compress or decompress ``path`` (a file or a directory tree)."""
        if self.config.mode is Mode.VERIFY:
            raise ValueError("process() needs compress or decompress mode; use verify_tree()")
        return self._walk(Path(path), self._convert_file)

    def verify_tree(self, path: Path) -> Tally:
        """Check every container under ``path``; writes and deletes nothing."""
        return self._walk(Path(path), self._verify_file)

    def _walk(self, path: Path, on_file) -> Tally:
        st = path.stat()
        if not stat.S_ISDIR(st.st_mode):
            return on_file(path)

        children = list(path.iterdir())
        total = Tally()
        for child in children:
            try:
                total += self._walk(child, on_file)
            except OSError as exc:
                print(f"[error] {child}: {exc}")
        return total

    # --------------------
    # Per-file actions
    # --------------------
    def _convert_file(self, path: Path) -> Tally:
        cfg = self.config
        decision = rules.decide(path, cfg.mode, cfg.ignore_extensions, cfg.self_path)
        if decision is not Decision.CONVERT:
            self._say(f"[ignore] {path}")
            return IGNORED

        data = read_bytes(path)
        try:
            if cfg.mode is Mode.COMPRESS:
                out = core.compress(data, level=cfg.level)
            else:
                out = core.decompress(data)
        except DvplError as exc:
            print(f"[fail] {path}: {type(exc).__name__}: {exc}")
            return FAILURE

        dst = rules.output_path(path, cfg.mode)
        apply_action(write_file(dst, out), dry_run=cfg.dry_run)
        self._say(f"[ok] {path} -> {dst} ({_verb(cfg.mode)})")

        if not cfg.keep_originals:
            try:
                apply_action(remove_file(path), dry_run=cfg.dry_run)
            except OSError as exc:
                print(f"[warn] could not delete {path}: {exc}")
        return SUCCESS

    def _verify_file(self, path: Path) -> Tally:
        cfg = self.config
        decision = rules.decide(path, Mode.VERIFY, self_path=cfg.self_path)
        if decision is not Decision.VERIFY:
            self._say(f"[ignore] {path}")
            return IGNORED

        data = read_bytes(path)
        try:
            core.verify(data)
        except DvplError as exc:
            print(f"[fail] {path}: {type(exc).__name__}: {exc}")
            return FAILURE

        self._say(f"[ok] {path} verified")
        return SUCCESS

    def _say(self, msg: str) -> None:
        if not self.config.quiet:
            print(msg)


def _verb(mode: Mode) -> str:
    return "compressed" if mode is Mode.COMPRESS else "decompressed"


def process(
    root: str | os.PathLike,
    mode: Mode | str,
    keep_originals: bool = False,
    ignore_extensions: Iterable[str] = (),
    **kwargs,
) -> Tally:
    """Compress or decompress everything under ``root``.

    Extra keyword arguments (``quiet``, ``dry_run``, ``level``, ``self_path``)
    are passed to :class:`ConvertConfig`.
    """
    mode = Mode(mode)
    if mode is Mode.VERIFY:
        raise ValueError("process() needs compress or decompress mode; use verify_tree()")
    if isinstance(ignore_extensions, str):
        ignore_extensions = ignore_extensions.split(",")
    config = ConvertConfig(
        mode=mode,
        path=Path(root),
        keep_originals=keep_originals,
        ignore_extensions=rules.normalize_extensions(ignore_extensions),
        **kwargs,
    )
    return TreeConverter(config).run()


def verify_tree(root: str | os.PathLike, **kwargs) -> Tally:
    config = ConvertConfig(mode=Mode.VERIFY, path=Path(root), **kwargs)
    return TreeConverter(config).run()
