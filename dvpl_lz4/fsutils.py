"""Filesystem helpers.

File writes and removals go through :func:`apply_action` so that:
- dry-run is implemented in one place
- print output stays consistent
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Action:
    """A planned filesystem change."""

    kind: str  # "write" | "remove"
    path: Path
    data: bytes = b""


def write_file(path: Path, data: bytes) -> Action:
    return Action(kind="write", path=path, data=data)


def remove_file(path: Path) -> Action:
    return Action(kind="remove", path=path)


def read_bytes(path: Path) -> bytes:
    with open(path, "rb") as f_in:
        return f_in.read()


def apply_action(action: Action, *, dry_run: bool) -> None:
    if action.kind == "write":
        if dry_run:
            print(f"[dry-run] write {action.path} ({len(action.data)} bytes)")
            return
        with open(action.path, "wb") as f_out:
            f_out.write(action.data)
        return

    if action.kind == "remove":
        if dry_run:
            print(f"[dry-run] rm {action.path}")
            return
        action.path.unlink()
        return

    raise ValueError(f"Unknown action kind: {action.kind}")
