"""Name, version and about text shown by the command line."""

from __future__ import annotations

NAME = "DVPL_LZ4 CLI TOOL"
VERSION = "1.2.3"
COMMIT_DATE = "07/03/2024"
AUTHOR = "RifsxD"
REPO = "https://github.com/rifsxd/dvpl_lz4"
DESCRIPTION = (
    "Converts WoTB (Dava) SmartDLC DVPL files to and from plain files "
    "using LZ4 block compression."
)


def banner() -> str:
    rows = [
        ("Name", NAME),
        ("Version", VERSION),
        ("Commit", COMMIT_DATE),
        ("Dev", AUTHOR),
        ("Repo", REPO),
        ("Info", DESCRIPTION),
    ]
    return "\n".join(f"• {k}: {v}" for k, v in rows)
