from __future__ import annotations

from pathlib import Path

import pytest

from dvpl_lz4.rules import Decision, Mode, decide, output_path, parse_ignore_list


def test_parse_ignore_list():
    assert parse_ignore_list(".exe,.dll") == {".exe", ".dll"}
    assert parse_ignore_list(" exe, .DLL,, ") == {".exe", ".dll"}
    assert parse_ignore_list("") == frozenset()
    assert parse_ignore_list(None) == frozenset()


@pytest.mark.parametrize(
    "name, mode, expected",
    [
        ("a.txt", Mode.COMPRESS, Decision.CONVERT),
        ("a.txt.dvpl", Mode.COMPRESS, Decision.IGNORE),
        ("b.exe", Mode.COMPRESS, Decision.IGNORE),
        ("a.txt", Mode.DECOMPRESS, Decision.IGNORE),
        ("a.txt.dvpl", Mode.DECOMPRESS, Decision.CONVERT),
        ("a.txt.dvpl", Mode.VERIFY, Decision.VERIFY),
        ("a.txt", Mode.VERIFY, Decision.IGNORE),
    ],
)
def test_decide(name, mode, expected):
    assert decide(Path(name), mode, frozenset({".exe"})) is expected


def test_ignore_list_not_applied_when_verifying():
    assert decide(Path("x.dvpl"), Mode.VERIFY, frozenset({".dvpl"})) is Decision.VERIFY
    assert decide(Path("x.dvpl"), Mode.DECOMPRESS, frozenset({".dvpl"})) is Decision.IGNORE


def test_self_path_always_ignored(tmp_path):
    me = tmp_path / "dvpl_lz4.exe"
    me.write_bytes(b"MZ")
    for mode in Mode:
        assert decide(me, mode, self_path=me) is Decision.IGNORE
    other = tmp_path / "other.txt"
    assert decide(other, Mode.COMPRESS, self_path=me) is Decision.CONVERT


def test_output_path():
    assert output_path(Path("d/name.yaml"), Mode.COMPRESS) == Path("d/name.yaml.dvpl")
    assert output_path(Path("d/name.yaml.dvpl"), Mode.DECOMPRESS) == Path("d/name.yaml")
    with pytest.raises(ValueError):
        output_path(Path("d/name.yaml"), Mode.DECOMPRESS)
    with pytest.raises(ValueError):
        output_path(Path("d/name.yaml.dvpl"), Mode.VERIFY)


def test_bare_extension_is_not_a_container():
    assert decide(Path(".dvpl"), Mode.DECOMPRESS) is Decision.IGNORE
    assert decide(Path(".dvpl"), Mode.VERIFY) is Decision.IGNORE
    assert decide(Path(".dvpl"), Mode.COMPRESS) is Decision.CONVERT
    assert output_path(Path("d/.dvpl"), Mode.COMPRESS) == Path("d/.dvpl.dvpl")


def test_extension_matching_ignores_case():
    assert decide(Path("notes.DVPL"), Mode.DECOMPRESS) is Decision.CONVERT
    assert decide(Path("notes.DVPL"), Mode.COMPRESS) is Decision.IGNORE
    assert output_path(Path("notes.txt.DVPL"), Mode.DECOMPRESS) == Path("notes.txt")
    assert decide(Path("setup.EXE"), Mode.COMPRESS, parse_ignore_list(".exe")) is Decision.IGNORE
