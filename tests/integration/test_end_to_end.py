import hashlib
import os
from pathlib import Path
from typing import Iterator, List

import pytest

from dirhash.adapters.filesystem import LocalFS
from dirhash.adapters.hashing import HashlibHasher
from dirhash.adapters.squash import make_squash
from dirhash.domain import EntryType, WalkConfig
from dirhash.services import TreeWalker


class ReversedFS(LocalFS):
    """Concrete FS adapter that enumerates the real tree in reverse path order."""

    def walk(self, root: str, onerror=None) -> Iterator[str]:
        return iter(sorted(super().walk(root, onerror), reverse=True))


def run(root: Path, fs=None, **opts) -> List[str]:
    out: List[str] = []
    cfg = WalkConfig(**opts).validate()
    TreeWalker(
        fs or LocalFS(), HashlibHasher(cfg.hash_algo), cfg, make_squash, emit=out.append
    ).run([str(root)])
    return out


def write_file(p: Path, data: bytes) -> None:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)


def squash_hex(root: Path, **opts) -> str:
    cfg = WalkConfig(squash=True, **opts).validate()
    walker = TreeWalker(
        LocalFS(), HashlibHasher(cfg.hash_algo), cfg, make_squash, emit=lambda line: None
    )
    return walker.process_input(str(root)).squash_hex


def test_per_file_output(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    assert run(tmp_path) == [hashlib.sha256(b"hi").hexdigest() + "  a.txt"]


def test_squash_v1_is_independent_of_enumeration_order(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    write_file(tmp_path / "b.txt", b"there")

    forward = run(tmp_path, squash=True)
    backward = run(tmp_path, fs=ReversedFS(), squash=True)
    assert forward == backward
    assert len(forward) == 1
    assert forward[0].endswith("[squash][v1]")

    # recompute by hand: md5 of (identity + digest) per entry, sorted, concatenated
    parts = []
    for name, data in [("a.txt", b"hi"), ("b.txt", b"there")]:
        contribution = name.encode() + hashlib.sha256(data).digest()
        parts.append(hashlib.md5(contribution).hexdigest())
    buf = "".join(sorted(parts)).encode()
    assert forward == [hashlib.sha256(buf).hexdigest() + "[squash][v1]"]


def test_squash_v2_depends_on_enumeration_order(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    write_file(tmp_path / "b.txt", b"there")

    forward = run(tmp_path, fs=LocalFS(), squash=True, squash_version=2, sort=True)
    backward = run(tmp_path, fs=ReversedFS(), squash=True, squash_version=2)
    sorted_again = run(tmp_path, fs=ReversedFS(), squash=True, squash_version=2, sort=True)
    assert forward[0].endswith("[squash][v2]")
    assert forward == sorted_again
    assert forward != backward


def test_squash_includes_directories(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    without_dir = run(tmp_path, squash=True)
    (tmp_path / "empty").mkdir()
    with_dir = run(tmp_path, squash=True)
    assert without_dir != with_dir


def test_squash_hash_only_and_verify(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    [line] = run(tmp_path, squash=True, hash_only=True)
    assert len(line) == 64
    assert run(tmp_path, squash=True, hash_only=True, hash_verify="0" * 64) == []


def test_squash_verify_drops_mismatching_entries(tmp_path: Path):
    write_file(tmp_path / "both" / "a.txt", b"hi")
    write_file(tmp_path / "both" / "b.txt", b"bye")
    write_file(tmp_path / "only" / "a.txt", b"hi")
    hi = hashlib.sha256(b"hi").hexdigest()

    filtered = squash_hex(tmp_path / "both", hash_only=True, hash_verify=hi)
    assert filtered == squash_hex(tmp_path / "only", hash_only=True)
    assert filtered != squash_hex(tmp_path / "both", hash_only=True)
    # the squash line itself is printed only when it matches the verify value
    assert run(tmp_path / "both", squash=True, hash_only=True, hash_verify=hi) == []


def test_squash_single_file_input_shows_name(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    [line] = run(tmp_path / "a.txt", squash=True)
    hexsum, rest = line.split("  ")
    assert rest == "a.txt[squash][v1]"
    assert len(hexsum) == 64


def test_squash_of_empty_directory(tmp_path: Path):
    empty = hashlib.sha256(b"").hexdigest()
    assert run(tmp_path, squash=True) == [empty + "[squash][v1]"]
    assert run(tmp_path, squash=True, squash_version=2) == [empty + "[squash][v2]"]


def test_squash_verbose_reports_buffer_size(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    out = run(tmp_path, squash=True, verbose=True)
    # one md5 hex string in the v1 buffer
    assert "32 squashed bytes" in out
    out = run(tmp_path, squash=True, squash_version=2, verbose=True)
    # one sha1 digest in the v2 buffer
    assert "20 squashed bytes" in out


def test_dangling_symlink_with_follow(tmp_path: Path):
    write_file(tmp_path / "a.txt", b"hi")
    try:
        os.symlink("/nonexistent", tmp_path / "broken")
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    out = run(tmp_path, follow_symlink=True, sort=True)
    assert out == [
        hashlib.sha256(b"hi").hexdigest() + "  a.txt",
        "1 invalid file",
        "broken (symlink -> invalid file)",
    ]


def test_ignore_dot_dir_keeps_top_level_dotfiles(tmp_path: Path):
    write_file(tmp_path / ".git" / "config", b"[core]")
    write_file(tmp_path / ".env", b"X=1")
    write_file(tmp_path / "a.txt", b"hi")

    out = run(tmp_path, ignore_dot_dir=True, sort=True, swap=True, verbose=True)
    names = [line.split("  ")[0] for line in out if "  " in line]
    assert names == [".env", "a.txt"]
    assert out[-2:] == ["1 ignored file", ".git/config (regular file)"]

    out = run(tmp_path, ignore_dot_file=True, sort=True, swap=True)
    assert [line.split("  ")[0] for line in out] == [".git/config", "a.txt"]

    out = run(tmp_path, ignore_dot=True, sort=True, swap=True)
    assert [line.split("  ")[0] for line in out] == ["a.txt"]


def test_device_input(tmp_path: Path):
    if not os.path.exists("/dev/null"):
        pytest.skip("no /dev/null")
    out: List[str] = []
    cfg = WalkConfig().validate()
    report = TreeWalker(
        LocalFS(), HashlibHasher("sha256"), cfg, make_squash, emit=out.append
    ).process_input("/dev/null")
    assert out == [hashlib.sha256(b"").hexdigest() + "  null"]
    assert report.stats.count(EntryType.DEVICE) == 1
