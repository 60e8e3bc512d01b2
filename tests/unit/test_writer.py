"""Tests for BinaryWriter."""

import os
from pathlib import Path

import pytest

from ctb_archive.errors import BinaryExportError
from ctb_archive.protocols import BinaryWriterProtocol
from ctb_archive.writer import BinaryWriter


def test_writer_satisfies_protocol(tmp_path: Path) -> None:
    assert isinstance(BinaryWriter(tmp_path), BinaryWriterProtocol)


def test_write_creates_missing_directory(tmp_path: Path) -> None:
    out = tmp_path / "a" / "b"
    writer = BinaryWriter(out)

    path = writer.write("1_2.png", b"data")

    assert Path(path) == (out / "1_2.png").resolve()
    assert (out / "1_2.png").read_bytes() == b"data"


def test_existing_directory_is_not_an_error(tmp_path: Path) -> None:
    BinaryWriter(tmp_path).write("x.bin", b"1")
    BinaryWriter(tmp_path).write("y.bin", b"2")
    assert sorted(p.name for p in tmp_path.iterdir()) == ["x.bin", "y.bin"]


def test_identical_file_is_not_rewritten(tmp_path: Path) -> None:
    writer = BinaryWriter(tmp_path)
    writer.write("x.bin", b"same")
    before = os.stat(tmp_path / "x.bin").st_mtime_ns
    os.utime(tmp_path / "x.bin", ns=(before - 10_000_000, before - 10_000_000))

    BinaryWriter(tmp_path).write("x.bin", b"same")

    assert os.stat(tmp_path / "x.bin").st_mtime_ns == before - 10_000_000


def test_changed_file_is_overwritten(tmp_path: Path) -> None:
    (tmp_path / "x.bin").write_bytes(b"old")
    BinaryWriter(tmp_path).write("x.bin", b"new")
    assert (tmp_path / "x.bin").read_bytes() == b"new"


def test_write_rejects_escaping_names(tmp_path: Path) -> None:
    writer = BinaryWriter(tmp_path / "out")
    with pytest.raises(ValueError, match="must be relative"):
        writer.write("/etc/passwd", b"")
    with pytest.raises(ValueError, match="Path escapes outdir"):
        writer.write("../x.bin", b"")


def test_directory_path_that_is_a_file_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(BinaryExportError, match="Cannot create output directory"):
        BinaryWriter(blocker).write("1_0.png", b"data")
