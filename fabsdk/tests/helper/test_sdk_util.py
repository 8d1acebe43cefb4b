# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import gzip
import io
import os
import tarfile
from pathlib import Path

import pytest

from fabsdk.helper.sdk_util import combine_paths, delete_file_or_directory, generate_tar_gz


def _write_file(path: Path, text: str) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")


def _members(data: bytes) -> dict[str, tarfile.TarInfo]:
	with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tf:
		return {m.name: m for m in tf.getmembers()}


def _read(data: bytes, name: str) -> bytes:
	with tarfile.open(fileobj=io.BytesIO(data), mode="r:gz") as tf:
		fh = tf.extractfile(name)
		assert fh is not None
		return fh.read()


def test_combine_paths() -> None:
	assert combine_paths("src", "github.com/org/mycc") == "src/github.com/org/mycc"
	assert combine_paths("src/", "/a\\b", "") == "src/a/b"
	assert combine_paths() == ""


def test_tar_gz_entries_carry_prefix(tmp_path: Path) -> None:
	_write_file(tmp_path / "main.go", "package main\n")
	_write_file(tmp_path / "lib" / "util.go", "package lib\n")
	(tmp_path / "empty").mkdir()

	data = generate_tar_gz(tmp_path, "src/github.com/org/mycc")
	members = _members(data)
	assert sorted(members) == ["src/github.com/org/mycc/lib/util.go", "src/github.com/org/mycc/main.go"]
	assert _read(data, "src/github.com/org/mycc/main.go") == b"package main\n"


def test_tar_gz_without_prefix(tmp_path: Path) -> None:
	_write_file(tmp_path / "a.txt", "a")
	assert list(_members(generate_tar_gz(tmp_path, ""))) == ["a.txt"]


def test_tar_gz_is_deterministic(tmp_path: Path) -> None:
	_write_file(tmp_path / "b.go", "b")
	_write_file(tmp_path / "a.go", "a")
	first = generate_tar_gz(tmp_path, "src")
	os.utime(tmp_path / "a.go", (1_000_000, 1_000_000))
	second = generate_tar_gz(tmp_path, "src")
	assert first == second
	# gzip header mtime is zeroed as well.
	assert first[4:8] == b"\x00\x00\x00\x00"
	assert gzip.decompress(first)


def test_tar_gz_normalizes_metadata(tmp_path: Path) -> None:
	_write_file(tmp_path / "run.sh", "#!/bin/sh\n")
	_write_file(tmp_path / "data.txt", "x")
	(tmp_path / "run.sh").chmod(0o700)
	members = _members(generate_tar_gz(tmp_path, "src"))
	assert members["src/run.sh"].mode == 0o755
	assert members["src/data.txt"].mode == 0o644
	for m in members.values():
		assert m.mtime == 0
		assert (m.uid, m.gid, m.uname, m.gname) == (0, 0, "", "")


def test_tar_gz_rejects_missing_directory(tmp_path: Path) -> None:
	with pytest.raises(OSError):
		generate_tar_gz(tmp_path / "nope", "src")


def test_delete_file_or_directory(tmp_path: Path) -> None:
	f = tmp_path / "Dockerfile"
	f.write_text("x", encoding="utf-8")
	delete_file_or_directory(f)
	assert not f.exists()

	d = tmp_path / "tree"
	_write_file(d / "a" / "b.txt", "b")
	delete_file_or_directory(d)
	assert not d.exists()

	# Missing paths are a no-op.
	delete_file_or_directory(tmp_path / "missing")
