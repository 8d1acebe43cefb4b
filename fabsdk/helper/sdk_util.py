# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source packaging helpers.

`generate_tar_gz` bundles a chaincode source tree into a single gzip'd tar.
The archive is deterministic:
- entries are written in sorted (POSIX path) order,
- entries use fixed mtime/uid/gid and empty owner names,
- file modes are normalized to 0644, or 0755 when the owner execute bit is set,
- the gzip header carries mtime 0 and no file name.
"""

from __future__ import annotations

import gzip
import io
import shutil
import stat
import tarfile
from pathlib import Path, PurePosixPath


def combine_paths(*parts: str) -> str:
	"""Join path segments with forward slashes, dropping empty segments and stray separators."""
	segs: list[str] = []
	for part in parts:
		for seg in part.replace("\\", "/").split("/"):
			if seg:
				segs.append(seg)
	return "/".join(segs)


def _iter_files(source_dir: Path) -> list[tuple[str, Path]]:
	out: list[tuple[str, Path]] = []
	for p in source_dir.rglob("*"):
		if not p.is_file():
			continue
		rel = PurePosixPath(*p.relative_to(source_dir).parts)
		out.append((str(rel), p))
	out.sort(key=lambda item: item[0])
	return out


def _tarinfo(name: str, *, size: int, executable: bool) -> tarfile.TarInfo:
	ti = tarfile.TarInfo(name=name)
	ti.size = size
	ti.mode = 0o755 if executable else 0o644
	ti.mtime = 0
	ti.uid = 0
	ti.gid = 0
	ti.uname = ""
	ti.gname = ""
	ti.type = tarfile.REGTYPE
	return ti


def generate_tar_gz(source_dir: Path, path_prefix: str | None) -> bytes:
	"""
	Return a gzip'd tar of every regular file below `source_dir`.

	Entry names are `<path_prefix>/<relative path>` in forward-slash form
	(just the relative path when `path_prefix` is empty).
	"""
	if not source_dir.is_dir():
		raise NotADirectoryError(f"not a directory: {source_dir}")

	buf = io.BytesIO()
	with gzip.GzipFile(filename="", mode="wb", fileobj=buf, mtime=0) as gz:
		with tarfile.open(fileobj=gz, mode="w", format=tarfile.PAX_FORMAT) as tf:
			for rel, path in _iter_files(source_dir):
				name = combine_paths(path_prefix, rel) if path_prefix else rel
				st = path.stat()
				ti = _tarinfo(name, size=st.st_size, executable=bool(st.st_mode & stat.S_IXUSR))
				with path.open("rb") as fh:
					tf.addfile(ti, fh)
	return buf.getvalue()


def delete_file_or_directory(path: Path) -> None:
	"""Delete `path` whether it is a file or a directory tree; missing paths are ignored."""
	if path.is_dir() and not path.is_symlink():
		shutil.rmtree(path)
	elif path.exists() or path.is_symlink():
		path.unlink()
