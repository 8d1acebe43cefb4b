# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from importlib import resources
from pathlib import Path

RESOURCE_PACKAGE = "fabsdk.resources"


def load_template(name: str, *, template_dir: Path | None = None) -> bytes:
	"""
	Load a build-descriptor template by name.

	`template_dir` (when configured) is searched first so deployments can
	override the packaged templates without patching the library.
	"""
	if not name or "/" in name or "\\" in name or name in (".", ".."):
		raise ValueError(f"invalid template name: {name!r}")
	if template_dir is not None:
		candidate = template_dir / name
		if candidate.is_file():
			return candidate.read_bytes()
	res = resources.files(RESOURCE_PACKAGE).joinpath(name)
	if not res.is_file():
		raise FileNotFoundError(f"template not found: {name}")
	return res.read_bytes()
