# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Filesystem and packaging helpers used by the transaction builders."""

from __future__ import annotations

__all__ = [
	"sdk_util",
	"templates",
]
