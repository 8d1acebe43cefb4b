# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class ChaincodeLanguage(str, Enum):
	GO_LANG = "golang"
	JAVA = "java"

	@classmethod
	def coerce(cls, value: Any) -> Any:
		"""
		Map a user-supplied tag onto a known language.

		Unknown tags are returned unchanged so the failure is reported as an
		unsupported language at build time, with the tag the caller gave.
		"""
		if isinstance(value, cls):
			return value
		if isinstance(value, str):
			try:
				return cls(value.strip().lower())
			except ValueError:
				return value
		return value


def language_label(value: Any) -> str:
	if isinstance(value, ChaincodeLanguage):
		return value.value
	return str(value)


@dataclass
class InstallRequest:
	"""
	Accumulated install state. Mutated only through the builder's setters,
	then consumed once by `build()`.
	"""

	chaincode_name: str | None = None
	chaincode_path: str | None = None
	chaincode_source: Path | str | None = None
	chaincode_version: str | None = None
	chaincode_language: Any = ChaincodeLanguage.GO_LANG
