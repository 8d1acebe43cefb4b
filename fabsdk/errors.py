# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(frozen=True)
class ChaincodeError(Exception):
	"""
	A structured, serializable error raised while preparing a chaincode install.

	Subclasses pin a stable `reason_code`; the optional fields carry whatever
	context was known when the failure happened.
	"""

	message: str
	chaincode_name: str | None = None
	language: str | None = None
	source_dir: str | None = None
	path_prefix: str | None = None
	artifact_path: str | None = None

	reason_code: ClassVar[str] = "chaincode-error"

	def __str__(self) -> str:
		return self.format_human()

	def to_dict(self) -> dict[str, Any]:
		return {
			"reason_code": self.reason_code,
			"message": self.message,
			"chaincode_name": self.chaincode_name,
			"language": self.language,
			"source_dir": self.source_dir,
			"path_prefix": self.path_prefix,
			"artifact_path": self.artifact_path,
		}

	def format_human(self) -> str:
		parts: list[str] = [f"[{self.reason_code}] {self.message}"]
		if self.chaincode_name:
			parts.append(f"chaincode={self.chaincode_name}")
		if self.language:
			parts.append(f"language={self.language}")
		if self.source_dir:
			parts.append(f"source_dir={self.source_dir}")
		if self.path_prefix:
			parts.append(f"path_prefix={self.path_prefix}")
		if self.artifact_path:
			parts.append(f"artifact_path={self.artifact_path}")
		return " ".join(parts)


class InvalidRequestError(ChaincodeError):
	reason_code = "invalid-request"


class UnsupportedLanguageError(ChaincodeError):
	reason_code = "unsupported-language"


class MissingSourceRootError(ChaincodeError):
	reason_code = "missing-source-root"


class InvalidSourceLayoutError(ChaincodeError):
	reason_code = "invalid-source-layout"


class PackagingError(ChaincodeError):
	reason_code = "packaging-error"


class DescriptorEncodingError(ChaincodeError):
	reason_code = "descriptor-encoding-error"


class CleanupError(ChaincodeError):
	reason_code = "cleanup-error"


class ProposalError(Exception):
	"""Install proposal construction failed; the original failure is `cause` (and `__cause__`)."""

	def __init__(self, message: str, cause: BaseException | None = None) -> None:
		super().__init__(message)
		self.cause = cause

	def to_dict(self) -> dict[str, Any]:
		cause: Any = None
		if isinstance(self.cause, ChaincodeError):
			cause = self.cause.to_dict()
		elif self.cause is not None:
			cause = {"reason_code": type(self.cause).__name__, "message": str(self.cause)}
		return {"message": str(self), "cause": cause}

	def format_human(self) -> str:
		if self.cause is None:
			return str(self)
		return f"{self}: {self.cause}"
