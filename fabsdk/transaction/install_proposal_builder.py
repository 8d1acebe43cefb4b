# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Install proposal construction.

An install proposal asks peers to store a packaged chaincode locally. It is a
lifecycle invocation: args = ["install", <serialized deployment spec>],
target chaincode = the lifecycle system chaincode, channel = "" (install is
not scoped to a channel).

Two modes:
- development: the chaincode already runs out of process; only its name is
  registered (no path, version or code package),
- networked: the sources are resolved per language layout, packaged into a
  gzip'd tar (with a generated Dockerfile for languages that need one) and
  embedded in the deployment spec.

A generated Dockerfile never outlives the `build()` call that wrote it.
"""

from __future__ import annotations

import functools
import logging
import os
import tarfile
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from string import Template
from typing import Callable, Iterator, Mapping

from fabsdk.config import SdkConfig
from fabsdk.context import TransactionContext
from fabsdk.errors import (
	ChaincodeError,
	CleanupError,
	DescriptorEncodingError,
	InvalidRequestError,
	PackagingError,
	ProposalError,
)
from fabsdk.helper.sdk_util import delete_file_or_directory, generate_tar_gz
from fabsdk.helper.templates import load_template
from fabsdk.protos.chaincode import ChaincodeID, ChaincodeType
from fabsdk.protos.proposal import Proposal
from fabsdk.request import ChaincodeLanguage, InstallRequest
from fabsdk.transaction.proposal_builder import ProposalBuilder
from fabsdk.transaction.proto_utils import create_deployment_spec
from fabsdk.transaction.source_layout import LayoutEnv, ResolvedSource, SourceLayout, layout_for, resolve_source

log = logging.getLogger(__name__)

LCCC_CHAIN_NAME = "lccc"
INSTALL_COMMAND = b"install"
DOCKERFILE_NAME = "Dockerfile"

Archiver = Callable[[Path, str], bytes]
TemplateLoader = Callable[[str], bytes]
DescriptorEncoder = Callable[..., bytes]


class BuilderState(str, Enum):
	CREATED = "created"
	FINALIZED = "finalized"
	FAILED = "failed"


@dataclass(frozen=True)
class PackagedArtifact:
	data: bytes
	build_descriptor_path: Path | None = None


def encode_deployment_spec(
	cc_type: ChaincodeType,
	name: str,
	chaincode_path: str | None,
	chaincode_version: str | None,
	code_package: bytes | None,
) -> bytes:
	return create_deployment_spec(cc_type, name, chaincode_path, chaincode_version, None, code_package).SerializeToString()


def _release_build_descriptor(path: Path, previous: bytes | None, *, logger: logging.Logger, primary_failed: bool) -> None:
	try:
		if previous is not None:
			path.write_bytes(previous)
		else:
			delete_file_or_directory(path)
	except OSError as err:
		cleanup = CleanupError(f"could not remove generated build descriptor: {err}", artifact_path=str(path))
		# Reported only: the outcome of the build stands either way.
		logger.log(logging.WARNING if primary_failed else logging.ERROR, "%s", cleanup.format_human())
		return
	logger.debug("Removed generated %s at [%s]", DOCKERFILE_NAME, path)


@contextmanager
def generated_build_descriptor(
	layout: SourceLayout,
	source_dir: Path,
	chaincode_name: str,
	*,
	template_loader: TemplateLoader,
	logger: logging.Logger,
) -> Iterator[Path | None]:
	"""
	Write the language's Dockerfile into `source_dir` for the duration of the block.

	Yields the file path, or None for languages that need no build descriptor.
	On exit the file is deleted (or a pre-existing Dockerfile is restored),
	whether the block succeeded or raised. A `Dockerfile` entry that is not a
	regular file (a directory, a dangling link) is left untouched and the
	build fails before anything is written. Cleanup failures are logged and
	never change the outcome of the block.
	"""
	if layout.build_descriptor_template is None:
		yield None
		return

	template_name = layout.build_descriptor_template
	try:
		template = template_loader(template_name).decode("utf-8")
	except (OSError, UnicodeDecodeError) as err:
		raise PackagingError(
			f"cannot load build descriptor template {template_name}: {err}",
			chaincode_name=chaincode_name,
			language=layout.language.value,
			source_dir=str(source_dir),
		) from err
	contents = Template(template).safe_substitute(chaincode_name=chaincode_name)

	path = source_dir / DOCKERFILE_NAME

	def packaging_error(message: str) -> PackagingError:
		return PackagingError(
			message,
			chaincode_name=chaincode_name,
			language=layout.language.value,
			source_dir=str(source_dir),
			artifact_path=str(path),
		)

	if (path.exists() or path.is_symlink()) and not path.is_file():
		raise packaging_error(f"{DOCKERFILE_NAME} exists and is not a regular file")
	try:
		previous = path.read_bytes() if path.is_file() else None
	except OSError as err:
		raise packaging_error(f"cannot read existing {DOCKERFILE_NAME}: {err}") from err

	# `path` is now absent or a regular file whose bytes are held in `previous`.
	primary_failed = False
	try:
		try:
			path.write_bytes(contents.encode("utf-8"))
		except OSError as err:
			raise packaging_error(f"cannot write {DOCKERFILE_NAME}: {err}") from err
		logger.debug("Created %s at [%s]", DOCKERFILE_NAME, path)
		yield path
	except BaseException:
		primary_failed = True
		raise
	finally:
		_release_build_descriptor(path, previous, logger=logger, primary_failed=primary_failed)


class InstallProposalBuilder(ProposalBuilder):
	"""
	Fluent, single-use builder for install proposals.

	Usage:
	  proposal = (
	      InstallProposalBuilder.new_builder()
	      .context(ctx)
	      .chaincode_name("mycc")
	      .chaincode_path("github.com/org/mycc")
	      .chaincode_version("1.0")
	      .build()
	  )

	Not safe to share between threads; use one builder per install.
	"""

	def __init__(
		self,
		*,
		logger: logging.Logger | None = None,
		environ: Mapping[str, str] | None = None,
		cwd: Callable[[], Path] | None = None,
		archiver: Archiver | None = None,
		template_loader: TemplateLoader | None = None,
		encoder: DescriptorEncoder | None = None,
		config: SdkConfig | None = None,
	) -> None:
		super().__init__(logger=logger if logger is not None else log)
		self._config = config if config is not None else SdkConfig()
		self._environ = environ if environ is not None else os.environ
		self._cwd = cwd if cwd is not None else Path.cwd
		self._archiver = archiver if archiver is not None else generate_tar_gz
		if template_loader is None:
			template_loader = functools.partial(load_template, template_dir=self._config.template_dir)
		self._template_loader = template_loader
		self._encoder = encoder if encoder is not None else encode_deployment_spec
		self._request = InstallRequest()
		self._state = BuilderState.CREATED

	@classmethod
	def new_builder(cls, **kwargs) -> "InstallProposalBuilder":
		return cls(**kwargs)

	@classmethod
	def from_request(cls, request: InstallRequest, context: TransactionContext, **kwargs) -> "InstallProposalBuilder":
		builder = cls(**kwargs)
		builder.context(context)
		builder.chaincode_name(request.chaincode_name)
		builder.chaincode_path(request.chaincode_path)
		builder.chaincode_source(request.chaincode_source)
		builder.chaincode_version(request.chaincode_version)
		builder.chaincode_language(request.chaincode_language)
		return builder

	@property
	def state(self) -> BuilderState:
		return self._state

	@property
	def request(self) -> InstallRequest:
		return self._request

	def _check_mutable(self) -> None:
		if self._state is not BuilderState.CREATED:
			raise RuntimeError(f"install proposal builder is single-use (state: {self._state.value})")

	def chaincode_name(self, chaincode_name: str | None) -> "InstallProposalBuilder":
		self._check_mutable()
		self._request.chaincode_name = chaincode_name
		return self

	def chaincode_path(self, chaincode_path: str | None) -> "InstallProposalBuilder":
		self._check_mutable()
		self._request.chaincode_path = chaincode_path
		return self

	def chaincode_source(self, chaincode_source: Path | str | None) -> "InstallProposalBuilder":
		self._check_mutable()
		self._request.chaincode_source = chaincode_source
		return self

	def chaincode_version(self, chaincode_version: str | None) -> "InstallProposalBuilder":
		self._check_mutable()
		self._request.chaincode_version = chaincode_version
		return self

	def chaincode_language(self, chaincode_language: ChaincodeLanguage | str) -> "InstallProposalBuilder":
		self._check_mutable()
		self._request.chaincode_language = ChaincodeLanguage.coerce(chaincode_language)
		return self

	def build(self) -> Proposal:
		self._check_mutable()
		try:
			self._construct_install_proposal()
		except Exception as err:
			self._state = BuilderState.FAILED
			self._logger.error("install proposal construction failed: %s", err)
			raise ProposalError("installation proposal construction failed", err) from err
		try:
			proposal = super().build()
		except Exception:
			self._state = BuilderState.FAILED
			raise
		self._state = BuilderState.FINALIZED
		return proposal

	def _construct_install_proposal(self) -> None:
		if self._context is None:
			raise InvalidRequestError("install proposal requires a transaction context")
		if not self._request.chaincode_name:
			raise InvalidRequestError("Missing chaincode name in install request")
		if self._context.dev_mode:
			self._create_dev_mode_transaction()
		else:
			self._create_net_mode_transaction()

	def _layout_env(self) -> LayoutEnv:
		return LayoutEnv(
			environ=self._environ,
			cwd=self._cwd,
			logger=self._logger,
			gopath_env_var=self._config.gopath_env_var,
		)

	def _create_net_mode_transaction(self) -> None:
		self._logger.debug("newNetModeTransaction")
		req = self._request
		if not req.chaincode_path:
			raise InvalidRequestError("[NetMode] Missing chaincode path in install request", chaincode_name=req.chaincode_name)

		layout = layout_for(req.chaincode_language)
		resolved = resolve_source(layout, req.chaincode_source, req.chaincode_path, self._layout_env())

		with generated_build_descriptor(
			layout,
			resolved.source_dir,
			req.chaincode_name,
			template_loader=self._template_loader,
			logger=self._logger,
		) as descriptor_path:
			artifact = self._package(layout, resolved, descriptor_path)
			depspec = self._assemble_descriptor(layout.cc_type, req.chaincode_name, req.chaincode_path, req.chaincode_version, artifact.data)

		self._finalize(depspec, layout.cc_type)

	def _create_dev_mode_transaction(self) -> None:
		self._logger.debug("newDevModeTransaction")
		depspec = self._assemble_descriptor(ChaincodeType.GOLANG, self._request.chaincode_name, None, None, None)
		self._finalize(depspec, ChaincodeType.GOLANG)

	def _package(self, layout: SourceLayout, resolved: ResolvedSource, descriptor_path: Path | None) -> PackagedArtifact:
		try:
			data = self._archiver(resolved.source_dir, resolved.path_prefix)
		except (OSError, tarfile.TarError) as err:
			raise PackagingError(
				f"cannot package chaincode sources: {err}",
				chaincode_name=self._request.chaincode_name,
				language=layout.language.value,
				source_dir=str(resolved.source_dir),
				path_prefix=resolved.path_prefix,
			) from err
		self._logger.debug("Packaged %d bytes from %s (prefix %s)", len(data), resolved.source_dir, resolved.path_prefix)
		return PackagedArtifact(data=data, build_descriptor_path=descriptor_path)

	def _assemble_descriptor(
		self,
		cc_type: ChaincodeType,
		name: str,
		chaincode_path: str | None,
		chaincode_version: str | None,
		code_package: bytes | None,
	) -> bytes:
		try:
			return self._encoder(cc_type, name, chaincode_path, chaincode_version, code_package)
		except ChaincodeError:
			raise
		except Exception as err:
			raise DescriptorEncodingError(f"cannot encode deployment spec: {err}", chaincode_name=name) from err

	def _finalize(self, depspec: bytes, cc_type: ChaincodeType) -> None:
		self.args([INSTALL_COMMAND, depspec])
		self.chaincode_id(ChaincodeID(name=LCCC_CHAIN_NAME))
		self.cc_type(cc_type)
		# Installing chaincode is not targeted to a channel.
		self.chain_id("")
