# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Chaincode source layouts.

Each supported language is one `SourceLayout` entry carrying its own resolver,
the peer-side chaincode type and, when the language needs one, the name of the
build-descriptor template. Languages without an entry are unsupported.

Resolvers map (source root, chaincode path) to:
- the absolute directory holding the chaincode sources,
- the path prefix those sources get inside the packaged archive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Callable, Mapping

from fabsdk.errors import InvalidRequestError, InvalidSourceLayoutError, MissingSourceRootError, UnsupportedLanguageError
from fabsdk.helper.sdk_util import combine_paths
from fabsdk.protos.chaincode import ChaincodeType
from fabsdk.request import ChaincodeLanguage, language_label


@dataclass(frozen=True)
class ResolvedSource:
	source_dir: Path
	path_prefix: str


@dataclass(frozen=True)
class LayoutEnv:
	"""What a resolver may consult besides its arguments."""

	environ: Mapping[str, str]
	cwd: Callable[[], Path]
	logger: logging.Logger
	gopath_env_var: str = "GOPATH"

	def absolute(self, path: Path) -> Path:
		return path if path.is_absolute() else self.cwd() / path


Resolver = Callable[[str | None, str, LayoutEnv], ResolvedSource]


@dataclass(frozen=True)
class SourceLayout:
	language: ChaincodeLanguage
	cc_type: ChaincodeType
	resolve: Resolver
	build_descriptor_template: str | None = None


def chaincode_path_parts(chaincode_path: str) -> tuple[str, ...]:
	"""
	Split an import-style chaincode path into segments.

	A leading separator is dropped (the path is always taken relative to the
	source root); `..` segments are rejected so the resolved directory cannot
	leave the source root. A path with no segments left (`.` or `/`) names
	the source root itself.
	"""
	p = PurePosixPath(chaincode_path.replace("\\", "/"))
	parts = tuple(seg for seg in p.parts if seg not in ("/", "."))
	if any(seg == ".." for seg in parts):
		raise InvalidRequestError(f"chaincode path must not contain '..', got: {chaincode_path}")
	return parts


def _resolve_golang(source_root: str | None, chaincode_path: str, env: LayoutEnv) -> ResolvedSource:
	root = source_root
	if root is None:
		root = env.environ.get(env.gopath_env_var)
		env.logger.info("Using %s: %s", env.gopath_env_var, root)
	if not root:
		message = f"[NetMode] Neither the golang chaincode source directory nor the {env.gopath_env_var} environment variable is set"
		env.logger.error(message)
		raise MissingSourceRootError(message, language=ChaincodeLanguage.GO_LANG.value)
	env.logger.info("Looking for Golang chaincode in %s", root)
	parts = chaincode_path_parts(chaincode_path)
	return ResolvedSource(
		source_dir=env.absolute(Path(root, "src", *parts)),
		path_prefix=combine_paths("src", *parts),
	)


def _resolve_java(source_root: str | None, chaincode_path: str, env: LayoutEnv) -> ResolvedSource:
	root = source_root if source_root else str(env.cwd())
	env.logger.info("Looking for Java chaincode in %s", root)
	parts = chaincode_path_parts(chaincode_path)
	return ResolvedSource(source_dir=env.absolute(Path(root, *parts)), path_prefix="src")


SOURCE_LAYOUTS: dict[ChaincodeLanguage, SourceLayout] = {
	ChaincodeLanguage.GO_LANG: SourceLayout(
		language=ChaincodeLanguage.GO_LANG,
		cc_type=ChaincodeType.GOLANG,
		resolve=_resolve_golang,
	),
	ChaincodeLanguage.JAVA: SourceLayout(
		language=ChaincodeLanguage.JAVA,
		cc_type=ChaincodeType.JAVA,
		resolve=_resolve_java,
		build_descriptor_template="Java.Docker",
	),
}


def layout_for(language: Any) -> SourceLayout:
	layout = SOURCE_LAYOUTS.get(language) if isinstance(language, ChaincodeLanguage) else None
	if layout is None:
		raise UnsupportedLanguageError(f"Unexpected chaincode language: {language_label(language)}", language=language_label(language))
	return layout


def resolve_source(layout: SourceLayout, source_root: Path | str | None, chaincode_path: str, env: LayoutEnv) -> ResolvedSource:
	"""Resolve and check that the chaincode source directory exists and is a directory."""
	root = str(source_root) if source_root is not None else None
	resolved = layout.resolve(root, chaincode_path, env)
	source_dir = resolved.source_dir
	lang = layout.language.value
	if not source_dir.exists():
		message = f"The project source directory does not exist: {source_dir}"
		env.logger.error(message)
		raise InvalidSourceLayoutError(message, language=lang, source_dir=str(source_dir), path_prefix=resolved.path_prefix)
	if not source_dir.is_dir():
		message = f"The project source directory is not a directory: {source_dir}"
		env.logger.error(message)
		raise InvalidSourceLayoutError(message, language=lang, source_dir=str(source_dir), path_prefix=resolved.path_prefix)
	env.logger.debug("Project source directory: %s", source_dir)
	return resolved
