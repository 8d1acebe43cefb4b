# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
SDK configuration (v0).

Configuration comes from the process environment and, optionally, a small JSON
file. File values win over environment values. The file format is pinned:

  {"format": "fabsdk-config", "version": 0, "dev_mode": false, ...}
"""

from __future__ import annotations

import json
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

ENV_DEV_MODE = "FABSDK_DEV_MODE"
ENV_GOPATH_VAR = "FABSDK_GOPATH_ENV"
ENV_TEMPLATE_DIR = "FABSDK_TEMPLATE_DIR"
ENV_MSPID = "FABSDK_MSPID"
ENV_CERT_PATH = "FABSDK_CERT_PATH"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class SdkConfig:
	dev_mode: bool = False
	gopath_env_var: str = "GOPATH"
	template_dir: Path | None = None
	mspid: str | None = None
	cert_path: Path | None = None

	@classmethod
	def from_env(cls, environ: Mapping[str, str]) -> "SdkConfig":
		cfg = cls()
		raw_dev = environ.get(ENV_DEV_MODE)
		if raw_dev is not None:
			cfg = replace(cfg, dev_mode=_parse_bool(raw_dev, what=ENV_DEV_MODE))
		gopath_var = environ.get(ENV_GOPATH_VAR)
		if gopath_var:
			cfg = replace(cfg, gopath_env_var=gopath_var)
		template_dir = environ.get(ENV_TEMPLATE_DIR)
		if template_dir:
			cfg = replace(cfg, template_dir=Path(template_dir))
		mspid = environ.get(ENV_MSPID)
		if mspid:
			cfg = replace(cfg, mspid=mspid)
		cert_path = environ.get(ENV_CERT_PATH)
		if cert_path:
			cfg = replace(cfg, cert_path=Path(cert_path))
		return cfg

	def to_dict(self) -> dict[str, Any]:
		return {
			"dev_mode": self.dev_mode,
			"gopath_env_var": self.gopath_env_var,
			"template_dir": str(self.template_dir) if self.template_dir is not None else None,
			"mspid": self.mspid,
			"cert_path": str(self.cert_path) if self.cert_path is not None else None,
		}


def _parse_bool(raw: str, *, what: str) -> bool:
	val = raw.strip().lower()
	if val in _TRUE_VALUES:
		return True
	if val in _FALSE_VALUES:
		return False
	raise ValueError(f"{what} must be a boolean flag, got: {raw}")


def _load_config_json(path: Path) -> dict[str, Any]:
	data = json.loads(path.read_text(encoding="utf-8"))
	if not isinstance(data, dict):
		raise ValueError("config file must be a JSON object")
	if data.get("format") != "fabsdk-config" or data.get("version") != 0:
		raise ValueError("unsupported config format/version")
	allowed = {"format", "version", "dev_mode", "gopath_env_var", "template_dir", "mspid", "cert_path"}
	unknown = sorted(set(data.keys()) - allowed)
	if unknown:
		raise ValueError(f"config file has unknown fields: {', '.join(unknown)}")
	return data


def load_config(path: Path, *, base: SdkConfig | None = None) -> SdkConfig:
	"""
	Load a config file on top of `base` (defaults when omitted).

	Relative `template_dir` / `cert_path` values are resolved against the
	directory holding the config file.
	"""
	data = _load_config_json(path)
	cfg = base if base is not None else SdkConfig()

	if "dev_mode" in data:
		if not isinstance(data["dev_mode"], bool):
			raise ValueError("config field 'dev_mode' must be a boolean")
		cfg = replace(cfg, dev_mode=data["dev_mode"])
	if "gopath_env_var" in data:
		val = data["gopath_env_var"]
		if not isinstance(val, str) or not val:
			raise ValueError("config field 'gopath_env_var' must be a non-empty string")
		cfg = replace(cfg, gopath_env_var=val)
	if "mspid" in data:
		val = data["mspid"]
		if not isinstance(val, str) or not val:
			raise ValueError("config field 'mspid' must be a non-empty string")
		cfg = replace(cfg, mspid=val)
	for key in ("template_dir", "cert_path"):
		if key not in data:
			continue
		val = data[key]
		if not isinstance(val, str) or not val:
			raise ValueError(f"config field '{key}' must be a non-empty string")
		p = Path(val)
		if not p.is_absolute():
			p = path.parent / p
		cfg = replace(cfg, **{key: p})
	return cfg
