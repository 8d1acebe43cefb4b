# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json
from pathlib import Path

import pytest

from fabsdk.config import SdkConfig, load_config


def _write_json(path: Path, obj: object) -> None:
	path.write_text(json.dumps(obj), encoding="utf-8")


def test_defaults() -> None:
	cfg = SdkConfig()
	assert cfg.dev_mode is False
	assert cfg.gopath_env_var == "GOPATH"
	assert cfg.template_dir is None


def test_from_env() -> None:
	cfg = SdkConfig.from_env(
		{
			"FABSDK_DEV_MODE": "Yes",
			"FABSDK_GOPATH_ENV": "CC_GOPATH",
			"FABSDK_TEMPLATE_DIR": "/etc/fabsdk/templates",
			"FABSDK_MSPID": "Org1MSP",
			"FABSDK_CERT_PATH": "/etc/fabsdk/cert.pem",
		}
	)
	assert cfg == SdkConfig(
		dev_mode=True,
		gopath_env_var="CC_GOPATH",
		template_dir=Path("/etc/fabsdk/templates"),
		mspid="Org1MSP",
		cert_path=Path("/etc/fabsdk/cert.pem"),
	)
	assert SdkConfig.from_env({"FABSDK_DEV_MODE": "0"}).dev_mode is False


def test_from_env_rejects_bad_flag() -> None:
	with pytest.raises(ValueError, match="FABSDK_DEV_MODE"):
		SdkConfig.from_env({"FABSDK_DEV_MODE": "maybe"})


def test_load_config_overrides_base(tmp_path: Path) -> None:
	p = tmp_path / "fabsdk.json"
	_write_json(p, {"format": "fabsdk-config", "version": 0, "dev_mode": True, "template_dir": "tpl", "cert_path": "/abs/cert.pem"})
	cfg = load_config(p, base=SdkConfig(mspid="Org1MSP"))
	assert cfg.dev_mode is True
	assert cfg.template_dir == tmp_path / "tpl"
	assert cfg.cert_path == Path("/abs/cert.pem")
	assert cfg.mspid == "Org1MSP"
	assert cfg.to_dict()["template_dir"] == str(tmp_path / "tpl")


@pytest.mark.parametrize(
	"obj, match",
	[
		([], "JSON object"),
		({"format": "other", "version": 0}, "format/version"),
		({"format": "fabsdk-config", "version": 1}, "format/version"),
		({"format": "fabsdk-config", "version": 0, "colour": "blue"}, "unknown fields: colour"),
		({"format": "fabsdk-config", "version": 0, "dev_mode": "yes"}, "dev_mode"),
		({"format": "fabsdk-config", "version": 0, "gopath_env_var": ""}, "gopath_env_var"),
		({"format": "fabsdk-config", "version": 0, "template_dir": 3}, "template_dir"),
	],
)
def test_load_config_rejects_invalid(tmp_path: Path, obj: object, match: str) -> None:
	p = tmp_path / "fabsdk.json"
	_write_json(p, obj)
	with pytest.raises(ValueError, match=match):
		load_config(p)
