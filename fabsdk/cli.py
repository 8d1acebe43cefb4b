# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import hashlib
import json
import logging
import os
import sys
from pathlib import Path

from fabsdk.config import SdkConfig, load_config
from fabsdk.context import Identity, TransactionContext
from fabsdk.errors import ProposalError
from fabsdk.request import ChaincodeLanguage
from fabsdk.transaction.install_proposal_builder import InstallProposalBuilder


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(prog="fabsdk", description="Chaincode lifecycle proposal tooling")
	sub = p.add_subparsers(dest="cmd", required=True)

	install = sub.add_parser("install-proposal", help="Build a chaincode install proposal and write it to a file")
	install.add_argument("--name", required=True, help="Chaincode name")
	install.add_argument("--path", default=None, help="Chaincode path (import-style, required unless --dev-mode)")
	install.add_argument("--version", dest="cc_version", default=None, help="Chaincode version")
	install.add_argument(
		"--lang",
		default=ChaincodeLanguage.GO_LANG.value,
		help="Chaincode language (golang, java; default: golang)",
	)
	install.add_argument("--source-root", default=None, help="Chaincode source root (default: $GOPATH for golang, cwd for java)")
	install.add_argument("--dev-mode", action="store_true", default=None, help="Register the chaincode by name only (no packaging)")
	install.add_argument("--mspid", default=None, help="MSP id of the proposal creator")
	install.add_argument("--cert", type=Path, default=None, help="PEM certificate of the proposal creator")
	install.add_argument("--config", type=Path, default=None, help="Path to a fabsdk-config JSON file")
	install.add_argument("--out", type=Path, required=True, help="Output path for the serialized proposal")
	install.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
	install.add_argument("--verbose", action="store_true", help="Log progress to stderr")
	return p


def _emit_error(obj: dict, *, as_json: bool, human: str) -> None:
	if as_json:
		print(json.dumps({"ok": False, "error": obj}, sort_keys=True, separators=(",", ":")))
	else:
		print(f"fabsdk: {human}", file=sys.stderr)


def _install_proposal(args: argparse.Namespace) -> int:
	if args.verbose:
		logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

	try:
		cfg = SdkConfig.from_env(os.environ)
		if args.config is not None:
			cfg = load_config(args.config, base=cfg)
		mspid = args.mspid or cfg.mspid
		cert_path = args.cert or cfg.cert_path
		if not mspid or cert_path is None:
			raise ValueError("creator identity requires --mspid and --cert (or FABSDK_MSPID / FABSDK_CERT_PATH)")
		identity = Identity.from_files(mspid, cert_path)
	except (OSError, ValueError) as err:
		_emit_error({"reason_code": "config-error", "message": str(err)}, as_json=args.json, human=str(err))
		return 2

	dev_mode = cfg.dev_mode if args.dev_mode is None else bool(args.dev_mode)
	ctx = TransactionContext(identity, dev_mode=dev_mode)
	builder = (
		InstallProposalBuilder.new_builder(config=cfg)
		.context(ctx)
		.chaincode_name(args.name)
		.chaincode_path(args.path)
		.chaincode_version(args.cc_version)
		.chaincode_source(args.source_root)
		.chaincode_language(args.lang)
	)
	try:
		proposal = builder.build()
	except ProposalError as err:
		_emit_error(err.to_dict(), as_json=args.json, human=err.format_human())
		return 2

	data = proposal.SerializeToString()
	args.out.parent.mkdir(parents=True, exist_ok=True)
	args.out.write_bytes(data)
	report = {
		"ok": True,
		"tx_id": ctx.tx_id,
		"dev_mode": dev_mode,
		"proposal_sha256": hashlib.sha256(data).hexdigest(),
		"size": len(data),
		"out": str(args.out),
	}
	if args.json:
		print(json.dumps(report, sort_keys=True, separators=(",", ":")))
	else:
		print(f"wrote install proposal tx_id={ctx.tx_id} ({len(data)} bytes) to {args.out}")
	return 0


def main(argv: list[str] | None = None) -> int:
	p = _build_parser()
	args = p.parse_args(argv)

	if args.cmd == "install-proposal":
		return _install_proposal(args)

	raise AssertionError("unreachable")


if __name__ == "__main__":
	raise SystemExit(main())
