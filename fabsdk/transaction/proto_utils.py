# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from typing import Iterable

from google.protobuf.message import Message

from fabsdk.protos.chaincode import (
	ChaincodeDeploymentSpec,
	ChaincodeID,
	ChaincodeInput,
	ChaincodeInvocationSpec,
	ChaincodeSpec,
	ChaincodeType,
	ExecutionEnvironment,
)
from fabsdk.protos.common import ChannelHeader, HeaderType


def to_arg_bytes(args: Iterable[str | bytes] | None) -> tuple[bytes, ...]:
	out: list[bytes] = []
	for a in args or ():
		if isinstance(a, str):
			out.append(a.encode("utf-8"))
		elif isinstance(a, (bytes, bytearray)):
			out.append(bytes(a))
		else:
			raise TypeError(f"chaincode argument must be str or bytes, got {type(a).__name__}")
	return tuple(out)


def create_deployment_spec(
	cc_type: ChaincodeType,
	name: str,
	chaincode_path: str | None,
	chaincode_version: str | None,
	args: Iterable[str | bytes] | None,
	code_package: bytes | None,
) -> Message:
	"""
	Build a deployment descriptor.

	Absent path/version/code package are left at their proto3 defaults (and
	therefore omitted on the wire), which is what development-mode installs rely on.
	"""
	chaincode_id = ChaincodeID(name=name, path=chaincode_path or "", version=chaincode_version or "")
	spec = ChaincodeSpec(
		type=cc_type,
		chaincode_id=chaincode_id,
		input=ChaincodeInput(args=to_arg_bytes(args)),
	)
	return ChaincodeDeploymentSpec(
		chaincode_spec=spec,
		code_package=code_package if code_package is not None else b"",
		exec_env=ExecutionEnvironment.DOCKER,
	)


def create_channel_header(
	header_type: HeaderType,
	tx_id: str,
	channel_id: str,
	epoch: int,
	timestamp: Message | None,
	extension: Message | None,
) -> Message:
	header = ChannelHeader(
		type=header_type,
		channel_id=channel_id,
		tx_id=tx_id,
		epoch=epoch,
		extension=extension.SerializeToString() if extension is not None else b"",
	)
	if timestamp is not None:
		header.timestamp.CopyFrom(timestamp)
	return header


def create_chaincode_invocation_spec(
	chaincode_id: Message,
	cc_type: ChaincodeType,
	args: Iterable[bytes],
) -> Message:
	spec = ChaincodeSpec(type=cc_type, chaincode_id=chaincode_id, input=ChaincodeInput(args=tuple(args)))
	return ChaincodeInvocationSpec(chaincode_spec=spec)
