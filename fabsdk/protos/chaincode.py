# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Chaincode messages (peer/chaincode.proto)."""

from __future__ import annotations

from enum import IntEnum

from fabsdk.protos.descriptors import (
	BYTES,
	ENUM,
	INT32,
	MESSAGE,
	STRING,
	TIMESTAMP,
	TIMESTAMP_FILE,
	enum,
	field,
	message,
	message_class,
	register_file,
)


class ChaincodeType(IntEnum):
	UNDEFINED = 0
	GOLANG = 1
	NODE = 2
	CAR = 3
	JAVA = 4


class ExecutionEnvironment(IntEnum):
	DOCKER = 0
	SYSTEM = 1


register_file(
	"peer/chaincode.proto",
	"protos",
	[
		message(
			"ChaincodeID",
			[field("path", 1, STRING), field("name", 2, STRING), field("version", 3, STRING)],
		),
		message("ChaincodeInput", [field("args", 1, BYTES, repeated=True)]),
		message(
			"ChaincodeSpec",
			[
				field("type", 1, ENUM, ".protos.ChaincodeSpec.Type"),
				field("chaincode_id", 2, MESSAGE, ".protos.ChaincodeID"),
				field("input", 3, MESSAGE, ".protos.ChaincodeInput"),
				field("timeout", 4, INT32),
			],
			enums=[enum("Type", ChaincodeType)],
		),
		# Deployment descriptor: what to install plus the packaged source.
		# code_package stays empty for development-mode installs.
		message(
			"ChaincodeDeploymentSpec",
			[
				field("chaincode_spec", 1, MESSAGE, ".protos.ChaincodeSpec"),
				field("effective_date", 2, MESSAGE, TIMESTAMP),
				field("code_package", 3, BYTES),
				field("exec_env", 4, ENUM, ".protos.ChaincodeDeploymentSpec.ExecutionEnvironment"),
			],
			enums=[enum("ExecutionEnvironment", ExecutionEnvironment)],
		),
		message(
			"ChaincodeInvocationSpec",
			[
				field("chaincode_spec", 1, MESSAGE, ".protos.ChaincodeSpec"),
				field("id_generation_alg", 2, STRING),
			],
		),
	],
	dependencies=[TIMESTAMP_FILE],
)

ChaincodeID = message_class("protos.ChaincodeID")
ChaincodeInput = message_class("protos.ChaincodeInput")
ChaincodeSpec = message_class("protos.ChaincodeSpec")
ChaincodeDeploymentSpec = message_class("protos.ChaincodeDeploymentSpec")
ChaincodeInvocationSpec = message_class("protos.ChaincodeInvocationSpec")
