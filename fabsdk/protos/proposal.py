# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Proposal messages (peer/proposal.proto)."""

from __future__ import annotations

from fabsdk.protos.descriptors import BYTES, MESSAGE, STRING, field, map_entry, message, message_class, register_file

register_file(
	"peer/proposal.proto",
	"protos",
	[
		message(
			"ChaincodeHeaderExtension",
			[
				field("payload_visibility", 1, BYTES),
				field("chaincode_id", 2, MESSAGE, ".protos.ChaincodeID"),
			],
		),
		message(
			"ChaincodeProposalPayload",
			[
				field("input", 1, BYTES),
				field("transient_map", 2, MESSAGE, ".protos.ChaincodeProposalPayload.TransientMapEntry", repeated=True),
			],
			nested=[map_entry("TransientMapEntry", STRING, BYTES)],
		),
		# Transport-ready proposal: serialized Header + ChaincodeProposalPayload.
		message(
			"Proposal",
			[field("header", 1, BYTES), field("payload", 2, BYTES), field("extension", 3, BYTES)],
		),
	],
	dependencies=["peer/chaincode.proto"],
)

ChaincodeHeaderExtension = message_class("protos.ChaincodeHeaderExtension")
ChaincodeProposalPayload = message_class("protos.ChaincodeProposalPayload")
Proposal = message_class("protos.Proposal")
