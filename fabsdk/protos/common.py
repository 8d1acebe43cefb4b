# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Envelope-level messages shared by every proposal (common.proto, identities.proto)."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum
from google.protobuf.message import Message

from fabsdk.protos.descriptors import (
	BYTES,
	INT32,
	MESSAGE,
	STRING,
	TIMESTAMP,
	TIMESTAMP_FILE,
	UINT64,
	field,
	message,
	message_class,
	register_file,
)


class HeaderType(IntEnum):
	MESSAGE = 0
	CONFIG = 1
	CONFIG_UPDATE = 2
	ENDORSER_TRANSACTION = 3
	ORDERER_TRANSACTION = 4
	DELIVER_SEEK_INFO = 5
	CHAINCODE_PACKAGE = 6


register_file(
	"common/common.proto",
	"common",
	[
		message(
			"ChannelHeader",
			[
				field("type", 1, INT32),
				field("version", 2, INT32),
				field("timestamp", 3, MESSAGE, TIMESTAMP),
				field("channel_id", 4, STRING),
				field("tx_id", 5, STRING),
				field("epoch", 6, UINT64),
				field("extension", 7, BYTES),
			],
		),
		message("SignatureHeader", [field("creator", 1, BYTES), field("nonce", 2, BYTES)]),
		message("Header", [field("channel_header", 1, BYTES), field("signature_header", 2, BYTES)]),
	],
	dependencies=[TIMESTAMP_FILE],
)

register_file(
	"msp/identities.proto",
	"msp",
	[message("SerializedIdentity", [field("mspid", 1, STRING), field("id_bytes", 2, BYTES)])],
)

Timestamp = message_class("google.protobuf.Timestamp")
ChannelHeader = message_class("common.ChannelHeader")
SignatureHeader = message_class("common.SignatureHeader")
Header = message_class("common.Header")
# Creator identity: MSP id plus the PEM-encoded certificate bytes.
SerializedIdentity = message_class("msp.SerializedIdentity")


def timestamp_from_datetime(dt: datetime) -> Message:
	if dt.tzinfo is None:
		dt = dt.replace(tzinfo=timezone.utc)
	epoch = datetime(1970, 1, 1, tzinfo=timezone.utc)
	delta = dt - epoch
	return Timestamp(seconds=delta.days * 86400 + delta.seconds, nanos=delta.microseconds * 1000)


def timestamp_now() -> Message:
	return timestamp_from_datetime(datetime.now(timezone.utc))
