# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from datetime import datetime, timezone

from fabsdk.protos.chaincode import ChaincodeDeploymentSpec, ChaincodeType, ExecutionEnvironment
from fabsdk.protos.common import ChannelHeader, HeaderType, SerializedIdentity, Timestamp, timestamp_from_datetime
from fabsdk.transaction.proto_utils import create_channel_header, create_deployment_spec, to_arg_bytes


def test_timestamp_from_datetime() -> None:
	ts = timestamp_from_datetime(datetime(2017, 7, 14, 2, 40, 0, 250000, tzinfo=timezone.utc))
	assert ts == Timestamp(seconds=1_500_000_000, nanos=250_000_000)
	# Naive datetimes are taken as UTC.
	assert timestamp_from_datetime(datetime(1970, 1, 1, 0, 0, 5)) == Timestamp(seconds=5)


def test_channel_header_round_trips_enum_type() -> None:
	hdr = create_channel_header(HeaderType.ENDORSER_TRANSACTION, "abc", "", 0, Timestamp(seconds=7), None)
	decoded = ChannelHeader.FromString(hdr.SerializeToString())
	assert decoded.type == HeaderType.ENDORSER_TRANSACTION
	assert HeaderType(decoded.type) is HeaderType.ENDORSER_TRANSACTION
	assert decoded.channel_id == ""
	assert decoded.tx_id == "abc"
	assert decoded.timestamp == Timestamp(seconds=7)
	assert decoded.extension == b""


def test_channel_header_without_timestamp_leaves_it_unset() -> None:
	hdr = create_channel_header(HeaderType.ENDORSER_TRANSACTION, "abc", "ch", 3, None, None)
	assert not hdr.HasField("timestamp")
	assert hdr.epoch == 3


def test_serialized_identity_layout() -> None:
	data = SerializedIdentity(mspid="Org1MSP", id_bytes=b"PEM").SerializeToString()
	assert data == b"\x0a\x07Org1MSP\x12\x03PEM"


def test_deployment_spec_full() -> None:
	spec = create_deployment_spec(ChaincodeType.JAVA, "mycc", "chaincode/java", "1.0", ["init", b"a"], b"\x1f\x8b")
	decoded = ChaincodeDeploymentSpec.FromString(spec.SerializeToString())
	cs = decoded.chaincode_spec
	assert cs.type == ChaincodeType.JAVA
	assert (cs.chaincode_id.name, cs.chaincode_id.path, cs.chaincode_id.version) == ("mycc", "chaincode/java", "1.0")
	assert list(cs.input.args) == [b"init", b"a"]
	assert decoded.code_package == b"\x1f\x8b"
	assert decoded.exec_env == ExecutionEnvironment.DOCKER


def test_deployment_spec_absent_fields_are_not_on_the_wire() -> None:
	spec = create_deployment_spec(ChaincodeType.GOLANG, "mycc", None, None, None, None)
	data = spec.SerializeToString()
	decoded = ChaincodeDeploymentSpec.FromString(data)
	assert decoded.code_package == b""
	assert decoded.chaincode_spec.chaincode_id.path == ""
	assert decoded.chaincode_spec.chaincode_id.version == ""
	assert decoded.chaincode_spec.HasField("input")
	# Only chaincode_spec (field 1) is present.
	assert data[0] == 0x0A
	assert len(data) == 2 + data[1]


def test_to_arg_bytes_accepts_str_and_bytes() -> None:
	assert to_arg_bytes(["install", b"\x00"]) == (b"install", b"\x00")
	assert to_arg_bytes(None) == ()
