# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from google.protobuf.message import DecodeError

from fabsdk.protos.chaincode import ChaincodeID, ChaincodeInput, ChaincodeSpec, ChaincodeType
from fabsdk.protos.descriptors import POOL
from fabsdk.protos.proposal import ChaincodeProposalPayload


def test_schemas_use_peer_names_and_field_numbers() -> None:
	spec = POOL.FindMessageTypeByName("protos.ChaincodeDeploymentSpec")
	assert spec.file.name == "peer/chaincode.proto"
	assert {f.name: f.number for f in spec.fields} == {
		"chaincode_spec": 1,
		"effective_date": 2,
		"code_package": 3,
		"exec_env": 4,
	}
	payload = POOL.FindMessageTypeByName("protos.ChaincodeProposalPayload")
	assert payload.fields_by_name["transient_map"].message_type.GetOptions().map_entry
	cc_type = POOL.FindEnumTypeByName("protos.ChaincodeSpec.Type")
	assert {v.name: v.number for v in cc_type.values} == {t.name: int(t) for t in ChaincodeType}


def test_default_scalars_are_omitted() -> None:
	assert ChaincodeID().SerializeToString() == b""
	assert ChaincodeID(name="lccc").SerializeToString() == b"\x12\x04lccc"
	assert ChaincodeID(path="p", name="n", version="1").SerializeToString() == b"\x0a\x01p\x12\x01n\x1a\x011"


def test_set_submessage_is_emitted_even_when_empty() -> None:
	spec = ChaincodeSpec(type=ChaincodeType.GOLANG, input=ChaincodeInput())
	# type=1 varint, then input (field 3) as a zero-length message.
	assert spec.SerializeToString() == b"\x08\x01\x1a\x00"


def test_repeated_bytes_keep_order_and_empty_elements() -> None:
	data = ChaincodeInput(args=[b"install", b"", b"x"]).SerializeToString()
	assert data == b"\x0a\x07install\x0a\x00\x0a\x01x"
	assert list(ChaincodeInput.FromString(data).args) == [b"install", b"", b"x"]


def test_map_entries_are_sorted_when_deterministic() -> None:
	payload = ChaincodeProposalPayload(input=b"in", transient_map={"b": b"2", "a": b"1"})
	data = payload.SerializeToString(deterministic=True)
	assert data.index(b"\x0a\x01a") < data.index(b"\x0a\x01b")
	decoded = ChaincodeProposalPayload.FromString(data)
	assert dict(decoded.transient_map) == {"a": b"1", "b": b"2"}
	assert decoded == payload


def test_decode_skips_unknown_fields() -> None:
	# field 15 (varint) and field 9 (length-delimited) are not part of ChaincodeID.
	data = b"\x78\x05" + b"\x4a\x02zz" + ChaincodeID(name="mycc").SerializeToString()
	decoded = ChaincodeID.FromString(data)
	assert decoded.name == "mycc"
	assert decoded.path == ""


def test_decode_rejects_truncated_length() -> None:
	with pytest.raises(DecodeError):
		ChaincodeID.FromString(b"\x12\x05ab")


def test_unknown_enum_value_is_kept_as_int() -> None:
	spec = ChaincodeSpec.FromString(b"\x08\x63")
	assert spec.type == 99
	with pytest.raises(ValueError):
		ChaincodeType(spec.type)


def test_wrong_field_types_are_rejected() -> None:
	with pytest.raises(TypeError):
		ChaincodeID(name=5)  # type: ignore[arg-type]
	with pytest.raises(TypeError):
		ChaincodeInput(args=["install"])  # type: ignore[list-item]
	with pytest.raises(TypeError):
		ChaincodeSpec(type=1.5)  # type: ignore[arg-type]
