# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Protobuf schema registry.

The peer's message definitions are declared as descriptor protos and added
to a private descriptor pool; message classes come from
`message_factory.GetMessageClass`. File names, packages and field numbers
match the peer's common.proto, identities.proto, chaincode.proto and
proposal.proto, so the serialized bytes are what peers expect.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory, timestamp_pb2
from google.protobuf.message import Message

FieldProto = descriptor_pb2.FieldDescriptorProto

STRING = FieldProto.TYPE_STRING
BYTES = FieldProto.TYPE_BYTES
INT32 = FieldProto.TYPE_INT32
UINT64 = FieldProto.TYPE_UINT64
ENUM = FieldProto.TYPE_ENUM
MESSAGE = FieldProto.TYPE_MESSAGE

TIMESTAMP = ".google.protobuf.Timestamp"
TIMESTAMP_FILE = "google/protobuf/timestamp.proto"

POOL = descriptor_pool.DescriptorPool()
POOL.AddSerializedFile(timestamp_pb2.DESCRIPTOR.serialized_pb)


def field(name: str, number: int, type_: int, type_name: str | None = None, *, repeated: bool = False) -> descriptor_pb2.FieldDescriptorProto:
	f = FieldProto(
		name=name,
		number=number,
		type=type_,
		label=FieldProto.LABEL_REPEATED if repeated else FieldProto.LABEL_OPTIONAL,
	)
	if type_name is not None:
		f.type_name = type_name
	return f


def enum(name: str, values: type[IntEnum]) -> descriptor_pb2.EnumDescriptorProto:
	"""Declare a proto enum from an IntEnum; proto3 requires the zero value first."""
	members = sorted(values, key=int)
	return descriptor_pb2.EnumDescriptorProto(
		name=name,
		value=[descriptor_pb2.EnumValueDescriptorProto(name=m.name, number=int(m)) for m in members],
	)


def message(
	name: str,
	fields: Iterable[descriptor_pb2.FieldDescriptorProto],
	*,
	nested: Iterable[descriptor_pb2.DescriptorProto] = (),
	enums: Iterable[descriptor_pb2.EnumDescriptorProto] = (),
) -> descriptor_pb2.DescriptorProto:
	return descriptor_pb2.DescriptorProto(
		name=name,
		field=list(fields),
		nested_type=list(nested),
		enum_type=list(enums),
	)


def map_entry(name: str, key_type: int, value_type: int) -> descriptor_pb2.DescriptorProto:
	"""Nested `<Field>Entry` message backing a `map<K, V>` field."""
	entry = message(name, [field("key", 1, key_type), field("value", 2, value_type)])
	entry.options.map_entry = True
	return entry


def register_file(
	name: str,
	package: str,
	messages: Iterable[descriptor_pb2.DescriptorProto],
	*,
	dependencies: Iterable[str] = (),
) -> None:
	fdp = descriptor_pb2.FileDescriptorProto(
		name=name,
		package=package,
		syntax="proto3",
		dependency=list(dependencies),
		message_type=list(messages),
	)
	POOL.AddSerializedFile(fdp.SerializeToString())


def message_class(full_name: str) -> type[Message]:
	return message_factory.GetMessageClass(POOL.FindMessageTypeByName(full_name))
