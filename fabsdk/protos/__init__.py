# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Protocol messages exchanged with peers.

`descriptors` registers the schemas with protobuf; `common`, `chaincode` and
`proposal` expose the message classes (field numbers match the peer's .proto
definitions).
"""

from __future__ import annotations

__all__ = [
	"chaincode",
	"common",
	"descriptors",
	"proposal",
]
