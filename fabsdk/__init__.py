# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
fabsdk: client-side construction of chaincode lifecycle proposals.

Subpackages:
  protos: protobuf schemas for the peer/common messages
  helper: archive builder, path helpers and template resources
  transaction: proposal builders (base + install)
"""

__all__ = ["helper", "protos", "transaction"]
