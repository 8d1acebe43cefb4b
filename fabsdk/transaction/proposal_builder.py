# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from google.protobuf.message import Message

from fabsdk.context import TransactionContext
from fabsdk.protos.chaincode import ChaincodeType
from fabsdk.protos.common import Header, HeaderType, SignatureHeader
from fabsdk.protos.proposal import ChaincodeHeaderExtension, ChaincodeProposalPayload, Proposal
from fabsdk.transaction.proto_utils import create_chaincode_invocation_spec, create_channel_header, to_arg_bytes

log = logging.getLogger(__name__)


class ProposalBuilder:
	"""
	Assembles the generic proposal envelope.

	Subclasses fill in what is invoked (`args`, `chaincode_id`, `cc_type`,
	`chain_id`) and then call `build()`; headers, creator and nonce come from
	the transaction context.
	"""

	def __init__(self, *, logger: logging.Logger | None = None) -> None:
		self._logger = logger if logger is not None else log
		self._context: TransactionContext | None = None
		self._chaincode_id: Message | None = None
		self._args: tuple[bytes, ...] = ()
		self._chain_id = ""
		self._cc_type = ChaincodeType.GOLANG
		self._transient_map: dict[str, bytes] = {}

	def context(self, context: TransactionContext) -> "ProposalBuilder":
		self._context = context
		return self

	def chaincode_id(self, chaincode_id: Message) -> "ProposalBuilder":
		self._chaincode_id = chaincode_id
		return self

	def args(self, args: Iterable[str | bytes]) -> "ProposalBuilder":
		self._args = to_arg_bytes(args)
		return self

	def chain_id(self, chain_id: str) -> "ProposalBuilder":
		self._chain_id = chain_id
		return self

	def cc_type(self, cc_type: ChaincodeType) -> "ProposalBuilder":
		self._cc_type = cc_type
		return self

	def transient_map(self, transient_map: Mapping[str, bytes]) -> "ProposalBuilder":
		self._transient_map = dict(transient_map)
		return self

	def build(self) -> Proposal:
		return self._create_fabric_proposal()

	def _create_fabric_proposal(self) -> Proposal:
		ctx = self._context
		if ctx is None:
			raise ValueError("proposal requires a transaction context")
		if self._chaincode_id is None:
			raise ValueError("proposal requires a chaincode id")

		extension = ChaincodeHeaderExtension(chaincode_id=self._chaincode_id)
		channel_header = create_channel_header(
			HeaderType.ENDORSER_TRANSACTION,
			ctx.tx_id,
			self._chain_id,
			ctx.epoch,
			ctx.timestamp,
			extension,
		)
		invocation = create_chaincode_invocation_spec(self._chaincode_id, self._cc_type, self._args)
		payload = ChaincodeProposalPayload(input=invocation.SerializeToString(), transient_map=self._transient_map)
		signature_header = SignatureHeader(creator=ctx.creator, nonce=ctx.nonce)
		header = Header(channel_header=channel_header.SerializeToString(), signature_header=signature_header.SerializeToString())
		self._logger.debug("proposal assembled tx_id=%s channel=%r chaincode=%s", ctx.tx_id, self._chain_id, self._chaincode_id.name)
		# Map entries are emitted in key order so equal inputs give equal bytes.
		return Proposal(header=header.SerializeToString(), payload=payload.SerializeToString(deterministic=True))
