# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass, field
from pathlib import Path

from cryptography import x509
from google.protobuf.message import Message

from fabsdk.protos.common import SerializedIdentity, timestamp_now

NONCE_LENGTH = 24


@dataclass(frozen=True)
class Identity:
	"""
	The creator of a proposal: an MSP id and its enrollment certificate.

	The certificate is parsed on construction so that a malformed PEM fails
	here rather than at the peer.
	"""

	mspid: str
	certificate_pem: bytes
	certificate: x509.Certificate = field(init=False, repr=False, compare=False)

	def __post_init__(self) -> None:
		if not self.mspid:
			raise ValueError("identity mspid must be non-empty")
		try:
			cert = x509.load_pem_x509_certificate(self.certificate_pem)
		except ValueError as err:
			raise ValueError(f"invalid PEM certificate for msp '{self.mspid}'") from err
		object.__setattr__(self, "certificate", cert)

	@classmethod
	def from_files(cls, mspid: str, cert_path: Path) -> "Identity":
		return cls(mspid=mspid, certificate_pem=cert_path.read_bytes())

	@property
	def subject(self) -> str:
		return self.certificate.subject.rfc4514_string()

	def serialize(self) -> bytes:
		return SerializedIdentity(mspid=self.mspid, id_bytes=self.certificate_pem).SerializeToString()


def compute_tx_id(nonce: bytes, creator: bytes) -> str:
	"""tx_id = hex(sha256(nonce || creator)), the peer recomputes and checks it."""
	return hashlib.sha256(nonce + creator).hexdigest()


class TransactionContext:
	"""
	Per-proposal ambient state: who is asking, in which mode, and the
	nonce/tx id/timestamp stamped into the headers.
	"""

	def __init__(
		self,
		identity: Identity,
		*,
		dev_mode: bool = False,
		nonce: bytes | None = None,
		timestamp: Message | None = None,
		epoch: int = 0,
	) -> None:
		self.identity = identity
		self.dev_mode = dev_mode
		self.nonce = nonce if nonce is not None else os.urandom(NONCE_LENGTH)
		self.timestamp = timestamp if timestamp is not None else timestamp_now()
		self.epoch = epoch
		self.creator = identity.serialize()
		self.tx_id = compute_tx_id(self.nonce, self.creator)

	def __repr__(self) -> str:
		return f"TransactionContext(mspid={self.identity.mspid!r}, dev_mode={self.dev_mode}, tx_id={self.tx_id!r})"
