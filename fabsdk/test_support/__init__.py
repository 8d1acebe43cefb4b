# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Shared helpers for fabsdk tests.

Kept in the package (rather than a conftest) so test modules can import them
directly.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID
from google.protobuf.message import Message

from fabsdk.protos.chaincode import ChaincodeDeploymentSpec, ChaincodeInvocationSpec
from fabsdk.protos.common import ChannelHeader, Header, SignatureHeader
from fabsdk.protos.proposal import ChaincodeHeaderExtension, ChaincodeProposalPayload, Proposal


def make_self_signed_cert_pem(common_name: str = "user1@org1.example.com") -> bytes:
	key = ec.generate_private_key(ec.SECP256R1())
	name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
	now = datetime.datetime.now(datetime.timezone.utc)
	cert = (
		x509.CertificateBuilder()
		.subject_name(name)
		.issuer_name(name)
		.public_key(key.public_key())
		.serial_number(x509.random_serial_number())
		.not_valid_before(now - datetime.timedelta(days=1))
		.not_valid_after(now + datetime.timedelta(days=30))
		.sign(key, hashes.SHA256())
	)
	return cert.public_bytes(serialization.Encoding.PEM)


@dataclass(frozen=True)
class DecodedProposal:
	channel_header: Message
	signature_header: Message
	extension: Message
	invocation: Message
	transient_map: dict[str, bytes] = field(default_factory=dict)

	@property
	def args(self) -> tuple[bytes, ...]:
		return tuple(self.invocation.chaincode_spec.input.args)

	def deployment_spec(self) -> Message:
		return ChaincodeDeploymentSpec.FromString(self.args[1])


def decode_proposal(proposal: Message | bytes) -> DecodedProposal:
	if isinstance(proposal, (bytes, bytearray)):
		proposal = Proposal.FromString(bytes(proposal))
	header = Header.FromString(proposal.header)
	channel_header = ChannelHeader.FromString(header.channel_header)
	payload = ChaincodeProposalPayload.FromString(proposal.payload)
	return DecodedProposal(
		channel_header=channel_header,
		signature_header=SignatureHeader.FromString(header.signature_header),
		extension=ChaincodeHeaderExtension.FromString(channel_header.extension),
		invocation=ChaincodeInvocationSpec.FromString(payload.input),
		transient_map=dict(payload.transient_map),
	)
