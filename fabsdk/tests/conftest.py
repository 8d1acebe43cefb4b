# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from fabsdk.context import Identity, TransactionContext
from fabsdk.protos.common import Timestamp
from fabsdk.test_support import make_self_signed_cert_pem


@pytest.fixture(scope="session")
def cert_pem() -> bytes:
	return make_self_signed_cert_pem()


@pytest.fixture
def identity(cert_pem: bytes) -> Identity:
	return Identity(mspid="Org1MSP", certificate_pem=cert_pem)


@pytest.fixture
def net_context(identity: Identity) -> TransactionContext:
	return TransactionContext(identity, nonce=b"\x01" * 24, timestamp=Timestamp(seconds=1_500_000_000))


@pytest.fixture
def dev_context(identity: Identity) -> TransactionContext:
	return TransactionContext(identity, dev_mode=True, nonce=b"\x02" * 24, timestamp=Timestamp(seconds=1_500_000_000))
