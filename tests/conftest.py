"""
Pytest configuration and fixtures for the Midtrans client tests.
"""

import pytest
import httpx
from pathlib import Path

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from midtrans_client.snap_bi import SnapBiConfig

FIXTURES_DIR = Path(__file__).parent / "fixtures"


class RequestRecorder:
    """Mock transport that records requests and returns a canned response."""

    def __init__(self):
        self.requests = []
        self._responder = lambda request: httpx.Response(200, json={})

    def respond_with(self, status_code=200, **kwargs):
        self._responder = lambda request: httpx.Response(status_code, **kwargs)

    def respond_with_sequence(self, *responses):
        pending = list(responses)
        self._responder = lambda request: pending.pop(0)

    def fail_with(self, exc_class, message="mock transport failure"):
        def responder(request):
            raise exc_class(message, request=request)
        self._responder = responder

    def handler(self, request):
        self.requests.append(request)
        return self._responder(request)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    @property
    def last(self):
        return self.requests[-1]


@pytest.fixture
def recorder():
    return RequestRecorder()


@pytest.fixture(scope="session")
def private_key_pem():
    """PKCS#8 RSA private key used for the golden signatures."""
    return (FIXTURES_DIR / "snap_bi_private_key.pem").read_text()


@pytest.fixture(scope="session")
def public_key_pem():
    """SPKI public key matching ``private_key_pem``."""
    return (FIXTURES_DIR / "snap_bi_public_key.pem").read_text()


@pytest.fixture(scope="session")
def other_public_key_pem():
    """Public key of an unrelated RSA key pair."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture
def snap_bi_config(private_key_pem, public_key_pem):
    return SnapBiConfig(
        is_production=False,
        client_id="C1",
        private_key=private_key_pem,
        client_secret="S1",
        partner_id="PARTNER-1",
        channel_id="12345",
        public_key=public_key_pem,
    )
