"""Canonical signature protocol for Snap BI requests and notifications.

Three string-to-sign formats are used, all order-sensitive:

* transaction request: ``METHOD:PATH:ACCESS_TOKEN:SHA256_HEX(BODY):TIMESTAMP``
  signed with HMAC-SHA512 and the client secret
* access-token request: ``CLIENT_ID|TIMESTAMP`` signed with RSA-SHA256
* notification: ``POST:PATH:SHA256_HEX(BODY):TIMESTAMP`` verified with
  RSA-SHA256 against the Midtrans public key

Bodies are minified but never key-sorted: the hash must match the bytes
actually transmitted, which keep the caller's key order.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..exceptions import CryptoError

logger = logging.getLogger(__name__)

_PEM_BOUNDARY = re.compile(r"-----(BEGIN|END)[^-]*-----")
_WHITESPACE = re.compile(r"\s")


def canonicalize(value: Any) -> str:
    """Minify ``value`` to JSON without reordering its keys."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def pem_to_der(pem: str) -> bytes:
    """Strip PEM armour and whitespace and decode the base64 payload."""
    stripped = _WHITESPACE.sub("", _PEM_BOUNDARY.sub("", pem))
    return base64.b64decode(stripped, validate=True)


class CryptoProvider(ABC):
    """Cryptographic primitives used by the signature protocol."""

    @abstractmethod
    def sha256_hex(self, data: str) -> str:
        """Lowercase hex SHA-256 digest of the UTF-8 encoding of ``data``."""

    @abstractmethod
    def hmac_sha512(self, data: str, secret: str) -> bytes:
        """Raw HMAC-SHA512 of ``data`` keyed with ``secret``."""

    @abstractmethod
    def rsa_sign(self, data: str, private_key_pem: str) -> bytes:
        """Raw RSASSA-PKCS1-v1_5 SHA-256 signature with a PKCS#8 private key.

        Raises:
            CryptoError: If the key cannot be imported or signing fails
        """

    @abstractmethod
    def rsa_verify(self, data: str, signature: bytes, public_key_pem: str) -> bool:
        """Verify an RSASSA-PKCS1-v1_5 SHA-256 signature with an SPKI public key.

        May raise on malformed keys; callers decide how to treat that.
        """


class DefaultCryptoProvider(CryptoProvider):
    """``hashlib``/``hmac`` for digests and ``cryptography`` for RSA."""

    def sha256_hex(self, data: str) -> str:
        return hashlib.sha256(data.encode("utf-8")).hexdigest()

    def hmac_sha512(self, data: str, secret: str) -> bytes:
        return hmac.new(
            secret.encode("utf-8"), data.encode("utf-8"), hashlib.sha512
        ).digest()

    def rsa_sign(self, data: str, private_key_pem: str) -> bytes:
        try:
            private_key = serialization.load_der_private_key(
                pem_to_der(private_key_pem), password=None
            )
        except (ValueError, TypeError, binascii.Error) as exc:
            raise CryptoError(f"Invalid RSA private key: {exc}") from exc
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise CryptoError("Private key is not an RSA key")
        return private_key.sign(data.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256())

    def rsa_verify(self, data: str, signature: bytes, public_key_pem: str) -> bool:
        public_key = serialization.load_der_public_key(pem_to_der(public_key_pem))
        if not isinstance(public_key, rsa.RSAPublicKey):
            raise TypeError("Public key is not an RSA key")
        try:
            public_key.verify(
                signature, data.encode("utf-8"), padding.PKCS1v15(), hashes.SHA256()
            )
        except InvalidSignature:
            return False
        return True


default_crypto = DefaultCryptoProvider()


def hash_body(body: Any, crypto: Optional[CryptoProvider] = None) -> str:
    """SHA-256 hex digest of the canonical form of ``body``."""
    crypto = crypto or default_crypto
    return crypto.sha256_hex(canonicalize(body))


def get_symmetric_signature_hmac_sha512(
    access_token: str,
    request_body: Any,
    method: str,
    path: str,
    client_secret: str,
    timestamp: str,
    crypto: Optional[CryptoProvider] = None,
) -> str:
    """Sign a transaction request with HMAC-SHA512.

    Args:
        access_token: B2B access token sent as the bearer token
        request_body: Body exactly as it will be transmitted
        method: HTTP method, upper-cased before signing
        path: Endpoint path, e.g. ``/v1.0/debit/payment-host-to-host``
        client_secret: Shared secret used as the HMAC key
        timestamp: Value of the ``X-TIMESTAMP`` header

    Returns:
        Base64-encoded signature

    Raises:
        CryptoError: If the MAC cannot be computed
    """
    crypto = crypto or default_crypto
    try:
        string_to_sign = ":".join(
            [method.upper(), path, access_token, hash_body(request_body, crypto), timestamp]
        )
        mac = crypto.hmac_sha512(string_to_sign, client_secret)
    except CryptoError:
        raise
    except Exception as exc:
        raise CryptoError(f"Failed to compute HMAC-SHA512 signature: {exc}") from exc
    return base64.b64encode(mac).decode("ascii")


def get_asymmetric_signature_sha256_with_rsa(
    client_id: str,
    timestamp: str,
    private_key_pem: str,
    crypto: Optional[CryptoProvider] = None,
) -> str:
    """Sign an access-token request as ``client_id|timestamp`` with RSA-SHA256.

    Raises:
        CryptoError: If the PEM is malformed or signing fails
    """
    crypto = crypto or default_crypto
    string_to_sign = f"{client_id}|{timestamp}"
    try:
        signature = crypto.rsa_sign(string_to_sign, private_key_pem)
    except CryptoError:
        raise
    except Exception as exc:
        raise CryptoError(f"Failed to compute RSA signature: {exc}") from exc
    return base64.b64encode(signature).decode("ascii")


def verify_signature(
    data: str,
    signature: str,
    public_key_pem: str,
    crypto: Optional[CryptoProvider] = None,
) -> bool:
    """Verify a base64 RSA-SHA256 signature over ``data``.

    Never raises: a malformed key or signature counts as a failed verification.
    """
    crypto = crypto or default_crypto
    try:
        raw_signature = base64.b64decode(signature, validate=True)
        return bool(crypto.rsa_verify(data, raw_signature, public_key_pem))
    except Exception as exc:
        logger.warning("Signature verification error: %s", exc)
        return False


def notification_string_to_sign(
    payload: Any, path: str, timestamp: str, crypto: Optional[CryptoProvider] = None
) -> str:
    return ":".join(["POST", path, hash_body(payload, crypto), timestamp])
