"""Header sets for Snap BI transaction and access-token requests."""

from typing import Any, Dict, Optional

from .signature import (
    CryptoProvider,
    get_asymmetric_signature_sha256_with_rsa,
    get_symmetric_signature_hmac_sha512,
)

# Transaction requests are always signed as POST.
TRANSACTION_SIGNING_METHOD = "post"


def build_transaction_header(
    external_id: str,
    timestamp: str,
    access_token: str,
    request_body: Any,
    path: str,
    client_secret: str,
    partner_id: str,
    device_id: str = "",
    channel_id: str = "",
    debug_id: str = "",
    overrides: Optional[Dict[str, str]] = None,
    crypto: Optional[CryptoProvider] = None,
) -> Dict[str, str]:
    """Build the signed header set for a Snap BI transaction call.

    ``overrides`` are merged last and replace generated values.
    """
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-PARTNER-ID": partner_id,
        "X-EXTERNAL-ID": external_id,
        "X-DEVICE-ID": device_id,
        "CHANNEL-ID": channel_id,
        "debug-id": debug_id,
        "Authorization": f"Bearer {access_token}",
        "X-TIMESTAMP": timestamp,
        "X-SIGNATURE": get_symmetric_signature_hmac_sha512(
            access_token,
            request_body,
            TRANSACTION_SIGNING_METHOD,
            path,
            client_secret,
            timestamp,
            crypto=crypto,
        ),
    }
    if overrides:
        headers.update(overrides)
    return headers


def build_access_token_header(
    client_id: str,
    timestamp: str,
    private_key_pem: str,
    debug_id: str = "",
    overrides: Optional[Dict[str, str]] = None,
    crypto: Optional[CryptoProvider] = None,
) -> Dict[str, str]:
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "X-CLIENT-KEY": client_id,
        "X-SIGNATURE": get_asymmetric_signature_sha256_with_rsa(
            client_id, timestamp, private_key_pem, crypto=crypto
        ),
        "X-TIMESTAMP": timestamp,
        "debug-id": debug_id,
    }
    if overrides:
        headers.update(overrides)
    return headers
