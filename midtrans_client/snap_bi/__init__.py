"""Snap BI (bank integration) client for direct debit, virtual account and QRIS."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from ..exceptions import ConfigurationError, MidtransError
from .api_requestor import DEFAULT_TIMEOUT, SnapBiApiRequestor, is_error_response
from .config import SnapBiConfig
from .headers import build_access_token_header, build_transaction_header
from .signature import (
    CryptoProvider,
    default_crypto,
    get_asymmetric_signature_sha256_with_rsa,
    get_symmetric_signature_hmac_sha512,
    notification_string_to_sign,
    verify_signature,
)

logger = logging.getLogger(__name__)


class PaymentMethod(str, Enum):
    DIRECT_DEBIT = "directDebit"
    VA = "va"
    QRIS = "qris"
    NOTIFICATION = ""


def current_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds, e.g. ``2024-01-01T00:00:00.000Z``."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class SnapBi:
    """Builder-style client for one Snap BI payment method.

    Create instances through the factories (``SnapBi.direct_debit(config)``,
    ``SnapBi.va(config)``, ``SnapBi.qris(config)``, ``SnapBi.notification(config)``),
    chain ``with_*`` setters, then await an operation::

        response = await (
            SnapBi.direct_debit(config)
            .with_body(body)
            .create_payment(external_id)
        )
    """

    ACCESS_TOKEN = "/v1.0/access-token/b2b"
    PAYMENT_HOST_TO_HOST = "/v1.0/debit/payment-host-to-host"
    CREATE_VA = "/v1.0/transfer-va/create-va"
    DEBIT_STATUS = "/v1.0/debit/status"
    DEBIT_REFUND = "/v1.0/debit/refund"
    DEBIT_CANCEL = "/v1.0/debit/cancel"
    VA_STATUS = "/v1.0/transfer-va/status"
    VA_CANCEL = "/v1.0/transfer-va/delete-va"
    QRIS_PAYMENT = "/v1.0/qr/qr-mpm-generate"
    QRIS_STATUS = "/v1.0/qr/qr-mpm-query"
    QRIS_REFUND = "/v1.0/qr/qr-mpm-refund"
    QRIS_CANCEL = "/v1.0/qr/qr-mpm-cancel"

    _CREATE_PATHS = {
        PaymentMethod.DIRECT_DEBIT: PAYMENT_HOST_TO_HOST,
        PaymentMethod.VA: CREATE_VA,
        PaymentMethod.QRIS: QRIS_PAYMENT,
    }
    _STATUS_PATHS = {
        PaymentMethod.DIRECT_DEBIT: DEBIT_STATUS,
        PaymentMethod.VA: VA_STATUS,
        PaymentMethod.QRIS: QRIS_STATUS,
    }
    _REFUND_PATHS = {
        PaymentMethod.DIRECT_DEBIT: DEBIT_REFUND,
        PaymentMethod.QRIS: QRIS_REFUND,
    }
    _CANCEL_PATHS = {
        PaymentMethod.DIRECT_DEBIT: DEBIT_CANCEL,
        PaymentMethod.VA: VA_CANCEL,
        PaymentMethod.QRIS: QRIS_CANCEL,
    }

    def __init__(
        self,
        payment_method: PaymentMethod,
        config: SnapBiConfig,
        requestor: Optional[SnapBiApiRequestor] = None,
        crypto: Optional[CryptoProvider] = None,
    ) -> None:
        self.payment_method = PaymentMethod(payment_method)
        self.config = config
        self.requestor = requestor or SnapBiApiRequestor(config)
        self.crypto = crypto or default_crypto

        self._access_token_header: Dict[str, str] = {}
        self._transaction_header: Dict[str, str] = {}
        self._body: Dict[str, Any] = {}
        self._access_token = ""
        self._device_id = ""
        self._debug_id = ""
        self._timestamp: Optional[str] = None
        self._timeout: Optional[float] = None
        self._signature = ""
        self._notification_url_path = ""
        self._notification_payload: Dict[str, Any] = {}

    @classmethod
    def direct_debit(cls, config: SnapBiConfig, **kwargs: Any) -> "SnapBi":
        return cls(PaymentMethod.DIRECT_DEBIT, config, **kwargs)

    @classmethod
    def va(cls, config: SnapBiConfig, **kwargs: Any) -> "SnapBi":
        return cls(PaymentMethod.VA, config, **kwargs)

    @classmethod
    def qris(cls, config: SnapBiConfig, **kwargs: Any) -> "SnapBi":
        return cls(PaymentMethod.QRIS, config, **kwargs)

    @classmethod
    def notification(cls, config: SnapBiConfig, **kwargs: Any) -> "SnapBi":
        return cls(PaymentMethod.NOTIFICATION, config, **kwargs)

    def with_access_token_header(self, headers: Dict[str, str]) -> "SnapBi":
        self._access_token_header = {**self._access_token_header, **headers}
        return self

    def with_transaction_header(self, headers: Dict[str, str]) -> "SnapBi":
        self._transaction_header = {**self._transaction_header, **headers}
        return self

    def with_access_token(self, access_token: str) -> "SnapBi":
        self._access_token = access_token
        return self

    def with_body(self, body: Dict[str, Any]) -> "SnapBi":
        self._body = body
        return self

    def with_signature(self, signature: str) -> "SnapBi":
        self._signature = signature
        return self

    def with_timestamp(self, timestamp: str) -> "SnapBi":
        self._timestamp = timestamp
        return self

    def with_notification_payload(self, payload: Dict[str, Any]) -> "SnapBi":
        self._notification_payload = payload
        return self

    def with_notification_url_path(self, path: str) -> "SnapBi":
        self._notification_url_path = path
        return self

    def with_device_id(self, device_id: str) -> "SnapBi":
        self._device_id = device_id
        return self

    def with_debug_id(self, debug_id: str) -> "SnapBi":
        self._debug_id = debug_id
        return self

    def with_timeout(self, timeout: float) -> "SnapBi":
        """Request timeout in seconds."""
        self._timeout = timeout
        return self

    async def create_payment(self, external_id: str) -> Dict[str, Any]:
        return await self._create_connection(external_id, self._path(self._CREATE_PATHS))

    async def cancel(self, external_id: str) -> Dict[str, Any]:
        return await self._create_connection(external_id, self._path(self._CANCEL_PATHS))

    async def refund(self, external_id: str) -> Dict[str, Any]:
        return await self._create_connection(external_id, self._path(self._REFUND_PATHS))

    async def get_status(self, external_id: str) -> Dict[str, Any]:
        return await self._create_connection(external_id, self._path(self._STATUS_PATHS))

    async def get_access_token(self, timestamp: Optional[str] = None) -> Dict[str, Any]:
        """Request a B2B access token.

        Raises:
            MidtransError: If the request fails at the transport level
            ConfigurationError: If a required credential is missing
            CryptoError: If the private key cannot sign the request
        """
        self.config.validate()
        timestamp = timestamp or self._timestamp or current_timestamp()
        headers = build_access_token_header(
            self.config.client_id or "",
            timestamp,
            self.config.private_key or "",
            self._debug_id,
            overrides=self._access_token_header,
            crypto=self.crypto,
        )
        response = await self.requestor.remote_call(
            self.config.get_base_url() + self.ACCESS_TOKEN,
            headers,
            {"grant_type": "client_credentials"},
            self._request_timeout,
        )
        if is_error_response(response):
            raise MidtransError(
                f"Failed to get access token: {response['message']}",
                raw_http_client_data=response,
            )
        return response

    async def is_webhook_notification_verified(self) -> bool:
        """Verify the signature of a received Snap BI notification.

        Returns:
            True when the signature matches, False otherwise

        Raises:
            ConfigurationError: If no public key is configured
        """
        public_key = self.config.public_key
        if not public_key:
            raise ConfigurationError(
                "The public key is null. You need to set the public key in SnapBiConfig.\n"
                "For more details, contact support at support@midtrans.com if you have "
                "any questions."
            )
        if not self._signature or not self._timestamp:
            logger.warning("Notification is missing its signature or timestamp")
            return False

        string_to_sign = notification_string_to_sign(
            self._notification_payload,
            self._notification_url_path,
            self._timestamp,
            crypto=self.crypto,
        )
        return verify_signature(
            string_to_sign, self._signature, public_key, crypto=self.crypto
        )

    get_symmetric_signature_hmac_sha512 = staticmethod(get_symmetric_signature_hmac_sha512)
    get_asymmetric_signature_sha256_with_rsa = staticmethod(
        get_asymmetric_signature_sha256_with_rsa
    )

    @property
    def _request_timeout(self) -> float:
        return self._timeout if self._timeout is not None else DEFAULT_TIMEOUT

    def _path(self, paths: Dict[PaymentMethod, str]) -> str:
        try:
            return paths[self.payment_method]
        except KeyError:
            raise NotImplementedError(
                f"Payment method not implemented: {self.payment_method.value!r}"
            ) from None

    async def _create_connection(self, external_id: str, path: str) -> Dict[str, Any]:
        self.config.validate()
        timestamp = self._timestamp or current_timestamp()

        if not self._access_token:
            token_response = await self.get_access_token(timestamp)
            if not isinstance(token_response, dict) or not token_response.get("accessToken"):
                logger.warning("Access token response has no accessToken: %s", token_response)
                return token_response
            self._access_token = token_response["accessToken"]

        headers = build_transaction_header(
            external_id,
            timestamp,
            self._access_token,
            self._body,
            path,
            self.config.client_secret or "",
            self.config.partner_id or "",
            self._device_id,
            self.config.channel_id or "",
            self._debug_id,
            overrides=self._transaction_header,
            crypto=self.crypto,
        )
        logger.debug("Snap BI %s %s for %s", self.payment_method.value, path, external_id)
        return await self.requestor.remote_call(
            self.config.get_base_url() + path,
            headers,
            self._body,
            self._request_timeout,
        )


__all__ = [
    "SnapBi",
    "SnapBiConfig",
    "SnapBiApiRequestor",
    "PaymentMethod",
    "current_timestamp",
]
