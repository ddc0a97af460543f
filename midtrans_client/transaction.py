"""Transaction API shared by the Core, Snap and Iris clients."""

import json
import logging
from typing import Any, Dict, Optional, Union

from .config import ApiConfig
from .exceptions import MidtransNotificationError
from .http_client import HttpClient

logger = logging.getLogger(__name__)


class Transaction:
    """Status and lifecycle operations on an existing transaction.

    ``transaction_id`` may be either the Midtrans transaction ID or the
    merchant's order ID.
    """

    def __init__(self, api_config: ApiConfig, http_client: HttpClient) -> None:
        self.api_config = api_config
        self.http_client = http_client

    def _url(self, transaction_id: str, action: str) -> str:
        return f"{self.api_config.get_core_api_base_url()}/v2/{transaction_id}/{action}"

    async def _call(
        self,
        method: str,
        transaction_id: str,
        action: str,
        parameter: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return await self.http_client.request(
            method,
            self.api_config.server_key,
            self._url(transaction_id, action),
            parameter,
        )

    async def status(self, transaction_id: str) -> Dict[str, Any]:
        return await self._call("get", transaction_id, "status")

    async def status_b2b(self, transaction_id: str) -> Dict[str, Any]:
        return await self._call("get", transaction_id, "status/b2b")

    async def approve(self, transaction_id: str) -> Dict[str, Any]:
        return await self._call("post", transaction_id, "approve")

    async def deny(self, transaction_id: str) -> Dict[str, Any]:
        return await self._call("post", transaction_id, "deny")

    async def cancel(self, transaction_id: str) -> Dict[str, Any]:
        return await self._call("post", transaction_id, "cancel")

    async def expire(self, transaction_id: str) -> Dict[str, Any]:
        return await self._call("post", transaction_id, "expire")

    async def refund(
        self, transaction_id: str, parameter: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self._call("post", transaction_id, "refund", parameter or {})

    async def refund_direct(
        self, transaction_id: str, parameter: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        return await self._call(
            "post", transaction_id, "refund/online/direct", parameter or {}
        )

    async def notification(
        self, notification: Union[Dict[str, Any], str]
    ) -> Dict[str, Any]:
        """Resolve an HTTP notification to the latest transaction status.

        The notification body is untrusted, so only its ``transaction_id`` is
        used; the status itself is fetched from the API.

        Args:
            notification: Notification dict or its raw JSON string

        Returns:
            Transaction status response

        Raises:
            MidtransNotificationError: If the notification cannot be parsed
                or has no transaction_id
        """
        if isinstance(notification, str):
            try:
                notification = json.loads(notification)
            except ValueError as exc:
                raise MidtransNotificationError(
                    "Failed to parse 'notification' string as JSON. Use JSON string "
                    f"or dict as 'notification'. Error: {exc}"
                ) from exc

        if not isinstance(notification, dict) or not notification.get("transaction_id"):
            raise MidtransNotificationError(
                "Notification object must contain transaction_id"
            )

        transaction_id = notification["transaction_id"]
        logger.info("Resolving notification for transaction %s", transaction_id)
        return await self.status(transaction_id)
