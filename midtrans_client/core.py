"""Core API client for direct payment transactions."""

from typing import Any, Dict, Optional

from .config import ApiConfig
from .http_client import HttpClient
from .transaction import Transaction


class CoreApi:
    """Midtrans Core API.

    Documentation: https://api-docs.midtrans.com
    """

    def __init__(
        self,
        is_production: bool = False,
        server_key: str = "",
        client_key: str = "",
        http_client: Optional[HttpClient] = None,
    ) -> None:
        self.api_config = ApiConfig(is_production, server_key, client_key)
        self.http_client = http_client or HttpClient()
        self.transaction = Transaction(self.api_config, self.http_client)

    async def _request(
        self, method: str, path: str, parameter: Optional[Dict[str, Any]] = None
    ) -> Any:
        return await self.http_client.request(
            method,
            self.api_config.server_key,
            self.api_config.get_core_api_base_url() + path,
            parameter,
        )

    async def charge(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        """Charge a transaction.

        Args:
            parameter: Charge body with ``payment_type`` and ``transaction_details``

        Returns:
            Charge response including ``transaction_id`` and ``transaction_status``
        """
        return await self._request("post", "/v2/charge", parameter)

    async def capture(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        """Capture a pre-authorized card transaction."""
        return await self._request("post", "/v2/capture", parameter)

    async def card_register(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        """Register a card for one-click payments; card data goes in the query."""
        return await self._request("get", "/v2/card/register", parameter)

    async def card_token(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("get", "/v2/token", parameter)

    async def card_point_inquiry(self, token_id: str) -> Dict[str, Any]:
        return await self._request("get", f"/v2/point_inquiry/{token_id}")

    async def link_payment_account(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        """Link a GoPay or ShopeePay account."""
        return await self._request("post", "/v2/pay/account", parameter)

    async def get_payment_account(self, account_id: str) -> Dict[str, Any]:
        return await self._request("get", f"/v2/pay/account/{account_id}")

    async def unlink_payment_account(self, account_id: str) -> Dict[str, Any]:
        return await self._request("post", f"/v2/pay/account/{account_id}/unbind")

    async def create_subscription(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("post", "/v1/subscriptions", parameter)

    async def get_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return await self._request("get", f"/v1/subscriptions/{subscription_id}")

    async def disable_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return await self._request(
            "post", f"/v1/subscriptions/{subscription_id}/disable"
        )

    async def enable_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return await self._request(
            "post", f"/v1/subscriptions/{subscription_id}/enable"
        )

    async def update_subscription(
        self, subscription_id: str, parameter: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request(
            "patch", f"/v1/subscriptions/{subscription_id}", parameter
        )
