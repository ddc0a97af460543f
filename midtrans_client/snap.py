"""Snap API client for hosted checkout."""

from typing import Any, Dict, Optional

from .config import ApiConfig
from .http_client import HttpClient
from .transaction import Transaction


class Snap:
    """Midtrans Snap API.

    Documentation: https://snap-docs.midtrans.com
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

    async def create_transaction(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        """Create a Snap transaction.

        Args:
            parameter: Transaction body, at least ``transaction_details``

        Returns:
            Mapping with ``token`` and ``redirect_url``
        """
        return await self.http_client.request(
            "post",
            self.api_config.server_key,
            f"{self.api_config.get_snap_api_base_url()}/transactions",
            parameter,
        )

    async def create_transaction_token(self, parameter: Dict[str, Any]) -> str:
        response = await self.create_transaction(parameter)
        return response["token"]

    async def create_transaction_redirect_url(self, parameter: Dict[str, Any]) -> str:
        response = await self.create_transaction(parameter)
        return response["redirect_url"]
