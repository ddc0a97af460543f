"""Iris API client for disbursements."""

from typing import Any, Dict, List, Optional

from .config import ApiConfig
from .http_client import HttpClient
from .transaction import Transaction


class Iris:
    """Midtrans Iris disbursement API.

    Iris authenticates with the creator or approver API key, passed as
    ``server_key``. Documentation: https://iris-docs.midtrans.com
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
        self,
        method: str,
        path: str,
        first_param: Optional[Dict[str, Any]] = None,
        second_param: Optional[Dict[str, Any]] = None,
    ) -> Any:
        return await self.http_client.request(
            method,
            self.api_config.server_key,
            self.api_config.get_iris_api_base_url() + path,
            first_param,
            second_param,
        )

    async def ping(self) -> str:
        return await self._request("get", "/ping")

    async def create_beneficiaries(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("post", "/beneficiaries", parameter)

    async def update_beneficiaries(
        self, alias_name: str, parameter: Dict[str, Any]
    ) -> Dict[str, Any]:
        return await self._request("patch", f"/beneficiaries/{alias_name}", parameter)

    async def get_beneficiaries(self) -> List[Dict[str, Any]]:
        return await self._request("get", "/beneficiaries")

    async def create_payouts(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        """Create one or more payouts.

        Args:
            parameter: Mapping with a ``payouts`` list

        Returns:
            Payout statuses with their ``reference_no``
        """
        return await self._request("post", "/payouts", parameter)

    async def approve_payouts(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("post", "/payouts/approve", parameter)

    async def reject_payouts(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("post", "/payouts/reject", parameter)

    async def get_payout_details(self, reference_no: str) -> Dict[str, Any]:
        return await self._request("get", f"/payouts/{reference_no}")

    async def get_transaction_history(
        self, parameter: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """Get the statement for a date range.

        The statements endpoint expects a JSON body on a GET request, so the
        parameters go in the body rather than the query string.
        """
        return await self._request("get", "/statements", {}, parameter or {})

    async def get_topup_channels(self) -> List[Dict[str, Any]]:
        return await self._request("get", "/channels")

    async def get_balance(self) -> Dict[str, Any]:
        return await self._request("get", "/balance")

    async def get_facilitator_bank_accounts(self) -> List[Dict[str, Any]]:
        return await self._request("get", "/bank_accounts")

    async def get_facilitator_balance(self, bank_account_id: str) -> Dict[str, Any]:
        return await self._request("get", f"/bank_accounts/{bank_account_id}/balance")

    async def get_beneficiary_banks(self) -> Dict[str, Any]:
        return await self._request("get", "/beneficiary_banks")

    async def validate_bank_account(self, parameter: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("get", "/account_validation", parameter)
