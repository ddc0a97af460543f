"""HTTP client shared by the Core, Snap and Iris APIs."""

import base64
import json
import logging
from typing import Any, Dict, Optional, Union

import httpx

from .exceptions import MidtransError
from .version import __version__

logger = logging.getLogger(__name__)

RequestParams = Union[Dict[str, Any], str, None]

DEFAULT_TIMEOUT = 30.0
USER_AGENT = f"midtransclient-python/{__version__}"


class HttpClient:
    """Issues a single authenticated request per call.

    A new ``httpx.AsyncClient`` is opened for every request. Pass ``transport``
    to route requests somewhere other than the network.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def request(
        self,
        http_method: str,
        server_key: str,
        request_url: str,
        first_param: RequestParams = None,
        second_param: RequestParams = None,
    ) -> Any:
        """Send a request to the Midtrans API.

        Args:
            http_method: HTTP method, case-insensitive
            server_key: Midtrans server key used for Basic auth
            request_url: Full request URL
            first_param: Query params for GET, JSON body otherwise
            second_param: JSON body for GET, query params otherwise

        Returns:
            Decoded JSON response, or the response text when it is not JSON

        Raises:
            MidtransError: On API errors, non-2xx responses and transport failures
        """
        headers = {
            "content-type": "application/json",
            "accept": "application/json",
            "user-agent": USER_AGENT,
            "authorization": "Basic " + self._encode_basic_auth(server_key),
        }

        if http_method.lower() == "get":
            query = self._parse_param(first_param, "query parameters")
            body = self._parse_param(second_param, "body parameters")
        else:
            body = self._parse_param(first_param, "body parameters")
            query = self._parse_param(second_param, "query parameters")

        # Iris statements is a GET that carries a JSON body.
        content = json.dumps(body).encode("utf-8") if body else None

        logger.debug("%s %s", http_method.upper(), request_url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    http_method.upper(),
                    request_url,
                    params=query or None,
                    content=content,
                    headers=headers,
                )
        except httpx.RequestError as exc:
            logger.error("Midtrans request to %s failed: %s", request_url, exc)
            raise MidtransError(
                "Midtrans API request failed. HTTP response not found, likely "
                f"connection failure, with message: {exc}",
                raw_http_client_data={"error": str(exc)},
            ) from exc

        try:
            data = response.json()
        except ValueError:
            data = response.text

        raw = {
            "status_code": response.status_code,
            "headers": dict(response.headers),
            "body": data,
        }

        api_status = self._api_status_code(data)
        # 407 is returned for expired transactions and is not an error.
        if api_status is not None and api_status >= 400 and api_status != 407:
            raise MidtransError(
                "Midtrans API is returning API error. HTTP status code: "
                f"{api_status}. API response: {self._dump(data)}",
                api_status,
                data,
                raw,
            )

        if not response.is_success:
            raise MidtransError(
                "Midtrans API is returning API error. HTTP status code: "
                f"{response.status_code}. API response: {self._dump(data)}",
                response.status_code,
                data,
                raw,
            )

        return data

    @staticmethod
    def _parse_param(param: RequestParams, param_type: str) -> Dict[str, Any]:
        if param is None:
            return {}
        if isinstance(param, str):
            try:
                return json.loads(param)
            except ValueError as exc:
                raise MidtransError(
                    f"Failed to parse '{param_type}' string as JSON. Use JSON string "
                    f"or dict as '{param_type}'. Error: {exc}"
                ) from exc
        return param

    @staticmethod
    def _api_status_code(data: Any) -> Optional[int]:
        if not isinstance(data, dict) or not data.get("status_code"):
            return None
        try:
            return int(data["status_code"])
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _encode_basic_auth(server_key: str) -> str:
        return base64.b64encode(f"{server_key}:".encode("utf-8")).decode("ascii")

    @staticmethod
    def _dump(data: Any) -> str:
        if isinstance(data, str):
            return data
        return json.dumps(data)
