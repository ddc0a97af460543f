import json
import logging
from typing import Any, Dict, Optional

import httpx

from .config import SnapBiConfig
from .signature import canonicalize

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
TIMEOUT_STATUS = "TIMEOUT"

_MASKED_HEADERS = ("authorization", "x-signature")


def error_response(message: str, status: Any) -> Dict[str, Any]:
    return {"message": message, "status": status}


def is_error_response(response: Any) -> bool:
    """True for the structured error returned on transport failures."""
    return (
        isinstance(response, dict)
        and set(response) == {"message", "status"}
        and (response["status"] == TIMEOUT_STATUS or response["status"] == 500)
    )


class SnapBiApiRequestor:
    """HTTP transport for Snap BI calls.

    Responses are returned as decoded JSON whatever their HTTP status; Snap BI
    reports failures through ``responseCode`` in the body. Transport failures
    do not raise either: they come back as ``{"message": ..., "status": ...}``
    with ``status`` set to ``"TIMEOUT"`` or ``500``.
    """

    def __init__(
        self,
        config: SnapBiConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    async def remote_call(
        self,
        url: str,
        headers: Dict[str, str],
        body: Any,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        """POST ``body`` to ``url``.

        The body is serialized with the same canonical form used for signing,
        so the transmitted bytes match the signed hash.
        """
        return await self._send("POST", url, headers, body, None, timeout)

    async def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        query_params: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        return await self._send("GET", url, headers or {}, None, query_params, timeout)

    async def put(
        self,
        url: str,
        headers: Dict[str, str],
        body: Any,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Any:
        return await self._send("PUT", url, headers, body, None, timeout)

    async def _send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Any,
        query_params: Optional[Dict[str, str]],
        timeout: float,
    ) -> Any:
        request_headers = {"Content-Type": "application/json", **headers}
        content = canonicalize(body).encode("utf-8") if body is not None else None

        if self._config.is_logging_enabled():
            self._log_request(method, url, request_headers, body)

        try:
            async with httpx.AsyncClient(
                timeout=timeout, transport=self._transport
            ) as client:
                response = await client.request(
                    method,
                    url,
                    params=query_params or None,
                    headers=request_headers,
                    content=content,
                )
            data = response.json()
        except httpx.TimeoutException as exc:
            self._log_error(exc)
            return error_response("Request timeout", TIMEOUT_STATUS)
        except (httpx.HTTPError, ValueError) as exc:
            self._log_error(exc)
            return error_response(str(exc), 500)

        if self._config.is_logging_enabled():
            logger.info("Response Status: %s", response.status_code)
            logger.info("Response Body: \n%s", json.dumps(data, indent=2))
        return data

    def _log_request(
        self, method: str, url: str, headers: Dict[str, str], body: Any
    ) -> None:
        masked = {
            key: "***" if key.lower() in _MASKED_HEADERS else value
            for key, value in headers.items()
        }
        logger.info("Request %s %s", method, url)
        logger.info("Request Headers: \n%s", json.dumps(masked, indent=2))
        if body:
            logger.info("Request Body: \n%s", json.dumps(body, indent=2, ensure_ascii=False))

    def _log_error(self, exc: Exception) -> None:
        if self._config.is_logging_enabled():
            logger.error("Request Error: %s", exc, exc_info=exc)
