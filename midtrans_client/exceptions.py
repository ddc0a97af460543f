"""Exceptions raised by the Midtrans client."""

from typing import Any, Dict, Optional


class MidtransError(Exception):
    """Base exception for Midtrans API errors.

    Exposes the HTTP status code, the decoded API response and the raw HTTP
    data so callers can inspect what the gateway returned.
    """

    def __init__(
        self,
        message: str,
        http_status_code: Optional[int] = None,
        api_response: Any = None,
        raw_http_client_data: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.http_status_code = http_status_code
        self.api_response = api_response
        self.raw_http_client_data = raw_http_client_data

    @property
    def full_message(self) -> str:
        if self.http_status_code:
            return f"[{self.http_status_code}] {self.message}"
        return self.message

    def is_client_error(self) -> bool:
        return self.http_status_code is not None and 400 <= self.http_status_code < 500

    def is_server_error(self) -> bool:
        return self.http_status_code is not None and 500 <= self.http_status_code < 600

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.__class__.__name__,
            "message": self.message,
            "http_status_code": self.http_status_code,
            "api_response": self.api_response,
            "raw_http_client_data": self.raw_http_client_data,
        }


class MidtransNotificationError(MidtransError):
    """Raised when an HTTP notification cannot be parsed."""
    pass


class ConfigurationError(MidtransError):
    """Raised when a required credential is missing from the configuration."""
    pass


class CryptoError(MidtransError):
    """Raised when key import or signing fails."""
    pass


__all__ = [
    "MidtransError",
    "MidtransNotificationError",
    "ConfigurationError",
    "CryptoError",
]
