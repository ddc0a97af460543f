from functools import lru_cache
from typing import Any, Dict, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Midtrans credentials loaded from ``MIDTRANS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MIDTRANS_", env_file=".env", case_sensitive=False, extra="ignore"
    )

    is_production: bool = False
    server_key: str = ""
    client_key: str = ""

    snap_bi_client_id: Optional[str] = None
    snap_bi_private_key: Optional[str] = None
    snap_bi_client_secret: Optional[str] = None
    snap_bi_partner_id: Optional[str] = None
    snap_bi_channel_id: Optional[str] = None
    snap_bi_public_key: Optional[str] = None
    enable_logging: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance."""
    return Settings()


class ApiConfig:
    """Environment flag, server key and client key plus the API base URLs."""

    CORE_SANDBOX_BASE_URL = "https://api.sandbox.midtrans.com"
    CORE_PRODUCTION_BASE_URL = "https://api.midtrans.com"
    SNAP_SANDBOX_BASE_URL = "https://app.sandbox.midtrans.com/snap/v1"
    SNAP_PRODUCTION_BASE_URL = "https://app.midtrans.com/snap/v1"
    IRIS_SANDBOX_BASE_URL = "https://app.sandbox.midtrans.com/iris/api/v1"
    IRIS_PRODUCTION_BASE_URL = "https://app.midtrans.com/iris/api/v1"

    def __init__(
        self,
        is_production: bool = False,
        server_key: str = "",
        client_key: str = "",
    ) -> None:
        self.is_production = is_production
        self.server_key = server_key
        self.client_key = client_key

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ApiConfig":
        settings = settings or get_settings()
        return cls(
            is_production=settings.is_production,
            server_key=settings.server_key,
            client_key=settings.client_key,
        )

    def get(self) -> Dict[str, Any]:
        return {
            "is_production": self.is_production,
            "server_key": self.server_key,
            "client_key": self.client_key,
        }

    def set(
        self,
        is_production: Optional[bool] = None,
        server_key: Optional[str] = None,
        client_key: Optional[str] = None,
    ) -> None:
        """Update only the options that are given."""
        if is_production is not None:
            self.is_production = is_production
        if server_key is not None:
            self.server_key = server_key
        if client_key is not None:
            self.client_key = client_key

    def get_core_api_base_url(self) -> str:
        if self.is_production:
            return self.CORE_PRODUCTION_BASE_URL
        return self.CORE_SANDBOX_BASE_URL

    def get_snap_api_base_url(self) -> str:
        if self.is_production:
            return self.SNAP_PRODUCTION_BASE_URL
        return self.SNAP_SANDBOX_BASE_URL

    def get_iris_api_base_url(self) -> str:
        if self.is_production:
            return self.IRIS_PRODUCTION_BASE_URL
        return self.IRIS_SANDBOX_BASE_URL

    def __repr__(self) -> str:
        return f"ApiConfig(is_production={self.is_production!r})"
