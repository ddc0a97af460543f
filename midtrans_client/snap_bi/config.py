from typing import Any, Dict, Optional

from ..config import Settings, get_settings
from ..exceptions import ConfigurationError


class SnapBiConfig:
    """Credentials and environment for the Snap BI (bank integration) API.

    ``private_key`` and ``public_key`` are PEM strings: the merchant's PKCS#8
    private key for access-token requests and the Midtrans SPKI public key for
    notification verification.
    """

    SNAP_BI_SANDBOX_BASE_URL = "https://merchants.sbx.midtrans.com"
    SNAP_BI_PRODUCTION_BASE_URL = "https://merchants.midtrans.com"

    _REQUIRED = ("client_id", "private_key", "client_secret", "partner_id", "channel_id")

    def __init__(
        self,
        is_production: bool = False,
        client_id: Optional[str] = None,
        private_key: Optional[str] = None,
        client_secret: Optional[str] = None,
        partner_id: Optional[str] = None,
        channel_id: Optional[str] = None,
        public_key: Optional[str] = None,
        enable_logging: bool = False,
    ) -> None:
        self.is_production = is_production
        self.client_id = client_id
        self.private_key = private_key
        self.client_secret = client_secret
        self.partner_id = partner_id
        self.channel_id = channel_id
        self.public_key = public_key
        self.enable_logging = enable_logging

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SnapBiConfig":
        settings = settings or get_settings()
        return cls(
            is_production=settings.is_production,
            client_id=settings.snap_bi_client_id,
            private_key=settings.snap_bi_private_key,
            client_secret=settings.snap_bi_client_secret,
            partner_id=settings.snap_bi_partner_id,
            channel_id=settings.snap_bi_channel_id,
            public_key=settings.snap_bi_public_key,
            enable_logging=settings.enable_logging,
        )

    def get(self) -> Dict[str, Any]:
        return {
            "is_production": self.is_production,
            "client_id": self.client_id or "",
            "private_key": self.private_key or "",
            "client_secret": self.client_secret or "",
            "partner_id": self.partner_id or "",
            "channel_id": self.channel_id or "",
            "public_key": self.public_key or "",
            "enable_logging": self.enable_logging,
        }

    def set(self, **options: Any) -> None:
        """Update the given options; ``None`` values are ignored."""
        for key, value in options.items():
            if key not in self.get():
                raise TypeError(f"Unknown SnapBiConfig option: {key}")
            if value is not None:
                setattr(self, key, value)

    def get_base_url(self) -> str:
        if self.is_production:
            return self.SNAP_BI_PRODUCTION_BASE_URL
        return self.SNAP_BI_SANDBOX_BASE_URL

    def is_logging_enabled(self) -> bool:
        return self.enable_logging

    def validate(self) -> None:
        """Raise ConfigurationError listing every missing required credential."""
        missing = [key for key in self._REQUIRED if not getattr(self, key)]
        if missing:
            raise ConfigurationError(
                f"Missing required SnapBi configuration: {', '.join(missing)}"
            )

    def __repr__(self) -> str:
        return (
            f"SnapBiConfig(is_production={self.is_production!r}, "
            f"client_id={self.client_id!r}, partner_id={self.partner_id!r})"
        )
