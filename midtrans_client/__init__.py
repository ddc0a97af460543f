"""Python client for the Midtrans Core, Snap, Iris and Snap BI APIs."""

from .config import ApiConfig, Settings, get_settings
from .core import CoreApi
from .exceptions import ConfigurationError, CryptoError, MidtransError, MidtransNotificationError
from .http_client import HttpClient
from .iris import Iris
from .snap import Snap
from .snap_bi import SnapBi, SnapBiConfig
from .transaction import Transaction
from .version import __version__

__all__ = [
    "ApiConfig",
    "Settings",
    "get_settings",
    "CoreApi",
    "Snap",
    "Iris",
    "SnapBi",
    "SnapBiConfig",
    "Transaction",
    "HttpClient",
    "MidtransError",
    "MidtransNotificationError",
    "ConfigurationError",
    "CryptoError",
    "__version__",
]
