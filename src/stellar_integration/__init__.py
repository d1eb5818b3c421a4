"""stellar_integration - resilient Horizon and Soroban RPC client."""

from stellar_integration.config import load_config
from stellar_integration.errors import StellarError, StellarErrorCode
from stellar_integration.service import StellarService

__all__ = ["StellarService", "StellarError", "StellarErrorCode", "load_config"]

__version__ = "0.1.0"
