"""Data models for the stellar_integration client."""

from stellar_integration.models.config import (
    RateLimitPolicy,
    RetryPolicy,
    StellarConfig,
    StellarNetwork,
)
from stellar_integration.models.contracts import (
    BurnEvent,
    FactoryState,
    ParsedContractEvent,
    TokenInfo,
)
from stellar_integration.models.transactions import (
    MonitorTransactionResult,
    TransactionDetails,
    TransactionStatus,
)

__all__ = [
    "StellarConfig", "StellarNetwork", "RetryPolicy", "RateLimitPolicy",
    "TokenInfo", "BurnEvent", "FactoryState", "ParsedContractEvent",
    "TransactionDetails", "TransactionStatus", "MonitorTransactionResult",
]
