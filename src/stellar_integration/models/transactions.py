"""Transaction lookup and confirmation results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TransactionStatus(str, Enum):
    """Terminal states of a transaction lookup or monitoring run."""

    SUCCESS = "success"
    FAILED = "failed"
    NOT_FOUND = "not_found"
    PENDING = "pending"  # monitoring gave up without a verdict


@dataclass(frozen=True)
class TransactionDetails:
    """A transaction as reported by Horizon."""

    hash: str
    ledger: int
    created_at: str
    source_account: str
    fee: str
    status: TransactionStatus  # SUCCESS or FAILED
    operation_count: int
    envelope_xdr: str
    result_xdr: str
    result_meta_xdr: str
    memo: str | None = None


@dataclass(frozen=True)
class MonitorTransactionResult:
    """Outcome of monitor_transaction()."""

    hash: str
    status: TransactionStatus
    attempts: int
    ledger: int | None = None
    created_at: str | None = None
    error_message: str | None = None
