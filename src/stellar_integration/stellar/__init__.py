"""Horizon and Soroban integration components."""

from stellar_integration.stellar.contracts import ContractCaller
from stellar_integration.stellar.events import BurnHistoryReader, parse_event
from stellar_integration.stellar.horizon import HorizonClient
from stellar_integration.stellar.transactions import TransactionFetcher, TransactionMonitor

__all__ = [
    "ContractCaller",
    "BurnHistoryReader",
    "parse_event",
    "HorizonClient",
    "TransactionFetcher",
    "TransactionMonitor",
]
