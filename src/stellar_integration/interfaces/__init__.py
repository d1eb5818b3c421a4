"""Protocol interfaces for the RPC surfaces the client consumes."""

from stellar_integration.interfaces.rpc import ContractRPC, LedgerRPC

__all__ = ["ContractRPC", "LedgerRPC"]
