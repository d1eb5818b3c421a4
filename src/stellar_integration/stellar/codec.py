"""SCVal decoding helpers shared by contract calls and event parsing."""

from __future__ import annotations

from typing import Any

from stellar_sdk import Address, scval, xdr


def addr_str(addr: object) -> str:
    """Extract string address from Address or str."""
    if isinstance(addr, Address):
        return addr.address
    return str(addr)


def normalize(value: Any) -> Any:
    """Replace Address objects with strkey strings, recursively."""
    if isinstance(value, Address):
        return value.address
    if isinstance(value, list):
        return [normalize(v) for v in value]
    if isinstance(value, dict):
        return {normalize(k): normalize(v) for k, v in value.items()}
    return value


def decode_scval(value: str | xdr.SCVal) -> Any:
    """Decode a base64 XDR SCVal (or an SCVal) into plain Python values."""
    if isinstance(value, str):
        value = xdr.SCVal.from_xdr(value)
    return normalize(scval.to_native(value))


def text(value: Any) -> str:
    """Contract strings decode to bytes; symbols decode to str."""
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)
