"""Stellar address format checks (G... accounts, C... contracts)."""

from __future__ import annotations

import re

from stellar_integration.errors import InvalidAddressError

# Strkey: version character + 55 RFC4648 base32 characters
_ACCOUNT_RE = re.compile(r"G[A-Z2-7]{55}")
_CONTRACT_RE = re.compile(r"C[A-Z2-7]{55}")


def is_account_address(address: object) -> bool:
    """True for a 56-character account id starting with 'G'."""
    return isinstance(address, str) and _ACCOUNT_RE.fullmatch(address) is not None


def is_contract_address(address: object) -> bool:
    """True for a 56-character contract id starting with 'C'."""
    return isinstance(address, str) and _CONTRACT_RE.fullmatch(address) is not None


def is_valid_address(address: object) -> bool:
    return is_account_address(address) or is_contract_address(address)


def assert_valid_address(address: object) -> None:
    """Raise InvalidAddressError unless ``address`` is an account or contract id."""
    if not is_valid_address(address):
        raise InvalidAddressError(address)
