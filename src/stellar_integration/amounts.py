"""Amount and display helpers. All arithmetic is exact integer math."""

from __future__ import annotations

STROOPS_PER_XLM = 10_000_000
XLM_DECIMALS = 7


def truncate_address(address: str, chars: int = 4) -> str:
    """Shorten an address for display, e.g. GABC...WXYZ."""
    if not address or len(address) <= chars * 2 + 3:
        return address
    return f"{address[:chars]}...{address[-chars:]}"


def format_token_amount(amount: int | str, decimals: int) -> str:
    """Render a base-unit integer amount with ``decimals`` fractional digits."""
    if decimals < 0:
        raise ValueError(f"decimals must be >= 0, got {decimals}")
    raw = int(amount)
    sign = "-" if raw < 0 else ""
    whole, remainder = divmod(abs(raw), 10 ** decimals)
    if decimals == 0:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{remainder:0{decimals}d}"


def stroops_to_xlm(stroops: int | str) -> str:
    """10000000 -> '1.0000000'."""
    return format_token_amount(stroops, XLM_DECIMALS)


def xlm_to_stroops(xlm: str) -> str:
    """'1.5' -> '15000000'. Fractional digits beyond 7 are truncated."""
    text = xlm.strip()
    negative = text.startswith("-")
    whole, _, fraction = text.lstrip("+-").partition(".")
    if not (whole or fraction) or not (whole or "0").isdigit() or (fraction and not fraction.isdigit()):
        raise ValueError(f"not a decimal XLM amount: {xlm!r}")
    fraction = fraction.ljust(XLM_DECIMALS, "0")[:XLM_DECIMALS]
    stroops = int(whole or "0") * STROOPS_PER_XLM + int(fraction)
    return str(-stroops if negative else stroops)
