"""
Decimal amount conversion

Converts human-entered decimal strings into exact integer base units
(wei, lamports, token smallest units) and back. Python ints are
arbitrary-precision, so high-decimals tokens never overflow.

Fractional digits beyond the token's decimals are truncated, never rounded.
"""

from ..errors import InvalidAmount


def _is_digits(value: str) -> bool:
    # str.isdigit() accepts superscripts and other unicode digits
    return value != "" and all("0" <= ch <= "9" for ch in value)


def to_base_units(amount: str, decimals: int) -> int:
    """
    Convert a decimal string to base units

    Args:
        amount: Decimal string, e.g. "1.5", ".25", "10"
        decimals: Token decimal places (non-negative)

    Returns:
        Amount in base units

    Raises:
        InvalidAmount: If the string is empty, has more than one decimal
            point, or contains non-digit characters

    Examples:
        to_base_units("1.5", 18)      -> 1500000000000000000
        to_base_units("0.000001", 0)  -> 0
    """
    if decimals < 0:
        raise InvalidAmount.out_of_range(str(amount), f"negative decimals {decimals}")

    cleaned = amount.strip()
    if not cleaned:
        raise InvalidAmount.empty()

    parts = cleaned.split(".")
    if len(parts) > 2:
        raise InvalidAmount.bad_format(amount)

    whole_part = parts[0] or "0"
    frac_part = parts[1] if len(parts) == 2 else ""

    if not _is_digits(whole_part):
        raise InvalidAmount.bad_format(amount)
    if frac_part and not _is_digits(frac_part):
        raise InvalidAmount.bad_format(amount)

    frac_padded = frac_part[:decimals].ljust(decimals, "0")
    frac = int(frac_padded) if frac_padded else 0

    return int(whole_part) * 10 ** decimals + frac


def from_base_units(value: int, decimals: int) -> str:
    """
    Format base units as a decimal string

    Trailing fractional zeros (and a dangling point) are removed, so
    from_base_units(1500000000000000000, 18) == "1.5".
    """
    if value < 0:
        raise InvalidAmount.out_of_range(str(value), "negative base units")
    if decimals <= 0:
        return str(value)

    whole, frac = divmod(value, 10 ** decimals)
    frac_str = str(frac).rjust(decimals, "0").rstrip("0")
    if not frac_str:
        return str(whole)
    return f"{whole}.{frac_str}"
