from decimal import Decimal


def scale_factor(decimals: int) -> int:
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    return 10 ** decimals


def to_base_units(amount: int, decimals: int) -> int:
    """
    Convert a human-readable whole amount to base units.

    Parameters
    ----------
    amount : int
        Amount in whole tokens
    decimals : int
        Token decimals

    Returns
    -------
    int
        Amount in base units
    """
    return amount * scale_factor(decimals)


def from_base_units(value: int, decimals: int) -> Decimal:
    """
    Convert base units to an exact human-readable amount.

    Parameters
    ----------
    value : int
        Amount in base units
    decimals : int
        Token decimals

    Returns
    -------
    Decimal
        Exact amount in whole tokens
    """
    whole, fraction = divmod(abs(value), scale_factor(decimals))
    sign = "-" if value < 0 else ""
    if not fraction:
        return Decimal(f"{sign}{whole}")
    return Decimal(f"{sign}{whole}.{fraction:0{decimals}d}")


def format_amount(amount: Decimal) -> str:
    """Render an amount as a plain decimal string without exponent or trailing zeros."""
    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
