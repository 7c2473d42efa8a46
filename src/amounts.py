from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

# One unit of currency is SCALE amount units, i.e. amounts carry four decimal places.
SCALE = 10_000
PRECISION = Decimal("0.0001")


def parse_amount(text: str) -> int:
    """
    Convert a decimal string into integer ten-thousandths.

    Extra fractional digits are rounded half-up. Raises ValueError for
    anything that is not a finite decimal number.
    """
    try:
        value = Decimal(text.strip())
        if not value.is_finite():
            raise ValueError(f"invalid amount {text!r}")
        return int(value.quantize(PRECISION, rounding=ROUND_HALF_UP) * SCALE)
    except InvalidOperation:
        raise ValueError(f"invalid amount {text!r}") from None


def format_amount(value: int) -> str:
    """Render integer ten-thousandths with exactly four fractional digits."""
    sign = "-" if value < 0 else ""
    units, fraction = divmod(abs(value), SCALE)
    return f"{sign}{units}.{fraction:04d}"
