from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal("0.01")
# Largest value a SQLite INTEGER column holds
MAX_CENTS = 2**63 - 1


def to_cents(amount: Decimal | int | float | str) -> int:
    """
    Convert a dollar amount to integer cents, rounding half up.

    Raises InvalidOperation for text that isn't a number, for NaN and
    infinities, and for amounts too large to store.
    """
    value = Decimal(str(amount))
    if not value.is_finite():
        raise InvalidOperation(f"Not a finite amount: {amount}")
    cents = int(value.quantize(CENT, rounding=ROUND_HALF_UP) * 100)
    if abs(cents) > MAX_CENTS:
        raise InvalidOperation(f"Amount out of range: {amount}")
    return cents


def from_cents(cents: int) -> Decimal:
    """Convert integer cents to a two-place Decimal, e.g. 1250 -> Decimal('12.50')."""
    return Decimal(int(cents)).scaleb(-2).quantize(CENT)


def format_amount(amount: Decimal) -> str:
    """Plain two-decimal rendering with no symbol or grouping, e.g. '1234.50'."""
    return f"{Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP):.2f}"


def format_currency(amount: Decimal, symbol: str = "$") -> str:
    """Format as currency without thousands separators, e.g. '$1234.56'."""
    return f"{symbol}{format_amount(amount)}"
