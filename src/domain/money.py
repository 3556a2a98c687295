"""Decimal helpers for monetary values.

Every amount in the service is a ``Decimal`` with two fractional digits.
Floats never enter money arithmetic; values coming from the outside are
converted through ``str`` first.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Exclusive upper bound of a NUMERIC(18, 2) column
MAX_AMOUNT = Decimal("1E16")


def to_decimal(value) -> Decimal:
    """Convert an int, str, float or Decimal to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Not a decimal amount: {value!r}") from e


def round_money(value) -> Decimal:
    """Round to cents, half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def has_cent_precision(value: Decimal) -> bool:
    """
    True when the amount has at most two fractional digits.

    Works on the digit tuple so that huge values (1E30) never hit the
    context precision limit of ``quantize``. Trailing zeros don't count:
    ``1.230`` is a valid amount.
    """
    if not value.is_finite():
        return False
    _, digits, exponent = value.as_tuple()
    while exponent < -2 and digits and digits[-1] == 0:
        digits = digits[:-1]
        exponent += 1
    return exponent >= -2 or not digits


def fits_money_column(value: Decimal) -> bool:
    return abs(value) < MAX_AMOUNT
