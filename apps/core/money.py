"""
Currency helpers

All money in the project is Decimal with two decimal places. Sums coming out of
the aggregation engine go through round_currency() so they always carry at
most two decimal digits, rounded half-up on the cent.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

CENT = Decimal('0.01')
ZERO = Decimal('0.00')


def to_decimal(value):
    """
    Convert a value to Decimal, or None when it is empty or not a number.

    Goes through str() so floats do not drag binary noise along.
    """
    if value is None or str(value).strip() == '':
        return None

    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return None


def round_currency(value):
    """Round to cents, half-up. round_currency(round_currency(x)) == round_currency(x)."""
    if value is None:
        return ZERO
    if not isinstance(value, Decimal):
        value = to_decimal(value) or ZERO
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_half_up(value):
    """Round to the nearest integer, halves away from zero (2.5 -> 3)."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return int(value.quantize(Decimal('1'), rounding=ROUND_HALF_UP))
