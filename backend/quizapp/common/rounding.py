"""Half-up rounding shared by grading, result validation and statistics."""

from decimal import ROUND_HALF_UP, Decimal

_WHOLE = Decimal("1")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).quantize(_WHOLE, rounding=ROUND_HALF_UP))


def percentage_of(correct: int, total: int) -> int:
    """``round(100 * correct / total)``; zero when there is nothing to score."""
    if total <= 0:
        return 0
    return int((Decimal(100 * correct) / Decimal(total)).quantize(_WHOLE, rounding=ROUND_HALF_UP))
