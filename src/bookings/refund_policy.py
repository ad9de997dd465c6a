"""
Graduated refund policy for cancelled bookings.

    hours until departure    refund
    < 6                      cancellation rejected
    [6, 24)                  75%
    [24, 72)                 90%
    >= 72                    100%
"""

from decimal import Decimal, ROUND_HALF_UP

CANCELLATION_WINDOW_HOURS = 6

# (lower bound in hours, refund percentage), highest bound first
REFUND_TIERS = (
    (72, 100),
    (24, 90),
    (CANCELLATION_WINDOW_HOURS, 75),
)


def refund_percentage(hours_until_departure: float) -> int:
    """Refund percentage for a cancellation made ``hours_until_departure`` before departure."""
    for lower_bound, percentage in REFUND_TIERS:
        if hours_until_departure >= lower_bound:
            return percentage
    raise ValueError(
        f"No refund tier below the {CANCELLATION_WINDOW_HOURS}h cancellation window "
        f"({hours_until_departure:.1f}h given)"
    )


def refund_amount(total_price: Decimal, percentage: int) -> Decimal:
    amount = Decimal(total_price) * Decimal(percentage) / Decimal(100)
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
