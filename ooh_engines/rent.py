"""
Module: ooh_engines.rent
Responsibility:
    Back-solve the "per standard month" base rent implied by a campaign's
    single contracted total and its periods' pro-rata factors.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - ``monthly_base_rent * total_prorata`` approximates ``total_amount``
      within ``0.005 * total_prorata`` (rent is rounded to two places).
    - Division by a zero total weight is guarded: empty schedules yield 0.

Non-goals:
    - No residual adjustment.  Callers needing exact reconciliation add
      ``total_amount - reconstructed_total(...)`` to the final period.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from ooh_engines.prorata import BillingPeriod
from ooh_engines.tracer import traced_engine
from ooh_kernel.domain.values import ZERO, Numeric, round_half_up, to_decimal
from ooh_kernel.logging_config import get_logger

logger = get_logger("engines.rent")


def total_prorata(periods: Sequence[BillingPeriod]) -> Decimal:
    """Sum of pro-rata factors across ``periods``."""
    return sum((p.pro_rata_factor for p in periods), ZERO)


@traced_engine("rent_normalizer", "1.0", fingerprint_fields=("total_amount",))
def normalize_monthly_rent(
    periods: Sequence[BillingPeriod],
    total_amount: Numeric,
) -> Decimal:
    """
    Normalized monthly base rent for a campaign.

    Pure function.

    Args:
        periods: Prorated billing periods
        total_amount: Contracted base-rent total

    Returns:
        ``round(total_amount / sum(factors), 2)``, or 0.00 when the total
        weight is zero.
    """
    amount = to_decimal(total_amount)
    weight = total_prorata(periods)

    if weight <= ZERO:
        logger.info("monthly_rent_zero_weight", extra={
            "total_amount": str(amount),
            "period_count": len(periods),
        })
        return round_half_up(ZERO)

    rent = round_half_up(amount / weight)

    logger.debug("monthly_rent_normalized", extra={
        "total_amount": str(amount),
        "total_prorata": str(weight),
        "monthly_base_rent": str(rent),
    })
    return rent


def reconstructed_total(
    periods: Sequence[BillingPeriod],
    monthly_base_rent: Numeric,
) -> Decimal:
    """``monthly_base_rent * total_prorata``; compare with the contract total."""
    return to_decimal(monthly_base_rent) * total_prorata(periods)
