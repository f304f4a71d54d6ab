"""
Module: ooh_engines.period_amount
Responsibility:
    Compute one billing period's invoice breakdown: prorated base rent,
    one-time printing/mounting charges, GST and total.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Base rent is ``round(monthly_base_rent * pro_rata_factor, 2)``.
    - Printing and mounting are never prorated: each is either applied in
      full (its include flag is set) or not at all.  The caller chooses
      the period; conventionally the first.
    - A period discount is held to ``[0, base_rent + printing + mounting]``,
      so a discount never turns the subtotal negative.
    - ``total == subtotal + gst_amount``.

Failure modes:
    - ValueError if an amount is not numeric.

Usage:
    from ooh_engines.period_amount import calculate_period_amount

    amounts = calculate_period_amount(
        period,
        monthly_base_rent=Decimal("100000"),
        gst_percent=Decimal("18"),
        include_printing=True,
        printing_total=Decimal("5000"),
    )
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal

from ooh_engines.prorata import BillingPeriod
from ooh_engines.rent import total_prorata
from ooh_kernel.domain.values import HUNDRED, ZERO, Numeric, round_half_up, to_decimal
from ooh_kernel.logging_config import get_logger

logger = get_logger("engines.period_amount")


@dataclass(frozen=True)
class PeriodAmounts:
    """
    Line-item breakdown for a single billing period.

    Attributes:
        base_rent: Prorated display rent for the period
        printing: One-time printing charge applied to this period
        mounting: One-time mounting charge applied to this period
        discount: Discount share deducted before tax
        subtotal: base_rent + printing + mounting - discount
        gst_amount: GST on the subtotal
        total: subtotal + gst_amount
    """

    base_rent: Decimal
    printing: Decimal
    mounting: Decimal
    discount: Decimal
    subtotal: Decimal
    gst_amount: Decimal
    total: Decimal

    @property
    def one_time_charges(self) -> Decimal:
        return self.printing + self.mounting


def calculate_period_amount(
    period: BillingPeriod,
    monthly_base_rent: Numeric,
    gst_percent: Numeric,
    include_printing: bool = False,
    include_mounting: bool = False,
    printing_total: Numeric = 0,
    mounting_total: Numeric = 0,
    discount: Numeric = 0,
) -> PeriodAmounts:
    """
    Calculate the invoice amounts for one period.

    Pure function - no side effects, no I/O, deterministic output.

    Args:
        period: The billing period being invoiced
        monthly_base_rent: Normalized per-standard-month rent
        gst_percent: GST rate in percent (e.g. 18)
        include_printing: Apply the full printing total to this period
        include_mounting: Apply the full mounting total to this period
        printing_total: Campaign printing charges
        mounting_total: Campaign mounting charges
        discount: Discount share for this period (see period_discount_share);
            held between zero and the period gross

    Returns:
        PeriodAmounts for the period
    """
    rent = to_decimal(monthly_base_rent)
    gst_rate = to_decimal(gst_percent)

    base_rent = round_half_up(rent * period.pro_rata_factor)
    printing = to_decimal(printing_total) if include_printing else ZERO
    mounting = to_decimal(mounting_total) if include_mounting else ZERO
    gross = base_rent + printing + mounting
    discount_amount = min(max(to_decimal(discount), ZERO), max(gross, ZERO))

    subtotal = gross - discount_amount
    gst_amount = round_half_up(subtotal * gst_rate / HUNDRED)
    total = subtotal + gst_amount

    logger.debug("period_amount_calculated", extra={
        "month_key": period.month_key,
        "pro_rata_factor": str(period.pro_rata_factor),
        "base_rent": str(base_rent),
        "printing": str(printing),
        "mounting": str(mounting),
        "discount": str(discount_amount),
        "gst_amount": str(gst_amount),
        "total": str(total),
    })

    return PeriodAmounts(
        base_rent=base_rent,
        printing=printing,
        mounting=mounting,
        discount=discount_amount,
        subtotal=subtotal,
        gst_amount=gst_amount,
        total=total,
    )


def period_discount_share(
    manual_discount: Numeric,
    period: BillingPeriod,
    periods: Sequence[BillingPeriod],
) -> Decimal:
    """
    Portion of a campaign-level discount attributable to ``period``.

    A single-period schedule takes the whole discount; otherwise the
    discount is spread in proportion to pro-rata factors and rounded to
    two places.
    """
    discount = to_decimal(manual_discount)
    if len(periods) <= 1:
        return discount

    weight = total_prorata(periods)
    if weight <= ZERO:
        return round_half_up(ZERO)
    return round_half_up(discount * period.pro_rata_factor / weight)


def clamp_discount(manual_discount: Numeric, gross_amount: Numeric) -> Decimal:
    """
    Campaign-level discount held to ``[0, gross_amount]``.

    Applied before the discount is spread with ``period_discount_share``.
    """
    requested = to_decimal(manual_discount)
    gross = to_decimal(gross_amount)
    applied = min(max(requested, ZERO), max(gross, ZERO))
    if applied != requested:
        logger.warning("manual_discount_clamped", extra={
            "requested": str(requested),
            "applied": str(applied),
            "gross_amount": str(gross),
        })
    return applied
