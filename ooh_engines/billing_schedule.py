"""
Module: ooh_engines.billing_schedule
Responsibility:
    Compose segmentation, proration and rent normalization into a
    ``CampaignBillingSummary`` for one campaign, and lay out per-period
    amounts for a full invoice schedule.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumed by ooh_services.campaign_billing_service.

Invariants enforced:
    - Stateless: the summary is recomputed from the inputs on every call.
    - ``total_months == len(periods)``.
    - Printing/mounting totals and GST percent are passed through, never
      recomputed.
    - One-time charges land on exactly one period in a schedule.
    - A schedule discount never exceeds the gross billed across it.

Failure modes:
    - Invalid/missing dates yield an empty summary with zero rent.
    - Campaigns beyond the period cap are truncated; ``truncated`` is set.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

from ooh_engines.period_amount import (
    PeriodAmounts,
    calculate_period_amount,
    clamp_discount,
    period_discount_share,
)
from ooh_engines.prorata import BillingPeriod, apply_prorata
from ooh_engines.rent import normalize_monthly_rent, total_prorata
from ooh_engines.segmentation import campaign_day_count, segment_campaign
from ooh_engines.tracer import traced_engine
from ooh_kernel.domain.conventions import STANDARD_CONVENTION, BillingConvention
from ooh_kernel.domain.dates import coerce_date
from ooh_kernel.domain.values import ZERO, Numeric, round_half_up, to_decimal
from ooh_kernel.logging_config import get_logger

logger = get_logger("engines.billing_schedule")


class OneTimeChargePlacement(str, Enum):
    """Which period carries printing and mounting in a generated schedule."""

    FIRST = "first"
    LAST = "last"
    NONE = "none"


@dataclass(frozen=True)
class CampaignBillingSummary:
    """
    Derived billing view of a campaign (never persisted).

    Attributes:
        periods: Ordered billing periods
        total_days: Inclusive campaign day count (0 for invalid dates)
        total_prorata: Sum of period factors
        monthly_base_rent: Normalized per-standard-month rent
        printing_total: Pass-through printing charges
        mounting_total: Pass-through mounting charges
        gst_percent: Pass-through GST rate in percent
        truncated: True if the period cap cut the schedule short
    """

    periods: tuple[BillingPeriod, ...]
    total_days: int
    total_prorata: Decimal
    monthly_base_rent: Decimal
    printing_total: Decimal
    mounting_total: Decimal
    gst_percent: Decimal
    truncated: bool = False

    @property
    def total_months(self) -> int:
        return len(self.periods)

    @property
    def is_empty(self) -> bool:
        return not self.periods

    @property
    def base_rent_total(self) -> Decimal:
        """Sum of per-period base rents as billed (each rounded)."""
        return sum(
            (round_half_up(self.monthly_base_rent * p.pro_rata_factor) for p in self.periods),
            ZERO,
        )

    @property
    def gross_amount(self) -> Decimal:
        return self.base_rent_total + self.printing_total + self.mounting_total

    @property
    def first_period(self) -> BillingPeriod | None:
        return self.periods[0] if self.periods else None

    @property
    def last_period(self) -> BillingPeriod | None:
        return self.periods[-1] if self.periods else None

    @property
    def current_period(self) -> BillingPeriod | None:
        return next((p for p in self.periods if p.is_current_month), None)

    def find_period(self, month_key: str) -> BillingPeriod | None:
        """Period whose month key matches, or None."""
        return next((p for p in self.periods if p.month_key == month_key), None)


@traced_engine(
    "billing_schedule",
    "1.0",
    fingerprint_fields=("start", "end", "total_amount", "gst_percent", "today"),
)
def build_billing_summary(
    start: object,
    end: object,
    total_amount: Numeric,
    printing_total: Numeric = 0,
    mounting_total: Numeric = 0,
    gst_percent: Numeric = 0,
    today: date | None = None,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> CampaignBillingSummary:
    """
    Build the billing summary for a campaign.

    Pure function - no side effects, no I/O, deterministic output.

    Args:
        start: Campaign start date
        end: Campaign end date, inclusive
        total_amount: Contracted base-rent total
        printing_total: Printing charges (passed through)
        mounting_total: Mounting charges (passed through)
        gst_percent: GST rate in percent (passed through)
        today: Reference date for ``is_current_month``
        convention: Billing convention

    Returns:
        CampaignBillingSummary
    """
    boundaries = segment_campaign(start, end, convention)
    periods = apply_prorata(boundaries, today, convention)
    rent = normalize_monthly_rent(periods, total_amount)

    end_date = coerce_date(end)
    truncated = bool(periods) and end_date is not None and (
        periods[-1].period_end < end_date
    )

    summary = CampaignBillingSummary(
        periods=periods,
        total_days=max(campaign_day_count(start, end), 1) if periods else 0,
        total_prorata=total_prorata(periods),
        monthly_base_rent=rent,
        printing_total=to_decimal(printing_total),
        mounting_total=to_decimal(mounting_total),
        gst_percent=to_decimal(gst_percent),
        truncated=truncated,
    )

    logger.info("billing_summary_built", extra={
        "total_months": summary.total_months,
        "total_days": summary.total_days,
        "total_prorata": str(summary.total_prorata),
        "monthly_base_rent": str(summary.monthly_base_rent),
        "truncated": truncated,
    })
    return summary


def schedule_period_amounts(
    summary: CampaignBillingSummary,
    one_time_charges_on: OneTimeChargePlacement | str = OneTimeChargePlacement.FIRST,
    manual_discount: Numeric = 0,
) -> tuple[tuple[BillingPeriod, PeriodAmounts], ...]:
    """
    Amounts for every period of a summary.

    Printing and mounting are applied in full to the period chosen by
    ``one_time_charges_on``; a campaign-level ``manual_discount`` is spread
    across periods by factor after being held to ``[0, billed gross]``.
    """
    placement = OneTimeChargePlacement(one_time_charges_on)
    if summary.is_empty:
        return ()

    charged = _charge_period(summary.periods, placement)
    billed_gross = summary.base_rent_total
    if charged is not None:
        billed_gross += summary.printing_total + summary.mounting_total
    discount = clamp_discount(manual_discount, billed_gross)

    rows: list[tuple[BillingPeriod, PeriodAmounts]] = []
    for period in summary.periods:
        carries_charges = period is charged
        share = (
            period_discount_share(discount, period, summary.periods)
            if discount != ZERO
            else ZERO
        )
        amounts = calculate_period_amount(
            period,
            summary.monthly_base_rent,
            summary.gst_percent,
            include_printing=carries_charges,
            include_mounting=carries_charges,
            printing_total=summary.printing_total,
            mounting_total=summary.mounting_total,
            discount=share,
        )
        rows.append((period, amounts))

    return tuple(rows)


def _charge_period(
    periods: Sequence[BillingPeriod],
    placement: OneTimeChargePlacement,
) -> BillingPeriod | None:
    if not periods or placement is OneTimeChargePlacement.NONE:
        return None
    if placement is OneTimeChargePlacement.LAST:
        return periods[-1]
    return periods[0]
