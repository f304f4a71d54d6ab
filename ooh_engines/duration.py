"""
Module: ooh_engines.duration
Responsibility:
    Duration and pricing arithmetic for individual plan/campaign line items
    (one media asset booked for a date range) under the 30-day billing
    convention: inclusive day counts, month/day conversions, keeping
    start/end/days/months in sync while one is edited, and applying the
    duration factor to monthly rates.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - A booking that is exactly one full calendar month bills as 30 days,
      whatever the month's true length (Feb 1-28 and Jul 1-31 are both 30).
    - Durations are at least one day.
    - All rate totals are rounded half up to two places.

Failure modes:
    - No exceptions on business input; ``validate_duration`` reports
      problems as a ``DurationValidation`` for the form layer to show.

Usage:
    from ooh_engines.duration import (
        DurationMode,
        LineItemDuration,
        LineItemPricing,
        calculate_line_item_totals,
    )

    duration = LineItemDuration(
        start_date=date(2026, 3, 1),
        end_date=date(2026, 3, 31),
        duration_days=30,
        duration_mode=DurationMode.MONTH,
        months_count=Decimal("1"),
    )
    totals = calculate_line_item_totals(LineItemPricing(
        base_rate_month=Decimal("40000"),
        card_rate_month=Decimal("60000"),
        negotiated_rate_month=Decimal("55000"),
        duration=duration,
    ))
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum

from ooh_kernel.domain.conventions import STANDARD_CONVENTION, BillingConvention
from ooh_kernel.domain.dates import inclusive_days, is_full_calendar_month
from ooh_kernel.domain.values import HUNDRED, ZERO, Numeric, round_half_up, to_decimal
from ooh_kernel.logging_config import get_logger

logger = get_logger("engines.duration")

_WHOLE = Decimal("1")
_MIN_MONTHS = Decimal("0.5")


class DurationMode(str, Enum):
    """How a line item's duration factor is derived."""

    MONTH = "MONTH"  # Explicit month count
    DAYS = "DAYS"  # days / billing cycle


@dataclass(frozen=True)
class LineItemDuration:
    """Booking window of a single line item."""

    start_date: date
    end_date: date
    duration_days: int
    duration_mode: DurationMode = DurationMode.DAYS
    months_count: Decimal | None = None


@dataclass(frozen=True)
class LineItemPricing:
    """Monthly rates for a line item plus its booking window."""

    base_rate_month: Decimal
    card_rate_month: Decimal
    negotiated_rate_month: Decimal
    duration: LineItemDuration
    printing_rate_month: Decimal = ZERO
    mounting_rate_month: Decimal = ZERO


@dataclass(frozen=True)
class LineItemTotals:
    """Monthly rates scaled by the duration factor."""

    line_base_rate: Decimal
    line_card_rate: Decimal
    line_negotiation_rate: Decimal
    line_printing_charge: Decimal
    line_mounting_charge: Decimal
    line_subtotal: Decimal
    duration_factor: Decimal


@dataclass(frozen=True)
class RateComparison:
    """An absolute amount and the percentage it represents."""

    value: Decimal
    percent: Decimal


@dataclass(frozen=True)
class DurationValidation:
    is_valid: bool
    message: str | None = None


@dataclass(frozen=True)
class DurationSync:
    """Fields recomputed after one duration input changes."""

    end_date: date | None = None
    duration_days: int | None = None
    months_count: Decimal | None = None


# ============================================================================
# Day / month arithmetic
# ============================================================================


def calculate_duration_days(
    start_date: date,
    end_date: date,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> int:
    """
    Inclusive billed days between two dates, at least one.

    A booking covering exactly one calendar month (1st to last day) is
    billed as a full cycle.
    """
    if is_full_calendar_month(start_date, end_date):
        return convention.billing_cycle_days
    return max(inclusive_days(start_date, end_date), 1)


def calculate_end_date(start_date: date, duration_days: int) -> date:
    """Inclusive end date of a booking of ``duration_days`` days."""
    return start_date + timedelta(days=duration_days - 1)


def calculate_duration_factor(
    duration_days: int,
    duration_mode: DurationMode,
    months_count: Numeric | None = None,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> Decimal:
    """Month count in MONTH mode; otherwise days over the billing cycle."""
    if duration_mode == DurationMode.MONTH and months_count is not None:
        return to_decimal(months_count)
    return Decimal(duration_days) / convention.cycle_days


def calculate_months_from_days(
    duration_days: int,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> int:
    """Nearest whole month, halves up: 15-44 days is 1, 45-74 is 2."""
    return int(round_half_up(Decimal(duration_days) / convention.cycle_days, _WHOLE))


def calculate_days_from_months(
    months_count: Numeric,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> int:
    """
    Day count for a month count, rounded half up to whole days.

    Fractional months land on a calendar day: 0.75 months is 23 days
    rather than 22.5.
    """
    return int(round_half_up(to_decimal(months_count) * convention.cycle_days, _WHOLE))


# ============================================================================
# Sync helpers (one field edited, the others follow)
# ============================================================================


def sync_duration_from_start_date(start_date: date, duration_days: int) -> DurationSync:
    """Start moved: keep the day count, move the end."""
    return DurationSync(end_date=calculate_end_date(start_date, duration_days))


def sync_duration_from_end_date(
    start_date: date,
    end_date: date,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> DurationSync:
    """End moved: recount days and months."""
    duration_days = calculate_duration_days(start_date, end_date, convention)
    return DurationSync(
        duration_days=duration_days,
        months_count=Decimal(calculate_months_from_days(duration_days, convention)),
    )


def sync_duration_from_days(
    start_date: date,
    duration_days: int,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> DurationSync:
    """Day count edited: move the end and recount months."""
    return DurationSync(
        end_date=calculate_end_date(start_date, duration_days),
        months_count=Decimal(calculate_months_from_days(duration_days, convention)),
    )


def sync_duration_from_months(
    start_date: date,
    months_count: Numeric,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> DurationSync:
    """Month count edited (MONTH mode): derive days and the end."""
    duration_days = calculate_days_from_months(months_count, convention)
    return DurationSync(
        duration_days=duration_days,
        end_date=calculate_end_date(start_date, duration_days),
    )


# ============================================================================
# Pricing
# ============================================================================


def calculate_line_item_totals(
    pricing: LineItemPricing,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> LineItemTotals:
    """
    Apply the duration factor to every monthly rate of a line item.

    Pure function.  The subtotal is negotiated rent plus printing and
    mounting; base and card rates are reported for margin display only.
    """
    duration = pricing.duration
    factor = calculate_duration_factor(
        duration.duration_days,
        duration.duration_mode,
        duration.months_count,
        convention,
    )

    line_base_rate = round_half_up(to_decimal(pricing.base_rate_month) * factor)
    line_card_rate = round_half_up(to_decimal(pricing.card_rate_month) * factor)
    line_negotiation_rate = round_half_up(
        to_decimal(pricing.negotiated_rate_month) * factor
    )
    line_printing_charge = round_half_up(to_decimal(pricing.printing_rate_month) * factor)
    line_mounting_charge = round_half_up(to_decimal(pricing.mounting_rate_month) * factor)

    totals = LineItemTotals(
        line_base_rate=line_base_rate,
        line_card_rate=line_card_rate,
        line_negotiation_rate=line_negotiation_rate,
        line_printing_charge=line_printing_charge,
        line_mounting_charge=line_mounting_charge,
        line_subtotal=line_negotiation_rate + line_printing_charge + line_mounting_charge,
        duration_factor=factor,
    )

    logger.debug("line_item_totals_calculated", extra={
        "duration_days": duration.duration_days,
        "duration_mode": duration.duration_mode.value,
        "duration_factor": str(factor),
        "line_subtotal": str(totals.line_subtotal),
    })
    return totals


def calculate_discount(
    card_rate_month: Numeric,
    negotiated_rate_month: Numeric,
    factor: Numeric,
) -> RateComparison:
    """Discount granted off the card rate (never negative)."""
    f = to_decimal(factor)
    card_total = to_decimal(card_rate_month) * f
    negotiated_total = to_decimal(negotiated_rate_month) * f
    value = max(ZERO, card_total - negotiated_total)
    percent = value / card_total * HUNDRED if card_total > ZERO else ZERO
    return RateComparison(value=round_half_up(value), percent=round_half_up(percent))


def calculate_profit(
    base_rate_month: Numeric,
    negotiated_rate_month: Numeric,
    factor: Numeric,
) -> RateComparison:
    """Margin of the negotiated rate over the base (cost) rate; may be negative."""
    f = to_decimal(factor)
    base_total = to_decimal(base_rate_month) * f
    value = to_decimal(negotiated_rate_month) * f - base_total
    percent = value / base_total * HUNDRED if base_total > ZERO else ZERO
    return RateComparison(value=round_half_up(value), percent=round_half_up(percent))


def validate_duration(
    start_date: date | None = None,
    end_date: date | None = None,
    duration_days: int | None = None,
    duration_mode: DurationMode | None = None,
    months_count: Numeric | None = None,
) -> DurationValidation:
    """Check user-entered duration fields; the first failure wins."""
    if duration_days is not None and duration_days < 1:
        return DurationValidation(False, "Duration must be at least 1 day")

    if duration_mode == DurationMode.MONTH and months_count is not None:
        if to_decimal(months_count) < _MIN_MONTHS:
            return DurationValidation(False, "Months must be at least 0.5")

    if start_date is not None and end_date is not None and end_date < start_date:
        return DurationValidation(False, "End date must be after start date")

    return DurationValidation(True)
