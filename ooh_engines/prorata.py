"""
Module: ooh_engines.prorata
Responsibility:
    Turn raw period boundaries into ``BillingPeriod`` value records, each
    weighted by how much of a standard 30-day billing month it covers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ooh_kernel and sibling engine modules.

Invariants enforced:
    - Full calendar month (long campaigns only): factor is exactly 1 and
      ``days_in_period`` is normalized to the billing cycle (30), whatever
      the true month length.
    - Partial month or short campaign: factor is
      ``round(calendar_days / 30, 2)`` and ``days_in_period`` is the true
      day count.
    - ``is_current_month`` is derived from the ``today`` argument only;
      the engine never reads the clock.

Failure modes:
    - ``BillingPeriod`` raises ValueError on inconsistent construction
      (programming error, never business input).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ooh_engines.segmentation import PeriodBoundary
from ooh_kernel.domain.conventions import STANDARD_CONVENTION, BillingConvention
from ooh_kernel.domain.dates import (
    inclusive_days,
    is_full_calendar_month,
    month_key,
    month_label,
)
from ooh_kernel.domain.values import round_half_up
from ooh_kernel.logging_config import get_logger

logger = get_logger("engines.prorata")

_ONE = Decimal("1")


@dataclass(frozen=True)
class BillingPeriod:
    """
    One invoiceable billing period.

    Contract:
        Immutable once computed.  ``calendar_days`` is the true inclusive
        day count; ``days_in_period`` is the billed count (30 for a full
        calendar month).
    Guarantees:
        - ``period_start <= period_end``.
        - ``pro_rata_factor > 0`` with two decimal places.
    """

    month_key: str
    label: str
    period_start: date
    period_end: date
    days_in_period: int
    calendar_days: int
    pro_rata_factor: Decimal
    is_first_month: bool = False
    is_last_month: bool = False
    is_current_month: bool = False

    def __post_init__(self) -> None:
        if self.period_end < self.period_start:
            raise ValueError("period_end must not precede period_start")
        if self.calendar_days != inclusive_days(self.period_start, self.period_end):
            raise ValueError("calendar_days must match the period bounds")
        if self.days_in_period <= 0:
            raise ValueError("days_in_period must be positive")
        if self.pro_rata_factor <= 0:
            raise ValueError("pro_rata_factor must be positive")

    @property
    def is_full_calendar_month(self) -> bool:
        return is_full_calendar_month(self.period_start, self.period_end)

    def contains(self, day: date) -> bool:
        return self.period_start <= day <= self.period_end


def prorata_factor(
    days: int,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> Decimal:
    """``round(days / billing_cycle_days, 2)``, rounded half up."""
    return round_half_up(Decimal(days) / convention.cycle_days)


def apply_prorata(
    boundaries: Sequence[PeriodBoundary],
    today: date | None = None,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> tuple[BillingPeriod, ...]:
    """
    Weight each boundary against the standard billing month.

    Pure function.

    Args:
        boundaries: Output of ``segment_campaign``
        today: Reference date for ``is_current_month`` (None: never current)
        convention: Billing convention

    Returns:
        One ``BillingPeriod`` per boundary, in the same order.
    """
    periods = tuple(
        _to_billing_period(boundary, today, convention) for boundary in boundaries
    )

    logger.debug("prorata_applied", extra={
        "period_count": len(periods),
        "full_months": sum(1 for p in periods if p.pro_rata_factor == _ONE),
        "today": today.isoformat() if today else None,
    })
    return periods


def _to_billing_period(
    boundary: PeriodBoundary,
    today: date | None,
    convention: BillingConvention,
) -> BillingPeriod:
    full_month = not boundary.short_campaign and is_full_calendar_month(
        boundary.period_start, boundary.period_end
    )

    if full_month:
        factor = _ONE
        days_in_period = convention.billing_cycle_days
    else:
        factor = prorata_factor(boundary.calendar_days, convention)
        days_in_period = boundary.calendar_days

    is_current = today is not None and (
        boundary.period_start <= today <= boundary.period_end
    )

    return BillingPeriod(
        month_key=month_key(boundary.period_start),
        label=month_label(boundary.period_start),
        period_start=boundary.period_start,
        period_end=boundary.period_end,
        days_in_period=days_in_period,
        calendar_days=boundary.calendar_days,
        pro_rata_factor=factor,
        is_first_month=boundary.is_first,
        is_last_month=boundary.is_last,
        is_current_month=is_current,
    )
