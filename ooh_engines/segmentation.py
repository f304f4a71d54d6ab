"""
Module: ooh_engines.segmentation
Responsibility:
    Split a campaign's inclusive ``[start, end]`` date range into an
    ordered, contiguous, non-overlapping sequence of billing period
    boundaries aligned to calendar months.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ooh_kernel.

Invariants enforced:
    - Contiguity: ``b[i].period_end + 1 day == b[i+1].period_start``.
    - Coverage: ``sum(calendar_days) == inclusive campaign days`` unless
      the safety cap truncated the walk.
    - Exactly one boundary is ``is_first`` and exactly one ``is_last``
      (the same one for a single-period campaign).
    - Short-campaign rule: campaigns of at most
      ``convention.short_campaign_max_days`` are one period, always.

Failure modes:
    - Missing/invalid dates return an empty tuple (no exception).
    - ``end < start`` is billed as a one-day short campaign on ``start``.
    - Walks longer than ``convention.max_periods`` months stop silently
      at the cap and emit ``billing_segmentation_truncated``.

Usage:
    from ooh_engines.segmentation import segment_campaign

    boundaries = segment_campaign(date(2026, 1, 15), date(2026, 2, 14))
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ooh_engines.tracer import traced_engine
from ooh_kernel.domain.conventions import STANDARD_CONVENTION, BillingConvention
from ooh_kernel.domain.dates import (
    coerce_date,
    inclusive_days,
    month_end,
    month_start,
    next_month_start,
    same_month,
)
from ooh_kernel.logging_config import get_logger

logger = get_logger("engines.segmentation")


@dataclass(frozen=True)
class PeriodBoundary:
    """
    Raw bounds of one billing period, before proration.

    Contract:
        ``calendar_days`` is the true inclusive day count of
        ``[period_start, period_end]``.
    """

    period_start: date
    period_end: date
    calendar_days: int
    short_campaign: bool = False
    is_first: bool = False
    is_last: bool = False

    def __post_init__(self) -> None:
        if self.period_end < self.period_start:
            raise ValueError("period_end must not precede period_start")
        if self.calendar_days != inclusive_days(self.period_start, self.period_end):
            raise ValueError("calendar_days must match the period bounds")


def campaign_day_count(start: object, end: object) -> int:
    """Inclusive day count of the campaign, or 0 when a date is unusable."""
    start_date = coerce_date(start)
    end_date = coerce_date(end)
    if start_date is None or end_date is None:
        return 0
    return inclusive_days(start_date, end_date)


@traced_engine("segmentation", "1.0", fingerprint_fields=("start", "end"))
def segment_campaign(
    start: object,
    end: object,
    convention: BillingConvention = STANDARD_CONVENTION,
) -> tuple[PeriodBoundary, ...]:
    """
    Split ``[start, end]`` into calendar-month billing boundaries.

    Pure function - no side effects, no I/O, deterministic output.

    Args:
        start: Campaign start (date, datetime or ISO string)
        end: Campaign end, inclusive
        convention: Billing convention (short-campaign threshold, cap)

    Returns:
        Ordered boundaries; empty if either date is missing or invalid.
    """
    start_date = coerce_date(start)
    end_date = coerce_date(end)
    if start_date is None or end_date is None:
        logger.info("billing_segmentation_skipped", extra={
            "reason": "invalid_dates",
            "start": str(start),
            "end": str(end),
        })
        return ()

    total_days = inclusive_days(start_date, end_date)

    if total_days <= 0:
        logger.warning("billing_segmentation_degenerate_range", extra={
            "start": start_date.isoformat(),
            "end": end_date.isoformat(),
            "total_days": total_days,
        })
        return (_single_period(start_date, start_date),)

    if total_days <= convention.short_campaign_max_days:
        logger.debug("billing_segmentation_short_campaign", extra={
            "start": start_date.isoformat(),
            "end": end_date.isoformat(),
            "total_days": total_days,
        })
        return (_single_period(start_date, end_date),)

    spans = _walk_months(start_date, end_date, convention.max_periods)

    last_index = len(spans) - 1
    boundaries = tuple(
        PeriodBoundary(
            period_start=period_start,
            period_end=period_end,
            calendar_days=inclusive_days(period_start, period_end),
            is_first=index == 0,
            is_last=index == last_index,
        )
        for index, (period_start, period_end) in enumerate(spans)
    )

    logger.debug("billing_segmentation_completed", extra={
        "start": start_date.isoformat(),
        "end": end_date.isoformat(),
        "total_days": total_days,
        "period_count": len(boundaries),
    })
    return boundaries


def _single_period(start: date, end: date) -> PeriodBoundary:
    return PeriodBoundary(
        period_start=start,
        period_end=end,
        calendar_days=inclusive_days(start, end),
        short_campaign=True,
        is_first=True,
        is_last=True,
    )


def _walk_months(
    start: date,
    end: date,
    max_periods: int,
) -> list[tuple[date, date]]:
    """Month-by-month (period_start, period_end) pairs clipped to the campaign."""
    spans: list[tuple[date, date]] = []
    current = start

    while current < end or same_month(current, end):
        if len(spans) >= max_periods:
            logger.warning("billing_segmentation_truncated", extra={
                "start": start.isoformat(),
                "end": end.isoformat(),
                "max_periods": max_periods,
                "truncated_at": (spans[-1][1] + timedelta(days=1)).isoformat(),
            })
            break

        period_start = max(start, month_start(current))
        period_end = min(end, month_end(current))
        spans.append((period_start, period_end))
        if period_end >= end:
            break
        current = next_month_start(current)

    return spans
