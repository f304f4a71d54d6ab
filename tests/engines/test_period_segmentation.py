"""
Tests for calendar-month segmentation of campaign date ranges.

Covers the short-campaign branch, month walking across partial and
whole months, degenerate ranges, invalid input and the period cap.
"""

from datetime import date, datetime, timedelta

import pytest

from ooh_engines.segmentation import (
    PeriodBoundary,
    campaign_day_count,
    segment_campaign,
)
from ooh_kernel.domain.conventions import BillingConvention


def _spans(boundaries):
    return [(b.period_start, b.period_end) for b in boundaries]


# ============================================================================
# PeriodBoundary value object
# ============================================================================


class TestPeriodBoundary:
    """Construction-time checks on boundaries."""

    def test_valid_boundary(self):
        b = PeriodBoundary(date(2026, 1, 15), date(2026, 1, 31), 17)
        assert b.calendar_days == 17
        assert not b.short_campaign

    def test_reversed_bounds_rejected(self):
        with pytest.raises(ValueError, match="precede"):
            PeriodBoundary(date(2026, 2, 1), date(2026, 1, 31), 1)

    def test_day_count_must_match_bounds(self):
        with pytest.raises(ValueError, match="calendar_days"):
            PeriodBoundary(date(2026, 1, 1), date(2026, 1, 31), 30)

    def test_is_frozen(self):
        b = PeriodBoundary(date(2026, 1, 1), date(2026, 1, 1), 1)
        with pytest.raises(AttributeError):
            b.calendar_days = 2


# ============================================================================
# Short campaigns
# ============================================================================


class TestShortCampaign:
    """Campaigns of 30 days or fewer are always one period."""

    def test_single_day(self):
        result = segment_campaign(date(2026, 3, 10), date(2026, 3, 10))
        assert len(result) == 1
        assert result[0].calendar_days == 1
        assert result[0].short_campaign
        assert result[0].is_first and result[0].is_last

    def test_thirty_days_across_months_stays_single(self):
        """Jan 15 - Feb 13 is 30 days and does not split at the month edge."""
        result = segment_campaign(date(2026, 1, 15), date(2026, 2, 13))
        assert _spans(result) == [(date(2026, 1, 15), date(2026, 2, 13))]
        assert result[0].calendar_days == 30

    def test_whole_february_is_short(self):
        result = segment_campaign(date(2026, 2, 1), date(2026, 2, 28))
        assert len(result) == 1
        assert result[0].short_campaign

    def test_thirty_one_days_walks_months(self):
        result = segment_campaign(date(2026, 1, 15), date(2026, 2, 14))
        assert len(result) == 2
        assert not any(b.short_campaign for b in result)

    def test_threshold_follows_convention(self):
        convention = BillingConvention(short_campaign_max_days=0)
        result = segment_campaign(date(2026, 1, 30), date(2026, 2, 2), convention)
        assert _spans(result) == [
            (date(2026, 1, 30), date(2026, 1, 31)),
            (date(2026, 2, 1), date(2026, 2, 2)),
        ]


# ============================================================================
# Month walking
# ============================================================================


class TestMonthWalk:
    """Long campaigns are clipped to calendar months."""

    def test_straddling_two_months(self):
        result = segment_campaign(date(2026, 1, 15), date(2026, 2, 14))
        assert _spans(result) == [
            (date(2026, 1, 15), date(2026, 1, 31)),
            (date(2026, 2, 1), date(2026, 2, 14)),
        ]
        assert [b.calendar_days for b in result] == [17, 14]

    def test_whole_quarter(self):
        result = segment_campaign(date(2026, 1, 1), date(2026, 3, 31))
        assert _spans(result) == [
            (date(2026, 1, 1), date(2026, 1, 31)),
            (date(2026, 2, 1), date(2026, 2, 28)),
            (date(2026, 3, 1), date(2026, 3, 31)),
        ]

    def test_partial_full_partial(self):
        result = segment_campaign(date(2026, 1, 30), date(2026, 3, 1))
        assert [b.calendar_days for b in result] == [2, 28, 1]

    def test_leap_february(self):
        result = segment_campaign(date(2024, 1, 20), date(2024, 3, 5))
        assert result[1].period_end == date(2024, 2, 29)
        assert result[1].calendar_days == 29

    def test_year_boundary(self):
        result = segment_campaign(date(2026, 12, 10), date(2027, 1, 20))
        assert _spans(result) == [
            (date(2026, 12, 10), date(2026, 12, 31)),
            (date(2027, 1, 1), date(2027, 1, 20)),
        ]

    def test_first_and_last_flags(self):
        result = segment_campaign(date(2026, 1, 15), date(2026, 4, 14))
        assert [b.is_first for b in result] == [True, False, False, False]
        assert [b.is_last for b in result] == [False, False, False, True]

    def test_contiguous_and_covering(self):
        start, end = date(2026, 1, 15), date(2027, 2, 14)
        result = segment_campaign(start, end)
        assert result[0].period_start == start
        assert result[-1].period_end == end
        for prev, nxt in zip(result, result[1:]):
            assert prev.period_end + timedelta(days=1) == nxt.period_start
        assert sum(b.calendar_days for b in result) == campaign_day_count(start, end)

    def test_campaign_ending_on_last_representable_day(self):
        result = segment_campaign(date(9999, 11, 15), date(9999, 12, 31))
        assert _spans(result) == [
            (date(9999, 11, 15), date(9999, 11, 30)),
            (date(9999, 12, 1), date(9999, 12, 31)),
        ]
        assert result[-1].is_last


# ============================================================================
# Input handling
# ============================================================================


class TestInputHandling:
    """Strings, datetimes, missing and reversed dates."""

    def test_iso_strings_accepted(self):
        result = segment_campaign("2026-01-15", "2026-02-14")
        assert len(result) == 2

    def test_datetimes_truncated(self):
        result = segment_campaign(
            datetime(2026, 1, 15, 23, 59), datetime(2026, 2, 14, 0, 1)
        )
        assert _spans(result)[0] == (date(2026, 1, 15), date(2026, 1, 31))

    @pytest.mark.parametrize("start,end", [
        (None, date(2026, 1, 31)),
        (date(2026, 1, 1), None),
        ("", "2026-01-31"),
        ("not-a-date", "2026-01-31"),
        (20260101, "2026-01-31"),
    ])
    def test_invalid_dates_yield_nothing(self, start, end):
        assert segment_campaign(start, end) == ()

    def test_end_before_start_is_one_day_on_start(self):
        result = segment_campaign(date(2026, 3, 10), date(2026, 3, 1))
        assert _spans(result) == [(date(2026, 3, 10), date(2026, 3, 10))]
        assert result[0].calendar_days == 1
        assert result[0].short_campaign

    def test_invalid_dates_logged(self, captured_logs):
        segment_campaign(None, None)
        messages = [r["message"] for r in captured_logs()]
        assert "billing_segmentation_skipped" in messages


class TestCampaignDayCount:

    def test_inclusive(self):
        assert campaign_day_count(date(2026, 1, 15), date(2026, 2, 14)) == 31

    def test_invalid_is_zero(self):
        assert campaign_day_count(None, "2026-01-01") == 0


# ============================================================================
# Safety cap
# ============================================================================


class TestPeriodCap:
    """The month walk always terminates."""

    def test_four_hundred_days_terminates(self):
        start = date(2026, 1, 1)
        end = start + timedelta(days=399)
        result = segment_campaign(start, end)
        assert len(result) == 14
        assert result[-1].period_end == end

    def test_truncates_at_cap(self, short_cap_convention, captured_logs):
        result = segment_campaign(
            date(2026, 1, 1), date(2026, 6, 30), short_cap_convention
        )
        assert len(result) == 3
        assert result[-1].period_end == date(2026, 3, 31)
        assert result[-1].is_last

        truncated = [r for r in captured_logs() if r["message"] == "billing_segmentation_truncated"]
        assert len(truncated) == 1
        assert truncated[0]["truncated_at"] == "2026-04-01"
        assert truncated[0]["level"] == "WARNING"

    def test_standard_cap_is_one_hundred_twenty(self):
        result = segment_campaign(date(2020, 1, 1), date(2035, 12, 31))
        assert len(result) == 120
        assert result[-1].period_end == date(2029, 12, 31)
