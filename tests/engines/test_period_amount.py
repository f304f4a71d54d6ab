"""
Tests for per-period invoice amounts.

One-time charges are all-or-nothing per period; GST is applied to the
subtotal after any discount share.
"""

from datetime import date
from decimal import Decimal

import pytest

from ooh_engines.period_amount import (
    PeriodAmounts,
    calculate_period_amount,
    clamp_discount,
    period_discount_share,
)
from ooh_engines.prorata import BillingPeriod, apply_prorata
from ooh_engines.segmentation import segment_campaign


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def half_month():
    """June 1-15: factor 0.50."""
    return BillingPeriod(
        month_key="2026-06",
        label="June 2026",
        period_start=date(2026, 6, 1),
        period_end=date(2026, 6, 15),
        days_in_period=15,
        calendar_days=15,
        pro_rata_factor=Decimal("0.50"),
    )


@pytest.fixture
def straddling_periods():
    return apply_prorata(segment_campaign(date(2026, 1, 15), date(2026, 2, 14)))


# ============================================================================
# calculate_period_amount
# ============================================================================


class TestCalculatePeriodAmount:
    """Base rent, one-time charges, GST and total."""

    def test_half_month_with_printing(self, half_month, monthly_rent):
        amounts = calculate_period_amount(
            half_month,
            monthly_rent,
            Decimal("18"),
            include_printing=True,
            printing_total=Decimal("5000"),
        )
        assert amounts.base_rent == Decimal("50000.00")
        assert amounts.printing == Decimal("5000")
        assert amounts.mounting == Decimal("0")
        assert amounts.subtotal == Decimal("55000.00")
        assert amounts.gst_amount == Decimal("9900.00")
        assert amounts.total == Decimal("64900.00")

    def test_charges_excluded_without_flags(self, half_month, monthly_rent):
        amounts = calculate_period_amount(
            half_month,
            monthly_rent,
            18,
            printing_total=5000,
            mounting_total=2500,
        )
        assert amounts.one_time_charges == Decimal("0")
        assert amounts.subtotal == Decimal("50000.00")

    def test_charges_applied_in_full_not_prorated(self, half_month, monthly_rent):
        amounts = calculate_period_amount(
            half_month,
            monthly_rent,
            0,
            include_printing=True,
            include_mounting=True,
            printing_total="5000",
            mounting_total="2500",
        )
        assert amounts.printing == Decimal("5000")
        assert amounts.mounting == Decimal("2500")
        assert amounts.one_time_charges == Decimal("7500")

    def test_mounting_only(self, half_month, monthly_rent):
        amounts = calculate_period_amount(
            half_month,
            monthly_rent,
            18,
            include_mounting=True,
            printing_total=5000,
            mounting_total=2500,
        )
        assert amounts.printing == Decimal("0")
        assert amounts.mounting == Decimal("2500")

    def test_zero_gst(self, half_month, monthly_rent):
        amounts = calculate_period_amount(half_month, monthly_rent, 0)
        assert amounts.gst_amount == Decimal("0.00")
        assert amounts.total == amounts.subtotal

    def test_amounts_round_half_up(self, half_month):
        """Base 0.03 * 0.50 = 0.015 -> 0.02; GST 25% of 0.02 = 0.005 -> 0.01."""
        amounts = calculate_period_amount(half_month, "0.03", 25)
        assert amounts.base_rent == Decimal("0.02")
        assert amounts.gst_amount == Decimal("0.01")

    def test_discount_reduces_taxable_subtotal(self, half_month, monthly_rent):
        amounts = calculate_period_amount(
            half_month, monthly_rent, 18, discount=Decimal("10000")
        )
        assert amounts.subtotal == Decimal("40000.00")
        assert amounts.gst_amount == Decimal("7200.00")
        assert amounts.total == Decimal("47200.00")

    def test_discount_capped_at_period_gross(self, half_month, monthly_rent):
        amounts = calculate_period_amount(
            half_month,
            monthly_rent,
            18,
            include_printing=True,
            printing_total=5000,
            discount=Decimal("80000"),
        )
        assert amounts.discount == Decimal("55000.00")
        assert amounts.subtotal == Decimal("0.00")
        assert amounts.gst_amount == Decimal("0.00")
        assert amounts.total == Decimal("0.00")

    def test_negative_discount_ignored(self, half_month, monthly_rent):
        amounts = calculate_period_amount(half_month, monthly_rent, 18, discount=-500)
        assert amounts.discount == Decimal("0")
        assert amounts.subtotal == Decimal("50000.00")

    def test_total_is_subtotal_plus_gst(self, straddling_periods, monthly_rent):
        for period in straddling_periods:
            a = calculate_period_amount(period, monthly_rent, "12.5")
            assert a.total == a.subtotal + a.gst_amount

    def test_non_numeric_rejected(self, half_month):
        with pytest.raises(ValueError):
            calculate_period_amount(half_month, "lots", 18)

    def test_result_is_frozen(self, half_month, monthly_rent):
        amounts = calculate_period_amount(half_month, monthly_rent, 18)
        assert isinstance(amounts, PeriodAmounts)
        with pytest.raises(AttributeError):
            amounts.total = Decimal("0")


# ============================================================================
# period_discount_share
# ============================================================================


class TestPeriodDiscountShare:
    """Campaign discount spread by pro-rata factor."""

    def test_single_period_takes_everything(self, half_month):
        assert period_discount_share("1234.56", half_month, (half_month,)) == Decimal("1234.56")

    def test_proportional_split(self, straddling_periods):
        jan, feb = straddling_periods
        assert period_discount_share(1040, jan, straddling_periods) == Decimal("570.00")
        assert period_discount_share(1040, feb, straddling_periods) == Decimal("470.00")

    def test_zero_discount(self, straddling_periods):
        jan, _ = straddling_periods
        assert period_discount_share(0, jan, straddling_periods) == Decimal("0.00")


# ============================================================================
# clamp_discount
# ============================================================================


class TestClampDiscount:
    """Campaign discount held between zero and the gross amount."""

    def test_within_range_unchanged(self):
        assert clamp_discount("1040", "111500.00") == Decimal("1040")

    def test_capped_at_gross(self):
        assert clamp_discount(1_000_000, "111500.00") == Decimal("111500.00")

    def test_negative_becomes_zero(self):
        assert clamp_discount(-500, "1000.00") == Decimal("0")

    def test_negative_gross_allows_nothing(self):
        assert clamp_discount(100, "-20.00") == Decimal("0")

    def test_clamping_logged(self, captured_logs):
        clamp_discount(-500, "1000.00")
        clamped = [r for r in captured_logs() if r["message"] == "manual_discount_clamped"]
        assert clamped[-1]["requested"] == "-500"
        assert clamped[-1]["applied"] == "0"

    def test_in_range_not_logged(self, captured_logs):
        clamp_discount(10, "1000.00")
        assert not any(
            r["message"] == "manual_discount_clamped" for r in captured_logs()
        )
