"""
Module: ooh_engines
Responsibility:
    Package entrypoint that re-exports all public symbols from the pure
    billing engine sub-modules.  This is the canonical import surface for
    higher layers (ooh_services, the invoicing component).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import ooh_kernel (and sibling engine modules).
    MUST NOT import ooh_services or ooh_config.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      "today" is passed in as an explicit parameter.
    - Decimal-only arithmetic: amounts and factors are ``Decimal``.
    - Determinism: identical inputs always produce identical outputs.
    - No business-rule exceptions: invalid dates give empty results.

Pipeline:
    segment_campaign -> apply_prorata -> normalize_monthly_rent
    -> calculate_period_amount (per period) -> build_period_invoice_lines

Usage:
    from ooh_engines import build_billing_summary, calculate_period_amount

    summary = build_billing_summary(
        start=date(2026, 1, 15),
        end=date(2026, 4, 14),
        total_amount=Decimal("300000"),
        gst_percent=Decimal("18"),
        today=date(2026, 2, 3),
    )
    first = summary.first_period
    amounts = calculate_period_amount(
        first, summary.monthly_base_rent, summary.gst_percent,
        include_printing=True, printing_total=summary.printing_total,
    )
"""

from ooh_engines.billing_schedule import (
    CampaignBillingSummary,
    OneTimeChargePlacement,
    build_billing_summary,
    schedule_period_amounts,
)
from ooh_engines.duration import (
    DurationMode,
    DurationSync,
    DurationValidation,
    LineItemDuration,
    LineItemPricing,
    LineItemTotals,
    RateComparison,
    calculate_days_from_months,
    calculate_discount,
    calculate_duration_days,
    calculate_duration_factor,
    calculate_end_date,
    calculate_line_item_totals,
    calculate_months_from_days,
    calculate_profit,
    sync_duration_from_days,
    sync_duration_from_end_date,
    sync_duration_from_months,
    sync_duration_from_start_date,
    validate_duration,
)
from ooh_engines.invoice_lines import (
    InvoiceLineDraft,
    build_period_invoice_lines,
    display_rent_description,
)
from ooh_engines.period_amount import (
    PeriodAmounts,
    calculate_period_amount,
    clamp_discount,
    period_discount_share,
)
from ooh_engines.prorata import BillingPeriod, apply_prorata, prorata_factor
from ooh_engines.rent import normalize_monthly_rent, reconstructed_total, total_prorata
from ooh_engines.segmentation import (
    PeriodBoundary,
    campaign_day_count,
    segment_campaign,
)

__all__ = [
    # Segmentation
    "PeriodBoundary",
    "campaign_day_count",
    "segment_campaign",
    # Proration
    "BillingPeriod",
    "apply_prorata",
    "prorata_factor",
    # Rent
    "normalize_monthly_rent",
    "reconstructed_total",
    "total_prorata",
    # Period amounts
    "PeriodAmounts",
    "calculate_period_amount",
    "clamp_discount",
    "period_discount_share",
    # Schedule
    "CampaignBillingSummary",
    "OneTimeChargePlacement",
    "build_billing_summary",
    "schedule_period_amounts",
    # Invoice lines
    "InvoiceLineDraft",
    "build_period_invoice_lines",
    "display_rent_description",
    # Line-item duration
    "DurationMode",
    "DurationSync",
    "DurationValidation",
    "LineItemDuration",
    "LineItemPricing",
    "LineItemTotals",
    "RateComparison",
    "calculate_days_from_months",
    "calculate_discount",
    "calculate_duration_days",
    "calculate_duration_factor",
    "calculate_end_date",
    "calculate_line_item_totals",
    "calculate_months_from_days",
    "calculate_profit",
    "sync_duration_from_days",
    "sync_duration_from_end_date",
    "sync_duration_from_months",
    "sync_duration_from_start_date",
    "validate_duration",
]
