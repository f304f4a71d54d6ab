"""
ooh_services.campaign_billing_service -- Campaign billing facade.

Responsibility:
    Read a campaign record handed over by the persistence layer, run it
    through the pure billing engines with "today" taken from an injected
    Clock and the numeric policy from ``ooh_config``, and return billing
    summaries, per-period amounts and invoice line drafts for the
    invoicing component.

Architecture position:
    Services -- orchestration over engines + kernel + config.  Owns no
    state beyond its injected clock and policy; nothing is cached and
    nothing is written back to the campaign record.

Invariants enforced:
    - Engines never see the clock; ``today`` is read once per call here.
    - One-time charges are placed per policy (first period by default).
    - Every call binds ``campaign_id`` into ``LogContext``.

Failure modes:
    - InvalidCampaignRecordError from ``CampaignRecord.from_mapping`` if
      the row is not a mapping or its asset_count is not an integer.
    - BillingPeriodNotFoundError from ``period_amounts`` if the month key
      is not in the campaign's schedule.
    - Invalid dates are NOT an error here: they yield an empty summary;
      ``validate`` reports them for the form layer.

Usage:
    service = CampaignBillingService(SystemClock())
    record = CampaignRecord.from_mapping(row)
    summary = service.summarize(record)
    previews = service.schedule(record)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any

from ooh_config import get_active_policy
from ooh_config.bridges import build_billing_convention
from ooh_config.schema import BillingPolicyDef
from ooh_engines.billing_schedule import (
    CampaignBillingSummary,
    OneTimeChargePlacement,
    build_billing_summary,
    schedule_period_amounts,
)
from ooh_engines.duration import DurationValidation, validate_duration
from ooh_engines.invoice_lines import InvoiceLineDraft, build_period_invoice_lines
from ooh_engines.period_amount import (
    PeriodAmounts,
    calculate_period_amount,
    clamp_discount,
    period_discount_share,
)
from ooh_engines.prorata import BillingPeriod
from ooh_kernel.domain.clock import Clock
from ooh_kernel.domain.dates import coerce_date
from ooh_kernel.domain.values import ZERO, Numeric, to_decimal, to_decimal_or_zero
from ooh_kernel.exceptions import BillingPeriodNotFoundError, InvalidCampaignRecordError
from ooh_kernel.logging_config import LogContext, get_logger

logger = get_logger("services.campaign_billing")


@dataclass(frozen=True)
class CampaignRecord:
    """
    The billing-relevant slice of a campaign row.

    Dates may be None when the row is incomplete; the engines then return
    an empty schedule.
    """

    campaign_id: str
    start_date: date | None
    end_date: date | None
    total_amount: Decimal
    printing_total: Decimal = ZERO
    mounting_total: Decimal = ZERO
    gst_percent: Decimal = Decimal("18")
    asset_count: int | None = None

    @classmethod
    def from_mapping(
        cls,
        row: Mapping[str, Any],
        default_gst_percent: Numeric = Decimal("18"),
    ) -> CampaignRecord:
        """
        Build a record from a datastore row.

        Nullable numeric columns read as zero; a missing GST rate falls
        back to ``default_gst_percent``.
        """
        if not isinstance(row, Mapping):
            raise InvalidCampaignRecordError(
                f"expected a mapping, got {type(row).__name__}"
            )

        gst_raw = row.get("gst_percent")
        asset_count = row.get("asset_count")
        if asset_count is not None:
            try:
                asset_count = int(asset_count)
            except (TypeError, ValueError) as exc:
                raise InvalidCampaignRecordError(
                    f"asset_count must be an integer, got {asset_count!r}"
                ) from exc

        return cls(
            campaign_id=str(row.get("campaign_id") or row.get("id") or ""),
            start_date=coerce_date(row.get("start_date")),
            end_date=coerce_date(row.get("end_date")),
            total_amount=to_decimal_or_zero(row.get("total_amount")),
            printing_total=to_decimal_or_zero(row.get("printing_total")),
            mounting_total=to_decimal_or_zero(row.get("mounting_total")),
            gst_percent=(
                to_decimal(default_gst_percent)
                if gst_raw is None
                else to_decimal_or_zero(gst_raw)
            ),
            asset_count=asset_count,
        )


@dataclass(frozen=True)
class PeriodInvoicePreview:
    """Amounts and line drafts for one period of a campaign schedule."""

    period: BillingPeriod
    amounts: PeriodAmounts
    lines: tuple[InvoiceLineDraft, ...]


class CampaignBillingService:
    """
    Billing facade over the pure engines.

    Contract:
        Receives a Clock (and optionally a policy) via constructor
        injection.  Methods are safe to call concurrently; the service
        holds no mutable state.
    """

    def __init__(self, clock: Clock, policy: BillingPolicyDef | None = None):
        self._clock = clock
        self._policy = policy or get_active_policy()
        self._convention = build_billing_convention(self._policy)

    @property
    def policy(self) -> BillingPolicyDef:
        return self._policy

    def record_from_row(self, row: Mapping[str, Any]) -> CampaignRecord:
        """``CampaignRecord.from_mapping`` with the policy's default GST rate."""
        return CampaignRecord.from_mapping(
            row, default_gst_percent=self._policy.default_gst_percent
        )

    def summarize(self, record: CampaignRecord) -> CampaignBillingSummary:
        """Billing summary of ``record`` as of the clock's today."""
        with LogContext.bind(campaign_id=record.campaign_id):
            summary = build_billing_summary(
                start=record.start_date,
                end=record.end_date,
                total_amount=record.total_amount,
                printing_total=record.printing_total,
                mounting_total=record.mounting_total,
                gst_percent=record.gst_percent,
                today=self._clock.today(),
                convention=self._convention,
            )
            if summary.truncated:
                logger.warning("billing_schedule_truncated", extra={
                    "max_periods": self._convention.max_periods,
                    "start_date": record.start_date,
                    "end_date": record.end_date,
                })
            return summary

    def period_amounts(
        self,
        record: CampaignRecord,
        month_key: str,
        include_printing: bool = False,
        include_mounting: bool = False,
        manual_discount: Numeric = 0,
    ) -> PeriodAmounts:
        """
        Amounts for one month of the campaign.

        ``manual_discount`` is the campaign-wide discount; it is held to the
        campaign gross before this month's share is taken.

        Raises:
            BillingPeriodNotFoundError: if ``month_key`` is not scheduled.
        """
        summary = self.summarize(record)
        period = summary.find_period(month_key)
        if period is None:
            raise BillingPeriodNotFoundError(record.campaign_id, month_key)

        with LogContext.bind(campaign_id=record.campaign_id):
            discount = period_discount_share(
                clamp_discount(manual_discount, summary.gross_amount),
                period,
                summary.periods,
            )
            amounts = calculate_period_amount(
                period,
                summary.monthly_base_rent,
                summary.gst_percent,
                include_printing=include_printing,
                include_mounting=include_mounting,
                printing_total=summary.printing_total,
                mounting_total=summary.mounting_total,
                discount=discount,
            )
            logger.info("period_amounts_prepared", extra={
                "month_key": month_key,
                "include_printing": include_printing,
                "include_mounting": include_mounting,
                "total": str(amounts.total),
            })
            return amounts

    def schedule(
        self,
        record: CampaignRecord,
        manual_discount: Numeric = 0,
    ) -> tuple[PeriodInvoicePreview, ...]:
        """Invoice previews for every period, one-time charges per policy."""
        summary = self.summarize(record)

        with LogContext.bind(campaign_id=record.campaign_id):
            rows = schedule_period_amounts(
                summary,
                one_time_charges_on=OneTimeChargePlacement(
                    self._policy.one_time_charges_on
                ),
                manual_discount=manual_discount,
            )
            previews = tuple(
                PeriodInvoicePreview(
                    period=period,
                    amounts=amounts,
                    lines=build_period_invoice_lines(
                        period, amounts, record.asset_count
                    ),
                )
                for period, amounts in rows
            )
            logger.info("billing_schedule_prepared", extra={
                "period_count": len(previews),
                "one_time_charges": str(
                    sum((p.amounts.one_time_charges for p in previews), ZERO)
                ),
                "schedule_total": str(sum((p.amounts.total for p in previews), ZERO)),
            })
            return previews

    def validate(self, record: CampaignRecord) -> DurationValidation:
        """
        User-facing check of the campaign's dates.

        The engines silently return an empty or truncated schedule; this
        is where those cases become a message for the invoice form.
        """
        if record.start_date is None or record.end_date is None:
            return DurationValidation(False, "Start and end dates are required")

        result = validate_duration(start_date=record.start_date, end_date=record.end_date)
        if not result.is_valid:
            return result

        if self.summarize(record).truncated:
            return DurationValidation(
                False,
                f"Campaign exceeds {self._convention.max_periods} billing periods",
            )
        return result
