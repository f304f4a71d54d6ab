"""
Billing conventions -- the 30-day standard month and its bounds.

Responsibility:
    Holds the numeric policy the billing engines run under.  The
    ``STANDARD_CONVENTION`` matches OOH industry practice: one billing
    month is 30 days, bookings of up to 30 days are billed as a single
    period, and month-walking is capped at 120 periods (10 years).

Architecture position:
    Kernel > Domain -- pure value object.  Engines import it directly;
    ``ooh_config.bridges`` builds instances from YAML policy.  The kernel
    never imports ``ooh_config``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

BILLING_CYCLE_DAYS = 30
MAX_BILLING_PERIODS = 120
MAX_BILLING_CYCLE_DAYS = 200


@dataclass(frozen=True)
class BillingConvention:
    """
    Numeric policy for proration.

    Guarantees:
        - ``billing_cycle_days`` is in ``1..200`` and ``max_periods`` is
          positive.
        - ``short_campaign_max_days`` is non-negative.
    """

    billing_cycle_days: int = BILLING_CYCLE_DAYS
    short_campaign_max_days: int = BILLING_CYCLE_DAYS
    max_periods: int = MAX_BILLING_PERIODS

    def __post_init__(self) -> None:
        if self.billing_cycle_days <= 0:
            raise ValueError("billing_cycle_days must be positive")
        # A single day must still round to a nonzero two-place factor.
        if self.billing_cycle_days > MAX_BILLING_CYCLE_DAYS:
            raise ValueError(
                f"billing_cycle_days must not exceed {MAX_BILLING_CYCLE_DAYS}"
            )
        if self.short_campaign_max_days < 0:
            raise ValueError("short_campaign_max_days must be non-negative")
        if self.max_periods <= 0:
            raise ValueError("max_periods must be positive")

    @property
    def cycle_days(self) -> Decimal:
        return Decimal(self.billing_cycle_days)


STANDARD_CONVENTION = BillingConvention()
