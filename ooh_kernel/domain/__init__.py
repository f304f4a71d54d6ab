"""
Pure domain layer.

Date arithmetic, Decimal rounding, billing conventions and the injectable
clock.  NO dependencies on I/O or the wall clock (except SystemClock).
All domain objects are immutable and deterministic.
"""

from ooh_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from ooh_kernel.domain.conventions import (
    BILLING_CYCLE_DAYS,
    MAX_BILLING_PERIODS,
    STANDARD_CONVENTION,
    BillingConvention,
)
from ooh_kernel.domain.dates import coerce_date, format_iso_date, parse_iso_date
from ooh_kernel.domain.values import round_half_up, to_decimal, to_decimal_or_zero

__all__ = [
    "BILLING_CYCLE_DAYS",
    "MAX_BILLING_PERIODS",
    "STANDARD_CONVENTION",
    "BillingConvention",
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "coerce_date",
    "format_iso_date",
    "parse_iso_date",
    "round_half_up",
    "to_decimal",
    "to_decimal_or_zero",
]
