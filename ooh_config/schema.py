"""
Billing policy schema.

Human-authored, reviewable source artifact for the billing engine's
numeric policy.  YAML files are parsed into these types by the loader and
turned into kernel ``BillingConvention`` objects by the bridges.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BillingPolicyDef:
    """One billing policy document."""

    policy_id: str
    version: int
    billing_cycle_days: int = 30
    short_campaign_max_days: int = 30
    max_periods: int = 120
    default_gst_percent: Decimal = Decimal("18")
    one_time_charges_on: str = "first"
    checksum: str = ""
