"""
Config → Kernel Bridges.

Functions that convert parsed policy artifacts into kernel-compatible
inputs.  These live in ooh_config (the producer) because the kernel must
NEVER import ooh_config.

Usage:
    from ooh_config import get_active_policy
    from ooh_config.bridges import build_billing_convention

    convention = build_billing_convention(get_active_policy())
"""

from __future__ import annotations

from ooh_config.schema import BillingPolicyDef
from ooh_kernel.domain.conventions import BillingConvention


def build_billing_convention(policy: BillingPolicyDef) -> BillingConvention:
    """Kernel convention for the engines from a policy document."""
    return BillingConvention(
        billing_cycle_days=policy.billing_cycle_days,
        short_campaign_max_days=policy.short_campaign_max_days,
        max_periods=policy.max_periods,
    )
