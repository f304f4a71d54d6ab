"""
ooh_config -- single public entrypoint for billing policy.

Responsibility:
    Provides the ONLY way to obtain billing policy at runtime through
    ``get_active_policy()``.  YAML loading is internal tooling.

Architecture position:
    Configuration -- sits above ``ooh_kernel`` and below ``ooh_services``.
    The kernel and the engines MUST NEVER import ``ooh_config``; the
    bridges translate policy into kernel ``BillingConvention`` objects.

Failure modes:
    - ``FileNotFoundError`` -- the requested policy file does not exist.
    - ``InvalidBillingPolicyError`` -- a policy value is out of range.

Audit relevance:
    Every call emits an ``OOH_CONFIG_TRACE`` log entry with the policy id,
    version and checksum so a billing schedule can be tied back to the
    exact policy that produced it.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ooh_config.loader import load_billing_policy
from ooh_config.schema import BillingPolicyDef

_logger = logging.getLogger("ooh_kernel.config")

_DEFAULT_POLICY_PATH = Path(__file__).parent / "policies" / "standard.yaml"


def get_active_policy(path: Path | None = None) -> BillingPolicyDef:
    """The ONLY public configuration entrypoint.

    Args:
        path: Override policy file.  Defaults to the packaged standard
            30-day policy.

    Returns:
        BillingPolicyDef
    """
    policy = load_billing_policy(path or _DEFAULT_POLICY_PATH)

    _logger.info(
        "OOH_CONFIG_TRACE",
        extra={
            "trace_type": "OOH_CONFIG_TRACE",
            "policy_id": policy.policy_id,
            "policy_version": policy.version,
            "checksum": policy.checksum,
            "billing_cycle_days": policy.billing_cycle_days,
            "max_periods": policy.max_periods,
        },
    )
    return policy


__all__ = ["BillingPolicyDef", "get_active_policy"]
