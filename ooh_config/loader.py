"""
Configuration Loader (``ooh_config.loader``).

Responsibility
--------------
Loads billing policy YAML files and parses them into the typed
``ooh_config.schema.BillingPolicyDef``.  Runtime callers go through
``ooh_config.get_active_policy()`` rather than calling this directly.

Architecture position
---------------------
**Config layer**.  No dependency on engines or services; the only kernel
import is the typed exception raised on bad values.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* Numeric fields are range-checked; a bad value raises
  ``InvalidBillingPolicyError`` naming the field.
* ``compute_checksum`` produces a deterministic SHA-256 hash for
  configuration identity and change detection.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing ``policy_id``  -> ``KeyError`` propagates.
* Out-of-range or mistyped value  -> ``InvalidBillingPolicyError``.
"""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml

from ooh_config.schema import BillingPolicyDef
from ooh_kernel.domain.conventions import MAX_BILLING_CYCLE_DAYS
from ooh_kernel.domain.values import HUNDRED, ZERO, to_decimal
from ooh_kernel.exceptions import InvalidBillingPolicyError

ONE_TIME_CHARGE_PLACEMENTS = ("first", "last", "none")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _int_field(
    data: dict[str, Any],
    name: str,
    default: int,
    minimum: int,
    maximum: int | None = None,
) -> int:
    value = data.get(name, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidBillingPolicyError(name, value, "must be an integer")
    if value < minimum:
        raise InvalidBillingPolicyError(name, value, f"must be >= {minimum}")
    if maximum is not None and value > maximum:
        raise InvalidBillingPolicyError(name, value, f"must be <= {maximum}")
    return value


def _percent_field(data: dict[str, Any], name: str, default: Decimal) -> Decimal:
    raw = data.get(name, default)
    try:
        value = to_decimal(raw)
    except ValueError as exc:
        raise InvalidBillingPolicyError(name, raw, "must be numeric") from exc
    if not ZERO <= value <= HUNDRED:
        raise InvalidBillingPolicyError(name, raw, "must be between 0 and 100")
    return value


def parse_billing_policy(data: dict[str, Any]) -> BillingPolicyDef:
    """
    Parse a ``BillingPolicyDef`` from a dict.

    Preconditions:
        - ``data`` must contain ``policy_id``; every other field has a
          default matching the standard 30-day convention.
    Raises:
        KeyError: if ``policy_id`` is missing.
        InvalidBillingPolicyError: on a mistyped or out-of-range value.
    """
    placement = str(data.get("one_time_charges_on", "first")).lower()
    if placement not in ONE_TIME_CHARGE_PLACEMENTS:
        raise InvalidBillingPolicyError(
            "one_time_charges_on",
            data.get("one_time_charges_on"),
            f"must be one of {', '.join(ONE_TIME_CHARGE_PLACEMENTS)}",
        )

    return BillingPolicyDef(
        policy_id=str(data["policy_id"]),
        version=_int_field(data, "version", 1, minimum=1),
        billing_cycle_days=_int_field(
            data, "billing_cycle_days", 30, minimum=1, maximum=MAX_BILLING_CYCLE_DAYS
        ),
        short_campaign_max_days=_int_field(
            data, "short_campaign_max_days", 30, minimum=0
        ),
        max_periods=_int_field(data, "max_periods", 120, minimum=1),
        default_gst_percent=_percent_field(data, "default_gst_percent", Decimal("18")),
        one_time_charges_on=placement,
        checksum=compute_checksum(data),
    )


def load_billing_policy(path: Path) -> BillingPolicyDef:
    """Load and parse one policy file."""
    return parse_billing_policy(load_yaml_file(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
