"""
Typed exception hierarchy for the OOH billing kernel.

The billing engines themselves never raise on business input: invalid or
missing dates produce empty schedules, and the month-walk safety cap
truncates with a warning. The exceptions below belong to the layers around
the engines (configuration loading and the service facade), where a caller
needs to branch on a machine-readable ``code`` rather than a message.

Hierarchy:

    OohKernelError (base)
    |
    +-- ConfigError
    |   +-- InvalidBillingPolicyError
    |
    +-- BillingError
        +-- BillingPeriodNotFoundError
        +-- InvalidCampaignRecordError

Codes:

    Category | Code                      | When Raised
    ---------|---------------------------|---------------------------------------
    Config   | INVALID_BILLING_POLICY    | Policy YAML has a missing/bad value
    Billing  | BILLING_PERIOD_NOT_FOUND  | month_key not in the campaign schedule
             | INVALID_CAMPAIGN_RECORD   | Campaign row unreadable (not a mapping,
             |                           | non-integer asset_count)
"""


class OohKernelError(Exception):
    """
    Base exception for all OOH kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "OOH_KERNEL_ERROR"


# Configuration exceptions


class ConfigError(OohKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidBillingPolicyError(ConfigError):
    """A billing policy field is missing or out of range."""

    code: str = "INVALID_BILLING_POLICY"

    def __init__(self, field_name: str, value: object, reason: str):
        self.field_name = field_name
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid billing policy field {field_name!r} = {value!r}: {reason}"
        )


# Billing exceptions


class BillingError(OohKernelError):
    """Base exception for billing facade errors."""

    code: str = "BILLING_ERROR"


class BillingPeriodNotFoundError(BillingError):
    """Requested month is not part of the campaign's billing schedule."""

    code: str = "BILLING_PERIOD_NOT_FOUND"

    def __init__(self, campaign_id: str, month_key: str):
        self.campaign_id = campaign_id
        self.month_key = month_key
        super().__init__(
            f"No billing period {month_key} for campaign {campaign_id}"
        )


class InvalidCampaignRecordError(BillingError):
    """Campaign record could not be read from the supplied row."""

    code: str = "INVALID_CAMPAIGN_RECORD"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid campaign record: {reason}")
