"""
Services layer: orchestration over the pure billing engines.

Services receive their clock and policy by injection and never persist
anything; persistence of campaigns and invoices belongs to the caller.
"""

from ooh_services.campaign_billing_service import (
    CampaignBillingService,
    CampaignRecord,
    PeriodInvoicePreview,
)

__all__ = [
    "CampaignBillingService",
    "CampaignRecord",
    "PeriodInvoicePreview",
]
