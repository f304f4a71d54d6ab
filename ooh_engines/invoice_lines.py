"""
Module: ooh_engines.invoice_lines
Responsibility:
    Draft the invoice line items for one billing period from its computed
    amounts.  Drafts are handed to the external invoicing component, which
    persists and renders them.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - The display-rent line is always first and carries ``base_rent``.
    - Printing/mounting lines appear only when their amount is positive.
    - ``sno`` numbers lines from 1; ``rate == amount`` and quantity is 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ooh_engines.period_amount import PeriodAmounts
from ooh_engines.prorata import BillingPeriod
from ooh_kernel.domain.dates import short_day_label
from ooh_kernel.domain.values import ZERO

_ONE = Decimal("1")


@dataclass(frozen=True)
class InvoiceLineDraft:
    """One row of an invoice, before persistence."""

    sno: int
    description: str
    quantity: Decimal
    rate: Decimal
    amount: Decimal


def display_rent_description(period: BillingPeriod) -> str:
    """``Display Rent - January 2026 (15 Jan to 31 Jan 2026)``"""
    return (
        f"Display Rent - {period.label} "
        f"({short_day_label(period.period_start)} to "
        f"{short_day_label(period.period_end, with_year=True)})"
    )


def build_period_invoice_lines(
    period: BillingPeriod,
    amounts: PeriodAmounts,
    asset_count: int | None = None,
) -> tuple[InvoiceLineDraft, ...]:
    """
    Invoice line drafts for ``period``.

    Args:
        period: The billing period being invoiced
        amounts: Output of ``calculate_period_amount`` for the period
        asset_count: Number of media assets, appended to one-time charge
            descriptions when given
    """
    suffix = f" ({asset_count} assets)" if asset_count is not None else ""

    rows: list[tuple[str, Decimal]] = [
        (display_rent_description(period), amounts.base_rent),
    ]
    if amounts.printing > ZERO:
        rows.append((f"Printing Charges{suffix}", amounts.printing))
    if amounts.mounting > ZERO:
        rows.append((f"Mounting Charges{suffix}", amounts.mounting))

    return tuple(
        InvoiceLineDraft(
            sno=index,
            description=description,
            quantity=_ONE,
            rate=amount,
            amount=amount,
        )
        for index, (description, amount) in enumerate(rows, start=1)
    )
