# billing/domain/services/invoice_summary.py
"""
Invoice-level GST totals.

Totals are sums of the already-rounded per-line components; nothing is
re-derived from the invoice total, so ``grand_total == taxable_amount +
total_tax`` holds exactly.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal
from typing import Optional

from billing.domain.models.tax import (
    ZERO,
    InvoiceTaxSummary,
    LineItemInput,
    TaxBreakdown,
    TaxContext,
)
from billing.domain.models.tax_rate_config import GSTRateTable
from billing.domain.services.gst_calculator import compute_line


def summarize_breakdowns(
    breakdowns: Iterable[TaxBreakdown],
    discount: Decimal | int | float | str = ZERO,
) -> InvoiceTaxSummary:
    """Aggregate line results the caller already holds into invoice totals."""
    lines = tuple(breakdowns)
    discount = Decimal(str(discount))

    subtotal = sum((b.taxable_amount for b in lines), ZERO)
    cgst = sum((b.cgst_amount for b in lines), ZERO)
    sgst = sum((b.sgst_amount for b in lines), ZERO)
    igst = sum((b.igst_amount for b in lines), ZERO)
    cess = sum((b.cess_amount for b in lines), ZERO)
    tds = sum((b.tds_amount for b in lines), ZERO)

    flags: set[str] = set()
    for b in lines:
        flags.update(b.compliance_flags)

    taxable_amount = subtotal - discount
    total_tax = cgst + sgst + igst + cess + tds

    return InvoiceTaxSummary(
        subtotal=subtotal,
        discount=discount,
        taxable_amount=taxable_amount,
        cgst_total=cgst,
        sgst_total=sgst,
        igst_total=igst,
        cess_total=cess,
        tds_total=tds,
        total_tax=total_tax,
        grand_total=taxable_amount + total_tax,
        compliance_flags=frozenset(flags),
        lines=lines,
    )


def summarize_invoice(
    lines: Sequence[LineItemInput],
    context: TaxContext,
    discount: Decimal | int | float | str = ZERO,
    rates: Optional[GSTRateTable] = None,
) -> InvoiceTaxSummary:
    """
    Compute every line against the same context and total the invoice.

    ``discount`` is an invoice-level amount taken off the subtotal; line
    taxes are computed on the line amounts as given.
    """
    return summarize_breakdowns(
        (compute_line(line, context, rates) for line in lines),
        discount=discount,
    )
