# billing/domain/services/gstr1_service.py

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Optional

from billing.domain.models.gstr1 import Gstr1Category, Gstr1InvoiceRecord, Gstr1PeriodSummary
from billing.domain.models.tax import InvoiceTaxSummary, TaxContext
from billing.domain.services.place_of_supply import resolve_place

logger = logging.getLogger("gstr1_service")

_PERIOD_REGEX = re.compile(r"^(\d{4})-(\d{2})$")


# ---------- Period helpers ----------


def parse_period(period: str) -> tuple[int, int]:
    """``"2025-01"`` -> ``(2025, 1)``. Raises ValueError on anything else."""
    match = _PERIOD_REGEX.match((period or "").strip())
    if not match:
        raise ValueError(f"period must be YYYY-MM, got {period!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"period month out of range: {period!r}")
    return year, month


def filing_period(period: str) -> str:
    """Return-period code used in filing payloads: ``"2025-01"`` -> ``"012025"``."""
    year, month = parse_period(period)
    return f"{month:02d}{year}"


# ---------- Categorisation ----------


def _field(invoice: Any, *names: str) -> Any:
    for name in names:
        if isinstance(invoice, Mapping):
            value = invoice.get(name)
        else:
            value = getattr(invoice, name, None)
        if value is not None:
            return value
    return None


def categorize_for_gstr1(invoice: Any) -> Gstr1Category:
    """
    GSTR-1 table an invoice is reported under.

    Export and SEZ flags win over registration status; otherwise an invoice
    with a customer GSTIN is B2B and everything else is B2C.
    """
    if _field(invoice, "is_export", "isExport"):
        return Gstr1Category.EXPORT
    if _field(invoice, "buyer_is_sez", "buyerIsSEZ"):
        return Gstr1Category.SEZ
    gstin = _field(invoice, "customer_gstin", "customerGstin")
    if gstin and str(gstin).strip():
        return Gstr1Category.B2B
    return Gstr1Category.B2C


# ---------- Builders ----------


def as_invoice_record(invoice: Any) -> Gstr1InvoiceRecord:
    """Coerce a record, mapping or ORM-style object into a Gstr1InvoiceRecord."""
    if isinstance(invoice, Gstr1InvoiceRecord):
        return invoice
    return Gstr1InvoiceRecord.model_validate(invoice)


def record_from_summary(
    summary: InvoiceTaxSummary,
    context: TaxContext,
    invoice_number: str = "",
    invoice_date: Optional[date] = None,
) -> Gstr1InvoiceRecord:
    """Build the GSTR-1 view of an invoice the engine has just computed."""
    rates = {line.tax_rate for line in summary.lines}
    return Gstr1InvoiceRecord(
        invoice_number=invoice_number,
        invoice_date=invoice_date,
        customer_gstin=context.buyer_gstin,
        is_export=context.is_export,
        buyer_is_sez=context.buyer_is_sez,
        is_reverse_charge=context.is_reverse_charge,
        place_of_supply=resolve_place(context).place_of_supply,
        tax_rate=rates.pop() if len(rates) == 1 else None,
        taxable_amount=summary.taxable_amount,
        cgst_amount=summary.cgst_total,
        sgst_amount=summary.sgst_total,
        igst_amount=summary.igst_total,
        cess_amount=summary.cess_total,
        total_amount=summary.grand_total,
    )


def build_gstr1_summary(invoices: Iterable[Any], period: str) -> Gstr1PeriodSummary:
    """
    Bucket a period's outward invoices by GSTR-1 category and total them.

    Taxable value, each tax head and invoice value are summed per bucket and
    across the period.
    """
    summary = Gstr1PeriodSummary(period=period, fp=filing_period(period))

    for invoice in invoices:
        record = as_invoice_record(invoice)
        category = categorize_for_gstr1(record)
        summary.buckets[category].add(record)
        summary.totals.add(record)

    logger.debug(
        "GSTR-1 %s: %d invoices, taxable %s",
        period, summary.totals.count, summary.totals.taxable_value,
    )
    return summary
