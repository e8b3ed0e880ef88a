# billing/domain/services/gst_export.py
"""
Build the GSTR-1 return JSON payload from a period's outward invoices.

B2B:    grouped by counterparty GSTIN (SEZ supplies go here as SEWP)
B2CS:   one row per invoice
EXP:    export invoices, without payment of tax (WOPAY)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict

from billing.domain.models.gstr1 import Gstr1Category, Gstr1InvoiceRecord
from billing.domain.models.state import EXPORT_STATE_CODE, STATE_CODES, canonical_state
from billing.domain.services.gstr1_service import (
    as_invoice_record,
    categorize_for_gstr1,
    filing_period,
    parse_period,
)

_PAISA = Decimal("0.01")


def _d(val: Decimal | None) -> float:
    """Convert Decimal to float for JSON serialization."""
    if val is None:
        return 0.0
    return float(val)


def _rate(record: Gstr1InvoiceRecord) -> Decimal:
    """Recorded rate, or inferred from tax / taxable when missing."""
    if record.tax_rate is not None and record.tax_rate > 0:
        return record.tax_rate
    gst = record.cgst_amount + record.sgst_amount + record.igst_amount
    if record.taxable_amount > 0 and gst > 0:
        return (gst * 100 / record.taxable_amount).quantize(_PAISA, rounding=ROUND_HALF_UP)
    return Decimal("0")


def _pos(record: Gstr1InvoiceRecord) -> str:
    """2-digit place-of-supply code; ValueError when no state can be resolved."""
    if record.is_export:
        return EXPORT_STATE_CODE
    code = canonical_state(record.place_of_supply)
    if code in STATE_CODES:
        return code
    code = (record.customer_gstin or "")[:2]
    if code in STATE_CODES:
        return code
    raise ValueError(
        f"Invoice {record.invoice_number!r}: no place of supply "
        f"(place {record.place_of_supply!r}, GSTIN {record.customer_gstin!r})"
    )


def _idt(record: Gstr1InvoiceRecord, period_start: date) -> str:
    return (record.invoice_date or period_start).strftime("%d-%m-%Y")


def make_gstr1_json(
    gstin: str,
    period: str,
    invoices: Iterable[Any],
) -> Dict[str, Any]:
    """
    Build GSTR-1 JSON for a filing period.

    Args:
        gstin: Supplier's GSTIN.
        period: Filing period ``YYYY-MM``.
        invoices: Gstr1InvoiceRecords (or mappings / objects coercible to one).

    Raises:
        ValueError: malformed period, a B2C/B2B row whose place of supply
            cannot be resolved, or an SEZ row without a recipient GSTIN.

    Returns:
        Dict matching the GSTR-1 offline-tool / API schema.
    """
    year, month = parse_period(period)
    period_start = date(year, month, 1)
    supplier_state = canonical_state(gstin[:2])

    b2b_index: dict[str, list[dict]] = {}
    b2cs_list: list[dict] = []
    exp_list: list[dict] = []
    grand_total = 0.0

    for invoice in invoices:
        record = as_invoice_record(invoice)
        category = categorize_for_gstr1(record)
        rate = _rate(record)
        grand_total += _d(record.invoice_value)

        if category is Gstr1Category.EXPORT:
            exp_list.append({
                "inum": record.invoice_number,
                "idt": _idt(record, period_start),
                "val": _d(record.invoice_value),
                "itms": [{
                    "txval": _d(record.taxable_amount),
                    "rt": _d(rate),
                    "iamt": _d(record.igst_amount),
                    "csamt": _d(record.cess_amount),
                }],
            })
        elif category in (Gstr1Category.B2B, Gstr1Category.SEZ):
            if not record.customer_gstin:
                raise ValueError(
                    f"Invoice {record.invoice_number!r}: SEZ supply without a recipient GSTIN"
                )
            b2b_index.setdefault(record.customer_gstin, []).append({
                "inum": record.invoice_number,
                "idt": _idt(record, period_start),
                "val": _d(record.invoice_value),
                "pos": _pos(record),
                "rchrg": "Y" if record.is_reverse_charge else "N",
                "inv_typ": "SEWP" if category is Gstr1Category.SEZ else "R",
                "itms": [{
                    "num": 1,
                    "itm_det": {
                        "txval": _d(record.taxable_amount),
                        "rt": _d(rate),
                        "iamt": _d(record.igst_amount),
                        "camt": _d(record.cgst_amount),
                        "samt": _d(record.sgst_amount),
                        "csamt": _d(record.cess_amount),
                    },
                }],
            })
        else:
            pos = _pos(record)
            b2cs_list.append({
                "sply_ty": "INTRA" if pos == supplier_state else "INTER",
                "pos": pos,
                "typ": "OE",
                "txval": _d(record.taxable_amount),
                "rt": _d(rate),
                "iamt": _d(record.igst_amount),
                "camt": _d(record.cgst_amount),
                "samt": _d(record.sgst_amount),
                "csamt": _d(record.cess_amount),
            })

    b2b_list = [{"ctin": ctin, "inv": inv_list} for ctin, inv_list in b2b_index.items()]

    return {
        "gstin": gstin,
        "fp": filing_period(period),
        "gt": round(grand_total, 2),
        "b2b": b2b_list,
        "b2cs": b2cs_list,
        "b2cl": [],
        "cdnr": [],
        "cdnur": [],
        "exp": [{"exp_typ": "WOPAY", "inv": exp_list}] if exp_list else [],
        "nil": {"inv": []},
        "hsn": {"data": []},
        "doc_issue": {"doc_det": []},
    }
