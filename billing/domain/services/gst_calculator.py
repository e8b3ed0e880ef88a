# billing/domain/services/gst_calculator.py
"""
Line-level GST computation.

compute_line() resolves place of supply, picks the effective rate (explicit
rate -> HSN table -> default 18%), splits it into CGST/SGST or IGST, adds
cess and TDS, and tags the line with compliance flags.

Every component is rounded to a whole rupee on its own (half-up).  CGST and
SGST are NOT derived by halving a rounded combined amount.

Under reverse charge the recipient pays the tax, so the line carries no
GST or cess and is flagged instead.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from billing.domain.models.tax import (
    FLAG_EXPORT_REQUIRES_E_INVOICE,
    FLAG_EXPORT_ZERO_GST,
    FLAG_INTRA_STATE_UNREGISTERED_SUPPLIER,
    FLAG_REVERSE_CHARGE,
    FLAG_TDS_APPLICABLE,
    TDS_RATE,
    ZERO,
    LineItemInput,
    TaxBreakdown,
    TaxContext,
)
from billing.domain.models.tax_rate_config import GSTRateTable
from billing.domain.services.place_of_supply import resolve_place
from billing.domain.services.tax_rate_defaults import get_rate_table

logger = logging.getLogger("gst_calculator")

HUNDRED = Decimal("100")
_RUPEE = Decimal("1")
_PAISA = Decimal("0.01")


def round_currency(value: Decimal) -> Decimal:
    """Round to the nearest whole rupee, halves away from zero."""
    return Decimal(value).quantize(_RUPEE, rounding=ROUND_HALF_UP)


def _component(amount: Decimal, rate: Decimal) -> Decimal:
    if not rate:
        return ZERO
    return round_currency(amount * rate / HUNDRED)


def effective_tax_rate(line: LineItemInput, rates: GSTRateTable) -> Decimal:
    """Explicit rate if given (0 included), else HSN table, else default."""
    if line.tax_rate is not None:
        return line.tax_rate
    rate = rates.lookup_rate(line.hsn_code)
    if rate is None:
        logger.debug(
            "No GST rate for HSN %r, using default %s%%", line.hsn_code, rates.default_rate,
        )
        return rates.default_rate
    return rate


def is_tds_applicable(context: TaxContext) -> bool:
    """TDS is withheld only for a registered supplier selling to an unregistered buyer."""
    return context.supplier_registered and not context.buyer_registered


def compute_line(
    line: LineItemInput,
    context: TaxContext,
    rates: Optional[GSTRateTable] = None,
) -> TaxBreakdown:
    """Compute the tax breakdown for one line item. Pure and idempotent."""
    rates = rates or get_rate_table()
    place = resolve_place(context)

    tax_rate = effective_tax_rate(line, rates)
    cess_rate = rates.cess_for(line.hsn_code)

    # Exports are zero-rated and reverse-charge tax is paid by the recipient:
    # all three stay at 0
    cgst_rate = sgst_rate = igst_rate = ZERO
    if not (context.is_export or context.is_reverse_charge):
        if place.is_intra_state:
            cgst_rate = sgst_rate = tax_rate / 2
        else:
            igst_rate = tax_rate

    amount = line.amount
    cgst_amount = _component(amount, cgst_rate)
    sgst_amount = _component(amount, sgst_rate)
    igst_amount = _component(amount, igst_rate)
    cess_amount = ZERO if context.is_reverse_charge else _component(amount, cess_rate)

    tds_applicable = is_tds_applicable(context)
    tds_amount = _component(amount, TDS_RATE) if tds_applicable else ZERO

    flags: set[str] = set()
    if tds_applicable:
        flags.add(FLAG_TDS_APPLICABLE)
    if context.is_export:
        flags.add(FLAG_EXPORT_ZERO_GST)
        if not context.buyer_gstin:
            flags.add(FLAG_EXPORT_REQUIRES_E_INVOICE)
    if place.is_intra_state and not context.supplier_gstin:
        flags.add(FLAG_INTRA_STATE_UNREGISTERED_SUPPLIER)
    if context.is_reverse_charge:
        flags.add(FLAG_REVERSE_CHARGE)

    return TaxBreakdown(
        taxable_amount=amount,
        tax_rate=tax_rate,
        cess_rate=cess_rate,
        cgst_rate=cgst_rate,
        sgst_rate=sgst_rate,
        igst_rate=igst_rate,
        cgst_amount=cgst_amount,
        sgst_amount=sgst_amount,
        igst_amount=igst_amount,
        cess_amount=cess_amount,
        tds_amount=tds_amount,
        total_tax=cgst_amount + sgst_amount + igst_amount + cess_amount + tds_amount,
        is_intra_state=place.is_intra_state,
        place_of_supply=place.place_of_supply,
        compliance_flags=frozenset(flags),
    )


def net_line_amount(
    quantity: Decimal | int | float | str,
    unit_price: Decimal | int | float | str,
    discount_value: Decimal | int | float | str | None = None,
    discount_type: str = "percentage",
) -> Decimal:
    """
    Taxable amount of a line: quantity x unit price less its discount.

    ``discount_type`` is ``"percentage"`` (of the line amount) or ``"fixed"``
    (rupees).  The result is rounded to paise and never negative.
    """
    line_amount = Decimal(str(quantity)) * Decimal(str(unit_price))

    discount = ZERO
    if discount_value:
        value = Decimal(str(discount_value))
        if discount_type == "percentage":
            discount = line_amount * value / HUNDRED
        elif discount_type == "fixed":
            discount = value
        else:
            raise ValueError(f"Unknown discount type: {discount_type!r}")

    return max(ZERO, line_amount - discount).quantize(_PAISA, rounding=ROUND_HALF_UP)
