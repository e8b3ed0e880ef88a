# billing/domain/models/tax.py
"""
Value objects passed into and returned from the GST engine.

All of them are frozen: the engine builds a fresh result per call and the
caller owns it.  Money is ``Decimal`` throughout.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from billing.domain.models.state import StateField

ZERO = Decimal("0")

# Withholding on supplies from a registered supplier to an unregistered buyer
TDS_RATE = Decimal("2.5")

# Compliance flags emitted per line
FLAG_TDS_APPLICABLE = "TDS_APPLICABLE_2.5%"
FLAG_EXPORT_ZERO_GST = "EXPORT_ZERO_GST"
FLAG_EXPORT_REQUIRES_E_INVOICE = "EXPORT_REQUIRES_E_INVOICE"
FLAG_INTRA_STATE_UNREGISTERED_SUPPLIER = "INTRA_STATE_UNREGISTERED_SUPPLIER"
FLAG_REVERSE_CHARGE = "REVERSE_CHARGE"

PLACE_EXPORT = "Export"
PLACE_SEZ = "SEZ"


class TaxContext(BaseModel):
    """Supplier/buyer facts for one invoice, reused for every line."""

    model_config = ConfigDict(frozen=True)

    supplier_state: StateField
    supplier_gstin: Optional[str] = None
    supplier_registered: bool
    buyer_state: StateField
    buyer_gstin: Optional[str] = None
    buyer_registered: bool
    buyer_is_sez: bool = False
    is_export: bool = False
    # Recipient pays the tax; the supplier charges none
    is_reverse_charge: bool = False

    @field_validator("supplier_gstin", "buyer_gstin", mode="before")
    @classmethod
    def _normalize_gstin(cls, value):
        if value is None:
            return None
        value = str(value).strip().upper()
        return value or None


class LineItemInput(BaseModel):
    """One invoice line; ``amount`` is the taxable value net of line discount."""

    model_config = ConfigDict(frozen=True)

    amount: Decimal = Field(ge=0)
    tax_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    hsn_code: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit_price: Optional[Decimal] = None
    description: Optional[str] = None


class PlaceOfSupply(BaseModel):
    model_config = ConfigDict(frozen=True)

    place_of_supply: str
    is_intra_state: bool


class TaxBreakdown(BaseModel):
    """Computed tax for a single line."""

    model_config = ConfigDict(frozen=True)

    taxable_amount: Decimal
    tax_rate: Decimal = ZERO
    cess_rate: Decimal = ZERO
    cgst_rate: Decimal = ZERO
    sgst_rate: Decimal = ZERO
    igst_rate: Decimal = ZERO
    cgst_amount: Decimal = ZERO
    sgst_amount: Decimal = ZERO
    igst_amount: Decimal = ZERO
    cess_amount: Decimal = ZERO
    tds_amount: Decimal = ZERO
    total_tax: Decimal = ZERO
    is_intra_state: bool
    place_of_supply: str
    compliance_flags: frozenset[str] = frozenset()


class InvoiceTaxSummary(BaseModel):
    """Invoice totals built from already-rounded line components."""

    model_config = ConfigDict(frozen=True)

    subtotal: Decimal = ZERO
    discount: Decimal = ZERO
    taxable_amount: Decimal = ZERO
    cgst_total: Decimal = ZERO
    sgst_total: Decimal = ZERO
    igst_total: Decimal = ZERO
    cess_total: Decimal = ZERO
    tds_total: Decimal = ZERO
    total_tax: Decimal = ZERO
    grand_total: Decimal = ZERO
    compliance_flags: frozenset[str] = frozenset()
    lines: tuple[TaxBreakdown, ...] = ()
