# billing/domain/models/gstr1.py

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, computed_field, field_validator

ZERO = Decimal("0")


def _to_decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


class Gstr1Category(str, Enum):
    """
    GSTR-1 reporting buckets.

    ``categorize_for_gstr1`` only assigns the first four.  ``OTHER`` is the
    slot for exempt and nil-rated supplies, which are reported from a
    separate table; it stays in the enum so every period summary carries
    the same five bucket keys.
    """

    B2B = "b2b"
    B2C = "b2c"
    EXPORT = "export"
    SEZ = "sez"
    OTHER = "other"


class Gstr1InvoiceRecord(BaseModel):
    """A saved outward invoice as seen by GSTR-1 reporting."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    invoice_number: str = Field(default="", validation_alias=AliasChoices("invoice_number", "invoiceNumber"))
    invoice_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("invoice_date", "invoiceDate"))
    customer_gstin: Optional[str] = Field(default=None, validation_alias=AliasChoices("customer_gstin", "customerGstin"))
    is_export: bool = Field(default=False, validation_alias=AliasChoices("is_export", "isExport"))
    buyer_is_sez: bool = Field(default=False, validation_alias=AliasChoices("buyer_is_sez", "buyerIsSEZ"))
    is_reverse_charge: bool = Field(default=False, validation_alias=AliasChoices("is_reverse_charge", "isReverseCharge"))
    place_of_supply: str = Field(default="", validation_alias=AliasChoices("place_of_supply", "placeOfSupply"))
    tax_rate: Optional[Decimal] = Field(default=None, validation_alias=AliasChoices("tax_rate", "taxRate"))
    taxable_amount: Decimal = Field(default=ZERO, validation_alias=AliasChoices("taxable_amount", "taxableAmount"))
    cgst_amount: Decimal = Field(default=ZERO, validation_alias=AliasChoices("cgst_amount", "cgstAmount"))
    sgst_amount: Decimal = Field(default=ZERO, validation_alias=AliasChoices("sgst_amount", "sgstAmount"))
    igst_amount: Decimal = Field(default=ZERO, validation_alias=AliasChoices("igst_amount", "igstAmount"))
    cess_amount: Decimal = Field(default=ZERO, validation_alias=AliasChoices("cess_amount", "cessAmount"))
    total_amount: Optional[Decimal] = Field(default=None, validation_alias=AliasChoices("total_amount", "totalAmount"))

    @field_validator(
        "taxable_amount", "cgst_amount", "sgst_amount", "igst_amount", "cess_amount",
        mode="before",
    )
    @classmethod
    def _amount(cls, value) -> Decimal:
        return _to_decimal(value)

    @field_validator("customer_gstin", mode="before")
    @classmethod
    def _gstin(cls, value):
        if value is None:
            return None
        return str(value).strip().upper() or None

    @property
    def total_tax(self) -> Decimal:
        return self.cgst_amount + self.sgst_amount + self.igst_amount + self.cess_amount

    @property
    def invoice_value(self) -> Decimal:
        """Recorded total, or taxable value + GST when no total was stored."""
        if self.total_amount is not None and self.total_amount > 0:
            return self.total_amount
        return self.taxable_amount + self.total_tax


class Gstr1Bucket(BaseModel):
    count: int = 0
    taxable_value: Decimal = ZERO
    cgst: Decimal = ZERO
    sgst: Decimal = ZERO
    igst: Decimal = ZERO
    cess: Decimal = ZERO
    invoice_value: Decimal = ZERO

    @computed_field
    @property
    def total_tax(self) -> Decimal:
        return self.cgst + self.sgst + self.igst + self.cess

    def add(self, record: Gstr1InvoiceRecord) -> None:
        self.count += 1
        self.taxable_value += record.taxable_amount
        self.cgst += record.cgst_amount
        self.sgst += record.sgst_amount
        self.igst += record.igst_amount
        self.cess += record.cess_amount
        self.invoice_value += record.invoice_value


class Gstr1PeriodSummary(BaseModel):
    period: str  # YYYY-MM
    fp: str  # filing period MMYYYY
    buckets: dict[Gstr1Category, Gstr1Bucket] = Field(
        default_factory=lambda: {category: Gstr1Bucket() for category in Gstr1Category},
    )
    totals: Gstr1Bucket = Field(default_factory=Gstr1Bucket)

    @computed_field
    @property
    def total_invoices(self) -> int:
        return self.totals.count

    @computed_field
    @property
    def total_gst_payable(self) -> Decimal:
        return self.totals.total_tax

    @computed_field
    @property
    def ready_to_file(self) -> bool:
        return self.totals.count > 0

    def bucket(self, category: Gstr1Category | str) -> Gstr1Bucket:
        return self.buckets[Gstr1Category(category)]
