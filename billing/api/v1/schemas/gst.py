# billing/api/v1/schemas/gst.py
"""Request and response schemas for GST endpoints."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from billing.domain.models.gstr1 import Gstr1InvoiceRecord
from billing.domain.models.tax import LineItemInput, TaxContext


# ---------------------------------------------------------------------------
# Line / invoice computation
# ---------------------------------------------------------------------------

class LineTaxRequest(BaseModel):
    context: TaxContext
    line: LineItemInput


class InvoiceTaxRequest(BaseModel):
    context: TaxContext
    lines: list[LineItemInput] = Field(min_length=1)
    discount: Decimal = Field(default=Decimal("0"), ge=0, description="Invoice-level discount")


# ---------------------------------------------------------------------------
# GSTR-1
# ---------------------------------------------------------------------------

class Gstr1SummaryRequest(BaseModel):
    period: str = Field(description="Return period YYYY-MM")
    invoices: list[Gstr1InvoiceRecord] = Field(default_factory=list)


class Gstr1JsonRequest(BaseModel):
    gstin: str = Field(min_length=15, max_length=15, description="Supplier GSTIN")
    period: str = Field(description="Return period YYYY-MM")
    invoices: list[Gstr1InvoiceRecord] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# GSTIN
# ---------------------------------------------------------------------------

class GstinInfoResponse(BaseModel):
    gstin: str
    valid: bool
    state: str
