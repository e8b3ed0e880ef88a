# billing/api/v1/routes/gst.py
"""
GST engine endpoints: line and invoice tax, GSTR-1 summary and JSON, GSTIN checks.

Authentication and persistence sit in front of / behind these handlers;
they only map JSON to engine calls.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from billing.api.v1.envelope import ok
from billing.api.v1.schemas.gst import (
    GstinInfoResponse,
    Gstr1JsonRequest,
    Gstr1SummaryRequest,
    InvoiceTaxRequest,
    LineTaxRequest,
)
from billing.domain.services.gst_calculator import compute_line
from billing.domain.services.gst_export import make_gstr1_json
from billing.domain.services.gstin_validation import is_valid_gstin, state_from_gstin
from billing.domain.services.gstr1_service import build_gstr1_summary
from billing.domain.services.invoice_summary import summarize_invoice

logger = logging.getLogger("api.v1.gst")

router = APIRouter(prefix="/gst", tags=["GST"])


@router.post("/line", response_model=dict)
async def line_tax(body: LineTaxRequest):
    """Compute CGST/SGST/IGST, cess, TDS and compliance flags for one line."""
    breakdown = compute_line(body.line, body.context)
    return ok(data=breakdown.model_dump(mode="json"))


@router.post("/invoice", response_model=dict)
async def invoice_tax(body: InvoiceTaxRequest):
    """Compute every line and return invoice totals."""
    summary = summarize_invoice(body.lines, body.context, discount=body.discount)
    return ok(data=summary.model_dump(mode="json"))


@router.post("/gstr1/summary", response_model=dict)
async def gstr1_summary(body: Gstr1SummaryRequest):
    """Bucket a period's invoices into B2B / B2C / export / SEZ and total them."""
    try:
        summary = build_gstr1_summary(body.invoices, body.period)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return ok(
        data=summary.model_dump(mode="json"),
        message=f"GSTR-1 summary for period {body.period}",
    )


@router.post("/gstr1/json", response_model=dict)
async def gstr1_json(body: Gstr1JsonRequest):
    """Build the GSTR-1 return payload for a period."""
    if not is_valid_gstin(body.gstin):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid GSTIN: {body.gstin}",
        )
    try:
        payload = make_gstr1_json(body.gstin.strip().upper(), body.period, body.invoices)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return ok(data=payload)


@router.get("/gstin/{gstin}", response_model=dict)
async def gstin_info(gstin: str):
    """Structural GSTIN check and the state it encodes ("" when unknown)."""
    valid = is_valid_gstin(gstin)
    resp = GstinInfoResponse(gstin=gstin.strip().upper(), valid=valid, state=state_from_gstin(gstin))
    if not valid:
        logger.info("GSTIN failed structural validation (prefix %s)", gstin.strip()[:2])
    return ok(data=resp.model_dump())
