"""Shared test fixtures for the GST engine test suite."""

from decimal import Decimal

import pytest

from billing.domain.models.tax import LineItemInput, TaxContext
from billing.domain.services.tax_rate_defaults import default_rate_table

SUPPLIER_GSTIN = "27AABCU9603R1ZM"  # Maharashtra
BUYER_GSTIN_MH = "27AAAAA0000A1Z5"
BUYER_GSTIN_KA = "29AAECC1206D1ZM"


@pytest.fixture
def rates():
    """The hardcoded rate table, independent of environment settings."""
    return default_rate_table()


@pytest.fixture
def intra_state_context() -> TaxContext:
    """Registered MH supplier selling to a registered MH buyer."""
    return TaxContext(
        supplier_state="MH",
        supplier_gstin=SUPPLIER_GSTIN,
        supplier_registered=True,
        buyer_state="MH",
        buyer_gstin=BUYER_GSTIN_MH,
        buyer_registered=True,
    )


@pytest.fixture
def inter_state_context() -> TaxContext:
    """Registered MH supplier selling to a registered KA buyer."""
    return TaxContext(
        supplier_state="MH",
        supplier_gstin=SUPPLIER_GSTIN,
        supplier_registered=True,
        buyer_state="KA",
        buyer_gstin=BUYER_GSTIN_KA,
        buyer_registered=True,
    )


@pytest.fixture
def export_context() -> TaxContext:
    """Export to a foreign buyer with no GSTIN."""
    return TaxContext(
        supplier_state="MH",
        supplier_gstin=SUPPLIER_GSTIN,
        supplier_registered=True,
        buyer_state="96",
        buyer_registered=True,
        is_export=True,
    )


@pytest.fixture
def unregistered_buyer_context() -> TaxContext:
    """Registered MH supplier selling to an unregistered MH consumer (TDS case)."""
    return TaxContext(
        supplier_state="MH",
        supplier_gstin=SUPPLIER_GSTIN,
        supplier_registered=True,
        buyer_state="MH",
        buyer_registered=False,
    )


@pytest.fixture
def line_18() -> LineItemInput:
    """A Rs 1000 line at an explicit 18%."""
    return LineItemInput(amount=Decimal("1000"), tax_rate=Decimal("18"))
