# billing/domain/services/gstin_validation.py

import re
from decimal import Decimal, InvalidOperation

from billing.domain.models.state import STATE_CODES
from billing.domain.models.tax_rate_config import GSTRateTable
from billing.domain.services.tax_rate_defaults import get_rate_table

# 2 digits, 5 letters, 4 digits, 1 letter, 1 alphanumeric, "Z", 1 alphanumeric
GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][0-9A-Z]Z[0-9A-Z]$")


def is_valid_gstin(gstin: str | None) -> bool:
    if not gstin:
        return False
    gstin = gstin.strip().upper()
    return bool(GSTIN_REGEX.match(gstin))


def state_from_gstin(gstin: str | None) -> str:
    """State abbreviation for a GSTIN's leading code.

    Returns ``""`` for a structurally invalid GSTIN or an unknown code;
    callers must check for the empty string before trusting the state.
    """
    if not is_valid_gstin(gstin):
        return ""
    return STATE_CODES.get(gstin.strip()[:2], "")


def is_standard_gst_rate(rate, rates: GSTRateTable | None = None) -> bool:
    """True when *rate* is one of the recognised GST slabs."""
    if rate is None:
        return False
    try:
        return (rates or get_rate_table()).is_valid_rate(Decimal(str(rate)))
    except InvalidOperation:
        return False
