# billing/domain/services/tax_rate_defaults.py
"""
Hardcoded GST rate tables and the process-wide table the engine reads.

The tables are built once and never mutated; callers that need different
rates pass their own ``GSTRateTable`` to the calculator instead.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from billing.config.settings import settings
from billing.domain.models.tax_rate_config import GSTRateTable

logger = logging.getLogger("tax_rate_defaults")

# HSN/SAC code -> GST rate (%)
DEFAULT_HSN_RATES: dict[str, Decimal] = {
    "1101": Decimal("5"),  # Wheat flour
    "0702": Decimal("5"),  # Tomatoes
    "1904": Decimal("5"),  # Prepared cereals / rice
    "0805": Decimal("5"),  # Citrus fruit
    "6204": Decimal("12"),  # Women's garments
    "8471": Decimal("12"),  # Computers
    "4901": Decimal("5"),  # Printed books
    "9985": Decimal("18"),  # Support services
    "2104": Decimal("18"),  # Soups and broths
    "2105": Decimal("18"),  # Ice cream
}

# HSN code -> compensation cess rate (%)
DEFAULT_CESS_RATES: dict[str, Decimal] = {
    "2203": Decimal("20"),  # Beer
    "2204": Decimal("20"),  # Wine
    "6203": Decimal("20"),  # Men's garments
}


def default_rate_table() -> GSTRateTable:
    """Return the hardcoded rate table (18% default)."""
    return GSTRateTable(
        hsn_rates=DEFAULT_HSN_RATES,
        cess_rates=DEFAULT_CESS_RATES,
        default_rate=Decimal("18"),
        source="hardcoded",
    )


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

_table: GSTRateTable | None = None


def get_rate_table() -> GSTRateTable:
    """Get the process-wide rate table (hardcoded tables + configured defaults)."""
    global _table
    if _table is None:
        base = default_rate_table()
        if settings.GST_DEFAULT_RATE != base.default_rate:
            logger.info("Using configured GST default rate %s%%", settings.GST_DEFAULT_RATE)
            base = GSTRateTable(
                hsn_rates=base.hsn_rates,
                cess_rates=base.cess_rates,
                default_rate=settings.GST_DEFAULT_RATE,
                valid_rates=base.valid_rates,
                source="settings",
            )
        _table = base
    return _table
