# billing/domain/models/tax_rate_config.py
"""
Static GST rate tables.

GSTRateTable: HSN/SAC -> GST rate, HSN -> compensation cess rate, the
default rate for unknown codes and the set of recognised GST slabs.
Codes match exactly after normalisation; an 8-digit tariff item is only
rated if that item (not just its heading) is in the table.

Instances are immutable and safe to share across requests.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any

_STANDARD_SLABS = ("0", "0.1", "0.25", "1.5", "3", "5", "6", "7.5", "12", "14", "18", "28")


def normalize_hsn(code: str | None) -> str:
    """``"8471 30.10"`` -> ``"84713010"``; ``None`` -> ``""``."""
    if not code:
        return ""
    return "".join(ch for ch in str(code) if ch.isalnum()).upper()


def _freeze_rates(rates: Mapping[str, Any]) -> Mapping[str, Decimal]:
    return MappingProxyType(
        {normalize_hsn(k): Decimal(str(v)) for k, v in rates.items() if normalize_hsn(k)}
    )


@dataclass(frozen=True)
class GSTRateTable:
    """HSN-keyed GST and cess rates plus engine-wide defaults."""

    hsn_rates: Mapping[str, Decimal] = field(default_factory=dict)
    cess_rates: Mapping[str, Decimal] = field(default_factory=dict)
    default_rate: Decimal = Decimal("18")
    valid_rates: frozenset[Decimal] = field(
        default_factory=lambda: frozenset(Decimal(r) for r in _STANDARD_SLABS),
    )

    # Metadata
    source: str = "hardcoded"  # "hardcoded", "settings", "manual"

    def __post_init__(self) -> None:
        object.__setattr__(self, "hsn_rates", _freeze_rates(self.hsn_rates))
        object.__setattr__(self, "cess_rates", _freeze_rates(self.cess_rates))
        object.__setattr__(self, "default_rate", Decimal(str(self.default_rate)))
        object.__setattr__(
            self, "valid_rates", frozenset(Decimal(str(r)) for r in self.valid_rates),
        )

    # ---- lookups ----

    @staticmethod
    def _match(table: Mapping[str, Decimal], code: str | None) -> Decimal | None:
        hsn = normalize_hsn(code)
        if not hsn:
            return None
        return table.get(hsn)

    def lookup_rate(self, code: str | None) -> Decimal | None:
        """GST rate for an HSN/SAC code, or ``None`` when the code is unknown."""
        return self._match(self.hsn_rates, code)

    def rate_for(self, code: str | None) -> Decimal:
        """GST rate for an HSN/SAC code, falling back to ``default_rate``."""
        rate = self.lookup_rate(code)
        return self.default_rate if rate is None else rate

    def cess_for(self, code: str | None) -> Decimal:
        """Cess rate for an HSN code (0 when none applies)."""
        rate = self._match(self.cess_rates, code)
        return Decimal("0") if rate is None else rate

    def is_valid_rate(self, rate: Decimal | float | int | str) -> bool:
        return Decimal(str(rate)) in self.valid_rates

    def with_overrides(
        self,
        hsn_rates: Mapping[str, Any] | None = None,
        cess_rates: Mapping[str, Any] | None = None,
        source: str = "manual",
    ) -> GSTRateTable:
        """Return a new table with extra/replacement entries merged in."""
        return GSTRateTable(
            hsn_rates={**self.hsn_rates, **(hsn_rates or {})},
            cess_rates={**self.cess_rates, **(cess_rates or {})},
            default_rate=self.default_rate,
            valid_rates=self.valid_rates,
            source=source,
        )

    # ---- serialization ----

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-safe dict."""
        return {
            "hsn_rates": {k: str(v) for k, v in sorted(self.hsn_rates.items())},
            "cess_rates": {k: str(v) for k, v in sorted(self.cess_rates.items())},
            "default_rate": str(self.default_rate),
            "valid_rates": [str(r) for r in sorted(self.valid_rates)],
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GSTRateTable:
        """Reconstruct from a stored JSON dict."""
        valid: Iterable[Any] = data.get("valid_rates") or _STANDARD_SLABS
        return cls(
            hsn_rates=data.get("hsn_rates", {}),
            cess_rates=data.get("cess_rates", {}),
            default_rate=Decimal(str(data.get("default_rate", "18"))),
            valid_rates=frozenset(Decimal(str(r)) for r in valid),
            source=data.get("source", "hardcoded"),
        )
