# billing/domain/models/state.py
"""
Indian GST state codes.

``STATE_CODES`` maps the official 2-digit code (the first two characters of
every GSTIN) to the state abbreviation used on invoices.  ``StateCode`` is a
validated 2-character identifier that accepts either form, so ``"27"`` and
``"MH"`` compare as the same jurisdiction.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated

from pydantic import PlainSerializer, PlainValidator, WithJsonSchema

STATE_CODES = MappingProxyType({
    "01": "JK", "02": "HP", "03": "PB", "04": "CH", "05": "UK",
    "06": "HR", "07": "DL", "08": "RJ", "09": "UP", "10": "BR",
    "11": "SK", "12": "AR", "13": "NL", "14": "MN", "15": "MZ",
    "16": "TR", "17": "ML", "18": "AS", "19": "WB", "20": "JH",
    "21": "OD", "22": "CG", "23": "MP", "24": "GJ", "25": "DD",
    "26": "DN", "27": "MH", "28": "AP", "29": "KA", "30": "GA",
    "31": "LD", "32": "KL", "33": "TN", "34": "PY", "35": "AN",
    "36": "TS", "37": "AP", "38": "LA", "96": "OC", "97": "OT",
})

STATE_NAMES = MappingProxyType({
    "01": "Jammu & Kashmir", "02": "Himachal Pradesh", "03": "Punjab",
    "04": "Chandigarh", "05": "Uttarakhand", "06": "Haryana",
    "07": "Delhi", "08": "Rajasthan", "09": "Uttar Pradesh",
    "10": "Bihar", "11": "Sikkim", "12": "Arunachal Pradesh",
    "13": "Nagaland", "14": "Manipur", "15": "Mizoram",
    "16": "Tripura", "17": "Meghalaya", "18": "Assam",
    "19": "West Bengal", "20": "Jharkhand", "21": "Odisha",
    "22": "Chhattisgarh", "23": "Madhya Pradesh", "24": "Gujarat",
    "25": "Daman & Diu", "26": "Dadra & Nagar Haveli", "27": "Maharashtra",
    "28": "Andhra Pradesh", "29": "Karnataka", "30": "Goa",
    "31": "Lakshadweep", "32": "Kerala", "33": "Tamil Nadu",
    "34": "Puducherry", "35": "Andaman & Nicobar", "36": "Telangana",
    "37": "Andhra Pradesh (New)", "38": "Ladakh", "96": "Other Country",
    "97": "Other Territory",
})

# Later codes win, so "AP" resolves to the post-2014 code 37.
_ABBREVIATION_TO_CODE = MappingProxyType(
    {abbr: code for code, abbr in STATE_CODES.items()}
)

EXPORT_STATE_CODE = "96"


def canonical_state(value: str | None) -> str:
    """Canonical 2-digit code for *value*, or the upper-cased text itself.

    Never raises; unknown or short values are returned as-is (upper-cased)
    so that callers can still fall back to raw comparison.
    """
    text = (value or "").strip().upper()[:2]
    if text in STATE_CODES:
        return text
    return _ABBREVIATION_TO_CODE.get(text, text)


@dataclass(frozen=True)
class StateCode:
    """A two-character state identifier (GST code or abbreviation)."""

    raw: str

    def __post_init__(self) -> None:
        value = (self.raw or "").strip().upper()
        if len(value) != 2:
            raise ValueError(f"state code must be 2 characters, got {self.raw!r}")
        object.__setattr__(self, "raw", value)

    @classmethod
    def parse(cls, value: StateCode | str) -> StateCode:
        if isinstance(value, StateCode):
            return value
        if not isinstance(value, str):
            raise ValueError(f"state code must be a string, got {type(value).__name__}")
        return cls(value)

    @property
    def code(self) -> str:
        return canonical_state(self.raw)

    @property
    def abbreviation(self) -> str:
        return STATE_CODES.get(self.code, "")

    @property
    def name(self) -> str:
        return STATE_NAMES.get(self.code, "")

    @property
    def is_known(self) -> bool:
        return self.code in STATE_CODES

    def same_state(self, other: StateCode | str) -> bool:
        other_code = other.code if isinstance(other, StateCode) else canonical_state(other)
        return self.code == other_code

    def __str__(self) -> str:
        return self.raw


# Pydantic field type: accepts "MH" / "27" / StateCode, serializes back to text.
StateField = Annotated[
    StateCode,
    PlainValidator(StateCode.parse),
    PlainSerializer(str, return_type=str),
    WithJsonSchema({"type": "string", "minLength": 2, "maxLength": 2}),
]
