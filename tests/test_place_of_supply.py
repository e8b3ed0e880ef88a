"""Tests for place-of-supply resolution."""

import pytest
from pydantic import ValidationError

from billing.domain.models.state import StateCode, canonical_state
from billing.domain.models.tax import TaxContext
from billing.domain.services.place_of_supply import resolve_place


def _ctx(**overrides) -> TaxContext:
    defaults = {
        "supplier_state": "MH",
        "supplier_gstin": "27AABCU9603R1ZM",
        "supplier_registered": True,
        "buyer_state": "MH",
        "buyer_gstin": None,
        "buyer_registered": False,
    }
    defaults.update(overrides)
    return TaxContext(**defaults)


class TestResolutionOrder:
    """First matching rule wins."""

    def test_export_wins_over_everything(self):
        place = resolve_place(_ctx(
            is_export=True, buyer_is_sez=True,
            buyer_registered=True, buyer_gstin="27AAAAA0000A1Z5",
        ))
        assert place.place_of_supply == "Export"
        assert place.is_intra_state is False

    def test_sez_wins_over_registration(self):
        place = resolve_place(_ctx(
            buyer_is_sez=True, buyer_registered=True, buyer_gstin="27AAAAA0000A1Z5",
        ))
        assert place.place_of_supply == "SEZ"
        assert place.is_intra_state is False

    def test_registered_buyer_same_state(self):
        place = resolve_place(_ctx(buyer_registered=True, buyer_gstin="27AAAAA0000A1Z5"))
        assert place.place_of_supply == "MH"
        assert place.is_intra_state is True

    def test_registered_buyer_other_state(self):
        place = resolve_place(_ctx(
            buyer_state="KA", buyer_registered=True, buyer_gstin="29AAECC1206D1ZM",
        ))
        assert place.place_of_supply == "KA"
        assert place.is_intra_state is False

    def test_unregistered_buyer_uses_supplier_state(self):
        place = resolve_place(_ctx(buyer_state="KA"))
        assert place.place_of_supply == "MH"
        assert place.is_intra_state is False

    def test_unregistered_buyer_same_state(self):
        place = resolve_place(_ctx())
        assert place.place_of_supply == "MH"
        assert place.is_intra_state is True

    def test_registered_flag_without_gstin_falls_to_supplier_rule(self):
        place = resolve_place(_ctx(buyer_state="KA", buyer_registered=True, buyer_gstin=None))
        assert place.place_of_supply == "MH"
        assert place.is_intra_state is False

    def test_gstin_without_registered_flag_falls_to_supplier_rule(self):
        place = resolve_place(_ctx(buyer_state="KA", buyer_gstin="27AAAAA0000A1Z5"))
        assert place.place_of_supply == "MH"
        assert place.is_intra_state is False


class TestGstinTrustedOverStateField:
    """The GSTIN decides intra/inter; the place still echoes the buyer state."""

    def test_gstin_in_supplier_state_but_state_field_differs(self):
        place = resolve_place(_ctx(
            buyer_state="KA", buyer_registered=True, buyer_gstin="27AAAAA0000A1Z5",
        ))
        assert place.is_intra_state is True
        assert place.place_of_supply == "KA"

    def test_gstin_in_other_state_but_state_field_matches(self):
        place = resolve_place(_ctx(
            buyer_state="MH", buyer_registered=True, buyer_gstin="29AAECC1206D1ZM",
        ))
        assert place.is_intra_state is False
        assert place.place_of_supply == "MH"


class TestStateCodeForms:

    def test_numeric_and_abbreviated_codes_match(self):
        place = resolve_place(_ctx(supplier_state="27", buyer_state="MH"))
        assert place.is_intra_state is True
        assert place.place_of_supply == "27"

    def test_lowercase_state_is_normalized(self):
        place = resolve_place(_ctx(supplier_state="mh", buyer_state=" ka "))
        assert place.place_of_supply == "MH"
        assert place.is_intra_state is False

    def test_unknown_codes_compare_raw(self):
        place = resolve_place(_ctx(supplier_state="XX", buyer_state="XX"))
        assert place.is_intra_state is True

    def test_state_code_must_be_two_characters(self):
        with pytest.raises(ValidationError):
            _ctx(supplier_state="MAH")

    def test_state_code_value_type(self):
        mh = StateCode("mh")
        assert mh.raw == "MH"
        assert mh.code == "27"
        assert mh.abbreviation == "MH"
        assert mh.name == "Maharashtra"
        assert mh.same_state("27")
        assert not mh.same_state(StateCode("KA"))

    def test_state_code_rejects_bad_length(self):
        with pytest.raises(ValueError):
            StateCode("M")

    def test_canonical_state_is_total(self):
        assert canonical_state(None) == ""
        assert canonical_state("9") == "9"
        assert canonical_state("ka") == "29"


class TestContextNormalization:

    def test_blank_gstin_becomes_none(self):
        ctx = _ctx(buyer_gstin="   ", buyer_registered=True)
        assert ctx.buyer_gstin is None
        assert resolve_place(ctx).place_of_supply == "MH"

    def test_context_is_immutable(self):
        ctx = _ctx()
        with pytest.raises(ValidationError):
            ctx.is_export = True

    def test_resolution_is_idempotent(self):
        ctx = _ctx(buyer_registered=True, buyer_gstin="27AAAAA0000A1Z5")
        assert resolve_place(ctx) == resolve_place(ctx)
