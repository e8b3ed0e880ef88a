# billing/domain/services/place_of_supply.py
"""
Place-of-supply resolution.

Decides whether a supply is intra-state (CGST + SGST) or inter-state (IGST)
and what place of supply is recorded on the invoice.  First matching rule
wins:

1. Export                      -> "Export", inter-state
2. Buyer in an SEZ             -> "SEZ", inter-state
3. Registered buyer with GSTIN -> buyer state; intra-state when the GSTIN's
                                  state code matches the supplier state
4. Anyone else                 -> supplier state; intra-state when buyer and
                                  supplier states match

Rule 3 trusts the GSTIN for the tax split even when it disagrees with the
buyer state field; the recorded place still echoes the buyer state.
"""

from __future__ import annotations

from billing.domain.models.state import canonical_state
from billing.domain.models.tax import PLACE_EXPORT, PLACE_SEZ, PlaceOfSupply, TaxContext


def resolve_place(context: TaxContext) -> PlaceOfSupply:
    """Resolve place of supply for one transaction. Pure, never raises."""
    if context.is_export:
        return PlaceOfSupply(place_of_supply=PLACE_EXPORT, is_intra_state=False)

    if context.buyer_is_sez:
        return PlaceOfSupply(place_of_supply=PLACE_SEZ, is_intra_state=False)

    supplier_code = context.supplier_state.code

    if context.buyer_registered and context.buyer_gstin:
        return PlaceOfSupply(
            place_of_supply=str(context.buyer_state),
            is_intra_state=canonical_state(context.buyer_gstin[:2]) == supplier_code,
        )

    return PlaceOfSupply(
        place_of_supply=str(context.supplier_state),
        is_intra_state=context.buyer_state.code == supplier_code,
    )
