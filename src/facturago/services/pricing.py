"""HT/TTC price conversion.

The tax-exclusive (HT) price is the stored value; the TTC price shown next to
it is always derived from the current VAT rate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Union

from facturago.domain.models import PriceDisplayMode, PriceKind
from facturago.errors import FormValidationError

Number = Union[Decimal, float, int, str]

TWO_PLACES = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    return to_decimal(value).quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def _vat_factor(vat: Number) -> Decimal:
    return Decimal("1") + to_decimal(vat) / Decimal("100")


def ttc_from_ht(ht: Number, vat: Number) -> Decimal:
    return round_money(to_decimal(ht) * _vat_factor(vat))


def ht_from_ttc(ttc: Number, vat: Number) -> Decimal:
    return round_money(to_decimal(ttc) / _vat_factor(vat))


@dataclass
class ProductPrices:
    """Sale and purchase prices of a product, held HT."""

    vat: Decimal = Decimal("20")
    ht: Dict[PriceKind, Decimal] = field(
        default_factory=lambda: {PriceKind.SALE: Decimal("0"), PriceKind.PURCHASE: Decimal("0")}
    )

    def set_price(
        self,
        kind: PriceKind | str,
        value: Number,
        entered_as: PriceDisplayMode | str = PriceDisplayMode.HT,
    ) -> Decimal:
        """Store a user edit of either field and return the stored HT value."""
        kind = PriceKind(kind)
        if PriceDisplayMode(entered_as) is PriceDisplayMode.TTC:
            self.ht[kind] = ht_from_ttc(value, self.vat)
        else:
            self.ht[kind] = to_decimal(value)
        return self.ht[kind]

    def set_vat(self, vat: Number) -> None:
        # Stored HT prices are kept; only the derived TTC moves.
        self.vat = to_decimal(vat)

    def ttc(self, kind: PriceKind | str) -> Decimal:
        return ttc_from_ht(self.ht[PriceKind(kind)], self.vat)

    def display(self, kind: PriceKind | str, mode: PriceDisplayMode | str) -> Decimal:
        kind = PriceKind(kind)
        if PriceDisplayMode(mode) is PriceDisplayMode.TTC:
            return self.ttc(kind)
        return round_money(self.ht[kind])


def validate_product(name: str, sale_price_ht: Number) -> None:
    """Reject a product form before submission."""
    if not name or not name.strip() or to_decimal(sale_price_ht) <= 0:
        raise FormValidationError("Veuillez renseigner le nom et un prix de vente valide.")
