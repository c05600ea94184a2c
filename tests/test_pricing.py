import unittest
from decimal import Decimal

from facturago.domain.models import PriceDisplayMode, PriceKind
from facturago.errors import FormValidationError
from facturago.services.pricing import (
    ProductPrices,
    ht_from_ttc,
    round_money,
    ttc_from_ht,
    validate_product,
)


class TestConversion(unittest.TestCase):
    def test_ttc_from_ht(self):
        self.assertEqual(ttc_from_ht(100, 20), Decimal("120.00"))

    def test_ht_from_ttc(self):
        self.assertEqual(ht_from_ttc(120, 20), Decimal("100.00"))
        self.assertEqual(ht_from_ttc(121, 20), Decimal("100.83"))

    def test_zero_vat(self):
        self.assertEqual(ttc_from_ht("99.99", 0), Decimal("99.99"))

    def test_half_up(self):
        self.assertEqual(round_money("0.125"), Decimal("0.13"))
        self.assertEqual(round_money(2.675), Decimal("2.68"))


class TestProductPrices(unittest.TestCase):
    def test_ttc_entry_stores_ht(self):
        prices = ProductPrices()
        stored = prices.set_price(PriceKind.SALE, 120, entered_as=PriceDisplayMode.TTC)
        self.assertEqual(stored, Decimal("100.00"))
        self.assertEqual(prices.ttc("sale"), Decimal("120.00"))

    def test_vat_change_keeps_ht(self):
        prices = ProductPrices()
        prices.set_price("purchase", 100)
        prices.set_vat(10)
        self.assertEqual(prices.display("purchase", "HT"), Decimal("100.00"))
        self.assertEqual(prices.display("purchase", "TTC"), Decimal("110.00"))

    def test_sale_and_purchase_independent(self):
        prices = ProductPrices()
        prices.set_price("sale", 50)
        self.assertEqual(prices.ht[PriceKind.PURCHASE], Decimal("0"))


class TestValidateProduct(unittest.TestCase):
    def test_valid(self):
        validate_product("Chaise", 10)

    def test_missing_name_or_price(self):
        for name, price in (("", 10), ("   ", 10), ("Chaise", 0), ("Chaise", -1)):
            with self.assertRaises(FormValidationError):
                validate_product(name, price)
