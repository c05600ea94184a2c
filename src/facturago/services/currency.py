"""Currency formatting and decimal input helpers.

The UI language is passed explicitly by the caller.
"""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Dict, Optional, Union

from facturago.domain.constants import CURRENCIES, DEFAULT_CURRENCY_CODE
from facturago.services.pricing import round_money

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+(?:\.\d*)?|\.\d+)")

COMMA_DECIMAL_LANGUAGES = ("fr", "ar")


def get_currency(code: Optional[str] = DEFAULT_CURRENCY_CODE) -> Dict[str, str]:
    """Return the currency config for ``code``, falling back to the first one."""
    for currency in CURRENCIES:
        if currency["code"] == code:
            return currency
    return CURRENCIES[0]


def format_number(amount: Union[Decimal, float, int, None], currency_code: Optional[str] = None) -> str:
    """Two-decimal amount with the currency's separators, without symbol."""
    if amount is None:
        return "0,00"
    config = get_currency(currency_code or DEFAULT_CURRENCY_CODE)
    rounded = round_money(amount)
    sign = "-" if rounded < 0 else ""
    integer_part, decimal_part = f"{abs(rounded):.2f}".split(".")
    grouped = f"{int(integer_part):,}".replace(",", config["thousand_separator"])
    return f"{sign}{grouped}{config['decimal_separator']}{decimal_part}"


def format_currency(amount: Union[Decimal, float, int, None], currency_code: Optional[str] = None) -> str:
    """
    Format an amount with the company currency, e.g. ``1 234,50 DH`` or ``$1,234.50``.

    Args:
        amount: Amount to format; None renders as ``0,00``.
        currency_code: ISO code from the company settings (MAD by default).
    """
    if amount is None:
        return "0,00"
    config = get_currency(currency_code or DEFAULT_CURRENCY_CODE)
    formatted = format_number(amount, config["code"])
    if config["position"] == "prefix":
        return f"{config['symbol']}{formatted}"
    return f"{formatted} {config['symbol']}"


def parse_decimal_input(value: Optional[str]) -> float:
    """Parse user input accepting a comma as decimal separator; garbage gives 0."""
    if not value:
        return 0.0
    match = _LEADING_NUMBER.match(value.replace(",", ".", 1))
    if not match:
        return 0.0
    return float(match.group(0))


def format_decimal_for_input(value: float, language: str) -> str:
    """Render a number for an input field in ``language`` (``0`` stays ``0``)."""
    if value == 0:
        return "0"
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    if language in COMMA_DECIMAL_LANGUAGES:
        return text.replace(".", ",")
    return text
