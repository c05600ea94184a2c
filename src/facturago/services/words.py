"""French spelling of document totals ("amount in words")."""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Union

from facturago.services.currency import get_currency
from facturago.services.pricing import round_money

UNITS = ["", "un", "deux", "trois", "quatre", "cinq", "six", "sept", "huit", "neuf"]
TEENS = [
    "dix", "onze", "douze", "treize", "quatorze",
    "quinze", "seize", "dix-sept", "dix-huit", "dix-neuf",
]
TENS = [
    "", "", "vingt", "trente", "quarante",
    "cinquante", "soixante", "soixante-dix", "quatre-vingt", "quatre-vingt-dix",
]


def _below_hundred(n: int) -> str:
    if n == 0:
        return ""
    if n < 10:
        return UNITS[n]
    if n < 20:
        return TEENS[n - 10]

    ten, unit = divmod(n, 10)
    # 70-79 and 90-99 are built on 60 and 80 plus a teen
    if ten in (7, 9):
        base = TENS[ten - 1]
        if ten == 7 and unit == 1:
            return f"{base}-et-onze"
        return f"{base}-{TEENS[unit]}"

    if unit == 0:
        return TENS[ten]
    if unit == 1 and ten < 8:
        return f"{TENS[ten]}-et-un"
    return f"{TENS[ten]}-{UNITS[unit]}"


def _below_thousand(n: int) -> str:
    hundreds, remainder = divmod(n, 100)
    words = []
    if hundreds == 1:
        words.append("cent")
    elif hundreds > 1:
        words.append(f"{UNITS[hundreds]} cents")
    if remainder:
        words.append(_below_hundred(remainder))
    return " ".join(words)


def integer_to_words(n: int) -> str:
    """Spell a non-negative integer in French ("zéro" for 0)."""
    if n == 0:
        return "zéro"

    words = []
    millions, remainder = divmod(n, 1_000_000)
    thousands, units = divmod(remainder, 1000)

    if millions == 1:
        words.append("un million")
    elif millions > 1:
        words.append(f"{integer_to_words(millions)} millions")

    if thousands == 1:
        words.append("mille")
    elif thousands > 1:
        words.append(f"{_below_thousand(thousands)} mille")

    if units:
        words.append(_below_thousand(units))

    return " ".join(words)


def amount_in_words(amount: Union[Decimal, float, int], currency_code: Optional[str] = None) -> str:
    """
    Spell a document total, e.g. ``Cent vingt dirhams et cinquante centimes``.

    The sign is dropped and the amount is rounded half-up to cents first.
    """
    currency = get_currency(currency_code) if currency_code else get_currency()
    rounded = abs(round_money(amount))
    integer_part = int(rounded)
    cents = int((rounded - integer_part) * 100)

    if integer_part == 0 and cents == 0:
        return f"Zéro {currency['singular_name_fr']}"

    result = f"{integer_to_words(integer_part)} {currency['plural_name_fr']}"
    if cents:
        result += f" et {integer_to_words(cents)} {currency['sub_unit_name_fr']}"
    return result[0].upper() + result[1:]
