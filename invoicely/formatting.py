"""Display formatting for amounts, dates and percentages.

These helpers turn calculator output into strings. Nothing here feeds back
into arithmetic.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from invoicely.constants import DEFAULT_CURRENCY
from invoicely.currencies import currency_symbol

CENTS = Decimal("0.01")
UNITS = Decimal("1")


def _latin1_safe(symbol: str, code: str) -> str:
    try:
        symbol.encode("latin-1")
    except UnicodeEncodeError:
        return f"{code} "
    return symbol


def format_money(amount: Decimal | int, currency: str = DEFAULT_CURRENCY, latin1: bool = False) -> str:
    """Format an amount with its currency symbol: Decimal('1200') -> '$1,200.00'.

    With ``latin1=True`` a symbol the core PDF fonts cannot encode is
    replaced by the currency code: 'INR 1,200.00'.
    """
    value = Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)
    symbol = currency_symbol(currency)
    if latin1:
        symbol = _latin1_safe(symbol, currency)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_money_whole(amount: Decimal | int, currency: str = DEFAULT_CURRENCY) -> str:
    """Rounded amount without decimals, for stat cards: '$1,200'."""
    value = Decimal(amount).quantize(UNITS, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}{currency_symbol(currency)}{abs(value):,}"


def format_multi_currency(buckets: Mapping[str, Decimal], primary_currency: str = DEFAULT_CURRENCY) -> str:
    """Join per-currency sums: {'USD': 1200, 'EUR': 340} -> '$1,200 + €340'."""
    if not buckets:
        return format_money_whole(0, primary_currency)
    return " + ".join(format_money_whole(amount, code) for code, amount in buckets.items())


def format_percentage(value: Decimal | int) -> str:
    """8 -> '8%', Decimal('7.50') -> '7.5%'."""
    normalized = Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP).normalize()
    return f"{normalized:f}%"


def format_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


def format_short_date(value: date) -> str:
    return value.strftime("%m/%d/%Y")
