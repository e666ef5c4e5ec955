"""Invoice total computation shared by every surface that shows money.

Editor previews, list rows, dashboard cards, PDF export and email summaries
all derive their figures from these functions so the numbers agree
everywhere. Everything here is pure: inputs are read, never mutated, and the
results depend only on the arguments.

Values are ``Decimal`` and are never rounded here. Rounding and currency
symbols belong to ``invoicely.formatting``.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer

from invoicely.constants import DEFAULT_CURRENCY
from invoicely.models import ZERO, decimal_to_str
from invoicely.models.invoice import DiscountType, Invoice, LineItem

HUNDRED = Decimal("100")

# Decimal that dumps to JSON as a plain decimal string (never exponent notation).
Money = Annotated[Decimal, PlainSerializer(decimal_to_str, return_type=str, when_used="json")]


class LineItemTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Money
    discount_amount: Money
    after_discount: Money
    tax_amount: Money
    line_total: Money


class InvoiceTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Money = ZERO
    total_discount: Money = ZERO
    total_tax: Money = ZERO
    total: Money = ZERO


class CurrencyTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    buckets: dict[str, Money] = {}
    primary_currency: str = DEFAULT_CURRENCY

    @property
    def primary_total(self) -> Decimal:
        return self.buckets.get(self.primary_currency, ZERO)


def line_item_totals(item: LineItem) -> LineItemTotals:
    """Compute one line item's contribution.

    A fixed discount larger than the subtotal is not clamped: the negative
    amount carries through to tax and total.
    """
    subtotal = Decimal(item.quantity) * item.unit_price
    if item.discount_type == DiscountType.PERCENTAGE:
        discount_amount = subtotal * item.discount / HUNDRED
    else:
        discount_amount = item.discount
    after_discount = subtotal - discount_amount
    tax_amount = after_discount * item.tax_rate / HUNDRED
    return LineItemTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        after_discount=after_discount,
        tax_amount=tax_amount,
        line_total=after_discount + tax_amount,
    )


def invoice_totals(items: Iterable[LineItem]) -> InvoiceTotals:
    """Reduce line items to invoice-level figures.

    ``total`` is derived from the accumulated components, so
    ``total == subtotal - total_discount + total_tax`` holds exactly.
    """
    subtotal = ZERO
    total_discount = ZERO
    total_tax = ZERO
    for item in items:
        line = line_item_totals(item)
        subtotal += line.subtotal
        total_discount += line.discount_amount
        total_tax += line.tax_amount
    return InvoiceTotals(
        subtotal=subtotal,
        total_discount=total_discount,
        total_tax=total_tax,
        total=subtotal - total_discount + total_tax,
    )


def currency_totals(invoices: Iterable[Invoice]) -> CurrencyTotals:
    """Sum invoice totals per currency code. Amounts in different currencies
    are never added together.

    Callers filter by status beforehand. The primary currency is the currency
    of the first invoice whose bucket is nonzero, or USD when there is none.
    """
    buckets: dict[str, Decimal] = {}
    order: list[str] = []
    for invoice in invoices:
        currency = invoice.currency or DEFAULT_CURRENCY
        buckets[currency] = buckets.get(currency, ZERO) + invoice_totals(invoice.items).total
        order.append(currency)

    primary = next((code for code in order if buckets[code] != ZERO), DEFAULT_CURRENCY)
    return CurrencyTotals(buckets=buckets, primary_currency=primary)
