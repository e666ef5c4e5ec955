"""Request bodies and JSON serialisers for the API. Money is rendered as decimal strings."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator, BaseModel, field_validator

from invoicely.currencies import is_supported
from invoicely.models import decimal_to_str, parse_decimal
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import DiscountType, Invoice, InvoiceTemplate, LineItem
from invoicely.services.dashboard_service import DashboardStats
from invoicely.totals import CurrencyTotals, InvoiceTotals, invoice_totals, line_item_totals


class ClientIn(BaseModel):
    name: str
    email: str
    address: str = ""
    phone: str = ""
    tax_id: str = ""


class ClientPatch(BaseModel):
    name: str | None = None
    email: str | None = None
    address: str | None = None
    phone: str | None = None
    tax_id: str | None = None


class CompanyIn(BaseModel):
    company_name: str
    email: str
    phone: str = ""
    address: str = ""
    tax_id: str = ""
    logo: str = ""
    primary_color: str = "#3B82F6"
    invoice_prefix: str = "INV"
    next_invoice_number: int = 1001
    bank_name: str = ""
    account_number: str = ""
    routing_code: str = ""
    swift_code: str = ""


class CompanyPatch(BaseModel):
    company_name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    tax_id: str | None = None
    logo: str | None = None
    primary_color: str | None = None
    invoice_prefix: str | None = None
    next_invoice_number: int | None = None
    bank_name: str | None = None
    account_number: str | None = None
    routing_code: str | None = None
    swift_code: str | None = None


class LineItemIn(BaseModel):
    description: str = ""
    quantity: int = 0
    unit_price: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    discount_type: DiscountType = DiscountType.PERCENTAGE
    tax_rate: Decimal = Decimal("0")

    @field_validator("unit_price", "discount", "tax_rate", mode="before")
    @classmethod
    def _lenient_decimal(cls, value):
        return parse_decimal(value)

    def to_line_item(self, sort_order: int = 0) -> LineItem:
        return LineItem(sort_order=sort_order, **self.model_dump())


def _normalize_currency(value: str) -> str:
    """Upper-case a currency code. Blank passes through and means "use the default"."""
    if not value.strip():
        return ""
    code = value.strip().upper()
    if not is_supported(code):
        raise ValueError(f"Unsupported currency: {code}")
    return code


CurrencyCode = Annotated[str, AfterValidator(_normalize_currency)]


class InvoiceIn(BaseModel):
    client_uuid: str
    company_uuid: str | None = None
    invoice_number: str = ""
    issue_date: date | None = None
    due_date: date | None = None
    currency: CurrencyCode = ""
    template: InvoiceTemplate = InvoiceTemplate.MODERN
    notes: str = ""
    payment_amount: Decimal | None = None
    items: list[LineItemIn] = []


class InvoicePatch(BaseModel):
    client_uuid: str | None = None
    invoice_number: str | None = None
    issue_date: date | None = None
    due_date: date | None = None
    currency: CurrencyCode | None = None
    template: InvoiceTemplate | None = None
    notes: str | None = None
    payment_amount: Decimal | None = None
    items: list[LineItemIn] | None = None


class StatusIn(BaseModel):
    status: str


class SendIn(BaseModel):
    invoice_url: str | None = None
    attach_pdf: bool = True


def serialize_client(client: Client) -> dict:
    return client.model_dump(mode="json", exclude={"id", "deleted_at"})


def serialize_company(company: Company) -> dict:
    data = company.model_dump(mode="json", exclude={"id", "deleted_at"})
    data["routing_code_label"] = company.routing_code_label
    data["has_bank_details"] = company.has_bank_details
    return data


def serialize_totals(totals: InvoiceTotals) -> dict:
    return totals.model_dump(mode="json")


def serialize_currency_totals(totals: CurrencyTotals) -> dict:
    return totals.model_dump(mode="json")


def serialize_item(item: LineItem) -> dict:
    line = line_item_totals(item)
    return {
        "description": item.description,
        "quantity": item.quantity,
        "unit_price": decimal_to_str(item.unit_price),
        "discount": decimal_to_str(item.discount),
        "discount_type": item.discount_type.value,
        "tax_rate": decimal_to_str(item.tax_rate),
        "line_total": decimal_to_str(line.line_total),
    }


def serialize_invoice(invoice: Invoice, client: Client | None = None, company: Company | None = None) -> dict:
    return {
        "uuid": invoice.uuid,
        "invoice_number": invoice.invoice_number,
        "client": serialize_client(client) if client else None,
        "company_uuid": company.uuid if company else None,
        "issue_date": invoice.issue_date.isoformat(),
        "due_date": invoice.due_date.isoformat(),
        "currency": invoice.currency,
        "status": invoice.status.value,
        "template": invoice.template.value,
        "notes": invoice.notes,
        "payment_amount": decimal_to_str(invoice.payment_amount) if invoice.payment_amount is not None else None,
        "has_pdf": bool(invoice.pdf_path),
        "items": [serialize_item(item) for item in invoice.items],
        "totals": serialize_totals(invoice_totals(invoice.items)),
    }


def serialize_dashboard(stats: DashboardStats) -> dict:
    return {
        "total_invoices": stats.total_invoices,
        "primary_currency": stats.primary_currency,
        "total_revenue": decimal_to_str(stats.total_revenue),
        "pending_amount": decimal_to_str(stats.pending_amount),
        "paid_this_month": decimal_to_str(stats.paid_this_month_amount),
        "revenue": serialize_currency_totals(stats.revenue),
        "pending": serialize_currency_totals(stats.pending),
        "paid_this_month_by_currency": serialize_currency_totals(stats.paid_this_month),
        "recent": [
            {
                "uuid": recent.invoice.uuid,
                "invoice_number": recent.invoice.invoice_number,
                "status": recent.invoice.status.value,
                "currency": recent.invoice.currency,
                "issue_date": recent.invoice.issue_date.isoformat(),
                "total": decimal_to_str(recent.totals.total),
            }
            for recent in stats.recent
        ],
    }
