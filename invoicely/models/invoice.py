from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel

from invoicely.constants import DEFAULT_CURRENCY


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"


class DiscountType(str, Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


class InvoiceTemplate(str, Enum):
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"


PENDING_STATUSES = (InvoiceStatus.SENT, InvoiceStatus.OVERDUE)


class LineItem(BaseModel):
    id: int | None = None
    invoice_id: int | None = None
    description: str = ""
    quantity: int = 0
    unit_price: Decimal = Decimal("0")
    discount: Decimal = Decimal("0")
    discount_type: DiscountType = DiscountType.PERCENTAGE
    tax_rate: Decimal = Decimal("0")
    sort_order: int = 0


class Invoice(BaseModel):
    id: int | None = None
    uuid: str = ""
    invoice_number: str
    client_id: int
    company_id: int | None = None
    issue_date: date
    due_date: date
    currency: str = DEFAULT_CURRENCY
    status: InvoiceStatus = InvoiceStatus.DRAFT
    template: InvoiceTemplate = InvoiceTemplate.MODERN
    notes: str = ""
    payment_amount: Decimal | None = None
    pdf_path: str | None = None
    items: list[LineItem] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    def is_past_due(self, today: date | None = None) -> bool:
        if self.status == InvoiceStatus.PAID:
            return False
        return (today or date.today()) > self.due_date
