from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from invoicely.constants import DEFAULT_CURRENCY, RECENT_INVOICES_LIMIT
from invoicely.models import ZERO
from invoicely.models.invoice import PENDING_STATUSES, Invoice, InvoiceStatus
from invoicely.totals import CurrencyTotals, InvoiceTotals, currency_totals, invoice_totals

logger = logging.getLogger(__name__)


class RecentInvoice(BaseModel):
    model_config = ConfigDict(frozen=True)

    invoice: Invoice
    totals: InvoiceTotals


class DashboardStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_invoices: int = 0
    revenue: CurrencyTotals = Field(default_factory=CurrencyTotals)
    pending: CurrencyTotals = Field(default_factory=CurrencyTotals)
    paid_this_month: CurrencyTotals = Field(default_factory=CurrencyTotals)
    primary_currency: str = DEFAULT_CURRENCY
    recent: list[RecentInvoice] = []

    @property
    def total_revenue(self) -> Decimal:
        return self.revenue.buckets.get(self.primary_currency, ZERO)

    @property
    def pending_amount(self) -> Decimal:
        return self.pending.buckets.get(self.primary_currency, ZERO)

    @property
    def paid_this_month_amount(self) -> Decimal:
        return self.paid_this_month.buckets.get(self.primary_currency, ZERO)


class DashboardService:
    @staticmethod
    def build_stats(invoices: Sequence[Invoice], today: date | None = None) -> DashboardStats:
        """Aggregate dashboard figures. ``invoices`` are expected newest first."""
        today = today or date.today()
        paid = [inv for inv in invoices if inv.status == InvoiceStatus.PAID]
        pending = [inv for inv in invoices if inv.status in PENDING_STATUSES]
        paid_this_month = [
            inv for inv in paid if inv.issue_date.month == today.month and inv.issue_date.year == today.year
        ]

        revenue = currency_totals(paid)
        stats = DashboardStats(
            total_invoices=len(invoices),
            revenue=revenue,
            pending=currency_totals(pending),
            paid_this_month=currency_totals(paid_this_month),
            primary_currency=revenue.primary_currency,
            recent=[
                RecentInvoice(invoice=inv, totals=invoice_totals(inv.items))
                for inv in invoices[:RECENT_INVOICES_LIMIT]
            ],
        )
        logger.debug(
            "Dashboard stats: invoices=%d paid=%d pending=%d primary=%s",
            stats.total_invoices,
            len(paid),
            len(pending),
            stats.primary_currency,
        )
        return stats
