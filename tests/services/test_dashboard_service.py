from datetime import date
from decimal import Decimal

from freezegun import freeze_time

from invoicely.models.invoice import Invoice, InvoiceStatus, LineItem
from invoicely.services.dashboard_service import DashboardService


def _invoice(number, status, currency="USD", amount="100", issue_date=date(2025, 3, 10)):
    return Invoice(
        invoice_number=number,
        client_id=1,
        issue_date=issue_date,
        due_date=issue_date,
        currency=currency,
        status=status,
        items=[LineItem(description="Work", quantity=1, unit_price=Decimal(amount))],
    )


class TestDashboardService:
    def test_empty(self):
        stats = DashboardService.build_stats([], today=date(2025, 3, 15))
        assert stats.total_invoices == 0
        assert stats.primary_currency == "USD"
        assert stats.total_revenue == Decimal("0")
        assert stats.pending_amount == Decimal("0")
        assert stats.recent == []

    def test_revenue_and_pending_by_status(self):
        invoices = [
            _invoice("1", InvoiceStatus.PAID, amount="1200"),
            _invoice("2", InvoiceStatus.SENT, amount="300"),
            _invoice("3", InvoiceStatus.OVERDUE, amount="200"),
            _invoice("4", InvoiceStatus.DRAFT, amount="999"),
        ]
        stats = DashboardService.build_stats(invoices, today=date(2025, 3, 15))
        assert stats.total_invoices == 4
        assert stats.total_revenue == Decimal("1200")
        assert stats.pending_amount == Decimal("500")

    def test_currencies_stay_separate(self):
        invoices = [
            _invoice("1", InvoiceStatus.PAID, currency="EUR", amount="340"),
            _invoice("2", InvoiceStatus.PAID, currency="USD", amount="1200"),
        ]
        stats = DashboardService.build_stats(invoices, today=date(2025, 3, 15))
        assert stats.revenue.buckets == {"EUR": Decimal("340"), "USD": Decimal("1200")}
        assert stats.primary_currency == "EUR"
        assert stats.total_revenue == Decimal("340")

    def test_paid_this_month_uses_issue_month_and_year(self):
        invoices = [
            _invoice("1", InvoiceStatus.PAID, amount="100", issue_date=date(2025, 3, 1)),
            _invoice("2", InvoiceStatus.PAID, amount="50", issue_date=date(2024, 3, 1)),
            _invoice("3", InvoiceStatus.PAID, amount="25", issue_date=date(2025, 2, 28)),
            _invoice("4", InvoiceStatus.SENT, amount="75", issue_date=date(2025, 3, 2)),
        ]
        stats = DashboardService.build_stats(invoices, today=date(2025, 3, 15))
        assert stats.paid_this_month_amount == Decimal("100")

    @freeze_time("2025-03-20")
    def test_today_defaults_to_current_date(self):
        stats = DashboardService.build_stats([_invoice("1", InvoiceStatus.PAID, issue_date=date(2025, 3, 5))])
        assert stats.paid_this_month_amount == Decimal("100")

    def test_recent_keeps_first_five_with_totals(self):
        invoices = [_invoice(str(i), InvoiceStatus.DRAFT, amount=str(i * 10)) for i in range(1, 8)]
        stats = DashboardService.build_stats(invoices, today=date(2025, 3, 15))
        assert [r.invoice.invoice_number for r in stats.recent] == ["1", "2", "3", "4", "5"]
        assert stats.recent[2].totals.total == Decimal("30")
