from datetime import date
from decimal import Decimal

from invoicely.models.invoice import DiscountType, InvoiceStatus, InvoiceTemplate, LineItem
from invoicely.totals import invoice_totals


class TestInvoiceRepository:
    def test_create_round_trips_items(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        created = invoice_repo.create(sample_invoice(client.id, company.id))

        assert created.id is not None
        assert len(created.uuid) == 26
        assert created.issue_date == date(2025, 3, 1)
        assert created.status == InvoiceStatus.DRAFT
        assert [i.description for i in created.items] == ["Design work", "Development"]
        first = created.items[0]
        assert first.unit_price == Decimal("85")
        assert first.discount == Decimal("10")
        assert first.discount_type == DiscountType.PERCENTAGE
        assert first.tax_rate == Decimal("8")
        assert invoice_totals(created.items).total == Decimal("4341.6")

    def test_money_values_are_exact(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        items = [LineItem(description="Hosting", quantity=3, unit_price=Decimal("19.99"), tax_rate=Decimal("7.25"))]
        created = invoice_repo.create(
            sample_invoice(client.id, company.id, items=items, payment_amount=Decimal("10.10"))
        )
        assert created.items[0].unit_price == Decimal("19.99")
        assert created.items[0].tax_rate == Decimal("7.25")
        assert created.payment_amount == Decimal("10.10")

    def test_get_by_number(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="INV-7"))
        assert invoice_repo.get_by_number(company.id, "INV-7") is not None
        assert invoice_repo.get_by_number(company.id, "INV-8") is None
        assert invoice_repo.get_by_number(company.id + 1, "INV-7") is None

    def test_list_all_newest_first(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="A", issue_date=date(2025, 1, 1)))
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="B", issue_date=date(2025, 2, 1)))
        result = invoice_repo.list_all()
        assert [i.invoice_number for i in result] == ["B", "A"]
        assert all(len(i.items) == 2 for i in result)

    def test_list_by_status(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="A", status=InvoiceStatus.SENT))
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="B", status=InvoiceStatus.OVERDUE))
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="C", status=InvoiceStatus.PAID))

        pending = invoice_repo.list_by_status([InvoiceStatus.SENT, InvoiceStatus.OVERDUE])
        assert sorted(i.invoice_number for i in pending) == ["A", "B"]
        assert invoice_repo.list_by_status([]) == []

    def test_list_by_client(self, invoice_repo, client_repo, saved_parties, sample_invoice, sample_client):
        client, company = saved_parties
        other = client_repo.create(sample_client(name="Other"))
        invoice_repo.create(sample_invoice(client.id, company.id, invoice_number="A"))
        invoice_repo.create(sample_invoice(other.id, company.id, invoice_number="B"))
        assert [i.invoice_number for i in invoice_repo.list_by_client(other.id)] == ["B"]

    def test_update_replaces_items(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        created = invoice_repo.create(sample_invoice(client.id, company.id))
        created.items = [
            LineItem(
                description="Flat fee",
                quantity=1,
                unit_price=Decimal("10"),
                discount=Decimal("50"),
                discount_type=DiscountType.FIXED,
            )
        ]
        created.template = InvoiceTemplate.CLASSIC
        created.currency = "EUR"

        updated = invoice_repo.update(created)
        assert len(updated.items) == 1
        assert updated.items[0].discount_type == DiscountType.FIXED
        assert updated.template == InvoiceTemplate.CLASSIC
        assert updated.currency == "EUR"
        assert invoice_totals(updated.items).total == Decimal("-40")

    def test_update_status_and_pdf_path(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        created = invoice_repo.create(sample_invoice(client.id, company.id))
        invoice_repo.update_status(created.id, InvoiceStatus.PAID)
        invoice_repo.update_pdf_path(created.id, "/tmp/invoices/x.pdf")
        fetched = invoice_repo.get_by_id(created.id)
        assert fetched.status == InvoiceStatus.PAID
        assert fetched.pdf_path == "/tmp/invoices/x.pdf"

    def test_soft_delete(self, invoice_repo, saved_parties, sample_invoice):
        client, company = saved_parties
        created = invoice_repo.create(sample_invoice(client.id, company.id))
        invoice_repo.delete(created.id)
        assert invoice_repo.get_by_uuid(created.uuid) is None
        assert invoice_repo.list_all() == []
