from __future__ import annotations

import logging
from datetime import date, timedelta
from decimal import Decimal

from invoicely.constants import DEFAULT_PAYMENT_TERMS_DAYS
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import Invoice, InvoiceStatus, InvoiceTemplate, LineItem
from invoicely.pdf.invoice import InvoicePDF
from invoicely.repositories.base import InvoiceRepository
from invoicely.services.company_service import CompanyService
from invoicely.settings import settings
from invoicely.storage.base import StorageBackend
from invoicely.totals import InvoiceTotals, invoice_totals

logger = logging.getLogger(__name__)


def _storage_key(invoice_uuid: str) -> str:
    prefix = settings.storage_prefix
    if prefix:
        return f"{prefix}/{invoice_uuid}.pdf"
    return f"{invoice_uuid}.pdf"


class InvoiceService:
    def __init__(
        self,
        repo: InvoiceRepository,
        company_service: CompanyService,
        storage: StorageBackend,
    ) -> None:
        self.repo = repo
        self.company_service = company_service
        self.storage = storage
        self.pdf_generator = InvoicePDF()

    def _ensure_unique_number(self, invoice_number: str, company_id: int, invoice_id: int | None = None) -> None:
        existing = self.repo.get_by_number(company_id, invoice_number)
        if existing is not None and existing.id != invoice_id:
            raise ValueError(f"Invoice number {invoice_number} is already in use")

    def create_invoice(
        self,
        client: Client,
        company: Company,
        items: list[LineItem],
        issue_date: date | None = None,
        due_date: date | None = None,
        currency: str = "",
        invoice_number: str = "",
        template: InvoiceTemplate = InvoiceTemplate.MODERN,
        notes: str = "",
        payment_amount: Decimal | None = None,
    ) -> Invoice:
        if client.id is None or company.id is None:
            raise ValueError("Invoice requires a saved client and company")
        issue_date = issue_date or date.today()
        due_date = due_date or issue_date + timedelta(days=DEFAULT_PAYMENT_TERMS_DAYS)
        if due_date < issue_date:
            raise ValueError("Due date cannot be before the issue date")
        if not invoice_number:
            invoice_number = self.company_service.next_invoice_number(company)
        self._ensure_unique_number(invoice_number, company.id)

        invoice = Invoice(
            invoice_number=invoice_number,
            client_id=client.id,
            company_id=company.id,
            issue_date=issue_date,
            due_date=due_date,
            currency=currency or settings.default_currency,
            template=template,
            notes=notes,
            payment_amount=payment_amount,
            items=items,
        )
        result = self.repo.create(invoice)
        logger.info(
            "Invoice created: id=%s, number=%s, client=%s, items=%d",
            result.id,
            result.invoice_number,
            client.id,
            len(result.items),
        )
        return result

    def update_invoice(self, invoice: Invoice) -> Invoice:
        if invoice.due_date < invoice.issue_date:
            raise ValueError("Due date cannot be before the issue date")
        self._ensure_unique_number(invoice.invoice_number, invoice.company_id, invoice.id)
        result = self.repo.update(invoice)
        logger.info("Invoice updated: id=%s, number=%s", result.id, result.invoice_number)
        return result

    def change_status(self, invoice: Invoice, status: InvoiceStatus | str) -> Invoice:
        try:
            new_status = InvoiceStatus(status)
        except ValueError:
            raise ValueError(f"Invalid invoice status: {status}") from None
        if invoice.id is None:
            raise ValueError("Cannot change status of invoice without an id")
        self.repo.update_status(invoice.id, new_status)
        logger.info("Invoice %s status %s -> %s", invoice.id, invoice.status.value, new_status.value)
        invoice.status = new_status
        return invoice

    def get_invoice(self, invoice_id: int) -> Invoice | None:
        result = self.repo.get_by_id(invoice_id)
        logger.debug("get_invoice id=%s found=%s", invoice_id, result is not None)
        return result

    def get_invoice_by_uuid(self, uuid: str) -> Invoice | None:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_invoice_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def list_invoices(self, status: InvoiceStatus | None = None) -> list[Invoice]:
        if status is None:
            result = self.repo.list_all()
        else:
            result = self.repo.list_by_status([status])
        logger.debug("Listed %d invoices (status=%s)", len(result), status.value if status else "all")
        return result

    def list_invoices_for_client(self, client_id: int) -> list[Invoice]:
        result = self.repo.list_by_client(client_id)
        logger.debug("Listed %d invoices for client=%s", len(result), client_id)
        return result

    def delete_invoice(self, invoice: Invoice) -> None:
        if invoice.id is None:
            raise ValueError("Cannot delete invoice without an id")
        self.repo.delete(invoice.id)
        if invoice.pdf_path:
            self.storage.delete(_storage_key(invoice.uuid))
        logger.info("Invoice %s soft-deleted", invoice.id)

    @staticmethod
    def calculate(invoice: Invoice) -> InvoiceTotals:
        return invoice_totals(invoice.items)

    def generate_pdf(self, invoice: Invoice, client: Client, company: Company) -> bytes:
        """Render the invoice PDF, store it and record its storage path on the invoice."""
        pdf_bytes = self.pdf_generator.generate(invoice, client, company)
        key = _storage_key(invoice.uuid)
        path = self.storage.save(key, pdf_bytes)
        logger.info("PDF stored at %s for invoice %s", key, invoice.uuid)

        if invoice.id is None:
            raise ValueError("Cannot update pdf_path for invoice without an id")
        self.repo.update_pdf_path(invoice.id, path)
        invoice.pdf_path = path
        return pdf_bytes

    def get_pdf_url(self, invoice: Invoice) -> str:
        if not invoice.pdf_path:
            return ""
        logger.debug("get_pdf_url invoice=%s", invoice.uuid)
        return self.storage.get_url(_storage_key(invoice.uuid))
