from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from invoicely.formatting import format_date, format_money
from invoicely.mail.base import Attachment, EmailMessage, EmailSender
from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import Invoice, InvoiceStatus
from invoicely.services.invoice_service import InvoiceService
from invoicely.settings import settings
from invoicely.totals import invoice_totals

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "mail" / "templates"

_env = Environment(
    loader=FileSystemLoader(TEMPLATES_DIR),
    autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
    keep_trailing_newline=True,
)


class EmailService:
    def __init__(self, sender: EmailSender, invoice_service: InvoiceService) -> None:
        self.sender = sender
        self.invoice_service = invoice_service

    @staticmethod
    def build_context(
        invoice: Invoice,
        client: Client,
        company: Company,
        invoice_url: str | None = None,
        has_attachment: bool = True,
    ) -> dict:
        totals = invoice_totals(invoice.items)
        return {
            "company_name": company.company_name,
            "primary_color": company.primary_color,
            "client_name": client.name,
            "invoice_number": invoice.invoice_number,
            "subtotal": format_money(totals.subtotal, invoice.currency),
            "discount": format_money(totals.total_discount, invoice.currency) if totals.total_discount > 0 else "",
            "tax": format_money(totals.total_tax, invoice.currency) if totals.total_tax > 0 else "",
            "total": format_money(totals.total, invoice.currency),
            "due_date": format_date(invoice.due_date),
            "invoice_url": invoice_url or "",
            "has_attachment": has_attachment,
        }

    def build_message(
        self,
        invoice: Invoice,
        client: Client,
        company: Company,
        invoice_url: str | None = None,
        attach_pdf: bool = True,
    ) -> EmailMessage:
        if not client.email:
            raise ValueError(f"Client {client.name} has no email address")

        context = self.build_context(invoice, client, company, invoice_url, has_attachment=attach_pdf)
        attachments: list[Attachment] = []
        if attach_pdf:
            pdf_bytes = self.invoice_service.generate_pdf(invoice, client, company)
            attachments.append(Attachment(filename=f"Invoice-{invoice.invoice_number}.pdf", content=pdf_bytes))

        return EmailMessage(
            to=client.email,
            from_email=settings.email_from,
            subject=f"Invoice {invoice.invoice_number} from {company.company_name}",
            html=_env.get_template("invoice_email.html").render(**context),
            text=_env.get_template("invoice_email.txt").render(**context),
            attachments=attachments,
        )

    def send_invoice(
        self,
        invoice: Invoice,
        client: Client,
        company: Company,
        invoice_url: str | None = None,
        attach_pdf: bool = True,
    ) -> Invoice:
        """Email the invoice to its client. A draft becomes ``sent`` once delivered."""
        message = self.build_message(invoice, client, company, invoice_url, attach_pdf)
        self.sender.send(message)
        logger.info("Invoice %s emailed to %s", invoice.invoice_number, client.email)

        if invoice.status == InvoiceStatus.DRAFT:
            self.invoice_service.change_status(invoice, InvoiceStatus.SENT)
        return invoice
