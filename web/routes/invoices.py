from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from invoicely.models.invoice import Invoice, InvoiceStatus
from invoicely.services.invoice_service import InvoiceService
from web.deps import get_client_service, get_company_service, get_email_service, get_invoice_service
from web.schemas import InvoiceIn, InvoicePatch, SendIn, StatusIn, serialize_invoice, serialize_totals

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/invoices")


def _get_invoice_or_404(service: InvoiceService, uuid: str) -> Invoice:
    invoice = service.get_invoice_by_uuid(uuid)
    if invoice is None:
        logger.warning("Invoice not found: uuid=%s", uuid)
        raise HTTPException(status_code=404, detail="Invoice not found")
    return invoice


def _parties(request: Request, invoice: Invoice):
    client = get_client_service(request).get_client(invoice.client_id)
    company = get_company_service(request).get_company(invoice.company_id)
    if client is None or company is None:
        raise HTTPException(status_code=404, detail="Client or company for invoice not found")
    return client, company


def _client_or_404(request: Request, uuid: str):
    client = get_client_service(request).get_client_by_uuid(uuid)
    if client is None:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.get("")
async def invoice_list(request: Request, status: str | None = None):
    status_filter = None
    if status:
        try:
            status_filter = InvoiceStatus(status)
        except ValueError:
            raise ValueError(f"Invalid invoice status: {status}") from None
    invoices = get_invoice_service(request).list_invoices(status_filter)
    logger.info("GET /api/invoices: %d invoices (status=%s)", len(invoices), status or "all")
    clients = {c.id: c for c in get_client_service(request).list_clients()}
    return [serialize_invoice(inv, clients.get(inv.client_id)) for inv in invoices]


@router.post("", status_code=201)
async def invoice_create(request: Request, body: InvoiceIn):
    logger.info("POST /api/invoices: creating invoice")
    client = _client_or_404(request, body.client_uuid)
    company_service = get_company_service(request)
    if body.company_uuid:
        company = company_service.get_company_by_uuid(body.company_uuid)
        if company is None:
            raise HTTPException(status_code=404, detail="Company not found")
    else:
        company = company_service.get_primary_company()
        if company is None:
            raise ValueError("Configure company settings before creating invoices")

    invoice = get_invoice_service(request).create_invoice(
        client=client,
        company=company,
        items=[item.to_line_item(i) for i, item in enumerate(body.items)],
        issue_date=body.issue_date,
        due_date=body.due_date,
        currency=body.currency,
        invoice_number=body.invoice_number,
        template=body.template,
        notes=body.notes,
        payment_amount=body.payment_amount,
    )
    return serialize_invoice(invoice, client, company)


@router.get("/{uuid}")
async def invoice_detail(request: Request, uuid: str):
    invoice = _get_invoice_or_404(get_invoice_service(request), uuid)
    client, company = _parties(request, invoice)
    return serialize_invoice(invoice, client, company)


@router.patch("/{uuid}")
async def invoice_update(request: Request, uuid: str, body: InvoicePatch):
    logger.info("PATCH /api/invoices/%s", uuid)
    service = get_invoice_service(request)
    invoice = _get_invoice_or_404(service, uuid)

    # null means "leave unchanged" except for payment_amount, where it clears the payment.
    changes = body.model_dump(exclude_unset=True, exclude_none=True, exclude={"client_uuid", "items"})
    if "payment_amount" in body.model_fields_set:
        changes["payment_amount"] = body.payment_amount
    if body.client_uuid:
        changes["client_id"] = _client_or_404(request, body.client_uuid).id
    if body.items is not None:
        changes["items"] = [item.to_line_item(i) for i, item in enumerate(body.items)]
    if changes.get("currency") == "":
        del changes["currency"]

    invoice = service.update_invoice(invoice.model_copy(update=changes))
    client, company = _parties(request, invoice)
    return serialize_invoice(invoice, client, company)


@router.delete("/{uuid}", status_code=204)
async def invoice_delete(request: Request, uuid: str):
    logger.info("DELETE /api/invoices/%s", uuid)
    service = get_invoice_service(request)
    service.delete_invoice(_get_invoice_or_404(service, uuid))


@router.post("/{uuid}/status")
async def invoice_change_status(request: Request, uuid: str, body: StatusIn):
    logger.info("POST /api/invoices/%s/status -> %s", uuid, body.status)
    service = get_invoice_service(request)
    invoice = service.change_status(_get_invoice_or_404(service, uuid), body.status)
    client, company = _parties(request, invoice)
    return serialize_invoice(invoice, client, company)


@router.get("/{uuid}/totals")
async def invoice_totals_view(request: Request, uuid: str):
    service = get_invoice_service(request)
    invoice = _get_invoice_or_404(service, uuid)
    return {"currency": invoice.currency, **serialize_totals(service.calculate(invoice))}


@router.get("/{uuid}/pdf")
async def invoice_pdf(request: Request, uuid: str):
    logger.info("GET /api/invoices/%s/pdf", uuid)
    service = get_invoice_service(request)
    invoice = _get_invoice_or_404(service, uuid)
    client, company = _parties(request, invoice)
    pdf_bytes = service.generate_pdf(invoice, client, company)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="Invoice-{invoice.invoice_number}.pdf"'},
    )


@router.post("/{uuid}/send")
async def invoice_send(request: Request, uuid: str, body: SendIn | None = None):
    logger.info("POST /api/invoices/%s/send", uuid)
    body = body or SendIn()
    email_service = get_email_service(request)
    invoice = _get_invoice_or_404(email_service.invoice_service, uuid)
    client, company = _parties(request, invoice)
    invoice = email_service.send_invoice(
        invoice,
        client,
        company,
        invoice_url=body.invoice_url,
        attach_pdf=body.attach_pdf,
    )
    return serialize_invoice(invoice, client, company)
