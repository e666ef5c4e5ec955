from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from web.deps import get_client_service, get_invoice_service
from web.schemas import ClientIn, ClientPatch, serialize_client, serialize_invoice

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients")


def _get_client_or_404(request: Request, uuid: str):
    client = get_client_service(request).get_client_by_uuid(uuid)
    if client is None:
        logger.warning("Client not found: uuid=%s", uuid)
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.get("")
async def client_list(request: Request):
    clients = get_client_service(request).list_clients()
    logger.info("GET /api/clients: %d clients", len(clients))
    return [serialize_client(c) for c in clients]


@router.post("", status_code=201)
async def client_create(request: Request, body: ClientIn):
    logger.info("POST /api/clients: creating client")
    client = get_client_service(request).create_client(**body.model_dump())
    return serialize_client(client)


@router.get("/{uuid}")
async def client_detail(request: Request, uuid: str):
    return serialize_client(_get_client_or_404(request, uuid))


@router.get("/{uuid}/invoices")
async def client_invoices(request: Request, uuid: str):
    client = _get_client_or_404(request, uuid)
    invoices = get_invoice_service(request).list_invoices_for_client(client.id)
    logger.info("GET /api/clients/%s/invoices: %d invoices", uuid, len(invoices))
    return [serialize_invoice(invoice, client) for invoice in invoices]


@router.patch("/{uuid}")
async def client_update(request: Request, uuid: str, body: ClientPatch):
    logger.info("PATCH /api/clients/%s", uuid)
    client = _get_client_or_404(request, uuid)
    updated = client.model_copy(update=body.model_dump(exclude_none=True))
    return serialize_client(get_client_service(request).update_client(updated))


@router.delete("/{uuid}", status_code=204)
async def client_delete(request: Request, uuid: str):
    logger.info("DELETE /api/clients/%s", uuid)
    client = _get_client_or_404(request, uuid)
    get_client_service(request).delete_client(client)
