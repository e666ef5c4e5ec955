from __future__ import annotations

import logging

from invoicely.models.client import Client
from invoicely.repositories.base import ClientRepository, InvoiceRepository

logger = logging.getLogger(__name__)


class ClientService:
    def __init__(self, repo: ClientRepository, invoice_repo: InvoiceRepository) -> None:
        self.repo = repo
        self.invoice_repo = invoice_repo

    def create_client(
        self,
        name: str,
        email: str,
        address: str = "",
        phone: str = "",
        tax_id: str = "",
    ) -> Client:
        name = name.strip()
        if not name:
            raise ValueError("Client name is required")
        client = Client(name=name, email=email.strip(), address=address, phone=phone, tax_id=tax_id)
        result = self.repo.create(client)
        logger.info("Client created: id=%s, name=%s", result.id, result.name)
        return result

    def list_clients(self) -> list[Client]:
        result = self.repo.list_all()
        logger.debug("Listed %d clients", len(result))
        return result

    def get_client(self, client_id: int) -> Client | None:
        result = self.repo.get_by_id(client_id)
        logger.debug("get_client id=%s found=%s", client_id, result is not None)
        return result

    def get_client_by_uuid(self, uuid: str) -> Client | None:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_client_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def update_client(self, client: Client) -> Client:
        if not client.name.strip():
            raise ValueError("Client name is required")
        result = self.repo.update(client)
        logger.info("Client updated: id=%s, name=%s", result.id, result.name)
        return result

    def delete_client(self, client: Client) -> None:
        if client.id is None:
            raise ValueError("Cannot delete client without an id")
        if self.invoice_repo.list_by_client(client.id):
            logger.warning("Delete refused: client %s still has invoices", client.id)
            raise ValueError("Cannot delete a client that has invoices")
        self.repo.delete(client.id)
        logger.info("Client %s soft-deleted", client.id)
