from unittest.mock import MagicMock

import pytest

from invoicely.models.client import Client
from invoicely.services.client_service import ClientService


class TestClientService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.mock_invoice_repo = MagicMock()
        self.service = ClientService(self.mock_repo, self.mock_invoice_repo)

    def test_create_client_strips_name(self):
        self.mock_repo.create.side_effect = lambda c: c.model_copy(update={"id": 1})
        result = self.service.create_client("  Acme  ", " a@acme.test ")
        created = self.mock_repo.create.call_args[0][0]
        assert created.name == "Acme"
        assert created.email == "a@acme.test"
        assert result.id == 1

    def test_create_client_requires_name(self):
        with pytest.raises(ValueError, match="name is required"):
            self.service.create_client("  ", "a@acme.test")
        self.mock_repo.create.assert_not_called()

    def test_list_and_get(self):
        self.mock_repo.list_all.return_value = [Client(id=1, name="A", email="")]
        assert len(self.service.list_clients()) == 1
        self.service.get_client(1)
        self.mock_repo.get_by_id.assert_called_once_with(1)
        self.service.get_client_by_uuid("u")
        self.mock_repo.get_by_uuid.assert_called_once_with("u")

    def test_update_client(self):
        client = Client(id=1, name="Acme", email="a@acme.test")
        self.mock_repo.update.return_value = client
        assert self.service.update_client(client) is client

    def test_delete_client_without_invoices(self):
        self.mock_invoice_repo.list_by_client.return_value = []
        self.service.delete_client(Client(id=3, name="Acme", email=""))
        self.mock_repo.delete.assert_called_once_with(3)

    def test_delete_client_with_invoices_is_refused(self):
        self.mock_invoice_repo.list_by_client.return_value = [MagicMock()]
        with pytest.raises(ValueError, match="has invoices"):
            self.service.delete_client(Client(id=3, name="Acme", email=""))
        self.mock_repo.delete.assert_not_called()
