from unittest.mock import MagicMock

import pytest

from invoicely.models.company import Company
from invoicely.services.company_service import CompanyService


def _company(**overrides):
    defaults = dict(company_name="Studio North", email="hello@studionorth.test")
    defaults.update(overrides)
    return Company(**defaults)


class TestCompanyService:
    def setup_method(self):
        self.mock_repo = MagicMock()
        self.service = CompanyService(self.mock_repo)

    def test_first_company_becomes_primary(self):
        self.mock_repo.get_primary.return_value = None
        self.mock_repo.create.side_effect = lambda c: c
        result = self.service.save_company(_company())
        assert result.is_primary is True

    def test_later_companies_are_not_primary(self):
        self.mock_repo.get_primary.return_value = _company(id=1, is_primary=True)
        self.mock_repo.create.side_effect = lambda c: c
        result = self.service.save_company(_company(company_name="Second"))
        assert result.is_primary is False

    def test_save_existing_updates(self):
        company = _company(id=5)
        self.mock_repo.update.return_value = company
        assert self.service.save_company(company) is company
        self.mock_repo.create.assert_not_called()

    def test_save_requires_name(self):
        with pytest.raises(ValueError, match="name is required"):
            self.service.save_company(_company(company_name=" "))

    def test_next_invoice_number(self):
        company = _company(id=2, invoice_prefix="ACME")
        self.mock_repo.increment_invoice_number.return_value = 1001
        assert self.service.next_invoice_number(company) == "ACME-1001"
        assert company.next_invoice_number == 1002
        self.mock_repo.increment_invoice_number.assert_called_once_with(2)

    def test_next_invoice_number_requires_id(self):
        with pytest.raises(ValueError):
            self.service.next_invoice_number(_company())

    def test_set_primary(self):
        company = _company(id=4)
        result = self.service.set_primary(company)
        self.mock_repo.set_primary.assert_called_once_with(4)
        assert result.is_primary is True

    def test_get_primary_company(self):
        primary = _company(id=1, is_primary=True)
        self.mock_repo.get_primary.return_value = primary
        assert self.service.get_primary_company() is primary

    def test_delete_company(self):
        self.service.delete_company(_company(id=9))
        self.mock_repo.delete.assert_called_once_with(9)
