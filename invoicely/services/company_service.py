from __future__ import annotations

import logging

from invoicely.models.company import Company
from invoicely.repositories.base import CompanyRepository

logger = logging.getLogger(__name__)


class CompanyService:
    def __init__(self, repo: CompanyRepository) -> None:
        self.repo = repo

    def save_company(self, company: Company) -> Company:
        """Create or update a company. The first company saved becomes the primary one."""
        if not company.company_name.strip():
            raise ValueError("Company name is required")
        if company.id is not None:
            result = self.repo.update(company)
            logger.info("Company updated: id=%s, name=%s", result.id, result.company_name)
            return result

        if self.repo.get_primary() is None:
            company.is_primary = True
        result = self.repo.create(company)
        logger.info(
            "Company created: id=%s, name=%s, primary=%s",
            result.id,
            result.company_name,
            result.is_primary,
        )
        return result

    def list_companies(self) -> list[Company]:
        result = self.repo.list_all()
        logger.debug("Listed %d companies", len(result))
        return result

    def get_company(self, company_id: int) -> Company | None:
        result = self.repo.get_by_id(company_id)
        logger.debug("get_company id=%s found=%s", company_id, result is not None)
        return result

    def get_company_by_uuid(self, uuid: str) -> Company | None:
        result = self.repo.get_by_uuid(uuid)
        logger.debug("get_company_by_uuid uuid=%s found=%s", uuid, result is not None)
        return result

    def get_primary_company(self) -> Company | None:
        result = self.repo.get_primary()
        logger.debug("get_primary_company found=%s", result is not None)
        return result

    def set_primary(self, company: Company) -> Company:
        if company.id is None:
            raise ValueError("Cannot set primary on a company without an id")
        self.repo.set_primary(company.id)
        company.is_primary = True
        logger.info("Company %s set as primary", company.id)
        return company

    def next_invoice_number(self, company: Company) -> str:
        """Reserve the next invoice number for a company, e.g. ``INV-1001``."""
        if company.id is None:
            raise ValueError("Cannot number invoices for a company without an id")
        number = self.repo.increment_invoice_number(company.id)
        company.next_invoice_number = number + 1
        invoice_number = f"{company.invoice_prefix}-{number}"
        logger.info("Reserved invoice number %s for company %s", invoice_number, company.id)
        return invoice_number

    def delete_company(self, company: Company) -> None:
        if company.id is None:
            raise ValueError("Cannot delete company without an id")
        self.repo.delete(company.id)
        logger.info("Company %s soft-deleted", company.id)
