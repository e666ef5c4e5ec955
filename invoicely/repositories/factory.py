from invoicely.repositories.base import ClientRepository, CompanyRepository, InvoiceRepository


def get_client_repository() -> ClientRepository:
    from invoicely.db import get_connection
    from invoicely.repositories.sqlalchemy import SQLAlchemyClientRepository

    return SQLAlchemyClientRepository(get_connection())


def get_company_repository() -> CompanyRepository:
    from invoicely.db import get_connection
    from invoicely.repositories.sqlalchemy import SQLAlchemyCompanyRepository

    return SQLAlchemyCompanyRepository(get_connection())


def get_invoice_repository() -> InvoiceRepository:
    from invoicely.db import get_connection
    from invoicely.repositories.sqlalchemy import SQLAlchemyInvoiceRepository

    return SQLAlchemyInvoiceRepository(get_connection())
