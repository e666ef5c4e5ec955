import pytest
from sqlalchemy import Connection

from invoicely.repositories.sqlalchemy import (
    SQLAlchemyClientRepository,
    SQLAlchemyCompanyRepository,
    SQLAlchemyInvoiceRepository,
)


@pytest.fixture()
def client_repo(db_connection: Connection) -> SQLAlchemyClientRepository:
    return SQLAlchemyClientRepository(db_connection)


@pytest.fixture()
def company_repo(db_connection: Connection) -> SQLAlchemyCompanyRepository:
    return SQLAlchemyCompanyRepository(db_connection)


@pytest.fixture()
def invoice_repo(db_connection: Connection) -> SQLAlchemyInvoiceRepository:
    return SQLAlchemyInvoiceRepository(db_connection)


@pytest.fixture()
def saved_parties(client_repo, company_repo, sample_client, sample_company):
    """A persisted (client, company) pair for invoice tests."""
    return client_repo.create(sample_client()), company_repo.create(sample_company(is_primary=True))
