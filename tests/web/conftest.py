"""Web test fixtures: TestClient with shared in-memory SQLite."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from invoicely.mail.console import ConsoleEmailSender
from invoicely.repositories.sqlalchemy import SQLAlchemyClientRepository, SQLAlchemyCompanyRepository
from invoicely.storage.local import LocalStorage
from tests.conftest import SCHEMA_DDL, _sample_client, _sample_company


def _make_test_engine():
    """Create a fresh in-memory SQLite engine with shared connection pool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        for statement in SCHEMA_DDL.strip().split(";"):
            stmt = statement.strip()
            if stmt:
                conn.execute(text(stmt))
        conn.commit()

    return engine


def create_client_in_db(engine, **overrides):
    with engine.connect() as conn:
        return SQLAlchemyClientRepository(conn).create(_sample_client(**overrides))


def create_company_in_db(engine, **overrides):
    overrides.setdefault("is_primary", True)
    with engine.connect() as conn:
        return SQLAlchemyCompanyRepository(conn).create(_sample_company(**overrides))


INVOICE_PAYLOAD_ITEMS = [
    {
        "description": "Design work",
        "quantity": 40,
        "unit_price": "85",
        "discount": "10",
        "discount_type": "percentage",
        "tax_rate": "8",
    },
    {"description": "Development", "quantity": 8, "unit_price": "120", "tax_rate": "8"},
]


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch, tmp_path):
    """Set up in-memory DB, local storage and console email, and patch the web app to use them."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)
    monkeypatch.setattr(deps_module, "get_storage", lambda: LocalStorage(str(tmp_path / "storage")))
    outbox_sender = ConsoleEmailSender()
    monkeypatch.setattr(deps_module, "get_email_sender", lambda: outbox_sender)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)

    yield engine

    engine.dispose()


@pytest.fixture()
def test_engine(web_test_db):
    """Expose the test engine for helpers that need direct DB access."""
    return web_test_db


@pytest.fixture()
def outbox():
    import web.deps as deps_module

    return deps_module.get_email_sender().outbox


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)


@pytest.fixture()
def parties(test_engine):
    """A persisted client and primary company."""
    return create_client_in_db(test_engine), create_company_in_db(test_engine)


@pytest.fixture()
def created_invoice(client, parties):
    """POST an invoice through the API and return its JSON."""
    api_client, _ = parties
    response = client.post(
        "/api/invoices",
        json={
            "client_uuid": api_client.uuid,
            "issue_date": "2025-03-01",
            "due_date": "2025-03-31",
            "items": INVOICE_PAYLOAD_ITEMS,
        },
    )
    assert response.status_code == 201
    return response.json()
