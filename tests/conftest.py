"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from invoicely.models.client import Client
from invoicely.models.company import Company
from invoicely.models.invoice import DiscountType, Invoice, LineItem

# Matches Alembic head: 3f9c1a7e2b10 (create invoicing tables)
SCHEMA_DDL = """
CREATE TABLE clients (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    name TEXT NOT NULL,
    email TEXT NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    tax_id TEXT NOT NULL DEFAULT '',
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE companies (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    company_name TEXT NOT NULL,
    email TEXT NOT NULL DEFAULT '',
    phone TEXT NOT NULL DEFAULT '',
    address TEXT NOT NULL DEFAULT '',
    tax_id TEXT NOT NULL DEFAULT '',
    logo TEXT NOT NULL DEFAULT '',
    primary_color VARCHAR(7) NOT NULL DEFAULT '#3B82F6',
    invoice_prefix TEXT NOT NULL DEFAULT 'INV',
    next_invoice_number INTEGER NOT NULL DEFAULT 1001,
    bank_name TEXT NOT NULL DEFAULT '',
    account_number TEXT NOT NULL DEFAULT '',
    routing_code TEXT NOT NULL DEFAULT '',
    swift_code TEXT NOT NULL DEFAULT '',
    is_primary TINYINT NOT NULL DEFAULT 0,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE invoices (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    invoice_number TEXT NOT NULL,
    client_id INTEGER NOT NULL REFERENCES clients(id),
    company_id INTEGER NOT NULL REFERENCES companies(id),
    issue_date DATE NOT NULL,
    due_date DATE NOT NULL,
    currency VARCHAR(3) NOT NULL DEFAULT 'USD',
    status TEXT NOT NULL DEFAULT 'draft',
    template TEXT NOT NULL DEFAULT 'modern',
    notes TEXT NOT NULL DEFAULT '',
    payment_amount VARCHAR(32),
    pdf_path TEXT,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL,
    deleted_at DATETIME
);

CREATE TABLE line_items (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    invoice_id INTEGER NOT NULL REFERENCES invoices(id) ON DELETE CASCADE,
    description TEXT NOT NULL DEFAULT '',
    quantity INTEGER NOT NULL DEFAULT 0,
    unit_price VARCHAR(32) NOT NULL DEFAULT '0',
    discount VARCHAR(32) NOT NULL DEFAULT '0',
    discount_type TEXT NOT NULL DEFAULT 'percentage',
    tax_rate VARCHAR(32) NOT NULL DEFAULT '0',
    sort_order INTEGER NOT NULL DEFAULT 0
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def _sample_client(**overrides) -> Client:
    defaults = dict(
        name="Acme Corp",
        email="billing@acme.test",
        address="1 Market St, Springfield",
        phone="+1 555 0100",
        tax_id="12-3456789",
    )
    defaults.update(overrides)
    return Client(**defaults)


def _sample_company(**overrides) -> Company:
    defaults = dict(
        company_name="Studio North",
        email="hello@studionorth.test",
        phone="+1 555 0199",
        address="22 Harbor Rd, Portland",
        invoice_prefix="INV",
        next_invoice_number=1001,
        bank_name="First Bank",
        account_number="000123456789",
        routing_code="021000021",
        swift_code="FBNKUS33",
    )
    defaults.update(overrides)
    return Company(**defaults)


def _sample_items() -> list[LineItem]:
    return [
        LineItem(
            description="Design work",
            quantity=40,
            unit_price=Decimal("85"),
            discount=Decimal("10"),
            discount_type=DiscountType.PERCENTAGE,
            tax_rate=Decimal("8"),
            sort_order=0,
        ),
        LineItem(
            description="Development",
            quantity=8,
            unit_price=Decimal("120"),
            tax_rate=Decimal("8"),
            sort_order=1,
        ),
    ]


def _sample_invoice(client_id: int = 1, company_id: int = 1, **overrides) -> Invoice:
    defaults = dict(
        invoice_number="INV-1001",
        client_id=client_id,
        company_id=company_id,
        issue_date=date(2025, 3, 1),
        due_date=date(2025, 3, 31),
        currency="USD",
        notes="Thanks!",
        items=_sample_items(),
    )
    defaults.update(overrides)
    return Invoice(**defaults)


@pytest.fixture()
def sample_client():
    return _sample_client


@pytest.fixture()
def sample_company():
    return _sample_company


@pytest.fixture()
def sample_items():
    return _sample_items


@pytest.fixture()
def sample_invoice():
    return _sample_invoice
