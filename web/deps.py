from __future__ import annotations

import logging

from fastapi import Request
from starlette.types import ASGIApp, Receive, Scope, Send

from invoicely.db import get_engine
from invoicely.mail.factory import get_email_sender
from invoicely.repositories.sqlalchemy import (
    SQLAlchemyClientRepository,
    SQLAlchemyCompanyRepository,
    SQLAlchemyInvoiceRepository,
)
from invoicely.services.client_service import ClientService
from invoicely.services.company_service import CompanyService
from invoicely.services.dashboard_service import DashboardService
from invoicely.services.email_service import EmailService
from invoicely.services.invoice_service import InvoiceService
from invoicely.storage.factory import get_storage

logger = logging.getLogger(__name__)


class DBConnectionMiddleware:
    """Pure ASGI middleware: creates a single DB connection per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request):
    """Lazy per-request connection, created on first use and closed by the middleware."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def get_client_service(request: Request) -> ClientService:
    conn = _get_conn(request)
    return ClientService(SQLAlchemyClientRepository(conn), SQLAlchemyInvoiceRepository(conn))


def get_company_service(request: Request) -> CompanyService:
    return CompanyService(SQLAlchemyCompanyRepository(_get_conn(request)))


def get_invoice_service(request: Request) -> InvoiceService:
    conn = _get_conn(request)
    return InvoiceService(
        SQLAlchemyInvoiceRepository(conn),
        CompanyService(SQLAlchemyCompanyRepository(conn)),
        get_storage(),
    )


def get_email_service(request: Request) -> EmailService:
    return EmailService(get_email_sender(), get_invoice_service(request))


def get_dashboard_service(request: Request) -> DashboardService:
    return DashboardService()
