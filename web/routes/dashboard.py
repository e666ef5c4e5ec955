from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from web.deps import get_dashboard_service, get_invoice_service
from web.schemas import serialize_dashboard

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/dashboard")
async def dashboard(request: Request):
    invoices = get_invoice_service(request).list_invoices()
    stats = get_dashboard_service(request).build_stats(invoices)
    logger.info("GET /api/dashboard: %d invoices", stats.total_invoices)
    return serialize_dashboard(stats)
