from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from invoicely.models.company import Company
from web.deps import get_company_service
from web.schemas import CompanyIn, CompanyPatch, serialize_company

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_company_or_404(request: Request, uuid: str) -> Company:
    company = get_company_service(request).get_company_by_uuid(uuid)
    if company is None:
        logger.warning("Company not found: uuid=%s", uuid)
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.get("/api/companies")
async def company_list(request: Request):
    companies = get_company_service(request).list_companies()
    logger.info("GET /api/companies: %d companies", len(companies))
    return [serialize_company(c) for c in companies]


@router.post("/api/companies", status_code=201)
async def company_create(request: Request, body: CompanyIn):
    logger.info("POST /api/companies: creating company")
    company = get_company_service(request).save_company(Company(**body.model_dump()))
    return serialize_company(company)


@router.get("/api/companies/{uuid}")
async def company_detail(request: Request, uuid: str):
    return serialize_company(_get_company_or_404(request, uuid))


@router.patch("/api/companies/{uuid}")
async def company_update(request: Request, uuid: str, body: CompanyPatch):
    logger.info("PATCH /api/companies/%s", uuid)
    company = _get_company_or_404(request, uuid)
    updated = company.model_copy(update=body.model_dump(exclude_none=True))
    return serialize_company(get_company_service(request).save_company(updated))


@router.delete("/api/companies/{uuid}", status_code=204)
async def company_delete(request: Request, uuid: str):
    logger.info("DELETE /api/companies/%s", uuid)
    company = _get_company_or_404(request, uuid)
    get_company_service(request).delete_company(company)


@router.post("/api/companies/{uuid}/primary")
async def company_set_primary(request: Request, uuid: str):
    logger.info("POST /api/companies/%s/primary", uuid)
    company = _get_company_or_404(request, uuid)
    return serialize_company(get_company_service(request).set_primary(company))


@router.get("/api/settings")
async def settings_detail(request: Request):
    company = get_company_service(request).get_primary_company()
    if company is None:
        raise HTTPException(status_code=404, detail="Company settings not found")
    return serialize_company(company)


@router.post("/api/settings")
async def settings_save(request: Request, body: CompanyIn):
    """Create the primary company, or update it when one already exists."""
    logger.info("POST /api/settings: saving company settings")
    service = get_company_service(request)
    current = service.get_primary_company()
    if current is None:
        company = Company(**body.model_dump())
    else:
        company = current.model_copy(update=body.model_dump(exclude_unset=True))
    return serialize_company(service.save_company(company))
