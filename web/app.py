from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from invoicely.db import initialize_db
from invoicely.logging import configure_logging, reconfigure
from web.deps import DBConnectionMiddleware
from web.routes.clients import router as clients_router
from web.routes.companies import router as companies_router
from web.routes.dashboard import router as dashboard_router
from web.routes.invoices import router as invoices_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Alembic's fileConfig may have overridden the logging config
    reconfigure()
    logger.info("Application started")
    yield


app = FastAPI(title="Invoicely", lifespan=lifespan)

app.add_middleware(DBConnectionMiddleware)

app.include_router(clients_router)
app.include_router(companies_router)
app.include_router(invoices_router)
app.include_router(dashboard_router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse({"error": "Invalid request", "details": jsonable_errors(exc)}, status_code=400)


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse({"error": "Internal Server Error"}, status_code=500)


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()]


@app.get("/health")
async def health():
    return {"status": "ok"}
