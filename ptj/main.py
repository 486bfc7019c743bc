from __future__ import annotations

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from ptj.api import admin, applications, auth, companies, company_requests, job_posts, profiles
from ptj.bootstrap import seed_reference_data, wait_for_database
from ptj.config import settings
from ptj.database import Base, SessionLocal, engine
from ptj.errors import ServiceError
from ptj.logging_config import get_logger, setup_logging
from ptj.schemas.common import ErrorEnvelope

logger = get_logger("ptj.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level)
    settings.ensure_directories()
    wait_for_database(engine, settings.db_connect_attempts)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_reference_data(db, settings)
    logger.info("Starting %s (env=%s)", settings.app_name, settings.environment)
    yield
    logger.info("Shutting down %s", settings.app_name)


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    body = ErrorEnvelope(message=message, errors=errors or [])
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    logger.debug(
        "%s %s -> %s (%.1f ms)",
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


@app.exception_handler(ServiceError)
async def handle_service_error(_: Request, exc: ServiceError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message, exc.errors)


@app.exception_handler(HTTPException)
async def handle_http_exception(_: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return _error_response(400, "Validation failed", errors)


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    errors = [str(exc)] if settings.is_development else []
    return _error_response(500, "An unexpected error occurred", errors)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(profiles.router, prefix="/api/profiles", tags=["profiles"])
app.include_router(companies.router, prefix="/api/companies", tags=["companies"])
app.include_router(company_requests.router, prefix="/api/company-requests", tags=["company_requests"])
app.include_router(job_posts.router, prefix="/api/job-posts", tags=["job_posts"])
app.include_router(applications.router, prefix="/api/applications", tags=["applications"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
