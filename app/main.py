"""
FastAPI application entry point.

Sets up the app, lifespan (DB connect/disconnect), CORS, logging, error
rendering and the API routers.

Errors raised anywhere below a route (AppError subclasses) are rendered as
{"error": message}, with "errors" added when the error carries field details.
Request validation failures are rendered as 400 {"error": "Invalid data"}.
"""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import account, companies, job_board, jobs, lookups, users
from app.config import get_settings
from app.database import close_mongo_connection, connect_to_mongo
from app.errors import AppError

# Configure logging - single place for log format and level
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context: connect to MongoDB at start and disconnect at end.
    """
    await connect_to_mongo()
    settings = get_settings()
    secret = settings.nextauth_secret or ""
    if not secret:
        logger.warning("NEXTAUTH_SECRET is not set. Logins will fail until it is configured.")
    elif len(secret) < 32:
        logger.warning("NEXTAUTH_SECRET is shorter than 32 characters. Use a long random string.")
    if not settings.smtp_configured:
        logger.warning("EMAIL_USER/EMAIL_PASS not set. OTP and reset emails will only be logged.")
    yield
    await close_mongo_connection()


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.warning("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
    body = {"error": exc.message}
    if exc.details:
        body["errors"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=body)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid data", "details": jsonable_encoder(exc.errors())},
    )


def create_application() -> FastAPI:
    """Factory for the FastAPI app. Keeps main.py clean and testable."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        description="Accounts, companies, job postings and lookup catalogs for a job board.",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Credentialed CORS: the session cookie travels with frontend requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(account.router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.router, prefix="/api/user", tags=["user"])
    app.include_router(jobs.router, prefix="/api/company/{company_id}/jobs", tags=["company jobs"])
    app.include_router(companies.router, prefix="/api/company", tags=["company"])
    app.include_router(job_board.router, prefix="/api/jobs", tags=["jobs"])
    app.include_router(lookups.router, prefix="/api", tags=["lookups"])

    @app.get("/health", tags=["health"])
    async def health() -> dict:
        return {"status": "healthy"}

    return app


app = create_application()
