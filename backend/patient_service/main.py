"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware

from patient_service.clients.dms_core import SitesApiClient
from patient_service.config import settings
from patient_service.errors import register_exception_handlers
from patient_service.routes import dms, medical_cases, patients

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events for startup/shutdown."""
    # Startup: one document-service client for the whole process
    app.state.sites_client = SitesApiClient.from_settings()
    logger.info(
        "Document service client '%s' configured for %s",
        settings.dms_core_name,
        settings.dms_core_url,
    )

    yield  # Application runs here

    await app.state.sites_client.aclose()
    logger.info("Document service client closed")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


app = FastAPI(
    title="Patient Service",
    description="Patient and medical case records with free-text search",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(SecurityHeadersMiddleware)

# CORS middleware for frontend
# Parse comma-separated origins from config
_cors_origins = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=[
        "Location",
        "Link",
        "X-Total-Count",
        f"X-{settings.application_name}-alert",
        f"X-{settings.application_name}-error",
        f"X-{settings.application_name}-params",
    ],
)

register_exception_handlers(app)

# Include API routers
app.include_router(medical_cases.router, prefix="/api")
app.include_router(patients.router, prefix="/api")
app.include_router(dms.router, prefix="/api")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": "Patient Service API",
        "version": "0.1.0",
        "docs": "/docs",
    }
