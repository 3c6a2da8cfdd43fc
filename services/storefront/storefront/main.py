from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
import logging

from storefront.config import settings
from storefront.db.database import init_db
from storefront.api import (
    admin_auth,
    admin_catalog,
    categories,
    enquiries,
    health,
    products,
    sitemap,
    uploads,
)
from storefront.services.errors import ServiceError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting Storefront Service...")
    if settings.run_migrations_on_startup:
        await init_db()
    else:
        logger.info("Skipping migrations (RUN_MIGRATIONS_ON_STARTUP=false)")
    logger.info("Storefront Service started successfully")
    yield
    # Shutdown
    logger.info("Shutting down Storefront Service...")


app = FastAPI(
    title="Storefront Service",
    description="""
    Backend for the Lovosis product catalog website and its admin dashboard.

    **Features:**
    - Public catalog browsing over a three-level taxonomy
      (category → sub-category → super-sub-category)
    - Catalog path resolution for `/products/...` URLs
    - Contact, newsletter and catalogue-request lead capture
    - Admin CRUD for the taxonomy and products
    - Image and catalogue PDF uploads (Cloudinary)
    - XML sitemap

    **Authentication:**
    Admin endpoints require the HTTP-only `admin_token` cookie issued by
    `POST /api/admin/login`.
    """,
    version=health.SERVICE_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Explicit origin list, credentials allowed
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
    max_age=3600,
)


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header", "cookie")]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors"""
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    fields = sorted({_field_name(error["loc"]) for error in errors})
    logger.warning(
        f"Validation error on {request.method} {request.url.path}: {errors}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": f"Required fields missing or invalid: {', '.join(fields)}",
            "detail": errors,
        }
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message}
    )


# Global exception handler for unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Catch all unhandled exceptions and log them properly"""
    logger.error(
        f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
        exc_info=True,
        extra={
            "path": request.url.path,
            "method": request.method,
        }
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


# Include routers
app.include_router(health.router)
app.include_router(sitemap.router)
app.include_router(categories.router)
app.include_router(products.router)
app.include_router(enquiries.router)
app.include_router(admin_auth.router)
app.include_router(admin_catalog.router)
app.include_router(uploads.router)
