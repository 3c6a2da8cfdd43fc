from fastapi import APIRouter
from pydantic import BaseModel, Field

from storefront.config import settings

SERVICE_VERSION = "1.0.0"

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service health status", examples=["healthy"])
    service: str = Field(..., description="Service name", examples=["storefront-service"])
    version: str = Field(..., description="Service version", examples=["1.0.0"])


class ServiceBanner(BaseModel):
    service: str
    version: str


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="""
    Liveness endpoint for monitoring and load balancer health checks.

    Returns the service status, name, and version. It does not touch the
    database; use `/api/admin/status` for connectivity.
    """,
    responses={
        200: {
            "description": "Service is healthy",
            "content": {
                "application/json": {
                    "example": {
                        "status": "healthy",
                        "service": "storefront-service",
                        "version": "1.0.0"
                    }
                }
            }
        }
    }
)
async def health():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=SERVICE_VERSION
    )


@router.get("/", response_model=ServiceBanner, include_in_schema=False)
async def root():
    return ServiceBanner(service=settings.app_name, version=SERVICE_VERSION)
