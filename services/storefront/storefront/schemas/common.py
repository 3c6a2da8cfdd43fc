from pydantic import BaseModel, Field
from typing import Any, Optional

SLUG_PATTERN = "^[a-z0-9-]+$"
CATALOG_STATUS_PATTERN = "^(active|inactive)$"


def blank_to_none(value: Any) -> Any:
    """Forms post empty strings for unset parent ids; store those as null"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class BreadcrumbItem(BaseModel):
    name: Optional[str] = Field(None, description="Display name of the taxonomy node")
    slug: Optional[str] = Field(None, description="URL slug of the taxonomy node")


class SuccessResponse(BaseModel):
    success: bool = True
