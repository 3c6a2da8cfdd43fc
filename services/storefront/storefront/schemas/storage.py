from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional


class UploadResponse(BaseModel):
    success: bool = True
    url: str = Field(..., description="Public URL of the stored object")
    path: str = Field(..., description="Bucket-relative path, e.g. products/1700000000000-ab12cd.png")


class StoredFile(BaseModel):
    name: str = Field(..., description="Bucket-relative path")
    size: int = 0
    created_at: Optional[str] = None
    id: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class StorageListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    bucket: str
    files: List[StoredFile]
    total_files: int = Field(..., alias="totalFiles")
    total_size: int = Field(..., alias="totalSize")
    total_size_formatted: str = Field(..., alias="totalSizeFormatted")
