from fastapi import APIRouter, Depends, HTTPException, status, Query, UploadFile, File, Form
from typing import Optional
import logging

from storefront.auth.dependencies import require_admin
from storefront.schemas.common import SuccessResponse
from storefront.schemas.storage import UploadResponse, StorageListResponse
from storefront.services import get_storage_provider
from storefront.services.storage_providers.base import StorageProvider
from storefront.services.upload_service import UploadService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Uploads"],
    dependencies=[Depends(require_admin)],
    responses={401: {"description": "Admin session cookie missing or invalid"}}
)


def get_upload_service(storage: StorageProvider = Depends(get_storage_provider)) -> UploadService:
    return UploadService(storage)


async def _read_upload(file: Optional[UploadFile]) -> bytes:
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")
    return await file.read()


@router.post(
    "/upload",
    response_model=UploadResponse,
    summary="Upload an image",
    description="""
    Upload a product or category image to the storage bucket.

    **Requirements:**
    - JPEG, PNG, GIF or WebP
    - At most 5MB

    The object is stored at `<folder>/<timestamp>-<random>.<ext>`; `folder`
    defaults to `general`.
    """,
    responses={
        200: {
            "description": "Image stored",
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "url": "https://res.cloudinary.com/demo/image/upload/images/products/1700000000000-k3j9x1.png",
                        "path": "products/1700000000000-k3j9x1.png"
                    }
                }
            }
        },
        400: {"description": "No file, invalid type or file too large"},
        500: {"description": "Storage upload failed"}
    }
)
async def upload_image(
    file: Optional[UploadFile] = File(None, description="Image file to upload"),
    folder: Optional[str] = Form(None, description="Target folder inside the bucket"),
    upload_service: UploadService = Depends(get_upload_service)
):
    data = await _read_upload(file)
    return upload_service.upload_image(data, file.filename, file.content_type, folder)


@router.post(
    "/upload/pdf",
    response_model=UploadResponse,
    summary="Upload a catalogue PDF",
    description="PDF only, at most 20MB. `folder` defaults to `pdfs`.",
    responses={
        400: {"description": "No file, not a PDF or file too large"},
        500: {"description": "Storage upload failed"}
    }
)
async def upload_pdf(
    file: Optional[UploadFile] = File(None, description="PDF file to upload"),
    folder: Optional[str] = Form(None, description="Target folder inside the bucket"),
    upload_service: UploadService = Depends(get_upload_service)
):
    data = await _read_upload(file)
    return upload_service.upload_pdf(data, file.filename, file.content_type, folder)


@router.delete(
    "/upload",
    response_model=SuccessResponse,
    summary="Delete a stored object",
    responses={
        400: {"description": "No path provided"},
        500: {"description": "Storage delete failed"}
    }
)
async def delete_upload(
    path: Optional[str] = Query(None, description="Bucket-relative path returned by the upload"),
    upload_service: UploadService = Depends(get_upload_service)
):
    if not path:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No path provided")
    upload_service.delete(path)
    return SuccessResponse()


@router.get(
    "/storage/list",
    response_model=StorageListResponse,
    summary="List stored files",
    description="""
    Every object in the bucket (root and one folder deep), newest first, with
    the total count and size.
    """,
)
async def list_storage(
    upload_service: UploadService = Depends(get_upload_service)
):
    return upload_service.list_files()
