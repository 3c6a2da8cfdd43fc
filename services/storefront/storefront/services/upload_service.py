"""
Upload handling for product images and catalogue PDFs.

Objects are stored at ``<folder>/<timestamp_ms>-<random>.<ext>`` inside the
provider's bucket.
"""
import logging
import posixpath
import random
import string
import time
from typing import Optional

from storefront.config import settings
from storefront.services.errors import StorageError, UploadRejectedError
from storefront.services.storage_providers.base import StorageProvider

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}
PDF_CONTENT_TYPE = "application/pdf"
DEFAULT_IMAGE_FOLDER = "general"
DEFAULT_PDF_FOLDER = "pdfs"

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_bytes(size: int) -> str:
    """Human readable size, base 1024 with two decimals (``1.5 KB``)"""
    if not size:
        return "0 Bytes"
    value = float(size)
    exponent = 0
    while value >= 1024 and exponent < len(_SIZE_UNITS) - 1:
        value /= 1024
        exponent += 1
    # 2.0 -> "2", 1.5 -> "1.5"
    return f"{round(value, 2):g} {_SIZE_UNITS[exponent]}"


def _random_suffix(length: int = 6) -> str:
    return "".join(random.choices(string.ascii_lowercase + string.digits, k=length))


def build_object_path(folder: str, extension: str) -> str:
    folder = folder.strip("/") or DEFAULT_IMAGE_FOLDER
    return f"{folder}/{int(time.time() * 1000)}-{_random_suffix()}.{extension}"


def _extension(filename: Optional[str], fallback: str) -> str:
    ext = posixpath.splitext(filename or "")[1].lstrip(".").lower()
    return ext or fallback


class UploadService:
    """Validates uploads and hands them to the storage provider"""

    def __init__(self, provider: StorageProvider):
        self.provider = provider

    def upload_image(
        self,
        data: bytes,
        filename: Optional[str],
        content_type: Optional[str],
        folder: Optional[str] = None,
    ) -> dict:
        if content_type not in ALLOWED_IMAGE_TYPES:
            raise UploadRejectedError("Invalid file type. Only JPEG, PNG, GIF, WebP allowed.")
        if len(data) > settings.max_image_upload_bytes:
            raise UploadRejectedError(
                f"File too large. Maximum {settings.max_image_upload_bytes // (1024 * 1024)}MB allowed."
            )

        path = build_object_path(folder or DEFAULT_IMAGE_FOLDER, _extension(filename, ALLOWED_IMAGE_TYPES[content_type]))
        return self._store(data, path, content_type)

    def upload_pdf(
        self,
        data: bytes,
        filename: Optional[str],
        content_type: Optional[str],
        folder: Optional[str] = None,
    ) -> dict:
        if content_type != PDF_CONTENT_TYPE:
            raise UploadRejectedError("Only PDF files allowed")
        if len(data) > settings.max_pdf_upload_bytes:
            raise UploadRejectedError(
                f"File too large. Maximum {settings.max_pdf_upload_bytes // (1024 * 1024)}MB allowed."
            )

        path = build_object_path(folder or DEFAULT_PDF_FOLDER, "pdf")
        return self._store(data, path, content_type)

    def _store(self, data: bytes, path: str, content_type: str) -> dict:
        url = self.provider.upload(data, path, content_type)
        if not url:
            raise StorageError("Failed to upload file")
        logger.info(f"Stored {len(data)} bytes at {path}")
        return {"success": True, "url": url, "path": path}

    def delete(self, path: str) -> None:
        if not self.provider.delete(path):
            raise StorageError("Failed to delete file")
        logger.info(f"Deleted stored object {path}")

    def list_files(self) -> dict:
        try:
            files = self.provider.list_files()
        except Exception as e:
            logger.error(f"Failed to list storage bucket: {e}", exc_info=True)
            raise StorageError("Failed to list files")

        total_size = sum(f.get("size") or 0 for f in files)
        return {
            "success": True,
            "bucket": self.provider.bucket,
            "files": files,
            "total_files": len(files),
            "total_size": total_size,
            "total_size_formatted": format_bytes(total_size),
        }
