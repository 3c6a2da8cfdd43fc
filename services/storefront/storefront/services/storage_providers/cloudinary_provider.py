"""
Cloudinary storage provider implementation

Bucket paths map onto Cloudinary public_ids under a root folder named after
the bucket. Images are `image` resources (Cloudinary keeps the format apart
from the public_id); PDFs are `raw` resources and keep their extension.
"""
import cloudinary
import cloudinary.uploader
import cloudinary.api
import cloudinary.utils
import logging
import posixpath
from typing import Optional, Dict, List, Any, Tuple
from storefront.services.storage_providers.base import StorageProvider
from storefront.config import settings

logger = logging.getLogger(__name__)

RAW_EXTENSIONS = {"pdf"}
LIST_PAGE_SIZE = 500


class CloudinaryStorageProvider(StorageProvider):
    """Cloudinary implementation of StorageProvider"""

    def __init__(self, bucket: Optional[str] = None):
        self.bucket = bucket or settings.storage_bucket
        self.cloud_name = settings.cloudinary_cloud_name
        self.api_key = settings.cloudinary_api_key
        self.api_secret = settings.cloudinary_api_secret

        if not self.is_configured:
            logger.warning("Cloudinary not fully configured (missing cloud_name, api_key, or api_secret)")
        else:
            cloudinary.config(
                cloud_name=self.cloud_name,
                api_key=self.api_key,
                api_secret=self.api_secret,
                secure=True  # Use HTTPS
            )

    @property
    def is_configured(self) -> bool:
        return all([self.cloud_name, self.api_key, self.api_secret])

    def _locate(self, path: str) -> Tuple[str, str, Optional[str]]:
        """Map a bucket path to (public_id, resource_type, format)"""
        path = path.lstrip("/")
        stem, ext = posixpath.splitext(path)
        ext = ext.lstrip(".").lower() or None
        if ext in RAW_EXTENSIONS:
            return f"{self.bucket}/{path}", "raw", None
        return f"{self.bucket}/{stem}", "image", ext

    def _path_from_resource(self, resource: Dict[str, Any]) -> str:
        public_id = resource.get("public_id", "")
        prefix = f"{self.bucket}/"
        if public_id.startswith(prefix):
            public_id = public_id[len(prefix):]
        fmt = resource.get("format")
        if resource.get("resource_type") == "image" and fmt:
            return f"{public_id}.{fmt}"
        return public_id

    def upload(self, data: bytes, path: str, content_type: str) -> Optional[str]:
        """
        Upload an object to Cloudinary.
        Returns the secure URL if successful, None otherwise.
        """
        if not self.is_configured:
            logger.warning("Cloudinary not configured")
            return None

        public_id, resource_type, _ = self._locate(path)
        try:
            result = cloudinary.uploader.upload(
                data,
                public_id=public_id,
                resource_type=resource_type,
                overwrite=False,
                unique_filename=False,
                use_filename=False,
                context={"content_type": content_type},
            )

            url = result.get("secure_url")
            if url:
                logger.info(f"Successfully uploaded {path} to Cloudinary ({resource_type})")
                return url
            logger.error(f"Cloudinary upload succeeded but no URL returned: {result}")
            return None

        except Exception as e:
            logger.error(f"Failed to upload {path} to Cloudinary: {e}", exc_info=True)
            return None

    def delete(self, path: str) -> bool:
        if not self.is_configured:
            logger.warning("Cloudinary not configured")
            return False

        public_id, resource_type, _ = self._locate(path)
        try:
            result = cloudinary.uploader.destroy(public_id, resource_type=resource_type)

            if result.get("result") == "ok":
                logger.info(f"Successfully deleted {path} from Cloudinary")
                return True
            logger.error(f"Cloudinary delete failed for {path}: {result}")
            return False

        except Exception as e:
            logger.error(f"Failed to delete {path} from Cloudinary: {e}", exc_info=True)
            return False

    def get_public_url(self, path: str) -> str:
        public_id, resource_type, fmt = self._locate(path)
        options = {"resource_type": resource_type, "secure": True}
        if fmt:
            options["format"] = fmt
        url, _ = cloudinary.utils.cloudinary_url(public_id, **options)
        return url

    def list_files(self) -> List[Dict[str, Any]]:
        """
        List the bucket's root files and files one folder deep.
        Both image and raw resources are included.
        """
        if not self.is_configured:
            raise RuntimeError("Cloudinary not configured")

        files = []
        for resource_type in ("image", "raw"):
            next_cursor = None
            while True:
                options = {
                    "type": "upload",
                    "prefix": f"{self.bucket}/",
                    "resource_type": resource_type,
                    "max_results": LIST_PAGE_SIZE,
                }
                if next_cursor:
                    options["next_cursor"] = next_cursor
                page = cloudinary.api.resources(**options)

                for resource in page.get("resources", []):
                    name = self._path_from_resource(resource)
                    if name.count("/") > 1:
                        continue
                    size = resource.get("bytes") or 0
                    files.append({
                        "name": name,
                        "size": size,
                        "created_at": resource.get("created_at"),
                        "id": resource.get("asset_id"),
                        "metadata": {
                            "size": size,
                            "format": resource.get("format"),
                            "resource_type": resource.get("resource_type"),
                            "url": resource.get("secure_url"),
                        },
                    })

                next_cursor = page.get("next_cursor")
                if not next_cursor:
                    break

        files.sort(key=lambda f: f.get("created_at") or "", reverse=True)
        logger.info(f"Listed {len(files)} files in bucket {self.bucket}")
        return files

    def check_connection(self) -> bool:
        if not self.is_configured:
            return False
        try:
            return cloudinary.api.ping().get("status") == "ok"
        except Exception as e:
            logger.warning(f"Cloudinary ping failed: {e}")
            return False
