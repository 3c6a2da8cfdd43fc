"""
Abstract base class for object storage providers
"""
from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any


class StorageProvider(ABC):
    """Abstract interface for the bucket holding images and catalogue PDFs

    Objects are addressed by a bucket-relative path such as
    ``products/1700000000000-k3j9x1.png``.
    """

    bucket: str = "images"

    @abstractmethod
    def upload(self, data: bytes, path: str, content_type: str) -> Optional[str]:
        """
        Store an object at `path`.

        Returns:
            Public URL if successful, None otherwise
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> bool:
        """
        Delete the object at `path`.

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def get_public_url(self, path: str) -> str:
        """Public CDN URL for the object at `path`"""
        pass

    @abstractmethod
    def list_files(self) -> List[Dict[str, Any]]:
        """
        List stored objects, newest first.

        Returns:
            Dicts with name (bucket-relative path), size, created_at, id, metadata
        """
        pass

    @abstractmethod
    def check_connection(self) -> bool:
        """True if the provider is configured and reachable"""
        pass
