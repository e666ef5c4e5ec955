from abc import ABC, abstractmethod


class StorageBackend(ABC):
    """Where rendered invoice PDFs live, addressed by key."""

    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """Write ``data`` under ``key``; returns the path recorded on the invoice."""

    @abstractmethod
    def get(self, key: str) -> bytes: ...

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Presigned URL for S3, absolute file path for local storage."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``. Missing keys are not an error."""
