import logging
import os

from invoicely.settings import settings
from invoicely.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def get_storage() -> StorageBackend:
    """Build the PDF storage backend selected by ``INVOICELY_STORAGE_BACKEND``."""
    backend = settings.storage_backend.lower()

    if backend == "local":
        from invoicely.storage.local import LocalStorage

        base_dir = os.path.expanduser(settings.storage_local_path)
        logger.info("Invoice PDFs stored locally under %s", base_dir)
        return LocalStorage(base_dir)

    if backend == "s3":
        from invoicely.storage.s3 import S3Storage

        if not settings.s3_bucket:
            raise ValueError("INVOICELY_S3_BUCKET must be set to use the s3 storage backend")
        logger.info("Invoice PDFs stored in s3 bucket=%s", settings.s3_bucket)
        return S3Storage(
            bucket=settings.s3_bucket,
            region=settings.s3_region,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            endpoint_url=settings.s3_endpoint_url,
            presigned_expiry=settings.s3_presigned_expiry,
        )

    raise ValueError(f"Unsupported storage backend: {backend}")
