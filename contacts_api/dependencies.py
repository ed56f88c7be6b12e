"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

import logging
from typing import Optional

from contacts_api.config import get_settings
from contacts_api.db import DbClient, InMemoryDbClient, SqlDbClient
from contacts_api.storage import InMemoryStorageClient, S3StorageClient, StorageClient

logger = logging.getLogger(__name__)

_db_client: DbClient | None = None
_storage_client: StorageClient | None = None
_storage_resolved = False


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so the engine and its pool are shared across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        logger.info("USE_IN_MEMORY_BACKENDS set, using in-memory contact store")
        _db_client = InMemoryDbClient()
    elif not settings.db_url:
        logger.warning("DB_URL not set, using in-memory contact store")
        _db_client = InMemoryDbClient()
    else:
        _db_client = SqlDbClient(settings.db_url)
    return _db_client


def get_storage_client() -> Optional[StorageClient]:
    """
    Return the avatar storage client, or None when storage is not configured.
    """
    global _storage_client, _storage_resolved
    if _storage_resolved:
        return _storage_client

    settings = get_settings()
    if settings.use_in_memory_backends:
        _storage_client = InMemoryStorageClient()
    elif not settings.storage_configured:
        logger.warning("Object storage not configured, avatar endpoints disabled")
        _storage_client = None
    else:
        _storage_client = S3StorageClient(
            bucket=settings.oci_bucket_name or "",
            region=settings.oci_s3_region or "",
            endpoint=settings.oci_s3_endpoint or "",
            access_key_id=settings.oci_s3_access_key or "",
            secret_access_key=settings.oci_s3_secret_key or "",
        )
    _storage_resolved = True
    return _storage_client


def reset_clients() -> None:
    """Forget cached clients so the next request rebuilds them from settings."""
    global _db_client, _storage_client, _storage_resolved
    _db_client = None
    _storage_client = None
    _storage_resolved = False
