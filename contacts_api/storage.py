"""
Storage abstraction for OCI Object Storage (S3-compatible) and in-memory testing.
"""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator, Optional, Protocol

import boto3
from botocore.config import Config

DEFAULT_CONTENT_TYPE = "application/octet-stream"
DEFAULT_CHUNK_SIZE = 64 * 1024


class StorageConfigError(ValueError):
    """Raised when the storage client is built from incomplete settings."""


class StorageObjectNotFoundError(LookupError):
    """Raised by the in-memory client when a key does not exist."""


@dataclass
class ObjectStream:
    """
    Readable handle on a stored object. The caller must close it.
    """

    body: BinaryIO
    content_type: Optional[str] = None
    content_length: Optional[int] = None

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        while True:
            chunk = self.body.read(chunk_size)
            if not chunk:
                break
            yield chunk

    def close(self) -> None:
        self.body.close()


class StorageClient(Protocol):
    """Defines the operations the API needs from object storage."""

    def upload(
        self, key: str, data: bytes, content_type: Optional[str] = None
    ) -> None:
        ...

    def download(self, key: str) -> bytes:
        ...

    def get_stream(self, key: str) -> ObjectStream:
        ...


@dataclass
class InMemoryStorageClient:
    """Test double for storage interactions."""

    stored_objects: dict[str, tuple[bytes, str]] = field(default_factory=dict)

    def upload(
        self, key: str, data: bytes, content_type: Optional[str] = None
    ) -> None:
        self.stored_objects[key] = (bytes(data), content_type or DEFAULT_CONTENT_TYPE)

    def download(self, key: str) -> bytes:
        stored = self.stored_objects.get(key)
        if stored is None:
            raise StorageObjectNotFoundError(key)
        return stored[0]

    def get_stream(self, key: str) -> ObjectStream:
        stored = self.stored_objects.get(key)
        if stored is None:
            raise StorageObjectNotFoundError(key)
        data, content_type = stored
        return ObjectStream(
            body=io.BytesIO(data),
            content_type=content_type,
            content_length=len(data),
        )


@dataclass
class S3StorageClient:
    """
    S3-compatible storage client for a single OCI Object Storage bucket.

    Errors from botocore are propagated unchanged.
    """

    bucket: str
    region: str
    endpoint: str
    access_key_id: str
    secret_access_key: str

    def __post_init__(self):
        missing = [
            name
            for name in (
                "endpoint",
                "region",
                "access_key_id",
                "secret_access_key",
                "bucket",
            )
            if not getattr(self, name)
        ]
        if missing:
            raise StorageConfigError(
                "missing required settings for S3-compatible storage: "
                + ", ".join(missing)
            )
        # OCI's compatibility API only supports path-style addressing.
        config = Config(
            s3={"addressing_style": "path"},
            signature_version="s3v4",
        )
        self._client = boto3.client(
            "s3",
            endpoint_url=self.endpoint,
            region_name=self.region,
            aws_access_key_id=self.access_key_id,
            aws_secret_access_key=self.secret_access_key,
            config=config,
        )

    def upload(
        self, key: str, data: bytes, content_type: Optional[str] = None
    ) -> None:
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=data,
            ContentType=content_type or DEFAULT_CONTENT_TYPE,
        )

    def download(self, key: str) -> bytes:
        response = self._client.get_object(Bucket=self.bucket, Key=key)
        body = response["Body"]
        try:
            return body.read()
        finally:
            body.close()

    def get_stream(self, key: str) -> ObjectStream:
        response = self._client.get_object(Bucket=self.bucket, Key=key)
        return ObjectStream(
            body=response["Body"],
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength"),
        )
