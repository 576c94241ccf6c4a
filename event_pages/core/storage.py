# Blob storage

import asyncio
from typing import Protocol

import boto3
import structlog

from event_pages.core.config import settings

logger = structlog.get_logger()

# Process-wide S3 client, created on first upload
_s3_client = None


def get_s3_client():
    global _s3_client
    if _s3_client is None:
        _s3_client = boto3.client("s3", region_name=settings.aws_region)
        logger.info("s3_client_initialized", region=settings.aws_region)
    return _s3_client


class BlobStore(Protocol):
    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        """Store data under key and return its public URL"""
        ...


class S3BlobStore:
    """Uploads objects to a single S3 bucket"""

    def __init__(
            self,
            bucket: str,
            base_url: str,
            cache_control: str = "max-age=31536000",
            public_read: bool = True,
            client=None
    ):
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.cache_control = cache_control
        self.public_read = public_read
        self._client = client

    @property
    def client(self):
        return self._client or get_s3_client()

    def public_url(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def _put_object(self, key: str, data: bytes, content_type: str) -> None:
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": data,
            "ContentType": content_type,
            "CacheControl": self.cache_control,
        }
        if self.public_read:
            params["ACL"] = "public-read"
        self.client.put_object(**params)

    async def upload(self, key: str, data: bytes, content_type: str) -> str:
        # boto3 is blocking; a cancelled caller does not stop the thread
        await asyncio.to_thread(self._put_object, key, data, content_type)
        return self.public_url(key)


_blob_store: S3BlobStore | None = None


def get_blob_store() -> BlobStore:
    """Dependency for getting the configured blob store"""
    global _blob_store
    if _blob_store is None:
        _blob_store = S3BlobStore(
            bucket=settings.blob_bucket,
            base_url=settings.public_asset_base_url,
            cache_control=settings.asset_cache_control,
            public_read=settings.asset_public_read,
        )
    return _blob_store
