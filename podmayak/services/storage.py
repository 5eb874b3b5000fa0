"""
Blob storage for project images.

Two backends share one async interface: the local filesystem (served by the
app under /static/uploads) and an S3-compatible bucket such as Cloudflare
R2. boto3 and file IO are blocking, so every call runs in a worker thread.
"""
import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from podmayak.core.errors import BlobNotFoundError, StorageError

logger = logging.getLogger(__name__)

LOCAL_URL_PREFIX = "/static/uploads"


@dataclass(frozen=True)
class StoredBlob:
    id: str
    url: str


def _blob_id(filename: str) -> str:
    return f"{uuid.uuid4().hex}_{filename}"


class BlobStore:
    """Interface shared by the storage backends"""

    async def put(self, data: bytes, filename: str, content_type: str = "image/png") -> StoredBlob:
        raise NotImplementedError

    async def read(self, blob_id: str) -> bytes:
        raise NotImplementedError

    async def delete(self, blob_id: str) -> None:
        raise NotImplementedError

    def url_for(self, blob_id: str) -> str:
        raise NotImplementedError

    def id_for_url(self, url: str) -> Optional[str]:
        """Blob id behind a view URL this store produced, or None for foreign URLs"""
        raise NotImplementedError


class LocalBlobStore(BlobStore):
    """Stores blobs as files under `root`"""

    def __init__(self, root: str, url_prefix: str = LOCAL_URL_PREFIX):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")
        self.root.mkdir(parents=True, exist_ok=True)

    def _path(self, blob_id: str) -> Path:
        path = (self.root / blob_id).resolve()
        if path.parent != self.root.resolve():
            raise StorageError(f"Invalid blob id: {blob_id}")
        return path

    async def put(self, data: bytes, filename: str, content_type: str = "image/png") -> StoredBlob:
        blob_id = _blob_id(filename)
        try:
            await asyncio.to_thread(self._path(blob_id).write_bytes, data)
        except OSError as e:
            raise StorageError(f"Failed to write blob {blob_id}: {e}") from e
        logger.info(f"Stored blob {blob_id} ({len(data)} bytes)")
        return StoredBlob(id=blob_id, url=self.url_for(blob_id))

    async def read(self, blob_id: str) -> bytes:
        path = self._path(blob_id)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise BlobNotFoundError(f"Blob not found: {blob_id}") from e

    async def delete(self, blob_id: str) -> None:
        path = self._path(blob_id)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError as e:
            raise BlobNotFoundError(f"Blob not found: {blob_id}") from e

    def url_for(self, blob_id: str) -> str:
        return f"{self.url_prefix}/{blob_id}"

    def id_for_url(self, url: str) -> Optional[str]:
        prefix = f"{self.url_prefix}/"
        if url.startswith(prefix):
            return url[len(prefix):]
        return None


class S3BlobStore(BlobStore):
    """Stores blobs in an S3-compatible bucket (Cloudflare R2 in production)"""

    def __init__(
        self,
        bucket: str,
        endpoint_url: str,
        access_key_id: str,
        secret_access_key: str,
        region: str = "auto",
        public_base_url: str = "",
        prefix: str = "renovations",
        client=None,
    ):
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")
        self.prefix = prefix.strip("/")
        self.client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url or None,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
            config=Config(signature_version="s3v4"),
        )

    def _key(self, blob_id: str) -> str:
        return f"{self.prefix}/{blob_id}"

    async def put(self, data: bytes, filename: str, content_type: str = "image/png") -> StoredBlob:
        blob_id = _blob_id(filename)
        try:
            await asyncio.to_thread(
                self.client.put_object,
                Bucket=self.bucket,
                Key=self._key(blob_id),
                Body=data,
                ContentType=content_type,
                CacheControl="public, max-age=31536000, immutable",
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"Failed to upload blob {blob_id}: {e}") from e
        logger.info(f"Uploaded blob {blob_id} to bucket {self.bucket} ({len(data)} bytes)")
        return StoredBlob(id=blob_id, url=self.url_for(blob_id))

    async def read(self, blob_id: str) -> bytes:
        try:
            response = await asyncio.to_thread(self.client.get_object, Bucket=self.bucket, Key=self._key(blob_id))
            return await asyncio.to_thread(response["Body"].read)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise BlobNotFoundError(f"Blob not found: {blob_id}") from e
            raise StorageError(f"Failed to read blob {blob_id}: {e}") from e

    async def delete(self, blob_id: str) -> None:
        try:
            await asyncio.to_thread(self.client.delete_object, Bucket=self.bucket, Key=self._key(blob_id))
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in ("NoSuchKey", "404"):
                raise BlobNotFoundError(f"Blob not found: {blob_id}") from e
            raise StorageError(f"Failed to delete blob {blob_id}: {e}") from e

    def url_for(self, blob_id: str) -> str:
        key = self._key(blob_id)
        return f"{self.public_base_url}/{key}" if self.public_base_url else key

    def id_for_url(self, url: str) -> Optional[str]:
        prefix = f"{self.public_base_url}/{self.prefix}/" if self.public_base_url else f"{self.prefix}/"
        if url.startswith(prefix):
            return url[len(prefix):]
        return None


def build_blob_store(settings) -> BlobStore:
    """Backend selected by `settings.storage_backend`"""
    if settings.storage_backend == "s3":
        if not settings.s3_bucket:
            raise StorageError("S3 storage selected but S3_BUCKET is not set")
        logger.info(f"Using S3 blob store: bucket={settings.s3_bucket}")
        return S3BlobStore(
            bucket=settings.s3_bucket,
            endpoint_url=settings.s3_endpoint_url,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
            region=settings.s3_region,
            public_base_url=settings.public_base_url,
        )

    logger.info(f"Using local blob store at {settings.upload_path}")
    return LocalBlobStore(settings.upload_path)
