"""Object storage - a bucket of files addressed by relative path.

Backed by any S3-compatible service (AWS S3, MinIO, ...). Downloads go
through presigned ``get_object`` URLs, so file bytes never pass through
the API process.
"""

import asyncio
import secrets
from functools import lru_cache
from pathlib import PurePosixPath
from typing import Any
from uuid import UUID

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from src.atelier.core.config import get_settings
from src.atelier.core.exceptions import UploadError
from src.atelier.core.logging import get_logger

logger = get_logger(__name__)

_MISSING_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


def build_object_path(project_id: UUID, filename: str) -> str:
    """Random object path inside the project's folder, keeping the file extension."""
    suffix = PurePosixPath(filename).suffix.lstrip(".").lower() or "bin"
    return f"{project_id}/{secrets.token_hex(4)}.{suffix}"


def _is_missing(error: ClientError) -> bool:
    return str(error.response.get("Error", {}).get("Code")) in _MISSING_CODES


class ObjectStorage:
    """One S3 bucket.

    The boto3 client is created on first use. Its calls are blocking, so the
    async methods run them in a worker thread.
    """

    def __init__(
        self,
        bucket: str,
        endpoint_url: str | None = None,
        region_name: str = "us-east-1",
        credentials: dict[str, Any] | None = None,
    ):
        self.bucket = bucket
        self._endpoint_url = endpoint_url
        self._region_name = region_name
        self._credentials = credentials or {}
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            config = Config(
                signature_version="s3v4",
                retries={"max_attempts": 3, "mode": "adaptive"},
                connect_timeout=10,
                read_timeout=60,
            )
            self._client = boto3.client(
                "s3",
                endpoint_url=self._endpoint_url,
                region_name=self._region_name,
                config=config,
                **self._credentials,
            )
        return self._client

    @staticmethod
    def _validate(path: str) -> str:
        relative = PurePosixPath(path)
        if not path or relative.is_absolute() or ".." in relative.parts:
            raise UploadError(f"Invalid object path: {path!r}")
        return path

    def _head(self, key: str) -> bool:
        try:
            self._get_client().head_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            if _is_missing(e):
                return False
            raise
        return True

    def _put(self, key: str, data: bytes, content_type: str | None, upsert: bool) -> None:
        if not upsert and self._head(key):
            raise UploadError(f"Object already exists: {key}")
        params: dict[str, Any] = {"Bucket": self.bucket, "Key": key, "Body": data}
        if content_type:
            params["ContentType"] = content_type
        self._get_client().put_object(**params)

    async def upload(
        self,
        path: str,
        data: bytes,
        content_type: str | None = None,
        upsert: bool = False,
    ) -> str:
        """Store ``data`` at ``path`` and return the stored path.

        Raises:
            UploadError: The path exists and ``upsert`` is False, or the put failed.
        """
        key = self._validate(path)
        try:
            await asyncio.to_thread(self._put, key, data, content_type, upsert)
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to store object {path}: {e}") from e

        logger.info(
            "Object stored",
            bucket=self.bucket,
            path=path,
            size=len(data),
            content_type=content_type,
        )
        return path

    async def exists(self, path: str) -> bool:
        key = self._validate(path)
        try:
            return await asyncio.to_thread(self._head, key)
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to look up object {path}: {e}") from e

    async def download(self, path: str) -> bytes:
        """Read an object's bytes.

        Raises:
            UploadError: The object does not exist or the read failed.
        """
        key = self._validate(path)

        def _get() -> bytes:
            response = self._get_client().get_object(Bucket=self.bucket, Key=key)
            return response["Body"].read()

        try:
            return await asyncio.to_thread(_get)
        except ClientError as e:
            if _is_missing(e):
                raise UploadError(f"Object not found: {path}") from e
            raise UploadError(f"Failed to read object {path}: {e}") from e
        except BotoCoreError as e:
            raise UploadError(f"Failed to read object {path}: {e}") from e

    def create_signed_url(self, path: str, expires_in: int | None = None) -> str:
        """Presigned GET URL for ``path``, valid for ``expires_in`` seconds."""
        if expires_in is None:
            expires_in = get_settings().signed_url_expire_seconds
        if expires_in <= 0:
            raise UploadError("Signed URL lifetime must be positive")
        key = self._validate(path)
        try:
            return self._get_client().generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise UploadError(f"Failed to sign URL for {path}: {e}") from e

    def healthcheck(self) -> None:
        """Raise if the bucket is unreachable."""
        self._get_client().head_bucket(Bucket=self.bucket)


@lru_cache
def get_storage() -> ObjectStorage:
    """Storage singleton built from settings."""
    settings = get_settings()
    credentials: dict[str, Any] = {}
    if settings.storage_access_key_id and settings.storage_secret_access_key:
        credentials = {
            "aws_access_key_id": settings.storage_access_key_id,
            "aws_secret_access_key": settings.storage_secret_access_key,
        }
    return ObjectStorage(
        settings.storage_bucket,
        endpoint_url=settings.storage_endpoint_url,
        region_name=settings.storage_region,
        credentials=credentials,
    )
