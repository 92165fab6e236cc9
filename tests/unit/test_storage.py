"""Tests for the S3 bucket wrapper, run against moto."""

from typing import Any
from urllib.parse import parse_qs, urlsplit
from uuid import uuid4

import pytest
from botocore.exceptions import ClientError

from src.atelier.core.exceptions import UploadError
from src.atelier.core.storage import ObjectStorage, build_object_path

pytestmark = pytest.mark.unit


def read_object(s3_client: Any, key: str) -> bytes:
    return s3_client.get_object(Bucket="projects", Key=key)["Body"].read()


class TestObjectPath:
    def test_keeps_extension_under_project_folder(self):
        project_id = uuid4()
        path = build_object_path(project_id, "Brief.PDF")
        folder, name = path.split("/")
        assert folder == str(project_id)
        assert name.endswith(".pdf")
        assert len(name) == len("0123abcd.pdf")

    def test_no_extension_defaults_to_bin(self):
        assert build_object_path(uuid4(), "README").endswith(".bin")

    def test_paths_are_random(self):
        project_id = uuid4()
        assert build_object_path(project_id, "a.png") != build_object_path(project_id, "a.png")


class TestUpload:
    async def test_upload_puts_object(self, storage: ObjectStorage, s3_client: Any):
        path = await storage.upload("p/a.txt", b"hello", "text/plain")

        assert path == "p/a.txt"
        assert read_object(s3_client, "p/a.txt") == b"hello"
        head = s3_client.head_object(Bucket="projects", Key="p/a.txt")
        assert head["ContentType"] == "text/plain"
        assert await storage.exists("p/a.txt")

    async def test_existing_path_without_upsert_fails(
        self, storage: ObjectStorage, s3_client: Any
    ):
        await storage.upload("p/a.txt", b"one")

        with pytest.raises(UploadError, match="already exists"):
            await storage.upload("p/a.txt", b"two")
        assert read_object(s3_client, "p/a.txt") == b"one"

    async def test_upsert_overwrites(self, storage: ObjectStorage, s3_client: Any):
        await storage.upload("p/a.txt", b"one")
        await storage.upload("p/a.txt", b"two", upsert=True)
        assert read_object(s3_client, "p/a.txt") == b"two"

    @pytest.mark.parametrize("path", ["", "/etc/passwd", "../escape.txt", "p/../../x"])
    async def test_invalid_paths_rejected(self, storage: ObjectStorage, path: str):
        with pytest.raises(UploadError, match="Invalid object path"):
            await storage.upload(path, b"x")

    async def test_missing_bucket_is_an_upload_error(self, s3_client: Any):
        storage = ObjectStorage("no-such-bucket", region_name="us-east-1")

        with pytest.raises(UploadError, match="Failed to store"):
            await storage.upload("p/a.txt", b"x")


class TestReads:
    async def test_missing_object(self, storage: ObjectStorage):
        assert not await storage.exists("p/gone.txt")
        with pytest.raises(UploadError, match="not found"):
            await storage.download("p/gone.txt")

    async def test_download(self, storage: ObjectStorage):
        await storage.upload("p/a.txt", b"hello")
        assert await storage.download("p/a.txt") == b"hello"


class TestSignedUrls:
    def test_presigned_get_for_key(self, storage: ObjectStorage):
        url = storage.create_signed_url("p/a.txt", 60)

        parts = urlsplit(url)
        query = parse_qs(parts.query)
        assert parts.path.endswith("/p/a.txt")
        assert query["X-Amz-Expires"] == ["60"]
        assert "X-Amz-Signature" in query

    def test_default_lifetime_is_one_hour(self, storage: ObjectStorage):
        query = parse_qs(urlsplit(storage.create_signed_url("p/a.txt")).query)
        assert query["X-Amz-Expires"] == ["3600"]

    def test_non_positive_lifetime_rejected(self, storage: ObjectStorage):
        with pytest.raises(UploadError):
            storage.create_signed_url("p/a.txt", 0)


class TestHealthcheck:
    def test_existing_bucket(self, storage: ObjectStorage):
        storage.healthcheck()

    def test_missing_bucket_raises(self, s3_client: Any):
        with pytest.raises(ClientError):
            ObjectStorage("no-such-bucket", region_name="us-east-1").healthcheck()
