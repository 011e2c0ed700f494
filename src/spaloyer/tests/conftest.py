"""Shared fixtures for the spaloyer test suite."""

from pathlib import Path
from typing import Dict

import pytest
from botocore.exceptions import ClientError

from spaloyer.core.config import TransferConfig
from spaloyer.core.exceptions import BucketAlreadyExists
from spaloyer.core.S3Singleton import S3Singleton


def client_error(code: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class FakeStore:
    """In-memory object store recording buckets and uploaded objects."""

    def __init__(self, fail_on_key: str = None, bucket_error: Exception = None):
        self.fail_on_key = fail_on_key
        self.bucket_error = bucket_error
        self.buckets = set()
        self.objects: Dict[str, Dict[str, bytes]] = {}
        self.content_types = {}
        self.uploaded_keys = []

    def create_bucket(self, name, region):
        if self.bucket_error is not None:
            raise self.bucket_error
        if name in self.buckets:
            raise BucketAlreadyExists(f"Bucket {name} already exists", {"bucket": name})
        self.buckets.add(name)
        self.objects[name] = {}

    def put_object(self, bucket, key, reader, size, content_type):
        if key == self.fail_on_key:
            raise client_error("AccessDenied", "PutObject")
        data = reader.read()
        self.objects.setdefault(bucket, {})[key] = data
        self.content_types[key] = content_type
        self.uploaded_keys.append(key)
        return len(data)


def make_tree(root: Path, files: Dict[str, bytes]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def sample_tree(tmp_path) -> Path:
    return make_tree(tmp_path / "dist", {
        "a.txt": b"hello",
        "sub/b.txt": b"0123456789",
        ".DS_Store": b"mac",
    })


@pytest.fixture
def sample_config(sample_tree) -> TransferConfig:
    return TransferConfig(data_path=str(sample_tree), bucket_name="assets")


@pytest.fixture(autouse=True)
def reset_s3_singleton():
    S3Singleton.reset()
    yield
    S3Singleton.reset()
