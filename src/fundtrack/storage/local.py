"""Filesystem-backed blob store.

Each bucket is a directory under the storage root. Buckets are never created
implicitly by an upload, so a missing directory behaves like a missing
bucket on a hosted object store.
"""

import os
from pathlib import Path
from typing import Iterable, Optional

import structlog

from fundtrack.domain.errors import StorageDegraded, StorageFailure
from fundtrack.storage.base import BlobStore

logger = structlog.get_logger(__name__)

DEFAULT_BUCKETS = ("receipts", "vouchers")


class LocalBlobStore(BlobStore):
    """Blob store writing objects below a root directory."""

    def __init__(self, root: str | Path, base_url: Optional[str] = None):
        """Initialize local blob store.

        Args:
            root: Directory containing one sub-directory per bucket
            base_url: Optional URL prefix for public URLs. When omitted,
                ``file://`` URIs are returned.
        """
        self.root = Path(root)
        self.base_url = base_url.rstrip("/") if base_url else None

    def create_bucket(self, bucket: str) -> None:
        (self.root / bucket).mkdir(parents=True, exist_ok=True)

    async def upload(self, bucket: str, path: str, data: bytes, content_type: str | None = None) -> None:
        bucket_dir = self.root / bucket
        if not bucket_dir.is_dir():
            raise StorageDegraded(f"Bucket '{bucket}' not found")

        target = (bucket_dir / path).resolve()
        if bucket_dir.resolve() not in target.parents:
            raise StorageFailure(f"Invalid object path '{path}'")
        if target.exists():
            raise StorageFailure(f"Object '{path}' already exists in bucket '{bucket}'")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageFailure(f"Could not write object '{path}': {exc}") from exc

        logger.debug("blob_uploaded", bucket=bucket, path=path, size=len(data))

    def public_url(self, bucket: str, path: str) -> str:
        if self.base_url is not None:
            return f"{self.base_url}/{bucket}/{path}"
        return (self.root / bucket / path).resolve().as_uri()


def create_local_blob_store(
    storage_path: Optional[str] = None,
    buckets: Iterable[str] = DEFAULT_BUCKETS,
) -> LocalBlobStore:
    """Create a local blob store with its buckets.

    Args:
        storage_path: Storage root. If None, checks FUNDTRACK_STORAGE_PATH
            environment variable, then defaults to ~/.fundtrack/storage
        buckets: Buckets to create if they do not exist yet

    Returns:
        LocalBlobStore instance
    """
    if storage_path is None:
        storage_path = os.environ.get("FUNDTRACK_STORAGE_PATH")

    if storage_path is None:
        storage_path = str(Path.home() / ".fundtrack" / "storage")

    store = LocalBlobStore(storage_path, base_url=os.environ.get("FUNDTRACK_STORAGE_URL"))
    for bucket in buckets:
        store.create_bucket(bucket)
    return store
