"""Blob storage layer for fundtrack."""

from fundtrack.storage.base import BlobStore
from fundtrack.storage.local import LocalBlobStore, create_local_blob_store

__all__ = ["BlobStore", "LocalBlobStore", "create_local_blob_store"]
