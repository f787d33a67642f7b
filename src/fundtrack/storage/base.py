"""Abstract blob storage interface."""

from abc import ABC, abstractmethod


class BlobStore(ABC):
    """Object storage for receipt and voucher files.

    Implementations raise ``StorageDegraded`` when a bucket is missing or
    misconfigured and ``StorageFailure`` for any other upload problem.
    """

    @abstractmethod
    async def upload(self, bucket: str, path: str, data: bytes, content_type: str | None = None) -> None:
        """Store ``data`` under ``path`` inside ``bucket``."""
        pass

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Return the retrieval URL for an uploaded object."""
        pass
