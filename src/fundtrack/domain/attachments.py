"""Attachment upload policy shared by purchases and income.

Uploads happen before the row write. A missing or misconfigured bucket is
not fatal: the parent operation continues without an attachment. Any other
storage error aborts the parent operation.
"""

import secrets
import string
from datetime import datetime, UTC
from typing import Optional

import structlog

from fundtrack.domain.errors import StorageDegraded, StorageFailure
from fundtrack.domain.payloads import Attachment
from fundtrack.storage.base import BlobStore

logger = structlog.get_logger(__name__)

RECEIPTS_BUCKET = "receipts"
VOUCHERS_BUCKET = "vouchers"

_DEGRADED_MARKERS = ("bucket", "not found")
_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


def object_path(user_id: Optional[int], attachment: Attachment, now: Optional[datetime] = None) -> str:
    """Build ``<user>/<epoch ms>-<random>.<ext>`` for an upload."""
    now = now or datetime.now(UTC)
    stamp = int(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return f"{user_id}/{stamp}-{suffix}.{attachment.extension}"


def is_degraded(error: Exception) -> bool:
    """Whether an upload error means the bucket is missing or misconfigured.

    Typed errors decide for themselves; the message is only consulted for
    untyped ones.
    """
    if isinstance(error, StorageDegraded):
        return True
    if isinstance(error, StorageFailure):
        return False
    message = str(error).lower()
    return any(marker in message for marker in _DEGRADED_MARKERS)


async def upload_attachment(
    blob_store: Optional[BlobStore],
    bucket: str,
    user_id: Optional[int],
    attachment: Attachment,
) -> Optional[str]:
    """Upload an attachment and return its public URL.

    Returns:
        Public URL, or None when storage is degraded

    Raises:
        StorageFailure: If the upload failed for any other reason
    """
    if blob_store is None:
        logger.warning("attachment_upload_degraded", bucket=bucket, reason="no blob store configured")
        return None

    path = object_path(user_id, attachment)
    try:
        await blob_store.upload(bucket, path, attachment.content, attachment.content_type)
    except Exception as exc:
        if is_degraded(exc):
            logger.warning("attachment_upload_degraded", bucket=bucket, path=path, reason=str(exc))
            return None
        logger.error("attachment_upload_failed", bucket=bucket, path=path, reason=str(exc))
        if isinstance(exc, StorageFailure):
            raise
        raise StorageFailure(str(exc)) from exc

    return blob_store.public_url(bucket, path)
