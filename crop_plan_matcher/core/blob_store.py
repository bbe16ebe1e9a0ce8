"""Blob fetch/store boundary for the matcher.

The pipeline only ever needs two byte-level operations on object
storage: read a whole blob and overwrite a whole blob.  ``BlobStore``
captures that contract so the orchestrator can be driven by an
in-memory store in tests, and ``AzureBlobStore`` implements it on top
of ``azure.storage.blob``.

Failures are translated into the pipeline taxonomy:

- a missing blob raises ``BlobNotFoundError`` (permanent);
- any other read failure raises ``BlobFetchError`` (transient);
- any write failure raises ``BlobStoreError`` (transient).
"""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING, Protocol

from crop_plan_matcher.core.exceptions import ContractError, PermanentError, TransientError

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

logger = logging.getLogger("crop_plan_matcher.core.blob_store")


class BlobNotFoundError(PermanentError):
    """Raised when a requested blob does not exist."""

    default_stage = "blob_store"
    default_code = "BLOB_NOT_FOUND"


class BlobFetchError(TransientError):
    """Raised when a blob cannot be downloaded."""

    default_stage = "blob_store"
    default_code = "BLOB_FETCH_FAILED"


class BlobStoreError(TransientError):
    """Raised when a blob cannot be uploaded."""

    default_stage = "blob_store"
    default_code = "BLOB_STORE_FAILED"


class BlobStore(Protocol):
    """Byte-level access to a container/name keyed object store."""

    def fetch(self, container: str, name: str) -> bytes:
        """Return the full content of ``container/name``."""
        ...

    def store(self, container: str, name: str, data: bytes, content_type: str) -> None:
        """Create or fully overwrite ``container/name`` with *data*."""
        ...


class AzureBlobStore:
    """``BlobStore`` backed by an Azure ``BlobServiceClient``."""

    def __init__(self, blob_service_client: BlobServiceClient) -> None:
        self._client = blob_service_client

    def fetch(self, container: str, name: str) -> bytes:
        """Download ``container/name``.

        Raises:
            BlobNotFoundError: If the blob does not exist.
            BlobFetchError: On any other download failure.
        """
        from azure.core.exceptions import ResourceNotFoundError

        blob_client = self._client.get_blob_client(container=container, blob=name)
        try:
            data = blob_client.download_blob().readall()
        except ResourceNotFoundError as exc:
            msg = f"Blob not found: {container}/{name}"
            raise BlobNotFoundError(msg) from exc
        except Exception as exc:
            msg = f"Failed to download {container}/{name}: {exc}"
            raise BlobFetchError(msg) from exc

        logger.debug("Fetched blob | blob=%s/%s | size=%d", container, name, len(data))
        return data

    def store(self, container: str, name: str, data: bytes, content_type: str) -> None:
        """Upload *data* to ``container/name``, overwriting any existing blob.

        Raises:
            BlobStoreError: If the upload fails.
        """
        from azure.storage.blob import ContentSettings

        blob_client = self._client.get_blob_client(container=container, blob=name)
        try:
            blob_client.upload_blob(
                data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
        except Exception as exc:
            msg = f"Failed to upload {container}/{name}: {exc}"
            raise BlobStoreError(msg) from exc

        logger.debug(
            "Stored blob | blob=%s/%s | size=%d | content_type=%s",
            container,
            name,
            len(data),
            content_type,
        )


def get_blob_service_client() -> BlobServiceClient:
    """Create a ``BlobServiceClient`` from the ``AzureWebJobsStorage`` env var.

    Raises:
        ContractError: If the environment variable is not set.
    """
    from azure.storage.blob import BlobServiceClient

    connection_string = os.environ.get("AzureWebJobsStorage", "")  # noqa: SIM112
    if not connection_string:
        msg = "AzureWebJobsStorage environment variable is not set"
        raise ContractError(msg, stage="blob_store", code="MISSING_CONNECTION_STRING")

    return BlobServiceClient.from_connection_string(connection_string)
