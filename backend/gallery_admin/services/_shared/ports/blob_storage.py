from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class BlobStorage(Protocol):
    """Port for the object store holding uploaded image bytes."""

    def put(self, data: bytes, key: str, content_type: str) -> str:
        """Store ``data`` under ``key``. :returns: Public URL of the object."""

    def delete(self, key: str) -> None:
        """Remove the object. Deleting a missing key is not an error."""


@dataclass(slots=True)
class StoredBlob:
    data: bytes
    content_type: str


class InMemoryBlobStorage(BlobStorage):
    """Dictionary-backed storage for tests and local runs without S3."""

    def __init__(self, base_url: str = "https://blobs.test") -> None:
        self.base_url = base_url.rstrip("/")
        self.objects: dict[str, StoredBlob] = {}

    def put(self, data: bytes, key: str, content_type: str) -> str:
        self.objects[key] = StoredBlob(data=data, content_type=content_type)
        return f"{self.base_url}/{key}"

    def delete(self, key: str) -> None:
        self.objects.pop(key, None)
