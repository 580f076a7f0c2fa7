from __future__ import annotations

import logging
from typing import Any

from gallery_admin.services._shared.ports.blob_storage import BlobStorage

logger = logging.getLogger(__name__)


class S3BlobStorage(BlobStorage):
    """
    Amazon S3 adapter for image bytes.

    :param client: A boto3 S3 client.
    :param bucket: Target bucket name.
    :param region: Bucket region, used to build the public URL.
    """

    def __init__(self, client: Any, *, bucket: str, region: str) -> None:
        self.client = client
        self.bucket = bucket
        self.region = region

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def put(self, data: bytes, key: str, content_type: str) -> str:
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data, ContentType=content_type)
        logger.info("s3.put", extra={"path": key})
        return self.public_url(key)

    def delete(self, key: str) -> None:
        self.client.delete_object(Bucket=self.bucket, Key=key)
        logger.info("s3.delete", extra={"path": key})
