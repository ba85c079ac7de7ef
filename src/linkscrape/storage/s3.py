"""S3-compatible storage backend (AWS S3, Cloudflare R2, MinIO)."""

import asyncio
from typing import Any, Optional

import boto3

from linkscrape.core.interfaces import ObjectStore


class S3ObjectStore(ObjectStore):
    """Store objects in an S3-compatible bucket."""

    def __init__(
        self,
        bucket: str,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ) -> None:
        """Initialize the store.

        Args:
            bucket: Target bucket name.
            endpoint_url: Custom endpoint for S3-compatible services.
            client: Preconfigured boto3 S3 client. Created when omitted;
                credentials come from the standard AWS environment.
        """
        self._bucket = bucket
        self._client = client or boto3.client("s3", endpoint_url=endpoint_url)

    @property
    def name(self) -> str:
        return f"s3://{self._bucket}"

    async def put(
        self, key: str, data: bytes, content_type: str = "text/markdown"
    ) -> None:
        """Upload an object.

        boto3 is blocking, so the upload runs in a worker thread.
        """
        await asyncio.to_thread(
            self._client.put_object,
            Bucket=self._bucket,
            Key=key,
            Body=data,
            ContentType=content_type,
        )
