"""
S3 object-store storage backend.
"""
import logging
from typing import Any, BinaryIO, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from exceptions import StorageError
from services.interfaces import IStorageBackend

logger = logging.getLogger(__name__)


def create_s3_client(region: str, endpoint_url: Optional[str] = None) -> Any:
    """
    S3 client using the standard AWS credential chain
    (AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY, profile, instance role).
    """
    return boto3.client(
        "s3",
        region_name=region,
        endpoint_url=endpoint_url,
    )


class S3StorageBackend(IStorageBackend):
    """
    Stores each asset with a single PutObject call.

    Payloads are bounded by the upload ceiling, so no multipart upload is
    needed. The locator is the virtual-hosted-style object URL.
    """

    def __init__(self, bucket: str, region: str, client: Any = None, endpoint_url: Optional[str] = None):
        self.bucket = bucket
        self.region = region
        self.client = client or create_s3_client(region, endpoint_url)

    def locator_for(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def commit(self, key: str, media_type: str, byte_source: BinaryIO) -> str:
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=byte_source,
                ContentType=media_type,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError('commit', f"Couldn't upload file to S3: {e}", key)

        logger.info(f"Committed {media_type} asset to s3://{self.bucket}/{key}")
        return self.locator_for(key)
