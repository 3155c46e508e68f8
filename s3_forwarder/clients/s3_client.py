# Copyright 2025 Loopper-AI
# AWS S3 client

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..exceptions import FetchError

logger = logging.getLogger(__name__)


class S3Client:
    """Client for reading notified objects from S3."""

    def __init__(self, client: Any = None):
        self._client = client or boto3.client("s3")

    def get_object_content(self, bucket: str, key: str) -> bytes:
        """
        Read the full body of an S3 object.

        Args:
            bucket: Bucket name from the notification record
            key: Decoded object key

        Returns:
            Object content as bytes

        Raises:
            FetchError: object missing or S3 unreachable
        """
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()

        except ClientError as e:
            code = e.response.get("Error", {}).get("Code")
            logger.error("S3 error [%s] bucket=%s key=%s: %s", code, bucket, key, e)
            raise FetchError(bucket=bucket, key=key, reason=str(e)) from e
        except BotoCoreError as e:
            logger.error("S3 transport error bucket=%s key=%s: %s", bucket, key, e)
            raise FetchError(bucket=bucket, key=key, reason=str(e)) from e
