"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3
from botocore.config import Config as BotoConfig

from core.config import Config, get_config


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
        Metadata: Mapping[str, str],
    ) -> Any: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (repository-facing)."""

    bucket: str

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(self, config: Config | None = None) -> None:
        """Create S3 client from injected configuration."""
        config = config or get_config()

        self.bucket = config.images_bucket
        self._client: _Boto3S3Client = boto3.client(
            "s3",
            endpoint_url=config.endpoint_url,
            region_name=config.aws_region,
            config=BotoConfig(
                connect_timeout=config.connect_timeout,
                read_timeout=config.read_timeout,
                # Uploads are never retried; a timeout surfaces to the caller
                retries={"mode": "standard", "total_max_attempts": 1},
            ),
        )

    def put_object(
        self,
        *,
        key: str,
        body: bytes,
        content_type: str,
        metadata: dict[str, str],
    ) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        self._client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
            Metadata=metadata,
        )
