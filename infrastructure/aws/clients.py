"""Initialise the S3 client used by the infrastructure layer."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

import boto3
from botocore.config import Config as BotoConfig

logger = logging.getLogger(__name__)

_access_key = os.getenv("AWS_ACCESS_KEY_ID")
_secret_key = os.getenv("AWS_SECRET_ACCESS_KEY")


def _get_storage_settings() -> tuple[str, str]:
    """Get region and endpoint, importing lazily to avoid circular imports."""
    from config.aws import AWS_REGION, STORAGE_ENDPOINT_URL
    return AWS_REGION, STORAGE_ENDPOINT_URL


_region, _endpoint_url = _get_storage_settings()

# Uploads are not retried; a failed put surfaces to the caller immediately.
_boto_config = BotoConfig(
    region_name=_region,
    retries={"max_attempts": 1, "mode": "standard"},
    connect_timeout=10,
    read_timeout=60,
)

aws_clients: Dict[str, Any] = {}


def _build_client(service_name: str) -> Any:
    """Return a boto3 client for ``service_name`` using static credentials."""

    return boto3.client(
        service_name,
        aws_access_key_id=_access_key or None,
        aws_secret_access_key=_secret_key or None,
        endpoint_url=_endpoint_url or None,
        config=_boto_config,
    )


try:
    if _access_key and _secret_key:
        aws_clients["s3"] = _build_client("s3")
        logger.info("Initialised S3 client (endpoint=%s)", _endpoint_url or "aws")
    else:
        logger.warning("AWS credentials not found, S3 client not initialised")
except Exception as exc:  # pragma: no cover - rely on boto3 for correctness
    logger.error("Error initialising S3 client: %s", exc)
    raise


def get_s3_client() -> Any:
    """Return the cached S3 client or ``None`` when unavailable."""

    return aws_clients.get("s3")


__all__ = ["aws_clients", "get_s3_client"]
