"""Service objects for persisting narration audio to S3-compatible storage."""

from __future__ import annotations

import asyncio
import logging
import re
import time
import uuid
from pathlib import Path
from typing import Any
from urllib.parse import quote

from botocore.exceptions import BotoCoreError, ClientError

from config.aws import (
    AWS_REGION,
    STORAGE_ENDPOINT_URL,
    STORAGE_PUBLIC_BASE_URL,
    STORY_AUDIO_BUCKET,
    STORY_AUDIO_PREFIX,
)
from core.exceptions import ConfigurationError, StorageError, UrlResolutionError

from .clients import get_s3_client

logger = logging.getLogger(__name__)

_DNS_COMPATIBLE_BUCKET = re.compile(r"^[a-z0-9][a-z0-9-]{1,61}[a-z0-9]$")


def _normalise_filename(filename: str) -> str:
    """Return a storage-safe filename preserving the original extension."""

    candidate = Path(filename or "audio.bin").name
    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", candidate)
    return safe_name or "audio.bin"


def _is_precondition_failure(exc: ClientError) -> bool:
    code = str(exc.response.get("Error", {}).get("Code", ""))
    return code in {"PreconditionFailed", "412", "ConditionalRequestConflict"}


class StorageService:
    """Handle uploads of generated narration audio to object storage.

    Two upload policies exist side by side:

    * :meth:`store` writes the merged story narration under a fresh UUID key
      and refuses to overwrite (``If-None-Match: *``).
    * :meth:`upload_bytes` is the simpler helper used by the single-shot path;
      it namespaces the caller's filename with a timestamp and overwrites
      whatever is stored under that key.
    """

    def __init__(
        self,
        *,
        bucket_name: str | None = None,
        s3_client: Any | None = None,
        region: str | None = None,
        endpoint_url: str | None = None,
        public_base_url: str | None = None,
        key_prefix: str | None = None,
    ) -> None:
        client = s3_client or get_s3_client()
        if client is None:
            raise ConfigurationError("S3 client not initialised", key="AWS credentials")

        self._s3_client = client
        resolved_bucket = bucket_name or STORY_AUDIO_BUCKET
        if not resolved_bucket:
            raise ConfigurationError("STORY_AUDIO_BUCKET must be configured", key="STORY_AUDIO_BUCKET")
        self._bucket_name = resolved_bucket
        self._region = AWS_REGION if region is None else region
        self._endpoint_url = STORAGE_ENDPOINT_URL if endpoint_url is None else endpoint_url
        self._public_base_url = STORAGE_PUBLIC_BASE_URL if public_base_url is None else public_base_url
        self._key_prefix = (STORY_AUDIO_PREFIX if key_prefix is None else key_prefix).strip("/")

        logger.debug("StorageService initialised", extra={"bucket": self._bucket_name})

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    async def store(
        self,
        artifact_bytes: bytes,
        content_type: str,
        *,
        extension: str = "mp3",
    ) -> str:
        """Upload a finished narration under a new unique key and return its URL."""

        key = self.build_artifact_key(extension)
        logger.info(
            "Uploading narration artifact to bucket=%s key=%s size=%s",
            self._bucket_name,
            key,
            len(artifact_bytes or b""),
        )
        await self._put_object(key=key, body=artifact_bytes, content_type=content_type, upsert=False)

        url = self.public_url(key)
        logger.info("Narration artifact uploaded successfully to %s", url)
        return url

    async def upload_bytes(self, object_name_hint: str, data: bytes, content_type: str) -> str:
        """Upload ``data`` under a timestamp-namespaced key derived from the hint."""

        key = self.build_upload_key(object_name_hint)
        logger.info(
            "Uploading audio to bucket=%s key=%s content_type=%s",
            self._bucket_name,
            key,
            content_type,
        )
        await self._put_object(key=key, body=data, content_type=content_type, upsert=True)

        url = self.public_url(key)
        logger.info("Audio uploaded successfully to %s", url)
        return url

    def build_artifact_key(self, extension: str) -> str:
        """Return ``<prefix>/<uuid>.<extension>``."""

        filename = f"{uuid.uuid4()}.{extension.lstrip('.') or 'bin'}"
        return f"{self._key_prefix}/{filename}" if self._key_prefix else filename

    def build_upload_key(self, object_name_hint: str) -> str:
        """Return ``<epoch_ms>_<random>_<safe name>`` for the single-shot helper."""

        timestamp = int(time.time() * 1000)
        random_part = uuid.uuid4().hex[:8]
        return f"{timestamp}_{random_part}_{_normalise_filename(object_name_hint)}"

    def public_url(self, key: str) -> str:
        """Return the public URL for ``key``."""

        if not key:
            raise UrlResolutionError("Cannot resolve a public URL without an object key", key=key)

        quoted_key = quote(key, safe="/")
        if self._public_base_url:
            return f"{self._public_base_url.rstrip('/')}/{quoted_key}"

        if self._endpoint_url:
            # Custom endpoints do not share the AWS public URL layout.
            raise UrlResolutionError(
                "STORAGE_PUBLIC_BASE_URL must be configured for custom storage endpoints",
                key=key,
            )

        if not _DNS_COMPATIBLE_BUCKET.match(self._bucket_name):
            host = f"s3.{self._region}.amazonaws.com" if self._region else "s3.amazonaws.com"
            return f"https://{host}/{self._bucket_name}/{quoted_key}"
        if self._region:
            return f"https://{self._bucket_name}.s3.{self._region}.amazonaws.com/{quoted_key}"
        return f"https://{self._bucket_name}.s3.amazonaws.com/{quoted_key}"

    async def _put_object(self, *, key: str, body: bytes, content_type: str, upsert: bool) -> None:
        if not body:
            raise StorageError("Cannot upload empty audio payload", bucket=self._bucket_name, key=key)

        put_kwargs: dict[str, Any] = {
            "Bucket": self._bucket_name,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if not upsert:
            put_kwargs["IfNoneMatch"] = "*"

        try:
            await asyncio.to_thread(self._s3_client.put_object, **put_kwargs)
        except ClientError as exc:
            if not upsert and _is_precondition_failure(exc):
                message = f"Storage object already exists: {key}"
            else:
                message = f"Storage upload error: {exc}"
            raise StorageError(message, bucket=self._bucket_name, key=key, original_error=exc) from exc
        except BotoCoreError as exc:
            raise StorageError(
                f"Storage upload error: {exc}",
                bucket=self._bucket_name,
                key=key,
                original_error=exc,
            ) from exc


__all__ = ["StorageService"]
