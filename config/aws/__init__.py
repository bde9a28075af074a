"""Object storage configuration values."""

from __future__ import annotations

import os
from typing import Dict

from config.environment import ENVIRONMENT

_ENVIRONMENT_DEFAULTS: Dict[str, Dict[str, str]] = {
    "production": {
        "aws_region": "eu-central-1",
        "audio_bucket": "story_assets",
        "audio_prefix": "audio",
    },
    "development": {
        "aws_region": "eu-central-1",
        "audio_bucket": "story_assets_dev",
        "audio_prefix": "audio",
    },
    "test": {
        "aws_region": "us-east-1",
        "audio_bucket": "story_assets_test",
        "audio_prefix": "audio",
    },
}

_defaults = _ENVIRONMENT_DEFAULTS.get(ENVIRONMENT, _ENVIRONMENT_DEFAULTS["development"])

AWS_REGION = os.getenv("AWS_REGION", _defaults["aws_region"])
STORY_AUDIO_BUCKET = os.getenv("STORY_AUDIO_BUCKET", _defaults["audio_bucket"])
STORY_AUDIO_PREFIX = os.getenv("STORY_AUDIO_PREFIX", _defaults["audio_prefix"])
# S3-compatible endpoint (e.g. Supabase Storage, MinIO); empty means AWS itself.
STORAGE_ENDPOINT_URL = os.getenv("STORAGE_ENDPOINT_URL", "")
# Prefix used to build public object URLs; required with a custom endpoint.
STORAGE_PUBLIC_BASE_URL = os.getenv("STORAGE_PUBLIC_BASE_URL", "")

__all__ = [
    "AWS_REGION",
    "STORAGE_ENDPOINT_URL",
    "STORAGE_PUBLIC_BASE_URL",
    "STORY_AUDIO_BUCKET",
    "STORY_AUDIO_PREFIX",
]
