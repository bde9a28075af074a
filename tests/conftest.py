"""Test configuration helpers."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterator

import pytest

# Explicitly opt-in to the async plugins we rely on. Some execution environments
# disable plugin auto-discovery via ``PYTEST_DISABLE_PLUGIN_AUTOLOAD`` which
# prevents ``pytest-asyncio`` and AnyIO's plugin from loading even when the
# packages are installed.
pytest_plugins = ("anyio", "pytest_asyncio")

# Ensure the repository root is importable so ``import core`` and the other
# absolute imports succeed when tests run from arbitrary working directories.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("NODE_ENV", "test")


@pytest.fixture
def workspace_root(tmp_path: Path) -> Iterator[Path]:
    """Directory that stands in for the narration temp root."""

    root = tmp_path / "storytime_tts"
    root.mkdir()
    yield root
