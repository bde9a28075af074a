"""
Per-request scratch directories for synthesized audio segments.
Each narration request gets its own directory so concurrent requests never
share files; the directory is removed once the request finishes.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
import time
import uuid
from pathlib import Path

from config.tts.defaults import TEMP_DIR

logger = logging.getLogger(__name__)


class SegmentWorkspace:
    """Scoped ephemeral storage for one narration request.

    Use as an async context manager; the directory and everything in it is
    deleted on exit regardless of how the block ends (including cancellation).
    """

    def __init__(self, root: Path | None = None, *, request_id: str | None = None) -> None:
        self.request_id = request_id or uuid.uuid4().hex
        self.root = Path(root or TEMP_DIR)
        self.path = self.root / self.request_id
        self._closed = False

    async def __aenter__(self) -> "SegmentWorkspace":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.cleanup()

    async def open(self) -> None:
        await asyncio.to_thread(self.path.mkdir, parents=True, exist_ok=False)
        logger.debug("Created segment workspace %s", self.path)

    def path_for(self, name: str) -> Path:
        """Return a path inside the workspace for ``name``."""

        return self.path / Path(name).name

    def segment_path(self, index: int, extension: str) -> Path:
        return self.path_for(f"segment_{index:05d}.{extension.lstrip('.')}")

    async def write_segment(self, index: int, data: bytes, extension: str = "mp3") -> Path:
        """Persist segment ``index`` and return its location."""

        destination = self.segment_path(index, extension)
        await asyncio.to_thread(destination.write_bytes, data)
        return destination

    async def cleanup(self) -> None:
        """Remove the workspace directory; safe to call more than once."""

        if self._closed:
            return
        self._closed = True
        await asyncio.to_thread(shutil.rmtree, self.path, True)
        logger.debug("Removed segment workspace %s", self.path)


def sweep_stale_workspaces(max_age_seconds: int, root: Path | None = None) -> int:
    """Delete request directories older than ``max_age_seconds``.

    Directories outlive their request only when the process dies mid-request;
    this is run at start-up to reclaim them. Returns the number removed.
    """

    base = Path(root or TEMP_DIR)
    if not base.is_dir():
        return 0

    cutoff = time.time() - max_age_seconds
    removed = 0
    for child in base.iterdir():
        if not child.is_dir():
            continue
        try:
            modified = child.stat().st_mtime
        except FileNotFoundError:
            continue
        if modified < cutoff:
            shutil.rmtree(child, ignore_errors=True)
            removed += 1

    if removed:
        logger.info("Removed %s stale segment workspace(s) from %s", removed, base)
    return removed


__all__ = ["SegmentWorkspace", "sweep_stale_workspaces"]
