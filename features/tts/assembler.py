"""Concatenate synthesized segments into one narration file."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Sequence

from pydub.utils import get_encoder_name

from core.exceptions import AssemblyError
from services.temporary_storage import SegmentWorkspace

from .synthesizer import AudioSegment

logger = logging.getLogger(__name__)

_STDERR_LIMIT = 2000


def _concat_line(path: Path) -> str:
    # concat demuxer quoting: close the quote, emit an escaped quote, reopen.
    escaped = str(path.resolve()).replace("'", "'\\''")
    return f"file '{escaped}'"


def _check_order(segments: Sequence[AudioSegment]) -> None:
    indices = [segment.source_chunk_index for segment in segments]
    if indices != list(range(len(indices))):
        raise AssemblyError(f"Segments must be ordered 0..{len(indices) - 1}, got {indices}")


class AudioAssembler:
    """Merge audio segments with ffmpeg's concat demuxer.

    Segments share one codec, so the streams are copied rather than
    re-encoded. Segments are expected in playback order; they are validated
    but never re-sorted.
    """

    def __init__(self, ffmpeg_binary: str | None = None) -> None:
        self._ffmpeg_binary = ffmpeg_binary

    @property
    def ffmpeg_binary(self) -> str:
        if self._ffmpeg_binary is None:
            self._ffmpeg_binary = get_encoder_name()
        return self._ffmpeg_binary

    async def merge(self, segments: Sequence[AudioSegment], workspace: SegmentWorkspace) -> bytes:
        if not segments:
            raise AssemblyError("No audio segments to merge")
        _check_order(segments)

        if len(segments) == 1:
            logger.info("Single segment narration, skipping concatenation")
            return await asyncio.to_thread(segments[0].read_bytes)

        extension = segments[0].path.suffix.lstrip(".") or "mp3"
        list_path = workspace.path_for("concat.txt")
        output_path = workspace.path_for(f"merged.{extension}")
        lines = "\n".join(_concat_line(segment.path) for segment in segments) + "\n"
        await asyncio.to_thread(list_path.write_text, lines, encoding="utf-8")

        args = [
            "-hide_banner",
            "-loglevel",
            "error",
            "-y",
            "-f",
            "concat",
            "-safe",
            "0",
            "-i",
            str(list_path),
            "-c",
            "copy",
            str(output_path),
        ]

        try:
            returncode, stderr = await self._run_ffmpeg(args)
            if returncode != 0:
                logger.error("ffmpeg concat failed (code=%s): %s", returncode, stderr)
                raise AssemblyError(
                    "Failed to merge audio segments",
                    returncode=returncode,
                    stderr=stderr,
                )

            merged = await asyncio.to_thread(_read_if_exists, output_path)
            if not merged:
                raise AssemblyError("Audio merge produced an empty file", returncode=returncode, stderr=stderr)
        finally:
            await asyncio.to_thread(_remove_files, [list_path, output_path])

        logger.info("Merged %s segment(s) into %s bytes", len(segments), len(merged))
        return merged

    async def _run_ffmpeg(self, args: List[str]) -> tuple[int, str]:
        """Run ffmpeg with ``args`` and return its exit code and stderr."""

        try:
            process = await asyncio.create_subprocess_exec(
                self.ffmpeg_binary,
                *args,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise AssemblyError(f"Media toolchain not found: {self.ffmpeg_binary}") from exc

        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise
        return process.returncode or 0, stderr.decode("utf-8", errors="replace")[-_STDERR_LIMIT:]


def _read_if_exists(path: Path) -> bytes:
    return path.read_bytes() if path.exists() else b""


def _remove_files(paths: Sequence[Path]) -> None:
    for path in paths:
        path.unlink(missing_ok=True)


__all__ = ["AudioAssembler"]
