import shutil
import subprocess
from pathlib import Path

import pytest

from core.exceptions import AssemblyError
from features.tts.assembler import AudioAssembler
from features.tts.synthesizer import AudioSegment
from services.temporary_storage import SegmentWorkspace


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeFfmpegAssembler(AudioAssembler):
    """Emulates the concat demuxer by joining the listed files."""

    def __init__(self, *, returncode: int = 0, stderr: str = "", write_output: bool = True) -> None:
        super().__init__(ffmpeg_binary="ffmpeg")
        self.returncode = returncode
        self.stderr = stderr
        self.write_output = write_output
        self.calls: list[list[str]] = []
        self.listed: list[str] = []

    async def _run_ffmpeg(self, args):
        self.calls.append(list(args))
        list_path = Path(args[args.index("-i") + 1])
        output_path = Path(args[-1])
        self.listed = list_path.read_text(encoding="utf-8").splitlines()
        if self.write_output:
            data = b"".join(Path(line[len("file '") : -1]).read_bytes() for line in self.listed)
            output_path.write_bytes(data)
        return self.returncode, self.stderr


async def _segments(workspace: SegmentWorkspace, count: int) -> list[AudioSegment]:
    segments = []
    for index in range(count):
        data = f"seg{index};".encode()
        path = await workspace.write_segment(index, data)
        segments.append(AudioSegment(source_chunk_index=index, path=path, size=len(data)))
    return segments


@pytest.mark.anyio
async def test_merge_concatenates_in_order_with_stream_copy(workspace_root):
    assembler = FakeFfmpegAssembler()

    async with SegmentWorkspace(root=workspace_root) as workspace:
        segments = await _segments(workspace, 3)
        merged = await assembler.merge(segments, workspace)

        assert merged == b"seg0;seg1;seg2;"
        assert [Path(line[len("file '") : -1]).name for line in assembler.listed] == [
            "segment_00000.mp3",
            "segment_00001.mp3",
            "segment_00002.mp3",
        ]
        args = assembler.calls[0]
        assert args[args.index("-f") + 1] == "concat"
        assert args[args.index("-c") + 1] == "copy"
        assert sorted(path.name for path in workspace.path.iterdir()) == [
            "segment_00000.mp3",
            "segment_00001.mp3",
            "segment_00002.mp3",
        ]


@pytest.mark.anyio
async def test_single_segment_returned_unchanged(workspace_root):
    assembler = FakeFfmpegAssembler()

    async with SegmentWorkspace(root=workspace_root) as workspace:
        segments = await _segments(workspace, 1)
        merged = await assembler.merge(segments, workspace)

    assert merged == b"seg0;"
    assert assembler.calls == []


@pytest.mark.anyio
async def test_empty_segment_list_rejected(workspace_root):
    async with SegmentWorkspace(root=workspace_root) as workspace:
        with pytest.raises(AssemblyError):
            await FakeFfmpegAssembler().merge([], workspace)


@pytest.mark.anyio
async def test_out_of_order_segments_rejected(workspace_root):
    assembler = FakeFfmpegAssembler()

    async with SegmentWorkspace(root=workspace_root) as workspace:
        segments = await _segments(workspace, 3)
        with pytest.raises(AssemblyError):
            await assembler.merge([segments[1], segments[0], segments[2]], workspace)

    assert assembler.calls == []


@pytest.mark.anyio
async def test_toolchain_failure_removes_partial_output(workspace_root):
    assembler = FakeFfmpegAssembler(returncode=1, stderr="Invalid data found when processing input")

    async with SegmentWorkspace(root=workspace_root) as workspace:
        segments = await _segments(workspace, 2)
        with pytest.raises(AssemblyError) as exc_info:
            await assembler.merge(segments, workspace)

        remaining = sorted(path.name for path in workspace.path.iterdir())

    assert remaining == ["segment_00000.mp3", "segment_00001.mp3"]
    assert exc_info.value.returncode == 1
    assert "Invalid data" in exc_info.value.stderr


@pytest.mark.anyio
async def test_missing_output_is_an_error(workspace_root):
    assembler = FakeFfmpegAssembler(write_output=False)

    async with SegmentWorkspace(root=workspace_root) as workspace:
        segments = await _segments(workspace, 2)
        with pytest.raises(AssemblyError):
            await assembler.merge(segments, workspace)


@pytest.mark.anyio
async def test_missing_binary_raises_assembly_error(workspace_root, tmp_path):
    assembler = AudioAssembler(ffmpeg_binary=str(tmp_path / "no-such-ffmpeg"))

    async with SegmentWorkspace(root=workspace_root) as workspace:
        segments = await _segments(workspace, 2)
        with pytest.raises(AssemblyError):
            await assembler.merge(segments, workspace)

        assert not workspace.path_for("concat.txt").exists()


def _silent_mp3(ffmpeg: str, seconds: float) -> bytes:
    completed = subprocess.run(
        [
            ffmpeg,
            "-hide_banner",
            "-loglevel",
            "error",
            "-f",
            "lavfi",
            "-i",
            "anullsrc=r=24000:cl=mono",
            "-t",
            str(seconds),
            "-c:a",
            "libmp3lame",
            "-f",
            "mp3",
            "-",
        ],
        capture_output=True,
        check=False,
    )
    if completed.returncode != 0 or not completed.stdout:
        pytest.skip("ffmpeg cannot encode MP3 test segments")
    return completed.stdout


@pytest.mark.anyio
@pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg is not installed")
async def test_real_ffmpeg_merges_segments_under_quoted_path(tmp_path):
    ffmpeg = shutil.which("ffmpeg")
    root = tmp_path / "narrator's tales"
    root.mkdir()
    assembler = AudioAssembler(ffmpeg_binary=ffmpeg)

    async with SegmentWorkspace(root=root) as workspace:
        segments = []
        for index in range(3):
            data = _silent_mp3(ffmpeg, 0.5)
            path = await workspace.write_segment(index, data)
            segments.append(AudioSegment(source_chunk_index=index, path=path, size=len(data)))

        merged = await assembler.merge(segments, workspace)
        leftovers = sorted(path.name for path in workspace.path.iterdir())

    assert len(merged) > max(segment.size for segment in segments)
    assert leftovers == ["segment_00000.mp3", "segment_00001.mp3", "segment_00002.mp3"]
    assert list(root.iterdir()) == []
