"""Assemble captured frames into mp4 (and optionally webm) with ffmpeg."""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from webcord.capture import StagingArea
from webcord.errors import EncodeError
from webcord.filters import OUTPUT_FPS, FilterGraph

CRF = 10
THREADS = 8
WEBM_BITRATE = "1M"
STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class EncodeJob:
    staging: StagingArea
    graph: FilterGraph
    mp4_path: Path
    webm_path: Path | None = None


def find_ffmpeg() -> str:
    ffmpeg = shutil.which("ffmpeg")
    if not ffmpeg:
        raise EncodeError("ffmpeg not found on PATH")
    return ffmpeg


def mp4_command(ffmpeg: str, job: EncodeJob) -> list[str]:
    cmd = [
        ffmpeg,
        "-y",
        "-start_number",
        str(job.staging.start_number),
        "-i",
        str(job.staging.pattern),
    ]
    if job.graph.overlay is not None:
        cmd.extend(["-i", str(job.graph.overlay)])
    if job.graph.expression:
        cmd.extend(["-filter_complex", job.graph.expression])
    cmd.extend(
        [
            "-c:v",
            "libx264",
            "-r",
            str(OUTPUT_FPS),
            "-pix_fmt",
            "yuv420p",
            "-crf",
            str(CRF),
            "-threads",
            str(THREADS),
            str(job.mp4_path),
        ]
    )
    return cmd


def webm_command(ffmpeg: str, mp4_path: Path, webm_path: Path) -> list[str]:
    return [
        ffmpeg,
        "-y",
        "-i",
        str(mp4_path),
        "-c:v",
        "libvpx",
        "-f",
        "webm",
        "-b:v",
        WEBM_BITRATE,
        str(webm_path),
    ]


def run_ffmpeg(cmd: list[str], label: str) -> None:
    print(f"[encode] building {label}")
    try:
        completed = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except OSError as exc:
        raise EncodeError(f"Could not run {cmd[0]} while building {label}: {exc}") from exc
    if completed.returncode != 0:
        tail = "\n".join(completed.stderr.splitlines()[-STDERR_TAIL_LINES:])
        raise EncodeError(
            f"ffmpeg failed while building {label} (exit {completed.returncode})",
            stderr=tail,
        )
    print(f"[encode] done building {label}")


def encode(job: EncodeJob) -> list[Path]:
    """Run the encode chain and remove the staging frames once it succeeds.

    A failing ffmpeg run raises ``EncodeError`` and leaves the frames in
    place so the sequence can be inspected.
    """
    ffmpeg = find_ffmpeg()
    missing = [path for path in job.staging.frame_paths() if not path.exists()]
    if not job.staging.frame_count or missing:
        raise EncodeError(
            f"Frame sequence in {job.staging.directory} is incomplete "
            f"({len(missing)} of {job.staging.frame_count} missing)"
        )
    outputs = [job.mp4_path]
    run_ffmpeg(mp4_command(ffmpeg, job), "mp4")
    if job.webm_path is not None:
        run_ffmpeg(webm_command(ffmpeg, job.mp4_path, job.webm_path), "webm")
        outputs.append(job.webm_path)
    print("[encode] cleaning up files")
    job.staging.cleanup()
    return outputs
