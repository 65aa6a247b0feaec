"""Build the ffmpeg filter graph for a capture.

Nothing here runs ffmpeg; the result is a plain string handed to
``-filter_complex`` plus the watermark input it expects, if any.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

OUTPUT_FPS = 29
WATERMARK_MARGIN = 15
# Viewports at or below this width are phones and get the narrower border.
PHONE_MAX_WIDTH = 375

PING_PONG = f"[0:v]reverse[r];[0:v][r]concat,loop=1,setpts=N/{OUTPUT_FPS}/TB"
OVERLAY = (
    f"overlay=main_w-overlay_w-{WATERMARK_MARGIN}:main_h-overlay_h-{WATERMARK_MARGIN}"
)
PAD_POSITIONS = {
    "center": "((oh-ih)/2)",
    "bottom": "(oh-ih)",
}


@dataclass(frozen=True)
class FilterGraph:
    expression: str | None = None
    # Second ffmpeg input, referenced as [1] by the expression.
    overlay: Path | None = None


def padding_for(width: int) -> int:
    return 60 if width > PHONE_MAX_WIDTH else 40


def pad_position(position: str | None) -> str:
    return PAD_POSITIONS.get(position or "", "")


def scale_and_pad(viewport: dict[str, int], background: str, position: str | None) -> str:
    width, height = viewport["width"], viewport["height"]
    inner = width - padding_for(width) * 2
    return (
        f"scale={inner}:-1,"
        f"pad={width}:{height}:(ow-iw)/2:{pad_position(position)}:color={background}"
    )


def build_filter(
    viewport: dict[str, int],
    *,
    background: str | None = None,
    watermark: Path | None = None,
    loop: bool = False,
    position: str | None = None,
) -> FilterGraph:
    """Pick the filter graph for the given presentation options.

    A background colour takes precedence over a watermark: when both are set
    the frames are padded and the watermark is ignored.
    """
    if background:
        padded = scale_and_pad(viewport, background, position)
        if loop:
            return FilterGraph(f"{PING_PONG}[out];[out]{padded}")
        return FilterGraph(f"[0:v]{padded}")
    if watermark:
        if loop:
            return FilterGraph(f"{PING_PONG}[out];[out][1]{OVERLAY}", overlay=watermark)
        return FilterGraph(f"[0][1]{OVERLAY}", overlay=watermark)
    if loop:
        return FilterGraph(PING_PONG)
    return FilterGraph()
