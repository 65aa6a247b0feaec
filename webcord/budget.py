"""Frame budget arithmetic for a scroll capture."""

from __future__ import annotations

import math
from dataclasses import dataclass

HEADER_FRAMES = 31
FOOTER_FRAMES = 31
# Flat run used when the page has nothing to scroll through.
FALLBACK_FRAMES = 310


def scroll_frame_count(page_height: int, viewport_height: int, speed: int) -> int:
    """Number of scroll-then-shoot steps needed to reach the bottom of the page.

    Returns 0 when the page fits inside the viewport or the speed is not
    positive; callers treat that as "nothing to scroll".
    """
    if speed <= 0 or page_height <= viewport_height:
        return 0
    return math.floor((page_height - viewport_height) / speed)


@dataclass(frozen=True)
class FrameBudget:
    scroll_frames: int
    header_frames: int = HEADER_FRAMES
    footer_frames: int = FOOTER_FRAMES
    fallback_frames: int = FALLBACK_FRAMES

    @property
    def scrolls(self) -> bool:
        return self.scroll_frames > 0

    @property
    def total_frames(self) -> int:
        if not self.scrolls:
            return self.fallback_frames
        return self.header_frames + self.scroll_frames + self.footer_frames


def plan_frames(page_height: int, viewport_height: int, speed: int) -> FrameBudget:
    return FrameBudget(scroll_frames=scroll_frame_count(page_height, viewport_height, speed))
