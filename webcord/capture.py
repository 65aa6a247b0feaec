"""Drive headless Chromium through a page and write numbered frames."""

from __future__ import annotations

import shutil
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright

from webcord.budget import FrameBudget, plan_frames
from webcord.config import CaptureConfig, DeviceProfile
from webcord.errors import CaptureError, DirectoryError
from webcord.imaging import image_page

# ffmpeg reads the sequence with -start_number, so indices begin here.
FRAME_OFFSET = 10
NAVIGATION_TIMEOUT_MS = 3_000_000
SETTLE_MS = 3000

MEASURE_HEIGHT_JS = "() => document.body.scrollHeight"
SCROLL_BY_JS = "(speed) => window.scrollBy(0, speed)"


def frame_name(index: int) -> str:
    return f"{index:02d}.png"


@dataclass(frozen=True)
class StagingArea:
    directory: Path
    frame_count: int
    viewport: dict[str, int]
    start_number: int = FRAME_OFFSET

    @property
    def pattern(self) -> Path:
        return self.directory / "%02d.png"

    def frame_paths(self) -> list[Path]:
        return [
            self.directory / frame_name(self.start_number + i)
            for i in range(self.frame_count)
        ]

    def cleanup(self) -> None:
        shutil.rmtree(self.directory)


@dataclass(frozen=True)
class UrlSource:
    url: str
    settle_ms: int = SETTLE_MS

    def load(self, page: Page) -> None:
        page.goto(self.url, wait_until="networkidle", timeout=NAVIGATION_TIMEOUT_MS)

    def __str__(self) -> str:
        return self.url


@dataclass(frozen=True)
class ImageSource:
    path: Path
    html: str
    settle_ms: int = 0

    @classmethod
    def read(cls, path: Path) -> "ImageSource":
        return cls(path=path, html=image_page(path))

    def load(self, page: Page) -> None:
        page.set_content(self.html)

    def __str__(self) -> str:
        return str(self.path)


def context_options(playwright, profile: DeviceProfile) -> dict:
    if profile.emulation is None:
        return {"viewport": dict(profile.viewport)}
    descriptor = playwright.devices[profile.emulation]
    return {k: v for k, v in descriptor.items() if k != "default_browser_type"}


@contextmanager
def browser_page(profile: DeviceProfile) -> Iterator[tuple[Page, dict[str, int]]]:
    """Yield a fresh page sized for ``profile``; the browser always closes."""
    with sync_playwright() as playwright:
        browser = playwright.chromium.launch(headless=True)
        try:
            options = context_options(playwright, profile)
            context = browser.new_context(**options)
            page = context.new_page()
            yield page, dict(options["viewport"])
        finally:
            browser.close()


def make_staging(directory: Path) -> None:
    """Create the staging directory, dropping frames left by an earlier run."""
    try:
        directory.mkdir(parents=True, exist_ok=True)
        for stale in directory.glob("*.png"):
            stale.unlink()
    except OSError as exc:
        raise DirectoryError(f"Could not prepare staging directory {directory}: {exc}") from exc


def shoot_frames(page: Page, directory: Path, budget: FrameBudget, speed: int) -> int:
    """Capture header, scroll and footer frames; return how many were written."""
    frame_index = FRAME_OFFSET

    def snap(count: int = 1) -> None:
        nonlocal frame_index
        for _ in range(count):
            page.screenshot(path=str(directory / frame_name(frame_index)))
            frame_index += 1

    if not budget.scrolls:
        print(f"[capture] page does not scroll, taking {budget.fallback_frames} shots")
        snap(budget.fallback_frames)
        return frame_index - FRAME_OFFSET

    print("[capture] taking header shots")
    snap(budget.header_frames)
    print(f"[capture] taking page shots ({budget.scroll_frames})")
    for _ in range(budget.scroll_frames):
        page.evaluate(SCROLL_BY_JS, speed)
        snap()
    print("[capture] taking footer shots")
    snap(budget.footer_frames)
    return frame_index - FRAME_OFFSET


def capture(
    source: UrlSource | ImageSource, config: CaptureConfig, staging_dir: Path
) -> StagingArea:
    """Capture ``source`` into ``staging_dir`` as a numbered PNG sequence."""
    make_staging(staging_dir)
    print(f"[capture] {source} as {config.profile.name} at {config.speed}px/frame")
    try:
        with browser_page(config.profile) as (page, viewport):
            source.load(page)
            page_height = page.evaluate(MEASURE_HEIGHT_JS)
            budget = plan_frames(page_height, viewport["height"], config.speed)
            print(f"[capture] page height {page_height}px, {budget.total_frames} frames")
            if source.settle_ms:
                page.wait_for_timeout(source.settle_ms)
            written = shoot_frames(page, staging_dir, budget, config.speed)
    except PlaywrightError as exc:
        raise CaptureError(f"Capture of {source} failed: {exc}") from exc
    print("[capture] done taking screenshots")
    return StagingArea(directory=staging_dir, frame_count=written, viewport=viewport)


def take_screenshot(url: str, profile: DeviceProfile, path: Path) -> Path:
    """Save one full-page screenshot of ``url`` to ``path``."""
    try:
        with browser_page(profile) as (page, _):
            UrlSource(url).load(page)
            print("[capture] taking screenshot")
            page.screenshot(path=str(path), full_page=True)
    except PlaywrightError as exc:
        raise CaptureError(f"Screenshot of {url} failed: {exc}") from exc
    print(f"[capture] wrote {path}")
    return path
