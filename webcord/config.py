"""Device profiles and the run configuration built from the command line."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

RATES = ("slow", "medium", "fast")
POSITIONS = ("center", "bottom")
DEFAULT_SCREENSHOT = "screenshot.png"
STAGING_DIR = Path("images")
MP4_NAME = "video.mp4"
WEBM_NAME = "video.webm"


@dataclass(frozen=True)
class DeviceProfile:
    name: str
    speeds: dict[str, int]
    viewport: dict[str, int] | None = None
    # Playwright device descriptor name, e.g. "iPhone 6".
    emulation: str | None = None

    def __post_init__(self) -> None:
        if (self.viewport is None) == (self.emulation is None):
            raise ValueError(
                f"profile '{self.name}' needs exactly one of viewport or emulation"
            )


DESKTOP = DeviceProfile(
    name="desktop",
    viewport={"width": 1280, "height": 960},
    speeds={"slow": 10, "medium": 25, "fast": 40},
)
TABLET = DeviceProfile(
    name="tablet",
    emulation="iPad (gen 6)",
    speeds={"slow": 5, "medium": 15, "fast": 40},
)
PHONE = DeviceProfile(
    name="phone",
    emulation="iPhone 6",
    speeds={"slow": 5, "medium": 20, "fast": 50},
)
PROFILES = {profile.name: profile for profile in (DESKTOP, TABLET, PHONE)}


@dataclass(frozen=True)
class CaptureConfig:
    profile: DeviceProfile
    speed: int

    @classmethod
    def for_device(cls, viewport: str, rate: str) -> "CaptureConfig":
        profile = PROFILES[viewport]
        return cls(profile=profile, speed=profile.speeds[rate])


@dataclass(frozen=True)
class Options:
    """Everything a run needs, resolved once from the command line."""

    url: str | None = None
    image: Path | None = None
    collection: bool = False
    watermark: Path | None = None
    loop: bool = False
    rate: str | None = None
    position: str | None = None
    viewport: str | None = None
    background: str | None = None
    demo: bool = False
    screenshot: Path | None = None
    staging_dir: Path = STAGING_DIR
    output_dir: Path = Path(".")

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Options":
        return cls(
            url=args.url,
            image=Path(args.image) if args.image else None,
            collection=args.collection,
            watermark=Path(args.watermark) if args.watermark else None,
            loop=args.loop,
            rate=args.rate,
            position=args.position,
            viewport=args.viewport,
            background=args.background,
            demo=args.demo,
            screenshot=Path(args.screenshot) if args.screenshot else None,
        )

    @property
    def mp4_path(self) -> Path:
        return (self.output_dir / MP4_NAME).resolve()

    @property
    def webm_path(self) -> Path | None:
        if not self.collection:
            return None
        return (self.output_dir / WEBM_NAME).resolve()
