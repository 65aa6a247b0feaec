"""Command-line entry point: pick a mode, capture, encode."""

from __future__ import annotations

import argparse
import enum
import sys
from pathlib import Path

from webcord import __version__
from webcord.capture import ImageSource, UrlSource, capture, take_screenshot
from webcord.config import (
    DEFAULT_SCREENSHOT,
    DESKTOP,
    POSITIONS,
    PROFILES,
    RATES,
    CaptureConfig,
    Options,
)
from webcord.encode import EncodeJob, encode
from webcord.errors import ParameterError, WebcordError
from webcord.filters import build_filter


class Mode(enum.Enum):
    SCREENSHOT = "screenshot"
    URL = "url"
    IMAGE = "image"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="webcord",
        description="Record a scrolling capture of a webpage or image as video.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("-u", "--url", help="URL of the webpage to capture.")
    parser.add_argument(
        "-c",
        "--collection",
        action="store_true",
        help="Also export a webm next to the mp4.",
    )
    parser.add_argument("-w", "--watermark", help="Image overlaid in the bottom-right corner.")
    parser.add_argument("-i", "--image", help="Scroll through this image instead of a URL.")
    parser.add_argument("-l", "--loop", action="store_true", help="Ping-pong the capture.")
    parser.add_argument("-r", "--rate", choices=RATES, help="Scrolling speed.")
    parser.add_argument(
        "-p",
        "--position",
        choices=POSITIONS,
        help="Vertical position of the capture inside the background.",
    )
    parser.add_argument("-v", "--viewport", choices=sorted(PROFILES), help="Device class.")
    parser.add_argument("-b", "--background", help="Pad the capture with this colour.")
    parser.add_argument(
        "-d",
        "--demo",
        action="store_true",
        help="Generate video in demo mode (currently no effect on capture).",
    )
    parser.add_argument(
        "-s",
        "--screenshot",
        nargs="?",
        const=DEFAULT_SCREENSHOT,
        help="Only save a full-page screenshot (default: %(const)s).",
    )
    return parser.parse_args(argv)


def select_mode(options: Options) -> Mode:
    if options.screenshot is not None:
        if not options.url:
            raise ParameterError("--screenshot requires --url")
        return Mode.SCREENSHOT
    if not (options.rate and options.viewport):
        raise ParameterError("missing required command parameters: --rate and --viewport")
    if options.url and options.image:
        raise ParameterError("--url and --image are mutually exclusive")
    if options.url:
        return Mode.URL
    if options.image:
        return Mode.IMAGE
    raise ParameterError("missing required command parameters: --url or --image")


def run(options: Options) -> list[Path]:
    mode = select_mode(options)
    if mode is Mode.SCREENSHOT:
        profile = PROFILES[options.viewport] if options.viewport else DESKTOP
        return [take_screenshot(options.url, profile, options.screenshot)]

    config = CaptureConfig.for_device(options.viewport, options.rate)
    if mode is Mode.URL:
        source = UrlSource(options.url)
    else:
        source = ImageSource.read(options.image)
    staging = capture(source, config, options.staging_dir.resolve())
    graph = build_filter(
        staging.viewport,
        background=options.background,
        watermark=options.watermark,
        loop=options.loop,
        position=options.position,
    )
    job = EncodeJob(
        staging=staging,
        graph=graph,
        mp4_path=options.mp4_path,
        webm_path=options.webm_path,
    )
    return encode(job)


def main(argv: list[str] | None = None) -> int:
    options = Options.from_args(parse_args(argv))
    try:
        outputs = run(options)
    except WebcordError as exc:
        print(f"[webcord] {exc}", file=sys.stderr)
        stderr = getattr(exc, "stderr", "")
        if stderr:
            print(stderr, file=sys.stderr)
        return 1
    for output in outputs:
        print(f"[webcord] wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
