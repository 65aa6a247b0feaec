"""Shared fakes for Playwright and ffmpeg so tests need neither installed."""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError

DEVICES = {
    "iPad (gen 6)": {
        "user_agent": "Mozilla/5.0 (iPad; CPU OS 12_2 like Mac OS X)",
        "viewport": {"width": 768, "height": 1024},
        "device_scale_factor": 2,
        "is_mobile": True,
        "has_touch": True,
        "default_browser_type": "webkit",
    },
    "iPhone 6": {
        "user_agent": "Mozilla/5.0 (iPhone; CPU iPhone OS 11_0 like Mac OS X)",
        "viewport": {"width": 375, "height": 667},
        "device_scale_factor": 2,
        "is_mobile": True,
        "has_touch": True,
        "default_browser_type": "webkit",
    },
}


class FakePage:
    def __init__(self, page_height: int, fail_on: str | None = None):
        self.page_height = page_height
        self.fail_on = fail_on
        self.calls: list[tuple] = []
        self.screenshots: list[str] = []

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise PlaywrightError(f"{name} failed")

    def goto(self, url, **kwargs):
        self._maybe_fail("goto")
        self.calls.append(("goto", url, kwargs))

    def set_content(self, html):
        self.calls.append(("set_content", html))

    def evaluate(self, expression, arg=None):
        if "scrollBy" in expression:
            self.calls.append(("scroll", arg))
            return None
        self.calls.append(("measure",))
        return self.page_height

    def wait_for_timeout(self, ms):
        self.calls.append(("wait", ms))

    def screenshot(self, path, full_page=False):
        self._maybe_fail("screenshot")
        Path(path).write_bytes(b"\x89PNG fake")
        self.calls.append(("screenshot", path, full_page))
        self.screenshots.append(path)

    def scroll_calls(self) -> list[tuple]:
        return [call for call in self.calls if call[0] == "scroll"]


class FakeBrowser:
    def __init__(self, page: FakePage):
        self.page = page
        self.context_options: dict | None = None
        self.closed = False

    def new_context(self, **options):
        self.context_options = options
        return self

    def new_page(self):
        return self.page

    def close(self):
        self.closed = True


class FakePlaywright:
    def __init__(self, page: FakePage):
        self.browser = FakeBrowser(page)
        self.devices = DEVICES
        self.launches = 0

    @property
    def chromium(self):
        return self

    def launch(self, headless=True):
        self.launches += 1
        return self.browser

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def fake_browser(monkeypatch):
    """Install a fake ``sync_playwright``; call the result to configure the page."""

    def install(page_height: int = 960, fail_on: str | None = None) -> FakePlaywright:
        playwright = FakePlaywright(FakePage(page_height, fail_on=fail_on))
        monkeypatch.setattr("webcord.capture.sync_playwright", lambda: playwright)
        return playwright

    return install


@pytest.fixture
def no_browser(monkeypatch):
    """Fail the test if anything tries to start a browser session."""

    def forbidden():
        raise AssertionError("browser session started")

    monkeypatch.setattr("webcord.capture.sync_playwright", forbidden)


class FakeFfmpeg:
    def __init__(self, fail_label: str | None = None):
        self.fail_label = fail_label
        self.commands: list[list[str]] = []

    def __call__(self, cmd, capture_output=False, text=False, check=False):
        self.commands.append(list(cmd))
        output = Path(cmd[-1])
        if output.suffix.lstrip(".") == self.fail_label:
            return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="Conversion failed!\n")
        output.write_bytes(b"video")
        return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """Replace ffmpeg runs; call with ``fail_label='mp4'`` or ``'webm'`` to fail one."""

    def install(fail_label: str | None = None) -> FakeFfmpeg:
        runner = FakeFfmpeg(fail_label)
        monkeypatch.setattr("webcord.encode.shutil.which", lambda name: "/usr/bin/ffmpeg")
        monkeypatch.setattr("webcord.encode.subprocess.run", runner)
        return runner

    return install
