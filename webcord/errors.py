"""Error kinds raised by the capture and encode stages.

Nothing below the CLI exits the process; every failure is one of these and
``webcord.cli.main`` maps it to exit status 1.
"""

from __future__ import annotations


class WebcordError(Exception):
    """Base class for failures that end a run."""


class ParameterError(WebcordError):
    """The combination of command-line options cannot start a run."""


class DirectoryError(WebcordError):
    """The staging directory could not be created."""


class CaptureError(WebcordError):
    """Navigation, page evaluation or screenshotting failed."""


class EncodeError(WebcordError):
    """ffmpeg failed (or is missing) while building a video."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr
