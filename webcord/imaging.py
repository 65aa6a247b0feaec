"""Turn a local image into page content the browser can scroll through."""

from __future__ import annotations

import base64
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from webcord.errors import CaptureError

PAGE_TEMPLATE = """<html><meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <body style="margin: 0; padding: 0; overflow-x: hidden;">
    <img src="{src}" style="width: 100%;"/>
  </body>
</html>"""


def image_data_uri(path: Path) -> str:
    try:
        with Image.open(path) as img:
            mime = Image.MIME.get(img.format or "", "image/png")
        raw = path.read_bytes()
    except UnidentifiedImageError as exc:
        raise CaptureError(f"{path} is not an image Pillow can read") from exc
    except OSError as exc:
        raise CaptureError(f"Could not read image {path}: {exc}") from exc
    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{mime};base64,{payload}"


def image_page(path: Path) -> str:
    """HTML page holding ``path`` as a single full-width image."""
    return PAGE_TEMPLATE.format(src=image_data_uri(path))
