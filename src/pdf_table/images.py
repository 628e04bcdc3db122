"""Image byte loading for image cells."""

import logging
import urllib.request
from pathlib import Path
from typing import Callable

from .content import ImageElement


logger = logging.getLogger(__name__)

ImageProvider = Callable[[str], bytes]

FETCH_TIMEOUT = 30  # seconds


def fetch_image(src: str) -> bytes:
    """Read image bytes from an http(s) URL or a local file path."""
    try:
        if src.startswith(("http://", "https://")):
            request = urllib.request.Request(src, headers={"Cache-Control": "no-cache"})
            with urllib.request.urlopen(request, timeout=FETCH_TIMEOUT) as response:
                return response.read()
        return Path(src).read_bytes()
    except OSError as e:
        raise OSError(f"Error fetching image from {src}: {e}") from e


def load_image_bytes(element: ImageElement, provider: ImageProvider = fetch_image) -> bytes:
    """Bytes for an image element, fetching through provider when needed."""
    if element.data is not None:
        return element.data
    logger.debug("Fetching image %s", element.src)
    return provider(element.src)
