"""Loading image bytes from files and URLs.

PDF image streams here carry JPEG (DCT) or PNG bytes; anything Pillow can read
in another format is re-encoded as JPEG first.
"""

from io import BytesIO
from pathlib import Path
from typing import Tuple

import requests
from PIL import Image, UnidentifiedImageError

from ..middleware.exceptions import ImageFormatError, URLDownloadError
from ..middleware.logging import logger

PASSTHROUGH_FORMATS = {"JPEG", "PNG"}
JPEG_QUALITY = 90


def normalize_image(data: bytes) -> Tuple[bytes, str]:
    """
    Identify image bytes and convert them to JPEG when needed.

    Args:
        data (bytes): Encoded image bytes.

    Returns:
        Tuple[bytes, str]: Image bytes and their format tag (JPEG or PNG).

    Raises:
        ImageFormatError: If Pillow cannot read the bytes.
    """
    try:
        with Image.open(BytesIO(data)) as image:
            if image.format in PASSTHROUGH_FORMATS:
                return data, image.format

            logger.debug("Converting image to JPEG", extra={"format": image.format})
            buffer = BytesIO()
            image.convert("RGB").save(buffer, format="JPEG", quality=JPEG_QUALITY)
            return buffer.getvalue(), "JPEG"
    except (UnidentifiedImageError, OSError) as e:
        raise ImageFormatError(details={"e": str(e)})


def load_image_file(path: str | Path) -> Tuple[bytes, str]:
    """Read an image file and normalize it (see ``normalize_image``)."""
    return normalize_image(Path(path).read_bytes())


def fetch_image(url: str, timeout: float = 30.0) -> Tuple[bytes, str]:
    """
    Download an image and normalize it.

    Args:
        url (str): Image URL.
        timeout (float): Request timeout in seconds.

    Returns:
        Tuple[bytes, str]: Image bytes and their format tag.

    Raises:
        URLDownloadError: If the download fails.
        ImageFormatError: If the downloaded bytes are not an image.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise URLDownloadError(
            f"Failed to download image from URL ({url})",
            details={"e": str(e)},
        )
    if response.status_code != 200:
        raise URLDownloadError(
            f"Failed to download image from URL ({url}): {response.status_code}",
            details={"status": response.status_code},
        )
    return normalize_image(response.content)
