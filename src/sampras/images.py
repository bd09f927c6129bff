"""
sampras.images
~~~~~~~~~~~~~~
Turn image files into base64 upload payloads using Pillow.

Images are downscaled to fit inside ``max_width`` x ``max_height``
(720 x 1280 by default) and re-encoded as JPEG, which keeps uploads to a
few hundred KB.
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image, ImageOps, UnidentifiedImageError

from .config import Config
from .exceptions import ImageLoadError

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def encode_image(
    source:     Union[str, Path, bytes],
    max_width:  int = 720,
    max_height: int = 1280,
    quality:    int = 90,
) -> str:
    """
    Load an image and return it as a base64 JPEG string.

    Args:
        source:     Filesystem path or raw image bytes.
        max_width:  Upper bound for the output width in pixels.
        max_height: Upper bound for the output height in pixels.
        quality:    JPEG quality (1-95).

    Raises:
        ImageLoadError: The file is missing or not a readable image.
    """
    label = "<bytes>" if isinstance(source, bytes) else str(source)
    try:
        if isinstance(source, bytes):
            image = Image.open(io.BytesIO(source))
        else:
            image = Image.open(Path(source))
        image.load()
    except (OSError, UnidentifiedImageError) as exc:
        raise ImageLoadError(f"Could not read image: {label}", path=label, cause=exc) from exc

    # honour the camera's EXIF rotation before measuring
    image = ImageOps.exif_transpose(image)
    if image.mode != "RGB":
        image = image.convert("RGB")

    original = image.size
    image.thumbnail((max_width, max_height))
    if image.size != original:
        logger.debug("Downscaled %s from %s to %s", label, original, image.size)

    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=quality)
    return base64.b64encode(buf.getvalue()).decode("ascii")


def load_payload(path: Union[str, Path], config: Optional[Config] = None) -> str:
    """Encode ``path`` with the size limits from ``config``."""
    config = config or Config()
    return encode_image(
        path,
        max_width=config.image_max_width,
        max_height=config.image_max_height,
    )


def payload_size_kb(payload: Optional[str]) -> int:
    """Approximate decoded size of a base64 payload in KB (0 when absent)."""
    if not payload:
        return 0
    return max(0, round((len(payload) * 3 / 4 - 2) / 1000))
