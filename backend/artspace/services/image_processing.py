"""Image helpers: upload validation and downscaling of inline (data URL) images."""
import base64
import binascii
import io
import logging
from typing import Optional

from PIL import Image, UnidentifiedImageError

from artspace.domain.common.errors import ValidationError

logger = logging.getLogger(__name__)

ALLOWED_UPLOAD_TYPES = {"image/png", "image/jpeg", "image/jpg"}
_ALLOWED_FORMATS = {"PNG", "JPEG"}


def to_data_url(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def parse_data_url(url: str) -> Optional[tuple[str, bytes]]:
    """Split a base64 data URL into (mime_type, bytes). None for anything else (e.g. http URLs)."""
    if not url.startswith("data:") or ";base64," not in url:
        return None
    header, _, payload = url.partition(";base64,")
    try:
        return header[len("data:"):], base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        return None


def validate_upload(content_type: Optional[str], data: bytes) -> str:
    """Accept PNG/JPEG uploads only and return them as a data URL."""
    if (content_type or "").lower() not in ALLOWED_UPLOAD_TYPES:
        raise ValidationError("Gallery requirements: PNG or JPEG only.")
    try:
        with Image.open(io.BytesIO(data)) as img:
            fmt = img.format
    except (UnidentifiedImageError, OSError) as e:
        raise ValidationError("Uploaded file is not a readable image") from e
    if fmt not in _ALLOWED_FORMATS:
        raise ValidationError("Gallery requirements: PNG or JPEG only.")
    return to_data_url(data, "image/png" if fmt == "PNG" else "image/jpeg")


def optimize_image(image_url: str, max_width: int = 800, quality: int = 70) -> str:
    """Downscale an inline image to max_width and re-encode as JPEG.

    Remote URLs and images that cannot be decoded are returned unchanged.
    """
    parsed = parse_data_url(image_url)
    if parsed is None:
        return image_url
    _, data = parsed
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            if img.width > max_width:
                height = max(1, round(img.height * max_width / img.width))
                img = img.resize((max_width, height), Image.Resampling.LANCZOS)
            buf = io.BytesIO()
            img.convert("RGB").save(buf, format="JPEG", quality=quality)
    except (UnidentifiedImageError, OSError) as e:
        logger.debug("optimize_image: leaving image as-is: %s", e)
        return image_url
    return to_data_url(buf.getvalue(), "image/jpeg")
