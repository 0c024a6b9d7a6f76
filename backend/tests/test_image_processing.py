"""Tests for upload validation and image optimization."""
import base64
import io

import pytest
from PIL import Image

from conftest import png_bytes, png_data_url

from artspace.domain.common.errors import ValidationError
from artspace.services.image_processing import optimize_image, parse_data_url, to_data_url, validate_upload


def decode(url: str) -> Image.Image:
    _, data = parse_data_url(url)
    return Image.open(io.BytesIO(data))


def test_parse_data_url():
    assert parse_data_url(to_data_url(b"abc", "image/png")) == ("image/png", b"abc")
    assert parse_data_url("https://img/x.jpg") is None
    assert parse_data_url("data:image/png;base64,***") is None


def test_validate_upload_accepts_png():
    url = validate_upload("image/png", png_bytes())

    assert url.startswith("data:image/png;base64,")


def test_validate_upload_rejects_other_types():
    buf = io.BytesIO()
    Image.new("RGB", (4, 4)).save(buf, format="GIF")

    with pytest.raises(ValidationError, match="PNG or JPEG only"):
        validate_upload("image/gif", buf.getvalue())
    # a GIF posted with an image/png content type is still rejected
    with pytest.raises(ValidationError, match="PNG or JPEG only"):
        validate_upload("image/png", buf.getvalue())


def test_validate_upload_rejects_garbage():
    with pytest.raises(ValidationError):
        validate_upload("image/jpeg", b"not an image")


def test_optimize_downscales_wide_images():
    url = optimize_image(png_data_url(1600, 400), max_width=800, quality=70)

    assert url.startswith("data:image/jpeg;base64,")
    img = decode(url)
    assert img.format == "JPEG"
    assert img.size == (800, 200)


def test_optimize_keeps_small_images_size():
    img = decode(optimize_image(png_data_url(40, 30), max_width=800))

    assert img.size == (40, 30)


def test_optimize_leaves_remote_urls_alone():
    assert optimize_image("https://picsum.photos/seed/x/800") == "https://picsum.photos/seed/x/800"


def test_optimize_leaves_undecodable_data_alone():
    url = "data:image/png;base64," + base64.b64encode(b"junk").decode("ascii")

    assert optimize_image(url) == url
