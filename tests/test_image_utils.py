import io

import pytest
from PIL import Image

from ebee.utils import image_utils
from ebee.utils.exceptions import UploadError, ValidationError
from tests.helpers import png_bytes


class FakeUpload:
    def __init__(self, data, content_type):
        self.file = io.BytesIO(data)
        self.content_type = content_type


def test_upload_shrinks_and_returns_asset_details(monkeypatch):
    captured = {}

    def fake_upload(buffer, **options):
        captured.update(options)
        captured["size"] = len(buffer.getvalue())
        return {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/products/abc.jpg",
            "public_id": "products/abc",
            "format": "jpg",
            "bytes": 2048,
        }

    monkeypatch.setattr(image_utils.cloudinary.uploader, "upload", fake_upload)

    result = image_utils.upload_image(FakeUpload(png_bytes(), "image/png"), folder="products")

    assert result == {
        "url": "https://res.cloudinary.com/demo/image/upload/v1/products/abc.jpg",
        "public_id": "products/abc",
        "format": "jpg",
        "bytes": 2048,
    }
    assert captured["folder"] == "products"
    assert captured["size"] > 0


def test_upload_converts_any_non_rgb_mode(monkeypatch):
    converted = []

    class SixteenBitGrayscale:
        mode = "I;16"

        def convert(self, mode):
            converted.append(mode)
            return Image.new("RGB", (20, 20))

    monkeypatch.setattr(image_utils.Image, "open", lambda fp: SixteenBitGrayscale())
    monkeypatch.setattr(
        image_utils.cloudinary.uploader, "upload",
        lambda buffer, **options: {"secure_url": "https://res.cloudinary.com/x.jpg", "public_id": "products/x"},
    )

    result = image_utils.upload_image(FakeUpload(b"16-bit png", "image/png"))

    assert converted == ["RGB"]
    assert result["public_id"] == "products/x"


def test_upload_rejects_non_images():
    with pytest.raises(ValidationError):
        image_utils.upload_image(FakeUpload(b"%PDF-1.4", "application/pdf"))


def test_upload_provider_failure_becomes_upload_error(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("cloud unreachable")

    monkeypatch.setattr(image_utils.cloudinary.uploader, "upload", boom)

    with pytest.raises(UploadError):
        image_utils.upload_image(FakeUpload(png_bytes(), "image/png"))


def test_delete_requires_public_id():
    with pytest.raises(UploadError):
        image_utils.delete_image("")


def test_delete_checks_provider_result(monkeypatch):
    monkeypatch.setattr(image_utils.cloudinary.uploader, "destroy", lambda public_id, **kw: {"result": "not found"})

    with pytest.raises(UploadError):
        image_utils.delete_image("products/missing")


def test_delete_ok(monkeypatch):
    monkeypatch.setattr(image_utils.cloudinary.uploader, "destroy", lambda public_id, **kw: {"result": "ok"})

    assert image_utils.delete_image("products/abc") == {"result": "ok"}


def test_discard_swallows_upload_errors(monkeypatch):
    monkeypatch.setattr(image_utils.cloudinary.uploader, "destroy", lambda public_id, **kw: {"result": "error"})

    image_utils.discard_image("products/abc")


@pytest.mark.parametrize("url,expected", [
    ("https://res.cloudinary.com/demo/image/upload/v1712/products/helmet.jpg", "products/helmet"),
    ("https://res.cloudinary.com/demo/image/upload/products/helmet.png", "products/helmet"),
    ("products/helmet.jpg", "products/helmet"),
    ("", None),
])
def test_get_public_id_from_url(url, expected):
    assert image_utils.get_public_id_from_url(url) == expected
