import io
import re
from typing import Optional

import cloudinary
import cloudinary.uploader
from PIL import Image

from ebee.core.config import settings
from ebee.core.logging import get_logger
from ebee.utils.exceptions import UploadError, ValidationError

logger = get_logger(__name__)

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/webp")
MAX_DIMENSIONS = (1080, 1080)


def configure_cloudinary() -> None:
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )


def get_public_id_from_url(url: str) -> Optional[str]:
    """
    Extracts the public ID from a Cloudinary URL.
    Input:  https://.../upload/v1234/products/helmet.jpg
    Output: products/helmet
    """
    if not url:
        return None
    if "cloudinary.com" not in url:
        # Already a bare public id
        return url.rsplit(".", 1)[0]
    match = re.search(r'/upload/(?:v\d+/)?(.+?)(?:\.[^./]+)?$', url)
    return match.group(1) if match else None


def upload_image(file, folder: str = "products") -> dict:
    """
    Shrink and re-encode an uploaded image, then push it to Cloudinary.

    `file` is a Starlette UploadFile (anything with .file and .content_type).
    Returns {url, public_id, format, bytes}.
    """
    if file.content_type not in ALLOWED_CONTENT_TYPES:
        raise ValidationError("Only JPEG, PNG, or WebP images allowed")

    try:
        image = Image.open(file.file)
        if image.mode != "RGB":
            image = image.convert("RGB")
        image.thumbnail(MAX_DIMENSIONS)

        buffer = io.BytesIO()
        image.save(buffer, format="JPEG", quality=80, optimize=True)
        buffer.seek(0)

        result = cloudinary.uploader.upload(
            buffer,
            folder=folder,
            upload_preset=settings.CLOUDINARY_UPLOAD_PRESET,
            resource_type="image",
        )
    except Exception as e:
        logger.error("Image upload failed", folder=folder, error=str(e))
        raise UploadError(f"Upload failed: {e}")

    return {
        "url": result.get("secure_url"),
        "public_id": result.get("public_id"),
        "format": result.get("format"),
        "bytes": result.get("bytes"),
    }


def delete_image(public_id: str) -> dict:
    """Destroy an asset and purge it from the CDN."""
    if not public_id:
        raise UploadError("Public ID is required")

    try:
        result = cloudinary.uploader.destroy(public_id, invalidate=True)
    except Exception as e:
        logger.error("Image deletion failed", public_id=public_id, error=str(e))
        raise UploadError(f"Deletion failed: {e}")

    if result.get("result") != "ok":
        raise UploadError(f"Deletion failed: {result.get('result')}")

    logger.info("Deleted image", public_id=public_id)
    return result


def discard_image(public_id: str) -> None:
    """Best-effort delete: failures are logged, never raised."""
    try:
        delete_image(public_id)
    except UploadError as e:
        logger.warning("Could not clean up image", public_id=public_id, error=e.detail)
