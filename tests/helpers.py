import io

from PIL import Image

from ebee.core import security


def auth_headers(user):
    return {"Authorization": f"Bearer {security.create_access_token(user)}"}


def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (10, 10), color="red").save(buffer, format="PNG")
    return buffer.getvalue()
