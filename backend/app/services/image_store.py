# app/services/image_store.py
"""
Image store: persists uploaded base64 images on disk and records their
metadata in the images table.

Layout on disk: <FILE_DIRECTORY>/<MODULE>/<random 15 chars>.<subtype>
Public path:    <UPLOADS_URL>/<MODULE>/<random 15 chars>.<subtype>
"""
import base64
import binascii
import logging
import secrets
import string
from pathlib import Path

from app.config import settings
from app.core.errors import BadRequest
from app.models.image import Image

logger = logging.getLogger("uvicorn.error")

FILE_NAME_LENGTH = 15
_ALPHABET = string.ascii_letters + string.digits


def get_extension(mime_type: str) -> str:
    """'image/jpeg' -> 'jpeg'"""
    parts = (mime_type or "").split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise BadRequest("INVALID_IMAGE_TYPE")
    return parts[1].lower()


def decode_payload(payload: str) -> bytes:
    """Decode base64 file content, with or without a data URL prefix."""
    data = payload[payload.index(",") + 1:] if "," in payload else payload
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError):
        raise BadRequest("INVALID_IMAGE_PAYLOAD")


def random_file_name(length: int = FILE_NAME_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def unique_file_name(directory: Path, extension: str) -> str:
    """Generate random names until one is free in the target directory."""
    name = random_file_name()
    while (directory / f"{name}.{extension}").exists():
        name = random_file_name()
    return name


async def save_image(
    payload: str,
    mime_type: str,
    module: str,
    name: str | None = None,
    base_dir: str | Path | None = None,
) -> Image:
    """
    Store an uploaded image and create its Image row.

    Args:
        payload: Base64 file content, optionally prefixed with "data:<type>;base64,"
        mime_type: MIME type header (e.g., "image/png")
        module: Owning module tag (e.g., "USERS")
        name: Original file name supplied by the client
        base_dir: Root upload directory (defaults to settings.file_directory)

    Returns:
        The created Image

    Raises:
        BadRequest: MIME type or payload cannot be decoded
    """
    extension = get_extension(mime_type)
    content = decode_payload(payload)

    directory = Path(base_dir or settings.file_directory) / module
    directory.mkdir(parents=True, exist_ok=True)

    file_name = unique_file_name(directory, extension)
    file_path = directory / f"{file_name}.{extension}"
    with open(file_path, "ab") as fh:
        fh.write(content)

    try:
        image = await Image.create(
            name=name or f"{file_name}.{extension}",
            type=mime_type,
            size=len(content),
            path=f"{settings.uploads_url.rstrip('/')}/{module}/{file_name}.{extension}",
            module=module,
        )
    except Exception:
        # No row -> no file
        file_path.unlink(missing_ok=True)
        raise
    logger.info("[images] stored module=%s path=%s size=%d", module, image.path, image.size)
    return image
