"""
Payment QR upload for FairShare
Validates an image file and stores it inline as a data URI
"""

import base64
import binascii
import io
import re
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

from config import MAX_QR_SIZE_BYTES
from utils import validate_image_path

DATA_URI_PATTERN = re.compile(r'^data:(image/[\w.+-]+);base64,(.+)$', re.DOTALL)


class QRUploadError(Exception):
    """The QR image could not be accepted"""


class QRImageTooLargeError(QRUploadError):
    """The QR image exceeds the size ceiling"""


def load_qr_image(image_path: Union[str, Path], max_bytes: int = MAX_QR_SIZE_BYTES) -> str:
    """Read and verify a QR image, returning it as a data URI"""
    path = Path(image_path)

    if not validate_image_path(str(path)):
        raise QRUploadError(f"Invalid or unsupported image: {image_path}")

    # checked before reading anything
    size = path.stat().st_size
    if size > max_bytes:
        raise QRImageTooLargeError(
            f"File too large: {size / (1024 * 1024):.1f} MB (max {max_bytes / (1024 * 1024):.0f} MB)"
        )

    content = path.read_bytes()
    try:
        with Image.open(io.BytesIO(content)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise QRUploadError(f"Not a readable image: {e}") from e

    mime_type = Image.MIME.get(image_format, 'image/png')
    encoded = base64.b64encode(content).decode('ascii')
    return f"data:{mime_type};base64,{encoded}"


def decode_qr_image(data_uri: str) -> Image.Image:
    """Turn a stored data URI back into an image"""
    match = DATA_URI_PATTERN.match(data_uri or '')
    if not match:
        raise QRUploadError("Stored QR code is not an image data URI")

    try:
        content = base64.b64decode(match.group(2), validate=True)
        image = Image.open(io.BytesIO(content))
        image.load()
    except (binascii.Error, UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise QRUploadError(f"Stored QR code is unreadable: {e}") from e
    return image
