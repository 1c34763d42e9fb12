"""
Upload validation for image files.

The declared MIME type and the filename extension are checked independently
and both have to be on the allow-list.
"""

import os
from typing import Optional

from app.core.exceptions import NoFileProvidedError, UnsupportedFileTypeError

ALLOWED_IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png"})
ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpg", ".jpeg", ".png"})
ALLOWED_TYPE_LABELS = ["JPEG", "JPG", "PNG"]


def _normalize_mime(content_type: Optional[str]) -> str:
    # "image/png; charset=binary" -> "image/png"
    return (content_type or "").split(";")[0].strip().lower()


def is_allowed_image(filename: str, content_type: Optional[str]) -> bool:
    extension = os.path.splitext(filename)[1].lower()
    return (
        _normalize_mime(content_type) in ALLOWED_IMAGE_MIME_TYPES
        and extension in ALLOWED_IMAGE_EXTENSIONS
    )


def validate_image_upload(filename: Optional[str], content_type: Optional[str]) -> None:
    """
    Raise if the candidate upload is not an accepted image.

    Raises:
        NoFileProvidedError: no file (or a file part without a name) was sent
        UnsupportedFileTypeError: MIME type or extension is not allowed
    """
    if not filename:
        raise NoFileProvidedError()

    if not is_allowed_image(filename, content_type):
        raise UnsupportedFileTypeError(filename, content_type, ALLOWED_TYPE_LABELS)
