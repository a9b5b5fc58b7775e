"""Validation of uploaded CV documents."""

import base64
from typing import Optional

from portfolio_app.exceptions import UploadTooLargeError, ValidationError


ACCEPTED_MIME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

PROFESSION_MIN_LENGTH = 3
PROFESSION_MAX_LENGTH = 100


def validate_upload(
    content: bytes,
    mime_type: Optional[str],
    max_bytes: int = MAX_UPLOAD_BYTES,
) -> None:
    """
    Check an uploaded CV before it is sent anywhere.

    Args:
        content: File bytes
        mime_type: Declared content type
        max_bytes: Size limit

    Raises:
        ValidationError: If the file is empty, too large, or of an unsupported type
    """
    if not content:
        raise ValidationError("CV file is required.")
    if len(content) > max_bytes:
        raise UploadTooLargeError(f"Max file size is {max_bytes // (1024 * 1024)}MB.")
    base_type = (mime_type or "").split(";")[0].strip().lower()
    if base_type not in ACCEPTED_MIME_TYPES:
        raise ValidationError("Invalid file type. Supported: PDF, DOC, DOCX, TXT.")


def validate_profession(profession: Optional[str]) -> str:
    """
    Check the profession declared next to the upload.

    Returns:
        str: The stripped profession

    Raises:
        ValidationError: If it is shorter than 3 or longer than 100 characters
    """
    value = (profession or "").strip()
    if len(value) < PROFESSION_MIN_LENGTH:
        raise ValidationError("Profession is required (min 3 characters).")
    if len(value) > PROFESSION_MAX_LENGTH:
        raise ValidationError("Profession must be at most 100 characters.")
    return value


def to_data_uri(content: bytes, mime_type: str) -> str:
    """Encode file bytes as a base64 data URI."""
    payload = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type.split(';')[0].strip()};base64,{payload}"
