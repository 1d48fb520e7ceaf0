"""Boundary checks for uploaded files.

The extension allow-list and the size ceiling are a fixed contract of the
upload endpoint and are not read from settings.
"""

import os

from app.processor.exceptions import UploadValidationError
from app.processor.models import UploadedArtifact

MAX_UPLOAD_BYTES = 100 * 1024 * 1024

CONTENT_TYPES: dict[str, str] = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ".doc": "application/msword",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
    ".tif": "image/tiff",
    ".heif": "image/heif",
    ".heic": "image/heif",
}

ALLOWED_EXTENSIONS = frozenset(CONTENT_TYPES)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def clean_filename(filename: str) -> str:
    """Drop any client-side directory part from the submitted name."""
    return os.path.basename(filename.replace("\\", "/")).strip()


def file_extension(filename: str) -> str:
    return os.path.splitext(filename)[1].lower()


def content_type_for(filename: str) -> str:
    return CONTENT_TYPES.get(file_extension(filename), DEFAULT_CONTENT_TYPE)


def check_upload_size(size: int) -> None:
    """Reject uploads above the size ceiling."""
    if size > MAX_UPLOAD_BYTES:
        raise UploadValidationError("File is too large. Maximum file size is 100 MB.")


def validate_upload(filename: str, data: bytes) -> UploadedArtifact:
    """Check name, size and content of an upload.

    Raises:
        UploadValidationError: if the file is empty, too large or of an unsupported type.
    """
    name = clean_filename(filename or "")
    if not name or not data:
        raise UploadValidationError("Please select a valid file.")

    extension = file_extension(name)
    if extension not in ALLOWED_EXTENSIONS:
        raise UploadValidationError(
            f"Unsupported file type '{extension}'. Please upload a PDF, DOCX, "
            "or image file (JPG, PNG, BMP, TIFF, HEIF)."
        )

    check_upload_size(len(data))

    return UploadedArtifact(filename=name, data=data, content_type=content_type_for(name))
