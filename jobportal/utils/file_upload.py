"""
File Upload Utility - Intake for avatars and resumes.

Rules per purpose:
- avatar: any image/* MIME type
- resume: application/pdf only

Max file size: 5MB (MAX_UPLOAD_BYTES)

Accepted files are stored under `{upload_dir}/profiles` or
`{upload_dir}/resumes` with a generated name:

    {purpose}-{epoch-milliseconds}-{random suffix}{original extension}

and referenced from records by their public path, e.g.
`/uploads/resumes/resume-1718000000000-48213377.pdf`.
"""

import os
import secrets
import time
from fastapi import UploadFile

from jobportal.core.config import get_settings
from jobportal.core.errors import UploadRejected, UploadTooLarge
from jobportal.core.logging_config import get_logger
from jobportal.schemas.schemas import UploadPurpose

logger = get_logger(__name__)

PUBLIC_PREFIX = "/uploads"
PDF_MIME_TYPE = "application/pdf"

PURPOSE_DIRS = {
    UploadPurpose.avatar: "profiles",
    UploadPurpose.resume: "resumes",
}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if not filename or '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


def check_content_type(purpose: UploadPurpose, content_type: str) -> None:
    """Reject files whose declared MIME type does not fit the purpose."""
    content_type = (content_type or "").lower()
    if purpose is UploadPurpose.avatar and not content_type.startswith("image/"):
        raise UploadRejected("Only image files are allowed for profile pictures")
    if purpose is UploadPurpose.resume and content_type != PDF_MIME_TYPE:
        raise UploadRejected("Only PDF files are allowed for resumes")


def generate_storage_name(purpose: UploadPurpose, filename: str) -> str:
    timestamp_ms = time.time_ns() // 1_000_000
    suffix = secrets.randbelow(10 ** 9)
    return f"{purpose.value}-{timestamp_ms}-{suffix}{get_file_extension(filename)}"


def resolve_upload_path(reference: str) -> str:
    """Map a public reference (/uploads/<dir>/<name>) to its path on disk."""
    relative = reference[len(PUBLIC_PREFIX):].lstrip("/")
    return os.path.join(get_settings().upload_dir, *relative.split("/"))


async def save_upload(file: UploadFile, purpose: UploadPurpose) -> str:
    """
    Validate and store an uploaded file.

    Args:
        file: FastAPI UploadFile
        purpose: avatar or resume

    Returns:
        Public reference of the stored file

    Raises:
        UploadRejected on wrong type, UploadTooLarge over the size ceiling.
        Nothing is written to disk when validation fails.
    """
    settings = get_settings()

    if not file.filename:
        raise UploadRejected("No file provided")

    check_content_type(purpose, file.content_type)

    # Read one byte past the ceiling to detect oversize files
    content = await file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise UploadTooLarge(
            f"File too large. Maximum size: {settings.max_upload_mb:g}MB"
        )

    subdir = PURPOSE_DIRS[purpose]
    directory = os.path.join(settings.upload_dir, subdir)
    os.makedirs(directory, exist_ok=True)

    name = generate_storage_name(purpose, file.filename)
    path = os.path.join(directory, name)
    # Exclusive create: a name is written at most once. FileExistsError
    # propagates untouched; the existing file belongs to another upload.
    out = open(path, "xb")
    try:
        with out:
            out.write(content)
    except OSError:
        os.remove(path)
        raise

    logger.info("Stored %s upload %s (%d bytes)", purpose.value, name, len(content))
    return f"{PUBLIC_PREFIX}/{subdir}/{name}"


def discard_upload(reference: str) -> bool:
    """Delete a stored upload whose owning record was never written."""
    path = resolve_upload_path(reference)
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    logger.info("Discarded upload %s", reference)
    return True
