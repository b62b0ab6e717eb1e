"""File upload route for designers.

Files are written to the configured upload directory under a random name and
served back from ``/uploads``. Joined with the server origin, the returned
path can be used as a design's ``fileUrl`` or ``watermarkedPreviewUrl``.
"""

import logging
import re
import secrets
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile, status

from api.routes.auth import require_roles
from core.dependencies import SettingsDep
from core.exceptions import PayloadTooLargeError, ValidationError
from core.security import Identity
from models import Role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/uploads", tags=["Uploads"])

UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024

_SUFFIX_RE = re.compile(r"^\.[a-z0-9]{1,10}$")


def _safe_suffix(filename: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    return suffix if _SUFFIX_RE.match(suffix) else ""


@router.post("", status_code=status.HTTP_201_CREATED, summary="Upload a design file")
def upload_file(
    settings: SettingsDep,
    file: UploadFile = File(...),
    identity: Identity = Depends(require_roles(Role.DESIGNER)),
) -> dict:
    """Store an uploaded file.

    Args:
        settings: Application settings (upload directory and size cap).
        file: Multipart file field named ``file``.
        identity: Authenticated designer.

    Returns:
        Dictionary with the public URL, stored filename and size in bytes.

    Raises:
        ValidationError: If the upload is empty.
        PayloadTooLargeError: If the file exceeds ``MAX_FILE_SIZE``.
    """
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{secrets.token_hex(16)}{_safe_suffix(file.filename)}"
    target = upload_dir / filename

    size = 0
    stored = False
    try:
        with open(target, "wb") as out:
            while True:
                chunk = file.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > settings.max_file_size:
                    raise PayloadTooLargeError(
                        f"File exceeds the {settings.max_file_size} byte limit"
                    )
                out.write(chunk)
        if size == 0:
            raise ValidationError(
                "Empty file", errors=[{"field": "file", "message": "File is empty"}]
            )
        stored = True
    finally:
        # Never leave a partial file behind
        if not stored:
            target.unlink(missing_ok=True)

    logger.info("User %s uploaded %s (%d bytes)", identity.user_id, filename, size)
    return {
        "success": True,
        "url": f"{UPLOAD_URL_PREFIX}/{filename}",
        "filename": filename,
        "size": size,
    }
