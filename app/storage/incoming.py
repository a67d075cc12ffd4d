"""
app/storage/incoming.py

Spools a decoded multipart part to a temp file under the incoming
directory and describes it as an UploadRequest.

The incoming directory lives beside the permanent uploads directory so
the later move is a same-filesystem rename.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path

from fastapi import UploadFile

from app.core.exceptions import StorageError
from app.core.logger import get_logger
from app.validator.checks import file_extension

logger = get_logger(__name__)

#: Bytes read from the multipart part per iteration.
SPOOL_CHUNK_SIZE = 1024 * 1024


@dataclass
class UploadRequest:
    """
    One received upload, alive for a single HTTP request.

    Attributes:
        temp_path     : Spooled bytes. Owned by the request handler until
                        moved into uploads/ or deleted.
        original_name : Client-supplied filename, untrusted.
        extension     : Lower-cased suffix of original_name ('' if none).
    """

    temp_path: Path
    original_name: str
    extension: str


async def spool_upload(upload: UploadFile, incoming_dir: Path) -> UploadRequest:
    """
    Copy ``upload`` to a randomly named file in ``incoming_dir``.

    Raises:
        StorageError: If the temp file cannot be written. Any partial file
                      is removed before raising.
    """
    original_name = upload.filename or ""
    temp_path = incoming_dir / uuid.uuid4().hex

    try:
        incoming_dir.mkdir(parents=True, exist_ok=True)
        size = 0
        with open(temp_path, "wb") as out:
            while True:
                chunk = await upload.read(SPOOL_CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk)
                size += len(chunk)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise StorageError(f"Could not spool '{original_name}' to '{temp_path}': {exc}") from exc

    logger.debug("Spooled '%s' (%d bytes) to '%s'.", original_name, size, temp_path)
    return UploadRequest(
        temp_path=temp_path,
        original_name=original_name,
        extension=file_extension(original_name),
    )
