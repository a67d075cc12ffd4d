"""
app/validator/upload_validator.py

Runs the ordered, fail-fast check chain against a spooled upload:

    E2 extension → E3 filename → E4 magic header → E5 forbidden content

E1 (presence) is enforced by the controller before anything is spooled.
On the first failing check the temp file is deleted and the
UploadValidationError propagates; later checks do not run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from app.core.exceptions import UploadValidationError
from app.core.logger import get_logger
from app.validator.checks import (
    Check,
    check_extension,
    check_filename,
    check_forbidden_content,
    check_magic_header,
)

logger = get_logger(__name__)

DEFAULT_CHECKS: Sequence[Check] = (
    check_extension,
    check_filename,
    check_magic_header,
    check_forbidden_content,
)


class UploadValidator:
    """Applies the check chain and owns temp-file cleanup on rejection."""

    def __init__(self, checks: Sequence[Check] | None = None) -> None:
        self._checks: Sequence[Check] = tuple(checks) if checks is not None else DEFAULT_CHECKS

    def validate(self, temp_path: Path, original_name: str) -> None:
        """
        Validate the upload at ``temp_path``.

        Args:
            temp_path     : Spooled copy of the upload, owned by the caller.
            original_name : Untrusted filename supplied by the client.

        Raises:
            UploadValidationError: The first failing check's error. The temp
                                   file has already been removed.
        """
        for check in self._checks:
            try:
                check(temp_path, original_name)
            except UploadValidationError as exc:
                logger.warning("Rejected '%s' — %s", original_name, exc.detail)
                discard(temp_path)
                raise

        logger.debug("'%s' passed %d check(s).", original_name, len(self._checks))


def discard(path: Path) -> None:
    """Delete ``path`` if it exists, logging instead of raising on failure."""
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.error("Could not remove temp file '%s': %s", path, exc)
