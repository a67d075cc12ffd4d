"""
app/storage/finalizer.py

Moves a validated upload into the permanent uploads directory under a
generated name:

    <category>_upload-<YYYY-MM-DD>-<suffix><ext>

The date is today's UTC date and the suffix a random integer in
[0, 1e9]. No uniqueness check is made; two uploads on the same day
collide only if they draw the same suffix.
"""

from __future__ import annotations

import random
import shutil
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from app.classifier import classify
from app.core.config import settings
from app.core.constants import (
    STORED_NAME_DATE_FORMAT,
    STORED_NAME_SUFFIX_MAX,
    STORED_NAME_TEMPLATE,
)
from app.core.exceptions import StorageError
from app.core.logger import get_logger
from app.models.upload_models import Category

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _random_suffix() -> int:
    return random.randint(0, STORED_NAME_SUFFIX_MAX)


@dataclass
class StoredFile:
    """Where a finalized upload ended up."""

    stored_name: str
    file_path: Path
    category: Category


class StorageFinalizer:
    """
    Names and moves validated uploads.

    The clock and suffix source are injectable so tests can pin the
    generated name.
    """

    def __init__(
        self,
        upload_dir: Path | None = None,
        clock: Callable[[], datetime] | None = None,
        suffix: Callable[[], int] | None = None,
    ) -> None:
        self._upload_dir: Path = Path(upload_dir or settings.upload_path).resolve()
        self._clock = clock or _utcnow
        self._suffix = suffix or _random_suffix

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    def stored_name(self, category: Category, extension: str) -> str:
        """Compose a fresh stored name for the given category and extension."""
        return STORED_NAME_TEMPLATE.format(
            category=category.value,
            date=self._clock().strftime(STORED_NAME_DATE_FORMAT),
            suffix=self._suffix(),
            extension=extension,
        )

    def finalize(self, temp_path: Path, original_name: str, extension: str) -> StoredFile:
        """
        Move ``temp_path`` into the uploads directory.

        Args:
            temp_path     : Validated temp file.
            original_name : Client filename, used for classification only.
            extension     : Lower-cased extension appended to the stored name.

        Returns:
            StoredFile with the generated name and absolute final path.

        Raises:
            StorageError: If the move fails. The temp file is left where it
                          is; deciding its fate is up to the caller.
        """
        category = classify(original_name)
        name = self.stored_name(category, extension)
        target = self._upload_dir / name

        try:
            self._upload_dir.mkdir(parents=True, exist_ok=True)
            # Rename when on the same filesystem, copy + delete otherwise.
            shutil.move(str(temp_path), str(target))
        except OSError as exc:
            raise StorageError(
                f"Could not move '{temp_path}' to '{target}': {exc}"
            ) from exc

        logger.info("Stored '%s' as '%s' [%s].", original_name, name, category.value)
        return StoredFile(stored_name=name, file_path=target, category=category)
