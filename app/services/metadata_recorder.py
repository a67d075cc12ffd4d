"""
app/services/metadata_recorder.py

Builds the metadata record for a stored upload and persists it through
the injected MetadataStore. One attempt, no retry.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

from app.core.exceptions import MetadataStoreError
from app.core.logger import get_logger
from app.metadata_store.base import FileRecordDraft, MetadataStore
from app.models.upload_models import Category, FileRecord

logger = get_logger(__name__)


class MetadataRecorder:

    def __init__(
        self,
        store: MetadataStore,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def record(
        self,
        original_name: str,
        stored_name: str,
        category: Category,
        file_path: str,
    ) -> FileRecord:
        """
        Persist a FileRecord for a file that is already in uploads/.

        Raises:
            MetadataStoreError: The store rejected or could not take the write.
        """
        draft = FileRecordDraft(
            original_name=original_name,
            stored_name=stored_name,
            category=category,
            file_path=file_path,
            upload_date=self._clock(),
        )

        try:
            record = await self._store.insert(draft)
        except MetadataStoreError:
            raise
        except Exception as exc:
            raise MetadataStoreError(f"Could not record '{stored_name}': {exc}") from exc

        logger.info("Metadata recorded — id=%s  stored_name=%s", record.id, record.stored_name)
        return record
