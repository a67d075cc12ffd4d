"""
app/services/upload_service.py

Orchestrates the upload pipeline for one request:

    UploadFile
      └─ spool_upload()                 → UploadRequest (temp file)
           └─ UploadValidator.validate()  E2 → E3 → E4 → E5
                └─ StorageFinalizer.finalize()   → StoredFile
                     └─ MetadataRecorder.record()  → FileRecord

Request states:

    Received → Validating → {Rejected | Validated}
             → Finalizing → {Failed | Stored}
             → Recording  → {Failed | Completed}

Validation failures propagate as UploadValidationError with the temp file
already removed. Anything else is an infrastructure failure: the temp file,
if still present, is removed (or kept when ``keep_failed_uploads`` is set)
and the original exception propagates for the controller to turn into 500.

All collaborators are constructor-injected so tests can swap them out;
the app wires the real ones in its lifespan hook.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.exceptions import UploadValidationError
from app.core.logger import get_logger
from app.metadata_store.base import MetadataStore
from app.metadata_store.sql_store import SqlMetadataStore
from app.models.upload_models import FileRecord
from app.services.metadata_recorder import MetadataRecorder
from app.storage.finalizer import StorageFinalizer, StoredFile
from app.storage.incoming import UploadRequest, spool_upload
from app.validator.upload_validator import UploadValidator, discard

logger = get_logger(__name__)


class UploadService:
    """
    Runs one upload from spooled temp file to persisted FileRecord.

    Design choices:
    - **Fail fast**: the first failing check ends the request; nothing
      downstream runs.
    - **No compensation**: if the record write fails after the move, the
      stored file stays in uploads/ without a record and is logged.
    """

    def __init__(
        self,
        store: MetadataStore | None = None,
        validator: UploadValidator | None = None,
        finalizer: StorageFinalizer | None = None,
        recorder: MetadataRecorder | None = None,
        incoming_dir: Path | None = None,
        keep_failed_uploads: bool | None = None,
    ) -> None:
        self._validator: UploadValidator = validator or UploadValidator()
        self._finalizer: StorageFinalizer = finalizer or StorageFinalizer()
        self._recorder: MetadataRecorder = recorder or MetadataRecorder(
            store or SqlMetadataStore()
        )
        self._incoming_dir: Path = Path(incoming_dir or settings.incoming_path)
        self._keep_failed_uploads: bool = (
            settings.keep_failed_uploads if keep_failed_uploads is None else keep_failed_uploads
        )

    # ── Public API ─────────────────────────────────────────────────────────────

    async def upload(self, upload: UploadFile) -> FileRecord:
        """
        Spool a multipart part to disk and run it through the pipeline.

        Raises:
            UploadValidationError: The upload was rejected (HTTP 400).
            StorageError:          The part could not be spooled.
            Exception:             Any other failure (HTTP 500).
        """
        request = await spool_upload(upload, self._incoming_dir)
        return await self.process(request)

    async def process(self, request: UploadRequest) -> FileRecord:
        """
        Validate, store and record an already spooled upload.

        Args:
            request: The spooled upload; this call takes ownership of its
                     temp file.

        Returns:
            The persisted FileRecord.
        """
        name = request.original_name
        stored: StoredFile | None = None

        try:
            logger.debug("'%s' — validating.", name)
            await run_in_threadpool(self._validator.validate, request.temp_path, name)

            logger.debug("'%s' — finalizing.", name)
            stored = await run_in_threadpool(
                self._finalizer.finalize, request.temp_path, name, request.extension
            )

            logger.debug("'%s' — recording.", name)
            record = await self._recorder.record(
                original_name=name,
                stored_name=stored.stored_name,
                category=stored.category,
                file_path=str(stored.file_path),
            )

        except UploadValidationError:
            raise

        except Exception:
            if stored is not None:
                logger.error(
                    "'%s' stored at '%s' but has no metadata record.", name, stored.file_path
                )
            self._cleanup(request.temp_path)
            raise

        logger.info("Upload complete — '%s' → '%s'.", name, record.stored_name)
        return record

    # ── Internals ──────────────────────────────────────────────────────────────

    def _cleanup(self, temp_path: Path) -> None:
        """Best-effort handling of a temp file left behind by a failed request."""
        if not temp_path.exists():
            return
        if self._keep_failed_uploads:
            logger.error("Kept temp file of failed upload for inspection: '%s'", temp_path)
            return
        discard(temp_path)
