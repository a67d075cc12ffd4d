"""
app/metadata_store/base.py

Abstract interface for the metadata store layer.

Design goals:
  - Services depend only on this interface, never on a concrete backend.
  - FileRecordDraft (what we write) and FileRecord (what the store hands
    back) are the shared vocabulary across layers.
"""

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from app.models.upload_models import Category, FileRecord


# ── Shared data-transfer objects ──────────────────────────────────────────────

@dataclass
class FileRecordDraft:
    """
    A file record before the store has assigned an id and timestamps.

    Attributes:
        original_name : Client-supplied filename, stored as-is.
        stored_name   : Generated name of the file in uploads/.
        category      : Classifier output.
        file_path     : Absolute path of the stored file.
        upload_date   : When the upload was accepted.
    """

    original_name: str
    stored_name: str
    category: Category
    file_path: str
    upload_date: datetime


# ── Abstract base ──────────────────────────────────────────────────────────────

class MetadataStore(ABC):
    """
    Contract every metadata backend must fulfil.

    Concrete implementations (e.g. SqlMetadataStore) wrap a specific backend
    and translate its API to this interface.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the backend and make sure the schema exists.

        Raises:
            MetadataStoreError: If the backend is unreachable.
        """

    @abstractmethod
    async def insert(self, draft: FileRecordDraft) -> FileRecord:
        """
        Persist one record.

        Returns:
            The stored record including id and store-maintained timestamps.

        Raises:
            MetadataStoreError: If the write fails.
        """

    @abstractmethod
    async def get(self, record_id: uuid.UUID) -> Optional[FileRecord]:
        """Return the record with ``record_id`` or None."""

    @abstractmethod
    async def close(self) -> None:
        """Release connections held by the backend."""
