"""
app/metadata_store/sql_store.py

SQLAlchemy (async) implementation of the MetadataStore interface.

The connection string comes from ``settings.database_url``; SQLite via
aiosqlite is the default, any async SQLAlchemy URL works (e.g.
``postgresql+asyncpg://...``). All backend-specific details are contained
here — the rest of the application never imports from `sqlalchemy`.
"""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from app.core.exceptions import MetadataStoreError
from app.core.logger import get_logger
from app.metadata_store.base import FileRecordDraft, MetadataStore
from app.metadata_store.orm import Base, FileRecordRow
from app.models.upload_models import FileRecord

logger = get_logger(__name__)


class SqlMetadataStore(MetadataStore):
    """
    MetadataStore backed by a relational database through an async engine.

    The engine is created on construction but no connection is opened until
    ``connect()``; one instance is shared for the lifetime of the app.
    """

    def __init__(self, database_url: str | None = None, echo: bool = False) -> None:
        """
        Args:
            database_url : Async SQLAlchemy URL.
                           Defaults to ``settings.database_url``.
            echo         : Log every SQL statement.
        """
        self._url = database_url or settings.database_url
        self._engine = create_async_engine(self._url, echo=echo, pool_pre_ping=True)
        self._session_factory = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def safe_url(self) -> str:
        """The connection URL with any password masked, for logging."""
        return make_url(self._url).render_as_string(hide_password=True)

    # ── MetadataStore interface ────────────────────────────────────────────────

    async def connect(self) -> None:
        """Create the schema if needed and verify connectivity."""
        logger.info("Connecting metadata store — %s", self.safe_url)
        self._ensure_sqlite_directory()

        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
                await conn.execute(text("SELECT 1"))
        except Exception as exc:
            raise MetadataStoreError(
                f"Failed to connect to metadata store at '{self.safe_url}': {exc}"
            ) from exc

        logger.info("Metadata store ready.")

    async def insert(self, draft: FileRecordDraft) -> FileRecord:
        """Insert one row and return it with the store-assigned fields."""
        row = FileRecordRow(
            original_name=draft.original_name,
            stored_name=draft.stored_name,
            category=draft.category,
            file_path=draft.file_path,
            upload_date=draft.upload_date,
        )

        try:
            async with self._session_factory() as session:
                session.add(row)
                await session.commit()
                await session.refresh(row)
        except Exception as exc:
            raise MetadataStoreError(
                f"insert failed for '{draft.stored_name}': {exc}"
            ) from exc

        logger.debug("Recorded '%s' as %s.", draft.stored_name, row.id)
        return FileRecord.model_validate(row)

    async def get(self, record_id: uuid.UUID) -> Optional[FileRecord]:
        try:
            async with self._session_factory() as session:
                row = await session.get(FileRecordRow, record_id)
        except Exception as exc:
            raise MetadataStoreError(f"get failed for {record_id}: {exc}") from exc

        return FileRecord.model_validate(row) if row is not None else None

    async def close(self) -> None:
        await self._engine.dispose()
        logger.debug("Metadata store connections released.")

    # ── Internals ──────────────────────────────────────────────────────────────

    def _ensure_sqlite_directory(self) -> None:
        """SQLite will not create missing parent directories of its file."""
        url = make_url(self._url)
        if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
            return
        Path(url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
