"""app/metadata_store/__init__.py — public API of the metadata_store package."""

from app.metadata_store.base import FileRecordDraft, MetadataStore
from app.metadata_store.sql_store import SqlMetadataStore

__all__ = [
    "MetadataStore",
    "FileRecordDraft",
    "SqlMetadataStore",
]
