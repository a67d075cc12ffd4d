"""app/storage/__init__.py — public API of the storage package."""

from app.storage.finalizer import StorageFinalizer, StoredFile
from app.storage.incoming import UploadRequest, spool_upload

__all__ = [
    "StorageFinalizer",
    "StoredFile",
    "UploadRequest",
    "spool_upload",
]
