"""app/validator/__init__.py — public API of the validator package."""

from app.validator.checks import file_extension
from app.validator.upload_validator import UploadValidator, discard

__all__ = [
    "UploadValidator",
    "discard",
    "file_extension",
]
