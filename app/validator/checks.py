"""
app/validator/checks.py

The individual upload checks, one function per rule.

Every check has the same signature so the pipeline can run them as an
ordered list:

    check(temp_path, original_name) -> None

A check returns None when the upload passes and raises the matching
UploadValidationError subclass when it does not. Checks never touch the
temp file beyond reading it; deleting it is the pipeline's job.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from app.core.constants import (
    ALLOWED_PDF_EXTENSION,
    FORBIDDEN_CONTENT_MARKER,
    FORBIDDEN_FILENAME_CHAR,
    PDF_MAGIC_HEADER,
)
from app.core.exceptions import (
    ForbiddenContentError,
    InvalidFileTypeError,
    InvalidPdfStructureError,
    UnsafeFileNameError,
)

Check = Callable[[Path, str], None]


def file_extension(original_name: str) -> str:
    """Lower-cased suffix of the original filename, '' when there is none."""
    return Path(original_name or "").suffix.lower()


def check_extension(temp_path: Path, original_name: str) -> None:
    """E2 — the extension must be exactly .pdf (case-insensitive)."""
    if file_extension(original_name) != ALLOWED_PDF_EXTENSION:
        raise InvalidFileTypeError()


def check_filename(temp_path: Path, original_name: str) -> None:
    """
    E3 — the original name must not contain '/'.

    Only the forward slash is rejected; backslashes and '..' pass through.
    """
    if FORBIDDEN_FILENAME_CHAR in original_name:
        raise UnsafeFileNameError()


def check_magic_header(temp_path: Path, original_name: str) -> None:
    """E4 — the first five bytes must be b'%PDF-'. Short files fail."""
    with open(temp_path, "rb") as fh:
        header = fh.read(len(PDF_MAGIC_HEADER))
    if header != PDF_MAGIC_HEADER:
        raise InvalidPdfStructureError()


def check_forbidden_content(temp_path: Path, original_name: str) -> None:
    """
    E5 — reject content containing '<script>' in any letter case.

    The whole file is decoded as UTF-8 with undecodable bytes replaced, so
    binary streams never raise here. This is a naive text heuristic, not a
    malware scanner: it can trip on binary data and misses obfuscated script.
    """
    content = temp_path.read_bytes().decode("utf-8", errors="replace")
    if FORBIDDEN_CONTENT_MARKER in content.lower():
        raise ForbiddenContentError()
