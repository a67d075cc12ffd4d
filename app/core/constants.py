"""
app/core/constants.py

Application-wide fixed constants.

These are business rules that are part of the system's contract and are
NOT configurable via environment variables.
"""

from typing import Tuple

# ── Upload form ────────────────────────────────────────────────────────────────

#: Multipart field that carries the uploaded document.
UPLOAD_FIELD_NAME: str = "document"

# ── Allowed file types ─────────────────────────────────────────────────────────

#: Only PDF files are accepted for upload.
ALLOWED_PDF_EXTENSION: str = ".pdf"

#: First bytes of every PDF document.
PDF_MAGIC_HEADER: bytes = b"%PDF-"

#: Character that must never appear in an original filename.
FORBIDDEN_FILENAME_CHAR: str = "/"

#: Lower-cased marker whose presence anywhere in the content rejects the file.
FORBIDDEN_CONTENT_MARKER: str = "<script>"

# ── Classification ─────────────────────────────────────────────────────────────

#: (keyword, category) pairs in priority order; first match wins.
CATEGORY_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("ilo", "ilo"),
    ("seclore", "seclore"),
    ("dsp", "dsp"),
)

DEFAULT_CATEGORY: str = "uncategorized"

# ── Stored file naming ─────────────────────────────────────────────────────────

#: Stored name layout: <category>_upload-<YYYY-MM-DD>-<suffix><ext>
STORED_NAME_TEMPLATE: str = "{category}_upload-{date}-{suffix}{extension}"

STORED_NAME_DATE_FORMAT: str = "%Y-%m-%d"

#: Inclusive upper bound of the random disambiguating suffix.
STORED_NAME_SUFFIX_MAX: int = 1_000_000_000

# ── Response messages ──────────────────────────────────────────────────────────

UPLOAD_SUCCESS_MESSAGE: str = "File uploaded successfully"
INTERNAL_ERROR_MESSAGE: str = "Internal Server Error"
