"""
app/core/exceptions.py

Custom exception hierarchy for the application.

Raising typed exceptions from services lets controllers catch specific
cases and return the correct HTTP status code without leaking internals.
"""


class AppBaseException(Exception):
    """Root exception — catch-all for any application-level error."""


# ── Validation exceptions (client errors, HTTP 400) ────────────────────────────

class UploadValidationError(AppBaseException):
    """
    Base for every rejected upload.

    Subclasses pin a stable ``code`` and ``message``; ``str(exc)`` renders
    the client-facing form ``"E<n> : <message>"``.
    """

    code: str = "E0"
    message: str = "Invalid upload"
    status_code: int = 400

    def __init__(self) -> None:
        super().__init__(self.detail)

    @property
    def detail(self) -> str:
        return f"{self.code} : {self.message}"


class MissingUploadError(UploadValidationError):
    """Raised when the request carries no file under the upload field."""

    code = "E1"
    message = "No file uploaded"


class InvalidFileTypeError(UploadValidationError):
    """Raised when the original filename does not end in .pdf."""

    code = "E2"
    message = "Only PDF files are allowed"


class UnsafeFileNameError(UploadValidationError):
    """Raised when the original filename contains a path separator."""

    code = "E3"
    message = "Invalid file name"


class InvalidPdfStructureError(UploadValidationError):
    """Raised when the content does not start with the PDF magic header."""

    code = "E4"
    message = "Invalid PDF structure"


class ForbiddenContentError(UploadValidationError):
    """Raised when the content contains a forbidden marker."""

    code = "E5"
    message = "PDF contains forbidden content"


# ── Infrastructure exceptions (server errors, HTTP 500) ────────────────────────

class StorageError(AppBaseException):
    """Raised when an upload cannot be spooled or moved into the uploads directory."""


class MetadataStoreError(AppBaseException):
    """Raised when an interaction with the metadata store fails."""
