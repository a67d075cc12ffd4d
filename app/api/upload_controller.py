"""
app/api/upload_controller.py

Handles incoming requests to POST /upload.

This layer is responsible only for HTTP concerns:
  - Parsing the multipart form and checking that the 'document' field
    carries a named file (E1).
  - Delegating spooling, validation, storage and recording to UploadService.
  - Translating service-level errors into appropriate HTTP responses.

Responses:
  200  The file was stored.  Body: { "message": "File uploaded successfully",
       "data": <FileRecord> }.
  400  The upload was rejected.  Body: { "message": "E<n> : <description>" }
       with n in 1..5.
  500  Anything else went wrong.  Body: { "message": "Internal Server Error" }.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile as StarletteUploadFile

from app.core.constants import (
    INTERNAL_ERROR_MESSAGE,
    UPLOAD_FIELD_NAME,
    UPLOAD_SUCCESS_MESSAGE,
)
from app.core.exceptions import MissingUploadError, UploadValidationError
from app.core.logger import get_logger
from app.models.upload_models import MessageResponse, UploadResponse
from app.services.upload_service import UploadService

logger = get_logger(__name__)

router = APIRouter(tags=["Upload"])


# ── Helpers ────────────────────────────────────────────────────────────────────

def get_upload_service(request: Request) -> UploadService:
    """Dependency returning the UploadService wired up at startup."""
    return request.app.state.upload_service


def _message(message: str, status: int) -> JSONResponse:
    """Return a JSON response with the { "message": ... } shape."""
    return JSONResponse(status_code=status, content={"message": message})


def _rejected(exc: UploadValidationError) -> JSONResponse:
    return _message(exc.detail, exc.status_code)


# ── Endpoint ───────────────────────────────────────────────────────────────────

@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={400: {"model": MessageResponse}, 500: {"model": MessageResponse}},
    summary="Upload a single PDF document",
)
async def upload(
    request: Request,
    service: UploadService = Depends(get_upload_service),
) -> JSONResponse:
    """
    Accepts one PDF as multipart/form-data:

        curl -F "document=@report.pdf" http://localhost:8000/upload

    The file is validated, classified by name, stored under uploads/ and
    its metadata recorded.
    """
    # ── 1. Parse multipart form ────────────────────────────────────────────────
    try:
        form = await request.form()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Unreadable multipart payload: %s", exc)
        return _rejected(MissingUploadError())

    try:
        # ── 2. E1: a named file must be present ────────────────────────────────
        document = form.get(UPLOAD_FIELD_NAME)
        if not isinstance(document, StarletteUploadFile) or not document.filename:
            logger.warning("Upload request without a '%s' file.", UPLOAD_FIELD_NAME)
            return _rejected(MissingUploadError())

        logger.info("Upload request received — '%s'", document.filename)

        # ── 3. Delegate to service ─────────────────────────────────────────────
        try:
            record = await service.upload(document)

        except UploadValidationError as exc:
            return _rejected(exc)

        except Exception as exc:  # noqa: BLE001
            logger.exception("Upload of '%s' failed: %s", document.filename, exc)
            return _message(INTERNAL_ERROR_MESSAGE, 500)

    finally:
        await form.close()

    result = UploadResponse(message=UPLOAD_SUCCESS_MESSAGE, data=record)
    return JSONResponse(status_code=200, content=result.to_json())
