"""
app/main.py

FastAPI application entry point.

Responsibilities:
  - Create the FastAPI app with metadata from config
  - Connect the metadata store at startup (startup fails if it cannot)
    and wire the UploadService into app.state
  - Register all API routers and CORS
  - Add a global exception handler for uncaught AppBaseException
  - Expose a /health endpoint for liveness probes
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.upload_controller import router as upload_router
from app.core.config import settings
from app.core.constants import INTERNAL_ERROR_MESSAGE
from app.core.exceptions import AppBaseException
from app.core.logger import get_logger
from app.metadata_store.sql_store import SqlMetadataStore
from app.services.upload_service import UploadService
from app.storage.finalizer import StorageFinalizer

logger = get_logger(__name__)


# ── Lifespan ───────────────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Connect the store and build the upload service once per process."""
    settings.upload_path.mkdir(parents=True, exist_ok=True)
    settings.incoming_path.mkdir(parents=True, exist_ok=True)

    store = SqlMetadataStore()
    try:
        await store.connect()
    except AppBaseException:
        logger.exception("Metadata store connection failed — not starting.")
        await store.close()
        raise

    app.state.upload_service = UploadService(
        store=store,
        finalizer=StorageFinalizer(upload_dir=settings.upload_path),
        incoming_dir=settings.incoming_path,
    )
    logger.info("Uploads directory: %s", settings.upload_path)

    yield

    await store.close()


# ── App instance ───────────────────────────────────────────────────────────────

app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=(
        "Accepts a single PDF upload, validates it, classifies it by "
        "filename and stores it alongside a metadata record."
    ),
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ────────────────────────────────────────────────────────────────────

app.include_router(upload_router)

# ── Global exception handler ───────────────────────────────────────────────────

@app.exception_handler(AppBaseException)
async def app_exception_handler(request: Request, exc: AppBaseException) -> JSONResponse:
    """
    Safety-net for any AppBaseException that escapes controller-level handling.
    Returns the generic error shape: { "message": "Internal Server Error" }
    """
    logger.exception("Unhandled application error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


# ── Health endpoint ────────────────────────────────────────────────────────────

@app.get("/health", tags=["Health"], summary="Liveness probe")
async def health() -> dict:
    """Returns 200 OK when the service is running."""
    return {"status": "ok", "version": settings.app_version}


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    logger.info("Server running on port %d", settings.port)
    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
