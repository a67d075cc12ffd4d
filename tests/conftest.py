"""
tests/conftest.py

Shared pytest fixtures available to all test modules.

Fixtures defined here are auto-discovered by pytest — no import needed.

The app reads its settings at import time, so the uploads directory and
the SQLite database are pointed at a throwaway directory *before*
``app.main`` is imported.
"""

import io
import os
import shutil
import tempfile
from pathlib import Path

import pytest

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="pdf-upload-tests-"))
os.environ["UPLOAD_DIR"] = str(_TEST_ROOT / "uploads")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'metadata.db'}"
os.environ.pop("INCOMING_DIR", None)
os.environ.pop("KEEP_FAILED_UPLOADS", None)

from fastapi.testclient import TestClient  # noqa: E402

from app.core.config import settings  # noqa: E402
from app.main import app  # noqa: E402


def pytest_sessionfinish(session, exitstatus) -> None:
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


# ── Core client fixture ────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def client() -> TestClient:
    """
    A synchronous TestClient wrapping the FastAPI app.

    session-scoped so the app is instantiated once per test run.
    The lifespan context (store connect, service wiring) is entered
    automatically.
    """
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def upload_dir() -> Path:
    return settings.upload_path


@pytest.fixture
def incoming_dir() -> Path:
    return settings.incoming_path


# ── Sample file fixtures ───────────────────────────────────────────────────────

@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Minimal bytes that pass every content check."""
    return b"%PDF-1.4\n1 0 obj << /Type /Catalog >> endobj\n%%EOF"


def document(filename: str, content: bytes, content_type: str = "application/pdf") -> tuple:
    """
    A (field_name, (filename, file_obj, content_type)) tuple ready for
    use with TestClient's `files=` parameter.
    """
    return ("document", (filename, io.BytesIO(content), content_type))


@pytest.fixture
def make_document():
    """Factory fixture exposing ``document`` to test modules."""
    return document


@pytest.fixture
def sample_pdf_file(sample_pdf_bytes) -> tuple:
    """
    Usage:
        response = client.post("/upload", files=[sample_pdf_file])
    """
    return document("dsp_report.pdf", sample_pdf_bytes)


@pytest.fixture
def sample_txt_file() -> tuple:
    """A non-PDF upload tuple for negative-case tests."""
    return document("notes.txt", b"%PDF-1.4 but really text", "text/plain")
