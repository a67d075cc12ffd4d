"""
tests/api/test_upload_controller.py

End-to-end tests for POST /upload through the real app: real validator,
real finalizer writing into the test uploads directory, real SQLite
metadata store (see conftest.py).
"""

import io
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.core.exceptions import MetadataStoreError


# ── Helpers ────────────────────────────────────────────────────────────────────

def _leftovers(incoming_dir: Path) -> list:
    return list(incoming_dir.iterdir()) if incoming_dir.exists() else []


# ── Success ────────────────────────────────────────────────────────────────────

class TestUploadSuccess:

    def test_valid_pdf_is_stored_and_recorded(
        self, client: TestClient, sample_pdf_file, upload_dir, incoming_dir
    ) -> None:
        response = client.post("/upload", files=[sample_pdf_file])

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "File uploaded successfully"

        data = body["data"]
        today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        assert data["originalName"] == "dsp_report.pdf"
        assert data["category"] == "dsp"
        assert re.fullmatch(rf"dsp_upload-{today}-\d+\.pdf", data["storedName"])
        assert data["id"]
        assert data["uploadDate"]

        stored = Path(data["filePath"])
        assert stored.is_absolute()
        assert stored.parent == upload_dir
        assert stored.name == data["storedName"]
        assert stored.read_bytes().startswith(b"%PDF-1.4")
        assert _leftovers(incoming_dir) == []

    def test_uncategorized_upload(self, client: TestClient, make_document, sample_pdf_bytes) -> None:
        response = client.post("/upload", files=[make_document("readme.pdf", sample_pdf_bytes)])

        assert response.status_code == 200
        assert response.json()["data"]["category"] == "uncategorized"

    def test_upper_case_extension_is_kept_lower_case(
        self, client: TestClient, make_document, sample_pdf_bytes
    ) -> None:
        response = client.post("/upload", files=[make_document("ILO-Plan.PDF", sample_pdf_bytes)])

        data = response.json()["data"]
        assert data["category"] == "ilo"
        assert data["storedName"].endswith(".pdf")

    def test_same_name_twice_gives_two_files(
        self, client: TestClient, make_document, sample_pdf_bytes
    ) -> None:
        def send(_):
            return client.post("/upload", files=[make_document("seclore.pdf", sample_pdf_bytes)])

        with ThreadPoolExecutor(max_workers=2) as pool:
            first, second = list(pool.map(send, range(2)))

        a, b = first.json()["data"], second.json()["data"]
        assert first.status_code == second.status_code == 200
        assert a["id"] != b["id"]
        assert a["storedName"] != b["storedName"]
        assert Path(a["filePath"]).exists()
        assert Path(b["filePath"]).exists()


# ── Validation failures ────────────────────────────────────────────────────────

class TestUploadRejected:

    def test_no_file_is_e1(self, client: TestClient) -> None:
        response = client.post("/upload", data={"other": "value"})

        assert response.status_code == 400
        assert response.json() == {"message": "E1 : No file uploaded"}

    def test_wrong_field_name_is_e1(self, client: TestClient, sample_pdf_bytes) -> None:
        files = [("input", ("a.pdf", io.BytesIO(sample_pdf_bytes), "application/pdf"))]

        response = client.post("/upload", files=files)

        assert response.json() == {"message": "E1 : No file uploaded"}

    def test_text_value_instead_of_file_is_e1(self, client: TestClient) -> None:
        response = client.post("/upload", data={"document": "report.pdf"})

        assert response.status_code == 400
        assert response.json()["message"].startswith("E1")

    def test_non_multipart_body_is_e1(self, client: TestClient) -> None:
        response = client.post("/upload", json={"document": "x"})

        assert response.status_code == 400
        assert response.json()["message"].startswith("E1")

    @pytest.mark.parametrize("name", ["notes.txt", "report", "report.pdf.zip", "image.png"])
    def test_non_pdf_extension_is_e2(
        self, client: TestClient, make_document, sample_pdf_bytes, incoming_dir, name
    ) -> None:
        response = client.post("/upload", files=[make_document(name, sample_pdf_bytes)])

        assert response.status_code == 400
        assert response.json() == {"message": "E2 : Only PDF files are allowed"}
        assert _leftovers(incoming_dir) == []

    def test_txt_is_e2_regardless_of_content(self, client: TestClient, sample_txt_file) -> None:
        response = client.post("/upload", files=[sample_txt_file])

        assert response.json()["message"] == "E2 : Only PDF files are allowed"

    def test_slash_in_name_is_e3(
        self, client: TestClient, make_document, sample_pdf_bytes, incoming_dir
    ) -> None:
        response = client.post("/upload", files=[make_document("../dsp/evil.pdf", sample_pdf_bytes)])

        assert response.status_code == 400
        assert response.json() == {"message": "E3 : Invalid file name"}
        assert _leftovers(incoming_dir) == []

    @pytest.mark.parametrize("content", [b"", b"%PD", b"hello world", b"\x89PNG\r\n\x1a\n"])
    def test_bad_magic_header_is_e4(
        self, client: TestClient, make_document, incoming_dir, content
    ) -> None:
        response = client.post("/upload", files=[make_document("report.pdf", content)])

        assert response.status_code == 400
        assert response.json() == {"message": "E4 : Invalid PDF structure"}
        assert _leftovers(incoming_dir) == []

    @pytest.mark.parametrize("marker", [b"<script>", b"<SCRIPT>", b"<Script>"])
    def test_script_marker_is_e5(
        self, client: TestClient, make_document, incoming_dir, marker
    ) -> None:
        content = b"%PDF-1.4\n" + marker + b"alert(1)</script>\n%%EOF"

        response = client.post("/upload", files=[make_document("report.pdf", content)])

        assert response.status_code == 400
        assert response.json() == {"message": "E5 : PDF contains forbidden content"}
        assert _leftovers(incoming_dir) == []

    def test_rejected_upload_is_not_stored(
        self, client: TestClient, make_document, upload_dir
    ) -> None:
        before = {p.name for p in upload_dir.iterdir()}

        client.post("/upload", files=[make_document("ilo.txt", b"%PDF-1.4")])

        assert {p.name for p in upload_dir.iterdir()} == before


# ── Infrastructure failures ────────────────────────────────────────────────────

class TestUploadFailure:

    def test_move_failure_is_500_and_cleans_up(
        self, client: TestClient, sample_pdf_file, incoming_dir
    ) -> None:
        with patch("app.storage.finalizer.shutil.move", side_effect=OSError("disk full")):
            response = client.post("/upload", files=[sample_pdf_file])

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
        assert _leftovers(incoming_dir) == []

    def test_store_failure_is_500(self, client: TestClient, sample_pdf_file) -> None:
        store = client.app.state.upload_service._recorder._store
        with patch.object(store, "insert", AsyncMock(side_effect=MetadataStoreError("down"))):
            response = client.post("/upload", files=[sample_pdf_file])

        assert response.status_code == 500
        assert response.json() == {"message": "Internal Server Error"}
