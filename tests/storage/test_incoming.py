"""
tests/storage/test_incoming.py

Tests for spool_upload, using AsyncMock stand-ins for UploadFile.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.exceptions import StorageError
from app.storage import spool_upload


def _fake_upload(filename: str, chunks: list[bytes]) -> MagicMock:
    """Minimal mock of fastapi.UploadFile whose read() yields ``chunks`` then b''."""
    upload = MagicMock()
    upload.filename = filename
    upload.read = AsyncMock(side_effect=[*chunks, b""])
    return upload


class TestSpoolUpload:

    @pytest.mark.asyncio
    async def test_writes_all_chunks(self, tmp_path) -> None:
        upload = _fake_upload("Report.PDF", [b"%PDF-", b"1.4", b"\n%%EOF"])

        request = await spool_upload(upload, tmp_path / "incoming")

        assert request.temp_path.read_bytes() == b"%PDF-1.4\n%%EOF"
        assert request.temp_path.parent == tmp_path / "incoming"
        assert request.original_name == "Report.PDF"
        assert request.extension == ".pdf"

    @pytest.mark.asyncio
    async def test_temp_names_are_unique(self, tmp_path) -> None:
        first = await spool_upload(_fake_upload("a.pdf", [b"x"]), tmp_path)
        second = await spool_upload(_fake_upload("a.pdf", [b"x"]), tmp_path)

        assert first.temp_path != second.temp_path

    @pytest.mark.asyncio
    async def test_empty_upload_gives_empty_file(self, tmp_path) -> None:
        request = await spool_upload(_fake_upload("empty.pdf", []), tmp_path)

        assert request.temp_path.read_bytes() == b""

    @pytest.mark.asyncio
    async def test_write_failure_raises_storage_error(self, tmp_path) -> None:
        with patch("app.storage.incoming.open", side_effect=OSError("read-only"), create=True):
            with pytest.raises(StorageError, match="read-only"):
                await spool_upload(_fake_upload("a.pdf", [b"x"]), tmp_path)

        assert list(tmp_path.iterdir()) == []
