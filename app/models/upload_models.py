"""
app/models/upload_models.py

Pydantic DTOs for the upload flow.
The request has no DTO — the controller reads the multipart form
directly; only the category vocabulary and response shapes live here.

Backend code stays snake_case; JSON output is camelCase.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class Category(str, Enum):
    """Fixed set of labels the filename classifier can produce."""

    ILO = "ilo"
    SECLORE = "seclore"
    DSP = "dsp"
    UNCATEGORIZED = "uncategorized"


class CamelORMModel(BaseModel):
    """Base for response schemas. Reads from SQLAlchemy, outputs camelCase."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class FileRecord(CamelORMModel):
    """
    Metadata describing one stored upload.

        {
            "id": "6f1c...",
            "originalName": "dsp_report.pdf",
            "storedName": "dsp_upload-2024-05-01-123456789.pdf",
            "category": "dsp",
            "filePath": "/srv/app/uploads/dsp_upload-2024-05-01-123456789.pdf",
            "uploadDate": "...",
            "createdAt": "...",
            "updatedAt": "..."
        }
    """

    id: uuid.UUID
    original_name: str
    stored_name: str
    category: Category = Category.UNCATEGORIZED
    file_path: str
    upload_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UploadResponse(BaseModel):
    """Successful response for POST /upload."""

    message: str
    data: FileRecord

    def to_json(self) -> dict:
        return {
            "message": self.message,
            "data": self.data.model_dump(mode="json", by_alias=True),
        }


class MessageResponse(BaseModel):
    """Error body for every non-200 upload response: { "message": "..." }."""

    message: str
