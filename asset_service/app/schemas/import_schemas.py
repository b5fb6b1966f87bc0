# app/schemas/import_schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime

from ..enum.asset_enum import ImportJobStatus


class ImportStartRequest(BaseModel):
    asset_type_id: UUID
    file_name: str = Field(min_length=1, max_length=255)
    csv_content: str = Field(min_length=1)
    column_mapping: Dict[str, str] = Field(default_factory=dict)


class ImportProcessRequest(BaseModel):
    csv_content: str = Field(min_length=1)


class ImportPreviewRequest(BaseModel):
    asset_type_id: UUID
    csv_content: str = Field(min_length=1)
    column_mapping: Dict[str, str] = Field(default_factory=dict)
    max_rows: int = Field(default=10, ge=1)


class ImportJobsRequest(BaseModel):
    status: Optional[ImportJobStatus] = None
    limit: int = Field(default=50, ge=1, le=100)


class RowError(BaseModel):
    field: str
    message: str


class PreviewRow(BaseModel):
    row_index: int
    raw_data: Dict[str, str]
    valid: bool
    errors: List[RowError]
    parsed_values: Dict[str, Any]


class ImportPreviewOut(BaseModel):
    headers: List[str]
    mapping: Dict[str, str]
    total_rows: int
    preview_rows: List[PreviewRow]
    valid_count: int
    error_count: int


class ImportJobOut(BaseModel):
    id: UUID
    org_id: UUID
    user_id: Optional[str] = None
    asset_type_id: UUID
    file_name: str
    status: str
    total_rows: int
    processed_rows: int
    success_count: int
    error_count: int
    column_mapping: Optional[Dict[str, str]] = None
    errors: Optional[List[Dict[str, Any]]] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
