# app/schemas/export_schemas.py
from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ..enum.asset_enum import AssetStatus


class ExportAssetsRequest(EmptyStringModel):
    asset_type_id: UUID
    status: Optional[AssetStatus] = None
    search: Optional[str] = None


class CsvExportOut(BaseModel):
    file_name: str
    csv_content: str
    row_count: int


class CsvTemplateOut(BaseModel):
    file_name: str
    csv_content: str
    headers: List[str]
