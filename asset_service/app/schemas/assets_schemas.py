# app/schemas/assets_schemas.py
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from uuid import UUID
from datetime import datetime

from shared.core.schemas import CommonQueryParams
from ..enum.asset_enum import AssetStatus


class AssetCreate(BaseModel):
    asset_type_id: UUID
    name: str = Field(min_length=1, max_length=255)
    status: AssetStatus = AssetStatus.ordered
    assignee_id: Optional[str] = None
    attributes: Dict[str, Any] = Field(default_factory=dict)


class AssetUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    assignee_id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None


class AssetOut(BaseModel):
    id: UUID
    org_id: UUID
    asset_type_id: UUID
    asset_tag: str
    name: str
    status: str
    assignee_id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssetsRequest(CommonQueryParams):
    asset_type_id: Optional[UUID] = None
    status: Optional[str] = None
    assignee_id: Optional[str] = None


class AssetsResponse(BaseModel):
    assets: List[AssetOut]
    total: int


class AssetTransitionRequest(BaseModel):
    to_status: AssetStatus


class AssetHistoryOut(BaseModel):
    id: UUID
    asset_id: UUID
    user_id: Optional[str] = None
    action: str
    field: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
