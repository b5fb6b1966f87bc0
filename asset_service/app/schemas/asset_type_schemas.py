# app/schemas/asset_type_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID
from datetime import datetime


class AssetTypeBase(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    icon: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    color: Optional[str] = Field(default=None, max_length=20)


class AssetTypeCreate(AssetTypeBase):
    pass


class AssetTypeUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    icon: Optional[str] = None
    description: Optional[str] = Field(default=None, max_length=1000)
    color: Optional[str] = Field(default=None, max_length=20)


class AssetTypeOut(AssetTypeBase):
    id: UUID
    org_id: UUID
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssetTypeListItem(AssetTypeOut):
    asset_count: int = 0
    attribute_count: int = 0


class AssetTypesResponse(BaseModel):
    asset_types: List[AssetTypeListItem]
    total: int
