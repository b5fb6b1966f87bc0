# app/schemas/attribute_definition_schemas.py
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from uuid import UUID

from ..enum.asset_enum import AttributeFieldType

IDENTIFIER_PATTERN = r"^[a-zA-Z][a-zA-Z0-9_]*$"


class AttributeDefinitionCreate(BaseModel):
    asset_type_id: UUID
    name: str = Field(min_length=1, max_length=100, pattern=IDENTIFIER_PATTERN)
    label: str = Field(min_length=1, max_length=255)
    field_type: AttributeFieldType
    is_required: bool = False
    options: Optional[Any] = None
    default_value: Optional[str] = None
    position: int = Field(default=0, ge=0)
    description: Optional[str] = Field(default=None, max_length=500)


class AttributeDefinitionUpdate(BaseModel):
    label: Optional[str] = Field(default=None, min_length=1, max_length=255)
    field_type: Optional[AttributeFieldType] = None
    is_required: Optional[bool] = None
    options: Optional[Any] = None
    default_value: Optional[str] = None
    position: Optional[int] = Field(default=None, ge=0)
    description: Optional[str] = Field(default=None, max_length=500)


class AttributeDefinitionOut(BaseModel):
    id: UUID
    org_id: UUID
    asset_type_id: UUID
    name: str
    label: str
    field_type: str
    is_required: bool
    options: Optional[Any] = None
    default_value: Optional[str] = None
    position: int
    description: Optional[str] = None

    model_config = {"from_attributes": True}


class AttributePosition(BaseModel):
    id: UUID
    position: int = Field(ge=0)


class ReorderAttributesRequest(BaseModel):
    asset_type_id: UUID
    order: List[AttributePosition]
