# app/schemas/lifecycle_schemas.py
from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID

from ..enum.asset_enum import AssetStatus


class TransitionRuleIn(BaseModel):
    from_status: AssetStatus
    to_status: AssetStatus
    required_fields: List[str] = Field(default_factory=list)


class SetTransitionsRequest(BaseModel):
    # None = organization-wide rules
    asset_type_id: Optional[UUID] = None
    transitions: List[TransitionRuleIn]


class TransitionRuleOut(BaseModel):
    id: UUID
    asset_type_id: Optional[UUID] = None
    from_status: str
    to_status: str
    required_fields: List[str] = Field(default_factory=list)

    model_config = {"from_attributes": True}


class TransitionResolution(BaseModel):
    allowed: bool
    required_fields: List[str] = Field(default_factory=list)
