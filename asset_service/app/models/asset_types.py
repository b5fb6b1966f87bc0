# app/models/asset_types.py
import uuid
from sqlalchemy import Column, DateTime, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class AssetType(Base):
    __tablename__ = "asset_types"
    __table_args__ = (UniqueConstraint(
        'org_id', 'name', name='uix_asset_type_org_name'),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    icon = Column(String(64))
    color = Column(String(20))
    description = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now())

    attribute_definitions = relationship(
        "AssetAttributeDefinition", back_populates="asset_type",
        order_by="AssetAttributeDefinition.position",
        cascade="all, delete-orphan")
    assets = relationship("Asset", back_populates="asset_type")
