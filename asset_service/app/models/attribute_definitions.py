# app/models/attribute_definitions.py
import uuid
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from shared.core.database import Base


class AssetAttributeDefinition(Base):
    __tablename__ = "asset_attribute_definitions"
    __table_args__ = (UniqueConstraint(
        'asset_type_id', 'name', name='uix_attribute_type_name'),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    asset_type_id = Column(UUID(as_uuid=True), ForeignKey(
        "asset_types.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    label = Column(String(255), nullable=False)
    # one of AttributeFieldType
    field_type = Column(String(32), nullable=False)
    is_required = Column(Boolean, default=False, nullable=False)
    options = Column(JSON)
    default_value = Column(String(255))
    position = Column(Integer, default=0, nullable=False)
    description = Column(String(500))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(),
                        onupdate=func.now())

    asset_type = relationship(
        "AssetType", back_populates="attribute_definitions")
