# app/models/assets.py
import uuid
from sqlalchemy import Column, ForeignKey, JSON, String, TIMESTAMP, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from shared.core.database import Base


class Asset(Base):
    __tablename__ = "assets"
    # tag sequencing relies on this constraint to detect a lost race
    __table_args__ = (UniqueConstraint(
        'org_id', 'asset_tag', name='uix_org_asset_tag'),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    asset_type_id = Column(UUID(as_uuid=True), ForeignKey(
        "asset_types.id", ondelete="RESTRICT"), nullable=False)
    asset_tag = Column(String(32), nullable=False)
    name = Column(String(255), nullable=False)
    status = Column(String(32), nullable=False, default="ordered")
    assignee_id = Column(String(64))
    attributes = Column(JSON, default=dict)
    created_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), nullable=False)
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(
    ), onupdate=func.now(), nullable=False)

    asset_type = relationship("AssetType", back_populates="assets")
    history = relationship(
        "AssetHistory", back_populates="asset", cascade="all, delete-orphan")
