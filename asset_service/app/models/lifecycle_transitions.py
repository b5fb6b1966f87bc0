# app/models/lifecycle_transitions.py
import uuid
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, JSON, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from shared.core.database import Base


class AssetLifecycleTransition(Base):
    __tablename__ = "asset_lifecycle_transitions"
    __table_args__ = (
        UniqueConstraint('org_id', 'asset_type_id', 'from_status',
                         'to_status', name='uix_lifecycle_transition'),
        CheckConstraint('from_status <> to_status',
                        name='ck_lifecycle_no_self_transition'),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    # NULL = rule applies to every asset type of the organization
    asset_type_id = Column(UUID(as_uuid=True), ForeignKey(
        "asset_types.id", ondelete="CASCADE"), nullable=True)
    from_status = Column(String(32), nullable=False)
    to_status = Column(String(32), nullable=False)
    required_fields = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
