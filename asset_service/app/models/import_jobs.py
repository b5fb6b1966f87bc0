# app/models/import_jobs.py
import uuid
from sqlalchemy import Column, ForeignKey, Integer, JSON, String, TIMESTAMP, func
from sqlalchemy.dialects.postgresql import UUID
from shared.core.database import Base


class AssetImportJob(Base):
    __tablename__ = "asset_import_jobs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    org_id = Column(UUID(as_uuid=True), nullable=False, index=True)
    user_id = Column(String(64))
    asset_type_id = Column(UUID(as_uuid=True), ForeignKey(
        "asset_types.id", ondelete="CASCADE"), nullable=False)
    file_name = Column(String(255), nullable=False)
    # pending -> processing -> completed | failed
    status = Column(String(16), nullable=False, default="pending")
    total_rows = Column(Integer, nullable=False, default=0)
    processed_rows = Column(Integer, nullable=False, default=0)
    success_count = Column(Integer, nullable=False, default=0)
    error_count = Column(Integer, nullable=False, default=0)
    column_mapping = Column(JSON, default=dict)
    # [{"row": 3, "errors": [{"field": ..., "message": ...}]}, ...]
    errors = Column(JSON, default=list)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    completed_at = Column(TIMESTAMP(timezone=True))
