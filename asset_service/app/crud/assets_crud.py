import json
import uuid
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.orm import Session

from shared.core.schemas import Lookup
from shared.helpers.json_response_helper import not_found
from ..enum.asset_enum import AssetHistoryAction, AssetStatus
from ..models.asset_history import AssetHistory
from ..models.assets import Asset
from ..schemas.assets_schemas import AssetCreate, AssetOut, AssetsRequest, AssetUpdate
from .asset_tag_crud import create_with_next_tag
from .asset_types_crud import get_asset_type_by_id
from .attribute_definitions_crud import validate_asset_attributes


def log_asset_history(
    db: Session,
    org_id: UUID,
    asset_id: UUID,
    user_id: Optional[str],
    action: AssetHistoryAction,
    field: Optional[str] = None,
    old_value: Optional[str] = None,
    new_value: Optional[str] = None,
) -> AssetHistory:
    # added to the session only, committed together with the asset change
    entry = AssetHistory(
        org_id=org_id,
        asset_id=asset_id,
        user_id=user_id,
        action=action.value,
        field=field,
        old_value=old_value,
        new_value=new_value,
    )
    db.add(entry)
    return entry


def _history_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _same_value(old: Any, new: Any) -> bool:
    return json.dumps(old, sort_keys=True, default=str) == json.dumps(new, sort_keys=True, default=str)


def get_assets(db: Session, org_id: UUID, params: AssetsRequest):
    query = db.query(Asset).filter(Asset.org_id == org_id)

    if params.asset_type_id:
        query = query.filter(Asset.asset_type_id == params.asset_type_id)
    if params.status:
        query = query.filter(Asset.status == params.status)
    if params.assignee_id:
        query = query.filter(Asset.assignee_id == params.assignee_id)
    if params.search:
        search_term = f"%{params.search}%"
        query = query.filter(or_(Asset.name.ilike(search_term),
                                 Asset.asset_tag.ilike(search_term)))

    total = query.count()
    assets = (
        query.order_by(Asset.created_at.desc(), Asset.asset_tag.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {"assets": [AssetOut.model_validate(a) for a in assets], "total": total}


def get_asset_by_id(db: Session, org_id: UUID, asset_id: UUID) -> Asset:
    asset = db.query(Asset).filter(
        Asset.id == asset_id,
        Asset.org_id == org_id
    ).first()
    if not asset:
        return not_found("Asset", asset_id)
    return asset


def create_asset(db: Session, org_id: UUID, user_id: Optional[str], asset: AssetCreate) -> Asset:
    get_asset_type_by_id(db, org_id, asset.asset_type_id)
    validate_asset_attributes(db, org_id, asset.asset_type_id, asset.attributes)

    def build_asset(tag: str) -> Asset:
        return Asset(
            id=uuid.uuid4(),
            org_id=org_id,
            asset_type_id=asset.asset_type_id,
            asset_tag=tag,
            name=asset.name,
            status=asset.status.value,
            assignee_id=asset.assignee_id,
            attributes=dict(asset.attributes),
        )

    def log_created(db_asset: Asset):
        log_asset_history(db, org_id, db_asset.id, user_id, AssetHistoryAction.created)

    return create_with_next_tag(db, org_id, build_asset, before_commit=log_created)


def update_asset(db: Session, org_id: UUID, user_id: Optional[str], asset_id: UUID, asset: AssetUpdate) -> Asset:
    db_asset = get_asset_by_id(db, org_id, asset_id)
    update_data = asset.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)

    if "attributes" in update_data:
        update_data["attributes"] = update_data["attributes"] or {}
        validate_asset_attributes(db, org_id, db_asset.asset_type_id, update_data["attributes"])

    changes = []
    for field in ("name", "assignee_id"):
        if field in update_data and update_data[field] != getattr(db_asset, field):
            changes.append((field, getattr(db_asset, field), update_data[field]))

    if "attributes" in update_data:
        old_attrs = db_asset.attributes or {}
        new_attrs = update_data["attributes"]
        for key in sorted(set(old_attrs) | set(new_attrs)):
            if not _same_value(old_attrs.get(key), new_attrs.get(key)):
                changes.append((key, old_attrs.get(key), new_attrs.get(key)))

    for field, value in update_data.items():
        setattr(db_asset, field, value)

    for field, old_value, new_value in changes:
        log_asset_history(
            db, org_id, db_asset.id, user_id, AssetHistoryAction.updated,
            field, _history_value(old_value), _history_value(new_value))

    db.commit()
    db.refresh(db_asset)
    return db_asset


def get_asset_history(db: Session, org_id: UUID, asset_id: UUID, limit: int = 50) -> List[AssetHistory]:
    get_asset_by_id(db, org_id, asset_id)
    return (
        db.query(AssetHistory)
        .filter(AssetHistory.asset_id == asset_id, AssetHistory.org_id == org_id)
        .order_by(AssetHistory.created_at.desc())
        .limit(limit)
        .all()
    )


def asset_status_lookup() -> List[Lookup]:
    return [
        Lookup(id=status.value, name=status.name.replace("_", " ").capitalize())
        for status in AssetStatus
    ]
