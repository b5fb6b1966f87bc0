from typing import Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import conflict_error, error_response, not_found
from shared.utils.app_status_code import AppStatusCode
from ..models.asset_types import AssetType
from ..models.assets import Asset
from ..models.attribute_definitions import AssetAttributeDefinition
from ..models.import_jobs import AssetImportJob
from ..models.lifecycle_transitions import AssetLifecycleTransition
from ..schemas.asset_type_schemas import AssetTypeCreate, AssetTypeListItem, AssetTypeUpdate


def get_asset_types(db: Session, org_id: UUID, search: Optional[str] = None):
    asset_counts = (
        db.query(Asset.asset_type_id, func.count(Asset.id).label("asset_count"))
        .filter(Asset.org_id == org_id)
        .group_by(Asset.asset_type_id)
        .subquery()
    )
    attribute_counts = (
        db.query(AssetAttributeDefinition.asset_type_id,
                 func.count(AssetAttributeDefinition.id).label("attribute_count"))
        .filter(AssetAttributeDefinition.org_id == org_id)
        .group_by(AssetAttributeDefinition.asset_type_id)
        .subquery()
    )

    query = (
        db.query(
            AssetType,
            func.coalesce(asset_counts.c.asset_count, 0),
            func.coalesce(attribute_counts.c.attribute_count, 0),
        )
        .outerjoin(asset_counts, asset_counts.c.asset_type_id == AssetType.id)
        .outerjoin(attribute_counts, attribute_counts.c.asset_type_id == AssetType.id)
        .filter(AssetType.org_id == org_id)
    )

    if search:
        query = query.filter(AssetType.name.ilike(f"%{search}%"))

    results = []
    for asset_type, asset_count, attribute_count in query.order_by(AssetType.name.asc()).all():
        item = AssetTypeListItem.model_validate(asset_type)
        item.asset_count = asset_count
        item.attribute_count = attribute_count
        results.append(item)

    return {"asset_types": results, "total": len(results)}


def find_asset_type(db: Session, org_id: UUID, asset_type_id: UUID) -> Optional[AssetType]:
    return db.query(AssetType).filter(
        AssetType.id == asset_type_id,
        AssetType.org_id == org_id
    ).first()


def get_asset_type_by_id(db: Session, org_id: UUID, asset_type_id: UUID) -> AssetType:
    asset_type = find_asset_type(db, org_id, asset_type_id)
    if not asset_type:
        return not_found("AssetType", asset_type_id)
    return asset_type


def _name_taken(db: Session, org_id: UUID, name: str, exclude_id: UUID = None) -> bool:
    query = db.query(AssetType.id).filter(
        AssetType.org_id == org_id,
        AssetType.name == name
    )
    if exclude_id:
        query = query.filter(AssetType.id != exclude_id)
    return query.first() is not None


def create_asset_type(db: Session, org_id: UUID, asset_type: AssetTypeCreate) -> AssetType:
    if _name_taken(db, org_id, asset_type.name):
        return conflict_error(f"Asset type '{asset_type.name}' already exists")

    db_asset_type = AssetType(org_id=org_id, **asset_type.model_dump())
    db.add(db_asset_type)
    db.commit()
    db.refresh(db_asset_type)
    return db_asset_type


def update_asset_type(db: Session, org_id: UUID, asset_type_id: UUID, asset_type: AssetTypeUpdate) -> AssetType:
    db_asset_type = get_asset_type_by_id(db, org_id, asset_type_id)

    update_data = asset_type.model_dump(exclude_unset=True)
    new_name = update_data.get("name")
    if new_name and new_name != db_asset_type.name and _name_taken(db, org_id, new_name, asset_type_id):
        return conflict_error(f"Asset type '{new_name}' already exists")

    for field, value in update_data.items():
        setattr(db_asset_type, field, value)

    db.commit()
    db.refresh(db_asset_type)
    return db_asset_type


def delete_asset_type(db: Session, org_id: UUID, asset_type_id: UUID) -> AssetType:
    db_asset_type = get_asset_type_by_id(db, org_id, asset_type_id)

    asset_count = db.query(Asset).filter(
        Asset.org_id == org_id,
        Asset.asset_type_id == asset_type_id
    ).count()
    if asset_count > 0:
        return error_response(
            message=f"Cannot delete asset type '{db_asset_type.name}': {asset_count} asset(s) still use it",
            status_code=AppStatusCode.OPERATION_ERROR,
            http_status=400
        )

    for model in (AssetLifecycleTransition, AssetImportJob):
        db.query(model).filter(
            model.org_id == org_id,
            model.asset_type_id == asset_type_id
        ).delete(synchronize_session=False)

    db.delete(db_asset_type)
    db.commit()
    return db_asset_type
