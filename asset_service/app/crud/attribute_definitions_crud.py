from typing import Any, Dict, List, Mapping, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import conflict_error, not_found, validation_error
from ..helpers.attribute_fields import handler_for, option_values
from ..models.attribute_definitions import AssetAttributeDefinition
from ..schemas.attribute_definition_schemas import (
    AttributeDefinitionCreate,
    AttributeDefinitionUpdate,
    ReorderAttributesRequest,
)
from .asset_types_crud import get_asset_type_by_id


def get_attribute_definitions(db: Session, org_id: UUID, asset_type_id: UUID) -> List[AssetAttributeDefinition]:
    return (
        db.query(AssetAttributeDefinition)
        .filter(
            AssetAttributeDefinition.org_id == org_id,
            AssetAttributeDefinition.asset_type_id == asset_type_id
        )
        .order_by(AssetAttributeDefinition.position.asc(), AssetAttributeDefinition.name.asc())
        .all()
    )


def get_attribute_definition_by_id(db: Session, org_id: UUID, definition_id: UUID) -> AssetAttributeDefinition:
    definition = db.query(AssetAttributeDefinition).filter(
        AssetAttributeDefinition.id == definition_id,
        AssetAttributeDefinition.org_id == org_id
    ).first()
    if not definition:
        return not_found("AttributeDefinition", definition_id)
    return definition


def create_attribute_definition(db: Session, org_id: UUID, definition: AttributeDefinitionCreate) -> AssetAttributeDefinition:
    get_asset_type_by_id(db, org_id, definition.asset_type_id)

    existing = db.query(AssetAttributeDefinition.id).filter(
        AssetAttributeDefinition.asset_type_id == definition.asset_type_id,
        AssetAttributeDefinition.name == definition.name
    ).first()
    if existing:
        return conflict_error(
            f"Attribute '{definition.name}' already exists for this asset type")

    data = definition.model_dump()
    data["field_type"] = definition.field_type.value
    db_definition = AssetAttributeDefinition(org_id=org_id, **data)
    db.add(db_definition)
    db.commit()
    db.refresh(db_definition)
    return db_definition


def update_attribute_definition(db: Session, org_id: UUID, definition_id: UUID,
                                definition: AttributeDefinitionUpdate) -> AssetAttributeDefinition:
    db_definition = get_attribute_definition_by_id(db, org_id, definition_id)

    update_data = definition.model_dump(exclude_unset=True)
    if update_data.get("field_type") is not None:
        update_data["field_type"] = definition.field_type.value

    for field, value in update_data.items():
        setattr(db_definition, field, value)

    db.commit()
    db.refresh(db_definition)
    return db_definition


def delete_attribute_definition(db: Session, org_id: UUID, definition_id: UUID) -> AssetAttributeDefinition:
    db_definition = get_attribute_definition_by_id(db, org_id, definition_id)
    db.delete(db_definition)
    db.commit()
    return db_definition


def reorder_attribute_definitions(db: Session, org_id: UUID, request: ReorderAttributesRequest) -> List[AssetAttributeDefinition]:
    get_asset_type_by_id(db, org_id, request.asset_type_id)

    definitions = {
        d.id: d for d in get_attribute_definitions(db, org_id, request.asset_type_id)
    }
    for item in request.order:
        definition = definitions.get(item.id)
        if definition is None:
            return not_found("AttributeDefinition", item.id)
        definition.position = item.position

    db.commit()
    return get_attribute_definitions(db, org_id, request.asset_type_id)


def _is_missing(value: Any) -> bool:
    return value is None or value == ""


def validate_attributes(definitions: List[AssetAttributeDefinition],
                        attributes: Optional[Mapping[str, Any]]) -> List[Dict[str, str]]:
    """
    Check attribute values against the definitions of an asset type.

    Every definition is checked in position order and all failures are
    returned as {"field", "message"} dicts. An empty list means the
    attributes are valid. Keys with no definition are not checked.
    """
    attributes = attributes or {}
    errors: List[Dict[str, str]] = []

    for definition in sorted(definitions, key=lambda d: d.position or 0):
        value = attributes.get(definition.name)

        if _is_missing(value):
            if definition.is_required:
                errors.append({
                    "field": definition.name,
                    "message": f"{definition.label} is required",
                })
            continue

        handler = handler_for(definition.field_type)
        if handler is None:
            continue

        if not handler.accepts(value, option_values(definition.options)):
            errors.append({
                "field": definition.name,
                "message": f"{definition.label} has invalid value for type '{definition.field_type}'",
            })

    return errors


def validate_asset_attributes(db: Session, org_id: UUID, asset_type_id: UUID,
                              attributes: Optional[Mapping[str, Any]]) -> None:
    definitions = get_attribute_definitions(db, org_id, asset_type_id)
    if not definitions:
        return

    errors = validate_attributes(definitions, attributes)
    if errors:
        return validation_error(
            message="Attribute validation failed: " + "; ".join(e["message"] for e in errors),
            errors=errors
        )
