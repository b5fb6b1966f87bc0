from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import Lookup, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..enum.asset_enum import AttributeFieldType
from ..schemas.attribute_definition_schemas import (
    AttributeDefinitionCreate,
    AttributeDefinitionOut,
    AttributeDefinitionUpdate,
    ReorderAttributesRequest,
)
from ..crud import attribute_definitions_crud as crud

router = APIRouter(
    prefix="/api/asset-attributes",
    tags=["asset_attributes"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=List[AttributeDefinitionOut])
def get_attribute_definitions(
        asset_type_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_attribute_definitions(db, current_user.org_id, asset_type_id)


# static routes above the parameterized ones
@router.get("/field-type-lookup", response_model=List[Lookup])
def field_type_lookup():
    return [Lookup(id=t.value, name=t.name.replace("_", " ").capitalize()) for t in AttributeFieldType]


@router.post("/reorder", response_model=None)
def reorder_attribute_definitions(
        request: ReorderAttributesRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.reorder_attribute_definitions(db, current_user.org_id, request)
    return success_response(
        data=[AttributeDefinitionOut.model_validate(d) for d in result],
        message="Attributes reordered successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.post("/", response_model=None)
def create_attribute_definition(
        definition: AttributeDefinitionCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.create_attribute_definition(db, current_user.org_id, definition)
    return success_response(
        data=AttributeDefinitionOut.model_validate(result),
        message="Attribute created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/{definition_id}", response_model=None)
def update_attribute_definition(
        definition_id: UUID,
        definition: AttributeDefinitionUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.update_attribute_definition(db, current_user.org_id, definition_id, definition)
    return success_response(
        data=AttributeDefinitionOut.model_validate(result),
        message="Attribute updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.delete("/{definition_id}", response_model=None)
def delete_attribute_definition(
        definition_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    crud.delete_attribute_definition(db, current_user.org_id, definition_id)
    return success_response(
        data=None,
        message="Attribute deleted successfully",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
