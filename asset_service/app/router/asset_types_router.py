from uuid import UUID
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas.asset_type_schemas import AssetTypeCreate, AssetTypeOut, AssetTypesResponse, AssetTypeUpdate
from ..crud import asset_types_crud as crud

router = APIRouter(
    prefix="/api/asset-types",
    tags=["asset_types"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/", response_model=AssetTypesResponse)
def get_asset_types(
        search: Optional[str] = None,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_asset_types(db, current_user.org_id, search)


@router.get("/{asset_type_id}", response_model=AssetTypeOut)
def get_asset_type(
        asset_type_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_asset_type_by_id(db, current_user.org_id, asset_type_id)


@router.post("/", response_model=None)
def create_asset_type(
        asset_type: AssetTypeCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.create_asset_type(db, current_user.org_id, asset_type)
    return success_response(
        data=AssetTypeOut.model_validate(result),
        message="Asset type created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/{asset_type_id}", response_model=None)
def update_asset_type(
        asset_type_id: UUID,
        asset_type: AssetTypeUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.update_asset_type(db, current_user.org_id, asset_type_id, asset_type)
    return success_response(
        data=AssetTypeOut.model_validate(result),
        message="Asset type updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.delete("/{asset_type_id}", response_model=None)
def delete_asset_type(
        asset_type_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    crud.delete_asset_type(db, current_user.org_id, asset_type_id)
    return success_response(
        data=None,
        message="Asset type deleted successfully",
        status_code=AppStatusCode.DELETED_SUCCESSFULLY
    )
