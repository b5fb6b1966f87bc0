# app/router/assets_router.py
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import Lookup, UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas.assets_schemas import (
    AssetCreate,
    AssetHistoryOut,
    AssetOut,
    AssetsRequest,
    AssetsResponse,
    AssetTransitionRequest,
    AssetUpdate,
)
from ..crud import assets_crud as crud
from ..crud import lifecycle_crud

router = APIRouter(
    prefix="/api/assets",
    tags=["assets"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/all", response_model=AssetsResponse)
def get_assets(
        params: AssetsRequest = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_assets(db, current_user.org_id, params)


@router.get("/status-lookup", response_model=List[Lookup])
def asset_status_lookup():
    return crud.asset_status_lookup()


@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(
        asset_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_asset_by_id(db, current_user.org_id, asset_id)


@router.get("/{asset_id}/history", response_model=List[AssetHistoryOut])
def get_asset_history(
        asset_id: UUID,
        limit: int = Query(50, ge=1, le=100),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_asset_history(db, current_user.org_id, asset_id, limit)


@router.post("/", response_model=None)
def create_asset(
        asset: AssetCreate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.create_asset(db, current_user.org_id, current_user.user_id, asset)
    return success_response(
        data=AssetOut.model_validate(result),
        message="Asset created successfully",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.put("/{asset_id}", response_model=None)
def update_asset(
        asset_id: UUID,
        asset: AssetUpdate,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.update_asset(db, current_user.org_id, current_user.user_id, asset_id, asset)
    return success_response(
        data=AssetOut.model_validate(result),
        message="Asset updated successfully",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.post("/{asset_id}/transition", response_model=None)
def transition_asset(
        asset_id: UUID,
        request: AssetTransitionRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = lifecycle_crud.transition_asset_status(
        db, current_user.org_id, current_user.user_id, asset_id, request.to_status.value)
    return success_response(
        data=AssetOut.model_validate(result),
        message=f"Asset moved to '{result.status}'",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )
