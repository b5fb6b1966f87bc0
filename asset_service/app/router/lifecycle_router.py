from typing import List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..enum.asset_enum import AssetStatus
from ..schemas.lifecycle_schemas import SetTransitionsRequest, TransitionResolution, TransitionRuleOut
from ..crud import lifecycle_crud as crud

router = APIRouter(
    prefix="/api/asset-lifecycle",
    tags=["asset_lifecycle"],
    dependencies=[Depends(validate_current_token)]
)


@router.get("/transitions", response_model=List[TransitionRuleOut])
def list_transitions(
        asset_type_id: Optional[UUID] = None,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.list_transitions(db, current_user.org_id, asset_type_id)


@router.put("/transitions", response_model=None)
def set_transitions(
        request: SetTransitionsRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.set_transitions(db, current_user.org_id, request)
    return success_response(
        data=[TransitionRuleOut.model_validate(t) for t in result],
        message="Lifecycle transitions saved",
        status_code=AppStatusCode.UPDATED_SUCCESSFULLY
    )


@router.get("/resolve", response_model=TransitionResolution)
def resolve_transition(
        from_status: AssetStatus,
        to_status: AssetStatus,
        asset_type_id: Optional[UUID] = None,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.resolve_transition(
        db, current_user.org_id, asset_type_id, from_status.value, to_status.value)
