from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import success_response
from shared.utils.app_status_code import AppStatusCode
from ..schemas.import_schemas import (
    ImportJobOut,
    ImportJobsRequest,
    ImportPreviewOut,
    ImportPreviewRequest,
    ImportProcessRequest,
    ImportStartRequest,
)
from ..crud import import_crud as crud

router = APIRouter(
    prefix="/api/asset-imports",
    tags=["asset_imports"],
    dependencies=[Depends(validate_current_token)]
)


@router.post("/preview", response_model=ImportPreviewOut)
def preview_import(
        request: ImportPreviewRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.validate_import_preview(db, current_user.org_id, request)


@router.get("/", response_model=List[ImportJobOut])
def list_import_jobs(
        params: ImportJobsRequest = Depends(),
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.list_import_jobs(db, current_user.org_id, params)


@router.get("/{job_id}", response_model=ImportJobOut)
def get_import_job(
        job_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_import_job(db, current_user.org_id, job_id)


@router.post("/", response_model=None)
def start_import(
        request: ImportStartRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.start_import(db, current_user.org_id, current_user.user_id, request)
    return success_response(
        data=ImportJobOut.model_validate(result),
        message="Import job created",
        status_code=AppStatusCode.CREATED_SUCCESSFULLY
    )


@router.post("/{job_id}/process", response_model=None)
def process_import(
        job_id: UUID,
        request: ImportProcessRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.process_import(db, current_user.org_id, job_id, request.csv_content)
    return success_response(
        data=ImportJobOut.model_validate(result),
        message=f"Import {result.status}: {result.success_count} imported, {result.error_count} failed",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )


@router.post("/{job_id}/cancel", response_model=None)
def cancel_import(
        job_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    result = crud.cancel_import(db, current_user.org_id, job_id)
    return success_response(
        data=ImportJobOut.model_validate(result),
        message="Import cancelled",
        status_code=AppStatusCode.OPERATION_SUCCESSFUL
    )
