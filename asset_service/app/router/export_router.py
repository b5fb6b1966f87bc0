from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import validate_current_token
from shared.core.database import get_asset_db as get_db
from shared.core.schemas import UserToken
from ..schemas.export_schemas import CsvExportOut, CsvTemplateOut, ExportAssetsRequest
from ..crud import export_crud as crud

router = APIRouter(
    prefix="/api/asset-export",
    tags=["asset_export"],
    dependencies=[Depends(validate_current_token)]
)


@router.post("/", response_model=CsvExportOut)
def export_assets(
        request: ExportAssetsRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.export_assets(db, current_user.org_id, request)


@router.get("/template/{asset_type_id}", response_model=CsvTemplateOut)
def get_export_template(
        asset_type_id: UUID,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(validate_current_token)):
    return crud.get_export_template(db, current_user.org_id, asset_type_id)
