import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import UUID

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.csvhelper import ParsedCsv, parse_csv
from shared.helpers.json_response_helper import error_response, not_found
from shared.utils.app_status_code import AppStatusCode
from ..enum.asset_enum import AssetHistoryAction, ImportJobStatus, NAME_TARGET, STATUS_TARGET
from ..helpers.column_mapper import resolve_mapping
from ..helpers.row_validator import attributes_from_values, validate_import_row
from ..models.assets import Asset
from ..models.import_jobs import AssetImportJob
from ..schemas.import_schemas import ImportJobsRequest, ImportPreviewRequest, ImportStartRequest
from .asset_tag_crud import create_with_next_tag
from .asset_types_crud import get_asset_type_by_id
from .assets_crud import log_asset_history
from .attribute_definitions_crud import get_attribute_definitions

logger = logging.getLogger(__name__)

CANCELLED_MESSAGE = "Import cancelled by user"


def _append_error(job: AssetImportJob, row: Optional[int], errors: List[Dict[str, str]]):
    # JSON column: assign a new list so the change is flushed
    job.errors = list(job.errors or []) + [{"row": row, "errors": errors}]


def _row_width_errors(parsed: ParsedCsv, index: int) -> List[Dict[str, str]]:
    width = parsed.widths[index]
    if width <= len(parsed.headers):
        return []
    return [{"field": "general", "message": f"Row has {width} fields, header has {len(parsed.headers)}"}]


def get_import_job(db: Session, org_id: UUID, job_id: UUID) -> AssetImportJob:
    job = db.query(AssetImportJob).filter(
        AssetImportJob.id == job_id,
        AssetImportJob.org_id == org_id
    ).first()
    if not job:
        return not_found("ImportJob", job_id)
    return job


def list_import_jobs(db: Session, org_id: UUID, params: ImportJobsRequest) -> List[AssetImportJob]:
    query = db.query(AssetImportJob).filter(AssetImportJob.org_id == org_id)
    if params.status:
        query = query.filter(AssetImportJob.status == params.status.value)
    return query.order_by(AssetImportJob.created_at.desc()).limit(params.limit).all()


def validate_import_preview(db: Session, org_id: UUID, request: ImportPreviewRequest):
    """Run the first rows of a CSV through mapping and validation without saving anything."""
    get_asset_type_by_id(db, org_id, request.asset_type_id)

    parsed = parse_csv(request.csv_content)
    definitions = get_attribute_definitions(db, org_id, request.asset_type_id)
    mapping = resolve_mapping(parsed.headers, definitions, request.column_mapping)

    max_rows = min(request.max_rows, settings.IMPORT_PREVIEW_MAX_ROWS)
    preview_rows = []
    for index, row in enumerate(parsed.rows[:max_rows]):
        result = validate_import_row(row, definitions, mapping)
        errors = _row_width_errors(parsed, index) + result.errors
        preview_rows.append({
            "row_index": index,
            "raw_data": row,
            "valid": not errors,
            "errors": errors,
            "parsed_values": result.values,
        })

    valid_count = sum(1 for r in preview_rows if r["valid"])
    return {
        "headers": parsed.headers,
        "mapping": mapping,
        "total_rows": len(parsed.rows),
        "preview_rows": preview_rows,
        "valid_count": valid_count,
        "error_count": len(preview_rows) - valid_count,
    }


def start_import(db: Session, org_id: UUID, user_id: Optional[str], request: ImportStartRequest) -> AssetImportJob:
    get_asset_type_by_id(db, org_id, request.asset_type_id)

    parsed = parse_csv(request.csv_content)
    mapping = request.column_mapping
    if not mapping:
        definitions = get_attribute_definitions(db, org_id, request.asset_type_id)
        mapping = resolve_mapping(parsed.headers, definitions)

    job = AssetImportJob(
        org_id=org_id,
        user_id=user_id,
        asset_type_id=request.asset_type_id,
        file_name=request.file_name,
        status=ImportJobStatus.pending.value,
        total_rows=len(parsed.rows),
        processed_rows=0,
        success_count=0,
        error_count=0,
        column_mapping=dict(mapping),
        errors=[],
    )
    db.add(job)
    db.commit()
    db.refresh(job)

    logger.info(
        f"Import job {job.id} created for '{job.file_name}' in org {org_id}: {job.total_rows} row(s)")
    return job


def _import_row(db: Session, job: AssetImportJob, row_number: int, values: Dict[str, Any]):
    def build_asset(tag: str) -> Asset:
        return Asset(
            id=uuid.uuid4(),
            org_id=job.org_id,
            asset_type_id=job.asset_type_id,
            asset_tag=tag,
            name=values.get(NAME_TARGET) or f"Import-{row_number}",
            status=values.get(STATUS_TARGET) or "ordered",
            attributes=attributes_from_values(values),
        )

    def count_success(asset: Asset):
        log_asset_history(db, job.org_id, asset.id, job.user_id, AssetHistoryAction.created)
        job.processed_rows += 1
        job.success_count += 1

    create_with_next_tag(db, job.org_id, build_asset, before_commit=count_success)


def _record_row_error(db: Session, job: AssetImportJob, row_number: int, errors: List[Dict[str, str]]):
    _append_error(job, row_number, errors)
    job.processed_rows += 1
    job.error_count += 1
    db.commit()


def process_import(db: Session, org_id: UUID, job_id: UUID, csv_content: str) -> AssetImportJob:
    """
    Import the rows of a pending job one at a time.

    Each row is committed on its own together with the job counters, so
    progress stays visible and durable if the run is interrupted. A bad row
    is recorded on the job and the run moves on. The job is re-read before
    every row and a cancelled job stops there.
    """
    job = get_import_job(db, org_id, job_id)
    if job.status != ImportJobStatus.pending.value:
        return error_response(
            message=f"Import job is '{job.status}', only pending jobs can be processed",
            status_code=AppStatusCode.INVALID_INPUT,
            http_status=400
        )

    parsed = parse_csv(csv_content)
    job.status = ImportJobStatus.processing.value
    job.total_rows = len(parsed.rows)
    db.commit()

    definitions = get_attribute_definitions(db, org_id, job.asset_type_id)
    mapping = job.column_mapping or resolve_mapping(parsed.headers, definitions)

    logger.info(f"Processing import job {job.id}: {job.total_rows} row(s)")

    for index, row in enumerate(parsed.rows):
        row_number = index + 1

        db.refresh(job, with_for_update=True)
        if job.status != ImportJobStatus.processing.value:
            db.commit()
            logger.info(f"Import job {job.id} stopped at row {row_number}: status is '{job.status}'")
            return job

        result = validate_import_row(row, definitions, mapping)
        errors = _row_width_errors(parsed, index) + result.errors
        if errors:
            _record_row_error(db, job, row_number, errors)
            continue

        try:
            _import_row(db, job, row_number, result.values)
        except SQLAlchemyError as e:
            db.rollback()
            logger.warning(f"Import job {job.id} row {row_number} could not be saved: {e}")
            _record_row_error(db, job, row_number, [{"field": "general", "message": str(e.__cause__ or e)}])
        except HTTPException as e:
            db.rollback()
            message = e.detail.get("message") if isinstance(e.detail, dict) else str(e.detail)
            logger.warning(f"Import job {job.id} row {row_number} could not be saved: {message}")
            _record_row_error(db, job, row_number, [{"field": "general", "message": message}])

    if job.success_count == 0 and job.error_count > 0:
        job.status = ImportJobStatus.failed.value
    else:
        job.status = ImportJobStatus.completed.value
    job.completed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(job)

    logger.info(
        f"Import job {job.id} {job.status}: {job.success_count} imported, {job.error_count} failed of {job.total_rows}")
    return job


def cancel_import(db: Session, org_id: UUID, job_id: UUID) -> AssetImportJob:
    job = get_import_job(db, org_id, job_id)
    if job.status == ImportJobStatus.completed.value:
        return error_response(
            message="Cannot cancel a completed import",
            status_code=AppStatusCode.INVALID_INPUT,
            http_status=400
        )
    if job.status == ImportJobStatus.failed.value:
        return job

    job.status = ImportJobStatus.failed.value
    _append_error(job, None, [{"field": "general", "message": CANCELLED_MESSAGE}])
    job.completed_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(job)

    logger.info(f"Import job {job.id} cancelled in org {org_id}")
    return job
