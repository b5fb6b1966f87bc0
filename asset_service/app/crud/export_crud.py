import re
from datetime import date, datetime
from typing import Any, List, Mapping, Sequence
from uuid import UUID

from sqlalchemy.orm import Session

from shared.csvhelper import to_csv
from ..models.assets import Asset
from ..schemas.export_schemas import CsvExportOut, CsvTemplateOut, ExportAssetsRequest
from .asset_types_crud import get_asset_type_by_id
from .attribute_definitions_crud import get_attribute_definitions

EXPORT_HEADERS = ["Asset Tag", "Name", "Status"]
TEMPLATE_HEADERS = ["Name", "Status"]


def _file_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


def export_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def build_csv_row(asset_tag: str, name: str, status: str,
                  attributes: Mapping[str, Any], definitions: Sequence) -> List[str]:
    row = [asset_tag, name, status]
    for definition in definitions:
        row.append(export_cell(attributes.get(definition.name)))
    return row


def export_assets(db: Session, org_id: UUID, request: ExportAssetsRequest) -> CsvExportOut:
    asset_type = get_asset_type_by_id(db, org_id, request.asset_type_id)
    definitions = get_attribute_definitions(db, org_id, request.asset_type_id)

    query = db.query(Asset).filter(
        Asset.org_id == org_id,
        Asset.asset_type_id == request.asset_type_id
    )
    if request.status:
        query = query.filter(Asset.status == request.status.value)
    if request.search:
        query = query.filter(Asset.name.ilike(f"%{request.search}%"))

    assets = query.order_by(Asset.name.asc()).all()

    headers = EXPORT_HEADERS + [d.label for d in definitions]
    rows = [
        build_csv_row(a.asset_tag, a.name, a.status, a.attributes or {}, definitions)
        for a in assets
    ]

    return CsvExportOut(
        file_name=f"{_file_slug(asset_type.name)}-export.csv",
        csv_content=to_csv(headers, rows),
        row_count=len(assets),
    )


def get_export_template(db: Session, org_id: UUID, asset_type_id: UUID) -> CsvTemplateOut:
    asset_type = get_asset_type_by_id(db, org_id, asset_type_id)
    definitions = get_attribute_definitions(db, org_id, asset_type_id)

    headers = TEMPLATE_HEADERS + [d.label for d in definitions]
    return CsvTemplateOut(
        file_name=f"{_file_slug(asset_type.name)}-template.csv",
        csv_content=to_csv(headers, []),
        headers=headers,
    )
