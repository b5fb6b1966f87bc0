import logging
from typing import Dict, List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from shared.helpers.json_response_helper import error_response, validation_error
from shared.utils.app_status_code import AppStatusCode
from ..enum.asset_enum import AssetHistoryAction
from ..models.assets import Asset
from ..models.lifecycle_transitions import AssetLifecycleTransition
from ..schemas.lifecycle_schemas import SetTransitionsRequest, TransitionResolution
from .asset_types_crud import get_asset_type_by_id
from .assets_crud import get_asset_by_id, log_asset_history

logger = logging.getLogger(__name__)

# Used only while an organization has no rule configured at all
DEFAULT_TRANSITIONS: List[Tuple[str, str]] = [
    ("ordered", "received"),
    ("received", "deployed"),
    ("deployed", "in_use"),
    ("in_use", "maintenance"),
    ("maintenance", "in_use"),
    ("in_use", "retired"),
    ("maintenance", "retired"),
    ("retired", "disposed"),
    ("ordered", "disposed"),
]


def _scope_filter(query, org_id: UUID, asset_type_id: Optional[UUID]):
    query = query.filter(AssetLifecycleTransition.org_id == org_id)
    if asset_type_id is None:
        return query.filter(AssetLifecycleTransition.asset_type_id.is_(None))
    return query.filter(AssetLifecycleTransition.asset_type_id == asset_type_id)


def _find_rule(db: Session, org_id: UUID, asset_type_id: Optional[UUID],
               from_status: str, to_status: str) -> Optional[AssetLifecycleTransition]:
    query = _scope_filter(db.query(AssetLifecycleTransition), org_id, asset_type_id)
    return query.filter(
        AssetLifecycleTransition.from_status == from_status,
        AssetLifecycleTransition.to_status == to_status
    ).first()


def resolve_transition(db: Session, org_id: UUID, asset_type_id: Optional[UUID],
                       from_status: str, to_status: str) -> TransitionResolution:
    """
    Decide whether an asset may move from one status to another.

    A rule scoped to the asset type wins over an organization-wide rule
    for the same pair. With no matching rule, the built-in default table
    applies only if the organization has no rule configured at all.
    """
    if from_status == to_status:
        return TransitionResolution(allowed=False)

    rule = None
    if asset_type_id is not None:
        rule = _find_rule(db, org_id, asset_type_id, from_status, to_status)
    if rule is None:
        rule = _find_rule(db, org_id, None, from_status, to_status)

    if rule is None:
        configured = db.query(AssetLifecycleTransition).filter(
            AssetLifecycleTransition.org_id == org_id
        ).count()
        if configured == 0:
            return TransitionResolution(allowed=(from_status, to_status) in DEFAULT_TRANSITIONS)
        return TransitionResolution(allowed=False)

    required_fields = rule.required_fields if isinstance(rule.required_fields, list) else []
    return TransitionResolution(allowed=True, required_fields=required_fields)


def missing_required_fields(attributes: Optional[Dict], required_fields: List[str]) -> List[str]:
    attributes = attributes or {}
    return [
        field for field in required_fields
        if attributes.get(field) is None or attributes.get(field) == ""
    ]


def transition_asset_status(db: Session, org_id: UUID, user_id: Optional[str],
                            asset_id: UUID, to_status: str) -> Asset:
    asset = get_asset_by_id(db, org_id, asset_id)
    from_status = asset.status

    if from_status == to_status:
        return validation_error(f"Asset is already in status '{to_status}'")

    resolution = resolve_transition(db, org_id, asset.asset_type_id, from_status, to_status)
    if not resolution.allowed:
        logger.info(
            f"Blocked transition {from_status} -> {to_status} for asset {asset.asset_tag} in org {org_id}")
        return error_response(
            message=f"Transition from '{from_status}' to '{to_status}' is not allowed",
            status_code=AppStatusCode.INVALID_INPUT,
            http_status=400
        )

    missing = missing_required_fields(asset.attributes, resolution.required_fields)
    if missing:
        logger.info(
            f"Transition {from_status} -> {to_status} for asset {asset.asset_tag} is missing {missing}")
        return validation_error(
            message=f"Required fields missing for this transition: {', '.join(missing)}",
            errors=[{"field": field, "message": f"{field} is required"} for field in missing]
        )

    asset.status = to_status
    log_asset_history(
        db, org_id, asset.id, user_id, AssetHistoryAction.status_changed,
        "status", from_status, to_status)
    db.commit()
    db.refresh(asset)
    return asset


def list_transitions(db: Session, org_id: UUID, asset_type_id: Optional[UUID] = None) -> List[AssetLifecycleTransition]:
    def scoped(type_id):
        return (
            _scope_filter(db.query(AssetLifecycleTransition), org_id, type_id)
            .order_by(AssetLifecycleTransition.from_status.asc(),
                      AssetLifecycleTransition.to_status.asc())
            .all()
        )

    transitions = scoped(asset_type_id)
    if not transitions and asset_type_id is not None:
        return scoped(None)
    return transitions


def set_transitions(db: Session, org_id: UUID, request: SetTransitionsRequest) -> List[AssetLifecycleTransition]:
    """Replace every rule of one scope (an asset type, or organization-wide)."""
    seen = set()
    for t in request.transitions:
        pair = (t.from_status.value, t.to_status.value)
        if pair[0] == pair[1]:
            return validation_error(
                f"Transition from '{pair[0]}' to '{pair[1]}' is not allowed (same status)")
        if pair in seen:
            return validation_error(
                f"Transition from '{pair[0]}' to '{pair[1]}' is listed more than once")
        seen.add(pair)

    if request.asset_type_id is not None:
        get_asset_type_by_id(db, org_id, request.asset_type_id)

    _scope_filter(db.query(AssetLifecycleTransition), org_id, request.asset_type_id) \
        .delete(synchronize_session=False)

    for t in request.transitions:
        db.add(AssetLifecycleTransition(
            org_id=org_id,
            asset_type_id=request.asset_type_id,
            from_status=t.from_status.value,
            to_status=t.to_status.value,
            required_fields=list(t.required_fields),
        ))

    db.commit()
    logger.info(
        f"Replaced lifecycle rules of org {org_id} (asset type {request.asset_type_id}): {len(request.transitions)} rule(s)")
    return list_transitions(db, org_id, request.asset_type_id) if request.transitions else []
