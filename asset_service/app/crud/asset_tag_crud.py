import logging
import re
from typing import Callable, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shared.core.config import settings
from shared.helpers.json_response_helper import conflict_error
from ..models.assets import Asset

logger = logging.getLogger(__name__)

TAG_PREFIX = "AST-"
TAG_DIGITS = 5
TAG_PATTERN = re.compile(r"^AST-(\d+)$")


def format_asset_tag(number: int) -> str:
    return f"{TAG_PREFIX}{number:0{TAG_DIGITS}d}"


def next_asset_tag(db: Session, org_id: UUID) -> str:
    """Highest AST-<digits> tag of the organization plus one, AST-00001 when none."""
    tags = db.query(Asset.asset_tag).filter(
        Asset.org_id == org_id,
        Asset.asset_tag.like(f"{TAG_PREFIX}%")
    ).all()

    highest = 0
    for (tag,) in tags:
        match = TAG_PATTERN.match(tag)
        if match:
            highest = max(highest, int(match.group(1)))

    return format_asset_tag(highest + 1)


def _tag_exists(db: Session, org_id: UUID, tag: str) -> bool:
    return db.query(Asset.id).filter(
        Asset.org_id == org_id,
        Asset.asset_tag == tag
    ).first() is not None


def create_with_next_tag(
    db: Session,
    org_id: UUID,
    build_asset: Callable[[str], Asset],
    before_commit: Optional[Callable[[Asset], None]] = None,
) -> Asset:
    """
    Insert a new asset under the next free tag of the organization.

    build_asset receives the tag and returns an unsaved Asset. before_commit
    may add more changes that must land in the same commit as the insert.
    Both are called again on every attempt, after the session was rolled
    back. A unique (org_id, asset_tag) violation means another writer took
    the tag first, so a fresh tag is computed and the insert retried.
    """
    limit = settings.ASSET_TAG_RETRY_LIMIT

    for attempt in range(1, limit + 1):
        tag = next_asset_tag(db, org_id)
        asset = build_asset(tag)
        db.add(asset)
        if before_commit:
            before_commit(asset)

        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if not _tag_exists(db, org_id, tag):
                raise
            logger.warning(
                f"Asset tag {tag} already taken in org {org_id}, retrying ({attempt}/{limit})")
            continue

        db.refresh(asset)
        return asset

    logger.error(
        f"Could not allocate an asset tag in org {org_id} after {limit} attempts")
    return conflict_error(
        f"Could not allocate a unique asset tag after {limit} attempts")
