# =============================================================================
# Tests: asset tag sequencing
# =============================================================================

import uuid

import pytest
from fastapi import HTTPException

from shared.core.config import settings
from asset_service.app.crud import asset_tag_crud
from asset_service.app.crud.asset_tag_crud import create_with_next_tag, format_asset_tag, next_asset_tag
from asset_service.app.models.assets import Asset


@pytest.fixture
def asset_type(make_asset_type):
    return make_asset_type()


@pytest.fixture
def add_asset(db, org_id, asset_type):
    def _add(tag, org=None):
        asset = Asset(org_id=org or org_id, asset_type_id=asset_type.id,
                      asset_tag=tag, name=tag, status="ordered", attributes={})
        db.add(asset)
        db.commit()
        return asset
    return _add


def builder(org_id, asset_type):
    def build(tag):
        return Asset(id=uuid.uuid4(), org_id=org_id, asset_type_id=asset_type.id,
                     asset_tag=tag, name="Laptop", status="ordered", attributes={})
    return build


# =============================================================================
# Test: next_asset_tag
# =============================================================================

def test_format_asset_tag_pads_to_five_digits():
    """Test the tag format."""
    assert format_asset_tag(7) == "AST-00007"
    assert format_asset_tag(123456) == "AST-123456"


def test_first_tag_of_an_organization(db, org_id):
    """Test that an organization without assets starts at AST-00001."""
    assert next_asset_tag(db, org_id) == "AST-00001"


def test_tags_are_sequential(db, org_id, asset_type):
    """Test that consecutive inserts produce consecutive tags."""
    tags = [create_with_next_tag(db, org_id, builder(org_id, asset_type)).asset_tag
            for _ in range(3)]

    assert tags == ["AST-00001", "AST-00002", "AST-00003"]


def test_highest_numeric_suffix_wins(db, org_id, add_asset):
    """Test that the numeric value, not the text, decides the highest tag."""
    add_asset("AST-9")
    add_asset("AST-00010")

    assert next_asset_tag(db, org_id) == "AST-00011"


def test_non_matching_tags_are_ignored(db, org_id, add_asset):
    """Test that tags outside the AST-<digits> pattern do not count."""
    add_asset("LEGACY-500")
    add_asset("AST-12X")
    add_asset("AST-00002")

    assert next_asset_tag(db, org_id) == "AST-00003"


def test_tags_are_scoped_per_organization(db, org_id, add_asset):
    """Test that another organization's tags do not move the sequence."""
    add_asset("AST-00040", org=uuid.uuid4())

    assert next_asset_tag(db, org_id) == "AST-00001"


# =============================================================================
# Test: create_with_next_tag
# =============================================================================

def test_retries_when_tag_was_taken(db, org_id, asset_type, add_asset, monkeypatch):
    """Test that a lost race on the tag is retried with a fresh tag."""
    add_asset("AST-00001")
    real_next = asset_tag_crud.next_asset_tag
    calls = []

    def stale_then_real(session, org):
        calls.append(1)
        if len(calls) == 1:
            return "AST-00001"
        return real_next(session, org)

    monkeypatch.setattr(asset_tag_crud, "next_asset_tag", stale_then_real)

    asset = create_with_next_tag(db, org_id, builder(org_id, asset_type))

    assert asset.asset_tag == "AST-00002"
    assert len(calls) == 2


def test_before_commit_runs_on_every_attempt(db, org_id, asset_type, add_asset, monkeypatch):
    """Test that extra changes are re-applied after a rolled back attempt."""
    add_asset("AST-00001")
    real_next = asset_tag_crud.next_asset_tag
    attempts = []

    def stale_then_real(session, org):
        return "AST-00001" if not attempts else real_next(session, org)

    monkeypatch.setattr(asset_tag_crud, "next_asset_tag", stale_then_real)

    create_with_next_tag(db, org_id, builder(org_id, asset_type),
                         before_commit=lambda asset: attempts.append(asset.asset_tag))

    assert attempts == ["AST-00001", "AST-00002"]


def test_gives_up_after_retry_limit(db, org_id, asset_type, add_asset, monkeypatch):
    """Test that a persistent collision ends in a conflict error."""
    add_asset("AST-00001")
    monkeypatch.setattr(settings, "ASSET_TAG_RETRY_LIMIT", 3)
    monkeypatch.setattr(asset_tag_crud, "next_asset_tag", lambda session, org: "AST-00001")

    with pytest.raises(HTTPException) as exc:
        create_with_next_tag(db, org_id, builder(org_id, asset_type))

    assert exc.value.status_code == 409
    assert db.query(Asset).filter(Asset.org_id == org_id).count() == 1
