# =============================================================================
# Tests: asset types, assets and history
# =============================================================================

import uuid

import pytest
from fastapi import HTTPException

from asset_service.app.crud import asset_types_crud, assets_crud, attribute_definitions_crud, lifecycle_crud
from asset_service.app.schemas.asset_type_schemas import AssetTypeCreate, AssetTypeUpdate
from asset_service.app.schemas.assets_schemas import AssetCreate, AssetsRequest, AssetUpdate
from asset_service.app.schemas.lifecycle_schemas import SetTransitionsRequest


@pytest.fixture
def laptop(make_asset_type, make_definition):
    asset_type = make_asset_type("Laptop")
    make_definition(asset_type, "serialNumber", label="Serial Number", is_required=True)
    make_definition(asset_type, "ram", field_type="number", label="RAM", position=1)
    return asset_type


def create(db, org_id, user_id, asset_type, **kwargs):
    data = {"asset_type_id": asset_type.id, "name": "MacBook", "attributes": {"serialNumber": "SN-1"}}
    data.update(kwargs)
    return assets_crud.create_asset(db, org_id, user_id, AssetCreate(**data))


# =============================================================================
# Test: asset types
# =============================================================================

def test_asset_type_name_is_unique_per_org(db, org_id, make_asset_type):
    """Test that a duplicate asset type name is a conflict."""
    make_asset_type("Laptop")

    with pytest.raises(HTTPException) as exc:
        make_asset_type("Laptop")

    assert exc.value.status_code == 409


def test_same_asset_type_name_in_another_org(db, org_id, make_asset_type):
    """Test that names only clash within one organization."""
    make_asset_type("Laptop")

    other = asset_types_crud.create_asset_type(db, uuid.uuid4(), AssetTypeCreate(name="Laptop"))

    assert other.name == "Laptop"


def test_rename_asset_type_to_taken_name(db, org_id, make_asset_type):
    """Test that renaming onto an existing name is a conflict."""
    make_asset_type("Laptop")
    monitor = make_asset_type("Monitor")

    with pytest.raises(HTTPException) as exc:
        asset_types_crud.update_asset_type(db, org_id, monitor.id, AssetTypeUpdate(name="Laptop"))

    assert exc.value.status_code == 409


def test_asset_type_of_other_org_is_not_found(db, make_asset_type):
    """Test that ids from another organization resolve as not found."""
    asset_type = make_asset_type("Laptop")

    with pytest.raises(HTTPException) as exc:
        asset_types_crud.get_asset_type_by_id(db, uuid.uuid4(), asset_type.id)

    assert exc.value.status_code == 404


def test_list_asset_types_counts(db, org_id, user_id, laptop, make_asset_type):
    """Test that the listing carries asset and attribute counts."""
    make_asset_type("Monitor")
    create(db, org_id, user_id, laptop)

    result = asset_types_crud.get_asset_types(db, org_id)

    by_name = {t.name: t for t in result["asset_types"]}
    assert result["total"] == 2
    assert by_name["Laptop"].asset_count == 1
    assert by_name["Laptop"].attribute_count == 2
    assert by_name["Monitor"].asset_count == 0


def test_asset_type_in_use_cannot_be_deleted(db, org_id, user_id, laptop):
    """Test that a type with assets is protected from deletion."""
    create(db, org_id, user_id, laptop)

    with pytest.raises(HTTPException) as exc:
        asset_types_crud.delete_asset_type(db, org_id, laptop.id)

    assert exc.value.status_code == 400


def test_unused_asset_type_delete_removes_its_schema_and_rules(db, org_id, laptop):
    """Test that deleting a type drops its attributes and type-scoped lifecycle rules."""
    lifecycle_crud.set_transitions(db, org_id, SetTransitionsRequest(
        asset_type_id=laptop.id,
        transitions=[{"from_status": "ordered", "to_status": "received"}]))

    asset_types_crud.delete_asset_type(db, org_id, laptop.id)

    assert attribute_definitions_crud.get_attribute_definitions(db, org_id, laptop.id) == []
    assert lifecycle_crud.list_transitions(db, org_id, laptop.id) == []


# =============================================================================
# Test: assets
# =============================================================================

def test_create_asset_assigns_tag_and_logs_history(db, org_id, user_id, laptop):
    """Test that creation generates a tag and a 'created' history entry."""
    asset = create(db, org_id, user_id, laptop)

    history = assets_crud.get_asset_history(db, org_id, asset.id)

    assert asset.asset_tag == "AST-00001"
    assert asset.status == "ordered"
    assert [(h.action, h.user_id) for h in history] == [("created", user_id)]


def test_create_asset_validates_attributes(db, org_id, user_id, laptop):
    """Test that missing required attributes block creation."""
    with pytest.raises(HTTPException) as exc:
        create(db, org_id, user_id, laptop, attributes={"ram": "many"})

    assert exc.value.status_code == 400
    assert {e["field"] for e in exc.value.detail["data"]} == {"serialNumber", "ram"}
    assert assets_crud.get_assets(db, org_id, AssetsRequest())["total"] == 0


def test_create_asset_for_unknown_type(db, org_id, user_id):
    """Test that an unknown asset type is not found."""
    with pytest.raises(HTTPException) as exc:
        assets_crud.create_asset(db, org_id, user_id, AssetCreate(asset_type_id=uuid.uuid4(), name="X"))

    assert exc.value.status_code == 404


def test_update_asset_logs_each_change(db, org_id, user_id, laptop):
    """Test that name and attribute changes are logged one entry per field."""
    asset = create(db, org_id, user_id, laptop, attributes={"serialNumber": "SN-1", "ram": 8})

    assets_crud.update_asset(db, org_id, user_id, asset.id, AssetUpdate(
        name="MacBook Pro", attributes={"serialNumber": "SN-1", "ram": 16}))

    history = assets_crud.get_asset_history(db, org_id, asset.id)
    changes = {(h.action, h.field, h.old_value, h.new_value) for h in history}
    assert ("updated", "name", "MacBook", "MacBook Pro") in changes
    assert ("updated", "ram", "8", "16") in changes
    assert len(history) == 3


def test_update_asset_validates_attributes(db, org_id, user_id, laptop):
    """Test that an update dropping a required attribute is rejected."""
    asset = create(db, org_id, user_id, laptop)

    with pytest.raises(HTTPException):
        assets_crud.update_asset(db, org_id, user_id, asset.id, AssetUpdate(attributes={"ram": 4}))


def test_get_assets_filters(db, org_id, user_id, laptop):
    """Test status and search filters on the asset listing."""
    create(db, org_id, user_id, laptop, name="MacBook")
    create(db, org_id, user_id, laptop, name="ThinkPad", status="deployed")

    deployed = assets_crud.get_assets(db, org_id, AssetsRequest(status="deployed"))
    searched = assets_crud.get_assets(db, org_id, AssetsRequest(search="mac"))
    blank = assets_crud.get_assets(db, org_id, AssetsRequest(search="  "))

    assert [a.name for a in deployed["assets"]] == ["ThinkPad"]
    assert [a.name for a in searched["assets"]] == ["MacBook"]
    assert blank["total"] == 2
