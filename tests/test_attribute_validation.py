# =============================================================================
# Tests: attribute schema validation
# =============================================================================

from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from asset_service.app.crud.attribute_definitions_crud import (
    validate_asset_attributes,
    validate_attributes,
)
from asset_service.app.enum.asset_enum import AttributeFieldType
from asset_service.app.helpers.attribute_fields import FIELD_HANDLERS, handler_for, option_values


def definition(name, field_type, is_required=False, options=None, position=0):
    return SimpleNamespace(name=name, label=name.title(), field_type=field_type,
                           is_required=is_required, options=options, position=position)


# =============================================================================
# Test: field handlers
# =============================================================================

def test_every_field_type_has_a_handler():
    """Test that the handler table covers the whole field type enum."""
    assert set(FIELD_HANDLERS) == set(AttributeFieldType)


def test_unknown_field_type_has_no_handler():
    """Test that an unknown stored field type resolves to no handler."""
    assert handler_for("geo") is None
    assert handler_for("ipAddress") is FIELD_HANDLERS[AttributeFieldType.ip_address]


def test_option_values_accepts_strings_and_dicts():
    """Test that select options may be plain strings or value/label dicts."""
    assert option_values(["a", {"value": "b", "label": "B"}]) == ["a", "b"]
    assert option_values(None) == []


# =============================================================================
# Test: validate_attributes
# =============================================================================

def test_no_definitions_is_a_no_op():
    """Test that schema-less types accept anything."""
    assert validate_attributes([], {"anything": object()}) == []


def test_required_attribute_missing():
    """Test the error for a missing required attribute."""
    errors = validate_attributes([definition("serial", "text", is_required=True)], {})

    assert errors == [{"field": "serial", "message": "Serial is required"}]


@pytest.mark.parametrize("value", [None, ""])
def test_required_attribute_empty(value):
    """Test that None and the empty string count as missing."""
    errors = validate_attributes([definition("serial", "text", is_required=True)], {"serial": value})

    assert len(errors) == 1


@pytest.mark.parametrize("value", [0, False])
def test_falsy_values_are_present(value):
    """Test that 0 and False satisfy a required attribute."""
    definitions = [
        definition("count", "number", is_required=True),
        definition("flag", "boolean", is_required=True),
    ]
    errors = validate_attributes(definitions, {"count": 0, "flag": value})

    assert errors == []


@pytest.mark.parametrize("field_type,value", [
    ("text", "abc"),
    ("url", "https://example.com"),
    ("number", 3),
    ("number", 2.5),
    ("number", "42"),
    ("date", "2024-01-31"),
    ("boolean", True),
    ("boolean", "false"),
    ("select", "b"),
])
def test_valid_values(field_type, value):
    """Test values accepted by each field type."""
    errors = validate_attributes([definition("field", field_type, options=["a", "b"])], {"field": value})

    assert errors == []


@pytest.mark.parametrize("field_type,value", [
    ("text", 5),
    ("number", True),
    ("number", "abc"),
    ("date", "not a date"),
    ("date", 20240131),
    ("date", "2024-03"),
    ("boolean", "yes"),
    ("boolean", ["true"]),
    ("select", "c"),
])
def test_invalid_values(field_type, value):
    """Test values rejected by each field type."""
    errors = validate_attributes([definition("field", field_type, options=["a", "b"])], {"field": value})

    assert len(errors) == 1
    assert errors[0]["field"] == "field"


def test_select_without_options_accepts_any_string():
    """Test that a select with no options accepts any string."""
    assert validate_attributes([definition("model", "select")], {"model": "anything"}) == []


def test_all_errors_are_collected():
    """Test that every failing definition is reported."""
    definitions = [
        definition("serial", "text", is_required=True, position=0),
        definition("ram", "number", position=1),
        definition("managed", "boolean", position=2),
    ]

    errors = validate_attributes(definitions, {"ram": "x", "managed": "maybe"})

    assert [e["field"] for e in errors] == ["serial", "ram", "managed"]


# =============================================================================
# Test: validate_asset_attributes
# =============================================================================

def test_validate_asset_attributes_raises_with_error_list(db, org_id, make_asset_type, make_definition):
    """Test that the full error list travels in the error payload."""
    asset_type = make_asset_type()
    make_definition(asset_type, "serial", is_required=True, label="Serial Number")
    make_definition(asset_type, "ram", field_type="number", position=1)

    with pytest.raises(HTTPException) as exc:
        validate_asset_attributes(db, org_id, asset_type.id, {"ram": "lots"})

    assert exc.value.status_code == 400
    assert [e["field"] for e in exc.value.detail["data"]] == ["serial", "ram"]
    assert "Serial Number is required" in exc.value.detail["message"]
