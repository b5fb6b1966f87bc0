import re
from typing import Any, Dict, List, Mapping, NamedTuple, Sequence

from ..enum.asset_enum import ASSET_STATUS_VALUES, NAME_TARGET, STATUS_TARGET
from .attribute_fields import FieldParseError, handler_for

_WHITESPACE_RUN = re.compile(r"\s+")


class RowValidationResult(NamedTuple):
    valid: bool
    errors: List[Dict[str, str]]
    values: Dict[str, Any]


def normalize_status(raw: str) -> str:
    return _WHITESPACE_RUN.sub("_", raw.strip().lower())


def validate_import_row(
    row: Mapping[str, str],
    definitions: Sequence,
    mapping: Mapping[str, str],
) -> RowValidationResult:
    """
    Validate and coerce one CSV row through the column mapping.

    Every problem in the row is collected, keyed by the CSV header. Empty
    attribute cells are skipped: required attributes are not enforced on
    import.
    """
    by_name = {d.name: d for d in definitions}
    errors: List[Dict[str, str]] = []
    values: Dict[str, Any] = {}

    for header, target in mapping.items():
        raw = (row.get(header) or "").strip()

        if target == NAME_TARGET:
            if not raw:
                errors.append({"field": header, "message": "Name is required"})
            else:
                values[NAME_TARGET] = raw
            continue

        if target == STATUS_TARGET:
            if not raw:
                continue
            status = normalize_status(raw)
            if status not in ASSET_STATUS_VALUES:
                errors.append({
                    "field": header,
                    "message": f"Invalid status. Valid: {', '.join(ASSET_STATUS_VALUES)}",
                })
            else:
                values[STATUS_TARGET] = status
            continue

        definition = by_name.get(target)
        if definition is None or not raw:
            continue

        handler = handler_for(definition.field_type)
        if handler is None:
            values[target] = raw
            continue

        try:
            values[target] = handler.parse(raw)
        except FieldParseError as e:
            errors.append({"field": header, "message": str(e)})

    return RowValidationResult(not errors, errors, values)


def attributes_from_values(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop the built-in __name/__status targets, keep attribute values."""
    return {k: v for k, v in values.items() if not k.startswith("__")}
