import math
from datetime import datetime
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Union

from dateutil import parser as date_parser

from ..enum.asset_enum import AttributeFieldType

BOOLEAN_TRUE_TOKENS = {"true", "yes", "1"}
BOOLEAN_FALSE_TOKENS = {"false", "no", "0"}


class FieldParseError(ValueError):
    """Raised by a field parser with the user-facing message for the cell."""


class FieldHandler(NamedTuple):
    # value check used when attributes are written directly (create/update)
    accepts: Callable[[Any, List[str]], bool]
    # raw CSV text -> typed value, raises FieldParseError
    parse: Callable[[str], Any]


def option_values(options: Any) -> List[str]:
    """Select options are stored either as plain strings or {"value", "label"} dicts."""
    if not isinstance(options, list):
        return []
    values = []
    for option in options:
        if isinstance(option, dict):
            if "value" in option:
                values.append(str(option["value"]))
        else:
            values.append(str(option))
    return values


def to_number(raw: str) -> Union[int, float]:
    text = raw.strip()
    if not text or "_" in text:
        raise ValueError(f"not a number: {raw!r}")
    try:
        return int(text)
    except ValueError:
        number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"not a finite number: {raw!r}")
    return number


# year, month and day must all come from the text, not from these fills
DATE_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def to_iso_date(raw: str) -> str:
    parsed, other = (date_parser.parse(raw.strip(), default=d) for d in DATE_FILL_DEFAULTS)
    if parsed.date() != other.date():
        raise ValueError(f"incomplete date: {raw!r}")
    if parsed.tzinfo is None and (parsed.hour, parsed.minute, parsed.second, parsed.microsecond) == (0, 0, 0, 0):
        return parsed.date().isoformat()
    return parsed.isoformat()


# ----------------------------------------------------------------------
# per-type checks
# ----------------------------------------------------------------------

def _accepts_string(value: Any, options: List[str]) -> bool:
    return isinstance(value, str)


def _accepts_number(value: Any, options: List[str]) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return math.isfinite(value)
    if isinstance(value, str):
        try:
            to_number(value)
        except ValueError:
            return False
        return True
    return False


def _accepts_date(value: Any, options: List[str]) -> bool:
    if not isinstance(value, str):
        return False
    try:
        to_iso_date(value)
    except (ValueError, OverflowError):
        return False
    return True


def _accepts_boolean(value: Any, options: List[str]) -> bool:
    return isinstance(value, bool) or (isinstance(value, str) and value in ("true", "false"))


def _accepts_select(value: Any, options: List[str]) -> bool:
    if not isinstance(value, str):
        return False
    return not options or value in options


# ----------------------------------------------------------------------
# per-type CSV parsers
# ----------------------------------------------------------------------

def _parse_string(raw: str) -> str:
    return raw


def _parse_number(raw: str) -> Union[int, float]:
    try:
        return to_number(raw)
    except ValueError:
        raise FieldParseError("Must be a valid number")


def _parse_date(raw: str) -> str:
    try:
        return to_iso_date(raw)
    except (ValueError, OverflowError):
        raise FieldParseError("Must be a valid date")


def _parse_boolean(raw: str) -> bool:
    token = raw.strip().lower()
    if token in BOOLEAN_TRUE_TOKENS:
        return True
    if token in BOOLEAN_FALSE_TOKENS:
        return False
    raise FieldParseError("Must be true/false, yes/no, or 1/0")


FIELD_HANDLERS: Dict[AttributeFieldType, FieldHandler] = {
    AttributeFieldType.text: FieldHandler(_accepts_string, _parse_string),
    AttributeFieldType.number: FieldHandler(_accepts_number, _parse_number),
    AttributeFieldType.date: FieldHandler(_accepts_date, _parse_date),
    AttributeFieldType.boolean: FieldHandler(_accepts_boolean, _parse_boolean),
    # import keeps select cells as raw text, options are enforced on direct writes
    AttributeFieldType.select: FieldHandler(_accepts_select, _parse_string),
    AttributeFieldType.reference: FieldHandler(_accepts_string, _parse_string),
    AttributeFieldType.url: FieldHandler(_accepts_string, _parse_string),
    AttributeFieldType.ip_address: FieldHandler(_accepts_string, _parse_string),
    AttributeFieldType.user: FieldHandler(_accepts_string, _parse_string),
}

_missing_handlers = set(AttributeFieldType) - set(FIELD_HANDLERS)
if _missing_handlers:
    raise RuntimeError(
        f"No field handler registered for: {sorted(t.value for t in _missing_handlers)}")


def handler_for(field_type: Union[str, AttributeFieldType]) -> Optional[FieldHandler]:
    try:
        return FIELD_HANDLERS[AttributeFieldType(field_type)]
    except ValueError:
        return None
