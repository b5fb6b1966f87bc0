from enum import Enum


class AssetStatus(str, Enum):

    ordered = "ordered"
    received = "received"
    deployed = "deployed"
    in_use = "in_use"
    maintenance = "maintenance"
    retired = "retired"
    disposed = "disposed"


class AttributeFieldType(str, Enum):

    text = "text"
    number = "number"
    date = "date"
    boolean = "boolean"
    select = "select"
    reference = "reference"
    url = "url"
    ip_address = "ipAddress"
    user = "user"


class AssetHistoryAction(str, Enum):

    created = "created"
    updated = "updated"
    status_changed = "status_changed"


class ImportJobStatus(str, Enum):

    pending = "pending"
    processing = "processing"
    completed = "completed"
    failed = "failed"


# Built-in import targets that are not attribute definitions
NAME_TARGET = "__name"
STATUS_TARGET = "__status"

ASSET_STATUS_VALUES = [s.value for s in AssetStatus]
