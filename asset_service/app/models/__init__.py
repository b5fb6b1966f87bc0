from .asset_types import AssetType
from .attribute_definitions import AssetAttributeDefinition
from .assets import Asset
from .asset_history import AssetHistory
from .lifecycle_transitions import AssetLifecycleTransition
from .import_jobs import AssetImportJob
