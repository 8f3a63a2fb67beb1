# ==============================================
# TRANSFORM
# ==============================================
#
# This package converts assessments between the API shape and the
# stored shape, in both directions.
#
# Modules:
# --------
# - api_to_storage.py   → payload → flat storage record
# - storage_to_api.py   → flat storage record → API response
# - legacy_adapter.py   → choose the LEGACY or FLATTENED read path
#
# ==============================================

from .api_to_storage import ApiToStorageTransform
from .storage_to_api import StorageToApiTransform, normalize_recommendations
from .legacy_adapter import LegacyFormatAdapter, SchemaVersion, detect_schema_version

__all__ = [
    "ApiToStorageTransform",
    "LegacyFormatAdapter",
    "SchemaVersion",
    "StorageToApiTransform",
    "detect_schema_version",
    "normalize_recommendations",
]
