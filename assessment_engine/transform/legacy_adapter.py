# ==============================================
# LegacyFormatAdapter
# ==============================================
#
# PURPOSE:
#   Pick the right reconstruction path for a stored assessment.
#
# WHY THIS CLASS EXISTS:
#   The assessments table has held two shapes over time:
#
#   LEGACY:     scalar columns + assessment_data (one JSON blob)
#               {"age": ..., "cycleLength": ..., "symptoms":
#                   {"physical": [...], "emotional": [...]},
#                "recommendations": [...]}
#
#   FLATTENED:  scalar columns + one TEXT column per list
#               (physical_symptoms, emotional_symptoms, ...)
#
#   The schema is resolved ONCE per record into a SchemaVersion and
#   dispatched from there; nothing downstream sniffs for the blob.
#   No data is migrated, only the read path changes.
#
# CLASS: LegacyFormatAdapter
# --------------------------
#   Methods:
#   --------
#   - to_api(record) -> dict | None
#       FLATTENED → StorageToApiTransform.transform(record)
#       LEGACY    → nested view:
#           {"id", "userId", "createdAt",
#            "assessmentData": {"age", "pattern", "cycleLength",
#               "periodDuration", "flowHeaviness", "painLevel",
#               "symptoms": {"physical": [...], "emotional": [...]},
#               "recommendations": [...]}}
#
#   - to_api_many(records) -> list[dict]
#
# RULES (LEGACY path):
# --------------------
#   1. A malformed blob is logged and treated as {}
#   2. Each symptom list is decoded on its own; a bad one becomes []
#      without affecting the other
#   3. A list missing from the blob falls back to its flattened column
#   4. Scalars prefer the column value, then the blob value
#   5. A missing pattern is classified; updatedAt is never emitted
#
# ==============================================

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..analysis.classifier import PatternClassifier
from ..analysis.pattern import FIELD_SPELLINGS
from ..normalization.field_codec import FieldCodec, is_blank
from .storage_to_api import StorageToApiTransform, normalize_recommendations

LEGACY_BLOB_FIELD = "assessment_data"


class SchemaVersion(Enum):
    """Storage shape a single assessment row was written in."""
    LEGACY = "legacy"
    FLATTENED = "flattened"


def detect_schema_version(record: Mapping[str, Any]) -> SchemaVersion:
    """
    Resolve which storage shape a record uses.

    Args:
        record: Raw storage record

    Returns:
        SchemaVersion.LEGACY when the blob column holds anything
    """
    blob = record.get(LEGACY_BLOB_FIELD)
    if blob is None or blob == "" or blob == {}:
        return SchemaVersion.FLATTENED
    if isinstance(blob, str) and not blob.strip():
        return SchemaVersion.FLATTENED
    return SchemaVersion.LEGACY


class LegacyFormatAdapter:
    """
    Routes each stored assessment to the reconstruction path for its shape.
    """

    def __init__(
        self,
        codec: Optional[FieldCodec] = None,
        storage_to_api: Optional[StorageToApiTransform] = None,
        classifier: Optional[PatternClassifier] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._logger = logger or logging.getLogger(__name__)
        self.codec = codec or FieldCodec(self._logger)
        self.classifier = classifier or PatternClassifier()
        self.storage_to_api = storage_to_api or StorageToApiTransform(
            codec=self.codec,
            classifier=self.classifier,
            logger=self._logger
        )

    def to_api(self, record: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Convert one stored record to its API representation.

        Args:
            record: Raw storage record, or None

        Returns:
            API record (flattened or nested legacy view), or None
        """
        if record is None:
            return None

        version = detect_schema_version(record)
        if version is SchemaVersion.LEGACY:
            return self._legacy_to_api(record)
        return self.storage_to_api.transform(record)

    def to_api_many(self, records: Iterable[Optional[Mapping[str, Any]]]) -> List[Dict[str, Any]]:
        results = []
        for record in records:
            converted = self.to_api(record)
            if converted is not None:
                results.append(converted)
        return results

    def _legacy_to_api(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        record_id = record.get("id")
        blob = self._parse_blob(record.get(LEGACY_BLOB_FIELD), record_id)

        symptoms = blob.get("symptoms")
        if not isinstance(symptoms, Mapping):
            symptoms = {}

        physical = self._decode_symptoms(
            symptoms.get("physical"), record.get("physical_symptoms"),
            "physical_symptoms", record_id
        )
        emotional = self._decode_symptoms(
            symptoms.get("emotional"), record.get("emotional_symptoms"),
            "emotional_symptoms", record_id
        )

        blob_recommendations = blob.get("recommendations")
        if is_blank(blob_recommendations):
            blob_recommendations = record.get("recommendations")
        recommendations = normalize_recommendations(
            self.codec.decode_sequence(blob_recommendations, "recommendations", record_id)
        )

        assessment_data: Dict[str, Any] = {}
        for column, camel in FIELD_SPELLINGS.items():
            assessment_data[camel] = self._scalar(record, blob, column, camel)

        if assessment_data["pattern"] is None or assessment_data["pattern"] == "":
            assessment_data["pattern"] = self.classifier.classify(assessment_data).value

        assessment_data["symptoms"] = {"physical": physical, "emotional": emotional}
        assessment_data["recommendations"] = recommendations

        return {
            "id": record_id,
            "userId": record.get("user_id"),
            "createdAt": record.get("created_at"),
            "assessmentData": assessment_data,
        }

    def _parse_blob(self, blob: Any, record_id: Any) -> Mapping[str, Any]:
        if isinstance(blob, Mapping):
            return blob

        result = self.codec.try_decode(blob)
        if not result.ok:
            self._logger.warning(
                "LEGACY_BLOB_DECODE_FAILED",
                extra={
                    "field_name": LEGACY_BLOB_FIELD,
                    "record_id": record_id,
                    "raw_value": blob,
                    "error": result.failure.error,
                }
            )
            return {}
        if not isinstance(result.value, Mapping):
            self._logger.warning(
                "LEGACY_BLOB_NOT_AN_OBJECT",
                extra={"field_name": LEGACY_BLOB_FIELD, "record_id": record_id}
            )
            return {}
        return result.value

    def _decode_symptoms(self, from_blob: Any, from_column: Any, field_name: str, record_id: Any) -> list:
        raw = from_column if is_blank(from_blob) else from_blob
        return self.codec.decode_sequence(raw, field_name, record_id)

    def _scalar(self, record: Mapping[str, Any], blob: Mapping[str, Any], column: str, camel: str) -> Any:
        value = record.get(column)
        if value is not None:
            return value
        if blob.get(camel) is not None:
            return blob.get(camel)
        return blob.get(column)
