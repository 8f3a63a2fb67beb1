# ==============================================
# StorageToApiTransform
# ==============================================
#
# PURPOSE:
#   Map a flattened storage record back to the API response shape.
#
# ALGORITHM:
# ----------
#   1. None record → None (the only short-circuit)
#   2. Decode physical/emotional symptoms and recommendations with
#      decode_sequence, other_symptoms with decode_free_text_or_sequence
#   3. Recommendations whose first entry is a plain string are mapped
#      entry by entry to {"title": entry, "description": ""}
#   4. Scalars are copied verbatim (0 and "" survive)
#   5. A missing pattern (None or "") is computed by the classifier
#   6. updated_at is never part of the response
#   7. Symptom fields that are somehow not lists are forced to []
#
# NOTE:
#   Step 3 only looks at the first entry. A list that starts with a
#   {title, description} record and later holds strings is returned
#   as stored.
#
# ==============================================

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..analysis.classifier import PatternClassifier
from ..normalization.field_codec import FieldCodec

RESPONSE_SCALAR_FIELDS = (
    "id",
    "user_id",
    "created_at",
    "age",
    "pattern",
    "cycle_length",
    "period_duration",
    "flow_heaviness",
    "pain_level",
)


def normalize_recommendations(recommendations: List[Any]) -> List[Any]:
    """
    Coerce legacy string recommendations to {title, description} records.

    Args:
        recommendations: Decoded recommendations list

    Returns:
        The coerced list, or the input unchanged
    """
    if recommendations and isinstance(recommendations[0], str):
        return [{"title": rec, "description": ""} for rec in recommendations]
    return recommendations


class StorageToApiTransform:
    """Maps storage records to API responses."""

    def __init__(
        self,
        codec: Optional[FieldCodec] = None,
        classifier: Optional[PatternClassifier] = None,
        logger: Optional[logging.Logger] = None
    ):
        self._logger = logger or logging.getLogger(__name__)
        self.codec = codec or FieldCodec(self._logger)
        self.classifier = classifier or PatternClassifier()

    def transform(self, record: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Transform a database record to the API response format.

        Args:
            record: Flattened storage record, or None

        Returns:
            API record, or None when no record was given
        """
        if record is None:
            return None

        record_id = record.get("id")

        physical_symptoms = self.codec.decode_sequence(
            record.get("physical_symptoms"), "physical_symptoms", record_id
        )
        emotional_symptoms = self.codec.decode_sequence(
            record.get("emotional_symptoms"), "emotional_symptoms", record_id
        )
        recommendations = normalize_recommendations(
            self.codec.decode_sequence(
                record.get("recommendations"), "recommendations", record_id
            )
        )
        other_symptoms = self.codec.decode_free_text_or_sequence(record.get("other_symptoms"))

        result: Dict[str, Any] = {name: record.get(name) for name in RESPONSE_SCALAR_FIELDS}

        if result["pattern"] is None or result["pattern"] == "":
            decision = self.classifier.decide(record)
            result["pattern"] = decision.pattern.value
            self._logger.debug(
                "PATTERN_DERIVED",
                extra={"record_id": record_id, "pattern": decision.pattern.value, "rule": decision.rule}
            )

        if not isinstance(physical_symptoms, list):
            self._logger.warning(
                "SYMPTOMS_NOT_A_LIST",
                extra={"field_name": "physical_symptoms", "record_id": record_id}
            )
            physical_symptoms = []
        if not isinstance(emotional_symptoms, list):
            self._logger.warning(
                "SYMPTOMS_NOT_A_LIST",
                extra={"field_name": "emotional_symptoms", "record_id": record_id}
            )
            emotional_symptoms = []

        result["physical_symptoms"] = physical_symptoms
        result["emotional_symptoms"] = emotional_symptoms
        result["other_symptoms"] = other_symptoms
        result["recommendations"] = recommendations

        result.pop("updated_at", None)
        return result

