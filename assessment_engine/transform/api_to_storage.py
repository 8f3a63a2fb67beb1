# ==============================================
# ApiToStorageTransform
# ==============================================
#
# PURPOSE:
#   Map an inbound (already key-normalized) assessment payload to the
#   flat record written to the assessments table.
#
# RULES:
# ------
#   - Scalars are copied as-is. 0 and "" stay 0 and "", a missing key
#     becomes None. Nothing is validated here.
#   - physical_symptoms / emotional_symptoms / recommendations
#       → FieldCodec.encode_sequence
#   - other_symptoms
#       → FieldCodec.encode_free_text_or_sequence
#   - No id, user_id or created_at is assigned; the caller owns those.
#
# ==============================================

from typing import Any, Dict, Mapping, Optional

from ..normalization.field_codec import FieldCodec

SCALAR_FIELDS = (
    "age",
    "pattern",
    "cycle_length",
    "period_duration",
    "flow_heaviness",
    "pain_level",
)

SEQUENCE_FIELDS = (
    "physical_symptoms",
    "emotional_symptoms",
    "recommendations",
)


class ApiToStorageTransform:
    """Maps API payloads to storage records."""

    def __init__(self, codec: Optional[FieldCodec] = None):
        self.codec = codec or FieldCodec()

    def transform(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Transform assessment data for database storage.

        Args:
            payload: Assessment data from the API (snake_case keys)

        Returns:
            Storage record with encoded semi-structured fields
        """
        record: Dict[str, Any] = {name: payload.get(name) for name in SCALAR_FIELDS}

        record["other_symptoms"] = self.codec.encode_free_text_or_sequence(
            payload.get("other_symptoms")
        )
        for name in SEQUENCE_FIELDS:
            record[name] = self.codec.encode_sequence(payload.get(name))

        return record
