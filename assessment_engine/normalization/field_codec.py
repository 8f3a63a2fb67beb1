# ==============================================
# FieldCodec
# ==============================================
#
# PURPOSE:
#   Encode / decode the semi-structured assessment fields
#   (physical_symptoms, emotional_symptoms, other_symptoms,
#   recommendations) between their in-memory list form and the
#   JSON text stored in a scalar column.
#
# WHY THIS CLASS EXISTS:
#   The assessments table stores lists as TEXT. Rows written over
#   the lifetime of the product are not uniform:
#     - '["bloating","fatigue"]'   → normal JSON array
#     - '"back pain"'              → JSON string (other_symptoms)
#     - 'back pain'                → bare text (other_symptoms)
#     - '["invalid", json}'        → corrupted
#     - ["a", "b"]                 → native array (MongoDB documents)
#   Reads must never fail because of one bad column, so every
#   decoder degrades to [] and logs instead of raising.
#
# CLASS: FieldCodec
# -----------------
#   Stateless apart from the injected logger.
#
#   Methods:
#   --------
#   - decode_sequence(raw, field_name, record_id) -> list
#   - decode_free_text_or_sequence(raw) -> list[str]
#   - encode_sequence(value) -> str | None
#   - encode_free_text_or_sequence(value) -> str | None
#   - try_decode(raw) -> DecodeResult
#       Raw JSON parse that reports the failure instead of hiding it.
#
# RULES:
# ------
#   1. "Blank" input (None, "", 0, False) decodes to [] and encodes to None.
#      An empty list is NOT blank: encode_sequence([]) == "[]".
#   2. encode_free_text_or_sequence collapses "" and [] to None.
#      "No symptoms recorded" and "empty list recorded" are not
#      distinguished for other_symptoms.
#
# ==============================================

import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Union

# other_symptoms arrives either as free text or as a list of strings.
FreeTextOrSequence = Union[str, Sequence[str]]


@dataclass
class ParseFailure:
    """Why a raw column value could not be parsed."""
    raw_value: Any
    error: str


@dataclass
class DecodeResult:
    """Outcome of a raw JSON parse: a value or a failure, never both."""
    value: Any = None
    failure: Optional[ParseFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None


def is_blank(value: Any) -> bool:
    """
    True for values that mean "nothing stored".

    Containers are never blank here: an empty list is a real value.
    """
    if isinstance(value, (list, tuple, dict)):
        return False
    return not value


class FieldCodec:
    """
    Encodes semi-structured assessment fields to JSON text and back.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._logger = logger or logging.getLogger(__name__)

    def try_decode(self, raw: Any) -> DecodeResult:
        """
        Parse raw JSON text.

        Args:
            raw: Text read from a column

        Returns:
            DecodeResult holding the parsed value, or the failure
        """
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        try:
            return DecodeResult(value=json.loads(raw))
        except (TypeError, ValueError, RecursionError) as e:
            return DecodeResult(failure=ParseFailure(raw_value=raw, error=str(e)))

    def decode_sequence(self, raw: Any, field_name: str, record_id: Any) -> list:
        """
        Decode a JSON-array column to a list.

        Args:
            raw: Column value (JSON text, native list, or blank)
            field_name: Column name, used for logging
            record_id: Owning record id, used for logging

        Returns:
            The decoded list, or [] when the value is blank or malformed
        """
        if is_blank(raw):
            return []

        # Stores with native array support hand us the list directly
        if isinstance(raw, list):
            return raw
        if isinstance(raw, tuple):
            return list(raw)

        result = self.try_decode(raw)
        if not result.ok:
            self._logger.warning(
                "FIELD_DECODE_FAILED",
                extra={
                    "field_name": field_name,
                    "record_id": record_id,
                    "raw_value": raw,
                    "error": result.failure.error,
                }
            )
            return []

        if not isinstance(result.value, list):
            self._logger.warning(
                "FIELD_NOT_A_SEQUENCE",
                extra={
                    "field_name": field_name,
                    "record_id": record_id,
                    "raw_value": raw,
                }
            )
            return []

        return result.value

    def decode_free_text_or_sequence(self, raw: Any) -> List[str]:
        """
        Decode other_symptoms, stored either as JSON or as bare text.

        Args:
            raw: Column value

        Returns:
            List of symptom strings (possibly empty)
        """
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")

        if is_blank(raw):
            return []

        if isinstance(raw, (list, tuple)):
            return [item for item in raw if isinstance(item, str)]

        result = self.try_decode(raw)
        if result.ok:
            parsed = result.value
            if isinstance(parsed, list):
                return [item for item in parsed if isinstance(item, str)]
            if isinstance(parsed, str) and parsed.strip():
                return [parsed.strip()]
            return []

        # Not JSON at all: the column holds the symptom text itself
        if isinstance(raw, str) and raw.strip():
            return [raw.strip()]
        return []

    def encode_sequence(self, value: Any) -> Optional[str]:
        """
        Serialize a list for storage.

        Args:
            value: List (of strings or recommendation dicts) or blank

        Returns:
            Compact JSON text, or None for blank input
        """
        if is_blank(value):
            return None
        if isinstance(value, tuple):
            value = list(value)
        return _dumps(value)

    def encode_free_text_or_sequence(self, value: Optional[FreeTextOrSequence]) -> Optional[str]:
        """
        Serialize other_symptoms for storage.

        Args:
            value: Free text or list of strings

        Returns:
            JSON array text, or None when there is nothing to store
        """
        if is_blank(value):
            return None

        if isinstance(value, str):
            stripped = value.strip()
            return _dumps([stripped]) if stripped else None

        if isinstance(value, (list, tuple)) and len(value) > 0:
            return _dumps(list(value))

        return None


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
