# ==============================================
# FieldNormalizer
# ==============================================
#
# PURPOSE:
#   Convert inbound assessment payload keys to the single canonical
#   form (snake_case) used by the transforms, and flatten the older
#   nested payload shape.
#
# WHY THIS CLASS EXISTS:
#   Clients send the same logical assessment in two shapes:
#     - flattened snake_case:  {"cycle_length": "26-30", ...}
#     - nested camelCase:      {"assessment_data": {"cycleLength": "26-30",
#                                 "symptoms": {"physical": [...]}}}
#   The transforms only understand the flattened snake_case shape,
#   so every payload passes through here first.
#
# CLASS: FieldNormalizer
# ----------------------
#   Keeps a cache of original name → canonical name.
#
#   Methods:
#   --------
#   - normalize(name: str) -> str
#       Convert a single field name to snake_case.
#
#   - normalize_payload(payload: dict) -> dict
#       Unwrap assessment_data, snake_case every key, flatten the
#       legacy "symptoms" object. Values are never touched.
#
# RULES:
# ------
#   1. camelCase    → snake_case    (cycleLength → cycle_length)
#   2. PascalCase   → snake_case    (PainLevel → pain_level)
#   3. Already snake → unchanged    (flow_heaviness → flow_heaviness)
#   4. symptoms.physical  → physical_symptoms (same for emotional/other)
#   5. A key already holding a value is not overwritten by None
#
# ==============================================

import re
from typing import Any, Dict

# Wrapper keys used by the nested payload shape
NESTED_PAYLOAD_KEYS = ("assessment_data", "assessmentData")

# Compound keys produced by flattening the legacy "symptoms" object
KEY_ALIASES = {
    "symptoms_physical": "physical_symptoms",
    "symptoms_emotional": "emotional_symptoms",
    "symptoms_other": "other_symptoms",
}


class FieldNormalizer:
    """
    Converts assessment payload keys to canonical snake_case format.
    Maintains a mapping of original names to canonical forms.
    """

    def __init__(self):
        """Initialize the normalizer with an empty mapping registry."""
        self._mappings: Dict[str, str] = {}

    def normalize(self, name: str) -> str:
        """
        Convert a field name to snake_case.

        Args:
            name: Raw field name (e.g., "cycleLength", "PainLevel")

        Returns:
            Canonical snake_case name (e.g., "cycle_length", "pain_level")
        """
        if not name:
            return name

        if name in self._mappings:
            return self._mappings[name]

        normalized = self._camel_to_snake(name)
        self._mappings[name] = normalized

        return normalized

    def normalize_payload(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Bring an inbound payload to the flattened snake_case shape.

        Args:
            payload: Raw API payload, flattened or nested

        Returns:
            New dictionary with canonical keys
        """
        normalized: Dict[str, Any] = {}

        for key, value in payload.items():
            if key in NESTED_PAYLOAD_KEYS:
                continue
            self._normalize_and_flatten(key, value, normalized)

        # Nested assessment data wins over the outer keys
        for wrapper in NESTED_PAYLOAD_KEYS:
            nested = payload.get(wrapper)
            if isinstance(nested, dict):
                for key, value in nested.items():
                    self._normalize_and_flatten(key, value, normalized, override=True)

        return normalized

    def _normalize_and_flatten(
        self,
        key: str,
        value: Any,
        normalized: Dict[str, Any],
        override: bool = False
    ) -> None:
        canonical = self.normalize(key)

        if canonical == "symptoms" and isinstance(value, dict):
            for nested_key, nested_value in value.items():
                compound_key = f"{canonical}_{self.normalize(nested_key)}"
                self._store(KEY_ALIASES.get(compound_key, compound_key), nested_value, normalized, override)
            return

        self._store(canonical, value, normalized, override)

    def _store(self, key: str, value: Any, normalized: Dict[str, Any], override: bool) -> None:
        if key in normalized and normalized[key] is not None:
            if value is None or not override:
                return
        normalized[key] = value

    def _camel_to_snake(self, name: str) -> str:
        """
        Convert camelCase/PascalCase to snake_case.

        Args:
            name: Input field name

        Returns:
            snake_case version of the name
        """
        # Remove any non-alphanumeric characters except underscores
        name = re.sub(r'[^a-zA-Z0-9_]', '_', name)

        # Sequences of capitals (e.g., "HTMLNotes" -> "html_notes")
        name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)

        # Capital letters that follow lowercase letters or digits
        name = re.sub(r'([a-z\d])([A-Z])', r'\1_\2', name)

        name = name.lower()
        name = re.sub(r'_+', '_', name)
        name = name.strip('_')

        return name
