# ==============================================
# AssessmentValidator
# ==============================================
#
# PURPOSE:
#   Check an inbound assessment payload before it is stored.
#
# WHY THIS CLASS EXISTS:
#   The transforms deliberately pass scalar values through untouched,
#   so the only place a bad band is caught is here, at submission time.
#   Payloads arrive nested (assessment_data, camelCase) or flattened
#   (snake_case); every check looks at both spellings.
#
# CLASS: AssessmentValidator
# --------------------------
#   Methods:
#   --------
#   - validate(payload: dict | None) -> ValidationResult
#
# RULES:
# ------
#   1. age             → required, must be a known age band
#   2. cycle length    → required, must be a known band
#   3. period duration → optional, must be a known band when given
#   4. flow heaviness  → optional, must be a known band when given
#   5. pain level      → optional, must be a known band when given
#
# ==============================================

from dataclasses import dataclass, field
from typing import Any, FrozenSet, List, Mapping, Optional

from .pattern import (
    VALID_AGES,
    VALID_CYCLE_LENGTHS,
    VALID_FLOW_HEAVINESS,
    VALID_PAIN_LEVELS,
    VALID_PERIOD_DURATIONS,
    read_field,
)


@dataclass
class ValidationResult:
    """Outcome of validating one payload."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)


class AssessmentValidator:
    """
    Validates assessment payloads in either accepted shape.
    """

    # (field, label, allowed values, required)
    CHECKS = (
        ("age", "age", VALID_AGES, True),
        ("cycle_length", "cycle length", VALID_CYCLE_LENGTHS, True),
        ("period_duration", "period duration", VALID_PERIOD_DURATIONS, False),
        ("flow_heaviness", "flow heaviness", VALID_FLOW_HEAVINESS, False),
        ("pain_level", "pain level", VALID_PAIN_LEVELS, False),
    )

    def validate(self, payload: Optional[Mapping[str, Any]]) -> ValidationResult:
        """
        Validate an assessment payload.

        Args:
            payload: Nested or flattened assessment payload

        Returns:
            ValidationResult with every problem found
        """
        if not payload:
            return ValidationResult(is_valid=False, errors=["Assessment data is required"])

        data = self._unwrap(payload)
        errors: List[str] = []

        for name, label, allowed, required in self.CHECKS:
            value = read_field(data, name)
            if value is None or value == "":
                if required:
                    errors.append(f"{label} is required")
                continue
            if not self._is_allowed(value, allowed):
                errors.append(f"Invalid {label} value")

        return ValidationResult(is_valid=not errors, errors=errors)

    def _unwrap(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        for wrapper in ("assessment_data", "assessmentData"):
            nested = payload.get(wrapper)
            if isinstance(nested, Mapping) and nested:
                return nested
        return payload

    def _is_allowed(self, value: Any, allowed: FrozenSet[str]) -> bool:
        return isinstance(value, str) and value in allowed
