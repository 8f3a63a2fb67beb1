# ==============================================
# Pattern (Data Classes)
# ==============================================
#
# PURPOSE:
#   Data classes and constants that represent the OUTPUT of pattern
#   classification and the answer bands it reads.
#
# WHY THIS FILE EXISTS:
#   Separating data from logic keeps the classifier small. The band
#   sets are also used by the validator, so they live here rather
#   than inside either of them.
#
# ENUMS:
# ------
# - Pattern(str, Enum): REGULAR, IRREGULAR, HEAVY, PAIN, DEVELOPING
#
# CLASSES:
# --------
# - PatternDecision (dataclass)
#     - pattern: Pattern      → Assigned label
#     - rule: str             → Name of the rule that matched
#     - reason: str           → Human-readable explanation
#
# ==============================================

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping


class Pattern(str, Enum):
    """
    The five mutually exclusive menstrual patterns.

    Values are the strings stored in the `pattern` column.
    """
    REGULAR = "regular"
    IRREGULAR = "irregular"
    HEAVY = "heavy"
    PAIN = "pain"
    DEVELOPING = "developing"


# --- Bands that trigger a rule ---
DEVELOPING_AGES: FrozenSet[str] = frozenset({"under-13", "13-17"})
IRREGULAR_CYCLE_LENGTHS: FrozenSet[str] = frozenset({"irregular", "less-than-21", "36-40"})
HEAVY_FLOWS: FrozenSet[str] = frozenset({"heavy", "very-heavy"})
HEAVY_PERIOD_DURATION = "8-plus"
SEVERE_PAIN_LEVELS: FrozenSet[str] = frozenset({"severe", "debilitating"})

# --- Every answer the assessment form offers ---
VALID_AGES: FrozenSet[str] = frozenset({"under-13", "13-17", "18-24", "25-plus"})
VALID_CYCLE_LENGTHS: FrozenSet[str] = frozenset({
    "less-than-21", "21-25", "26-30", "31-35", "36-40", "irregular", "not-sure", "other",
})
VALID_PERIOD_DURATIONS: FrozenSet[str] = frozenset({
    "1-3", "4-5", "6-7", "8-plus", "varies", "not-sure", "other",
})
VALID_FLOW_HEAVINESS: FrozenSet[str] = frozenset({
    "light", "moderate", "heavy", "very-heavy", "varies", "not-sure",
})
VALID_PAIN_LEVELS: FrozenSet[str] = frozenset({
    "no-pain", "mild", "moderate", "severe", "debilitating", "varies",
})


@dataclass
class PatternDecision:
    """
    Result of classifying one assessment.
    """
    pattern: Pattern
    rule: str
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize the decision to a dictionary.

        Returns:
            A JSON-serializable dictionary representation
        """
        return {
            "pattern": self.pattern.value,
            "rule": self.rule,
            "reason": self.reason,
        }


# snake_case column name → camelCase API spelling
FIELD_SPELLINGS: Dict[str, str] = {
    "age": "age",
    "pattern": "pattern",
    "cycle_length": "cycleLength",
    "period_duration": "periodDuration",
    "flow_heaviness": "flowHeaviness",
    "pain_level": "painLevel",
}


def read_field(fields: Mapping[str, Any], name: str) -> Any:
    """
    Read a field under either its snake_case or camelCase spelling.

    Args:
        fields: Assessment payload or storage record
        name: snake_case field name

    Returns:
        The first non-empty value found, otherwise whatever the
        snake_case key holds (possibly None)
    """
    camel = FIELD_SPELLINGS.get(name, name)
    for key in (name, camel):
        value = fields.get(key)
        if value is not None and value != "":
            return value
    return fields.get(name)
