# ==============================================
# ANALYSIS & CLASSIFICATION
# ==============================================
#
# This package handles deciding what an assessment means and
# whether it is acceptable at all.
#
# Modules:
# --------
# - pattern.py      → Pattern enum, answer bands, PatternDecision
# - classifier.py   → Fixed-priority rules: answers → pattern
# - validator.py    → Payload validation (both key spellings)
#
# ==============================================

from .pattern import Pattern, PatternDecision, read_field
from .classifier import PatternClassifier, classify_pattern, resolve_pattern
from .validator import AssessmentValidator, ValidationResult

__all__ = [
    "AssessmentValidator",
    "Pattern",
    "PatternClassifier",
    "PatternDecision",
    "ValidationResult",
    "classify_pattern",
    "read_field",
    "resolve_pattern",
]
