# ==============================================
# PatternClassifier
# ==============================================
#
# PURPOSE:
#   Map an assessment's answer bands to one of the five menstrual
#   patterns (regular, irregular, heavy, pain, developing).
#
# WHY THIS CLASS EXISTS:
#   Older rows were stored without a pattern, and some clients submit
#   assessments without one. Whenever a pattern is missing it is
#   derived here, from the same rules the assessment form uses.
#
# CLASS: PatternClassifier
# ------------------------
#   Stateless — answers in, decision out.
#
#   Methods:
#   --------
#   - classify_assessment(age, cycle_length, period_duration,
#                         flow_heaviness, pain_level) -> PatternDecision
#       Applies rules in order, first match wins:
#
#       RULE 1: DEVELOPING
#         age in {under-13, 13-17}
#
#       RULE 2: IRREGULAR
#         cycle_length in {irregular, less-than-21, 36-40}
#
#       RULE 3: HEAVY
#         flow_heaviness in {heavy, very-heavy} OR period_duration == 8-plus
#
#       RULE 4: PAIN
#         pain_level in {severe, debilitating}
#
#       RULE 5: REGULAR
#         everything else
#
#   - classify(fields: Mapping) -> Pattern
#       Same rules, reading either spelling of each field.
#
#   - resolve(fields: Mapping) -> Pattern | str
#       Trust an explicit pattern, otherwise classify.
#
# NOTE:
#   The order matters: a 13-17 year old with heavy flow is
#   "developing", not "heavy". A supplied pattern is never checked
#   against these rules.
#
# ==============================================

from typing import Any, FrozenSet, Mapping, Optional, Union

from .pattern import (
    DEVELOPING_AGES,
    HEAVY_FLOWS,
    HEAVY_PERIOD_DURATION,
    IRREGULAR_CYCLE_LENGTHS,
    SEVERE_PAIN_LEVELS,
    Pattern,
    PatternDecision,
    read_field,
)


def _in_band(value: Any, band: FrozenSet[str]) -> bool:
    # Unvalidated input may be a number or a list; only strings can match
    return isinstance(value, str) and value in band


class PatternClassifier:
    """
    Applies the fixed-priority pattern rules to an assessment.
    """

    def classify_assessment(
        self,
        age: Optional[str] = None,
        cycle_length: Optional[str] = None,
        period_duration: Optional[str] = None,
        flow_heaviness: Optional[str] = None,
        pain_level: Optional[str] = None
    ) -> PatternDecision:
        """
        Classify one assessment from its answer bands.

        Args:
            age: Age band (e.g. "13-17")
            cycle_length: Cycle length band (e.g. "26-30")
            period_duration: Period duration band (e.g. "8-plus")
            flow_heaviness: Flow band (e.g. "heavy")
            pain_level: Pain band (e.g. "severe")

        Returns:
            A PatternDecision naming the matched rule
        """

        # RULE 1: DEVELOPING
        if _in_band(age, DEVELOPING_AGES):
            return PatternDecision(
                pattern=Pattern.DEVELOPING,
                rule="developing_age",
                reason=f"Age band '{age}' is still developing a regular cycle.",
            )

        # RULE 2: IRREGULAR
        if _in_band(cycle_length, IRREGULAR_CYCLE_LENGTHS):
            return PatternDecision(
                pattern=Pattern.IRREGULAR,
                rule="irregular_cycle",
                reason=f"Cycle length '{cycle_length}' is outside the typical range.",
            )

        # RULE 3: HEAVY
        if _in_band(flow_heaviness, HEAVY_FLOWS) or period_duration == HEAVY_PERIOD_DURATION:
            return PatternDecision(
                pattern=Pattern.HEAVY,
                rule="heavy_flow",
                reason=(
                    f"Flow '{flow_heaviness}' with period duration "
                    f"'{period_duration}' indicates heavy bleeding."
                ),
            )

        # RULE 4: PAIN
        if _in_band(pain_level, SEVERE_PAIN_LEVELS):
            return PatternDecision(
                pattern=Pattern.PAIN,
                rule="severe_pain",
                reason=f"Pain level '{pain_level}' is pain-predominant.",
            )

        # RULE 5: REGULAR
        return PatternDecision(
            pattern=Pattern.REGULAR,
            rule="default",
            reason="No irregular, heavy, pain or developing indicators.",
        )

    def decide(self, fields: Mapping[str, Any]) -> PatternDecision:
        """
        Classify a payload or storage record, reading either key spelling.

        Args:
            fields: Mapping holding the assessment answers

        Returns:
            A PatternDecision
        """
        return self.classify_assessment(
            age=read_field(fields, "age"),
            cycle_length=read_field(fields, "cycle_length"),
            period_duration=read_field(fields, "period_duration"),
            flow_heaviness=read_field(fields, "flow_heaviness"),
            pain_level=read_field(fields, "pain_level"),
        )

    def classify(self, fields: Mapping[str, Any]) -> Pattern:
        return self.decide(fields).pattern

    def resolve(self, fields: Mapping[str, Any]) -> Union[Pattern, str]:
        """
        Return the supplied pattern, or a freshly classified one.

        A pattern is either trusted as a whole or recomputed as a
        whole; it is never merged.

        Args:
            fields: Mapping holding the assessment answers

        Returns:
            The explicit pattern string, or the classified Pattern
        """
        explicit = read_field(fields, "pattern")
        if explicit is not None and explicit != "":
            return explicit
        return self.classify(fields)


_default_classifier = PatternClassifier()


def classify_pattern(fields: Mapping[str, Any]) -> str:
    """Classify `fields` and return the pattern's string value."""
    return _default_classifier.classify(fields).value


def resolve_pattern(fields: Mapping[str, Any]) -> str:
    """Explicit pattern if present, otherwise the classified one, as a string."""
    resolved = _default_classifier.resolve(fields)
    return resolved.value if isinstance(resolved, Pattern) else resolved
