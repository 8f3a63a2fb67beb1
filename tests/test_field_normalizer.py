"""Tests for payload key normalization."""
import pytest

from assessment_engine.normalization.field_normalizer import FieldNormalizer


@pytest.fixture
def normalizer():
    return FieldNormalizer()


class TestNormalize:
    @pytest.mark.parametrize("raw,expected", [
        ("cycleLength", "cycle_length"),
        ("PainLevel", "pain_level"),
        ("flow_heaviness", "flow_heaviness"),
        ("otherSymptoms", "other_symptoms"),
    ])
    def test_names(self, normalizer, raw, expected):
        assert normalizer.normalize(raw) == expected

    def test_names_are_cached(self, normalizer):
        normalizer.normalize("painLevel")
        assert normalizer._mappings["painLevel"] == "pain_level"


class TestNormalizePayload:
    def test_flattened_payload_unchanged(self, normalizer):
        payload = {"age": "18-24", "physical_symptoms": ["cramps"]}
        assert normalizer.normalize_payload(payload) == payload

    def test_nested_payload_is_flattened(self, normalizer, nested_payload):
        flat = normalizer.normalize_payload(nested_payload)
        assert flat["cycle_length"] == "26-30"
        assert flat["pain_level"] == "mild"
        assert flat["physical_symptoms"] == ["cramps"]
        assert flat["emotional_symptoms"] == ["mood swings"]
        assert "assessment_data" not in flat
        assert "symptoms" not in flat

    def test_nested_wins_over_outer(self, normalizer):
        flat = normalizer.normalize_payload({
            "age": "18-24",
            "assessmentData": {"age": "13-17"},
        })
        assert flat["age"] == "13-17"

    def test_none_does_not_overwrite(self, normalizer):
        flat = normalizer.normalize_payload({
            "painLevel": "mild",
            "assessment_data": {"pain_level": None},
        })
        assert flat["pain_level"] == "mild"

    def test_values_are_not_touched(self, normalizer):
        flat = normalizer.normalize_payload({"otherSymptoms": "  back pain "})
        assert flat["other_symptoms"] == "  back pain "
