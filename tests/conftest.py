"""Shared fixtures for the assessment engine tests."""
import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from assessment_engine.exceptions import StorageError
from assessment_engine.storage.base import (
    ASSESSMENT_COLUMNS,
    AssessmentStore,
    mutable_fields,
)


class InMemoryAssessmentStore(AssessmentStore):
    """Dict-backed store mirroring the behaviour of the real backends."""

    def __init__(self, records: Optional[List[Dict[str, Any]]] = None):
        self.records: Dict[str, Dict[str, Any]] = {}
        self.connected = False
        self.fail_reads = False
        for record in records or []:
            self.records[record["id"]] = dict(record)

    def connect(self) -> None:
        self.connected = True

    def disconnect(self) -> None:
        self.connected = False

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        row = {key: value for key, value in record.items() if key in ASSESSMENT_COLUMNS}
        self.records[row["id"]] = row
        return copy.deepcopy(row)

    def find_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        self._check()
        row = self.records.get(assessment_id)
        return copy.deepcopy(row) if row is not None else None

    def find_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        self._check()
        rows = [r for r in self.records.values() if r.get("user_id") == user_id]
        rows.sort(key=lambda r: str(r.get("created_at")), reverse=True)
        return copy.deepcopy(rows)

    def update(self, assessment_id: str, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if assessment_id not in self.records:
            return None
        self.records[assessment_id].update(mutable_fields(record))
        self.records[assessment_id]["updated_at"] = datetime.now(timezone.utc)
        return self.find_by_id(assessment_id)

    def delete(self, assessment_id: str) -> bool:
        return self.records.pop(assessment_id, None) is not None

    def exists_for_user(self, assessment_id: str, user_id: str) -> bool:
        self._check()
        row = self.records.get(assessment_id)
        return row is not None and row.get("user_id") == user_id

    def find_missing_pattern(self) -> List[Dict[str, Any]]:
        return copy.deepcopy([
            r for r in self.records.values() if r.get("pattern") in (None, "")
        ])

    def set_pattern(self, assessment_id: str, pattern: str) -> bool:
        if assessment_id not in self.records:
            return False
        self.records[assessment_id]["pattern"] = pattern
        return True

    def _check(self) -> None:
        if self.fail_reads:
            raise StorageError("store offline")


@pytest.fixture
def store():
    """Provide an empty in-memory store."""
    return InMemoryAssessmentStore()


@pytest.fixture
def make_store():
    """Build an in-memory store preloaded with rows."""
    return InMemoryAssessmentStore


@pytest.fixture
def flattened_record() -> Dict[str, Any]:
    """A row written in the flattened schema."""
    return {
        "id": "a-1",
        "user_id": "u-1",
        "created_at": "2024-03-01T10:00:00Z",
        "updated_at": "2024-03-02T10:00:00Z",
        "age": "18-24",
        "pattern": "regular",
        "cycle_length": "26-30",
        "period_duration": "4-5",
        "flow_heaviness": "moderate",
        "pain_level": "mild",
        "physical_symptoms": '["cramps","bloating"]',
        "emotional_symptoms": '["irritability"]',
        "other_symptoms": '["back pain"]',
        "recommendations": '[{"title":"Hydrate","description":"Drink water"}]',
    }


@pytest.fixture
def legacy_record() -> Dict[str, Any]:
    """A row written before the symptom columns existed."""
    return {
        "id": "legacy-1",
        "user_id": "u-1",
        "created_at": "2023-01-15T08:00:00Z",
        "updated_at": "2023-01-16T08:00:00Z",
        "age": "25-plus",
        "pattern": None,
        "cycle_length": "less-than-21",
        "period_duration": "4-5",
        "flow_heaviness": "moderate",
        "pain_level": "mild",
        "assessment_data": (
            '{"age":"25-plus","cycleLength":"less-than-21",'
            '"symptoms":{"physical":["headache"],"emotional":["anxiety"]},'
            '"recommendations":["Track your cycle"]}'
        ),
    }


@pytest.fixture
def nested_payload() -> Dict[str, Any]:
    """An API submission in the nested camelCase shape."""
    return {
        "assessment_data": {
            "age": "13-17",
            "cycleLength": "26-30",
            "periodDuration": "4-5",
            "flowHeaviness": "moderate",
            "painLevel": "mild",
            "symptoms": {
                "physical": ["cramps"],
                "emotional": ["mood swings"],
            },
            "recommendations": [{"title": "Rest", "description": "Sleep 8 hours"}],
        }
    }
