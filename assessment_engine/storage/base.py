"""Persistence collaborator contract for assessment records.

The engine never performs I/O itself. Stores hand it flat records of
scalar and text fields keyed by an opaque id, and take flat records back.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

# Columns of the flattened schema, in table order
ASSESSMENT_COLUMNS = (
    "id",
    "user_id",
    "created_at",
    "updated_at",
    "age",
    "pattern",
    "cycle_length",
    "period_duration",
    "flow_heaviness",
    "pain_level",
    "physical_symptoms",
    "emotional_symptoms",
    "other_symptoms",
    "recommendations",
    "assessment_data",
)

# Columns that never change after creation
IMMUTABLE_COLUMNS = frozenset({"id", "user_id", "created_at"})


class AssessmentStore(ABC):
    """Abstract store with the operations the assessment service needs.

    Subclasses own connection handling and translate driver errors into
    StorageError.
    """

    @abstractmethod
    def connect(self) -> None:
        pass

    @abstractmethod
    def disconnect(self) -> None:
        pass

    @abstractmethod
    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new record and return it as stored."""
        pass

    @abstractmethod
    def find_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def find_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        """All records owned by `user_id`, newest first."""
        pass

    @abstractmethod
    def update(self, assessment_id: str, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the mutable columns of a record.

        Returns:
            The updated record, or None if no record has that id
        """
        pass

    @abstractmethod
    def delete(self, assessment_id: str) -> bool:
        pass

    @abstractmethod
    def exists_for_user(self, assessment_id: str, user_id: str) -> bool:
        pass

    @abstractmethod
    def find_missing_pattern(self) -> List[Dict[str, Any]]:
        """Records whose pattern is NULL or empty."""
        pass

    @abstractmethod
    def set_pattern(self, assessment_id: str, pattern: str) -> bool:
        pass

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()


def mutable_fields(record: Dict[str, Any]) -> Dict[str, Any]:
    """Drop the columns an update must never touch."""
    return {
        key: value for key, value in record.items()
        if key in ASSESSMENT_COLUMNS and key not in IMMUTABLE_COLUMNS
    }
