"""Exception hierarchy for the assessment engine.

Decode failures are never raised; they degrade to empty sequences inside
the field codec. Everything here is for the service and storage layers.
"""
from typing import List, Optional


class AssessmentError(Exception):
    """Base exception for assessment engine errors."""
    pass


class AssessmentValidationError(AssessmentError):
    """Inbound assessment payload failed validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid assessment data: " + "; ".join(self.errors))


class AssessmentNotFoundError(AssessmentError):
    """No assessment stored under the requested identifier."""

    def __init__(self, assessment_id: str):
        self.assessment_id = assessment_id
        super().__init__(f"Assessment {assessment_id} not found")


class StorageError(AssessmentError):
    """Persistence collaborator is unavailable or a driver call failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
