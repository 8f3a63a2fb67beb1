# ==============================================
# AssessmentService — Orchestrator
# ==============================================
#
# PURPOSE:
#   The one class callers use. It ties validation, normalization,
#   classification, the transforms and a store together.
#
# HOW IT CONNECTS THE PIECES:
#
#   create / update                      find_by_id / list_by_user
#   ───────────────                      ─────────────────────────
#   AssessmentValidator.validate         store.find_*
#           │                                    │
#   FieldNormalizer.normalize_payload    LegacyFormatAdapter.to_api
#           │                              (LEGACY or FLATTENED path)
#   PatternClassifier.resolve                    │
#           │                                    ▼
#   ApiToStorageTransform.transform          API record
#           │
#   store.insert / store.update
#
# CLASS: AssessmentService
# ------------------------
#   Constructor:
#   ------------
#   - __init__(store, validator=None, adapter=None, logger=None)
#
#   Public Methods:
#   ---------------
#   - create(payload, user_id) -> dict
#   - find_by_id(assessment_id) -> dict | None
#   - list_by_user(user_id) -> list[dict]
#   - update(assessment_id, payload) -> dict
#   - delete(assessment_id) -> bool
#   - validate_ownership(assessment_id, user_id) -> bool
#   - backfill_patterns() -> dict[str, str]
#
# ==============================================

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from .analysis.classifier import PatternClassifier
from .analysis.pattern import Pattern
from .analysis.validator import AssessmentValidator
from .exceptions import AssessmentNotFoundError, AssessmentValidationError, StorageError
from .normalization.field_codec import FieldCodec
from .normalization.field_normalizer import FieldNormalizer
from .storage.base import AssessmentStore
from .transform.api_to_storage import ApiToStorageTransform
from .transform.legacy_adapter import LEGACY_BLOB_FIELD, LegacyFormatAdapter


class AssessmentService:
    """
    Create, read, update and delete assessments against a store.
    """

    def __init__(
        self,
        store: AssessmentStore,
        validator: Optional[AssessmentValidator] = None,
        adapter: Optional[LegacyFormatAdapter] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.store = store
        self._logger = logger or logging.getLogger(__name__)
        self.validator = validator or AssessmentValidator()
        self.normalizer = FieldNormalizer()
        self.codec = FieldCodec(self._logger)
        self.classifier = PatternClassifier()
        self.api_to_storage = ApiToStorageTransform(self.codec)
        self.adapter = adapter or LegacyFormatAdapter(
            codec=self.codec,
            classifier=self.classifier,
            logger=self._logger
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, payload: Mapping[str, Any], user_id: str) -> Dict[str, Any]:
        """
        Validate, classify and store a new assessment.

        Args:
            payload: API payload, nested or flattened
            user_id: Owner of the assessment

        Returns:
            The stored assessment in API form

        Raises:
            AssessmentValidationError: If the payload fails validation
        """
        record = self._prepare(payload)
        record["id"] = str(uuid.uuid4())
        record["user_id"] = user_id
        record["created_at"] = datetime.now(timezone.utc)

        stored = self.store.insert(record)
        self._logger.info(
            "ASSESSMENT_CREATED",
            extra={"assessment_id": record["id"], "user_id": user_id, "pattern": record["pattern"]}
        )
        return self.adapter.to_api(stored)

    def update(self, assessment_id: str, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Replace an assessment with a new payload.

        The pattern is either taken from the payload or recomputed from
        the new answers; it is never carried over from the old record.

        Raises:
            AssessmentValidationError: If the payload fails validation
            AssessmentNotFoundError: If no assessment has that id
        """
        record = self._prepare(payload)
        # The rewritten row is in the flattened shape from now on
        record[LEGACY_BLOB_FIELD] = None

        stored = self.store.update(assessment_id, record)
        if stored is None:
            raise AssessmentNotFoundError(assessment_id)

        self._logger.info(
            "ASSESSMENT_UPDATED",
            extra={"assessment_id": assessment_id, "pattern": record["pattern"]}
        )
        return self.adapter.to_api(stored)

    def delete(self, assessment_id: str) -> bool:
        deleted = self.store.delete(assessment_id)
        if deleted:
            self._logger.info("ASSESSMENT_DELETED", extra={"assessment_id": assessment_id})
        return deleted

    def backfill_patterns(self) -> Dict[str, str]:
        """
        Classify and persist every stored assessment without a pattern.

        Returns:
            Mapping of assessment id to the pattern written
        """
        written: Dict[str, str] = {}
        for record in self.store.find_missing_pattern():
            view = self.adapter.to_api(record)
            if view is None:
                continue
            fields = view.get("assessmentData", view)
            pattern = self.classifier.classify(fields).value

            if self.store.set_pattern(record["id"], pattern):
                written[record["id"]] = pattern
                self._logger.info(
                    "PATTERN_BACKFILLED",
                    extra={"assessment_id": record["id"], "pattern": pattern}
                )

        return written

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def find_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        return self.adapter.to_api(self.store.find_by_id(assessment_id))

    def list_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return self.adapter.to_api_many(self.store.find_by_user(user_id))

    def validate_ownership(self, assessment_id: str, user_id: str) -> bool:
        """True when `user_id` owns the assessment; store failures count as False."""
        try:
            return self.store.exists_for_user(assessment_id, user_id)
        except StorageError as e:
            self._logger.error(
                "OWNERSHIP_CHECK_FAILED",
                extra={"assessment_id": assessment_id, "user_id": user_id, "error": str(e)}
            )
            return False

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _prepare(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        result = self.validator.validate(payload)
        if not result.is_valid:
            self._logger.warning("ASSESSMENT_REJECTED", extra={"errors": result.errors})
            raise AssessmentValidationError(result.errors)

        fields = self.normalizer.normalize_payload(dict(payload))
        pattern = self.classifier.resolve(fields)
        fields["pattern"] = pattern.value if isinstance(pattern, Pattern) else pattern

        return self.api_to_storage.transform(fields)
