# ==============================================
# MongoAssessmentStore
# ==============================================
#
# PURPOSE:
#   Stores assessment records as flat documents, one per assessment,
#   in a single MongoDB collection.
#
# CLASS: MongoAssessmentStore
# ---------------------------
#   Stateful — holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None, collection_name)
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection, ping, create indexes.
#
#   - ensure_indexes() -> None
#       Unique index on id, plain index on user_id.
#
#   - insert / find_by_id / find_by_user / update / delete
#   - exists_for_user / find_missing_pattern / set_pattern
#
#   Documents are read back without Mongo's own _id, so callers see
#   exactly the columns the MySQL store would return.
#
# ==============================================

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pymongo
from pymongo import MongoClient as PyMongoClient
from pymongo.errors import PyMongoError

from ..exceptions import StorageError
from .base import ASSESSMENT_COLUMNS, AssessmentStore, mutable_fields

logger = logging.getLogger(__name__)

NO_MONGO_ID = {"_id": 0}


class MongoAssessmentStore(AssessmentStore):
    def __init__(self, host, port, database, user=None, password=None,
                 collection_name: str = "assessments"):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.collection_name = collection_name
        self.client = None

    def connect(self) -> None:
        if self.user and self.password:
            uri = f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
        else:
            uri = f"mongodb://{self.host}:{self.port}/{self.database}"
        try:
            self.client = PyMongoClient(uri)
            self.client.admin.command("ping")
        except PyMongoError as e:
            self.client = None
            raise StorageError(f"Could not connect to MongoDB: {e}", e) from e

        self.ensure_indexes()
        logger.info(
            "MONGO_CONNECTED",
            extra={"database": self.database, "collection_name": self.collection_name}
        )

    def disconnect(self) -> None:
        if self.client:
            self.client.close()
            self.client = None

    def ensure_indexes(self) -> None:
        collection = self._collection()
        try:
            collection.create_index([("id", pymongo.ASCENDING)], unique=True)
            collection.create_index([("user_id", pymongo.ASCENDING)])
        except PyMongoError as e:
            raise StorageError(f"Could not create indexes: {e}", e) from e

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        document = {key: value for key, value in record.items() if key in ASSESSMENT_COLUMNS}
        try:
            # insert_one adds _id to the dict it is given
            self._collection().insert_one(dict(document))
        except PyMongoError as e:
            raise StorageError(f"MongoDB insert failed: {e}", e) from e
        return document

    def find_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        try:
            return self._collection().find_one({"id": assessment_id}, NO_MONGO_ID)
        except PyMongoError as e:
            raise StorageError(f"MongoDB read failed: {e}", e) from e

    def find_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        try:
            cursor = self._collection().find({"user_id": user_id}, NO_MONGO_ID)
            return list(cursor.sort("created_at", pymongo.DESCENDING))
        except PyMongoError as e:
            raise StorageError(f"MongoDB read failed: {e}", e) from e

    def update(self, assessment_id: str, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        updates = mutable_fields(record)
        updates["updated_at"] = datetime.now(timezone.utc)
        try:
            result = self._collection().update_one({"id": assessment_id}, {"$set": updates})
        except PyMongoError as e:
            raise StorageError(f"MongoDB update failed: {e}", e) from e
        if result.matched_count == 0:
            return None
        return self.find_by_id(assessment_id)

    def delete(self, assessment_id: str) -> bool:
        try:
            result = self._collection().delete_one({"id": assessment_id})
        except PyMongoError as e:
            raise StorageError(f"MongoDB delete failed: {e}", e) from e
        return result.deleted_count > 0

    def exists_for_user(self, assessment_id: str, user_id: str) -> bool:
        try:
            count = self._collection().count_documents(
                {"id": assessment_id, "user_id": user_id}, limit=1
            )
        except PyMongoError as e:
            raise StorageError(f"MongoDB read failed: {e}", e) from e
        return count > 0

    def find_missing_pattern(self) -> List[Dict[str, Any]]:
        # {"pattern": None} also matches documents without the field
        query = {"$or": [{"pattern": None}, {"pattern": ""}]}
        try:
            return list(self._collection().find(query, NO_MONGO_ID))
        except PyMongoError as e:
            raise StorageError(f"MongoDB read failed: {e}", e) from e

    def set_pattern(self, assessment_id: str, pattern: str) -> bool:
        try:
            result = self._collection().update_one(
                {"id": assessment_id},
                {"$set": {"pattern": pattern, "updated_at": datetime.now(timezone.utc)}}
            )
        except PyMongoError as e:
            raise StorageError(f"MongoDB update failed: {e}", e) from e
        return result.matched_count > 0

    def _collection(self):
        if self.client is None:
            raise StorageError("Not connected to MongoDB")
        return self.client[self.database][self.collection_name]
