# ==============================================
# MySQLAssessmentStore
# ==============================================
#
# PURPOSE:
#   Stores assessment records in a MySQL table with one column per
#   scalar field and one TEXT column per semi-structured field.
#
# CLASS: MySQLAssessmentStore
# ---------------------------
#   Stateful — holds the pymysql connection.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database, table_name)
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection. Create database and table if missing.
#
#   - disconnect() -> None
#
#   - ensure_table() -> None
#       CREATE TABLE IF NOT EXISTS with the flattened columns plus the
#       nullable legacy assessment_data blob.
#
#   - insert / find_by_id / find_by_user / update / delete
#   - exists_for_user / find_missing_pattern / set_pattern
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MySQLAssessmentStore(...) as store:`
#
# ==============================================

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pymysql
import pymysql.cursors

from ..exceptions import StorageError
from .base import ASSESSMENT_COLUMNS, AssessmentStore, mutable_fields

logger = logging.getLogger(__name__)


class MySQLAssessmentStore(AssessmentStore):
    def __init__(self, host, port, user, password, database, table_name: str = "assessments"):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.table_name = table_name
        self.connection = None

    def connect(self) -> None:
        # Establish connection to MySQL, create database if it doesn't exist
        try:
            self.connection = pymysql.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                charset="utf8mb4",
                cursorclass=pymysql.cursors.DictCursor,
            )
            with self.connection.cursor() as cursor:
                cursor.execute(f"CREATE DATABASE IF NOT EXISTS {self.database}")
                cursor.execute(f"USE {self.database}")
        except pymysql.MySQLError as e:
            raise StorageError(f"Could not connect to MySQL: {e}", e) from e

        self.ensure_table()
        logger.info(
            "MYSQL_CONNECTED",
            extra={"database": self.database, "table_name": self.table_name}
        )

    def disconnect(self) -> None:
        if self.connection:
            self.connection.close()
            self.connection = None

    def ensure_table(self) -> None:
        self._execute(
            f"CREATE TABLE IF NOT EXISTS {self.table_name} ("
            "id VARCHAR(36) NOT NULL PRIMARY KEY, "
            "user_id VARCHAR(255) NOT NULL, "
            "created_at DATETIME NOT NULL, "
            "updated_at DATETIME NULL, "
            "age VARCHAR(32) NULL, "
            "pattern VARCHAR(32) NULL, "
            "cycle_length VARCHAR(32) NULL, "
            "period_duration VARCHAR(32) NULL, "
            "flow_heaviness VARCHAR(32) NULL, "
            "pain_level VARCHAR(32) NULL, "
            "physical_symptoms TEXT NULL, "
            "emotional_symptoms TEXT NULL, "
            "other_symptoms TEXT NULL, "
            "recommendations TEXT NULL, "
            "assessment_data TEXT NULL, "
            "INDEX idx_user_id (user_id))"
        )

    def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        row = {key: value for key, value in record.items() if key in ASSESSMENT_COLUMNS}
        columns = list(row.keys())
        placeholders = ", ".join(["%s"] * len(columns))
        query = f"INSERT INTO {self.table_name} ({', '.join(columns)}) VALUES ({placeholders})"
        self._execute(query, tuple(row.values()))
        return self.find_by_id(row["id"]) or row

    def find_by_id(self, assessment_id: str) -> Optional[Dict[str, Any]]:
        rows = self._fetch_all(
            f"SELECT * FROM {self.table_name} WHERE id = %s",
            (assessment_id,)
        )
        return rows[0] if rows else None

    def find_by_user(self, user_id: str) -> List[Dict[str, Any]]:
        return self._fetch_all(
            f"SELECT * FROM {self.table_name} WHERE user_id = %s ORDER BY created_at DESC",
            (user_id,)
        )

    def update(self, assessment_id: str, record: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        updates = mutable_fields(record)
        updates["updated_at"] = datetime.now(timezone.utc)
        set_clause = ", ".join(f"{col} = %s" for col in updates)
        query = f"UPDATE {self.table_name} SET {set_clause} WHERE id = %s"
        self._execute(query, tuple(updates.values()) + (assessment_id,))
        return self.find_by_id(assessment_id)

    def delete(self, assessment_id: str) -> bool:
        return self._execute(
            f"DELETE FROM {self.table_name} WHERE id = %s",
            (assessment_id,)
        ) > 0

    def exists_for_user(self, assessment_id: str, user_id: str) -> bool:
        rows = self._fetch_all(
            f"SELECT id FROM {self.table_name} WHERE id = %s AND user_id = %s LIMIT 1",
            (assessment_id, user_id)
        )
        return bool(rows)

    def find_missing_pattern(self) -> List[Dict[str, Any]]:
        return self._fetch_all(
            f"SELECT * FROM {self.table_name} WHERE pattern IS NULL OR pattern = ''"
        )

    def set_pattern(self, assessment_id: str, pattern: str) -> bool:
        return self._execute(
            f"UPDATE {self.table_name} SET pattern = %s, updated_at = %s WHERE id = %s",
            (pattern, datetime.now(timezone.utc), assessment_id)
        ) > 0

    def _execute(self, query: str, params: Optional[tuple] = None) -> int:
        # Execute a write and return the affected row count
        connection = self._require_connection()
        try:
            with connection.cursor() as cursor:
                affected = cursor.execute(query, params)
            connection.commit()
        except pymysql.MySQLError as e:
            connection.rollback()
            raise StorageError(f"MySQL write failed: {e}", e) from e
        return affected or 0

    def _fetch_all(self, query: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        # Execute SELECT and return rows as dicts
        connection = self._require_connection()
        try:
            with connection.cursor() as cursor:
                cursor.execute(query, params)
                return list(cursor.fetchall())
        except pymysql.MySQLError as e:
            raise StorageError(f"MySQL read failed: {e}", e) from e

    def _require_connection(self):
        if self.connection is None:
            raise StorageError("Not connected to MySQL")
        return self.connection
