from typing import Optional

from ..config import AppConfig, get_config
from .base import AssessmentStore
from .mongo_store import MongoAssessmentStore
from .mysql_store import MySQLAssessmentStore


def create_store(config: Optional[AppConfig] = None) -> AssessmentStore:
    """
    Build the store selected by config.storage.backend.

    The store is returned unconnected; use it as a context manager or
    call connect() yourself.
    """
    config = config or get_config()
    backend = config.storage.backend

    if backend == "mysql":
        return MySQLAssessmentStore(
            host=config.mysql.host,
            port=config.mysql.port,
            user=config.mysql.user,
            password=config.mysql.password,
            database=config.mysql.database,
            table_name=config.storage.table_name,
        )
    if backend == "mongo":
        return MongoAssessmentStore(
            host=config.mongo.host,
            port=config.mongo.port,
            database=config.mongo.database,
            user=config.mongo.user,
            password=config.mongo.password,
            collection_name=config.storage.collection_name,
        )
    raise ValueError(f"Unsupported storage backend: {backend}")
