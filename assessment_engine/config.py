# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load and validate all configuration from environment
#   variables / .env file. Provides typed config objects
#   to all other modules.
#
# CLASSES:
# --------
# - MySQLConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 3306)
#     user: str          (default "root")
#     password: str      (default "root")
#     database: str      (default "assessments_db")
#
# - MongoConfig (dataclass)
#     host: str          (default "localhost")
#     port: int          (default 27017)
#     user: str | None   (default None)
#     password: str | None (default None)
#     database: str      (default "assessments_db")
#
# - StorageConfig (dataclass)
#     backend: str           ("mysql" or "mongo", default "mysql")
#     table_name: str        (default "assessments")
#     collection_name: str   (default "assessments")
#
# - AppConfig (dataclass)
#     mysql: MySQLConfig
#     mongo: MongoConfig
#     storage: StorageConfig
#     log_level: str             (default "INFO")
#
# FUNCTIONS:
# ----------
# - load_config() -> AppConfig
#     Load .env using python-dotenv, construct a fresh AppConfig.
#
# - get_config() -> AppConfig
#     Same as load_config() but returns the same singleton on
#     repeated calls.
#
# USAGE:
# ------
#   from assessment_engine.config import get_config
#   config = get_config()
#   print(config.mysql.host)
#   print(config.storage.backend)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


SUPPORTED_BACKENDS = ("mysql", "mongo")


@dataclass
class MySQLConfig:
    """MySQL database configuration."""
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = "root"
    database: str = "assessments_db"


@dataclass
class MongoConfig:
    """MongoDB database configuration."""
    host: str = "localhost"
    port: int = 27017
    user: Optional[str] = None
    password: Optional[str] = None
    database: str = "assessments_db"


@dataclass
class StorageConfig:
    """Which persistence collaborator to use and where assessments live."""
    backend: str = "mysql"
    table_name: str = "assessments"
    collection_name: str = "assessments"


@dataclass
class AppConfig:
    """Main application configuration."""
    mysql: MySQLConfig = field(default_factory=MySQLConfig)
    mongo: MongoConfig = field(default_factory=MongoConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_level: str = "INFO"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def load_config() -> AppConfig:
    """
    Build a fresh configuration from environment variables / .env file.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If STORAGE_BACKEND names an unsupported backend
    """
    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Build MySQL configuration
    mysql_config = MySQLConfig(
        host=os.getenv("MYSQL_HOST", "localhost"),
        port=int(os.getenv("MYSQL_PORT", "3306")),
        user=os.getenv("MYSQL_USER", "root"),
        password=os.getenv("MYSQL_PASSWORD", "root"),
        database=os.getenv("MYSQL_DATABASE", "assessments_db")
    )

    # Build MongoDB configuration
    mongo_config = MongoConfig(
        host=os.getenv("MONGO_HOST", "localhost"),
        port=int(os.getenv("MONGO_PORT", "27017")),
        user=os.getenv("MONGO_USER") or None,
        password=os.getenv("MONGO_PASSWORD") or None,
        database=os.getenv("MONGO_DATABASE", "assessments_db")
    )

    # Build storage selection
    backend = os.getenv("STORAGE_BACKEND", "mysql").strip().lower()
    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(
            f"Unsupported STORAGE_BACKEND '{backend}', "
            f"expected one of {', '.join(SUPPORTED_BACKENDS)}"
        )
    storage_config = StorageConfig(
        backend=backend,
        table_name=os.getenv("ASSESSMENT_TABLE", "assessments"),
        collection_name=os.getenv("ASSESSMENT_COLLECTION", "assessments")
    )

    return AppConfig(
        mysql=mysql_config,
        mongo=mongo_config,
        storage=storage_config,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper()
    )


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = load_config()

    return _config_instance
