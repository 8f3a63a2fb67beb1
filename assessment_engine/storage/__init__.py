# ==============================================
# STORAGE
# ==============================================
#
# Persistence collaborators for assessment records. The engine only
# ever talks to the AssessmentStore interface.
#
# Modules:
# --------
# - base.py          → AssessmentStore contract + column list
# - mysql_store.py   → pymysql implementation
# - mongo_store.py   → pymongo implementation
# - factory.py       → create_store(config)
#
# ==============================================

from .base import ASSESSMENT_COLUMNS, AssessmentStore
from .factory import create_store
from .mongo_store import MongoAssessmentStore
from .mysql_store import MySQLAssessmentStore

__all__ = [
    "ASSESSMENT_COLUMNS",
    "AssessmentStore",
    "MongoAssessmentStore",
    "MySQLAssessmentStore",
    "create_store",
]
