"""Database package."""

from merraine.db.base import Base, get_db, get_optional_db, init_db
from merraine.db.tables import (
    AppSetting,
    Candidate,
    CreditTransaction,
    SavedCandidate,
    Search,
    SearchCandidate,
)

__all__ = [
    "Base",
    "get_db",
    "get_optional_db",
    "init_db",
    "Search",
    "Candidate",
    "SearchCandidate",
    "SavedCandidate",
    "AppSetting",
    "CreditTransaction",
]
