"""Domain models package."""

from opsdesk.models.database_health import (
    BackupInfo,
    DatabaseData,
    DatabaseHealthMetrics,
    Migration,
)
from opsdesk.models.user import User, UserRole

__all__ = [
    "BackupInfo",
    "DatabaseData",
    "DatabaseHealthMetrics",
    "Migration",
    "User",
    "UserRole",
]
