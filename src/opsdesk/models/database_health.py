"""Database health schemas rendered on the admin dashboard."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

HealthStatus = Literal["healthy", "warning", "critical"]
MigrationStatus = Literal["pending", "completed", "failed"]
BackupStatus = Literal["success", "failed", "in-progress"]


class DatabaseHealthMetrics(BaseModel):
    """Point-in-time database health figures."""

    status: HealthStatus
    connections: int = Field(..., ge=0)
    max_connections: int = Field(..., gt=0)
    table_count: int = Field(..., ge=0)
    index_count: int = Field(..., ge=0)
    total_size: int = Field(..., ge=0, description="Bytes")
    query_latency: float = Field(..., ge=0, description="Average query latency in ms")
    replication_lag: Optional[float] = Field(None, ge=0, description="Replica lag in ms")

    @property
    def pool_usage(self) -> float:
        return self.connections / self.max_connections


class Migration(BaseModel):
    """Schema migration entry."""

    name: str
    status: MigrationStatus
    executed_at: Optional[datetime] = None


class BackupInfo(BaseModel):
    """Database backup entry."""

    id: str
    timestamp: datetime
    size: int = Field(..., ge=0, description="Bytes")
    status: BackupStatus
    download_url: Optional[str] = None


class DatabaseData(BaseModel):
    """Everything the database management page shows."""

    health: DatabaseHealthMetrics
    migrations: list[Migration]
    backups: list[BackupInfo]
    last_backup: Optional[datetime] = None
