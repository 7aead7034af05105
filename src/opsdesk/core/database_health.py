"""Mock database health data for the admin dashboard.

No database is queried: figures are fixed, timestamps are relative to ``now``.
"""

from datetime import datetime, timedelta
from typing import Optional

from opsdesk.models.database_health import (
    BackupInfo,
    DatabaseData,
    DatabaseHealthMetrics,
    HealthStatus,
    Migration,
)
from opsdesk.utils.datetime import now_utc

# (warning, critical) thresholds
POOL_USAGE_THRESHOLDS = (0.7, 0.9)
QUERY_LATENCY_THRESHOLDS_MS = (200.0, 500.0)
REPLICATION_LAG_THRESHOLDS_MS = (1000.0, 5000.0)

GB = 1024**3
MB = 1024**2


def _level(value: float, thresholds: tuple[float, float]) -> int:
    warning, critical = thresholds
    if value >= critical:
        return 2
    if value >= warning:
        return 1
    return 0


def classify_health(
    connections: int,
    max_connections: int,
    query_latency: float,
    replication_lag: Optional[float] = None,
) -> HealthStatus:
    """Worst status across pool usage, latency and replication lag.

    A pool with no capacity is critical.
    """
    pool_usage = connections / max_connections if max_connections > 0 else 1.0
    levels = [
        _level(pool_usage, POOL_USAGE_THRESHOLDS),
        _level(query_latency, QUERY_LATENCY_THRESHOLDS_MS),
    ]
    if replication_lag is not None:
        levels.append(_level(replication_lag, REPLICATION_LAG_THRESHOLDS_MS))

    return ("healthy", "warning", "critical")[max(levels)]


def latest_successful_backup(backups: list[BackupInfo]) -> Optional[datetime]:
    successful = [b.timestamp for b in backups if b.status == "success"]
    return max(successful) if successful else None


def build_mock_database_data(now: Optional[datetime] = None) -> DatabaseData:
    """Build the deterministic mock payload shown on /admin."""
    now = now or now_utc()

    connections, max_connections = 23, 100
    query_latency, replication_lag = 42.5, 120.0

    health = DatabaseHealthMetrics(
        status=classify_health(connections, max_connections, query_latency, replication_lag),
        connections=connections,
        max_connections=max_connections,
        table_count=38,
        index_count=112,
        total_size=int(2.4 * GB),
        query_latency=query_latency,
        replication_lag=replication_lag,
    )

    migrations = [
        Migration(
            name="20251231114540_add_email_templates_blogs",
            status="completed",
            executed_at=now - timedelta(days=18),
        ),
        Migration(
            name="20260102115920_fix_errors",
            status="completed",
            executed_at=now - timedelta(days=16),
        ),
        Migration(
            name="20260105080149_add_communication_system",
            status="completed",
            executed_at=now - timedelta(days=13),
        ),
        Migration(name="004_fix_data_integrity", status="pending"),
    ]

    backups = [
        BackupInfo(
            id="bkp-003",
            timestamp=now - timedelta(hours=2),
            size=0,
            status="in-progress",
        ),
        BackupInfo(
            id="bkp-002",
            timestamp=now - timedelta(days=1),
            size=int(2.3 * GB),
            status="success",
        ),
        BackupInfo(
            id="bkp-001",
            timestamp=now - timedelta(days=2),
            size=512 * MB,
            status="failed",
        ),
    ]

    return DatabaseData(
        health=health,
        migrations=migrations,
        backups=backups,
        last_backup=latest_successful_backup(backups),
    )


def format_bytes(size: int) -> str:
    """Human-readable size (1024 base)."""
    if size < 1024:
        return f"{size} B"

    value = float(size)
    for unit in ("KB", "MB", "GB"):
        value /= 1024
        # Compare the displayed value so 1023.99 KB becomes 1.0 MB
        if round(value, 1) < 1024:
            return f"{value:.1f} {unit}"
    # TB is the largest unit
    return f"{value / 1024:.1f} TB"
