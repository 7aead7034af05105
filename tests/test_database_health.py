"""Tests for mock database health data and status classification."""

from datetime import datetime, timedelta, timezone

import pytest

from opsdesk.core.database_health import (
    build_mock_database_data,
    classify_health,
    format_bytes,
    latest_successful_backup,
)
from opsdesk.models.database_health import BackupInfo

NOW = datetime(2026, 1, 18, 12, 0, tzinfo=timezone.utc)


class TestClassifyHealth:
    @pytest.mark.parametrize(
        "connections,latency,lag,expected",
        [
            (10, 20.0, None, "healthy"),
            (69, 199.9, 999.0, "healthy"),
            (70, 20.0, None, "warning"),
            (10, 200.0, None, "warning"),
            (10, 20.0, 1000.0, "warning"),
            (90, 20.0, None, "critical"),
            (10, 500.0, None, "critical"),
            (10, 20.0, 5000.0, "critical"),
            (75, 600.0, 10.0, "critical"),
        ],
    )
    def test_worst_signal_wins(self, connections, latency, lag, expected) -> None:
        assert classify_health(connections, 100, latency, lag) == expected

    def test_zero_capacity_pool_is_critical(self) -> None:
        assert classify_health(0, 0, 20.0) == "critical"


class TestMockData:
    def test_timestamps_relative_to_now(self) -> None:
        data = build_mock_database_data(NOW)

        assert all(b.timestamp < NOW for b in data.backups)
        assert data.last_backup == NOW - timedelta(days=1)

    def test_deterministic(self) -> None:
        assert build_mock_database_data(NOW) == build_mock_database_data(NOW)

    def test_pending_migration_has_no_execution_time(self) -> None:
        data = build_mock_database_data(NOW)

        pending = [m for m in data.migrations if m.status == "pending"]
        assert len(pending) == 1
        assert pending[0].executed_at is None

    def test_health_status_consistent_with_metrics(self) -> None:
        health = build_mock_database_data(NOW).health

        assert health.status == classify_health(
            health.connections,
            health.max_connections,
            health.query_latency,
            health.replication_lag,
        )
        assert health.pool_usage == pytest.approx(0.23)


class TestLatestSuccessfulBackup:
    def test_ignores_failed_and_running(self) -> None:
        backups = [
            BackupInfo(id="a", timestamp=NOW, size=0, status="in-progress"),
            BackupInfo(id="b", timestamp=NOW - timedelta(hours=1), size=0, status="failed"),
            BackupInfo(id="c", timestamp=NOW - timedelta(days=3), size=1, status="success"),
        ]

        assert latest_successful_backup(backups) == NOW - timedelta(days=3)

    def test_none_when_no_success(self) -> None:
        assert latest_successful_backup([]) is None


class TestFormatBytes:
    @pytest.mark.parametrize(
        "size,expected",
        [
            (0, "0 B"),
            (1023, "1023 B"),
            (1024, "1.0 KB"),
            (1536, "1.5 KB"),
            (5 * 1024**2, "5.0 MB"),
            (int(2.4 * 1024**3), "2.4 GB"),
            (1024**2 - 1, "1.0 MB"),
            (1024**3 - 1, "1.0 GB"),
            (3 * 1024**4, "3.0 TB"),
            (1024**5, "1024.0 TB"),
        ],
    )
    def test_sizes(self, size: int, expected: str) -> None:
        assert format_bytes(size) == expected
