"""
Shared fixtures for tsu tests.
"""

from datetime import datetime, timezone

import pytest

from tsu.models import PredictionPoint, PredictionSet

# 2026-02-25 12:30 UTC
NOW = int(datetime(2026, 2, 25, 12, 30, tzinfo=timezone.utc).timestamp())


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def window():
    """Six-hourly predictions from two days before NOW to two days after."""
    start = NOW - 2 * 86400
    return PredictionSet(
        PredictionPoint(timestamp=start + i * 6 * 3600, height=1.0 + (i % 4))
        for i in range(17)
    )


@pytest.fixture
def cache_root(tmp_path):
    return tmp_path / ".cache" / "tsu"
