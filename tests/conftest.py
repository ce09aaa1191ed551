"""Root conftest — shared fixtures for all tests."""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.engine import SnmpTarget


@pytest.fixture
def target() -> SnmpTarget:
    return SnmpTarget(ip="10.0.0.1", user="public", port=161, timeout=5.0, retries=2)


@pytest.fixture
def engine() -> AsyncMock:
    """Engine double; tests set walk/get return values or side effects."""
    mock = AsyncMock()
    mock.walk = AsyncMock(return_value={})
    mock.get = AsyncMock(return_value={})
    return mock


@pytest.fixture
def thresholds() -> ThresholdPair:
    return ThresholdPair(warning="85", critical="95")


@pytest.fixture
def result() -> CheckResult:
    return CheckResult()
