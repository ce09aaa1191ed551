"""
Collector registry — check type → collector dispatch.
"""
from __future__ import annotations

import logging
from functools import lru_cache

from cpu_check.core.enums import CheckType
from cpu_check.core.errors import UnknownCheckType
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpTarget

logger = logging.getLogger(__name__)


@lru_cache
def build_collector_map() -> dict[CheckType, BaseCpuCollector]:
    """Build registry of check type → collector instance."""
    from cpu_check.snmp.collectors import (
        CiscoCollector,
        HostLoadCollector,
        JuniperCollector,
        LoadAverageCollector,
        MoxaCollector,
        RuggedcomCollector,
        SystemStatsCollector,
    )

    collectors: list[BaseCpuCollector] = [
        HostLoadCollector(),
        SystemStatsCollector(),
        LoadAverageCollector(),
        JuniperCollector(),
        CiscoCollector(),
        RuggedcomCollector(),
        MoxaCollector(),
    ]
    return {c.check_type: c for c in collectors}


def get_collector(check_type: str | CheckType) -> BaseCpuCollector:
    """Resolve a check type string; UnknownCheckType if not registered."""
    try:
        key = CheckType(check_type)
    except ValueError:
        raise UnknownCheckType(f"no such check type: '{check_type}'") from None

    collector = build_collector_map().get(key)
    if collector is None:
        raise UnknownCheckType(f"no collector for check type: '{key.value}'")
    return collector


async def run_check(
    check_type: str | CheckType,
    engine: AsyncSnmpEngine,
    target: SnmpTarget,
    thresholds: ThresholdPair,
    name: str = "CPU",
) -> CheckResult:
    """Run one check against one target and return the filled result."""
    collector = get_collector(check_type)
    logger.debug(
        "running %s on %s (w=%s c=%s)",
        collector.check_type.value, target.ip,
        thresholds.warning, thresholds.critical,
    )

    result = CheckResult(name=name)
    await collector.collect(target, engine, thresholds, result)
    return result
