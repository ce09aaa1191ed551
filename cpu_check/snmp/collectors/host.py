"""
SNMP Collector — HOST-RESOURCES-MIB processor load.

Walks hrProcessorLoad and reports the mean load of all processors.
"""
from __future__ import annotations

import logging

from cpu_check.core.enums import CheckType
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpTarget

logger = logging.getLogger(__name__)


class HostLoadCollector(BaseCpuCollector):
    """Mean load over hrProcessorTable."""

    check_type = CheckType.HOST

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        rows = await self.walk_processors(target, engine)
        cpu = self.summarize_load(rows)
        logger.debug("host: %s", cpu)

        level = thresholds.classify(cpu.load)

        result.add_perf(
            "cpu usage", cpu.load, "%",
            thresholds.warning, thresholds.critical, 0, 100,
        )
        result.add_perf("cpu count", cpu.cpu_count)
        result.add_msg(level, f"{cpu.cpu_count} CPUs; load {cpu.load}%")
