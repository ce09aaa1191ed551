"""
SNMP Collector — RUGGEDCOM switch CPU usage.

Single scalar: RUGGEDCOM-SYS-INFO-MIB::rcDeviceStsCpuUsagePercent.
"""
from __future__ import annotations

from cpu_check.core.enums import CheckType
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpTarget
from cpu_check.snmp.oid_maps import RC_DEVICE_STS_CPU_USAGE_PERCENT


class RuggedcomCollector(BaseCpuCollector):
    check_type = CheckType.RCSW

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        values = await engine.get(target, RC_DEVICE_STS_CPU_USAGE_PERCENT)
        usage = self.require(values, RC_DEVICE_STS_CPU_USAGE_PERCENT)

        level = thresholds.classify(usage)

        result.add_perf(
            "cpu_usage", usage, "%",
            thresholds.warning, thresholds.critical, 0, 100,
        )
        # Placeholders kept for existing graph templates
        result.add_perf("dummy1", 0)
        result.add_perf("dummy2", 0)
        result.add_msg(level, f"usage {usage}%")
