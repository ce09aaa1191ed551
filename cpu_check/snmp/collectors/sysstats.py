"""
SNMP Collector — UCD-SNMP-MIB systemStats.

net-snmp agents: used = 100 - ssCpuIdle, plus user and system shares.
"""
from __future__ import annotations

from cpu_check.core.enums import CheckType
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpTarget
from cpu_check.snmp.oid_maps import SS_CPU_IDLE, SS_CPU_SYSTEM, SS_CPU_USER


class SystemStatsCollector(BaseCpuCollector):
    """CPU usage from ssCpuUser / ssCpuSystem / ssCpuIdle."""

    check_type = CheckType.SYSSTATS

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        values = await engine.get(target, SS_CPU_USER, SS_CPU_SYSTEM, SS_CPU_IDLE)

        used = 100 - self.require(values, SS_CPU_IDLE)
        user = self.require(values, SS_CPU_USER)
        system = self.require(values, SS_CPU_SYSTEM)

        level = thresholds.classify(used)

        result.add_perf(
            "cpu_prct_used", used, "%",
            thresholds.warning, thresholds.critical, 0, 100,
        )
        result.add_perf("cpu_prct_user", user, "%", "", "", 0, 100)
        result.add_perf("cpu_prct_system", system, "%", "", "", 0, 100)
        result.add_msg(level, f"load {used}%")
        result.add_msg(level, f"user {user}%")
        result.add_msg(level, f"system {system}%")
