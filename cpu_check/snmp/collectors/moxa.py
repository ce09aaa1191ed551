"""
SNMP Collector — Moxa switch CPU loading.

Moxa places cpuLoading5s/30s/300s under the model's own private subtree,
so the base OID is read from sysObjectID first. Longer windows use flat
offsets: 30 s against (w-5, c-5), 300 s against (w-10, c-10).
"""
from __future__ import annotations

import logging

from cpu_check.core.enums import CheckType
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpError, SnmpTarget
from cpu_check.snmp.oid_maps import (
    MOXA_CPU_LOADING_5S,
    MOXA_CPU_LOADING_30S,
    MOXA_CPU_LOADING_300S,
    SYS_OBJECT_ID,
)

logger = logging.getLogger(__name__)


class MoxaCollector(BaseCpuCollector):
    """5 s / 30 s / 300 s CPU loading."""

    check_type = CheckType.MOXASW

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        pair_30s = thresholds.derive(5)
        pair_300s = thresholds.derive(10)

        sys_oid = await engine.get(target, SYS_OBJECT_ID)
        if SYS_OBJECT_ID not in sys_oid:
            raise SnmpError(f"no value for {SYS_OBJECT_ID}")
        root = str(sys_oid[SYS_OBJECT_ID]).strip(".")
        logger.debug("moxasw: private MIB root %s", root)

        windows = (
            ("usage_5s", "usage 5s", root + MOXA_CPU_LOADING_5S, thresholds),
            ("usage_30s", "30s", root + MOXA_CPU_LOADING_30S, pair_30s),
            ("usage_300s", "300s", root + MOXA_CPU_LOADING_300S, pair_300s),
        )
        values = await engine.get(target, *(oid for _, _, oid, _ in windows))

        for label, text, oid, pair in windows:
            loading = self.require(values, oid)
            level = pair.classify(loading)
            result.add_perf(
                label, loading, "%", pair.warning, pair.critical, 0, 100,
            )
            result.add_msg(level, f"{text} {loading}%")
