"""
SNMP Collector — Juniper routing engine CPU.

JUNIPER-MIB::jnxOperatingTable holds every hardware component; routing
engines are picked out by their description. Only the utilization is
checked against the thresholds, the load averages are informational.
"""
from __future__ import annotations

import logging

from cpu_check.core.enums import CheckType, Severity
from cpu_check.core.errors import MissingOptionalValue, NoProcessorsFound
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpTarget, SnmpValue
from cpu_check.snmp.oid_maps import (
    JNX_OPERATING_1MIN_LOAD_AVG,
    JNX_OPERATING_5MIN_LOAD_AVG,
    JNX_OPERATING_CPU,
    JNX_OPERATING_DESCR,
)

logger = logging.getLogger(__name__)

_ROUTING_ENGINE = "routing engine"

# sub-metric name → column
_LOAD_COLUMNS: tuple[tuple[str, str], ...] = (
    ("load1", JNX_OPERATING_1MIN_LOAD_AVG),
    ("load5", JNX_OPERATING_5MIN_LOAD_AVG),
)


class JuniperCollector(BaseCpuCollector):
    """Per routing engine utilization and load averages."""

    check_type = CheckType.JNX

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        descr = await engine.walk(target, JNX_OPERATING_DESCR)

        # jnxOperating index → routing engine name
        engines = {
            idx: str(val)
            for idx, val in descr.items()
            if _ROUTING_ENGINE in str(val).lower()
        }
        if not engines:
            raise NoProcessorsFound("no routing engines found")

        # One GET per engine, sequentially
        fetched: dict[str, tuple[str, dict[str, SnmpValue]]] = {}
        for idx, name in engines.items():
            values = await engine.get(
                target,
                f"{JNX_OPERATING_CPU}.{idx}",
                f"{JNX_OPERATING_1MIN_LOAD_AVG}.{idx}",
                f"{JNX_OPERATING_5MIN_LOAD_AVG}.{idx}",
            )
            fetched[name] = (idx, values)

        for name in sorted(fetched):
            idx, values = fetched[name]
            result.add_msg(Severity.OK, name)

            try:
                util = self.optional(values, f"{JNX_OPERATING_CPU}.{idx}")
            except MissingOptionalValue as e:
                logger.debug("jnx: %s util missing (%s)", name, e)
                result.add_msg(Severity.UNKNOWN, "util Na")
            else:
                level = thresholds.classify(util)
                result.add_perf(
                    f"{name} util", util, "%",
                    thresholds.warning, thresholds.critical, 0,
                )
                result.add_msg(level, f"util {util}%")

            for sub, column in _LOAD_COLUMNS:
                try:
                    load = self.optional(values, f"{column}.{idx}")
                except MissingOptionalValue as e:
                    logger.debug("jnx: %s %s missing (%s)", name, sub, e)
                    result.add_msg(Severity.UNKNOWN, f"{sub} Na")
                    continue
                result.add_perf(f"{name} {sub}", load, "%", "", "", 0)
                result.add_msg(Severity.OK, f"{sub} {load}%")
