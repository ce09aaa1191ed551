"""
SNMP Collector — Cisco CPU.

CISCO-PROCESS-MIB::cpmCPUTotalTable, one row per CPU. Row names come from
ENTITY-MIB::entPhysicalName through cpmCPUTotalPhysicalIndex; a physical
index of 0 means the CPU is not mapped to an entity and is named CPU0.

The 5 minute average is checked against the operator pair minus 5.
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
    CPM_CPU_TOTAL_1MIN_REV,
    CPM_CPU_TOTAL_5MIN_REV,
    CPM_CPU_TOTAL_PHYSICAL_INDEX,
    ENT_PHYSICAL_NAME,
)

logger = logging.getLogger(__name__)

_UNMAPPED_CPU_NAME = "CPU0"


class CiscoCollector(BaseCpuCollector):
    """Per CPU 1 and 5 minute averages."""

    check_type = CheckType.CISCO

    async def _resolve_names(
        self, target: SnmpTarget, engine: AsyncSnmpEngine,
    ) -> dict[str, str]:
        """Map cpmCPUTotalIndex → CPU name, dropping unnamed entities."""
        phys_varbinds = await engine.walk(target, CPM_CPU_TOTAL_PHYSICAL_INDEX)

        names: dict[str, str] = {}
        phys_map: dict[str, int] = {}
        for idx, val in phys_varbinds.items():
            phys = self.to_int(val, f"{CPM_CPU_TOTAL_PHYSICAL_INDEX}.{idx}")
            if phys == 0:
                names[idx] = _UNMAPPED_CPU_NAME
                continue
            phys_map[idx] = phys

        if phys_map:
            name_oids = {
                idx: f"{ENT_PHYSICAL_NAME}.{phys}"
                for idx, phys in phys_map.items()
            }
            entity_names = await engine.get(target, *name_oids.values())
            for idx, oid in name_oids.items():
                name = str(entity_names.get(oid, ""))
                if name:
                    names[idx] = name
                else:
                    logger.debug("cisco: no entPhysicalName for row %s", idx)

        return names

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        pair_5m = thresholds.derive(5)

        names = await self._resolve_names(target, engine)
        if not names:
            raise NoProcessorsFound("no CPUs found in cpmCPUTotalTable")

        load_oids: list[str] = []
        for idx in names:
            load_oids.append(f"{CPM_CPU_TOTAL_1MIN_REV}.{idx}")
            load_oids.append(f"{CPM_CPU_TOTAL_5MIN_REV}.{idx}")
        values: dict[str, SnmpValue] = await engine.get(target, *load_oids)

        cpus = {name: idx for idx, name in names.items()}
        for name in sorted(cpus):
            idx = cpus[name]
            result.add_msg(Severity.OK, name)

            for sub, column, label, pair in (
                ("1m", CPM_CPU_TOTAL_1MIN_REV, "1min", thresholds),
                ("5m", CPM_CPU_TOTAL_5MIN_REV, "5min", pair_5m),
            ):
                try:
                    load = self.optional(values, f"{column}.{idx}")
                except MissingOptionalValue as e:
                    logger.debug("cisco: %s %s missing (%s)", name, sub, e)
                    result.add_msg(Severity.UNKNOWN, f"{sub} Na")
                    continue
                level = pair.classify(load)
                result.add_perf(
                    f"{name} {label}", load, "%",
                    pair.warning, pair.critical, 0,
                )
                result.add_msg(level, f"{sub} {load}%")

            # Placeholder kept for existing graph templates
            result.add_perf("dummy", 0)
