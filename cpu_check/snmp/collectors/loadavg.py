"""
SNMP Collector — UCD-SNMP-MIB load averages.

laLoadInt carries the load average × 100. Thresholds are given as percent
per CPU, so each window's pair is scaled by the processor count:

    1 min:  N × (t - 0)
    5 min:  N × (t - 5)
    15 min: N × (t - 10)

e.g. 4 CPUs, -w 100 -c 150 → 1 min pair (400, 600), reported as 4.00 / 6.00.
"""
from __future__ import annotations

import logging

from cpu_check.core.enums import CheckType, Severity
from cpu_check.core.errors import NoProcessorsFound
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.collector_base import BaseCpuCollector
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpTarget
from cpu_check.snmp.oid_maps import LA_LOAD_INT

logger = logging.getLogger(__name__)

# (window minutes, laIndex, threshold offset)
_WINDOWS: tuple[tuple[int, int, int], ...] = (
    (1, 1, 0),
    (5, 2, 5),
    (15, 3, 10),
)


def _hundredths(value: int) -> str:
    return f"{value / 100:.2f}"


class LoadAverageCollector(BaseCpuCollector):
    """1/5/15 minute load averages against CPU-scaled thresholds."""

    check_type = CheckType.LOADAVG

    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        # Fail on non-integer thresholds before any SNMP traffic
        thresholds.as_int()

        cpu_count = len(await self.walk_processors(target, engine))
        if cpu_count == 0:
            raise NoProcessorsFound("get processor count failed")

        pairs = {
            minutes: thresholds.derive(offset, scale=cpu_count)
            for minutes, _, offset in _WINDOWS
        }
        logger.debug("loadavg: %d CPUs, pairs %s", cpu_count, pairs)

        oids = {minutes: f"{LA_LOAD_INT}.{idx}" for minutes, idx, _ in _WINDOWS}
        values = await engine.get(target, *oids.values())

        result.add_msg(Severity.OK, f"{cpu_count} CPUs")

        for minutes, _, _ in _WINDOWS:
            raw = self.require(values, oids[minutes])
            pair = pairs[minutes]
            level = pair.classify(raw)

            value = _hundredths(raw)
            result.add_perf(
                f"load_{minutes}_min", value, "",
                _hundredths(int(pair.warning)), _hundredths(int(pair.critical)),
                0, "",
            )
            result.add_msg(level, f"l{minutes} {value}")
