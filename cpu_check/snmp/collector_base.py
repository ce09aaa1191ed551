"""
BaseCpuCollector — SNMP CPU collector 抽象基底類別。

每個 check type 的 collector 繼承此類別，實作 collect() 方法。
Collectors only fetch through the engine and write into the CheckResult;
everything else is pure transformation of the returned result sets.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from cpu_check.core.enums import CheckType
from cpu_check.core.errors import MissingOptionalValue, NoProcessorsFound
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpError, SnmpTarget, SnmpValue
from cpu_check.snmp.oid_maps import HR_PROCESSOR_LOAD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CpuSummary:
    """Processor count and mean load from hrProcessorTable."""

    cpu_count: int
    load: int


class BaseCpuCollector(ABC):
    """
    Abstract base for all CPU collectors.

    Each collector knows:
    - Which OIDs to walk/get for its MIB family
    - How to turn the values into percentages / load averages
    - Which threshold pair each derived value is classified against
    """

    # Subclasses set this to the check type they implement
    check_type: CheckType

    @abstractmethod
    async def collect(
        self,
        target: SnmpTarget,
        engine: AsyncSnmpEngine,
        thresholds: ThresholdPair,
        result: CheckResult,
    ) -> None:
        """Fetch, derive and classify; append everything to ``result``."""
        ...

    @staticmethod
    def require(values: dict[str, SnmpValue], oid: str) -> int:
        """Integer value of a counter the check cannot do without."""
        if oid not in values:
            raise SnmpError(f"no value for {oid}")
        return BaseCpuCollector.to_int(values[oid], oid)

    @staticmethod
    def optional(values: dict[str, SnmpValue], oid: str) -> int:
        """Integer value of a sub-metric that may be missing."""
        if oid not in values:
            raise MissingOptionalValue(oid)
        return BaseCpuCollector.to_int(values[oid], oid)

    @staticmethod
    def to_int(value: SnmpValue, oid: str) -> int:
        try:
            return int(value.value)
        except (TypeError, ValueError) as e:
            raise SnmpError(f"non-numeric value for {oid}: {value}") from e

    @staticmethod
    def summarize_load(rows: dict[str, SnmpValue]) -> CpuSummary:
        """
        Count processors and average their load.

        The mean is rounded half up to a whole percent.
        """
        loads = [
            BaseCpuCollector.to_int(v, f"{HR_PROCESSOR_LOAD}.{idx}")
            for idx, v in rows.items()
        ]
        if not loads:
            raise NoProcessorsFound("CPU count 0 or unknown")

        mean = Decimal(sum(loads)) / Decimal(len(loads))
        load = int(mean.quantize(Decimal(1), rounding=ROUND_HALF_UP))
        return CpuSummary(cpu_count=len(loads), load=load)

    async def walk_processors(
        self, target: SnmpTarget, engine: AsyncSnmpEngine,
    ) -> dict[str, SnmpValue]:
        """Walk hrProcessorLoad; rows keyed by hrDeviceIndex."""
        rows = await engine.walk(target, HR_PROCESSOR_LOAD)
        logger.debug(
            "%s: %d processors on %s", self.check_type.value, len(rows), target.ip,
        )
        return rows
