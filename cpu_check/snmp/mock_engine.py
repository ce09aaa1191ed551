"""
Mock SNMP Engine.

Drop-in replacement for AsyncSnmpEngine that serves OID values from a YAML
snapshot instead of sending any UDP packets. Used with ``--mock FILE`` or
CPU_CHECK_SNMP_MOCK_FILE.

Snapshot format — plain values infer their type (int → integer, str →
string), a mapping states it explicitly::

    1.3.6.1.2.1.25.3.3.1.2.196608: 10
    1.3.6.1.4.1.2636.3.1.13.1.5.9.1.0.0: "Routing Engine 0"
    1.3.6.1.4.1.2636.3.1.13.1.8.9.1.0.0: {type: gauge, value: 7}
    1.3.6.1.2.1.1.2.0: {type: oid, value: 1.3.6.1.4.1.8691.7.19}
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from cpu_check.core.enums import SnmpValueKind
from cpu_check.snmp.engine import SnmpError, SnmpTarget, SnmpValue, finish_walk

logger = logging.getLogger(__name__)


def _load_value(oid: str, raw: Any) -> SnmpValue:
    if isinstance(raw, dict):
        try:
            kind = SnmpValueKind(str(raw.get("type", "")).lower())
        except ValueError as e:
            raise SnmpError(f"mock snapshot: bad type for {oid}: {raw}") from e
        value = raw.get("value")
        if kind in (SnmpValueKind.INTEGER, SnmpValueKind.GAUGE):
            return SnmpValue(kind, int(value))
        if kind == SnmpValueKind.OID:
            return SnmpValue(kind, str(value).strip("."))
        return SnmpValue(kind, "" if value is None else str(value))
    if isinstance(raw, bool) or raw is None:
        raise SnmpError(f"mock snapshot: unsupported value for {oid}: {raw}")
    if isinstance(raw, int):
        return SnmpValue(SnmpValueKind.INTEGER, raw)
    return SnmpValue(SnmpValueKind.STRING, str(raw))


def load_snapshot(path: str | Path) -> dict[str, SnmpValue]:
    """Read a YAML snapshot into {oid: SnmpValue}."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise SnmpError(f"cannot load mock snapshot {path}: {e}") from e

    if not data:
        return {}
    if not isinstance(data, dict):
        raise SnmpError(f"mock snapshot {path} must be a mapping")

    snapshot: dict[str, SnmpValue] = {}
    for oid, raw in data.items():
        oid_str = str(oid).strip(".")
        snapshot[oid_str] = _load_value(oid_str, raw)
    return snapshot


class MockSnmpEngine:
    """
    Mock SNMP engine — same interface as AsyncSnmpEngine.

    All data comes from one snapshot, whatever the target.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._data = load_snapshot(path)
        logger.info(
            "MockSnmpEngine loaded %d OIDs from %s (no real SNMP traffic)",
            len(self._data), self._path,
        )

    def close(self) -> None:
        pass

    async def get(
        self, target: SnmpTarget, *oids: str,
    ) -> dict[str, SnmpValue]:
        """Mock SNMP GET — listed OIDs present in the snapshot."""
        result: dict[str, SnmpValue] = {}
        for oid in oids:
            key = oid.strip(".")
            if key in self._data:
                result[key] = self._data[key]
        logger.debug("mock GET %s %s -> %s", target.ip, list(oids), result)
        return result

    async def walk(
        self,
        target: SnmpTarget,
        oid_prefix: str,
        numeric_sort: bool = True,
        strip_prefix: bool = True,
    ) -> dict[str, SnmpValue]:
        """Mock SNMP WALK — every snapshot OID below the prefix."""
        prefix = oid_prefix.strip(".")
        varbinds = [
            (oid, val) for oid, val in self._data.items()
            if oid.startswith(prefix + ".")
        ]
        result = finish_walk(varbinds, prefix, numeric_sort, strip_prefix)
        logger.debug("mock WALK %s %s -> %s", target.ip, prefix, result)
        return result
