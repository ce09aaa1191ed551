"""Unit tests for the YAML snapshot engine."""
from __future__ import annotations

import pytest

from cpu_check.core.enums import SnmpValueKind
from cpu_check.snmp.engine import SnmpError, SnmpValue
from cpu_check.snmp.mock_engine import MockSnmpEngine, load_snapshot
from cpu_check.snmp.oid_maps import HR_PROCESSOR_LOAD, SYS_OBJECT_ID

SNAPSHOT = f"""
{HR_PROCESSOR_LOAD}.10: 30
{HR_PROCESSOR_LOAD}.9: 20
.{HR_PROCESSOR_LOAD}.2: 10
{SYS_OBJECT_ID}: {{type: oid, value: .1.3.6.1.4.1.8691.7.19}}
1.3.6.1.4.1.2636.3.1.13.1.5.9.1.0.0: "Routing Engine 0"
1.3.6.1.4.1.2636.3.1.13.1.8.9.1.0.0: {{type: gauge, value: 7}}
"""


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "device.yaml"
    path.write_text(SNAPSHOT, encoding="utf-8")
    return path


def test_load_snapshot_infers_and_states_types(snapshot_file):
    data = load_snapshot(snapshot_file)

    assert data[f"{HR_PROCESSOR_LOAD}.2"] == SnmpValue(SnmpValueKind.INTEGER, 10)
    assert data[SYS_OBJECT_ID] == SnmpValue(SnmpValueKind.OID, "1.3.6.1.4.1.8691.7.19")
    assert data["1.3.6.1.4.1.2636.3.1.13.1.5.9.1.0.0"] == SnmpValue(
        SnmpValueKind.STRING, "Routing Engine 0",
    )
    assert data["1.3.6.1.4.1.2636.3.1.13.1.8.9.1.0.0"] == SnmpValue(
        SnmpValueKind.GAUGE, 7,
    )


def test_empty_snapshot(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_snapshot(path) == {}


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("- 1\n- 2\n", "must be a mapping"),
        ("1.3.6.1: {type: float, value: 1}\n", "bad type"),
        ("1.3.6.1: true\n", "unsupported value"),
        ("1.3.6.1: [unclosed\n", "cannot load"),
    ],
)
def test_load_snapshot_rejects_bad_content(tmp_path, content, match):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(SnmpError, match=match):
        load_snapshot(path)


def test_missing_snapshot_file(tmp_path):
    with pytest.raises(SnmpError, match="cannot load"):
        MockSnmpEngine(tmp_path / "nope.yaml")


@pytest.mark.asyncio
async def test_walk_sorts_numerically_and_strips_prefix(snapshot_file, target):
    engine = MockSnmpEngine(snapshot_file)

    result = await engine.walk(target, HR_PROCESSOR_LOAD)

    assert list(result) == ["2", "9", "10"]
    assert result["10"] == SnmpValue(SnmpValueKind.INTEGER, 30)


@pytest.mark.asyncio
async def test_walk_keeps_full_oids_when_asked(snapshot_file, target):
    engine = MockSnmpEngine(snapshot_file)

    result = await engine.walk(
        target, f".{HR_PROCESSOR_LOAD}", strip_prefix=False,
    )

    assert list(result) == [
        f"{HR_PROCESSOR_LOAD}.2",
        f"{HR_PROCESSOR_LOAD}.9",
        f"{HR_PROCESSOR_LOAD}.10",
    ]


@pytest.mark.asyncio
async def test_walk_of_absent_subtree_is_empty(snapshot_file, target):
    engine = MockSnmpEngine(snapshot_file)
    assert await engine.walk(target, "1.3.6.1.4.1.2021.10.1.5") == {}


@pytest.mark.asyncio
async def test_get_returns_only_present_oids(snapshot_file, target):
    engine = MockSnmpEngine(snapshot_file)

    result = await engine.get(target, f".{SYS_OBJECT_ID}", "1.3.6.1.9.9.9.0")

    assert result == {
        SYS_OBJECT_ID: SnmpValue(SnmpValueKind.OID, "1.3.6.1.4.1.8691.7.19"),
    }
    engine.close()
