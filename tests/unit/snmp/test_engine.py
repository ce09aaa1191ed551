"""Unit tests for AsyncSnmpEngine value handling, auth building and get/walk."""
from __future__ import annotations

import pytest
from pysnmp.hlapi.v3arch import asyncio as hlapi
from pysnmp.proto import rfc1902, rfc1905

from cpu_check.core.enums import SnmpValueKind
from cpu_check.snmp.engine import (
    AsyncSnmpEngine,
    SnmpError,
    SnmpTarget,
    SnmpTimeoutError,
    SnmpValue,
    finish_walk,
    oid_sort_key,
    to_snmp_value,
)
from cpu_check.snmp.oid_maps import HR_PROCESSOR_LOAD, SS_CPU_IDLE, SS_CPU_USER


# ── to_snmp_value ────────────────────────────────────────────────


@pytest.mark.parametrize(
    ("raw", "kind", "value"),
    [
        (rfc1902.Integer32(42), SnmpValueKind.INTEGER, 42),
        (rfc1902.Integer(-3), SnmpValueKind.INTEGER, -3),
        (rfc1902.Gauge32(7), SnmpValueKind.GAUGE, 7),
        (rfc1902.Unsigned32(8), SnmpValueKind.GAUGE, 8),
        (rfc1902.Counter32(9), SnmpValueKind.GAUGE, 9),
        (rfc1902.OctetString("Routing Engine 0"), SnmpValueKind.STRING, "Routing Engine 0"),
        (
            rfc1902.ObjectIdentifier("1.3.6.1.4.1.8691.7.19"),
            SnmpValueKind.OID,
            "1.3.6.1.4.1.8691.7.19",
        ),
    ],
)
def test_to_snmp_value(raw, kind, value):
    assert to_snmp_value(raw) == SnmpValue(kind, value)


@pytest.mark.parametrize(
    "marker", [rfc1905.noSuchObject, rfc1905.noSuchInstance, rfc1905.endOfMibView],
)
def test_to_snmp_value_skips_markers(marker):
    assert to_snmp_value(marker) is None


# ── walk helpers ─────────────────────────────────────────────────


def test_oid_sort_key_is_numeric():
    oids = ["1.3.6.10", "1.3.6.9", ".1.3.6.2"]
    assert sorted(oids, key=oid_sort_key) == [".1.3.6.2", "1.3.6.9", "1.3.6.10"]


def test_finish_walk_sorts_and_strips():
    prefix = HR_PROCESSOR_LOAD
    varbinds = [
        (f"{prefix}.10", SnmpValue(SnmpValueKind.INTEGER, 1)),
        (f"{prefix}.9", SnmpValue(SnmpValueKind.INTEGER, 2)),
    ]

    stripped = finish_walk(varbinds, prefix, numeric_sort=True, strip_prefix=True)
    assert list(stripped) == ["9", "10"]

    full = finish_walk(varbinds, prefix, numeric_sort=False, strip_prefix=False)
    assert list(full) == [f"{prefix}.10", f"{prefix}.9"]


# ── make_auth ────────────────────────────────────────────────────


def test_make_auth_v2c_community():
    auth = AsyncSnmpEngine.make_auth(SnmpTarget(ip="10.0.0.1", user="secret"))
    assert isinstance(auth, hlapi.CommunityData)
    assert auth.communityName == "secret"
    assert auth.message_processing_model == 1


def test_make_auth_v1_community():
    auth = AsyncSnmpEngine.make_auth(SnmpTarget(ip="10.0.0.1", version=1))
    assert auth.message_processing_model == 0


@pytest.mark.filterwarnings("error:.*is deprecated")
def test_make_auth_v3_auth_priv():
    auth = AsyncSnmpEngine.make_auth(SnmpTarget(
        ip="10.0.0.1", version=3, user="monitor",
        auth_protocol="SHA", auth_passphrase="authsecret",
        security_level="authPriv",
        priv_protocol="AES", priv_passphrase="privsecret",
    ))
    assert isinstance(auth, hlapi.UsmUserData)
    assert auth.authentication_protocol == hlapi.USM_AUTH_HMAC96_SHA
    assert auth.privacy_protocol == hlapi.USM_PRIV_CFB128_AES


def test_make_auth_v3_no_auth_no_priv():
    auth = AsyncSnmpEngine.make_auth(SnmpTarget(
        ip="10.0.0.1", version=3, user="monitor", security_level="noAuthNoPriv",
    ))
    assert auth.authentication_protocol == hlapi.USM_AUTH_NONE


@pytest.mark.filterwarnings("error:.*is deprecated")
def test_make_auth_v3_auth_no_priv_uses_current_api():
    auth = AsyncSnmpEngine.make_auth(SnmpTarget(
        ip="10.0.0.1", version=3, user="monitor",
        auth_protocol="MD5", auth_passphrase="authsecret",
        security_level="authNoPriv",
    ))
    assert auth.authentication_protocol == hlapi.USM_AUTH_HMAC96_MD5
    assert auth.privacy_protocol == hlapi.USM_PRIV_NONE


@pytest.mark.parametrize(
    "kwargs",
    [
        {"version": 4},
        {"version": 3, "security_level": "paranoid"},
        {"version": 3, "auth_protocol": "SHA512X"},
        {"version": 3, "priv_protocol": "3DES-ish"},
    ],
)
def test_make_auth_rejects_bad_parameters(kwargs):
    with pytest.raises(SnmpError, match="unsupported"):
        AsyncSnmpEngine.make_auth(SnmpTarget(ip="10.0.0.1", **kwargs))


# ── get / walk against patched pysnmp commands ───────────────────


@pytest.fixture
def snmp_engine(monkeypatch):
    async def fake_create(*args, **kwargs):
        return object()

    monkeypatch.setattr(hlapi.UdpTransportTarget, "create", fake_create)
    return AsyncSnmpEngine()


@pytest.mark.asyncio
async def test_get_converts_and_skips_missing(snmp_engine, monkeypatch, target):
    async def fake_get_cmd(*args, **kwargs):
        return None, 0, 0, [
            (rfc1902.ObjectIdentifier(SS_CPU_USER), rfc1902.Integer32(5)),
            (rfc1902.ObjectIdentifier(SS_CPU_IDLE), rfc1905.noSuchInstance),
        ]

    monkeypatch.setattr(hlapi, "get_cmd", fake_get_cmd)

    result = await snmp_engine.get(target, SS_CPU_USER, SS_CPU_IDLE)

    assert result == {SS_CPU_USER: SnmpValue(SnmpValueKind.INTEGER, 5)}


@pytest.mark.asyncio
async def test_get_without_oids_does_no_io(snmp_engine, monkeypatch, target):
    async def fail(*args, **kwargs):
        raise AssertionError("no request expected")

    monkeypatch.setattr(hlapi, "get_cmd", fail)

    assert await snmp_engine.get(target) == {}


@pytest.mark.asyncio
async def test_get_timeout(snmp_engine, monkeypatch, target):
    async def fake_get_cmd(*args, **kwargs):
        return "No SNMP response received before timeout", 0, 0, []

    monkeypatch.setattr(hlapi, "get_cmd", fake_get_cmd)

    with pytest.raises(SnmpTimeoutError):
        await snmp_engine.get(target, SS_CPU_USER)


@pytest.mark.asyncio
async def test_get_other_error(snmp_engine, monkeypatch, target):
    async def fake_get_cmd(*args, **kwargs):
        return "Unknown USM user", 0, 0, []

    monkeypatch.setattr(hlapi, "get_cmd", fake_get_cmd)

    with pytest.raises(SnmpError, match="Unknown USM user"):
        await snmp_engine.get(target, SS_CPU_USER)


@pytest.mark.asyncio
async def test_walk_stops_at_subtree_end(snmp_engine, monkeypatch, target):
    async def fake_bulk_walk_cmd(*args, **kwargs):
        yield None, 0, 0, [
            (rfc1902.ObjectIdentifier(f"{HR_PROCESSOR_LOAD}.196609"), rfc1902.Integer32(20)),
        ]
        yield None, 0, 0, [
            (rfc1902.ObjectIdentifier(f"{HR_PROCESSOR_LOAD}.196608"), rfc1902.Integer32(10)),
            (rfc1902.ObjectIdentifier("1.3.6.1.2.1.25.3.4.1.1.1"), rfc1902.Integer32(99)),
        ]

    monkeypatch.setattr(hlapi, "bulk_walk_cmd", fake_bulk_walk_cmd)

    result = await snmp_engine.walk(target, HR_PROCESSOR_LOAD)

    assert list(result.items()) == [
        ("196608", SnmpValue(SnmpValueKind.INTEGER, 10)),
        ("196609", SnmpValue(SnmpValueKind.INTEGER, 20)),
    ]


@pytest.mark.asyncio
async def test_walk_v1_uses_getnext(snmp_engine, monkeypatch):
    async def fake_walk_cmd(*args, **kwargs):
        yield None, 0, 0, [
            (rfc1902.ObjectIdentifier(f"{HR_PROCESSOR_LOAD}.1"), rfc1902.Integer32(3)),
        ]

    async def fail(*args, **kwargs):
        raise AssertionError("GETBULK is not SNMPv1")
        yield  # pragma: no cover

    monkeypatch.setattr(hlapi, "walk_cmd", fake_walk_cmd)
    monkeypatch.setattr(hlapi, "bulk_walk_cmd", fail)

    result = await snmp_engine.walk(SnmpTarget(ip="10.0.0.1", version=1), HR_PROCESSOR_LOAD)

    assert result == {"1": SnmpValue(SnmpValueKind.INTEGER, 3)}
