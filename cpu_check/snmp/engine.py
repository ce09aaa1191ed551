"""
SNMP Engine — pysnmp asyncio wrapper.

提供兩個核心操作：
- get()  — 取得一或多個 OID 的值
- walk() — 走訪整個 OID 子樹（v2c/v3 使用 GETBULK，v1 使用 GETNEXT）

Both return a result set ``{oid_or_index: SnmpValue}``; objects the agent
reports as noSuchObject / noSuchInstance / endOfMibView are simply absent.

NOTE: pysnmp imports are deferred to the methods that need them so that
mock mode works without touching the pysnmp dispatcher.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from cpu_check.core.enums import SnmpValueKind
from cpu_check.core.errors import CheckError

logger = logging.getLogger(__name__)


class SnmpError(CheckError):
    """Base SNMP error."""

    kind = "snmp error"


class SnmpTimeoutError(SnmpError):
    """SNMP request timed out after all retries."""


# pysnmp value class name → kind handed to collectors
_INTEGER_TYPES = frozenset({"Integer", "Integer32"})
_GAUGE_TYPES = frozenset({
    "Gauge32", "Unsigned32", "Counter32", "Counter64", "TimeTicks",
})
_OID_TYPES = frozenset({"ObjectIdentifier", "ObjectName"})
_SKIP_TYPES = frozenset({"NoSuchObject", "NoSuchInstance", "EndOfMibView"})

# CLI spelling → pysnmp constant name (pysnmp.hlapi.v3arch.asyncio)
_AUTH_PROTOCOLS: dict[str, str] = {
    "noauth": "USM_AUTH_NONE",
    "md5": "USM_AUTH_HMAC96_MD5",
    "sha": "USM_AUTH_HMAC96_SHA",
}
_PRIV_PROTOCOLS: dict[str, str] = {
    "nopriv": "USM_PRIV_NONE",
    "des": "USM_PRIV_CBC56_DES",
    "aes": "USM_PRIV_CFB128_AES",
    # Blumenthal draft key extension
    "aes192": "USM_PRIV_CFB192_AES_BLUMENTHAL",
    "aes256": "USM_PRIV_CFB256_AES_BLUMENTHAL",
    # Reeder (Cisco) key extension
    "aes192c": "USM_PRIV_CFB192_AES",
    "aes256c": "USM_PRIV_CFB256_AES",
}
_SECURITY_LEVELS = frozenset({"noauthnopriv", "authnopriv", "authpriv"})


@dataclass(frozen=True)
class SnmpValue:
    """A typed value from a result set."""

    kind: SnmpValueKind
    value: int | str

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class SnmpTarget:
    """Connection and security parameters for a single SNMP agent."""

    ip: str
    version: int = 2
    user: str = "public"  # community for v1/v2c
    auth_protocol: str = "MD5"
    auth_passphrase: str = ""
    security_level: str = "authPriv"
    priv_protocol: str = "DES"
    priv_passphrase: str = ""
    port: int = 161
    timeout: float = 5.0
    retries: int = 2


@dataclass
class SnmpEngineConfig:
    """Engine-level configuration."""

    max_repetitions: int = 25
    walk_timeout: float = 120.0


def to_snmp_value(val: Any) -> SnmpValue | None:
    """Convert a pysnmp value object; None for the no-such markers."""
    val_class = val.__class__.__name__
    if val_class in _SKIP_TYPES:
        return None
    if val_class in _INTEGER_TYPES:
        return SnmpValue(SnmpValueKind.INTEGER, int(val))
    if val_class in _GAUGE_TYPES:
        return SnmpValue(SnmpValueKind.GAUGE, int(val))
    if val_class in _OID_TYPES:
        return SnmpValue(SnmpValueKind.OID, str(val))
    val_str = val.prettyPrint() if hasattr(val, "prettyPrint") else str(val)
    return SnmpValue(SnmpValueKind.STRING, val_str)


def oid_sort_key(oid: str) -> tuple[int, ...]:
    """Numeric sort key for a dotted OID (or index suffix)."""
    return tuple(int(part) for part in oid.strip(".").split(".") if part)


def finish_walk(
    varbinds: list[tuple[str, SnmpValue]],
    prefix: str,
    numeric_sort: bool,
    strip_prefix: bool,
) -> dict[str, SnmpValue]:
    """Apply walk output options shared by the real and mock engines."""
    if numeric_sort:
        varbinds = sorted(varbinds, key=lambda vb: oid_sort_key(vb[0]))
    if strip_prefix:
        # e.g. prefix="1.3.6.1.2.1.25.3.3.1.2", oid="...3.3.1.2.196608"
        # → key "196608"
        return {oid[len(prefix) + 1:]: val for oid, val in varbinds}
    return dict(varbinds)


class AsyncSnmpEngine:
    """
    Thin async wrapper around the pysnmp v7 asyncio API.

    One instance per run; call close() when done.
    """

    def __init__(self, config: SnmpEngineConfig | None = None) -> None:
        from pysnmp.hlapi.v3arch.asyncio import SnmpEngine as PySnmpEngine

        self._config = config or SnmpEngineConfig()
        self._engine = PySnmpEngine()

    def close(self) -> None:
        self._engine.close_dispatcher()

    @staticmethod
    def make_auth(target: SnmpTarget) -> Any:
        """Build CommunityData / UsmUserData for the target."""
        from pysnmp.hlapi.v3arch import asyncio as hlapi

        if target.version in (1, 2):
            # mpModel 0 = SNMPv1, 1 = SNMPv2c
            return hlapi.CommunityData(
                target.user, mpModel=target.version - 1,
            )
        if target.version != 3:
            raise SnmpError(f"unsupported SNMP version: {target.version}")

        level = target.security_level.lower()
        if level not in _SECURITY_LEVELS:
            raise SnmpError(
                f"unsupported security level: {target.security_level}"
            )
        if level == "noauthnopriv":
            return hlapi.UsmUserData(target.user)

        auth_name = _AUTH_PROTOCOLS.get(target.auth_protocol.lower())
        if auth_name is None:
            raise SnmpError(
                f"unsupported authentication protocol: {target.auth_protocol}"
            )
        if level == "authnopriv":
            return hlapi.UsmUserData(
                target.user,
                target.auth_passphrase,
                None,
                getattr(hlapi, auth_name),
            )

        priv_name = _PRIV_PROTOCOLS.get(target.priv_protocol.lower())
        if priv_name is None:
            raise SnmpError(
                f"unsupported privacy protocol: {target.priv_protocol}"
            )
        # positional: user, auth key, priv key, auth protocol, priv protocol
        return hlapi.UsmUserData(
            target.user,
            target.auth_passphrase,
            target.priv_passphrase,
            getattr(hlapi, auth_name),
            getattr(hlapi, priv_name),
        )

    async def _make_transport(self, target: SnmpTarget) -> Any:
        """Create UDP transport for target."""
        from pysnmp.hlapi.v3arch.asyncio import UdpTransportTarget

        try:
            return await UdpTransportTarget.create(
                (target.ip, target.port),
                timeout=target.timeout,
                retries=target.retries,
            )
        except Exception as e:
            raise SnmpError(f"cannot open transport to {target.ip}: {e}") from e

    @staticmethod
    def _raise_for_error(
        op: str,
        target: SnmpTarget,
        error_indication: Any,
        error_status: Any,
        error_index: Any,
        var_binds: Any,
    ) -> None:
        if error_indication:
            err_str = str(error_indication)
            if "timeout" in err_str.lower():
                raise SnmpTimeoutError(f"SNMP {op} timeout: {target.ip}")
            raise SnmpError(f"SNMP {op} error: {err_str}")

        if error_status:
            raise SnmpError(
                f"SNMP {op} error status: {error_status.prettyPrint()} "
                f"at {var_binds[int(error_index) - 1][0] if error_index else '?'}"
            )

    async def get(
        self, target: SnmpTarget, *oids: str,
    ) -> dict[str, SnmpValue]:
        """
        SNMP GET for one or more OIDs.

        Returns:
            {oid_str: SnmpValue} dict, missing objects omitted.

        Raises:
            SnmpTimeoutError: if request times out.
            SnmpError: on other SNMP errors.
        """
        from pysnmp.hlapi.v3arch.asyncio import (
            ContextData,
            ObjectIdentity,
            ObjectType,
            get_cmd,
        )

        if not oids:
            return {}

        transport = await self._make_transport(target)
        object_types = [ObjectType(ObjectIdentity(oid)) for oid in oids]

        error_indication, error_status, error_index, var_binds = await get_cmd(
            self._engine,
            self.make_auth(target),
            transport,
            ContextData(),
            *object_types,
            lookupMib=False,
        )
        self._raise_for_error(
            "GET", target, error_indication, error_status, error_index,
            var_binds,
        )

        result: dict[str, SnmpValue] = {}
        for oid, val in var_binds:
            value = to_snmp_value(val)
            if value is None:
                continue  # missing values are left out of the result
            result[str(oid)] = value

        logger.debug("GET %s %s -> %s", target.ip, list(oids), result)
        return result

    async def walk(
        self,
        target: SnmpTarget,
        oid_prefix: str,
        numeric_sort: bool = True,
        strip_prefix: bool = True,
    ) -> dict[str, SnmpValue]:
        """
        Full SNMP walk of a subtree.

        Args:
            numeric_sort: order rows by numeric OID.
            strip_prefix: key rows by the index below ``oid_prefix``
                instead of the full OID.

        Raises:
            SnmpTimeoutError: if any request or the whole walk times out.
            SnmpError: on other errors.
        """
        prefix = oid_prefix.strip(".")
        try:
            varbinds = await asyncio.wait_for(
                self._walk_impl(target, prefix),
                timeout=self._config.walk_timeout,
            )
        except asyncio.TimeoutError as e:
            raise SnmpTimeoutError(
                f"SNMP WALK timeout: {target.ip} prefix={prefix}"
            ) from e

        result = finish_walk(varbinds, prefix, numeric_sort, strip_prefix)
        logger.debug("WALK %s %s -> %s", target.ip, prefix, result)
        return result

    async def _walk_impl(
        self, target: SnmpTarget, prefix: str,
    ) -> list[tuple[str, SnmpValue]]:
        """Internal walk implementation."""
        from pysnmp.hlapi.v3arch.asyncio import (
            ContextData,
            ObjectIdentity,
            ObjectType,
            bulk_walk_cmd,
            walk_cmd,
        )

        transport = await self._make_transport(target)
        auth = self.make_auth(target)
        start = ObjectType(ObjectIdentity(prefix))

        if target.version == 1:
            # GETBULK does not exist in SNMPv1
            iterator = walk_cmd(
                self._engine, auth, transport, ContextData(), start,
                lexicographicMode=False, lookupMib=False,
            )
        else:
            iterator = bulk_walk_cmd(
                self._engine, auth, transport, ContextData(),
                0, self._config.max_repetitions, start,
                lexicographicMode=False, lookupMib=False,
            )

        results: list[tuple[str, SnmpValue]] = []
        async for (
            error_indication, error_status, error_index, var_binds,
        ) in iterator:
            self._raise_for_error(
                "WALK", target, error_indication, error_status, error_index,
                var_binds,
            )
            for oid, val in var_binds:
                oid_str = str(oid)
                # Check if we've walked past our subtree
                if not oid_str.startswith(prefix + "."):
                    return results
                value = to_snmp_value(val)
                if value is None:
                    return results
                results.append((oid_str, value))

        return results
