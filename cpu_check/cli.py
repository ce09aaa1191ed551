"""
check_snmp_cpu — CPU load plugin for Icinga2 compatible systems.

Usage:
    check_snmp_cpu -H 10.0.0.1 -u public -t host -w 85 -c 95
    check_snmp_cpu -H 10.0.0.1 -V 3 -u monitor -a SHA -A secret \\
        -l authPriv -x AES -X secret -t cisco
    check_snmp_cpu -H 10.0.0.1 -t jnx --mock snapshots/mx960.yaml

stdout carries only the plugin report; logs go to stderr.
"""
from __future__ import annotations

import argparse
import asyncio
import ipaddress
import logging
import sys
from typing import Any, NoReturn

from cpu_check import __version__
from cpu_check.core.config import Settings, get_settings
from cpu_check.core.enums import CheckType, Severity
from cpu_check.core.errors import CheckError
from cpu_check.core.result import CheckResult
from cpu_check.core.thresholds import ThresholdPair
from cpu_check.snmp.engine import AsyncSnmpEngine, SnmpEngineConfig, SnmpTarget
from cpu_check.snmp.registry import run_check

logger = logging.getLogger("check_snmp_cpu")

# Exit code for usage errors and aborted runs
_UNKNOWN = int(Severity.UNKNOWN)


class PluginArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits UNKNOWN instead of 2 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(_UNKNOWN, f"{self.prog}: error: {message}\n")


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    check_types = "|".join(t.value for t in CheckType)
    parser = PluginArgumentParser(
        prog="check_snmp_cpu",
        description="CPU load check over SNMP",
    )
    parser.add_argument("-H", dest="host", default="", help="<host ip>")
    parser.add_argument(
        "-V", dest="snmp_version", type=int, default=2,
        help="[snmp version] (1|2|3)",
    )
    parser.add_argument(
        "-u", dest="user", default="public", help="[username|community]",
    )
    parser.add_argument(
        "-a", dest="auth_protocol", default="MD5",
        help="[authentication protocol] (NoAuth|MD5|SHA)",
    )
    parser.add_argument(
        "-A", dest="auth_passphrase", default="",
        help="[authentication protocol pass phrase]",
    )
    parser.add_argument(
        "-l", dest="security_level", default="authPriv",
        help="[security level] (noAuthNoPriv|authNoPriv|authPriv)",
    )
    parser.add_argument(
        "-x", dest="priv_protocol", default="DES",
        help="[privacy protocol] (NoPriv|DES|AES|AES192|AES256|AES192C|AES256C)",
    )
    parser.add_argument(
        "-X", dest="priv_passphrase", default="",
        help="[privacy protocol pass phrase]",
    )
    parser.add_argument("-w", dest="warning", default="85", help="[warning level] (%%)")
    parser.add_argument("-c", dest="critical", default="95", help="[critical level] (%%)")
    parser.add_argument(
        "-t", dest="check_type", default=CheckType.HOST.value,
        help=f"[check type] ({check_types})",
    )
    parser.add_argument(
        "-d", dest="debug", action="store_true",
        help="Using this parameter will print out debug info",
    )
    parser.add_argument(
        "-v", dest="show_version", action="store_true",
        help="Using this parameter will display the version number and exit",
    )
    parser.add_argument(
        "-p", "--port", type=int, default=settings.snmp_port,
        help="[snmp port] (default: %(default)s)",
    )
    parser.add_argument(
        "--timeout", type=float, default=settings.snmp_timeout,
        help="[request timeout in seconds] (default: %(default)s)",
    )
    parser.add_argument(
        "--retries", type=int, default=settings.snmp_retries,
        help="[request retries] (default: %(default)s)",
    )
    parser.add_argument(
        "--mock", default=settings.snmp_mock_file or None,
        help="[YAML snapshot] answer from a file instead of the device",
    )
    return parser


def setup_logging(level: str, debug: bool = False) -> None:
    """Configure root logging on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if debug else level.upper(),
        format="%(asctime)s %(levelname)-5s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def _make_engine(args: argparse.Namespace, settings: Settings) -> Any:
    if args.mock:
        from cpu_check.snmp.mock_engine import MockSnmpEngine
        return MockSnmpEngine(args.mock)
    return AsyncSnmpEngine(config=SnmpEngineConfig(
        max_repetitions=settings.snmp_max_repetitions,
        walk_timeout=settings.snmp_walk_timeout,
    ))


async def _run(args: argparse.Namespace, settings: Settings) -> CheckResult:
    target = SnmpTarget(
        ip=args.host,
        version=args.snmp_version,
        user=args.user,
        auth_protocol=args.auth_protocol,
        auth_passphrase=args.auth_passphrase,
        security_level=args.security_level,
        priv_protocol=args.priv_protocol,
        priv_passphrase=args.priv_passphrase,
        port=args.port,
        timeout=args.timeout,
        retries=args.retries,
    )
    thresholds = ThresholdPair(warning=args.warning, critical=args.critical)

    engine = _make_engine(args, settings)
    try:
        return await run_check(
            args.check_type, engine, target, thresholds,
            name=settings.check_name,
        )
    finally:
        engine.close()


def main(argv: list[str] | None = None) -> int:
    """Run the plugin; returns the process exit code."""
    settings = get_settings()
    args = build_parser(settings).parse_args(argv)
    setup_logging(settings.log_level, args.debug)

    if args.show_version:
        print(f"Plugin version {__version__}")
        return _UNKNOWN

    try:
        ipaddress.ip_address(args.host)
    except ValueError:
        print("Valid host ip is required")
        return _UNKNOWN

    try:
        result = asyncio.run(_run(args, settings))
    except CheckError as e:
        logger.debug("check aborted", exc_info=True)
        print(f"{e.kind}: {e}")
        return _UNKNOWN

    sys.stdout.write(result.render())
    return result.exit_code


def run() -> None:
    """Console script entry point."""
    sys.exit(main())
