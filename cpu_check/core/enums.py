"""
Enumeration definitions for the plugin.

All enums are defined here to maintain consistency and type safety.
"""
from enum import Enum, IntEnum


class Severity(IntEnum):
    """
    Monitoring status, valued as the plugin exit code.

    Ordering follows the exit codes, so the overall status of a run is
    simply ``max()`` of every appended status line.
    """

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3

    @property
    def marker(self) -> str:
        """Short suffix appended to non-OK status lines in the summary."""
        return {0: "", 1: "(!)", 2: "(!!)", 3: "(?)"}[self.value]


class CheckType(str, Enum):
    """
    Check types — one per vendor / MIB family.

    Values are the strings accepted by the ``-t`` command line flag.
    """

    HOST = "host"          # HOST-RESOURCES-MIB hrProcessorLoad
    SYSSTATS = "sysstats"  # UCD-SNMP-MIB systemStats
    LOADAVG = "loadavg"    # UCD-SNMP-MIB laTable
    JNX = "jnx"            # JUNIPER-MIB jnxOperatingTable
    CISCO = "cisco"        # CISCO-PROCESS-MIB cpmCPUTotalTable
    RCSW = "rcsw"          # RUGGEDCOM-SYS-INFO-MIB
    MOXASW = "moxasw"      # Moxa private MIB (relative to sysObjectID)


class SnmpValueKind(str, Enum):
    """Value types the SNMP engines hand over to collectors."""

    INTEGER = "integer"
    GAUGE = "gauge"
    STRING = "string"
    OID = "oid"
