"""SNMP CPU load check plugin for Icinga2 / Nagios compatible systems."""

__version__ = "0.1.0"
