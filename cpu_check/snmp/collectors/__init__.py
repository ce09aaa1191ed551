"""One collector per check type."""
from .cisco import CiscoCollector
from .host import HostLoadCollector
from .juniper import JuniperCollector
from .loadavg import LoadAverageCollector
from .moxa import MoxaCollector
from .ruggedcom import RuggedcomCollector
from .sysstats import SystemStatsCollector

__all__ = [
    "CiscoCollector",
    "HostLoadCollector",
    "JuniperCollector",
    "LoadAverageCollector",
    "MoxaCollector",
    "RuggedcomCollector",
    "SystemStatsCollector",
]
