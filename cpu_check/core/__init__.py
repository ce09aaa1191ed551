"""Core module - contains enums, errors, thresholds, result sink and configuration."""
from .enums import CheckType, Severity, SnmpValueKind
from .errors import (
    CheckError,
    MissingOptionalValue,
    NoProcessorsFound,
    ThresholdNotInteger,
    ThresholdSyntaxError,
    UnknownCheckType,
)
from .result import CheckResult, PerformanceRecord, StatusLine
from .thresholds import ThresholdPair, classify

__all__ = [
    "CheckType",
    "Severity",
    "SnmpValueKind",
    "CheckError",
    "MissingOptionalValue",
    "NoProcessorsFound",
    "ThresholdNotInteger",
    "ThresholdSyntaxError",
    "UnknownCheckType",
    "CheckResult",
    "PerformanceRecord",
    "StatusLine",
    "ThresholdPair",
    "classify",
]
