"""
Error taxonomy.

Every fatal error derives from CheckError and aborts the run: cli.main()
prints ``"<kind>: <message>"`` and exits with UNKNOWN. MissingOptionalValue
is not fatal: collectors catch it and degrade a single sub-metric.
"""
from __future__ import annotations


class CheckError(Exception):
    """Base error for a check run."""

    kind = "check error"


class ThresholdSyntaxError(CheckError):
    """Threshold expression could not be parsed as a Nagios range."""

    kind = "alarm level error"


class ThresholdNotInteger(CheckError):
    """A strategy needs a plain integer threshold to derive other windows."""

    kind = "threshold error"


class NoProcessorsFound(CheckError):
    """Zero CPU rows where at least one is required."""

    kind = "cpu data error"


class UnknownCheckType(CheckError):
    """No collector registered for the requested check type."""

    kind = "check type error"


class MissingOptionalValue(CheckError):
    """A per-entity sub-metric is absent from a result set."""

    kind = "missing value"

    def __init__(self, oid: str) -> None:
        super().__init__(f"no value for {oid}")
        self.oid = oid
