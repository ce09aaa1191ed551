"""
Threshold evaluation.

Thresholds use the Nagios plugin range syntax (``85``, ``10:``, ``~:90``,
``10:90``, ``@10:90``) and are parsed by ``nagiosplugin.Range``. A value
outside a range alerts.

Some strategies derive extra windows from the operator's pair by plain
integer arithmetic; that only works for single-number thresholds, so
``ThresholdPair.as_int()`` refuses anything else.
"""
from __future__ import annotations

import re

from nagiosplugin import Range
from pydantic import BaseModel, ConfigDict

from cpu_check.core.enums import Severity
from cpu_check.core.errors import ThresholdNotInteger, ThresholdSyntaxError

_PLAIN_INT_RE = re.compile(r"^[+-]?\d+$")


def _parse_range(expr: str) -> Range | None:
    """Parse a range expression; empty means no threshold."""
    expr = expr.strip()
    if not expr:
        return None
    try:
        return Range(expr)
    except ValueError as e:
        raise ThresholdSyntaxError(f"invalid threshold '{expr}': {e}") from e


def classify(value: int, warning: str, critical: str) -> Severity:
    """Return the severity of ``value`` against a warning/critical pair."""
    warn_range = _parse_range(warning)
    crit_range = _parse_range(critical)

    if crit_range is not None and not crit_range.match(value):
        return Severity.CRITICAL
    if warn_range is not None and not warn_range.match(value):
        return Severity.WARNING
    return Severity.OK


def parse_int_threshold(expr: str, name: str) -> int:
    """Parse a threshold that must be a plain integer."""
    if not _PLAIN_INT_RE.match(expr.strip()):
        raise ThresholdNotInteger(f"{name} level must be integer: '{expr}'")
    return int(expr)


class ThresholdPair(BaseModel):
    """Warning / critical threshold expressions, immutable for a run."""

    model_config = ConfigDict(frozen=True)

    warning: str = "85"
    critical: str = "95"

    def as_int(self) -> tuple[int, int]:
        """Both thresholds as integers, or ThresholdNotInteger."""
        return (
            parse_int_threshold(self.warning, "warning"),
            parse_int_threshold(self.critical, "critical"),
        )

    def derive(self, offset: int, scale: int = 1) -> ThresholdPair:
        """
        Derive the pair for a longer time window.

        Each threshold becomes ``scale * (threshold - offset)``; the offset
        is subtracted from the operator's value before scaling.
        """
        warn, crit = self.as_int()
        return ThresholdPair(
            warning=str(scale * (warn - offset)),
            critical=str(scale * (crit - offset)),
        )

    def classify(self, value: int) -> Severity:
        return classify(value, self.warning, self.critical)
