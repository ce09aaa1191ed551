"""
Check result accumulator.

Collectors append performance records and status lines; the CLI renders
the final report and exits with ``CheckResult.exit_code``.

Report layout::

    CPU WARNING - Supervisor, 1m 92% (!), 5m 88% (!) | 'Supervisor 1min'=92%;90;95;0 ...
    <detail line>
    ...
"""
from __future__ import annotations

import logging
from typing import Any

from nagiosplugin import Performance
from pydantic import BaseModel, field_validator

from cpu_check.core.enums import Severity

logger = logging.getLogger(__name__)


def _to_text(v: Any) -> str:
    """Perfdata fields are rendered verbatim; None means empty."""
    if v is None:
        return ""
    return str(v)


class PerformanceRecord(BaseModel):
    """One perfdata token: label=value[unit];warn;crit;min;max."""

    label: str
    value: str
    unit: str = ""
    warning: str = ""
    critical: str = ""
    minimum: str = ""
    maximum: str = ""

    @field_validator(
        "value", "warning", "critical", "minimum", "maximum", mode="before",
    )
    @classmethod
    def _stringify(cls, v: Any) -> str:
        return _to_text(v)

    def to_performance(self) -> Performance:
        # nagiosplugin rejects quotes and '=' inside labels
        label = self.label.replace("'", "_").replace("=", "_")
        return Performance(
            label,
            self.value,
            uom=self.unit,
            warn=self.warning,
            crit=self.critical,
            min=self.minimum,
            max=self.maximum,
        )

    def __str__(self) -> str:
        return str(self.to_performance())


class StatusLine(BaseModel):
    """One status message with its own severity."""

    severity: Severity
    text: str
    detail: str = ""

    def summary(self) -> str:
        if self.severity == Severity.OK:
            return self.text
        return f"{self.text} {self.severity.marker}"


class CheckResult:
    """
    Append-only sink for one plugin run.

    Overall severity is the worst severity of all appended status lines;
    a result nobody wrote to is UNKNOWN, which is also the exit code used
    when a run aborts.
    """

    def __init__(self, name: str = "CPU") -> None:
        self.name = name
        self.perfdata: list[PerformanceRecord] = []
        self.messages: list[StatusLine] = []

    def add_perf(
        self,
        label: str,
        value: int | str,
        unit: str = "",
        warning: str = "",
        critical: str = "",
        minimum: int | str = "",
        maximum: int | str = "",
    ) -> None:
        self.perfdata.append(PerformanceRecord(
            label=label,
            value=value,
            unit=unit,
            warning=warning,
            critical=critical,
            minimum=minimum,
            maximum=maximum,
        ))

    def add_msg(self, severity: Severity, text: str, detail: str = "") -> None:
        logger.debug("status %s: %s", severity.name, text)
        self.messages.append(
            StatusLine(severity=severity, text=text, detail=detail),
        )

    @property
    def severity(self) -> Severity:
        if not self.messages:
            return Severity.UNKNOWN
        return max(m.severity for m in self.messages)

    @property
    def exit_code(self) -> int:
        return int(self.severity)

    def render(self) -> str:
        """Render summary line, perfdata and detail lines."""
        summary = ", ".join(m.summary() for m in self.messages)
        line = f"{self.name} {self.severity.name} - {summary}"
        if self.perfdata:
            line += " | " + " ".join(str(p) for p in self.perfdata)

        lines = [line]
        lines.extend(m.detail for m in self.messages if m.detail)
        return "\n".join(lines) + "\n"
