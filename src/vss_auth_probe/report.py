"""Console output for probe runs: per-scenario lines, summary and exit status."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO


@dataclass(frozen=True)
class ScenarioOutcome:
    """Result of running one scenario."""

    name: str
    passed: bool
    elapsed_seconds: float
    status_code: int | None = None
    detail: str = ""

    def format_line(self) -> str:
        """Render as ``<name> ... <ok|FAILED> (<duration>) [- <detail>]``."""
        verdict = "ok" if self.passed else "FAILED"
        line = f"{self.name} ... {verdict} ({format_duration(self.elapsed_seconds)})"
        if self.detail:
            line += f" - {self.detail}"
        return line


@dataclass
class ProbeReport:
    """Running tally of scenario outcomes."""

    outcomes: list[ScenarioOutcome] = field(default_factory=list)

    def add(self, outcome: ScenarioOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def passed(self) -> int:
        return sum(1 for o in self.outcomes if o.passed)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.passed)

    @property
    def exit_code(self) -> int:
        """0 when every scenario passed, 1 otherwise."""
        return 1 if self.failed else 0

    def summary_line(self) -> str:
        return f"Results: {self.passed} passed, {self.failed} failed"


def format_duration(seconds: float) -> str:
    if seconds < 1.0:
        return f"{seconds * 1000:.2f}ms"
    return f"{seconds:.3f}s"


def print_banner(target_url: str, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    print("===", file=out)
    print("VSS JWT Authentication Integration Test", file=out)
    print(f"Testing against VSS server at {target_url}", file=out)
    print(file=out)


def print_outcome(outcome: ScenarioOutcome, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    print(outcome.format_line(), file=out, flush=True)


def print_summary(report: ProbeReport, stream: TextIO | None = None) -> None:
    out = stream or sys.stdout
    print(file=out)
    print(report.summary_line(), file=out)
