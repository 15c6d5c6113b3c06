"""Integration probe for VSS JWT bearer authentication."""

from vss_auth_probe.report import ProbeReport, ScenarioOutcome
from vss_auth_probe.runner import ProbeRunner
from vss_auth_probe.scenarios import Expectation, Scenario, canonical_scenarios, extended_scenarios

__version__ = "0.1.0"

__all__ = [
    "Expectation",
    "ProbeReport",
    "ProbeRunner",
    "Scenario",
    "ScenarioOutcome",
    "canonical_scenarios",
    "extended_scenarios",
]
