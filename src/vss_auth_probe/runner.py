"""
ProbeRunner: sends each scenario's request to VSS and classifies the response.

Scenarios run strictly one after another over a single ``httpx.AsyncClient``.
Every failure (key setup, signing, transport, unexpected status) is caught at
the scenario boundary and becomes a failed outcome.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import httpx

from vss_auth_probe.exceptions import ProbeError
from vss_auth_probe.messages import CONTENT_TYPE, ListKeyVersionsRequest
from vss_auth_probe.report import ProbeReport, ScenarioOutcome, print_outcome
from vss_auth_probe.scenarios import classify
from vss_auth_probe.signing import build_claims, forge_token

if TYPE_CHECKING:
    from vss_auth_probe.config import Settings
    from vss_auth_probe.scenarios import Scenario

logger = logging.getLogger(__name__)

OutcomeCallback = Callable[[ScenarioOutcome], None]


class ProbeRunner:
    """Runs auth scenarios against one VSS endpoint.

    Usage::

        runner = ProbeRunner(settings)
        try:
            report = await runner.run_all(canonical_scenarios(key_path))
        finally:
            await runner.close()

    Args:
        settings: Loaded probe settings.
        http: Optional pre-built client; the runner builds one with the
            configured timeout when omitted.
        clock: Wall clock used for claim timestamps.
    """

    def __init__(
        self,
        settings: Settings,
        http: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._settings = settings
        self._clock = clock
        self._http = http or httpx.AsyncClient(timeout=settings.vss.timeout_seconds)
        self._body = ListKeyVersionsRequest(
            store_id=settings.request.store_id,
            key_prefix=settings.request.key_prefix,
            page_size=settings.request.page_size,
            page_token=settings.request.page_token,
        ).encode()

    @property
    def url(self) -> str:
        return self._settings.vss.list_key_versions_url

    async def close(self) -> None:
        await self._http.aclose()

    async def run_all(
        self,
        scenarios: Iterable[Scenario],
        on_outcome: OutcomeCallback | None = print_outcome,
    ) -> ProbeReport:
        """Run scenarios in order and tally the outcomes.

        Args:
            scenarios: Scenarios in run order.
            on_outcome: Called with each outcome as soon as it is known.
        """
        report = ProbeReport()
        for scenario in scenarios:
            outcome = await self.run_scenario(scenario)
            report.add(outcome)
            if on_outcome is not None:
                on_outcome(outcome)
        logger.info(
            "Probe finished",
            extra={"passed": report.passed, "failed": report.failed},
        )
        return report

    async def run_scenario(self, scenario: Scenario) -> ScenarioOutcome:
        """Forge a token, POST the request and classify the status."""
        start = time.perf_counter()
        logger.info("Running scenario", extra={"scenario": scenario.name})

        try:
            headers = self._build_headers(scenario)
        except ProbeError as exc:
            logger.warning("Scenario setup failed", extra={"scenario": scenario.name, "error": exc.message})
            return self._outcome(scenario, start, passed=False, detail=exc.message)

        try:
            response = await self._http.post(self.url, headers=headers, content=self._body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            detail = f"HTTP request failed: {type(exc).__name__}: {exc}"
            logger.warning("Request failed", extra={"scenario": scenario.name, "error": str(exc)})
            return self._outcome(scenario, start, passed=False, detail=detail)

        passed, detail = classify(scenario.expectation, response.status_code, response.reason_phrase)
        logger.info(
            "Scenario classified",
            extra={
                "scenario": scenario.name,
                "status_code": response.status_code,
                "expectation": scenario.expectation.value,
                "passed": passed,
            },
        )
        return self._outcome(
            scenario, start, passed=passed, detail=detail, status_code=response.status_code
        )

    def _build_headers(self, scenario: Scenario) -> dict[str, str]:
        headers = {"Content-Type": CONTENT_TYPE}
        if scenario.authorization is not None:
            headers["Authorization"] = scenario.authorization
        elif scenario.key_loader is not None:
            signing = self._settings.signing
            claims = build_claims(
                signing.subject,
                signing.validity_seconds,
                now=self._clock(),
                offset_seconds=scenario.clock_offset_seconds,
            )
            token = forge_token(claims, scenario.key_loader(), signing.algorithm)
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _outcome(
        scenario: Scenario,
        start: float,
        *,
        passed: bool,
        detail: str,
        status_code: int | None = None,
    ) -> ScenarioOutcome:
        return ScenarioOutcome(
            name=scenario.name,
            passed=passed,
            elapsed_seconds=time.perf_counter() - start,
            status_code=status_code,
            detail=detail,
        )
