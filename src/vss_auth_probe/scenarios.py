"""Scenario definitions and the status expectation table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import partial
from pathlib import Path

from joserfc.jwk import RSAKey

from vss_auth_probe.signing import generate_untrusted_key, load_signing_key

AUTH_REJECTED_STATUSES: frozenset[int] = frozenset({401, 403})

KeyLoader = Callable[[], RSAKey]


class Expectation(Enum):
    """What the server should do with a scenario's request."""

    ACCEPT = "accept"
    REJECT = "reject"

    def is_met(self, status_code: int) -> bool:
        if self is Expectation.ACCEPT:
            return 200 <= status_code < 300
        return status_code in AUTH_REJECTED_STATUSES


@dataclass(frozen=True)
class Scenario:
    """One probe-and-assert unit.

    Attributes:
        name: Label printed on the result line.
        expectation: Whether the server should accept or reject the request.
        key_loader: Produces the signing key when the scenario runs.
            ``None`` means no token is forged.
        clock_offset_seconds: Shift applied to the claim timestamps.
        authorization: Literal Authorization header value, sent instead of a
            forged token when set.
    """

    name: str
    expectation: Expectation
    key_loader: KeyLoader | None = None
    clock_offset_seconds: int = 0
    authorization: str | None = None


def classify(expectation: Expectation, status_code: int, reason: str = "") -> tuple[bool, str]:
    """Compare an HTTP status against the expectation.

    Returns:
        Tuple of (passed, detail message).
    """
    status = f"{status_code} {reason}".rstrip()
    if expectation.is_met(status_code):
        return True, f"Status: {status}"

    if expectation is Expectation.ACCEPT:
        if status_code in AUTH_REJECTED_STATUSES:
            return False, f"Auth failed with status: {status}"
        return False, f"Server error with status: {status}"

    if 200 <= status_code < 300:
        return False, f"Should have rejected token but got: {status}"
    return False, f"Unexpected status: {status}"


def canonical_scenarios(trusted_key_path: Path) -> list[Scenario]:
    """The trusted-key and unrelated-key checks, in run order."""
    return [
        Scenario(
            name="valid-token",
            expectation=Expectation.ACCEPT,
            key_loader=partial(load_signing_key, trusted_key_path),
        ),
        Scenario(
            name="invalid-token",
            expectation=Expectation.REJECT,
            key_loader=generate_untrusted_key,
        ),
    ]


def extended_scenarios(trusted_key_path: Path, validity_seconds: int) -> list[Scenario]:
    """Rejection checks for stale, early, absent and garbled credentials."""
    trusted = partial(load_signing_key, trusted_key_path)
    return [
        Scenario(
            name="expired-token",
            expectation=Expectation.REJECT,
            key_loader=trusted,
            # exp ends up one full validity window in the past
            clock_offset_seconds=-2 * validity_seconds,
        ),
        Scenario(
            name="premature-token",
            expectation=Expectation.REJECT,
            key_loader=trusted,
            clock_offset_seconds=validity_seconds // 2,
        ),
        Scenario(
            name="missing-token",
            expectation=Expectation.REJECT,
        ),
        Scenario(
            name="malformed-token",
            expectation=Expectation.REJECT,
            authorization="Bearer not-a-jwt",
        ),
    ]
