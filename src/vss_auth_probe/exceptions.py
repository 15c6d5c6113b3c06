"""Errors raised while preparing a scenario's credentials."""

from __future__ import annotations


class ProbeError(Exception):
    """Base class for scenario setup failures.

    Always caught at the scenario boundary and turned into a failed outcome.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class KeyMaterialError(ProbeError):
    """Signing key could not be read or is not an RSA private key."""


class SigningError(ProbeError):
    """Claims could not be signed with the given key."""
