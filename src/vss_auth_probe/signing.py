"""
RSA key handling and JWT creation for bearer credentials.

Builds the claim set VSS expects (sub/iat/nbf/exp), loads the trusted RSA
private key from a PEM file or generates an unrelated one, and signs compact
JWTs with joserfc.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey
from cryptography.hazmat.primitives.serialization import load_pem_private_key
from joserfc import jwt
from joserfc.errors import JoseError
from joserfc.jwk import RSAKey

from vss_auth_probe.exceptions import KeyMaterialError, SigningError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

RSA_ALGORITHMS: frozenset[str] = frozenset({"RS256", "RS384", "RS512", "PS256", "PS384", "PS512"})

_PREVIEW_LENGTH = 24


@dataclass(frozen=True)
class ClaimSet:
    """Claims signed into a bearer token."""

    sub: str
    iat: int
    nbf: int
    exp: int

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def build_claims(
    subject: str,
    validity_seconds: int,
    now: float | None = None,
    offset_seconds: int = 0,
) -> ClaimSet:
    """Build a fresh claim set.

    ``nbf`` equals ``iat`` and ``exp`` is ``iat + validity_seconds``.
    ``offset_seconds`` shifts all three timestamps together, which is how
    expired (negative offset) or not-yet-valid (positive offset) tokens are made.

    Args:
        subject: Opaque subject identifier.
        validity_seconds: Token lifetime, must be positive.
        now: Current epoch seconds; defaults to the wall clock.
        offset_seconds: Shift applied to the issue time.

    Raises:
        ValueError: If validity_seconds is not positive.
    """
    if validity_seconds <= 0:
        msg = f"validity_seconds must be positive, got {validity_seconds}"
        raise ValueError(msg)
    if now is None:
        now = time.time()
    issued_at = int(now) + offset_seconds
    return ClaimSet(
        sub=subject,
        iat=issued_at,
        nbf=issued_at,
        exp=issued_at + validity_seconds,
    )


def load_signing_key(path: Path) -> RSAKey:
    """Load an RSA private key from a PEM file.

    Args:
        path: Path to the PEM-encoded private key (PKCS#1 or PKCS#8, unencrypted).

    Returns:
        The key as a joserfc JWK.

    Raises:
        KeyMaterialError: If the file cannot be read or does not hold an RSA private key.
    """
    try:
        pem_data = path.read_bytes()
    except OSError as exc:
        msg = f"Failed to load private key: {exc}"
        raise KeyMaterialError(msg) from exc

    try:
        private_key = load_pem_private_key(pem_data, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        msg = f"Failed to create encoding key: {exc}"
        raise KeyMaterialError(msg) from exc
    if not isinstance(private_key, RSAPrivateKey):
        msg = f"Failed to create encoding key: expected RSA private key, got {type(private_key).__name__}"
        raise KeyMaterialError(msg)

    logger.debug("Loaded RSA private key", extra={"path": str(path), "key_size": private_key.key_size})
    return RSAKey.import_key(pem_data)


def generate_untrusted_key(key_size: int = 2048) -> RSAKey:
    """Generate a fresh RSA private key that no server can have been told to trust."""
    return RSAKey.generate_key(key_size, private=True)


def forge_token(claims: ClaimSet, key: RSAKey, algorithm: str = "RS256") -> str:
    """Sign the claim set as a compact JWT.

    Raises:
        SigningError: If the algorithm is not an RSA scheme or signing fails.
    """
    if algorithm not in RSA_ALGORITHMS:
        msg = f"Failed to encode JWT: {algorithm} is not an RSA signature algorithm"
        raise SigningError(msg)

    header = {"alg": algorithm, "typ": "JWT"}
    try:
        token = jwt.encode(header, claims.to_dict(), key, algorithms=[algorithm])
    except (JoseError, ValueError, TypeError) as exc:
        msg = f"Failed to encode JWT: {exc}"
        raise SigningError(msg) from exc

    logger.debug(
        "Signed token",
        extra={"algorithm": algorithm, "sub": claims.sub[:16], "token_preview": token_preview(token)},
    )
    return token


def token_preview(token: str) -> str:
    """Shorten a token for logs so the full credential is never written out."""
    if len(token) <= _PREVIEW_LENGTH:
        return token
    return f"{token[:_PREVIEW_LENGTH]}..."
