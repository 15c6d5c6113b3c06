"""Shared test helpers: RSA key files and an in-process fake VSS server."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from joserfc import jwt
from joserfc.errors import JoseError
from joserfc.jwk import RSAKey

from vss_auth_probe.messages import ListKeyVersionsMessage, ListKeyVersionsRequest

SUBJECT = "02a1b2c3d4e5f6789abcdef0123456789abcdef0123456789abcdef0123456789a"

if TYPE_CHECKING:
    from pathlib import Path


def write_rsa_key(path: Path, key_size: int = 2048) -> RSAKey:
    """Write a fresh PKCS#8 RSA private key to path and return it as a JWK."""
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
    pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    path.write_bytes(pem)
    return RSAKey.import_key(pem)


class FakeVss:
    """MockTransport handler that authenticates like VSS.

    Returns ``success_status`` for a bearer JWT signed by ``trusted_key`` with
    valid time claims, 401 for anything else. Every request is recorded.
    """

    def __init__(self, trusted_key: RSAKey, success_status: int = 200) -> None:
        self._trusted_key = trusted_key
        self._success_status = success_status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        authorization = request.headers.get("Authorization", "")
        if not authorization.startswith("Bearer "):
            return httpx.Response(401)
        try:
            token = jwt.decode(authorization.removeprefix("Bearer "), self._trusted_key, algorithms=["RS256"])
            jwt.JWTClaimsRegistry(exp={"essential": True}).validate(token.claims)
        except (JoseError, ValueError):
            return httpx.Response(401)
        return httpx.Response(self._success_status, content=b"")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def refusing_client() -> httpx.AsyncClient:
    """Client whose every request fails as if the server were down."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def decode_list_request(data: bytes) -> ListKeyVersionsRequest:
    """Parse a request body back into its dataclass, keeping field presence."""
    message = ListKeyVersionsMessage.FromString(data)
    return ListKeyVersionsRequest(
        store_id=message.store_id,
        key_prefix=message.key_prefix if message.HasField("key_prefix") else None,
        page_size=message.page_size if message.HasField("page_size") else None,
        page_token=message.page_token if message.HasField("page_token") else None,
    )
