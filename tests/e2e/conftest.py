"""e2e fixtures: live VSS location and the trusted key it verifies against."""

from __future__ import annotations

import os
from pathlib import Path

import httpx
import pytest

from vss_auth_probe.config import Settings

VSS_URL = os.environ.get("VSS_URL", "http://localhost:5050")
TRUSTED_KEY_PATH = os.environ.get("VSS_TRUSTED_KEY_PATH", "../lnurl-server/keys/private.pem")


@pytest.fixture(scope="session", autouse=True)
def _require_vss_service() -> None:
    try:
        httpx.get(VSS_URL, timeout=3.0)
    except (httpx.ConnectError, httpx.TimeoutException) as exc:
        pytest.exit(f"VSS server not running at {VSS_URL}: {exc}", returncode=1)


@pytest.fixture(scope="session")
def trusted_key_path() -> Path:
    path = Path(TRUSTED_KEY_PATH).resolve()
    if not path.exists():
        pytest.exit(f"Trusted private key not found at {path} (set VSS_TRUSTED_KEY_PATH)", returncode=1)
    return path


@pytest.fixture()
def live_settings(trusted_key_path: Path) -> Settings:
    return Settings(
        vss={
            "base_url": VSS_URL,
            "list_key_versions_path": "/vss/listKeyVersions",
            "timeout_seconds": 10,
        },
        signing={
            "trusted_private_key_path": str(trusted_key_path),
            "algorithm": "RS256",
            "subject": "02a1b2c3d4e5f6789abcdef0123456789abcdef0123456789abcdef0123456789a",
            "validity_seconds": 86400,
        },
        request={"store_id": "test_store", "key_prefix": "test_", "page_size": 10},
        logging={"level": "WARNING"},
    )
