"""Unit test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest
import yaml

from tests.helpers import SUBJECT, FakeVss, write_rsa_key
from vss_auth_probe.config import Settings

if TYPE_CHECKING:
    from pathlib import Path

    from joserfc.jwk import RSAKey


@pytest.fixture(scope="session")
def trusted_key_dir(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return tmp_path_factory.mktemp("keys")


@pytest.fixture(scope="session")
def trusted_key(trusted_key_dir: Path) -> RSAKey:
    """RSA key written once per session to ``trusted_key_dir/private.pem``."""
    return write_rsa_key(trusted_key_dir / "private.pem")


@pytest.fixture()
def trusted_key_path(trusted_key: RSAKey, trusted_key_dir: Path) -> Path:
    return trusted_key_dir / "private.pem"


@pytest.fixture()
def settings_dict(trusted_key_path: Path) -> dict[str, Any]:
    return {
        "vss": {
            "base_url": "http://vss.test:5050",
            "list_key_versions_path": "/vss/listKeyVersions",
            "timeout_seconds": 5,
        },
        "signing": {
            "trusted_private_key_path": str(trusted_key_path),
            "algorithm": "RS256",
            "subject": SUBJECT,
            "validity_seconds": 86400,
        },
        "request": {
            "store_id": "test_store",
            "key_prefix": "test_",
            "page_size": 10,
            "page_token": None,
        },
        "logging": {"level": "WARNING", "directory": None},
    }


@pytest.fixture()
def sample_settings(settings_dict: dict[str, Any]) -> Settings:
    return Settings(**settings_dict)


@pytest.fixture()
def config_file(tmp_path: Path, settings_dict: dict[str, Any]) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(settings_dict))
    return path


@pytest.fixture()
def fake_vss(trusted_key: RSAKey) -> FakeVss:
    return FakeVss(trusted_key)
