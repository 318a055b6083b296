"""Pytest configuration and fixtures."""

from collections.abc import Mapping

import pytest

from bizauth.common.settings import Settings
from bizauth.urlsign.repository import load_key_repository

MAPS_URL = "http://maps.googleapis.com/maps/api/geocode/json?address=New+York&sensor=false&client=clientID"
MAPS_KEY = "vNIXE0xscrmjlyV-12Nj_BvUPaw="
MAPS_SIGNATURE = "KrU1TzVQM7Ur0i8i7K3huiw3MsA="
MAPS_SIGNED_URL = f"{MAPS_URL}&signature={MAPS_SIGNATURE}"


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        key_repository_path="does-not-exist.txt",
        key_bytes=16,
        auth_exempt_paths=("/health",),
    )


@pytest.fixture
def repository() -> Mapping[str, str]:
    """Key repository holding the Maps sample client."""
    return load_key_repository(f"clientID {MAPS_KEY}\nother {'A' * 28}")


@pytest.fixture
def repository_file(tmp_path):
    """Key repository written to disk."""
    path = tmp_path / "keys.txt"
    path.write_text(f"# provisioned clients\nclientID {MAPS_KEY}\n", encoding="utf-8")
    return path
