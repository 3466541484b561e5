"""
Fixtures for HTTP API tests.

Each test gets a fresh application; services are swapped in through
dependency_overrides so no database or vendor is touched.
"""

import pytest
from fastapi.testclient import TestClient

from fluxori.api.main import create_app


@pytest.fixture
def client() -> TestClient:
    return TestClient(create_app())
