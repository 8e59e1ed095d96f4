import pytest
from fastapi.testclient import TestClient

from API_LAYER.app import app


@pytest.fixture(scope="session")
def client():
    return TestClient(app)
