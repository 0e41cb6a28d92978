import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, patch
from n8n_relay.main import app


@pytest.fixture
def client():
    # Fresh client per test so cookies set by one test never leak into another.
    return TestClient(app)


@pytest.fixture
def mock_upstream():
    with patch("n8n_relay.http_client.http_client.request", new_callable=AsyncMock) as mock_request:
        yield mock_request
