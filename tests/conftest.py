"""
Pytest configuration and fixtures.

Provides mocked transport objects so no test hits the real PubChem API:
- mock_http_response: Factory for fake httpx.Response objects
- mock_http_client: Fake httpx.Client whose get() is a MagicMock
- pubchem_client: PubChemClient wired to mock_http_client
"""

import json
from unittest.mock import MagicMock

import httpx
import pytest

from pubchem.client import PubChemClient


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_http_response():
    """Factory for creating mock httpx responses."""

    def _create(
        status_code: int = 200,
        json_data: dict | list | None = None,
        text: str | None = None,
        headers: dict | None = None,
    ):
        response = MagicMock(spec=httpx.Response)
        response.status_code = status_code

        default_headers = {}
        if json_data is not None:
            default_headers["Content-Type"] = "application/json"
            response.json.return_value = json_data
            response.text = json.dumps(json_data) if text is None else text
        else:
            default_headers["Content-Type"] = "text/plain"
            response.json.side_effect = ValueError("No JSON")
            response.text = text or ""
        response.headers = {**default_headers, **(headers or {})}

        return response

    return _create


@pytest.fixture
def mock_http_client():
    """Mock httpx.Client; set ``get.return_value`` or ``get.side_effect``."""
    client = MagicMock(spec=httpx.Client)
    client.get = MagicMock()
    return client


@pytest.fixture
def pubchem_client(mock_http_client):
    """PubChemClient that sends requests to the mocked transport."""
    return PubChemClient(http_client=mock_http_client)
