"""Shared test fixtures for Raindrop.io MCP server tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from raindrop_mcp_server.raindrop_client import RaindropClient


@pytest.fixture
def mock_response():
    """Factory for creating mock HTTP responses.

    Usage:
        resp = mock_response(200, {"result": True})
        resp = mock_response(502, text="<html>Bad Gateway</html>")
    """
    def _make(status_code=200, json_data=None, text=None, headers=None, reason_phrase="OK"):
        response = MagicMock()
        response.status_code = status_code
        response.reason_phrase = reason_phrase
        if json_data is not None:
            response.json.return_value = json_data
            response.text = text or str(json_data)
        else:
            response.json.side_effect = ValueError("No JSON")
            response.text = text or ""
        response.headers = headers or {}
        return response
    return _make


@pytest.fixture
def mock_client():
    """Create a RaindropClient with mocked _request method."""
    with patch.dict("os.environ", {"RAINDROP_TOKEN": "test_token"}):
        client = RaindropClient.from_env()
        client._request = AsyncMock()
        return client


# All resource modules that import RaindropClient
_RESOURCE_MODULES = [
    "raindrop_mcp_server.resources.collections",
    "raindrop_mcp_server.resources.raindrops",
    "raindrop_mcp_server.resources.tags",
    "raindrop_mcp_server.resources.highlights",
    "raindrop_mcp_server.resources.imports",
]


@pytest.fixture
def mock_raindrop_class():
    """Patch RaindropClient in all resource modules, yield (mock_class, mock_instance).

    Usage:
        def test_something(mock_raindrop_class):
            mock_class, mock_instance = mock_raindrop_class
            mock_instance.get_raindrop = AsyncMock(return_value={...})
            # call the tool function...
    """
    mock_instance = MagicMock()
    mock_class = MagicMock()
    mock_class.from_env.return_value = mock_instance

    patchers = [patch(f"{mod}.RaindropClient", mock_class) for mod in _RESOURCE_MODULES]
    for p in patchers:
        p.start()
    yield mock_class, mock_instance
    for p in patchers:
        p.stop()
