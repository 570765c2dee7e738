"""Tests for Raindrop.io client methods."""

from __future__ import annotations

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import httpx

from raindrop_mcp_server.raindrop_client import (
    DEFAULT_BASE_URL,
    MAX_RETRIES,
    RaindropClient,
    RaindropClientError,
)

from tests.fixtures.common import ERROR_BARE_FALSE, ERROR_NOT_FOUND, ERROR_UNAUTHORIZED, RESULT_OK
from tests.fixtures.collections import COLLECTION_LIST_RESPONSE, COLLECTION_SINGLE_RESPONSE
from tests.fixtures.raindrops import (
    RAINDROP_LIST_RESPONSE,
    RAINDROP_QUOTED_RESPONSE,
    RAINDROP_SINGLE_RESPONSE,
)
from tests.fixtures.tags import (
    HIGHLIGHT_LIST_RESPONSE,
    PARSE_URL_RESPONSE,
    TAG_LIST_RESPONSE,
    URL_EXISTS_RESPONSE,
)


# ---------------------------------------------------------------------------
# TestFromEnv
# ---------------------------------------------------------------------------


class TestFromEnv:
    """Tests for RaindropClient.from_env class method."""

    async def test_success(self):
        """Should create client with a token in the environment."""
        with patch.dict("os.environ", {"RAINDROP_TOKEN": "my_token"}, clear=True):
            client = RaindropClient.from_env()
            assert client.token == "my_token"
            assert client.base_url == DEFAULT_BASE_URL

    async def test_missing_token(self):
        """Should raise RaindropClientError when RAINDROP_TOKEN is missing."""
        with patch.dict("os.environ", {}, clear=True):
            with pytest.raises(RaindropClientError, match="Missing RAINDROP_TOKEN"):
                RaindropClient.from_env()

    async def test_empty_token(self):
        with patch.dict("os.environ", {"RAINDROP_TOKEN": ""}, clear=True):
            with pytest.raises(RaindropClientError, match="Missing RAINDROP_TOKEN"):
                RaindropClient.from_env()

    async def test_custom_base_url_gets_trailing_slash(self):
        """Should use custom RAINDROP_BASE_URL and append a slash."""
        with patch.dict("os.environ", {
            "RAINDROP_TOKEN": "my_token",
            "RAINDROP_BASE_URL": "https://staging.example.com/rest/v1",
        }, clear=True):
            client = RaindropClient.from_env()
            assert client.base_url == "https://staging.example.com/rest/v1/"

    async def test_headers_carry_bearer_token(self, mock_client):
        headers = mock_client._headers()
        assert headers["Authorization"] == "Bearer test_token"
        assert headers["Content-Type"] == "application/json"


# ---------------------------------------------------------------------------
# TestHandleResponse
# ---------------------------------------------------------------------------


class TestHandleResponse:
    """Tests for response decoding, error extraction and title cleanup."""

    async def test_success_cleans_titles(self, mock_client, mock_response):
        mock_client._request = AsyncMock(return_value=mock_response(200, RAINDROP_QUOTED_RESPONSE))

        result = await mock_client.get_raindrop(1002)

        assert result["item"]["title"] == "Quoted Title"
        assert result["item"]["collection"]["title"] == "Reading"
        assert result["item"]["highlights"][0]["title"] == "Inner"
        # Fixture itself is untouched
        assert RAINDROP_QUOTED_RESPONSE["item"]["title"] == '  "Quoted Title"  '

    async def test_result_false_uses_error_message(self, mock_client, mock_response):
        mock_client._request = AsyncMock(return_value=mock_response(200, ERROR_UNAUTHORIZED))

        with pytest.raises(RaindropClientError, match="Invalid or expired token"):
            await mock_client.get_collections()

    async def test_error_field_used_when_no_message(self, mock_client, mock_response):
        mock_client._request = AsyncMock(return_value=mock_response(404, ERROR_NOT_FOUND))

        with pytest.raises(RaindropClientError, match="not_found"):
            await mock_client.get_raindrop(1)

    async def test_generic_message_with_status(self, mock_client, mock_response):
        mock_client._request = AsyncMock(return_value=mock_response(400, ERROR_BARE_FALSE))

        with pytest.raises(RaindropClientError, match="API request failed: 400"):
            await mock_client.get_raindrop(1)

    async def test_http_error_with_ok_body_still_raises(self, mock_client, mock_response):
        mock_client._request = AsyncMock(return_value=mock_response(500, {"detail": "boom"}))

        with pytest.raises(RaindropClientError, match="API request failed: 500"):
            await mock_client.get_tags()

    async def test_http_error_with_list_body(self, mock_client, mock_response):
        mock_client._request = AsyncMock(return_value=mock_response(403, ["forbidden"]))

        with pytest.raises(RaindropClientError, match="API request failed: 403"):
            await mock_client.get_tags()

    async def test_unparseable_body_raises(self, mock_client, mock_response):
        mock_client._request = AsyncMock(
            return_value=mock_response(502, text="<html>Bad Gateway</html>", reason_phrase="Bad Gateway")
        )

        with pytest.raises(RaindropClientError, match="Failed to parse JSON response: 502 Bad Gateway"):
            await mock_client.get_collections()

    async def test_network_error_propagates(self, mock_client):
        """Network errors from _request should propagate, not be swallowed."""
        mock_client._request = AsyncMock(side_effect=httpx.ConnectError("Connection refused"))

        with pytest.raises(httpx.ConnectError, match="Connection refused"):
            await mock_client.create_raindrop({"link": "https://example.com"})


# ---------------------------------------------------------------------------
# TestRetry
# ---------------------------------------------------------------------------


class TestRetry:
    """Tests for _execute_with_retry."""

    @pytest.fixture(autouse=True)
    def no_sleep(self):
        with patch("raindrop_mcp_server.raindrop_client.asyncio.sleep", new=AsyncMock()) as sleep:
            yield sleep

    @pytest.fixture
    def client(self):
        return RaindropClient(base_url=DEFAULT_BASE_URL, token="t")

    async def test_returns_first_success(self, client, mock_response):
        http = MagicMock()
        http.request = AsyncMock(return_value=mock_response(200, RESULT_OK))

        response = await client._execute_with_retry(http, "get", "tags")

        assert response.status_code == 200
        http.request.assert_called_once_with("GET", "tags")

    async def test_client_error_not_retried(self, client, mock_response):
        http = MagicMock()
        http.request = AsyncMock(return_value=mock_response(404, ERROR_NOT_FOUND))

        response = await client._execute_with_retry(http, "get", "raindrop/1")

        assert response.status_code == 404
        assert http.request.call_count == 1

    async def test_rate_limit_retried_then_succeeds(self, client, mock_response, no_sleep):
        http = MagicMock()
        http.request = AsyncMock(side_effect=[
            mock_response(429, {"result": False}),
            mock_response(200, RESULT_OK),
        ])

        response = await client._execute_with_retry(http, "get", "tags")

        assert response.status_code == 200
        assert http.request.call_count == 2
        no_sleep.assert_awaited_once_with(1.0)

    async def test_server_error_returned_after_last_attempt(self, client, mock_response):
        http = MagicMock()
        http.request = AsyncMock(return_value=mock_response(503, {"result": False}))

        response = await client._execute_with_retry(http, "get", "tags")

        assert response.status_code == 503
        assert http.request.call_count == MAX_RETRIES

    async def test_timeouts_exhaust_retries(self, client):
        http = MagicMock()
        http.request = AsyncMock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(RaindropClientError, match="Request failed after 3 retries"):
            await client._execute_with_retry(http, "get", "tags")
        assert http.request.call_count == MAX_RETRIES

    async def test_mixed_failures_back_off_in_order(self, client, mock_response, no_sleep):
        http = MagicMock()
        http.request = AsyncMock(side_effect=[
            httpx.ConnectError("refused"),
            mock_response(502, {"result": False}),
            mock_response(200, RESULT_OK),
        ])

        response = await client._execute_with_retry(http, "get", "tags")

        assert response.status_code == 200
        assert [c.args for c in no_sleep.await_args_list] == [(1.0,), (2.0,)]

    async def test_delete_with_body_passes_json(self, client, mock_response):
        http = MagicMock()
        http.request = AsyncMock(return_value=mock_response(200, RESULT_OK))

        await client._execute_with_retry(http, "delete", "tags", json={"tags": ["a"]})

        http.request.assert_called_once_with("DELETE", "tags", json={"tags": ["a"]})


# ---------------------------------------------------------------------------
# TestApiRequestContracts
# ---------------------------------------------------------------------------


class TestApiRequestContracts:
    """API request contract tests — verify exact HTTP method, path, params and body.

    See: https://developer.raindrop.io/
    """

    @pytest.fixture
    def ok(self, mock_client, mock_response):
        def _set(body):
            mock_client._request = AsyncMock(return_value=mock_response(200, body))
            return mock_client._request
        return _set

    # ---- Collections ----

    async def test_get_root_collections(self, mock_client, ok):
        request = ok(COLLECTION_LIST_RESPONSE)
        result = await mock_client.get_collections()
        request.assert_called_once_with("get", "collections")
        assert result["items"][1]["title"] == "Work"

    async def test_get_child_collections(self, mock_client, ok):
        request = ok(COLLECTION_LIST_RESPONSE)
        await mock_client.get_collections(root=False)
        request.assert_called_once_with("get", "collections/childrens")

    async def test_get_collection(self, mock_client, ok):
        request = ok(COLLECTION_SINGLE_RESPONSE)
        await mock_client.get_collection(42)
        request.assert_called_once_with("get", "collection/42")

    async def test_create_collection(self, mock_client, ok):
        request = ok(COLLECTION_SINGLE_RESPONSE)
        await mock_client.create_collection({"title": "New"})
        request.assert_called_once_with("post", "collection", json={"title": "New"})

    async def test_update_collection(self, mock_client, ok):
        request = ok(COLLECTION_SINGLE_RESPONSE)
        await mock_client.update_collection(42, {"public": True})
        request.assert_called_once_with("put", "collection/42", json={"public": True})

    async def test_delete_collection(self, mock_client, ok):
        request = ok(RESULT_OK)
        await mock_client.delete_collection(42)
        request.assert_called_once_with("delete", "collection/42")

    # ---- Raindrops ----

    async def test_get_raindrops_drops_none_params(self, mock_client, ok):
        request = ok(RAINDROP_LIST_RESPONSE)
        await mock_client.get_raindrops(0, {"page": 0, "perpage": 25, "sort": None, "search": None})
        request.assert_called_once_with("get", "raindrops/0", params={"page": 0, "perpage": 25})

    async def test_get_raindrop(self, mock_client, ok):
        request = ok(RAINDROP_SINGLE_RESPONSE)
        await mock_client.get_raindrop(1001)
        request.assert_called_once_with("get", "raindrop/1001")

    async def test_create_raindrop(self, mock_client, ok):
        request = ok(RAINDROP_SINGLE_RESPONSE)
        await mock_client.create_raindrop({"link": "https://example.com"})
        request.assert_called_once_with("post", "raindrop", json={"link": "https://example.com"})

    async def test_update_raindrop(self, mock_client, ok):
        request = ok(RAINDROP_SINGLE_RESPONSE)
        await mock_client.update_raindrop(1001, {"note": "x"})
        request.assert_called_once_with("put", "raindrop/1001", json={"note": "x"})

    async def test_delete_raindrop(self, mock_client, ok):
        request = ok(RESULT_OK)
        await mock_client.delete_raindrop(1001)
        request.assert_called_once_with("delete", "raindrop/1001")

    async def test_search_raindrops_merges_search_param(self, mock_client, ok):
        request = ok(RAINDROP_LIST_RESPONSE)
        await mock_client.search_raindrops(-1, "#python", {"page": 1, "sort": None})
        request.assert_called_once_with(
            "get", "raindrops/-1", params={"search": "#python", "page": 1}
        )

    # ---- Tags ----

    async def test_get_all_tags(self, mock_client, ok):
        request = ok(TAG_LIST_RESPONSE)
        await mock_client.get_tags()
        request.assert_called_once_with("get", "tags")

    async def test_get_collection_tags_including_zero(self, mock_client, ok):
        request = ok(TAG_LIST_RESPONSE)
        await mock_client.get_tags(0)
        request.assert_called_once_with("get", "tags/0")

    async def test_merge_tags(self, mock_client, ok):
        request = ok(RESULT_OK)
        await mock_client.merge_tags(["js", "javascript"], "JavaScript", 42)
        request.assert_called_once_with(
            "put", "tags/42", json={"tags": ["js", "javascript"], "replace": "JavaScript"}
        )

    async def test_delete_tags(self, mock_client, ok):
        request = ok(RESULT_OK)
        await mock_client.delete_tags(["old"])
        request.assert_called_once_with("delete", "tags", json={"tags": ["old"]})

    # ---- Highlights / import ----

    async def test_get_highlights(self, mock_client, ok):
        request = ok(HIGHLIGHT_LIST_RESPONSE)
        result = await mock_client.get_highlights(42, {"page": 0, "perpage": 25})
        request.assert_called_once_with(
            "get", "highlights/42", params={"page": 0, "perpage": 25}
        )
        assert result["items"][0]["title"] == "Example Article"

    async def test_get_all_highlights(self, mock_client, ok):
        request = ok(HIGHLIGHT_LIST_RESPONSE)
        await mock_client.get_highlights()
        request.assert_called_once_with("get", "highlights", params={})

    async def test_parse_url(self, mock_client, ok):
        request = ok(PARSE_URL_RESPONSE)
        result = await mock_client.parse_url("https://example.com/page")
        request.assert_called_once_with(
            "get", "import/url/parse", params={"url": "https://example.com/page"}
        )
        assert result["item"]["title"] == "Parsed Page"

    async def test_check_url_exists(self, mock_client, ok):
        request = ok(URL_EXISTS_RESPONSE)
        await mock_client.check_url_exists(["https://example.com/article"])
        request.assert_called_once_with(
            "post", "import/url/exists", json={"urls": ["https://example.com/article"]}
        )
