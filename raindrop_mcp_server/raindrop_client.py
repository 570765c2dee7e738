from __future__ import annotations

import asyncio
import os
import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .utils.titles import clean_titles_in_data


logger = logging.getLogger("raindrop_mcp_server.http")

DEFAULT_BASE_URL = "https://api.raindrop.io/rest/v1/"

MAX_RETRIES = 3
RETRY_DELAYS = [1.0, 2.0, 4.0]


def _redact_headers(headers: Dict[str, Any]) -> Dict[str, Any]:
    redacted = {}
    for k, v in headers.items():
        if str(k).lower() == "authorization":
            redacted[k] = "[REDACTED]"
        else:
            redacted[k] = v
    return redacted


def _is_retryable(status_code: int) -> bool:
    """Rate limits and server errors are retried; other statuses are final."""
    return status_code == 429 or status_code >= 500


def _drop_none(params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {k: v for k, v in (params or {}).items() if v is not None}


def _tags_path(collection_id: Optional[int]) -> str:
    return f"tags/{collection_id}" if collection_id is not None else "tags"


class RaindropClientError(Exception):
    """Represents an error when communicating with the Raindrop.io API."""


@dataclass
class RaindropClient:
    """Minimal async client for the Raindrop.io REST API.

    Uses per-request httpx.AsyncClient with automatic retry on transient errors.
    Every successful payload has its titles cleaned before it is returned.
    """

    base_url: str
    token: str

    @classmethod
    def from_env(cls) -> "RaindropClient":
        """Create a client using environment variables loaded via dotenv.

        Required env vars:
        - RAINDROP_TOKEN
        Optional:
        - RAINDROP_BASE_URL (defaults to the public REST v1 endpoint)
        """
        base_url = os.getenv("RAINDROP_BASE_URL", DEFAULT_BASE_URL)
        token = os.getenv("RAINDROP_TOKEN")

        if not token:
            raise RaindropClientError(
                "Missing RAINDROP_TOKEN in environment. "
                "Set it to your Raindrop.io API token."
            )

        if not base_url.endswith("/"):
            base_url = base_url + "/"

        return cls(base_url=base_url, token=token)

    def _headers(self) -> dict:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute HTTP request with per-request client and retry logic."""
        async with httpx.AsyncClient(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=httpx.Timeout(30.0, connect=10.0),
        ) as client:
            logger.debug(
                "HTTP %s %s headers=%s",
                method.upper(), path, _redact_headers(dict(client.headers)),
            )
            return await self._execute_with_retry(client, method, path, **kwargs)

    async def _execute_with_retry(
        self, client: httpx.AsyncClient, method: str, path: str, **kwargs
    ) -> httpx.Response:
        verb = method.upper()
        last_error: Exception | None = None
        for attempt in range(1, MAX_RETRIES + 1):
            final = attempt == MAX_RETRIES
            started = time.perf_counter()
            try:
                response = await client.request(verb, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as e:
                last_error = e
                if not final:
                    await self._backoff(verb, path, type(e).__name__, attempt)
                continue

            logger.debug(
                "HTTP %s %s status=%s elapsed_ms=%.2f",
                verb, path, response.status_code,
                (time.perf_counter() - started) * 1000.0,
            )
            if final or not _is_retryable(response.status_code):
                return response
            await self._backoff(verb, path, f"status {response.status_code}", attempt)

        raise RaindropClientError(f"Request failed after {MAX_RETRIES} retries: {last_error}")

    async def _backoff(self, verb: str, path: str, reason: str, attempt: int) -> None:
        logger.warning(
            "Retrying %s %s (%s, attempt %d/%d)", verb, path, reason, attempt, MAX_RETRIES
        )
        await asyncio.sleep(RETRY_DELAYS[attempt - 1])

    def _handle_response(self, response: httpx.Response) -> Any:
        """Decode a response, raise on API errors, clean titles on success."""
        try:
            data = response.json()
        except ValueError:
            raise RaindropClientError(
                f"Failed to parse JSON response: {response.status_code} {response.reason_phrase}"
            ) from None

        failed = isinstance(data, dict) and data.get("result") is False
        if response.status_code >= 400 or failed:
            error = data if isinstance(data, dict) else {}
            raise RaindropClientError(
                error.get("errorMessage")
                or error.get("error")
                or f"API request failed: {response.status_code}"
            )

        return clean_titles_in_data(data)

    async def _call(self, method: str, path: str, **kwargs) -> Any:
        response = await self._request(method, path, **kwargs)
        return self._handle_response(response)

    # ----------------------------- Collections -----------------------------

    async def get_collections(self, root: bool = True) -> Dict[str, Any]:
        """List root collections, or nested (child) collections when root=False."""
        return await self._call("get", "collections" if root else "collections/childrens")

    async def get_collection(self, collection_id: int) -> Dict[str, Any]:
        return await self._call("get", f"collection/{collection_id}")

    async def create_collection(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("post", "collection", json=data)

    async def update_collection(self, collection_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("put", f"collection/{collection_id}", json=data)

    async def delete_collection(self, collection_id: int) -> Dict[str, Any]:
        """Remove a collection and its descendants; raindrops move to Trash."""
        return await self._call("delete", f"collection/{collection_id}")

    # ----------------------------- Raindrops -----------------------------

    async def get_raindrops(
        self,
        collection_id: int,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """List raindrops in a collection (0 = all, -1 = Unsorted, -99 = Trash)."""
        return await self._call(
            "get", f"raindrops/{collection_id}", params=_drop_none(params)
        )

    async def get_raindrop(self, raindrop_id: int) -> Dict[str, Any]:
        return await self._call("get", f"raindrop/{raindrop_id}")

    async def create_raindrop(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("post", "raindrop", json=data)

    async def update_raindrop(self, raindrop_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("put", f"raindrop/{raindrop_id}", json=data)

    async def delete_raindrop(self, raindrop_id: int) -> Dict[str, Any]:
        """Move a raindrop to Trash, or delete it permanently if already there."""
        return await self._call("delete", f"raindrop/{raindrop_id}")

    async def search_raindrops(
        self,
        collection_id: int,
        search: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        query = {"search": search, **(params or {})}
        return await self._call(
            "get", f"raindrops/{collection_id}", params=_drop_none(query)
        )

    # ----------------------------- Tags -----------------------------

    async def get_tags(self, collection_id: Optional[int] = None) -> Dict[str, Any]:
        return await self._call("get", _tags_path(collection_id))

    async def merge_tags(
        self,
        tags: List[str],
        new_tag: str,
        collection_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Rename one tag or merge several into ``new_tag``."""
        return await self._call(
            "put", _tags_path(collection_id), json={"tags": tags, "replace": new_tag}
        )

    async def delete_tags(
        self,
        tags: List[str],
        collection_id: Optional[int] = None,
    ) -> Dict[str, Any]:
        return await self._call("delete", _tags_path(collection_id), json={"tags": tags})

    # ----------------------------- Highlights -----------------------------

    async def get_highlights(
        self,
        collection_id: Optional[int] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        path = f"highlights/{collection_id}" if collection_id is not None else "highlights"
        return await self._call("get", path, params=_drop_none(params))

    # ----------------------------- Import -----------------------------

    async def parse_url(self, url: str) -> Dict[str, Any]:
        """Extract metadata (title, excerpt, cover, ...) from a URL."""
        return await self._call("get", "import/url/parse", params={"url": url})

    async def check_url_exists(self, urls: List[str]) -> Dict[str, Any]:
        """Check which of ``urls`` are already saved in the account."""
        return await self._call("post", "import/url/exists", json={"urls": urls})
