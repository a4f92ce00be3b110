"""Story store clients — the boundary between the core and the record store.

The repository talks to any object matching the StoryStore protocol. The
six operation names and payload field names are the store's fixed wire
contract:

    list_stories()                      -> list of prompt story rows
    save_story(payload)                 payload: story, subject, verb,
                                                 object, setting, consequences
    delete_story(id)
    list_self_written_stories()         -> list of self-written rows
    save_self_written_story(payload)    payload: story, name
    delete_self_written_story(id)

Two implementations are provided:

    HttpStoryStore   — talks to the backend service over HTTP.
    LocalStoryStore  — calls backend.storage in-process; the caller must
                       run backend.storage.init_storage() first.

Every failure surfaces as StoreError. Deleting an id the store no longer
holds is a success.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from backend import storage

logger = logging.getLogger(__name__)

Row = dict[str, Any]


# ---------------------------------------------------------------------------
# Protocol — every store implementation must match these signatures
# ---------------------------------------------------------------------------

class StoryStore(Protocol):
    async def list_stories(self) -> list[Row]: ...

    async def save_story(self, payload: dict[str, str]) -> None: ...

    async def delete_story(self, id: int) -> None: ...

    async def list_self_written_stories(self) -> list[Row]: ...

    async def save_self_written_story(self, payload: dict[str, str]) -> None: ...

    async def delete_self_written_story(self, id: int) -> None: ...


# ---------------------------------------------------------------------------
# HttpStoryStore — the backend service's REST routes
# ---------------------------------------------------------------------------

class HttpStoryStore:
    """Async HTTP client for the story backend.

    Routes (relative to base_url):
      GET    /stories                     POST   /stories
      DELETE /stories/{id}
      GET    /self-written-stories        POST   /self-written-stories
      DELETE /self-written-stories/{id}

    Args:
        base_url: API root, e.g. "http://localhost:13013/api".
        timeout:  HTTP timeout in seconds. Defaults to 10.
    """

    def __init__(self, base_url: str, timeout: float = 10.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def _request(
        self, method: str, path: str, body: dict | None = None, missing_ok: bool = False
    ) -> Any:
        url = f"{self._base_url}{path}"
        logger.debug("store call %s %s", method, url)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.request(method, url, json=body)
                if missing_ok and resp.status_code == 404:
                    logger.debug("store %s %s: already absent", method, url)
                    return None
                resp.raise_for_status()
        except httpx.ConnectError as e:
            raise StoreError(f"Cannot connect to story backend at {self._base_url}") from e
        except httpx.HTTPStatusError as e:
            raise StoreError(
                f"Story backend returned HTTP {e.response.status_code} for {method} {path}"
            ) from e
        except httpx.TimeoutException as e:
            raise StoreError(f"Story backend timed out after {self._timeout}s") from e
        except httpx.HTTPError as e:
            raise StoreError(f"Story backend request failed for {method} {path}: {e}") from e

        try:
            return resp.json()
        except ValueError as e:
            raise StoreError(f"Story backend sent a non-JSON body for {method} {path}") from e

    async def _list(self, path: str) -> list[Row]:
        data = await self._request("GET", path)
        if not isinstance(data, list):
            raise StoreError(f"Unexpected response format from {path}: expected a list")
        return data

    async def list_stories(self) -> list[Row]:
        return await self._list("/stories")

    async def save_story(self, payload: dict[str, str]) -> None:
        await self._request("POST", "/stories", body=payload)

    async def delete_story(self, id: int) -> None:
        await self._request("DELETE", f"/stories/{id}", missing_ok=True)

    async def list_self_written_stories(self) -> list[Row]:
        return await self._list("/self-written-stories")

    async def save_self_written_story(self, payload: dict[str, str]) -> None:
        await self._request("POST", "/self-written-stories", body=payload)

    async def delete_self_written_story(self, id: int) -> None:
        await self._request("DELETE", f"/self-written-stories/{id}", missing_ok=True)


# ---------------------------------------------------------------------------
# LocalStoryStore — same contract, backed by backend.storage in-process
# ---------------------------------------------------------------------------

class LocalStoryStore:
    """Reads and writes the JSON story files directly. No network calls."""

    async def _call(self, name: str, *args: Any) -> Any:
        logger.debug("local store call %s", name)
        try:
            return getattr(storage, name)(*args)
        except (OSError, ValueError, KeyError, AssertionError) as e:
            raise StoreError(f"Local story store failed in {name}: {e}") from e

    async def list_stories(self) -> list[Row]:
        return await self._call("list_stories")

    async def save_story(self, payload: dict[str, str]) -> None:
        await self._call("save_story", payload)

    async def delete_story(self, id: int) -> None:
        await self._call("delete_story", id)

    async def list_self_written_stories(self) -> list[Row]:
        return await self._call("list_self_written_stories")

    async def save_self_written_story(self, payload: dict[str, str]) -> None:
        await self._call("save_self_written_story", payload)

    async def delete_self_written_story(self, id: int) -> None:
        await self._call("delete_self_written_story", id)


# ---------------------------------------------------------------------------
# StoreError — raised for all store connection and protocol failures
# ---------------------------------------------------------------------------

class StoreError(RuntimeError):
    """Raised when the story store cannot be reached or rejects a call."""
