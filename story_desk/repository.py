"""Story repository — typed CRUD over a StoryStore, one trio per kind.

The store's save operations return nothing, so create_* re-reads the
kind's list and returns the newest row carrying the submitted content.

list_unified() fetches both kinds concurrently and merges them newest
first. A failure of one kind does not hide the other: the listing lists
what it could fetch and names the failed kinds in `failures`. Only when
both fetches fail does it raise.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import ValidationError

from story_desk.models import (
    Prompt,
    PromptStory,
    SelfWrittenStory,
    UnifiedListing,
)
from story_desk.store import StoreError, StoryStore

logger = logging.getLogger(__name__)


class StoryRepository:
    def __init__(self, store: StoryStore) -> None:
        self._store = store

    # ------------------------------------------------------------------
    # Prompt stories
    # ------------------------------------------------------------------

    async def list_prompt(self) -> list[PromptStory]:
        rows = await self._call("list_stories")
        return _parse_rows(PromptStory, rows)

    async def create_prompt(self, prompt: Prompt, story: str) -> PromptStory:
        payload = prompt.to_payload(story)
        await self._call("save_story", payload)
        created = _find_saved(await self.list_prompt(), payload)
        logger.info("saved prompt story id=%d", created.id)
        return created

    async def delete_prompt(self, id: int) -> None:
        await self._call("delete_story", id)

    # ------------------------------------------------------------------
    # Self-written stories
    # ------------------------------------------------------------------

    async def list_self(self) -> list[SelfWrittenStory]:
        rows = await self._call("list_self_written_stories")
        return _parse_rows(SelfWrittenStory, rows)

    async def create_self(self, name: str, story: str) -> SelfWrittenStory:
        payload = {"story": story, "name": name}
        await self._call("save_self_written_story", payload)
        created = _find_saved(await self.list_self(), payload)
        logger.info("saved self-written story id=%d", created.id)
        return created

    async def delete_self(self, id: int) -> None:
        await self._call("delete_self_written_story", id)

    # ------------------------------------------------------------------
    # Both kinds
    # ------------------------------------------------------------------

    async def delete(self, record: PromptStory | SelfWrittenStory) -> None:
        """Delete a record through the operation matching its kind."""
        if record.kind == "prompt":
            await self.delete_prompt(record.id)
        else:
            await self.delete_self(record.id)

    async def list_unified(self) -> UnifiedListing:
        """Both kinds, newest first. Raises StoreError only if both fetches fail."""
        prompt_result, self_result = await asyncio.gather(
            self.list_prompt(), self.list_self(), return_exceptions=True
        )

        records: list[PromptStory | SelfWrittenStory] = []
        failures: dict[str, str] = {}
        for kind, result in (("prompt", prompt_result), ("self", self_result)):
            if isinstance(result, StoreError):
                failures[kind] = str(result)
            elif isinstance(result, BaseException):
                raise result
            else:
                records.extend(result)

        if len(failures) == 2:
            raise StoreError(
                f"Could not list any stories: prompt: {failures['prompt']}; self: {failures['self']}"
            )
        if failures:
            logger.warning("partial story listing, failed kinds: %s", ", ".join(failures))

        # sorted() is stable: equal timestamps keep fetch order
        records = sorted(records, key=lambda r: r.created_at, reverse=True)
        return UnifiedListing(records=records, failures=failures)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _call(self, operation: str, *args: Any) -> Any:
        try:
            return await getattr(self._store, operation)(*args)
        except StoreError as e:
            logger.warning("store %s failed: %s", operation, e)
            raise


def _parse_rows(model: type, rows: list[dict[str, Any]]) -> list:
    try:
        return [model.model_validate(r) for r in rows]
    except ValidationError as e:
        logger.warning("store returned malformed %s rows: %s", model.__name__, e)
        raise StoreError(f"Malformed {model.__name__} row from store") from e


def _find_saved(records: list, payload: dict[str, str]):
    """Newest record whose content fields equal the payload."""
    matches = [r for r in records if all(getattr(r, k) == v for k, v in payload.items())]
    if not matches:
        raise StoreError("Saved story not found in store after create")
    return max(matches, key=lambda r: (r.created_at, r.id))
