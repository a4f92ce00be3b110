"""Story list state — the merged listing plus per-row disclosure.

Rows are identified by (kind, id). refresh() swaps the whole list for a
fresh listing; delete() only touches local state after the store has
confirmed the delete, so a failed delete leaves the row exactly where it
was.
"""

from __future__ import annotations

import logging

from story_desk.models import PromptStory, RecordKey, SelfWrittenStory, record_key
from story_desk.repository import StoryRepository
from story_desk.store import StoreError

logger = logging.getLogger(__name__)


class StoryListController:
    def __init__(self, repository: StoryRepository) -> None:
        self._repository = repository
        self.stories: list[PromptStory | SelfWrittenStory] = []
        self.expanded: set[RecordKey] = set()
        self.loading = False
        self.error: str | None = None

    async def refresh(self) -> None:
        """Reload the listing. On total failure the last list is kept and `error` set."""
        self.loading = True
        try:
            listing = await self._repository.list_unified()
        except StoreError as e:
            self.error = str(e)
            return
        finally:
            self.loading = False

        self.stories = list(listing.records)
        keys = {record_key(r) for r in self.stories}
        self.expanded &= keys
        if listing.failures:
            self.error = "Could not load " + ", ".join(
                f"{kind} stories ({msg})" for kind, msg in listing.failures.items()
            )
        else:
            self.error = None

    def toggle_expanded(self, key: RecordKey) -> None:
        if key in self.expanded:
            self.expanded.discard(key)
        else:
            self.expanded.add(key)

    def is_expanded(self, key: RecordKey) -> bool:
        return key in self.expanded

    async def delete(self, record: PromptStory | SelfWrittenStory) -> None:
        """Delete through the repository, then drop the row locally."""
        try:
            await self._repository.delete(record)
        except StoreError as e:
            self.error = str(e)
            raise

        key = record_key(record)
        self.stories = [s for s in self.stories if record_key(s) != key]
        self.expanded.discard(key)
        self.error = None
        logger.debug("removed %s:%d from story list", *key)
