"""Test helpers: an in-memory StoryStore with failure injection, sample data."""

from datetime import datetime, timedelta, timezone
from typing import Any

from story_desk.models import Prompt
from story_desk.store import StoreError

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


def words(n: int, word: str = "word") -> str:
    return " ".join([word] * n)


PROMPT = Prompt(
    subject="weary lighthouse keeper",
    verb="abandons",
    object="a brass compass",
    setting="on a fog-bound island",
    consequences="and the sea forgets its way home",
)


class FakeStore:
    """In-memory StoryStore. Put operation names in `fail` to make them raise."""

    def __init__(self) -> None:
        self.prompt_rows: list[dict[str, Any]] = []
        self.self_rows: list[dict[str, Any]] = []
        self.fail: set[str] = set()
        self.calls: list[str] = []
        self._next_id = {"prompt": 1, "self": 1}
        self._tick = 0

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if op in self.fail:
            raise StoreError(f"{op} unavailable")

    def _now(self) -> str:
        self._tick += 1
        return (_EPOCH + timedelta(minutes=self._tick)).isoformat()

    def add_prompt(self, created_at: str | None = None, **fields: str) -> dict[str, Any]:
        row = {
            "id": self._next_id["prompt"], "story": "text", **PROMPT.model_dump(),
            **fields, "created_at": created_at or self._now(),
        }
        self._next_id["prompt"] += 1
        self.prompt_rows.append(row)
        return row

    def add_self(self, created_at: str | None = None, **fields: str) -> dict[str, Any]:
        row = {
            "id": self._next_id["self"], "story": "text", "name": "Untitled",
            **fields, "created_at": created_at or self._now(),
        }
        self._next_id["self"] += 1
        self.self_rows.append(row)
        return row

    async def list_stories(self) -> list[dict[str, Any]]:
        self._check("list_stories")
        return [dict(r) for r in self.prompt_rows]

    async def save_story(self, payload: dict[str, str]) -> None:
        self._check("save_story")
        self.add_prompt(**payload)

    async def delete_story(self, id: int) -> None:
        self._check("delete_story")
        self.prompt_rows = [r for r in self.prompt_rows if r["id"] != id]

    async def list_self_written_stories(self) -> list[dict[str, Any]]:
        self._check("list_self_written_stories")
        return [dict(r) for r in self.self_rows]

    async def save_self_written_story(self, payload: dict[str, str]) -> None:
        self._check("save_self_written_story")
        self.add_self(**payload)

    async def delete_self_written_story(self, id: int) -> None:
        self._check("delete_self_written_story")
        self.self_rows = [r for r in self.self_rows if r["id"] != id]


