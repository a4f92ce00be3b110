"""Self-written stories (user-titled, no prompt)."""

from typing import Any

from .core import delete_row, insert_row, list_rows, self_written_stories_path

SELF_WRITTEN_FIELDS = ("story", "name")


def list_self_written_stories() -> list[dict[str, Any]]:
    return list_rows(self_written_stories_path())


def save_self_written_story(payload: dict[str, Any]) -> bool:
    """Store a self-written story. An exact duplicate is ignored; returns False then."""
    fields = {k: payload[k] for k in SELF_WRITTEN_FIELDS}
    return insert_row(self_written_stories_path(), fields, unique_on=SELF_WRITTEN_FIELDS)


def delete_self_written_story(story_id: int) -> bool:
    return delete_row(self_written_stories_path(), story_id)
