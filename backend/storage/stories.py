"""Prompt-originated stories (insert-or-ignore on the full content)."""

from typing import Any

from .core import delete_row, insert_row, list_rows, stories_path

STORY_FIELDS = ("story", "subject", "verb", "object", "setting", "consequences")


def list_stories() -> list[dict[str, Any]]:
    return list_rows(stories_path())


def save_story(payload: dict[str, Any]) -> bool:
    """Store a prompt story. An exact duplicate is ignored; returns False then."""
    fields = {k: payload[k] for k in STORY_FIELDS}
    return insert_row(stories_path(), fields, unique_on=STORY_FIELDS)


def delete_story(story_id: int) -> bool:
    return delete_row(stories_path(), story_id)
