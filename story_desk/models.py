"""Core domain models.

Two persisted story kinds exist side by side and never share a base class:

    PromptStory       — written against a generated five-part Prompt
    SelfWrittenStory  — written under a user-chosen title

Each carries a `kind` literal so a mixed list can be validated as the
tagged union `UnifiedStoryRecord` and dispatched on `record.kind`. Ids are
only unique within a kind, so list identity is the `(kind, id)` pair
returned by `record_key()`.

Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

StoryKind = Literal["prompt", "self"]
RecordKey = tuple[str, int]


def _as_utc(value: datetime) -> datetime:
    # Naive timestamps (e.g. SQLite "YYYY-MM-DD HH:MM:SS") are UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Prompt(BaseModel):
    """A generated writing cue. Immutable; regenerate to get a new one."""

    model_config = ConfigDict(frozen=True)

    subject: str
    verb: str
    object: str
    setting: str
    consequences: str

    def to_payload(self, story: str) -> dict[str, str]:
        """Build the `save_story` wire payload for a story written to this prompt."""
        return {"story": story, **self.model_dump()}

    def __str__(self) -> str:
        return f"A {self.subject} {self.verb} {self.object} {self.setting} {self.consequences}"


class PromptStory(BaseModel):
    """A stored story written in response to a prompt."""

    kind: Literal["prompt"] = "prompt"
    id: int
    story: str
    subject: str
    verb: str
    # Older store builds emit `object_`
    object: str = Field(validation_alias=AliasChoices("object", "object_"))
    setting: str
    consequences: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @property
    def prompt(self) -> Prompt:
        return Prompt(
            subject=self.subject, verb=self.verb, object=self.object,
            setting=self.setting, consequences=self.consequences,
        )


class SelfWrittenStory(BaseModel):
    """A stored story written under a user-supplied title."""

    kind: Literal["self"] = "self"
    id: int
    story: str
    name: str
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def created_at_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


UnifiedStoryRecord = Annotated[
    Union[PromptStory, SelfWrittenStory], Field(discriminator="kind")
]


def record_key(record: PromptStory | SelfWrittenStory) -> RecordKey:
    """List identity of a record: ids repeat across kinds, so pair them."""
    return (record.kind, record.id)


class UnifiedListing(BaseModel):
    """Both kinds merged newest first, plus the kinds whose fetch failed."""

    records: list[UnifiedStoryRecord] = Field(default_factory=list)
    failures: dict[str, str] = Field(default_factory=dict)

    @property
    def complete(self) -> bool:
        return not self.failures
