"""Pydantic request models for API endpoints."""

from pydantic import BaseModel


class StoryPayload(BaseModel):
    story: str
    subject: str
    verb: str
    object: str
    setting: str
    consequences: str


class SelfWrittenStoryPayload(BaseModel):
    story: str
    name: str
