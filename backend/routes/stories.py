"""Story store endpoints: one list/save/delete trio per story kind."""

from fastapi import APIRouter

from backend import storage

from .models import SelfWrittenStoryPayload, StoryPayload

router = APIRouter()


@router.get("/stories")
async def list_stories():
    """List prompt-originated stories, newest first."""
    return storage.list_stories()


@router.post("/stories")
async def save_story(body: StoryPayload):
    """Save a prompt-originated story (exact duplicates are ignored)."""
    inserted = storage.save_story(body.model_dump())
    return {"ok": True, "inserted": inserted}


@router.delete("/stories/{story_id}")
async def delete_story(story_id: int):
    """Delete a prompt-originated story. A missing id is not an error."""
    return {"ok": True, "deleted": storage.delete_story(story_id)}


@router.get("/self-written-stories")
async def list_self_written_stories():
    """List self-written stories, newest first."""
    return storage.list_self_written_stories()


@router.post("/self-written-stories")
async def save_self_written_story(body: SelfWrittenStoryPayload):
    """Save a self-written story (exact duplicates are ignored)."""
    inserted = storage.save_self_written_story(body.model_dump())
    return {"ok": True, "inserted": inserted}


@router.delete("/self-written-stories/{story_id}")
async def delete_self_written_story(story_id: int):
    """Delete a self-written story. A missing id is not an error."""
    return {"ok": True, "deleted": storage.delete_self_written_story(story_id)}
