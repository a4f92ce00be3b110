"""FastAPI API endpoints under /api.

Endpoint groups: health, prompt-originated stories (/stories) and
self-written stories (/self-written-stories). Each group exposes
list (GET), save (POST) and delete (DELETE /{id}).
"""

from fastapi import APIRouter

from .health import router as health_router
from .stories import router as stories_router

router = APIRouter()
router.include_router(health_router)
router.include_router(stories_router)
