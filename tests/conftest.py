import pytest

from helpers import FakeStore
from story_desk.drafts import DraftCache
from story_desk.repository import StoryRepository


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def repository(store: FakeStore) -> StoryRepository:
    return StoryRepository(store)


@pytest.fixture
def cache_path(tmp_path):
    return tmp_path / "drafts.json"


@pytest.fixture
def cache(cache_path) -> DraftCache:
    return DraftCache(cache_path)
