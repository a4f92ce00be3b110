"""Tests for StoryListController: refresh, disclosure state, deletion."""

import pytest

from story_desk.store import StoreError
from story_desk.story_list import StoryListController


@pytest.fixture
def controller(repository) -> StoryListController:
    return StoryListController(repository)


def _keys(controller):
    return [(s.kind, s.id) for s in controller.stories]


async def test_refresh_loads_unified_list(store, controller):
    store.add_prompt(created_at="2024-01-01T00:00:00Z")
    store.add_prompt(created_at="2024-01-03T00:00:00Z")
    store.add_self(created_at="2024-01-02T00:00:00Z")

    await controller.refresh()

    assert _keys(controller) == [("prompt", 2), ("self", 1), ("prompt", 1)]
    assert controller.loading is False
    assert controller.error is None


async def test_refresh_replaces_wholesale(store, controller):
    store.add_prompt()
    await controller.refresh()
    store.prompt_rows.clear()
    store.add_self()
    await controller.refresh()
    assert _keys(controller) == [("self", 1)]


async def test_loading_flag_during_fetch(store, controller):
    seen = []
    original = store.list_stories

    async def probe():
        seen.append(controller.loading)
        return await original()

    store.list_stories = probe
    await controller.refresh()
    assert seen == [True]
    assert controller.loading is False


async def test_refresh_total_failure_keeps_last_list(store, controller):
    store.add_prompt()
    await controller.refresh()
    store.fail.update({"list_stories", "list_self_written_stories"})

    await controller.refresh()

    assert _keys(controller) == [("prompt", 1)]
    assert "Could not list any stories" in controller.error
    assert controller.loading is False


async def test_refresh_partial_failure_shows_rest(store, controller):
    store.add_prompt()
    store.add_self()
    store.fail.add("list_stories")

    await controller.refresh()

    assert _keys(controller) == [("self", 1)]
    assert controller.error.startswith("Could not load prompt stories")


async def test_refresh_clears_error_on_success(store, controller):
    store.fail.add("list_stories")
    await controller.refresh()
    assert controller.error
    store.fail.clear()
    await controller.refresh()
    assert controller.error is None


# ── Disclosure ───────────────────────────────────────────


def test_toggle_expanded(controller):
    controller.toggle_expanded(("prompt", 1))
    assert controller.is_expanded(("prompt", 1))
    assert not controller.is_expanded(("self", 1))
    controller.toggle_expanded(("prompt", 1))
    assert not controller.is_expanded(("prompt", 1))


async def test_same_id_different_kind_expands_separately(store, controller):
    store.add_prompt()
    store.add_self()
    await controller.refresh()
    controller.toggle_expanded(("self", 1))
    assert controller.expanded == {("self", 1)}


async def test_refresh_prunes_vanished_expanded_rows(store, controller):
    store.add_prompt()
    store.add_self()
    await controller.refresh()
    controller.toggle_expanded(("prompt", 1))
    controller.toggle_expanded(("self", 1))
    store.self_rows.clear()
    await controller.refresh()
    assert controller.expanded == {("prompt", 1)}


# ── Deletion ─────────────────────────────────────────────


async def test_delete_removes_exactly_one_row(store, controller):
    store.add_prompt()
    store.add_self()
    store.add_self()
    await controller.refresh()
    for key in [("prompt", 1), ("self", 1), ("self", 2)]:
        controller.toggle_expanded(key)
    target = next(s for s in controller.stories if (s.kind, s.id) == ("prompt", 1))

    await controller.delete(target)

    assert sorted(_keys(controller)) == [("self", 1), ("self", 2)]
    assert controller.expanded == {("self", 1), ("self", 2)}
    assert store.prompt_rows == []
    assert len(store.self_rows) == 2


async def test_delete_failure_leaves_row(store, controller):
    store.add_self()
    await controller.refresh()
    controller.toggle_expanded(("self", 1))
    store.fail.add("delete_self_written_story")

    with pytest.raises(StoreError):
        await controller.delete(controller.stories[0])

    assert _keys(controller) == [("self", 1)]
    assert controller.expanded == {("self", 1)}
    assert controller.error
    assert len(store.self_rows) == 1


async def test_delete_twice_is_harmless(store, controller):
    store.add_prompt()
    store.add_self()
    await controller.refresh()
    record = controller.stories[0]

    await controller.delete(record)
    after_first = list(controller.stories)
    await controller.delete(record)

    assert controller.stories == after_first
    assert len(after_first) == 1


async def test_delete_retry_clears_error(store, controller):
    store.add_prompt()
    await controller.refresh()
    record = controller.stories[0]
    store.fail.add("delete_story")

    with pytest.raises(StoreError):
        await controller.delete(record)
    assert controller.error

    store.fail.clear()
    await controller.delete(record)

    assert controller.stories == []
    assert controller.error is None
