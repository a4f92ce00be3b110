"""Create demo stories for development/testing."""

from backend import storage

DEMO_PROMPT_STORIES = [
    {
        "story": "The lamp kept burning long after the keeper had gone. "
        "Ships still turned toward it, though none of them could say why.",
        "subject": "weary lighthouse keeper",
        "verb": "abandons",
        "object": "a brass compass",
        "setting": "on a fog-bound island",
        "consequences": "and the sea forgets its way home",
    },
    {
        "story": "Every clock in the village stopped at noon. The baker was the "
        "first to notice, and the last to admit it was her fault.",
        "subject": "stubborn baker",
        "verb": "steals",
        "object": "the town clock's key",
        "setting": "in a village without shadows",
        "consequences": "so nobody ages for a year",
    },
]

DEMO_SELF_WRITTEN_STORIES = [
    {
        "name": "The Last Tram",
        "story": "The tram came at 3 a.m., lit from the inside like a lantern. "
        "Nobody got off. Nobody ever got off.",
    },
]


def create_demo_data() -> None:
    """Wipe existing stories and create fresh demo data."""
    for path in (storage.stories_path(), storage.self_written_stories_path()):
        if path.exists():
            path.unlink()

    for payload in DEMO_PROMPT_STORIES:
        storage.save_story(payload)
    for payload in DEMO_SELF_WRITTEN_STORIES:
        storage.save_self_written_story(payload)
