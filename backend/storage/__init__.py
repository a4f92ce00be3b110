"""File-based JSON storage for finished stories.

Data layout:
  data/
    stories.json                Prompt-originated stories
    self-written-stories.json   Self-written (user-titled) stories

Each file holds {"next_id": int, "rows": [...]}. Rows carry an integer `id`
unique within their file and a `created_at` ISO-8601 UTC timestamp. Both
are assigned here on insert and never change.

Insert-or-ignore: saving a story whose content fields exactly match an
existing row of the same kind writes nothing.

Deleting an id that is not present is not an error; the delete helpers
return False.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    init_storage,
    self_written_stories_path,
    stories_path,
)

from .stories import (  # noqa: F401
    STORY_FIELDS,
    delete_story,
    list_stories,
    save_story,
)

from .self_written import (  # noqa: F401
    SELF_WRITTEN_FIELDS,
    delete_self_written_story,
    list_self_written_stories,
    save_self_written_story,
)
