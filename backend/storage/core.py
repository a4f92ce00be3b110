"""Storage initialization, path helpers, and the shared row-table helpers.

Each story kind lives in its own JSON document:

    {"next_id": 3, "rows": [{"id": 1, ...}, {"id": 2, ...}]}

`next_id` only ever grows, so an id is never handed out twice within a
kind even after its row is deleted.
"""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

_data_dir: Path | None = None


def init_storage(data_dir: Path) -> None:
    global _data_dir
    _data_dir = data_dir
    _data_dir.mkdir(parents=True, exist_ok=True)


def data_dir() -> Path:
    assert _data_dir is not None, "Call init_storage() before using storage"
    return _data_dir


def stories_path() -> Path:
    return data_dir() / "stories.json"


def self_written_stories_path() -> Path:
    return data_dir() / "self-written-stories.json"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def read_table(path: Path) -> dict[str, Any]:
    """Load a row table. Returns an empty table if the file is missing."""
    if not path.is_file():
        return {"next_id": 1, "rows": []}
    table = json.loads(path.read_text())
    table.setdefault("next_id", 1)
    table.setdefault("rows", [])
    return table


def write_table(path: Path, table: dict[str, Any]) -> None:
    path.write_text(json.dumps(table, indent=2))


def list_rows(path: Path) -> list[dict[str, Any]]:
    """All rows, newest first (created_at desc, then id desc)."""
    rows = read_table(path)["rows"]
    return sorted(rows, key=lambda r: (r["created_at"], r["id"]), reverse=True)


def insert_row(path: Path, fields: dict[str, Any], unique_on: tuple[str, ...]) -> bool:
    """Insert a row unless one with identical `unique_on` values exists.

    Returns True if a row was written.
    """
    table = read_table(path)
    for row in table["rows"]:
        if all(row.get(k) == fields[k] for k in unique_on):
            return False
    row = {"id": table["next_id"], **fields, "created_at": now_iso()}
    table["rows"].append(row)
    table["next_id"] += 1
    write_table(path, table)
    return True


def delete_row(path: Path, row_id: int) -> bool:
    """Remove a row by id. Returns False if no such row exists."""
    table = read_table(path)
    kept = [r for r in table["rows"] if r["id"] != row_id]
    if len(kept) == len(table["rows"]):
        return False
    table["rows"] = kept
    write_table(path, table)
    return True
