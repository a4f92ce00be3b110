"""Story Desk command line.

    python -m story_desk prompt
    python -m story_desk write --mode prompt story.txt
    python -m story_desk write --mode self --title "The Last Tram" < story.txt
    python -m story_desk draft --mode self [--discard]
    python -m story_desk list [--expand prompt:3 ...]
    python -m story_desk delete self 2

--local skips the HTTP backend and reads/writes DATA_DIR directly.

Exit status: 0 ok, 1 store failure, 2 submission rejected, 3 bad setting.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from backend import storage
from story_desk.config import Settings, load_settings
from story_desk.drafts import DraftCache
from story_desk.models import PromptStory, record_key
from story_desk.prompts import default_generator
from story_desk.repository import StoryRepository
from story_desk.session import PromptSession, SelfWrittenSession, SubmissionRejected
from story_desk.store import HttpStoryStore, LocalStoryStore, StoreError
from story_desk.story_list import StoryListController

EXIT_STORE_ERROR = 1
EXIT_REJECTED = 2
EXIT_CONFIG_ERROR = 3


def _build_repository(settings: Settings, local: bool) -> StoryRepository:
    if local:
        storage.init_storage(settings.data_dir)
        return StoryRepository(LocalStoryStore())
    return StoryRepository(HttpStoryStore(settings.backend_url, timeout=settings.timeout))


def _build_session(args, settings: Settings, repository: StoryRepository):
    cache = DraftCache(settings.drafts_file)
    if args.mode == "prompt":
        return PromptSession(repository, cache, default_generator(), settings.min_words)
    return SelfWrittenSession(repository, cache, settings.min_words)


def _parse_key(text: str) -> tuple[str, int]:
    kind, _, id_text = text.partition(":")
    if kind not in ("prompt", "self") or not id_text.isdigit():
        raise argparse.ArgumentTypeError(f"expected KIND:ID, e.g. prompt:3 (got {text!r})")
    return (kind, int(id_text))


# ── Commands ─────────────────────────────────────────────


async def cmd_prompt(args, settings: Settings) -> int:
    print(default_generator().generate())
    return 0


async def cmd_write(args, settings: Settings) -> int:
    repository = _build_repository(settings, args.local)
    session = _build_session(args, settings, repository)
    text = args.file.read_text() if args.file else sys.stdin.read()

    session.start()
    if isinstance(session, SelfWrittenSession) and args.title is not None:
        session.set_title(args.title)
    session.set_story(text)

    if isinstance(session, PromptSession):
        print(f"Prompt: {session.prompt}")
    print(f"Words: {session.word_count}/{session.min_words}")

    try:
        record = await session.submit()
    except SubmissionRejected as e:
        print(f"Not submitted, draft kept: {e}", file=sys.stderr)
        return EXIT_REJECTED
    except StoreError as e:
        print(f"Submit failed, draft kept: {e}", file=sys.stderr)
        return EXIT_STORE_ERROR
    print(f"Saved {record.kind} story #{record.id}")
    return 0


async def cmd_draft(args, settings: Settings) -> int:
    session = _build_session(args, settings, _build_repository(settings, args.local))
    if args.discard:
        session.discard()
        print(f"Discarded {args.mode} draft")
        return 0
    if isinstance(session, SelfWrittenSession):
        print(f"Title: {session.title}")
    print(f"Words: {session.word_count}/{session.min_words}")
    print(session.story)
    return 0


async def cmd_list(args, settings: Settings) -> int:
    controller = StoryListController(_build_repository(settings, args.local))
    await controller.refresh()
    for key in args.expand or []:
        controller.toggle_expanded(key)

    for record in controller.stories:
        key = record_key(record)
        marker = "▾" if controller.is_expanded(key) else "▸"
        if isinstance(record, PromptStory):
            label = str(record.prompt)
        else:
            label = record.name
        print(f"{marker} {record.kind}:{record.id}  {record.created_at.isoformat()}  {label}")
        if controller.is_expanded(key):
            print(record.story)
            print()

    if controller.error:
        print(f"Error: {controller.error}", file=sys.stderr)
        return EXIT_STORE_ERROR
    return 0


async def cmd_delete(args, settings: Settings) -> int:
    repository = _build_repository(settings, args.local)
    try:
        if args.kind == "prompt":
            await repository.delete_prompt(args.id)
        else:
            await repository.delete_self(args.id)
    except StoreError as e:
        print(f"Delete failed: {e}", file=sys.stderr)
        return EXIT_STORE_ERROR
    print(f"Deleted {args.kind}:{args.id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="story_desk", description="Story Desk")
    parser.add_argument("--local", action="store_true",
                        help="Use DATA_DIR directly instead of the HTTP backend")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("prompt", help="Print a fresh writing prompt")
    p.set_defaults(func=cmd_prompt)

    p = sub.add_parser("write", help="Draft a story and submit it if it passes the gate")
    p.add_argument("--mode", choices=["prompt", "self"], default="prompt")
    p.add_argument("--title", default=None, help="Title (self mode)")
    p.add_argument("file", nargs="?", type=Path, default=None,
                   help="Story text file (default: stdin)")
    p.set_defaults(func=cmd_write)

    p = sub.add_parser("draft", help="Show or discard the cached draft")
    p.add_argument("--mode", choices=["prompt", "self"], default="prompt")
    p.add_argument("--discard", action="store_true")
    p.set_defaults(func=cmd_draft)

    p = sub.add_parser("list", help="List all stories, newest first")
    p.add_argument("--expand", nargs="*", type=_parse_key, metavar="KIND:ID",
                   help="Show the full text of these stories")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("delete", help="Delete one story")
    p.add_argument("kind", choices=["prompt", "self"])
    p.add_argument("id", type=int)
    p.set_defaults(func=cmd_delete)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"Invalid setting {field}: {err['msg']}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    logging.basicConfig(level=settings.log_level)
    return asyncio.run(args.func(args, settings))


if __name__ == "__main__":
    sys.exit(main())
