"""Draft sessions — one writing session per mode, bound to a DraftSlot.

State machine:

    IDLE ──start()──▶ DRAFTING ──submit()──▶ SUBMITTING
                         ▲                       │
                         ├── store error ────────┤  fields and cache untouched
                         └── saved ──────────────┘  slot cleared

Submission gate:
    prompt mode  — a prompt is bound and the story has ≥ min_words words
    self mode    — the title is non-blank and the story has ≥ min_words words

While a submit is in flight the gate is closed, so one session never has
two creates outstanding.

Requesting a new prompt only swaps the bound prompt. The story draft is
keyed by field, not by prompt, and carries over.
"""

from __future__ import annotations

import enum
import logging
from typing import Callable

from story_desk.drafts import DraftCache, DraftSlot
from story_desk.models import Prompt, PromptStory, SelfWrittenStory
from story_desk.repository import StoryRepository
from story_desk.store import StoreError

logger = logging.getLogger(__name__)

MIN_WORDS = 500

PROMPT_SLOT = "prompt"
SELF_SLOT = "self"


def word_count(text: str) -> int:
    """Whitespace-separated words in text; blank text has zero."""
    return len(text.split())


class SessionState(str, enum.Enum):
    IDLE = "idle"
    DRAFTING = "drafting"
    SUBMITTING = "submitting"


class SubmissionRejected(ValueError):
    """Raised when submit() is called while the submission gate is closed."""


class _DraftSession:
    """State and slot handling shared by both writing modes."""

    def __init__(
        self,
        repository: StoryRepository,
        cache: DraftCache,
        slot: str,
        fields: tuple[str, ...],
        min_words: int = MIN_WORDS,
    ) -> None:
        self._repository = repository
        self._slot = DraftSlot(cache, slot, fields)
        self.min_words = min_words
        self.state = SessionState.IDLE

    @property
    def story(self) -> str:
        return self._slot.get("story")

    def set_story(self, text: str) -> None:
        self._slot.set("story", text)

    @property
    def word_count(self) -> int:
        return word_count(self.story)

    def discard(self) -> None:
        """Throw the draft away without submitting."""
        self._slot.clear()
        logger.info("discarded %s draft", self._slot.slot)

    def _gate_problems(self) -> list[str]:
        problems = []
        if self.state is SessionState.IDLE:
            problems.append("session not started")
        elif self.state is SessionState.SUBMITTING:
            problems.append("submission already in progress")
        if self.word_count < self.min_words:
            problems.append(f"needs {self.min_words} words (have {self.word_count})")
        return problems

    @property
    def gate_reason(self) -> str | None:
        """Why submit() would be rejected, or None if the gate is open."""
        problems = self._gate_problems()
        return "; ".join(problems) if problems else None

    @property
    def can_submit(self) -> bool:
        return not self._gate_problems()

    async def _submit(self, create: Callable):
        reason = self.gate_reason
        if reason is not None:
            raise SubmissionRejected(reason)

        self.state = SessionState.SUBMITTING
        try:
            record = await create()
        except StoreError:
            logger.warning("%s submission failed, draft kept", self._slot.slot)
            raise
        finally:
            self.state = SessionState.DRAFTING

        self._slot.clear()
        return record


class PromptSession(_DraftSession):
    """Writing against a generated prompt.

    Args:
        repository: Where finished stories go.
        cache:      Draft cache the story text is mirrored into.
        generator:  Zero-argument callable returning a fresh Prompt.
        min_words:  Word count the story must reach. Defaults to 500.
    """

    def __init__(
        self,
        repository: StoryRepository,
        cache: DraftCache,
        generator: Callable[[], Prompt],
        min_words: int = MIN_WORDS,
    ) -> None:
        super().__init__(repository, cache, PROMPT_SLOT, ("story",), min_words)
        self._generator = generator
        self.prompt: Prompt | None = None

    def start(self) -> Prompt:
        """Bind a first prompt and begin drafting."""
        prompt = self.request_new_prompt()
        self.state = SessionState.DRAFTING
        return prompt

    def request_new_prompt(self) -> Prompt:
        """Replace the bound prompt. The story draft is left as it is."""
        self.prompt = self._generator()
        logger.debug("bound new prompt: %s", self.prompt)
        return self.prompt

    def _gate_problems(self) -> list[str]:
        problems = super()._gate_problems()
        if self.prompt is None:
            problems.insert(0, "no prompt")
        return problems

    async def submit(self) -> PromptStory:
        prompt = self.prompt
        story = self.story
        return await self._submit(lambda: self._repository.create_prompt(prompt, story))


class SelfWrittenSession(_DraftSession):
    """Writing a free-form story under a self-chosen title."""

    def __init__(
        self,
        repository: StoryRepository,
        cache: DraftCache,
        min_words: int = MIN_WORDS,
    ) -> None:
        super().__init__(repository, cache, SELF_SLOT, ("story", "title"), min_words)

    def start(self) -> None:
        # No prompt to wait for
        self.state = SessionState.DRAFTING

    @property
    def title(self) -> str:
        return self._slot.get("title")

    def set_title(self, title: str) -> None:
        self._slot.set("title", title)

    def _gate_problems(self) -> list[str]:
        problems = super()._gate_problems()
        if not self.title.strip():
            problems.insert(0, "needs a title")
        return problems

    async def submit(self) -> SelfWrittenStory:
        title = self.title
        story = self.story
        return await self._submit(lambda: self._repository.create_self(title, story))
