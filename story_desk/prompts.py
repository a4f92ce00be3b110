"""Random writing prompts from the static vocabulary in presets/.

A prompt is "A <adjective> <subject> <verb> <object> <setting>
<consequences>", one uniform pick per category. Generation keeps no state:
asking again simply builds an unrelated Prompt.
"""

from __future__ import annotations

import json
import random
from pathlib import Path

from story_desk.models import Prompt

PRESETS_DIR = Path(__file__).parent.parent / "presets"
DEFAULT_ELEMENTS_PATH = PRESETS_DIR / "story-prompt-elements.json"

CATEGORIES = ("adjectives", "subjects", "verbs", "objects", "settings", "consequences")

_default_elements: dict[str, list[str]] | None = None


def load_prompt_elements(path: Path) -> dict[str, list[str]]:
    """Read the vocabulary file: a JSON object of category → list of strings."""
    return json.loads(path.read_text())


class PromptGenerator:
    """Builds a fresh Prompt from vocabulary lists on every call.

    Args:
        elements: Category → word list. Every name in CATEGORIES must be
                  present and non-empty.
        rng:      Random source. Defaults to a fresh random.Random().
    """

    def __init__(self, elements: dict[str, list[str]], rng: random.Random | None = None) -> None:
        missing = [c for c in CATEGORIES if not elements.get(c)]
        if missing:
            raise ValueError(f"Prompt vocabulary missing categories: {', '.join(missing)}")
        self._elements = {c: list(elements[c]) for c in CATEGORIES}
        self._rng = rng or random.Random()

    def _pick(self, category: str) -> str:
        return self._rng.choice(self._elements[category])

    def generate(self) -> Prompt:
        return Prompt(
            subject=f"{self._pick('adjectives')} {self._pick('subjects')}",
            verb=self._pick("verbs"),
            object=self._pick("objects"),
            setting=self._pick("settings"),
            consequences=self._pick("consequences"),
        )

    __call__ = generate


def default_generator(rng: random.Random | None = None) -> PromptGenerator:
    """A generator over the packaged vocabulary (loaded once per process)."""
    global _default_elements
    if _default_elements is None:
        _default_elements = load_prompt_elements(DEFAULT_ELEMENTS_PATH)
    return PromptGenerator(_default_elements, rng=rng)
