"""Tests for prompt generation from the vocabulary presets."""

import random

import pytest

from story_desk.models import Prompt
from story_desk.prompts import (
    CATEGORIES,
    DEFAULT_ELEMENTS_PATH,
    PromptGenerator,
    default_generator,
    load_prompt_elements,
)

ELEMENTS = {
    "adjectives": ["weary"],
    "subjects": ["baker"],
    "verbs": ["steals"],
    "objects": ["a key"],
    "settings": ["at dawn"],
    "consequences": ["and nobody notices"],
}


def test_single_word_lists_are_deterministic():
    prompt = PromptGenerator(ELEMENTS).generate()
    assert prompt == Prompt(
        subject="weary baker", verb="steals", object="a key",
        setting="at dawn", consequences="and nobody notices",
    )


def test_generator_is_callable():
    assert isinstance(PromptGenerator(ELEMENTS)(), Prompt)


def test_subject_gets_adjective_prefix():
    elements = {**ELEMENTS, "adjectives": ["old", "young"], "subjects": ["poet"]}
    prompt = PromptGenerator(elements, rng=random.Random(1)).generate()
    assert prompt.subject in ("old poet", "young poet")


def test_seeded_rng_is_reproducible():
    elements = load_prompt_elements(DEFAULT_ELEMENTS_PATH)
    a = PromptGenerator(elements, rng=random.Random(42)).generate()
    b = PromptGenerator(elements, rng=random.Random(42)).generate()
    assert a == b


def test_every_pick_comes_from_its_list():
    elements = load_prompt_elements(DEFAULT_ELEMENTS_PATH)
    gen = PromptGenerator(elements, rng=random.Random(7))
    for _ in range(50):
        p = gen.generate()
        assert p.verb in elements["verbs"]
        assert p.object in elements["objects"]
        assert p.setting in elements["settings"]
        assert p.consequences in elements["consequences"]
        adjective, _, subject = p.subject.partition(" ")
        assert adjective in elements["adjectives"]
        assert subject in elements["subjects"]


def test_missing_category_rejected():
    elements = dict(ELEMENTS)
    del elements["verbs"]
    with pytest.raises(ValueError, match="verbs"):
        PromptGenerator(elements)


def test_empty_category_rejected():
    with pytest.raises(ValueError, match="settings"):
        PromptGenerator({**ELEMENTS, "settings": []})


def test_default_vocabulary_has_all_categories():
    elements = load_prompt_elements(DEFAULT_ELEMENTS_PATH)
    for category in CATEGORIES:
        assert elements[category]


def test_default_generator():
    assert isinstance(default_generator().generate(), Prompt)
