"""Guarded suffix rewriting shared by every stemming pipeline.

A stage is a list of tiers; a tier is a list of rules tried top to bottom.
The first rule whose guard holds rewrites the word and ends the tier:

    strip N characters -> run the named adjuster -> append

Anything that matches nothing passes through unchanged.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence, Union

from flexio.morphology.data import MorphologyData, Stage, SuffixRule

logger = logging.getLogger(__name__)

Step = Callable[[str], str]


def adjust(word: str, data: MorphologyData, name: str = "palatal") -> str:
    """Fix up the end of a word after a suffix was removed.

    The first adjuster rule whose pattern matches is substituted once.
    Without a match the "drop" fallback removes the last character and
    "keep" leaves the word alone.
    """
    adjuster = data.adjuster(name)
    for rule in adjuster.rules:
        if rule.pattern.search(word):
            return rule.pattern.sub(rule.replacement, word, count=1)
    if adjuster.fallback == "drop":
        return word[:-1]
    return word


def rewrite(word: str, rule: SuffixRule, data: MorphologyData) -> str:
    if rule.strip:
        word = word[: -rule.strip]
    if rule.adjust:
        word = adjust(word, data, rule.adjust)
    return word + rule.append


def apply_stage(word: str, stage: Stage, data: MorphologyData) -> str:
    for tier in stage.tiers:
        for rule in tier:
            if rule.matches(word):
                word = rewrite(word, rule, data)
                break
    return word


class Pipeline:
    """A fixed sequence of stemming steps for one language.

    Steps are stage names from the table or callables taking a word.
    Stage names are resolved here, so a table missing a stage fails when the
    pipeline is built rather than on the first word.
    """

    def __init__(self, data: MorphologyData, steps: Sequence[Union[str, Step]]) -> None:
        resolved: list[tuple[str, Step]] = []
        for step in steps:
            if isinstance(step, str):
                resolved.append((step, self._stage_step(data.stage(step), data)))
            else:
                resolved.append((getattr(step, "__name__", repr(step)), step))
        self.language = data.language
        self._steps: tuple[tuple[str, Step], ...] = tuple(resolved)

    @staticmethod
    def _stage_step(stage: Stage, data: MorphologyData) -> Step:
        def step(word: str) -> str:
            return apply_stage(word, stage, data)

        step.__name__ = stage.name
        return step

    @property
    def steps(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self._steps)

    def __call__(self, word: str) -> str:
        if not word:
            return word
        result = word
        for _, step in self._steps:
            result = step(result)
        if len(result) > len(word):
            # Stems never grow; an adjuster replacement longer than its match would.
            logger.debug("%s stem %r longer than %r, keeping input", self.language, result, word)
            return word
        return result
