"""Slovak stemming.

Aggressive suffix stripping with palatalisation: case endings, then
possessive, comparative, diminutive, augmentative and derivational suffixes.
All suffix families live in data/sk.yml; this module fixes their order.

Slovak has no form generator; generate_forms returns [].
"""

from __future__ import annotations

from flexio.morphology.data import MorphologyData
from flexio.morphology.dispatch import LanguageEntry, no_forms
from flexio.morphology.rules import Pipeline

STAGES = (
    "cases",
    "possessives",
    "comparatives",
    "diminutives",
    "augmentatives",
    "derivational",
)


def build(data: MorphologyData) -> LanguageEntry:
    data.adjuster("palatal")
    return LanguageEntry(
        language="sk",
        data=data,
        stem=Pipeline(data, STAGES),
        generate_forms=no_forms,
    )
