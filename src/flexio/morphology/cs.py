"""Czech stemming (light).

Removes case and possessive endings, then normalises the final consonant
(čt -> ck, c -> k, z -> h, ...) so palatalised and plain stems coincide.
"""

from __future__ import annotations

from flexio.morphology.data import MorphologyData
from flexio.morphology.dispatch import LanguageEntry
from flexio.morphology.rules import Pipeline

STAGES = ("cases", "possessives", "normalize")


def build(data: MorphologyData) -> LanguageEntry:
    return LanguageEntry(language="cs", data=data, stem=Pipeline(data, STAGES))
