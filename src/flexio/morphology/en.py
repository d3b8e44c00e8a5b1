"""English stemming and form generation.

Stemming: possessive, then plural (S-stemmer): ies -> y, es -> e, s -> "".

Forms: English gives no reliable word class, so a base form expands to both
its noun and verb forms, in this order, without duplicates or the input:

    plural, possessive, plural possessive,
    3sg present, past, past participle, present participle

Plurals come from inflect; verbs use the irregular table, then regular rules.
"""

from __future__ import annotations

import inflect

from flexio.errors import ConfigurationError
from flexio.morphology.data import MorphologyData
from flexio.morphology.dispatch import LanguageEntry
from flexio.morphology.rules import Pipeline

STAGES = ("possessive", "plural")


def _possessive(noun: str) -> str:
    if noun.endswith("s"):
        return noun + "'"
    return noun + "'s"


class EnglishForms:
    def __init__(self, data: MorphologyData) -> None:
        self.irregular_verbs = data.irregular_table("verbs")
        for base, forms in self.irregular_verbs.items():
            if len(forms) != 4:
                raise ConfigurationError(f"irregular verb {base!r} needs 4 forms, got {len(forms)}", "en")
        self.word = data.pattern("word")
        self.cvc = data.pattern("cvc")
        self.consonant_y = data.pattern("consonant_y")
        self.es_endings = data.suffix_list("es_endings")
        self._engine = inflect.engine()

    # ── Regular verb inflection ──

    def third_person(self, verb: str) -> str:
        """verb -> verb+s/es."""
        if verb.endswith(self.es_endings):
            return verb + "es"
        if self.consonant_y.search(verb):
            return verb[:-1] + "ies"
        return verb + "s"

    def past(self, verb: str) -> str:
        """verb -> verb+ed, also the regular past participle."""
        if verb.endswith("e"):
            return verb + "d"
        if self.consonant_y.search(verb):
            return verb[:-1] + "ied"
        if self.cvc.search(verb):
            return verb + verb[-1] + "ed"
        return verb + "ed"

    def present_participle(self, verb: str) -> str:
        if verb.endswith("ie"):
            return verb[:-2] + "ying"
        if verb.endswith("e") and not verb.endswith("ee"):
            return verb[:-1] + "ing"
        if self.cvc.search(verb):
            return verb + verb[-1] + "ing"
        return verb + "ing"

    def verb_forms(self, verb: str) -> tuple[str, str, str, str]:
        """(3sg present, past, past participle, present participle)."""
        irregular = self.irregular_verbs.get(verb)
        if irregular:
            past, participle, progressive, third = irregular
            return third, past, participle, progressive
        past = self.past(verb)
        return self.third_person(verb), past, past, self.present_participle(verb)

    def __call__(self, word: str) -> list[str]:
        if not self.word.match(word):
            return []

        candidates: list[str] = []
        if "'" not in word:
            plural = self._engine.plural_noun(word) or word
            candidates += [plural, _possessive(word), _possessive(plural)]
        candidates += self.verb_forms(word)

        forms: list[str] = []
        for form in candidates:
            if form != word and form not in forms:
                forms.append(form)
        return forms


def build(data: MorphologyData) -> LanguageEntry:
    return LanguageEntry(
        language="en",
        data=data,
        stem=Pipeline(data, STAGES),
        generate_forms=EnglishForms(data),
    )
