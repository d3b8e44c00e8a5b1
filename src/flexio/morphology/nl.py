"""Dutch stemming and verb form generation.

Stemming is the Snowball Dutch algorithm (via NLTK): diacritics are removed,
then plural, -heid, -lijk, -baar style suffixes inside the R1/R2 regions, and
finally a long vowel in a closed last syllable is undoubled.

Verb forms: given a verb stem ("zwik"), produce

    [3sg present, past sg, past pl, infinitive/plural, present participle]

choosing -te/-ten or -de/-den by the final consonant and adjusting the stem
before vowel-initial suffixes (zwik -> zwikken, grief -> grieven,
blaat -> blaten). Stems that don't end like a verb produce [].
"""

from __future__ import annotations

from nltk.stem.snowball import SnowballStemmer

from flexio.errors import ConfigurationError
from flexio.morphology.data import MorphologyData
from flexio.morphology.dispatch import LanguageEntry
from flexio.morphology.rules import Pipeline

# Initialised once; stem() keeps no state between calls.
_snowball = SnowballStemmer("dutch")


def snowball(word: str) -> str:
    return _snowball.stem(word)


def _longest_first(suffixes: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(sorted(suffixes, key=len, reverse=True))


class VerbForms:
    def __init__(self, data: MorphologyData) -> None:
        self.endings = data.ending_list("verb")
        self.vowels = frozenset(data.suffix_list("vowels"))
        self.prefixes = _longest_first(data.suffix_list("verb_prefixes"))
        self.voicing = data.pattern("verb_voicing")
        self.long_vowel = data.pattern("verb_long_vowel")
        self.doubling = data.pattern("verb_doubling")
        self.unstressed = data.pattern("verb_unstressed")
        self.no_doubling = data.exception_set("verb_no_doubling")
        self.no_voicing = data.exception_set("verb_no_voicing")

        voiceless, voiced = data.suffix_list("voiceless"), data.suffix_list("voiced")
        if len(voiceless) != len(voiced):
            raise ConfigurationError("voiceless and voiced lists must pair up", "nl")
        self.voiced = dict(zip(voiceless, voiced))

    def _core(self, stem: str) -> str:
        """The stem without an unstressed prefix (bestel -> stel)."""
        for prefix in self.prefixes:
            rest = stem[len(prefix):]
            if stem.startswith(prefix) and any(ch in self.vowels for ch in rest):
                return rest
        return stem

    def _voice(self, stem: str) -> str | None:
        if stem in self.no_voicing or not self.voicing.search(stem):
            return None
        voiced = self.voiced.get(stem[-1])
        if voiced is None:
            return None
        return stem[:-1] + voiced

    def _doubles(self, stem: str) -> bool:
        if not self.doubling.search(stem) or stem in self.no_doubling:
            return False
        core = self._core(stem)
        return core not in self.no_doubling and not self.unstressed.search(core)

    def before_vowel(self, stem: str) -> str:
        """The stem as written before a vowel-initial suffix."""
        voiced = self._voice(stem)
        adjusted = voiced or stem
        if self.long_vowel.search(adjusted):
            return adjusted[:-2] + adjusted[-1]
        if voiced is None and self._doubles(stem):
            return stem + stem[-1]
        return adjusted

    def __call__(self, stem: str) -> list[str]:
        for ending in self.endings:
            if ending.pattern.search(stem):
                break
        else:
            return []

        before_vowel = self.before_vowel(stem)
        return [
            (before_vowel if suffix[0] in self.vowels else stem) + suffix
            for suffix in ending.suffixes
        ]


def build(data: MorphologyData) -> LanguageEntry:
    return LanguageEntry(
        language="nl",
        data=data,
        stem=Pipeline(data, [snowball]),
        generate_forms=VerbForms(data),
    )
