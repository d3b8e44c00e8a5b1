"""Properties every language's stemmer and generator must hold."""

import pytest

LANGUAGES = ["cs", "en", "nl", "sk"]

WORDS = {
    "cs": ["hradech", "matce", "pánův", "mostek", "a", "žena", "lidé"],
    "en": ["cities", "cats'", "glass", "bus", "a", "running", "boxes"],
    "nl": ["boeken", "lichamelijke", "mogelijkheden", "y", "ja", "blaten", "gelukkig"],
    "sk": ["hradoch", "stolček", "najnovejší", "ženami", "a", "ruce", "petrovým"],
}


@pytest.mark.parametrize("language", LANGUAGES)
def test_stem_never_longer(entries, language):
    stem = entries[language].stem
    for word in WORDS[language]:
        assert len(stem(word)) <= len(word), word


@pytest.mark.parametrize("language", LANGUAGES)
def test_stem_is_deterministic(entries, language):
    stem = entries[language].stem
    for word in WORDS[language]:
        assert stem(word) == stem(word)


@pytest.mark.parametrize("language", LANGUAGES)
def test_unmatched_word_unchanged(entries, language):
    assert entries[language].stem("word-with-no-recognized-suffix") == "word-with-no-recognized-suffix"


@pytest.mark.parametrize("language", LANGUAGES)
def test_empty_word(entries, language):
    assert entries[language].stem("") == ""


@pytest.mark.parametrize("language", LANGUAGES)
def test_forms_exclude_input(entries, language):
    for word in WORDS[language]:
        forms = entries[language].generate_forms(word)
        assert word not in forms
        assert len(forms) == len(set(forms))
