"""Morphology rule tables: one validated, immutable bundle per language.

Tables are YAML documents (see data/*.yml)::

    language: sk
    adjusters:
      palatal:
        fallback: drop            # or keep
        rules:
          - ["(ci|ce|či|če)$", "k"]
    stages:
      possessives:                # one tier: first matching rule wins
        - {min_length: 6, suffixes: [ov], strip: 2}
        - {min_length: 6, suffixes: [in], strip: 1, adjust: palatal}
      cases:
        tiers:                    # tiers run in order, each on the previous result
          - - {min_length: 8, suffixes: [atoch], strip: 5}
          - - {min_length: 7, suffixes: [aťom], strip: 3, adjust: palatal}
    exceptions: {name: [word, ...]}
    patterns:   {name: regex}
    suffixes:   {name: [string, ...]}
    endings:    {name: [{pattern: regex, suffixes: [string, ...]}, ...]}
    irregular:  {name: {word: [form, ...]}}

Everything is checked in load(); a table that loads is safe to use from any
thread without further checks.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

from flexio.config import PACKAGED_DATA_DIR
from flexio.errors import ConfigurationError

logger = logging.getLogger(__name__)

FALLBACKS = {"drop", "keep"}


def _empty() -> Mapping:
    return MappingProxyType({})


# ── Table types ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SuffixRule:
    """A guarded rewrite: if the guard holds, strip, adjust, append."""

    min_length: int
    suffixes: tuple[str, ...] = ()
    pattern: re.Pattern | None = None
    strip: int = 0
    adjust: str | None = None
    append: str = ""
    exceptions: frozenset[str] = frozenset()

    def matches(self, word: str) -> bool:
        if len(word) < self.min_length or word in self.exceptions:
            return False
        if self.pattern is not None:
            return self.pattern.search(word) is not None
        return word.endswith(self.suffixes)


@dataclass(frozen=True)
class Stage:
    name: str
    tiers: tuple[tuple[SuffixRule, ...], ...]


@dataclass(frozen=True)
class PalatalRule:
    pattern: re.Pattern
    replacement: str


@dataclass(frozen=True)
class Adjuster:
    name: str
    rules: tuple[PalatalRule, ...]
    fallback: str = "drop"


@dataclass(frozen=True)
class Ending:
    """An ending category and the suffixes a stem in it takes, in output order."""

    pattern: re.Pattern
    suffixes: tuple[str, ...]


@dataclass(frozen=True)
class MorphologyData:
    language: str
    stages: Mapping[str, Stage] = field(default_factory=_empty)
    adjusters: Mapping[str, Adjuster] = field(default_factory=_empty)
    exceptions: Mapping[str, frozenset[str]] = field(default_factory=_empty)
    patterns: Mapping[str, re.Pattern] = field(default_factory=_empty)
    suffixes: Mapping[str, tuple[str, ...]] = field(default_factory=_empty)
    endings: Mapping[str, tuple[Ending, ...]] = field(default_factory=_empty)
    irregular: Mapping[str, Mapping[str, tuple[str, ...]]] = field(default_factory=_empty)

    def _get(self, section: str, name: str):
        table = getattr(self, section)
        if name not in table:
            raise ConfigurationError(f"no {section} entry named {name!r}", self.language)
        return table[name]

    def stage(self, name: str) -> Stage:
        return self._get("stages", name)

    def adjuster(self, name: str) -> Adjuster:
        return self._get("adjusters", name)

    def exception_set(self, name: str) -> frozenset[str]:
        return self._get("exceptions", name)

    def pattern(self, name: str) -> re.Pattern:
        return self._get("patterns", name)

    def suffix_list(self, name: str) -> tuple[str, ...]:
        return self._get("suffixes", name)

    def ending_list(self, name: str) -> tuple[Ending, ...]:
        return self._get("endings", name)

    def irregular_table(self, name: str) -> Mapping[str, tuple[str, ...]]:
        return self._get("irregular", name)


# ── Validation helpers ──────────────────────────────────────────────────────


class _Builder:
    """Turns a raw mapping into MorphologyData, raising on the first problem."""

    def __init__(self, language: str) -> None:
        self.language = language

    def fail(self, message: str) -> ConfigurationError:
        return ConfigurationError(message, self.language)

    def mapping(self, value: Any, where: str) -> dict:
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise self.fail(f"{where} must be a mapping")
        return value

    def strings(self, value: Any, where: str) -> tuple[str, ...]:
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise self.fail(f"{where} must be a list of strings")
        for item in value:
            if not isinstance(item, str) or not item:
                raise self.fail(f"{where} must contain non-empty strings, got {item!r}")
        return tuple(value)

    def compile(self, value: Any, where: str) -> re.Pattern:
        if not isinstance(value, str):
            raise self.fail(f"{where} must be a regular expression string")
        try:
            return re.compile(value)
        except re.error as e:
            raise self.fail(f"{where}: invalid pattern {value!r}: {e}") from e

    def integer(self, value: Any, where: str, minimum: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
            raise self.fail(f"{where} must be an integer >= {minimum}, got {value!r}")
        return value

    # ── sections ──

    def adjusters(self, raw: Any) -> dict[str, Adjuster]:
        result = {}
        for name, spec in self.mapping(raw, "adjusters").items():
            where = f"adjusters.{name}"
            spec = self.mapping(spec, where)
            fallback = spec.get("fallback", "drop")
            if fallback not in FALLBACKS:
                raise self.fail(f"{where}.fallback must be one of {sorted(FALLBACKS)}, got {fallback!r}")
            rules = []
            for i, pair in enumerate(spec.get("rules") or []):
                if not isinstance(pair, (list, tuple)) or len(pair) != 2 or not isinstance(pair[1], str):
                    raise self.fail(f"{where}.rules[{i}] must be a [pattern, replacement] pair")
                rules.append(PalatalRule(self.compile(pair[0], f"{where}.rules[{i}]"), pair[1]))
            result[name] = Adjuster(name, tuple(rules), fallback)
        return result

    def rule(self, raw: Any, where: str, adjusters: Mapping, exceptions: Mapping) -> SuffixRule:
        raw = self.mapping(raw, where)
        unknown = set(raw) - {"min_length", "suffixes", "pattern", "strip", "adjust", "append", "exceptions"}
        if unknown:
            raise self.fail(f"{where}: unknown keys {', '.join(sorted(unknown))}")

        min_length = self.integer(raw.get("min_length"), f"{where}.min_length", 1)
        strip = self.integer(raw.get("strip", 0), f"{where}.strip", 0)
        if strip >= min_length:
            raise self.fail(f"{where}: strip ({strip}) must be smaller than min_length ({min_length})")

        append = raw.get("append", "")
        if not isinstance(append, str) or len(append) > strip:
            raise self.fail(f"{where}: append must be a string no longer than strip")

        if ("suffixes" in raw) == ("pattern" in raw):
            raise self.fail(f"{where}: exactly one of suffixes or pattern is required")
        suffixes = self.strings(raw["suffixes"], f"{where}.suffixes") if "suffixes" in raw else ()
        pattern = self.compile(raw["pattern"], f"{where}.pattern") if "pattern" in raw else None

        adjust = raw.get("adjust")
        if adjust is not None and adjust not in adjusters:
            raise self.fail(f"{where}: unknown adjuster {adjust!r}")

        skip = raw.get("exceptions")
        if skip is None:
            skip_words: frozenset[str] = frozenset()
        elif isinstance(skip, str):
            if skip not in exceptions:
                raise self.fail(f"{where}: unknown exception list {skip!r}")
            skip_words = exceptions[skip]
        else:
            skip_words = frozenset(self.strings(skip, f"{where}.exceptions"))

        return SuffixRule(
            min_length=min_length,
            suffixes=suffixes,
            pattern=pattern,
            strip=strip,
            adjust=adjust,
            append=append,
            exceptions=skip_words,
        )

    def tier(self, raw: Any, where: str, adjusters: Mapping, exceptions: Mapping) -> tuple[SuffixRule, ...]:
        if not isinstance(raw, list) or not raw:
            raise self.fail(f"{where} must be a non-empty list of rules")
        rules = tuple(
            self.rule(item, f"{where}[{i}]", adjusters, exceptions) for i, item in enumerate(raw)
        )
        for before, after in zip(rules, rules[1:]):
            if after.min_length > before.min_length:
                raise self.fail(
                    f"{where}: min_length increases from {before.min_length} to {after.min_length}; "
                    "longer suffix families must come first"
                )
        return rules

    def stages(self, raw: Any, adjusters: Mapping, exceptions: Mapping) -> dict[str, Stage]:
        result = {}
        for name, spec in self.mapping(raw, "stages").items():
            where = f"stages.{name}"
            if isinstance(spec, dict):
                unknown = set(spec) - {"tiers"}
                if unknown or not isinstance(spec.get("tiers"), list) or not spec["tiers"]:
                    raise self.fail(f"{where} must be a list of rules or a mapping with a non-empty 'tiers' list")
                tiers = tuple(
                    self.tier(t, f"{where}.tiers[{i}]", adjusters, exceptions)
                    for i, t in enumerate(spec["tiers"])
                )
            else:
                tiers = (self.tier(spec, where, adjusters, exceptions),)
            result[name] = Stage(name, tiers)
        return result

    def endings(self, raw: Any) -> dict[str, tuple[Ending, ...]]:
        result = {}
        for name, items in self.mapping(raw, "endings").items():
            where = f"endings.{name}"
            if not isinstance(items, list) or not items:
                raise self.fail(f"{where} must be a non-empty list")
            entries = []
            for i, item in enumerate(items):
                item = self.mapping(item, f"{where}[{i}]")
                entries.append(
                    Ending(
                        pattern=self.compile(item.get("pattern"), f"{where}[{i}].pattern"),
                        suffixes=self.strings(item.get("suffixes"), f"{where}[{i}].suffixes"),
                    )
                )
            result[name] = tuple(entries)
        return result

    def irregular(self, raw: Any) -> dict[str, Mapping[str, tuple[str, ...]]]:
        result = {}
        for name, table in self.mapping(raw, "irregular").items():
            where = f"irregular.{name}"
            entries = {}
            for word, forms in self.mapping(table, where).items():
                if not isinstance(word, str) or not word:
                    raise self.fail(f"{where}: keys must be non-empty strings, got {word!r}")
                entries[word] = self.strings(forms, f"{where}.{word}")
            result[name] = MappingProxyType(entries)
        return result

    def build(self, raw: Any) -> MorphologyData:
        raw = self.mapping(raw, "table")
        tagged = raw.get("language")
        if tagged != self.language:
            raise self.fail(f"table is tagged {tagged!r}, expected {self.language!r}")

        exceptions = {
            name: frozenset(self.strings(words, f"exceptions.{name}"))
            for name, words in self.mapping(raw.get("exceptions"), "exceptions").items()
        }
        adjusters = self.adjusters(raw.get("adjusters"))

        return MorphologyData(
            language=self.language,
            stages=MappingProxyType(self.stages(raw.get("stages"), adjusters, exceptions)),
            adjusters=MappingProxyType(adjusters),
            exceptions=MappingProxyType(exceptions),
            patterns=MappingProxyType({
                name: self.compile(p, f"patterns.{name}")
                for name, p in self.mapping(raw.get("patterns"), "patterns").items()
            }),
            suffixes=MappingProxyType({
                name: self.strings(items, f"suffixes.{name}")
                for name, items in self.mapping(raw.get("suffixes"), "suffixes").items()
            }),
            endings=MappingProxyType(self.endings(raw.get("endings"))),
            irregular=MappingProxyType(self.irregular(raw.get("irregular"))),
        )


# ── Public API ──────────────────────────────────────────────────────────────


def from_mapping(language: str, raw: Mapping) -> MorphologyData:
    """Validate an in-memory table and freeze it."""
    return _Builder(language).build(raw)


def load(language: str, directory: Path | None = None) -> MorphologyData:
    """Load <directory>/<language>.yml (packaged tables by default)."""
    path = Path(directory or PACKAGED_DATA_DIR) / f"{language}.yml"
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"cannot read rule table {path}: {e}", language) from e
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"invalid YAML in {path}: {e}", language) from e

    data = from_mapping(language, raw)
    logger.debug("Loaded %s morphology from %s (%d stages)", language, path, len(data.stages))
    return data
