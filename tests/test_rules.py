"""Tests for the shared rewrite engine: adjuster, stages, pipelines."""

import pytest

from flexio.errors import ConfigurationError
from flexio.morphology.data import from_mapping
from flexio.morphology.rules import Pipeline, adjust, apply_stage

TABLE = {
    "language": "xx",
    "adjusters": {
        "palatal": {
            "fallback": "drop",
            "rules": [["(ci|ce)$", "k"], ["ce$", "never"], ["zi$", "h"]],
        },
        "soft": {"fallback": "keep", "rules": [["č$", "k"]]},
    },
    "stages": {
        "single": [
            {"min_length": 7, "suffixes": ["ovat"], "strip": 4},
            {"min_length": 5, "suffixes": ["at", "ovat"], "strip": 2},
            {"min_length": 4, "suffixes": ["ce"], "strip": 0, "adjust": "palatal"},
        ],
        "cascade": {
            "tiers": [
                [{"min_length": 6, "suffixes": ["ami"], "strip": 3}],
                [{"min_length": 4, "pattern": "[ae]$", "strip": 1}],
            ]
        },
        "guarded": [
            {"min_length": 4, "suffixes": ["y"], "strip": 1, "exceptions": ["many"]},
        ],
        "grow": [
            {"min_length": 3, "pattern": "$", "adjust": "grow"},
        ],
    },
}
TABLE["adjusters"]["grow"] = {"fallback": "keep", "rules": [["x$", "xyz"]]}


@pytest.fixture(scope="module")
def data():
    return from_mapping("xx", TABLE)


# ── Adjuster ────────────────────────────────────────────────────────────────


class TestAdjust:
    def test_first_matching_rule_wins(self, data):
        assert adjust("ruce", data) == "ruk"

    def test_later_rule(self, data):
        assert adjust("knizi", data) == "knih"

    def test_drop_fallback(self, data):
        assert adjust("hrad", data) == "hra"

    def test_keep_fallback(self, data):
        assert adjust("hrad", data, "soft") == "hrad"
        assert adjust("kluč", data, "soft") == "kluk"

    def test_unknown_adjuster(self, data):
        with pytest.raises(ConfigurationError):
            adjust("hrad", data, "missing")


# ── Stages ──────────────────────────────────────────────────────────────────


class TestStage:
    def test_longer_suffix_family_first(self, data):
        assert apply_stage("milovat", data.stage("single"), data) == "mil"

    def test_min_length_guard_falls_through(self, data):
        # Too short for -ovat, long enough for -at.
        assert apply_stage("kovat", data.stage("single"), data) == "kov"

    def test_first_match_skips_rest_of_tier(self, data):
        # -at wins; the -ce rule is not retried on the result.
        assert apply_stage("ruceat", data.stage("single"), data) == "ruce"

    def test_strip_then_adjust(self, data):
        assert apply_stage("ruce", data.stage("single"), data) == "ruk"

    def test_no_match_unchanged(self, data):
        assert apply_stage("dom", data.stage("single"), data) == "dom"

    def test_tiers_cascade(self, data):
        # First tier removes -ami, second sees the result and removes -e.
        assert apply_stage("ženeami", data.stage("cascade"), data) == "žen"

    def test_later_tier_alone(self, data):
        assert apply_stage("žena", data.stage("cascade"), data) == "žen"

    def test_exception_words_skip_rule(self, data):
        assert apply_stage("many", data.stage("guarded"), data) == "many"
        assert apply_stage("tiny", data.stage("guarded"), data) == "tin"


# ── Pipeline ────────────────────────────────────────────────────────────────


class TestPipeline:
    def test_runs_steps_in_order(self, data):
        pipeline = Pipeline(data, ["single", str.upper])
        assert pipeline("milovat") == "MIL"
        assert pipeline.steps == ("single", "upper")

    def test_callable_steps_see_previous_output(self, data):
        seen = []

        def record(word):
            seen.append(word)
            return word

        Pipeline(data, ["single", record])("kovat")
        assert seen == ["kov"]

    def test_empty_word(self, data):
        assert Pipeline(data, ["single"])("") == ""

    def test_unknown_stage_fails_at_construction(self, data):
        with pytest.raises(ConfigurationError, match="missing_stage"):
            Pipeline(data, ["single", "missing_stage"])

    def test_result_never_longer_than_input(self, data):
        pipeline = Pipeline(data, ["grow"])
        assert pipeline("box") == "box"

    def test_steps_are_fixed(self, data):
        pipeline = Pipeline(data, ["single", "cascade"])
        with pytest.raises(AttributeError):
            pipeline.steps.append("guarded")
