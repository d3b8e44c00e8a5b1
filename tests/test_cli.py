"""Tests for the flexio CLI, run in a subprocess."""

import yaml

from tests.conftest import run


# ── stem / forms ─────────────────────────────────────────────────────────────


def test_stem_words(tmp_path):
    res = run("stem hradoch hrady --lang sk", cwd=tmp_path)
    assert res.returncode == 0
    assert res.stdout.split() == ["hrad", "hrad"]


def test_stem_defaults_to_english(tmp_path):
    res = run("stem cities", cwd=tmp_path)
    assert res.returncode == 0
    assert res.stdout.strip() == "city"


def test_stem_unknown_language_is_identity(tmp_path):
    res = run("stem boeken --lang xx", cwd=tmp_path)
    assert res.returncode == 0
    assert res.stdout.strip() == "boeken"


def test_forms(tmp_path):
    res = run("forms zwik --lang nl", cwd=tmp_path)
    assert res.returncode == 0
    assert res.stdout.split() == ["zwikt", "zwikte", "zwikten", "zwikken", "zwikkend"]


def test_forms_not_applicable_prints_nothing(tmp_path):
    res = run("forms bakkerij --lang nl", cwd=tmp_path)
    assert res.returncode == 0
    assert res.stdout == ""


# ── languages ────────────────────────────────────────────────────────────────


def test_languages_all_ok(tmp_path):
    res = run("languages", cwd=tmp_path)
    assert res.returncode == 0
    for language in ("cs", "en", "nl", "sk"):
        assert f"{language}  ok" in res.stdout


def test_languages_disabled(tmp_path):
    res = run("languages", cwd=tmp_path, env={"FLEXIO_LANGUAGES": "nl"})
    assert "nl  ok" in res.stdout
    assert "sk  disabled" in res.stdout


def test_languages_broken_table(tmp_path):
    (tmp_path / "nl.yml").write_text("language: nl\nstages: {}\n")
    res = run("languages", cwd=tmp_path, env={"FLEXIO_DATA_DIR": str(tmp_path), "FLEXIO_LANGUAGES": "nl"})
    assert res.returncode == 0
    assert "nl  failed:" in res.stdout


def test_broken_table_falls_back_to_identity(tmp_path):
    (tmp_path / "nl.yml").write_text("language: nl\npatterns: {bad: '(['}\n")
    res = run("stem boeken --lang nl", cwd=tmp_path, env={"FLEXIO_DATA_DIR": str(tmp_path)})
    assert res.returncode == 0
    assert res.stdout.strip() == "boeken"


# ── check ────────────────────────────────────────────────────────────────────


def test_check_packaged_tables(tmp_path):
    res = run("check", cwd=tmp_path)
    assert res.returncode == 0
    for language in ("cs", "en", "nl", "sk"):
        assert f"✓ {language}:" in res.stdout


def test_check_bad_table(tmp_path):
    table = {"language": "sk", "stages": {"cases": [{"min_length": 2, "suffixes": ["om"], "strip": 3}]}}
    (tmp_path / "sk.yml").write_text(yaml.safe_dump(table))
    res = run(f"check sk --data-dir {tmp_path}", cwd=tmp_path)
    assert res.returncode == 1
    assert "✗ sk:" in res.stdout


def test_check_missing_table(tmp_path):
    res = run(f"check cs --data-dir {tmp_path}", cwd=tmp_path)
    assert res.returncode == 1
    assert "cannot read rule table" in res.stdout


# ── logging ──────────────────────────────────────────────────────────────────


def test_invalid_log_level(tmp_path):
    res = run("--log-level chatty stem cats", cwd=tmp_path)
    assert res.returncode == 1
    assert "Invalid log level" in res.stdout


def test_debug_logging_goes_to_stderr(tmp_path):
    res = run("--log-level debug stem cats", cwd=tmp_path)
    assert res.returncode == 0
    assert res.stdout.strip() == "cat"
    assert "DEBUG" in res.stderr
