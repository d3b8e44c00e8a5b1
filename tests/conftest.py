"""Shared fixtures: packaged rule tables and language entries."""

import os
import subprocess
import sys
from pathlib import Path

import pytest

from flexio.morphology import cs, en, nl, sk
from flexio.morphology.data import load

FACTORIES = {"cs": cs.build, "en": en.build, "nl": nl.build, "sk": sk.build}

SRC = Path(__file__).resolve().parents[1] / "src"


def run(args: str, cwd: Path, env: dict | None = None) -> subprocess.CompletedProcess:
    """Run the flexio CLI in a subprocess."""
    return subprocess.run(
        f"{sys.executable} -m flexio {args}",
        cwd=cwd,
        shell=True,
        capture_output=True,
        text=True,
        env={
            **os.environ,
            "PYTHONPATH": os.pathsep.join(filter(None, [str(SRC), os.environ.get("PYTHONPATH")])),
            **(env or {}),
        },
    )


@pytest.fixture(scope="session")
def tables():
    """Packaged rule tables, loaded once per session."""
    return {language: load(language) for language in FACTORIES}


@pytest.fixture(scope="session")
def entries(tables):
    return {language: FACTORIES[language](data) for language, data in tables.items()}
