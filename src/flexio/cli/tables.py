"""Rule table commands: flexio languages / flexio check [LANG...]"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from flexio.config import load_settings
from flexio.errors import ConfigurationError
from flexio.morphology import dispatch
from flexio.morphology.data import load


def register(app: typer.Typer) -> None:
    @app.command()
    def languages() -> None:
        """List registered languages and whether their rule tables loaded."""
        failures = dispatch.failures()
        for language in dispatch.languages():
            entry = dispatch.resolve(language)
            if entry.data is not None:
                print(f"{language}  ok")
            elif language in failures:
                print(f"{language}  failed: {failures[language]}")
            else:
                print(f"{language}  disabled")

    @app.command()
    def check(
        langs: Optional[List[str]] = typer.Argument(None, help="Languages to check (default: all registered)"),
        data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Directory holding <lang>.yml tables"),
    ) -> None:
        """Validate rule tables. Exits 1 if any table is malformed."""
        try:
            directory = data_dir or load_settings().data_dir
        except ConfigurationError as e:
            print(f"Error: {e}")
            raise typer.Exit(1)

        failed = False
        for language in langs or dispatch.languages():
            try:
                data = load(language, directory)
                dispatch.build_entry(language, data)
            except ConfigurationError as e:
                print(f"✗ {e}")
                failed = True
                continue
            print(f"✓ {language}: {len(data.stages)} stages, {len(data.adjusters)} adjusters")

        if failed:
            raise typer.Exit(1)
