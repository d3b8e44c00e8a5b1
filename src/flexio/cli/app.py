"""Main CLI application wiring for flexio.

  flexio stem hradoch --lang sk
  flexio forms zwik --lang nl
  flexio languages
  flexio check
"""

from __future__ import annotations

import logging
from typing import Optional

import typer

from flexio.config import load_settings
from flexio.errors import ConfigurationError

app = typer.Typer(add_completion=False, help="flexio: stems and inflected forms")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default: FLEXIO_LOG_LEVEL or WARNING)"
    ),
):
    """flexio CLI."""
    try:
        level = log_level.upper() if log_level else load_settings().log_level
    except ConfigurationError as e:
        print(f"Error: {e}")
        raise typer.Exit(1)

    if not isinstance(logging.getLevelName(level), int):
        print(f"Invalid log level: {log_level}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


# =============================================================================
# Commands
# =============================================================================

from flexio.cli import words as words_cmd
from flexio.cli import tables as tables_cmd

words_cmd.register(app)
tables_cmd.register(app)
