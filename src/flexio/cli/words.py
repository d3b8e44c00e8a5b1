"""Preview commands: flexio stem <word>... / flexio forms <stem>

Run the engine on words without any surrounding analysis.
"""

from __future__ import annotations

from typing import List

import typer

from flexio.morphology import dispatch


def register(app: typer.Typer) -> None:
    @app.command()
    def stem(
        words: List[str] = typer.Argument(help="Words to stem (lower-case, one token each)"),
        lang: str = typer.Option("en", "--lang", help="Language code, e.g. 'en', 'nl', 'sk', 'cs'"),
    ) -> None:
        """Print the stem of each word, one per line."""
        for word in words:
            print(dispatch.stem(word, lang))

    @app.command()
    def forms(
        stem: str = typer.Argument(help="Stem to expand"),
        lang: str = typer.Option("en", "--lang", help="Language code, e.g. 'en', 'nl'"),
    ) -> None:
        """Print every generated form of a stem, one per line.

        Prints nothing when the stem is not of a word class the language
        generates forms for.
        """
        for form in dispatch.generate_forms(stem, lang):
            print(form)
