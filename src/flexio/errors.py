"""Errors raised by flexio.

Only configuration problems are errors. A word no rule applies to, or a stem
no generator recognises, is an ordinary result.
"""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """A rule table or settings file is malformed."""

    def __init__(self, message: str, language: str | None = None) -> None:
        self.language = language
        if language:
            message = f"{language}: {message}"
        super().__init__(message)
