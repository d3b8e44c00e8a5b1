"""Multilingual stemming and inflected form generation for keyphrase matching."""

from flexio.morphology.dispatch import generate_forms, resolve, stem

__all__ = ["generate_forms", "resolve", "stem"]
