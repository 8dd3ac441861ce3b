"""Translation module for Polyglot."""

from .service import TranslationService, LANGUAGES, SOURCE_LANGUAGE

__all__ = [
    "TranslationService",
    "LANGUAGES",
    "SOURCE_LANGUAGE",
]
