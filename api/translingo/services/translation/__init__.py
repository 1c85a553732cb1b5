"""Translation package.

This package provides:
- LanguageDetector: Best-effort source language detection
- Translation providers: Google (gtx), LibreTranslate and MyMemory adapters
- TranslationResolver: First-success-wins cascade over the providers
"""

from translingo.services.translation.language_detector import LanguageDetector
from translingo.services.translation.providers import (
    GoogleTranslateProvider,
    LibreTranslateProvider,
    MyMemoryProvider,
    TranslationJob,
    TranslationProvider,
)
from translingo.services.translation.resolver import TranslationResolver

__all__ = [
    "GoogleTranslateProvider",
    "LanguageDetector",
    "LibreTranslateProvider",
    "MyMemoryProvider",
    "TranslationJob",
    "TranslationProvider",
    "TranslationResolver",
]
