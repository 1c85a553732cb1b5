"""Translation and language detection endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Request

from translingo.core.exceptions import InvalidTranslationRequestError
from translingo.models.translation import (
    DetectLanguageRequest,
    LanguageDetection,
    TranslateRequest,
    TranslationResult,
)
from translingo.services.translation import LanguageDetector, TranslationResolver

router = APIRouter(prefix="/api", tags=["Translation"])


def get_translation_resolver(request: Request) -> TranslationResolver:
    """Get TranslationResolver from app state."""
    resolver = getattr(request.app.state, "translation_resolver", None)
    if resolver is None:
        raise HTTPException(status_code=503, detail="Translation service not available")
    return resolver


def get_language_detector(request: Request) -> LanguageDetector:
    """Get LanguageDetector from app state."""
    detector = getattr(request.app.state, "language_detector", None)
    if detector is None:
        raise HTTPException(status_code=503, detail="Language detection not available")
    return detector


@router.post("/translate", response_model=TranslationResult)
async def translate(
    body: TranslateRequest,
    resolver: TranslationResolver = Depends(get_translation_resolver),
):
    """
    Translate text, trying Google, LibreTranslate and MyMemory in order.

    - **text**: Text to translate (required)
    - **targetLanguage**: Target language code (required)
    - **sourceLanguage**: Source language code; omit or send "auto" to detect
    """
    return await resolver.resolve(
        body.text, body.target_language, body.source_language
    )


@router.post("/detect-language", response_model=LanguageDetection)
async def detect_language(
    body: DetectLanguageRequest,
    detector: LanguageDetector = Depends(get_language_detector),
):
    """Detect the language of a text."""
    if not body.text:
        raise InvalidTranslationRequestError("Text is required")
    return await detector.detect_or_raise(body.text)
