"""Translation provider adapters.

Each provider performs exactly one HTTP call and maps its own response shape
onto :class:`TranslationResult`, raising :class:`ProviderError` whenever the
response is not usable. Providers are stateless and safe to share between
concurrent requests.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from translingo.core.config import Settings
from translingo.core.exceptions import ProviderError
from translingo.metrics.translation_metrics import quality_upgrades_total
from translingo.models.translation import AUTO_LANGUAGE, TranslationResult

logger = logging.getLogger(__name__)

GOOGLE_CONFIDENCE = 0.95
LIBRETRANSLATE_CONFIDENCE = 0.9
MYMEMORY_DEFAULT_CONFIDENCE = 0.8

# MyMemory match selection, tuned empirically
MACHINE_TRANSLATION_REFERENCE = "Machine Translation."
MACHINE_TRANSLATION_CREATOR = "MT!"
HINDI_MIN_QUALITY = 70.0
HINDI_MIN_LENGTH_RATIO = 0.8
DEFAULT_MIN_QUALITY = 60.0

MYMEMORY_WARNING_PREFIX = "MYMEMORY WARNING"


@dataclass(frozen=True)
class TranslationJob:
    """A validated request with its effective source language.

    ``source_language`` is the explicit code, the detected code, the literal
    "auto" (caller asked for detection and it failed) or None (caller sent
    nothing and detection failed).
    """

    text: str
    target_language: str
    source_language: Optional[str] = None

    @property
    def reported_source(self) -> str:
        """Source language to report when the provider does not name one."""
        if self.source_language and self.source_language != AUTO_LANGUAGE:
            return self.source_language
        return "en"


def _to_float(value: Any) -> Optional[float]:
    """Coerce MyMemory's numbers, which arrive as int, float or str."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, value))


class TranslationProvider(ABC):
    """One step of the translation cascade."""

    name: str = "provider"

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    @abstractmethod
    async def translate(self, job: TranslationJob) -> TranslationResult:
        """Translate ``job`` or raise ProviderError."""

    def _json(self, response: httpx.Response) -> Any:
        """Return the JSON body of a 2xx response.

        Raises:
            ProviderError: On non-2xx status or a body that is not JSON
        """
        if not response.is_success:
            raise ProviderError(self.name, f"HTTP {response.status_code}")
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(self.name, "response body is not JSON") from e


class GoogleTranslateProvider(TranslationProvider):
    """Google Translate's keyless ``client=gtx`` endpoint.

    The response is a nested array: ``data[0]`` holds one
    ``[translated, original, ...]`` segment per sentence and ``data[2]`` the
    detected source language.
    """

    name = "google"

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        super().__init__(client)
        self.url = settings.GOOGLE_TRANSLATE_URL

    async def translate(self, job: TranslationJob) -> TranslationResult:
        params = {
            "client": "gtx",
            "sl": job.source_language or AUTO_LANGUAGE,
            "tl": job.target_language,
            "dt": "t",
            "q": job.text,
        }
        response = await self.client.get(self.url, params=params)
        data = self._json(response)

        if not isinstance(data, list) or not data or not isinstance(data[0], list):
            raise ProviderError(self.name, "unexpected response shape")
        segments = data[0]
        first = segments[0] if segments else None
        if not isinstance(first, list) or not first or not first[0]:
            raise ProviderError(self.name, "empty translation")

        # Long input comes back split into sentences; rejoin without separator
        translated = "".join(
            segment[0]
            for segment in segments
            if isinstance(segment, list) and segment and isinstance(segment[0], str)
        )

        detected = data[2] if len(data) > 2 else None
        source = detected if isinstance(detected, str) and detected else None

        return TranslationResult(
            translated_text=translated,
            source_language=source or job.reported_source,
            target_language=job.target_language,
            confidence=GOOGLE_CONFIDENCE,
        )


class LibreTranslateProvider(TranslationProvider):
    """A LibreTranslate instance (``POST /translate``)."""

    name = "libretranslate"

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        super().__init__(client)
        self.url = settings.LIBRETRANSLATE_URL
        self.api_key = settings.LIBRETRANSLATE_API_KEY.strip()

    @staticmethod
    def _detected_language(payload: dict) -> Optional[str]:
        # Either a bare code or {"language": ..., "confidence": ...}
        detected = payload.get("detectedLanguage")
        if isinstance(detected, dict):
            detected = detected.get("language")
        if isinstance(detected, str) and detected:
            return detected
        return None

    async def translate(self, job: TranslationJob) -> TranslationResult:
        if job.source_language == AUTO_LANGUAGE:
            source = AUTO_LANGUAGE
        else:
            source = job.source_language or "en"

        body = {
            "q": job.text,
            "source": source,
            "target": job.target_language,
            "format": "text",
        }
        if self.api_key:
            body["api_key"] = self.api_key

        response = await self.client.post(self.url, json=body)
        data = self._json(response)

        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected response shape")
        translated = data.get("translatedText")
        if not isinstance(translated, str) or not translated:
            raise ProviderError(self.name, "empty translation")

        return TranslationResult(
            translated_text=translated,
            source_language=self._detected_language(data) or job.reported_source,
            target_language=job.target_language,
            confidence=LIBRETRANSLATE_CONFIDENCE,
        )


def is_machine_translation(match: dict) -> bool:
    return (
        match.get("reference") == MACHINE_TRANSLATION_REFERENCE
        or match.get("created-by") == MACHINE_TRANSLATION_CREATOR
    )


def select_better_match(
    matches: Any, base_translation: str, target_language: str
) -> Optional[dict]:
    """Pick a MyMemory machine-translation match to use instead of the base result.

    Hindi needs quality >= 70 and a translation longer than 80% of the base
    one, which filters out truncated matches. Every other language takes the
    first machine-translation match with quality >= 60.
    """
    if not isinstance(matches, list):
        return None

    hindi = target_language == "hi"
    for match in matches:
        if not isinstance(match, dict) or not is_machine_translation(match):
            continue
        quality = _to_float(match.get("quality"))
        translation = match.get("translation")
        if quality is None or not isinstance(translation, str) or not translation:
            continue
        if hindi:
            if (
                quality >= HINDI_MIN_QUALITY
                and len(translation) > len(base_translation) * HINDI_MIN_LENGTH_RATIO
            ):
                return match
        elif quality >= DEFAULT_MIN_QUALITY:
            return match
    return None


class MyMemoryProvider(TranslationProvider):
    """MyMemory's ``/get`` endpoint, the terminal fallback."""

    name = "mymemory"

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        super().__init__(client)
        self.url = settings.MYMEMORY_URL
        self.contact_email = settings.MYMEMORY_CONTACT_EMAIL.strip()

    async def translate(self, job: TranslationJob) -> TranslationResult:
        params = {
            "q": job.text,
            "langpair": f"{job.source_language or AUTO_LANGUAGE}|{job.target_language}",
            "mt": "1",
        }
        if self.contact_email:
            params["de"] = self.contact_email

        response = await self.client.get(self.url, params=params)
        data = self._json(response)

        if not isinstance(data, dict):
            raise ProviderError(self.name, "unexpected response shape")
        if _to_float(data.get("responseStatus")) != 200:
            raise ProviderError(
                self.name, f"responseStatus {data.get('responseStatus')!r}"
            )
        response_data = data.get("responseData")
        translated = (
            response_data.get("translatedText")
            if isinstance(response_data, dict)
            else None
        )
        if not isinstance(translated, str):
            raise ProviderError(self.name, "missing translatedText")
        if translated.upper().startswith(MYMEMORY_WARNING_PREFIX):
            raise ProviderError(self.name, "quota warning instead of a translation")

        confidence = _to_float(response_data.get("match"))
        if confidence is None:
            confidence = MYMEMORY_DEFAULT_CONFIDENCE

        better = select_better_match(
            data.get("matches"), translated, job.target_language
        )
        if better is not None:
            logger.info(
                f"Using MyMemory machine-translation match "
                f"(quality {better.get('quality')}) for target '{job.target_language}'"
            )
            quality_upgrades_total.labels(target_lang=job.target_language).inc()
            translated = better["translation"]
            match_confidence = _to_float(better.get("match"))
            if match_confidence is not None:
                confidence = match_confidence

        return TranslationResult(
            translated_text=translated,
            source_language=job.reported_source,
            target_language=job.target_language,
            confidence=_clamp_confidence(confidence),
        )
