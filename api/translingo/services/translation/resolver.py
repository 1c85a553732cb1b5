"""Translation resolver.

Resolves the source language, then folds over the provider cascade
(Google, LibreTranslate, MyMemory) and returns the first usable result.
"""

import logging
import time
from typing import List, Optional, Sequence

import httpx

from translingo.core.config import Settings
from translingo.core.exceptions import (
    AllProvidersFailedError,
    InvalidTranslationRequestError,
    ProviderError,
)
from translingo.metrics.translation_metrics import (
    provider_attempts_total,
    provider_request_duration_seconds,
    translation_resolution_duration_seconds,
)
from translingo.models.translation import AUTO_LANGUAGE, TranslationResult
from translingo.services.translation.language_detector import LanguageDetector
from translingo.services.translation.providers import (
    GoogleTranslateProvider,
    LibreTranslateProvider,
    MyMemoryProvider,
    TranslationJob,
    TranslationProvider,
)
from translingo.utils.logging import log_sample

logger = logging.getLogger(__name__)


def default_providers(
    client: httpx.AsyncClient, settings: Settings
) -> List[TranslationProvider]:
    """The cascade in priority order; MyMemory must stay last."""
    return [
        GoogleTranslateProvider(client, settings),
        LibreTranslateProvider(client, settings),
        MyMemoryProvider(client, settings),
    ]


class TranslationResolver:
    """Stateless translation pipeline shared by all requests.

    Flow:
    1. Validate that text and target language are present
    2. Detect the source language once when it is missing or "auto"
    3. Try each provider in order, stopping at the first success

    Every outbound call is sequential; provider N+1 only runs after
    provider N has failed.
    """

    def __init__(
        self,
        detector: LanguageDetector,
        providers: Sequence[TranslationProvider],
        max_log_length: int = 200,
    ):
        if not providers:
            raise ValueError("TranslationResolver needs at least one provider")
        self.detector = detector
        self.providers = tuple(providers)
        self.max_log_length = max_log_length

    @classmethod
    def from_settings(
        cls, client: httpx.AsyncClient, settings: Settings
    ) -> "TranslationResolver":
        return cls(
            detector=LanguageDetector(client, settings),
            providers=default_providers(client, settings),
            max_log_length=settings.MAX_SAMPLE_LOG_LENGTH,
        )

    async def _resolve_source(
        self, text: str, source_language: Optional[str]
    ) -> Optional[str]:
        """Return the effective source language for the provider calls."""
        if source_language and source_language != AUTO_LANGUAGE:
            return source_language
        detected = await self.detector.detect(text)
        # On failure keep what the caller sent: None or the "auto" sentinel
        return detected or source_language

    async def _attempt(
        self, provider: TranslationProvider, job: TranslationJob
    ) -> Optional[TranslationResult]:
        """Run one provider, turning any failure into None."""
        start_time = time.perf_counter()
        try:
            result = await provider.translate(job)
        except ProviderError as e:
            provider_attempts_total.labels(provider=provider.name, outcome="rejected").inc()
            logger.warning(f"Provider '{provider.name}' returned no usable result: {e.reason}")
            return None
        except httpx.TimeoutException:
            provider_attempts_total.labels(provider=provider.name, outcome="timeout").inc()
            logger.warning(f"Provider '{provider.name}' timed out")
            return None
        except Exception as e:
            provider_attempts_total.labels(provider=provider.name, outcome="error").inc()
            logger.warning(f"Provider '{provider.name}' failed: {type(e).__name__}: {e}")
            return None
        finally:
            provider_request_duration_seconds.labels(provider=provider.name).observe(
                max(0.0, time.perf_counter() - start_time)
            )

        provider_attempts_total.labels(provider=provider.name, outcome="success").inc()
        return result

    async def resolve(
        self,
        text: Optional[str],
        target_language: Optional[str],
        source_language: Optional[str] = None,
    ) -> TranslationResult:
        """Translate ``text`` into ``target_language``.

        Args:
            text: Text to translate, required.
            target_language: Target language code, required.
            source_language: Source language code, "auto" or None to detect.

        Returns:
            The first successful provider result.

        Raises:
            InvalidTranslationRequestError: If text or target language is missing.
            AllProvidersFailedError: If every provider failed.
        """
        if not text or not target_language:
            raise InvalidTranslationRequestError()

        start_time = time.perf_counter()
        logger.info(
            f"Translation request: target='{target_language}' "
            f"source='{source_language or AUTO_LANGUAGE}' "
            f"text='{log_sample(text, self.max_log_length)}'"
        )

        job = TranslationJob(
            text=text,
            target_language=target_language,
            source_language=await self._resolve_source(text, source_language),
        )

        for provider in self.providers:
            result = await self._attempt(provider, job)
            if result is not None:
                logger.info(
                    f"Translated via '{provider.name}' "
                    f"({result.source_language} -> {result.target_language})"
                )
                translation_resolution_duration_seconds.labels(
                    outcome="success"
                ).observe(max(0.0, time.perf_counter() - start_time))
                return result

        translation_resolution_duration_seconds.labels(outcome="failed").observe(
            max(0.0, time.perf_counter() - start_time)
        )
        logger.error(
            f"All {len(self.providers)} translation providers failed "
            f"for target '{target_language}'"
        )
        raise AllProvidersFailedError()
