"""Client for the remote language-detection service (detectlanguage.com API)."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from translingo.core.config import Settings
from translingo.core.exceptions import LanguageDetectionError
from translingo.metrics.translation_metrics import language_detection_total
from translingo.models.translation import LanguageDetection
from translingo.utils.logging import log_sample

logger = logging.getLogger(__name__)


class LanguageDetector:
    """Detects the language of a text with one POST to the detection service.

    ``detect`` is best effort and never raises; ``detect_or_raise`` backs the
    explicit detection endpoint and reports failures. Without
    ``LANGUAGE_DETECTION_API_KEY`` the detector is disabled and "auto" sources
    are passed to the providers unresolved.
    """

    def __init__(self, client: httpx.AsyncClient, settings: Settings):
        self.client = client
        self.url = settings.LANGUAGE_DETECTION_URL
        self.api_key = settings.LANGUAGE_DETECTION_API_KEY.strip()
        self.max_log_length = settings.MAX_SAMPLE_LOG_LENGTH

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    @staticmethod
    def _parse(payload: Any) -> LanguageDetection:
        """Extract the top-ranked detection from a response body.

        Raises:
            ValueError: If the body has no usable detection
        """
        if not isinstance(payload, dict):
            raise ValueError("detection response is not an object")
        data = payload.get("data")
        detections = data.get("detections") if isinstance(data, dict) else None
        if not isinstance(detections, list) or not detections:
            raise ValueError("detection response has no detections")

        top = detections[0]
        # Some deployments nest one list of candidates per input text
        if isinstance(top, list):
            if not top:
                raise ValueError("detection response has no detections")
            top = top[0]
        if not isinstance(top, dict) or not top.get("language"):
            raise ValueError("top detection has no language")

        return LanguageDetection(
            language=str(top["language"]),
            confidence=float(top.get("confidence") or 0.0),
            is_reliable=bool(top.get("isReliable", False)),
        )

    async def detect_or_raise(self, text: str) -> LanguageDetection:
        """Detect the language of ``text``.

        Raises:
            LanguageDetectionError: If detection is not configured or the
                service gave no usable answer
        """
        if not self.enabled:
            language_detection_total.labels(result="disabled").inc()
            raise LanguageDetectionError("Language detection is not configured")

        try:
            response = await self.client.post(
                self.url,
                json={"q": text},
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
            response.raise_for_status()
            detection = self._parse(response.json())
        except httpx.HTTPError as e:
            language_detection_total.labels(result="error").inc()
            logger.warning(f"Language detection request failed: {e}")
            raise LanguageDetectionError() from e
        except (ValueError, TypeError) as e:
            language_detection_total.labels(result="malformed").inc()
            logger.warning(f"Language detection returned an unusable body: {e}")
            raise LanguageDetectionError() from e

        language_detection_total.labels(result="success").inc()
        logger.info(
            f"Detected language '{detection.language}' for "
            f"'{log_sample(text, self.max_log_length)}'"
        )
        return detection

    async def detect(self, text: str) -> Optional[str]:
        """Return the detected language code, or None on any failure."""
        if not self.enabled:
            logger.debug("Language detection skipped: no API key configured")
            language_detection_total.labels(result="disabled").inc()
            return None
        try:
            detection = await self.detect_or_raise(text)
        except LanguageDetectionError:
            logger.warning("Language detection failed, continuing without it")
            return None
        return detection.language
