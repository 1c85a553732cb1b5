"""Prometheus metrics for language detection and the provider cascade."""

from prometheus_client import Counter, Histogram

language_detection_total = Counter(
    "translingo_language_detection_total",
    "Language detection outcomes",
    ["result"],
)

provider_attempts_total = Counter(
    "translingo_provider_attempts_total",
    "Translation provider attempts by provider and outcome",
    ["provider", "outcome"],
)

provider_request_duration_seconds = Histogram(
    "translingo_provider_request_duration_seconds",
    "Duration of a single translation provider call",
    ["provider"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)

translation_resolution_duration_seconds = Histogram(
    "translingo_translation_resolution_duration_seconds",
    "Duration of a full translation resolution (detection plus cascade)",
    ["outcome"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30),
)

quality_upgrades_total = Counter(
    "translingo_quality_upgrades_total",
    "MyMemory results replaced by a better machine-translation match",
    ["target_lang"],
)
