"""
Custom exception hierarchy for the TransLingo API.

This module defines a standardized exception hierarchy for consistent
error handling across the application.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class BaseAppException(HTTPException):
    """Base exception for all application errors."""

    def __init__(
        self,
        detail: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        headers: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code or self.__class__.__name__


# Client input


class InvalidTranslationRequestError(BaseAppException):
    """Raised when a translation request is missing required fields."""

    def __init__(self, detail: str = "Text and target language are required"):
        super().__init__(
            detail, status.HTTP_400_BAD_REQUEST, error_code="INVALID_REQUEST"
        )


# Resource Exceptions


class ResourceNotFoundError(BaseAppException):
    """Raised when a resource is not found."""

    def __init__(self, resource_type: str, resource_id: str):
        detail = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(
            detail, status.HTTP_404_NOT_FOUND, error_code="RESOURCE_NOT_FOUND"
        )


class TranslationNotFoundError(ResourceNotFoundError):
    """Raised when a history entry is not found."""

    def __init__(self, translation_id: int):
        super().__init__("Translation", str(translation_id))


# Provider Exceptions


class ProviderError(Exception):
    """A single provider call produced no usable result.

    Never leaves the resolver: the cascade catches it and moves on.
    """

    def __init__(self, provider: str, reason: str):
        super().__init__(f"{provider}: {reason}")
        self.provider = provider
        self.reason = reason


class AllProvidersFailedError(BaseAppException):
    """Raised when every translation provider in the cascade failed."""

    def __init__(self):
        super().__init__(
            "Translation failed",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="TRANSLATION_FAILED",
        )


class LanguageDetectionError(BaseAppException):
    """Raised when the detection service cannot answer an explicit request."""

    def __init__(self, detail: str = "Language detection failed"):
        super().__init__(
            detail, status.HTTP_502_BAD_GATEWAY, error_code="LANGUAGE_DETECTION_FAILED"
        )
